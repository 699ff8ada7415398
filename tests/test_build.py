"""Tests for the build driver."""

from hbsite.services.build import BuildService, PageStatus, build_site, find_pages

MASTER = "<html><title>{{pageTitle}}</title>{{> header}}{{{body}}}</html>"


def test_scenario_two_pass(make_site, frozen_now):
    config = make_site(
        pages={"about.hbs": "---\ntitle: About\n---\n<h1>{{title}}</h1>"},
        layouts={"master.hbs": "<html>{{{body}}}</html>"},
    )
    report = build_site(config, now=frozen_now)

    assert report.attempted == 1
    assert report.clean
    out = config.root / "about.html"
    assert out.read_text(encoding="utf-8") == "<html><h1>About</h1></html>"
    assert report.results[0].layout_used


def test_scenario_single_pass_without_layout(make_site, frozen_now):
    config = make_site(pages={"about.hbs": "---\ntitle: About\n---\n<h1>{{title}}</h1>"})
    report = build_site(config, now=frozen_now)

    assert (config.root / "about.html").read_text(encoding="utf-8") == "<h1>About</h1>"
    assert report.results[0].ok
    assert not report.results[0].layout_used


def test_one_bad_page_does_not_stop_the_build(make_site, frozen_now):
    config = make_site(
        pages={
            "a.hbs": "<p>a</p>",
            "b.hbs": "<ul>{{#each items}}<li>{{this}}</li>",
            "c.hbs": "<p>c</p>",
        },
        layouts={"master.hbs": "<html>{{{body}}}</html>"},
    )
    report = build_site(config, now=frozen_now)

    assert report.attempted == 3
    assert [r.page for r in report.succeeded] == ["a", "c"]
    assert [r.page for r in report.failed] == ["b"]
    assert report.failed[0].status == PageStatus.FAILED
    assert report.failed[0].error
    assert (config.root / "a.html").exists()
    assert (config.root / "c.html").exists()
    assert not (config.root / "b.html").exists()


def test_missing_partial_fails_only_that_page(make_site, frozen_now):
    config = make_site(
        pages={"ok.hbs": "fine", "bad.hbs": "{{> nope}}"},
    )
    report = build_site(config, now=frozen_now)
    assert [r.page for r in report.failed] == ["bad"]
    assert [r.page for r in report.succeeded] == ["ok"]


def test_zero_pages_is_not_an_error(make_site):
    config = make_site()
    report = build_site(config)
    assert report.attempted == 0
    assert report.clean


def test_pages_are_not_found_recursively(make_site):
    config = make_site(
        pages={"index.hbs": "home"},
        components={"header.hbs": "<header/>"},
        layouts={"master.hbs": "{{{body}}}"},
    )
    pages = find_pages(config.templates_dir)
    assert [p.name for p in pages] == ["index.hbs"]


def test_partials_global_data_and_layout(make_site, frozen_now):
    config = make_site(
        pages={"index.hbs": "---\ntitle: Home\n---\n<p>{{siteName}} {{year}}</p>"},
        layouts={"master.hbs": MASTER},
        components={"nav/header.hbs": "<header>{{siteName}}</header>"},
        data={"layout": {"siteName": "My Site"}},
    )
    report = build_site(config, now=frozen_now)

    assert report.partials == 1
    html = (config.root / "index.html").read_text(encoding="utf-8")
    assert html == "<html><title>Home</title><header>My Site</header><p>My Site 2024</p></html>"


def test_build_is_idempotent_with_frozen_clock(make_site, frozen_now):
    config = make_site(
        pages={
            "index.hbs": "<p>{{buildTime}}</p>",
            "about.hbs": "---\ntitle: About\n---\n{{title}}",
        },
        layouts={"master.hbs": MASTER},
        components={"header.hbs": "<header/>"},
    )

    build_site(config, now=frozen_now)
    first = {p.name: p.read_bytes() for p in config.root.glob("*.html")}
    build_site(config, now=frozen_now)
    second = {p.name: p.read_bytes() for p in config.root.glob("*.html")}

    assert first == second
    assert b"2024-05-17T12:30:00" in first["index.html"]


def test_output_dir_is_created(make_site, frozen_now, tmp_path):
    config = make_site(pages={"index.hbs": "x"}, paths={"output": "public/html"})
    report = build_site(config, now=frozen_now)

    out = tmp_path / "public" / "html" / "index.html"
    assert report.results[0].output == out
    assert out.read_text(encoding="utf-8") == "x"


def test_each_build_uses_a_fresh_registry(make_site, frozen_now, tmp_path):
    config = make_site(
        pages={"index.hbs": "{{> header}}"},
        components={"header.hbs": "one"},
    )
    service = BuildService(config, now=frozen_now)
    service.build()
    assert (tmp_path / "index.html").read_text(encoding="utf-8") == "one"

    (config.components_dir / "header.hbs").unlink()
    report = service.build()
    assert [r.page for r in report.failed] == ["index"]
