"""CLI tests.

`hbsite build` exits 0 even when pages fail to render; the failures are only
visible in the output (and in the BuildReport). `--strict` opts into a
non-zero exit code.
"""

import yaml
from typer.testing import CliRunner

from conftest import write

from hbsite import __version__
from hbsite.main import typer_app

runner = CliRunner()


def make_project(root, pages):
    config = write(root / "hbsite.yaml", yaml.safe_dump({"name": "cli-test"}))
    write(root / "m" / "_templates" / "shared" / "layouts" / "master.hbs", "<html>{{{body}}}</html>")
    for name, text in pages.items():
        write(root / "m" / "_templates" / name, text)
    return config


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_short_version_flag():
    result = runner.invoke(typer_app, ["-v"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_build_writes_pages(tmp_path):
    config = make_project(tmp_path, {"index.hbs": "---\ntitle: Home\n---\n<h1>{{title}}</h1>"})

    result = runner.invoke(typer_app, ["build", "-c", str(config)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "index.html").read_text(encoding="utf-8") == "<html><h1>Home</h1></html>"


def test_build_exits_zero_when_a_page_fails(tmp_path):
    config = make_project(
        tmp_path,
        {
            "a.hbs": "a",
            "b.hbs": "{{#each items}}unclosed",
            "c.hbs": "c",
        },
    )

    result = runner.invoke(typer_app, ["build", "-c", str(config)])

    # Failures are logged, not escalated to the exit code.
    assert result.exit_code == 0
    assert "1 failed" in result.output
    assert (tmp_path / "a.html").exists()
    assert (tmp_path / "c.html").exists()


def test_build_strict_exits_one_when_a_page_fails(tmp_path):
    config = make_project(tmp_path, {"b.hbs": "{{> missing}}"})

    result = runner.invoke(typer_app, ["build", "-c", str(config), "--strict"])

    assert result.exit_code == 1


def test_build_with_missing_config_file(tmp_path):
    result = runner.invoke(typer_app, ["build", "-c", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1


def test_build_with_invalid_config(tmp_path):
    config = write(tmp_path / "hbsite.yaml", "watch:\n  debounce: soon\n")
    result = runner.invoke(typer_app, ["build", "-c", str(config)])
    assert result.exit_code == 1


def test_dist_and_verify(tmp_path):
    config = make_project(tmp_path, {"index.hbs": "x"})
    assert runner.invoke(typer_app, ["build", "-c", str(config)]).exit_code == 0

    result = runner.invoke(typer_app, ["dist", "-c", str(config)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "dist" / "index.html").exists()

    result = runner.invoke(typer_app, ["verify", "-c", str(config)])
    assert result.exit_code == 1

    write(tmp_path / "m" / "js" / "pre.min.js", "x")
    write(tmp_path / "m" / "js" / "post.min.js", "x")
    result = runner.invoke(typer_app, ["verify", "-c", str(config)])
    assert result.exit_code == 0, result.output

    write(tmp_path / "m" / "js" / "chunk-1a2b.js", "x")
    result = runner.invoke(typer_app, ["verify", "-c", str(config)])
    assert result.exit_code == 1
    assert "chunk-1a2b.js" in result.output
