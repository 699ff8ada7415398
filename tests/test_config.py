"""Tests for hbsite.yaml loading."""

from pathlib import Path

import pytest
import yaml

from conftest import write

from hbsite.lib.config import SiteConfig, load_config
from hbsite.lib.errors import ConfigError
from hbsite.lib.project import find_config_file, load_project


class TestSiteConfig:
    def test_defaults(self, tmp_path):
        config = SiteConfig(root=tmp_path)
        assert config.extension == ".hbs"
        assert config.default_layout == "master"
        assert config.templates_dir == tmp_path / "m" / "_templates"
        assert config.components_dir == tmp_path / "m/_templates/shared/components"
        assert config.layouts_dir == tmp_path / "m/_templates/shared/layouts"
        assert config.output_dir == tmp_path
        assert config.dist_dir == tmp_path / "dist"
        assert list(config.data) == ["layout", "header", "footer", "menu"]
        assert config.dist.exclude == {"i": ["_svg"]}

    def test_absolute_paths_are_kept(self, tmp_path):
        elsewhere = tmp_path / "elsewhere"
        config = SiteConfig(root=tmp_path / "site", paths={"output": str(elsewhere)})
        assert config.output_dir == elsewhere


class TestLoadConfig:
    def test_root_is_config_directory(self, tmp_path):
        path = write(
            tmp_path / "site" / "hbsite.yaml",
            yaml.safe_dump(
                {
                    "name": "demo",
                    "default_layout": "base",
                    "paths": {"templates": "src/pages"},
                    "data": {"footer": {"author": "Ada"}},
                }
            ),
        )
        config = load_config(path)

        assert config.name == "demo"
        assert config.default_layout == "base"
        assert config.root == path.parent.resolve()
        assert config.templates_dir == path.parent.resolve() / "src" / "pages"
        assert config.data == {"footer": {"author": "Ada"}}

    def test_empty_file_gives_defaults(self, tmp_path):
        config = load_config(write(tmp_path / "hbsite.yaml", ""))
        assert config.extension == ".hbs"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "hbsite.yaml")

    def test_invalid_yaml_raises_config_error(self, tmp_path):
        path = write(tmp_path / "hbsite.yaml", "name: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_schema_raises_config_error(self, tmp_path):
        path = write(tmp_path / "hbsite.yaml", "watch:\n  debounce: soon\n")
        with pytest.raises(ConfigError) as exc:
            load_config(path)
        assert exc.value.exit_code == 1

    def test_non_mapping_raises_config_error(self, tmp_path):
        path = write(tmp_path / "hbsite.yaml", "- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestProject:
    def test_find_config_walks_up(self, tmp_path):
        path = write(tmp_path / "hbsite.yaml", "name: up\n")
        nested = tmp_path / "m" / "_templates"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == path.resolve()

    def test_load_project_without_config_uses_start(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_project(start=tmp_path)
        assert config.root == tmp_path.resolve()
        assert config.name is None

    def test_load_project_explicit_path(self, tmp_path):
        path = write(tmp_path / "conf" / "site.yaml", "name: explicit\n")
        config = load_project(config_path=path)
        assert config.name == "explicit"
        assert config.root == Path(path).parent.resolve()
