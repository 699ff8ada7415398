from datetime import datetime

import pytest

from hbsite.lib.config import SiteConfig

FROZEN_NOW = datetime(2024, 5, 17, 12, 30, 0)


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def frozen_now():
    return FROZEN_NOW


@pytest.fixture
def make_site(tmp_path):
    """Lay out a site under tmp_path and return its config."""

    def _make(pages=None, layouts=None, components=None, data=None, **config):
        for name, text in (pages or {}).items():
            write(tmp_path / "m" / "_templates" / name, text)
        for name, text in (layouts or {}).items():
            write(tmp_path / "m" / "_templates" / "shared" / "layouts" / name, text)
        for name, text in (components or {}).items():
            write(tmp_path / "m" / "_templates" / "shared" / "components" / name, text)
        return SiteConfig(root=tmp_path, data=data or {}, **config)

    return _make
