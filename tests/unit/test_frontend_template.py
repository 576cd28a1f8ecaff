"""Tests for the real frontend template and assets shipped with the package.

The API integration suite uses a minimal temporary template, so these checks
read the repository's actual ``index.html`` to catch form wiring regressions.
"""

from __future__ import annotations

from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[2] / "src" / "imageform"


def test_index_template_posts_prompt_and_size() -> None:
    """The form should submit ``prompt`` and ``size`` to /generate."""
    html = (PACKAGE_DIR / "templates" / "index.html").read_text(encoding="utf-8")

    assert 'action="/generate"' in html
    assert 'name="prompt"' in html
    assert 'name="size"' in html
    for tier in ("small", "medium", "large"):
        assert f'value="{tier}"' in html


def test_index_template_loads_view_assets() -> None:
    html = (PACKAGE_DIR / "templates" / "index.html").read_text(encoding="utf-8")

    assert 'href="/views/css/image.css"' in html
    assert 'src="/views/js/image.js"' in html
    assert (PACKAGE_DIR / "views" / "css" / "image.css").is_file()
    assert (PACKAGE_DIR / "views" / "js" / "image.js").is_file()
