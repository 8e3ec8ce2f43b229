"""Save externally built SVG/HTML chart markup to an image file.

The file extension picks the format: ``.svg`` writes the markup as is,
``.png`` and ``.jpeg``/``.jpg`` are rendered in headless Chromium.
"""

from __future__ import annotations

from pathlib import Path

from asciiviz.errors import ConfigurationError

_RASTER_TYPES = {".png": "png", ".jpeg": "jpeg", ".jpg": "jpeg"}
_LIGHT_BG = "#ffffff"
_DARK_BG = "#1a1a1a"


def save_chart(
    markup: str,
    path: str | Path,
    *,
    dark: bool = False,
    style: str | None = None,
) -> Path:
    """Write *markup* to *path* and return the path written."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix != ".svg" and suffix not in _RASTER_TYPES:
        raise ConfigurationError(
            f"Unsupported image extension {path.suffix!r}; use .png, .jpeg or .svg."
        )
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".svg":
        path.write_text(markup, encoding="utf-8")
    else:
        _screenshot(build_page(markup, dark=dark, style=style), path, _RASTER_TYPES[suffix])
    return path


def build_page(markup: str, *, dark: bool = False, style: str | None = None) -> str:
    """Wrap *markup* in a bare HTML page the browser can screenshot."""
    background = _DARK_BG if dark else _LIGHT_BG
    color = "#ffffff" if dark else "#000000"
    css = (
        f"body {{ margin: 0; background: {background}; color: {color}; }}\n"
        "body > * { display: inline-block; }\n"
        f"{style or ''}"
    )
    return f'<!DOCTYPE html>\n<html><head><meta charset="utf-8"><style>{css}</style></head>' \
        f"<body>{markup}</body></html>"


def _screenshot(html: str, path: Path, image_type: str) -> None:
    from playwright.sync_api import sync_playwright

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            page = browser.new_page()
            page.set_content(html)
            page.locator("body > *").first.screenshot(path=str(path), type=image_type)
        finally:
            browser.close()
