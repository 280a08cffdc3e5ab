from __future__ import annotations

import random
from typing import Any

from markup_overrides.core.models import ElementOverride

SAMPLE_MARKUP = (
    '<div id="app" class="shell">'
    '<header class="top"><h1>Title</h1></header>'
    '<p class="note" style="color: red; font-size: 12px">Hello <b>world</b></p>'
    '<img src="a.png">'
    "</div>"
)

DOCUMENT_MARKUP = """<!DOCTYPE html>
<html>
<head>
  <link rel="stylesheet" href="main.css">
  <style>.card { padding: 4px; }</style>
</head>
<body>
  <section id="hero" class="card">
    <h2 class="title">Welcome</h2>
    <button class="btn" data-role="cta">Go</button>
  </section>
  <script src="vendor.js"></script>
  <script>console.log("ready");</script>
</body>
</html>"""

SELECTOR_POOL = [
    ".test",
    "#app",
    "#hero",
    ".card",
    ".title",
    ".btn",
    "h1",
    "p.note",
    "header.top > h1",
    '[data-role="cta"]',
    ".missing",
    "div[",
    "###",
]

TEXT_POOL = ["First", "Second", "Tom & Jerry", "<tag>", ""]
HTML_POOL = ["<b>bold</b>", "<span class=\"inner\">inner</span>", "plain"]
STYLE_POOL = [
    {"color": "red"},
    {"fontSize": "14px"},
    {"backgroundColor": "#fff", "color": "blue"},
    {"marginTop": "4px"},
]
ATTRIBUTE_POOL = [{"data-state": "on"}, {"title": "Hi"}, {"aria-label": "Close", "data-state": "off"}]


def override(selector: str, timestamp: float, **fields: Any) -> ElementOverride:
    return ElementOverride(selector=selector, timestamp=timestamp, **fields)


def random_overrides(
    rng: random.Random,
    count: int,
    selectors: list[str] | None = None,
) -> list[ElementOverride]:
    """Overrides with distinct timestamps so ordering never depends on ties."""

    pool = selectors or SELECTOR_POOL
    timestamps = rng.sample(range(1, 1_000_000), count)
    overrides = []
    for timestamp in timestamps:
        fields: dict[str, Any] = {"ai_generated": rng.random() < 0.3}
        if rng.random() < 0.4:
            fields["text"] = rng.choice(TEXT_POOL)
        if rng.random() < 0.4:
            fields["styles"] = dict(rng.choice(STYLE_POOL))
        if rng.random() < 0.2:
            fields["html"] = rng.choice(HTML_POOL)
        if rng.random() < 0.3:
            fields["attributes"] = dict(rng.choice(ATTRIBUTE_POOL))
        if rng.random() < 0.2:
            fields["position"] = {"x": rng.randint(0, 500), "y": rng.randint(0, 500)}
        if rng.random() < 0.2:
            fields["size"] = {"width": rng.randint(10, 800), "height": rng.randint(10, 600)}
        if rng.random() < 0.3:
            fields["original"] = {"text": rng.choice(TEXT_POOL), "styles": dict(rng.choice(STYLE_POOL))}
        overrides.append(override(rng.choice(pool), timestamp, **fields))
    return overrides


def by_selector(overrides: list[ElementOverride]) -> dict[str, ElementOverride]:
    return {item.selector: item for item in overrides}
