"""Card stylesheets and the `.card` wrapper used by previews."""
from __future__ import annotations

DEFAULT_ANKI_CSS = """
.card {
  font-family: arial;
  font-size: 20px;
  text-align: center;
  color: black;
  background-color: white;
}

.cloze {
  font-weight: bold;
  color: blue;
}

.hint {
  background-color: #ffffcc;
  padding: 2px 4px;
  border-radius: 2px;
  cursor: pointer;
}

img {
  max-width: 100%;
  height: auto;
}
"""

NIGHT_MODE_CSS = """
.card,
.card.nightMode {
  color: white;
  background-color: #2f2f31;
}

.cloze {
  color: #5cb3ff;
}

.hint {
  background-color: #444;
  color: #ccc;
}

a {
  color: #5cb3ff;
}
"""


def build_css(*, include_default_styles: bool = False, night_mode: bool = False, css: str = "") -> str:
    parts: list[str] = []
    if include_default_styles:
        parts.append(DEFAULT_ANKI_CSS)
    if night_mode:
        parts.append(NIGHT_MODE_CSS)
    if css:
        parts.append(css)
    return "\n".join(parts)


def wrap_with_styles(content: str, css: str, night_mode: bool = False) -> str:
    card_class = "card nightMode" if night_mode else "card"
    style_tag = f"<style>\n{css}\n</style>\n" if css else ""
    return f'{style_tag}<div class="{card_class}">\n{content}\n</div>'
