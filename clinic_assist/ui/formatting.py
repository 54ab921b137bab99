"""Minimal markdown rendering for assistant replies."""

import html
import re

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_BULLET = re.compile(r"^\s*[-*•]\s+")


def markdown_to_html(text: str) -> str:
    """Convert the markdown subset the assistant uses to HTML.

    Supports: bold, bullet lists, line breaks. Everything else is escaped.
    """
    text = html.escape(text, quote=False)
    text = _BOLD.sub(r"<strong>\1</strong>", text)

    result = []
    in_list = False
    for line in text.split("\n"):
        if _BULLET.match(line):
            if not in_list:
                result.append('<ul class="list-disc list-inside my-1 space-y-1">')
                in_list = True
            result.append(f"<li>{_BULLET.sub('', line)}</li>")
            continue
        if in_list:
            result.append("</ul>")
            in_list = False
        result.append(f"{line}<br>")
    if in_list:
        result.append("</ul>")

    return "".join(result).removesuffix("<br>")
