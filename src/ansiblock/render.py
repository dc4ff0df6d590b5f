"""HTML rendering of styled tokens."""

from __future__ import annotations

import typing

from ansiblock.ansi import normalize
from ansiblock.parser import tokenize

if typing.TYPE_CHECKING:
    from collections.abc import Iterable

    from ansiblock.parser import Token

LINE_BREAK = "<br>"

# Order matters: "&" first, so entities are not escaped twice
HTML_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


def escape_text(text: str) -> str:
    """Escape markup characters and turn newlines into line breaks."""
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text.replace("\n", LINE_BREAK)


def render_token(token: Token) -> str:
    """Render a token, in a classed span if it has styles."""
    escaped = escape_text(token.text)
    if not token.styles:
        return escaped
    classes = " ".join(token.styles)
    return f'<span class="{classes}">{escaped}</span>'


def render(tokens: Iterable[Token]) -> str:
    """Concatenate rendered tokens, in order."""
    return "".join(render_token(x) for x in tokens)


def convert(source: str) -> str:
    """Convert text with ANSI SGR sequences to HTML markup.

    Never raises for string input: unknown codes are ignored and non-SGR
    sequences are dropped.
    """
    return render(tokenize(normalize(source)))
