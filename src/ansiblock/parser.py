"""Parser for ANSI SGR styled text.

This module splits text containing SGR (Select Graphic Rendition) escape
sequences into tokens, each carrying the CSS classes active for its text.
"""

from __future__ import annotations

import re
import typing
from dataclasses import dataclass
from typing import TypeAlias

if typing.TYPE_CHECKING:
    from collections.abc import Iterator

StyleTag: TypeAlias = str

TAG_PREFIX = "ansi-"
FOREGROUND_PREFIX = f"{TAG_PREFIX}fg-"
BACKGROUND_PREFIX = f"{TAG_PREFIX}bg-"

BOLD = f"{TAG_PREFIX}bold"
DIM = f"{TAG_PREFIX}dim"
ITALIC = f"{TAG_PREFIX}italic"
UNDERLINE = f"{TAG_PREFIX}underline"
BLINK = f"{TAG_PREFIX}blink"
INVERSE = f"{TAG_PREFIX}inverse"
STRIKETHROUGH = f"{TAG_PREFIX}strikethrough"

# SGR codes setting a text attribute
ATTRIBUTE_CODES: dict[int, StyleTag] = {
    1: BOLD,
    2: DIM,
    3: ITALIC,
    4: UNDERLINE,
    5: BLINK,
    7: INVERSE,
    9: STRIKETHROUGH,
}

# SGR codes clearing text attributes, 21 is double underline on some
# terminals but resets bold on others
RESET_CODES: dict[int, tuple[StyleTag, ...]] = {
    21: (BOLD, DIM),
    22: (BOLD, DIM),
    23: (ITALIC,),
    24: (UNDERLINE,),
    25: (BLINK,),
    27: (INVERSE,),
    29: (STRIKETHROUGH,),
}

RESET_ALL = 0
DEFAULT_FOREGROUND = 39
DEFAULT_BACKGROUND = 49
EXTENDED_FOREGROUND = 38
EXTENDED_BACKGROUND = 48
EXTENDED_256 = 5

SGR_REGEX = re.compile(
    r"""
    \x1b\[      # CSI - Control Sequence Introducer
    ([0-9;]+)   # Parameters, semicolon separated
    m           # SGR final byte
    """,
    re.VERBOSE,
)


def foreground_tag(index: int) -> StyleTag:
    """Class for one of the 8 basic foreground colors."""
    return f"{FOREGROUND_PREFIX}{index}"


def background_tag(index: int) -> StyleTag:
    """Class for one of the 8 basic background colors."""
    return f"{BACKGROUND_PREFIX}{index}"


def bright_foreground_tag(index: int) -> StyleTag:
    """Class for one of the 8 bright foreground colors."""
    return f"{FOREGROUND_PREFIX}bright-{index}"


def bright_background_tag(index: int) -> StyleTag:
    """Class for one of the 8 bright background colors."""
    return f"{BACKGROUND_PREFIX}bright-{index}"


def foreground_256_tag(index: int) -> StyleTag:
    """Class for a 256-color palette foreground."""
    return f"{FOREGROUND_PREFIX}256-{index}"


def background_256_tag(index: int) -> StyleTag:
    """Class for a 256-color palette background."""
    return f"{BACKGROUND_PREFIX}256-{index}"


@dataclass(frozen=True)
class Token:
    """Run of text with the style classes active when it was read."""

    text: str
    styles: tuple[StyleTag, ...] = ()


class StyleState:
    """Ordered set of active style tags.

    Tags are unique, and keep the order in which they were first added. The
    order only affects the order of classes in the rendered markup.
    """

    def __init__(self) -> None:
        """Initialize an empty style state."""
        self._tags: list[StyleTag] = []

    def __iter__(self) -> Iterator[StyleTag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def add(self, tag: StyleTag) -> None:
        """Add tag, unless it is already active."""
        if tag not in self._tags:
            self._tags.append(tag)

    def discard(self, *tags: StyleTag) -> None:
        """Remove tags if they are active."""
        self._tags = [x for x in self._tags if x not in tags]

    def discard_prefix(self, prefix: str) -> None:
        """Remove all active tags starting with prefix."""
        self._tags = [x for x in self._tags if not x.startswith(prefix)]

    def clear(self) -> None:
        """Remove all active tags."""
        self._tags.clear()

    def set_foreground(self, tag: StyleTag) -> None:
        """Replace any active foreground color with tag."""
        self.discard_prefix(FOREGROUND_PREFIX)
        self._tags.append(tag)

    def set_background(self, tag: StyleTag) -> None:
        """Replace any active background color with tag."""
        self.discard_prefix(BACKGROUND_PREFIX)
        self._tags.append(tag)

    def snapshot(self) -> tuple[StyleTag, ...]:
        """Immutable copy of the active tags."""
        return tuple(self._tags)


def parse_params(params: str) -> list[int | None]:
    """Split SGR parameters, empty parameters become None.

    Parameters too long for int conversion also become None, so they are
    ignored like any other unknown code.
    """
    return [_parse_param(x) for x in params.split(";")]


def _parse_param(param: str) -> int | None:
    if not param:
        return None
    try:
        return int(param)
    except ValueError:
        return None


def apply_codes(  # noqa: C901, PLR0912
    codes: list[int | None], state: StyleState
) -> None:
    """Apply SGR codes to the style state, left to right.

    Unknown codes, and empty parameters, are ignored. The extended color forms
    ``38;5;N`` and ``48;5;N`` consume their three parameters. If the ``5`` or
    the color index is missing, ``38`` and ``48`` do nothing.
    """
    index = 0
    while index < len(codes):
        code = codes[index]
        index += 1
        if code is None:
            continue
        if code == RESET_ALL:
            state.clear()
        elif code in ATTRIBUTE_CODES:
            state.add(ATTRIBUTE_CODES[code])
        elif code in RESET_CODES:
            state.discard(*RESET_CODES[code])
        elif 30 <= code <= 37:  # noqa: PLR2004
            state.set_foreground(foreground_tag(code - 30))
        elif code == DEFAULT_FOREGROUND:
            state.discard_prefix(FOREGROUND_PREFIX)
        elif 40 <= code <= 47:  # noqa: PLR2004
            state.set_background(background_tag(code - 40))
        elif code == DEFAULT_BACKGROUND:
            state.discard_prefix(BACKGROUND_PREFIX)
        elif 90 <= code <= 97:  # noqa: PLR2004
            state.set_foreground(bright_foreground_tag(code - 90))
        elif 100 <= code <= 107:  # noqa: PLR2004
            state.set_background(bright_background_tag(code - 100))
        elif code in (EXTENDED_FOREGROUND, EXTENDED_BACKGROUND):
            color = _extended_color(codes, index)
            if color is None:
                continue
            if code == EXTENDED_FOREGROUND:
                state.set_foreground(foreground_256_tag(color))
            else:
                state.set_background(background_256_tag(color))
            index += 2


def _extended_color(codes: list[int | None], index: int) -> int | None:
    """Color index of a ``5;N`` pair starting at index, if present."""
    if index + 1 >= len(codes) or codes[index] != EXTENDED_256:
        return None
    return codes[index + 1]


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield tokens from normalized text, in document order.

    Only non-empty runs of text produce tokens. Style state starts empty and
    is private to each call.
    """
    state = StyleState()
    last_end = 0
    for match in SGR_REGEX.finditer(text):
        if match.start() > last_end:
            yield Token(text[last_end : match.start()], state.snapshot())
        apply_codes(parse_params(match.group(1)), state)
        last_end = match.end()
    if last_end < len(text):
        yield Token(text[last_end:], state.snapshot())


def tokenize(text: str) -> list[Token]:
    """Split normalized text into styled tokens.

    Text without SGR sequences gives a single unstyled token, and empty text
    gives no token at all.
    """
    return list(iter_tokens(text))
