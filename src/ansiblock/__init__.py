"""Ansiblock, ANSI colored terminal output as HTML markup.

Ansiblock converts text containing ANSI SGR escape sequences, as found in
pasted terminal output, into HTML spans styled with CSS classes.
"""

from ansiblock.ansi import normalize
from ansiblock.parser import StyleState, Token, tokenize
from ansiblock.render import convert, render

__all__ = ["StyleState", "Token", "convert", "normalize", "render", "tokenize"]
