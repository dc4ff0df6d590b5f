"""ANSI escape code utilities."""

import re

ESC = "\x1b"

# Textual spellings of the escape character found in pasted terminal output
ESCAPE_SPELLINGS = (
    ("^[", ESC),  # caret notation, the "[" of the CSI follows
    ("\\x1b[", ESC + "["),
    ("\\e[", ESC + "["),
    ("\\033[", ESC + "["),
)

# Control sequence, kept only if it is an SGR
CSI_REGEX = re.compile(
    r"""
    \x1b\[      # CSI - Control Sequence Introducer
    ([0-?]*)    # Parameter bytes (optional): 0-9 : ; < = > ?
    ([ -/]*)    # Intermediate bytes (optional): space through /
    ([@-~])     # Final byte, "m" for SGR
    """,
    re.VERBOSE,
)

SGR_PARAMS_REGEX = re.compile(r"[0-9;]+")

# ANSI escape code regex pattern
ANSI_REGEX = re.compile(
    r"""
    \x1b              # ESC character (0x1b)
    (?:
        \[            # CSI - Control Sequence Introducer
        [0-?]*        # Parameter bytes (optional): 0-9 : ; < = > ?
        [ -/]*        # Intermediate bytes (optional): space through /
        [@-~]         # Final byte: the actual command (m, H, J, K, etc.)
        |
        \(            # SCS G0 - Select Character Set
        [B0UK]        # B=ASCII, 0=line drawing, U=null, K=user
        |
        \)            # SCS G1 - Select Character Set
        [B0UK]        # Same options as G0
        |
        [@-Z\\-_]     # Fe sequences: two-byte escapes
    )
    """,
    re.VERBOSE,
)


def normalize(raw: str) -> str:
    """Rewrite escape spellings to ESC and drop non-SGR sequences.

    Spellings ``^[``, ``\\x1b[``, ``\\e[`` and ``\\033[`` all become the ESC
    control byte. Then control sequences are removed, except SGR sequences
    whose parameters are made of digits and semicolons. Cursor movement,
    screen clearing, or ``ESC[m`` without parameters are all dropped.
    """
    text = raw
    for spelling, replacement in ESCAPE_SPELLINGS:
        text = text.replace(spelling, replacement)
    return CSI_REGEX.sub(_keep_sgr, text)


def _keep_sgr(match: re.Match[str]) -> str:
    params, intermediates, final = match.groups()
    if (
        final == "m"
        and not intermediates
        and SGR_PARAMS_REGEX.fullmatch(params)
    ):
        return match.group(0)
    return ""


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text.

    Strips ECMA-48 escape sequences:
    - Fe sequences: ESC + single byte (ESC M, ESC 7, etc.)
    - CSI sequences: ESC [ params intermediates final
      Common: ESC[31m (red), ESC[1;32m (bold green), ESC[0m (reset)
    """
    return ANSI_REGEX.sub("", text)
