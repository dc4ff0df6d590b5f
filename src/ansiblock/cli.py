"""Ansiblock command line interface.

Ansiblock converts terminal output containing ANSI color codes into HTML
markup, styled with CSS classes.
"""

import sys
from enum import StrEnum, auto
from pathlib import Path

import typer

from ansiblock.ansi import normalize, strip_ansi
from ansiblock.console import (
    print_error,
    print_tokens,
    print_verbose,
    print_warning,
    set_verbose,
)
from ansiblock.parser import tokenize
from ansiblock.registry import wrap_container
from ansiblock.render import render
from ansiblock.theme import (
    ColorTheme,
    ColorThemeAuto,
    ColorThemeOption,
    detect_theme,
    stylesheet,
)

app = typer.Typer()


class ThemeChoice(StrEnum):
    """Values of the --theme option."""

    AUTO = auto()
    DARK = auto()
    LIGHT = auto()


# ruff: noqa: FBT001 FBT003 Typer API uses boolean arguments for flags
# ruff: noqa: B008 function-call-in-default-argument


@app.command()
def main(  # noqa: PLR0913
    source: str = typer.Argument(
        "-", help="Input file, read standard input if missing or '-'"
    ),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="Write result to this file"
    ),
    block: bool = typer.Option(
        False, "--block", help="Wrap markup in the code block container"
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Output text with escape sequences removed"
    ),
    css: bool = typer.Option(
        False, "--css", help="Output the stylesheet for the markup classes"
    ),
    theme: ThemeChoice = typer.Option(
        ThemeChoice.AUTO,
        "--theme",
        case_sensitive=False,
        help="Stylesheet theme",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show verbose output"
    ),
) -> None:
    """Ansiblock: convert ANSI colored text to HTML."""
    if verbose:
        set_verbose()

    if sum([block, plain, css]) > 1:
        print_error(
            None, "Options --block, --plain and --css are mutually exclusive"
        )
        raise typer.Exit(1)

    if css:
        result = stylesheet(detect_theme(_theme_option(theme)))
    else:
        text = _read_source(source)
        print_verbose("Input:", len(text), "characters")
        result = plain_command(text) if plain else convert_command(text)
        if block:
            result = wrap_container(result)

    _write_output(result, output)


def _theme_option(choice: ThemeChoice) -> ColorThemeOption:
    if choice == ThemeChoice.AUTO:
        return ColorThemeAuto.AUTO
    return ColorTheme(choice.value)


def convert_command(text: str) -> str:
    """Convert text to markup, logging tokens in verbose mode."""
    tokens = tokenize(normalize(text))
    print_verbose("Tokens:", len(tokens))
    print_tokens(tokens)
    if not tokens and text:
        print_warning("Input contains only escape sequences")
    return render(tokens)


def plain_command(text: str) -> str:
    """Remove escape sequences, including spelled out ones, from text."""
    return strip_ansi(normalize(text))


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as error:
        print_error("Error reading input:", error)
        raise typer.Exit(1) from error


def _write_output(result: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(result)
        sys.stdout.flush()
        return
    try:
        output.write_text(result, encoding="utf-8")
    except OSError as error:
        print_error("Error writing output:", error)
        raise typer.Exit(1) from error
    print_verbose("Wrote", str(output))


if __name__ == "__main__":
    app()
