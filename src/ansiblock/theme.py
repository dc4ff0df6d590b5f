"""Color themes and stylesheet generation for ansiblock markup."""

import os
from enum import StrEnum, auto
from typing import TypeAlias

from ansiblock.parser import (
    BLINK,
    BOLD,
    DIM,
    INVERSE,
    ITALIC,
    STRIKETHROUGH,
    UNDERLINE,
    background_256_tag,
    background_tag,
    bright_background_tag,
    bright_foreground_tag,
    foreground_256_tag,
    foreground_tag,
)
from ansiblock.registry import CONTAINER_CLASS

# Known COLORFGBG values from https://github.com/rocky/shell-term-background/
LIGHT_COLORFGBG_VALUES = ("0;15", "0;default;15")
DARK_COLORFGBG_VALUES = ("15;0", "15;default;0")

# xterm defaults for the 8 basic and 8 bright colors
BASIC_COLORS = (
    "#000000",
    "#cd0000",
    "#00cd00",
    "#cdcd00",
    "#0000ee",
    "#cd00cd",
    "#00cdcd",
    "#e5e5e5",
)
BRIGHT_COLORS = (
    "#7f7f7f",
    "#ff0000",
    "#00ff00",
    "#ffff00",
    "#5c5cff",
    "#ff00ff",
    "#00ffff",
    "#ffffff",
)

# Levels of the 6x6x6 color cube, indexes 16 to 231
CUBE_LEVELS = (0x00, 0x5F, 0x87, 0xAF, 0xD7, 0xFF)

ATTRIBUTE_RULES: dict[str, str] = {
    BOLD: "font-weight: bold;",
    DIM: "opacity: 0.6;",
    ITALIC: "font-style: italic;",
    UNDERLINE: "text-decoration: underline;",
    BLINK: "animation: ansi-blink 1s step-end infinite;",
    STRIKETHROUGH: "text-decoration: line-through;",
}


class ColorTheme(StrEnum):
    """Color theme for the code block container."""

    DARK = auto()
    LIGHT = auto()


class ColorThemeAuto(StrEnum):
    """Auto theme option."""

    AUTO = auto()


ColorThemeOption: TypeAlias = ColorTheme | ColorThemeAuto
DetectedTheme: TypeAlias = ColorTheme | None

# Default foreground and background of the container
THEME_COLORS: dict[ColorTheme, tuple[str, str]] = {
    ColorTheme.DARK: ("#d0d0d0", "#1e1e1e"),
    ColorTheme.LIGHT: ("#1e1e1e", "#fafafa"),
}


def detect_theme(cli_option: ColorThemeOption) -> ColorTheme:
    """Detect color theme based on priority order.

    Priority:
    1. CLI option if not "auto"
    2. CLI_THEME environment variable
    3. COLORFGBG environment variable, default to DARK
    """
    if cli_option != ColorThemeAuto.AUTO:
        return ColorTheme(cli_option.value)

    if cli_theme := os.getenv("CLI_THEME"):
        try:
            return ColorTheme(cli_theme.lower())
        except ValueError:
            pass

    if theme := _detect_via_colorfgbg():
        return theme

    return ColorTheme.DARK


def _detect_via_colorfgbg() -> DetectedTheme:
    """Detect theme via COLORFGBG environment variable."""
    colorfgbg = os.getenv("COLORFGBG")
    if not colorfgbg:
        return None

    if colorfgbg in LIGHT_COLORFGBG_VALUES:
        return ColorTheme.LIGHT
    if colorfgbg in DARK_COLORFGBG_VALUES:
        return ColorTheme.DARK

    return None


def palette_256() -> list[str]:
    """Build the xterm 256-color palette as CSS hex colors."""
    colors = [*BASIC_COLORS, *BRIGHT_COLORS]
    for index in range(216):
        red = CUBE_LEVELS[index // 36]
        green = CUBE_LEVELS[(index // 6) % 6]
        blue = CUBE_LEVELS[index % 6]
        colors.append(f"#{red:02x}{green:02x}{blue:02x}")
    for index in range(24):
        level = 8 + index * 10
        colors.append(f"#{level:02x}{level:02x}{level:02x}")
    return colors


def _rule(tag: str, body: str) -> str:
    return f".{tag} {{ {body} }}"


def stylesheet(theme: ColorTheme) -> str:
    """CSS rules for every class the renderer can emit."""
    foreground, background = THEME_COLORS[theme]
    rules = [
        f".{CONTAINER_CLASS} pre {{ color: {foreground}; "
        f"background-color: {background}; padding: 0.5em; "
        "white-space: pre-wrap; font-family: monospace; }",
        *(_rule(tag, body) for tag, body in ATTRIBUTE_RULES.items()),
        f".{UNDERLINE}.{STRIKETHROUGH} "
        "{ text-decoration: underline line-through; }",
        _rule(
            INVERSE,
            f"color: {background}; background-color: {foreground};",
        ),
        "@keyframes ansi-blink { 50% { opacity: 0; } }",
    ]
    for index, color in enumerate(BASIC_COLORS):
        rules.append(_rule(foreground_tag(index), f"color: {color};"))
        rules.append(
            _rule(background_tag(index), f"background-color: {color};")
        )
    for index, color in enumerate(BRIGHT_COLORS):
        rules.append(_rule(bright_foreground_tag(index), f"color: {color};"))
        rules.append(
            _rule(bright_background_tag(index), f"background-color: {color};")
        )
    for index, color in enumerate(palette_256()):
        rules.append(_rule(foreground_256_tag(index), f"color: {color};"))
        rules.append(
            _rule(background_256_tag(index), f"background-color: {color};")
        )
    return "\n".join(rules) + "\n"
