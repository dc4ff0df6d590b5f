"""Tests for the parser module."""

import pytest

from ansiblock.parser import (
    StyleState,
    Token,
    apply_codes,
    iter_tokens,
    parse_params,
    tokenize,
)

ESC = "\x1b"


def styles_after(*codes: int | None) -> tuple[str, ...]:
    """Apply codes to a fresh state and return the active tags."""
    state = StyleState()
    apply_codes(list(codes), state)
    return state.snapshot()


def test_tokenize_empty() -> None:
    """Empty text gives no token."""
    assert tokenize("") == []


def test_tokenize_plain_text() -> None:
    """Text without SGR sequences gives a single unstyled token."""
    assert tokenize("hello\nworld") == [Token("hello\nworld", ())]


def test_tokenize_bold_then_reset() -> None:
    """Trailing reset without text produces no token."""
    assert tokenize(f"{ESC}[1mhi{ESC}[0m") == [Token("hi", ("ansi-bold",))]


def test_tokenize_combined_codes() -> None:
    """Codes in one sequence apply left to right."""
    assert tokenize(f"{ESC}[31;1mx{ESC}[0my") == [
        Token("x", ("ansi-fg-1", "ansi-bold")),
        Token("y", ()),
    ]


def test_tokenize_leading_text() -> None:
    """Text before the first sequence is unstyled."""
    assert tokenize(f"a{ESC}[4mb") == [
        Token("a", ()),
        Token("b", ("ansi-underline",)),
    ]


def test_tokenize_adjacent_sequences() -> None:
    """Adjacent sequences produce no empty token between them."""
    text = f"{ESC}[1m{ESC}[32mgo{ESC}[0m{ESC}[0m"
    assert tokenize(text) == [Token("go", ("ansi-bold", "ansi-fg-2"))]


def test_tokenize_only_sequences() -> None:
    """Input made only of sequences gives no token."""
    assert tokenize(f"{ESC}[1m{ESC}[0m") == []


def test_tokenize_tokens_are_not_merged() -> None:
    """Runs with identical styles stay separate tokens."""
    assert tokenize(f"{ESC}[1ma{ESC}[1mb") == [
        Token("a", ("ansi-bold",)),
        Token("b", ("ansi-bold",)),
    ]


def test_tokenize_snapshots_are_independent() -> None:
    """Each token keeps the styles active when its text was read."""
    tokens = tokenize(f"{ESC}[1ma{ESC}[3mb{ESC}[22mc")
    assert [x.styles for x in tokens] == [
        ("ansi-bold",),
        ("ansi-bold", "ansi-italic"),
        ("ansi-italic",),
    ]


def test_tokenize_no_state_between_calls() -> None:
    """Styles do not leak from one call to the next."""
    tokenize(f"{ESC}[1;31munterminated")
    assert tokenize("next") == [Token("next", ())]


def test_tokenize_ignores_non_sgr_escape() -> None:
    """Escape sequences that are not SGR are left as text."""
    assert tokenize(f"{ESC}[2Jx") == [Token(f"{ESC}[2Jx", ())]


def test_iter_tokens_is_lazy() -> None:
    """iter_tokens yields tokens in document order."""
    tokens = iter_tokens(f"a{ESC}[1mb")
    assert next(tokens) == Token("a", ())
    assert next(tokens) == Token("b", ("ansi-bold",))
    with pytest.raises(StopIteration):
        next(tokens)


def test_token_is_frozen() -> None:
    """Tokens cannot be modified after creation."""
    token = Token("a", ("ansi-bold",))
    with pytest.raises(AttributeError):
        token.text = "b"  # type: ignore[misc]


def test_parse_params() -> None:
    """Parameters are split on semicolons, empty ones become None."""
    assert parse_params("1;31") == [1, 31]
    assert parse_params("1;;4") == [1, None, 4]
    assert parse_params("007") == [7]


def test_parse_params_too_long() -> None:
    """Parameters too long for int conversion are ignored."""
    assert parse_params("1" * 5000) == [None]
    assert parse_params("1;" + "9" * 5000 + ";4") == [1, None, 4]


def test_tokenize_too_long_parameter() -> None:
    """A huge parameter does not stop the other codes from applying."""
    text = f"{ESC}[1;{'2' * 5000}mx"
    assert tokenize(text) == [Token("x", ("ansi-bold",))]


@pytest.mark.parametrize(
    ("code", "tag"),
    [
        (1, "ansi-bold"),
        (2, "ansi-dim"),
        (3, "ansi-italic"),
        (4, "ansi-underline"),
        (5, "ansi-blink"),
        (7, "ansi-inverse"),
        (9, "ansi-strikethrough"),
        (30, "ansi-fg-0"),
        (37, "ansi-fg-7"),
        (40, "ansi-bg-0"),
        (47, "ansi-bg-7"),
        (90, "ansi-fg-bright-0"),
        (97, "ansi-fg-bright-7"),
        (100, "ansi-bg-bright-0"),
        (107, "ansi-bg-bright-7"),
    ],
)
def test_apply_single_code(code: int, tag: str) -> None:
    """Each setting code adds its tag."""
    assert styles_after(code) == (tag,)


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        ((1, 2, 3, 21), ("ansi-italic",)),
        ((1, 2, 3, 22), ("ansi-italic",)),
        ((3, 4, 23), ("ansi-underline",)),
        ((4, 5, 24), ("ansi-blink",)),
        ((5, 7, 25), ("ansi-inverse",)),
        ((7, 9, 27), ("ansi-strikethrough",)),
        ((9, 1, 29), ("ansi-bold",)),
    ],
)
def test_apply_attribute_resets(
    codes: tuple[int, ...], expected: tuple[str, ...]
) -> None:
    """Attribute reset codes remove only their attributes."""
    assert styles_after(*codes) == expected


def test_apply_reset_all() -> None:
    """Code 0 clears every tag, including colors."""
    assert styles_after(1, 31, 44, 0) == ()


def test_apply_reset_mid_sequence() -> None:
    """Codes after a reset in the same sequence still apply."""
    assert styles_after(1, 31, 0, 32) == ("ansi-fg-2",)


def test_apply_foreground_exclusive() -> None:
    """Only the last foreground color stays active."""
    assert styles_after(31, 32, 34) == ("ansi-fg-4",)


def test_apply_foreground_families_exclusive() -> None:
    """Basic, bright and 256 foregrounds replace each other."""
    assert styles_after(1, 31, 91) == ("ansi-bold", "ansi-fg-bright-1")
    assert styles_after(91, 38, 5, 202) == ("ansi-fg-256-202",)
    assert styles_after(38, 5, 202, 33) == ("ansi-fg-3",)


def test_apply_background_exclusive() -> None:
    """Only the last background color stays active."""
    assert styles_after(41, 101, 48, 5, 17) == ("ansi-bg-256-17",)


def test_apply_colors_independent() -> None:
    """Foreground and background colors do not replace each other."""
    assert styles_after(31, 42) == ("ansi-fg-1", "ansi-bg-2")


def test_apply_default_colors() -> None:
    """Codes 39 and 49 remove only their color family."""
    assert styles_after(1, 31, 42, 39) == ("ansi-bold", "ansi-bg-2")
    assert styles_after(1, 31, 42, 49) == ("ansi-bold", "ansi-fg-1")
    assert styles_after(39, 49) == ()


def test_apply_duplicate_attribute() -> None:
    """Tags are unique in the style state."""
    assert styles_after(1, 1, 4, 1) == ("ansi-bold", "ansi-underline")


def test_apply_extended_consumes_parameters() -> None:
    """The 5 and color index of 38;5;N are not standalone codes."""
    assert styles_after(38, 5, 1) == ("ansi-fg-256-1",)
    assert styles_after(48, 5, 4, 1) == ("ansi-bg-256-4", "ansi-bold")


@pytest.mark.parametrize(
    ("codes", "expected"),
    [
        ((38,), ()),
        ((38, 5), ("ansi-blink",)),
        ((38, 2, 255, 128, 64), ("ansi-dim",)),
        ((48, 5, None), ("ansi-blink",)),
    ],
)
def test_apply_incomplete_extended(
    codes: tuple[int | None, ...], expected: tuple[str, ...]
) -> None:
    """Incomplete 38/48 forms are no-ops, later codes still apply."""
    assert styles_after(*codes) == expected


@pytest.mark.parametrize("code", [6, 8, 10, 26, 50, 98, 108, 999, None])
def test_apply_unknown_codes(code: int | None) -> None:
    """Unknown codes and empty parameters are ignored."""
    assert styles_after(1, code) == ("ansi-bold",)


def test_style_state_order() -> None:
    """The style state keeps insertion order."""
    state = StyleState()
    state.add("b")
    state.add("a")
    state.add("b")
    assert list(state) == ["b", "a"]
    assert len(state) == 2
    assert "a" in state
    state.discard("b", "missing")
    assert state.snapshot() == ("a",)
