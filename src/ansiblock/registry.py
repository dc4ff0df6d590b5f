"""Code block processors for markdown hosts.

The host owns the document. It looks up a processor by code block language,
passes it the raw block text, and mounts the returned markup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from ansiblock.render import convert

if TYPE_CHECKING:
    from collections.abc import Callable

BlockProcessor: TypeAlias = "Callable[[str], str]"

# Code block languages handled by default, hosts match them case-sensitively
BLOCK_LANGUAGES: tuple[str, ...] = ("ansi", "ANSI")

CONTAINER_CLASS = "ansi-code-block"


class UnknownBlockLanguageError(KeyError):
    """No processor registered for a code block language."""

    def __init__(self, language: str) -> None:
        """Initialize with the code block language."""
        self.language = language
        super().__init__(f"No processor for code block language: {language!r}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"[bold red]Error:[/] No processor for code block language\n"
            f"[bold]Language:[/] {self.language!r}"
        )


def is_ansi_block(language: str) -> bool:
    """Check if a code block language is one handled by default."""
    return language in BLOCK_LANGUAGES


def wrap_container(markup: str) -> str:
    """Wrap markup in the container element the host mounts."""
    return f'<div class="{CONTAINER_CLASS}"><pre>{markup}</pre></div>'


def render_block(source: str) -> str:
    """Convert block source and wrap it in the container markup."""
    return wrap_container(convert(source))


class BlockProcessorRegistry:
    """Processors indexed by code block language."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._processors: dict[str, BlockProcessor] = {}

    def register(self, language: str, processor: BlockProcessor) -> None:
        """Register processor for language, replacing any previous one."""
        self._processors[language] = processor

    def register_defaults(self) -> None:
        """Register render_block for every default ANSI block language."""
        for language in BLOCK_LANGUAGES:
            self.register(language, render_block)

    def languages(self) -> list[str]:
        """Registered languages, in registration order."""
        return list(self._processors)

    def process(self, language: str, source: str) -> str:
        """Run the processor registered for language on source.

        Raises:
            UnknownBlockLanguageError: If no processor is registered
        """
        try:
            processor = self._processors[language]
        except KeyError as error:
            raise UnknownBlockLanguageError(language) from error
        return processor(source)
