from __future__ import annotations


class RenderError(Exception):
    """Base class for every failure surfaced by the renderer."""


class InputError(RenderError, ValueError):
    """Malformed fields payload or deck file."""


class ParseError(RenderError, ValueError):
    """Template could not be parsed. No partial output is produced.

    `side` is filled in by the card renderer ("front" or "back") so callers
    can tell which template failed.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.side: str | None = None

    def __str__(self) -> str:
        if self.side:
            return f"{self.side} template: {self.message}"
        return self.message


class UnterminatedTag(ParseError):
    def __init__(self, position: int) -> None:
        super().__init__(f"unterminated tag starting at offset {position}")
        self.position = position


class UnterminatedSection(ParseError):
    def __init__(self, name: str) -> None:
        super().__init__(f"section {{{{#{name}}}}} is never closed")
        self.name = name


class MismatchedClose(ParseError):
    def __init__(self, expected: str | None, found: str) -> None:
        if expected is None:
            msg = f"close tag {{{{/{found}}}}} without an open section"
        else:
            msg = f"expected {{{{/{expected}}}}}, found {{{{/{found}}}}}"
        super().__init__(msg)
        self.expected = expected
        self.found = found


class UnknownFilter(ParseError):
    def __init__(self, keyword: str) -> None:
        super().__init__(f"unknown filter: {keyword!r}")
        self.keyword = keyword
