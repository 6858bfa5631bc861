"""Exceptions raised by the scaffold generation pipeline.

Three kinds reach callers: validation errors (bad option values), not-found
errors (unknown handle or template), and generation errors (filesystem,
rendering or archive failures while building a scaffold).
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every go-scaffold error."""


class OptionsValidationError(ScaffoldError):
    """Raised when generation options fail validation.

    The message is the first failing check; ``errors`` holds all of them.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(self.errors[0] if self.errors else "invalid options")


class NotFoundError(ScaffoldError):
    """Raised when a requested resource does not exist."""


class ScaffoldNotFoundError(NotFoundError):
    """Raised when no artifact is stored under a handle."""

    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__("scaffold not found")


class TemplateNotFoundError(NotFoundError):
    """Raised when no template set matches a category, variant or id."""


class GenerationError(ScaffoldError):
    """Raised when rendering or packaging a scaffold fails.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"failed to {step}: {message}")
