"""tagtemplate Exceptions

Custom exceptions for the template compiler.
"""

from __future__ import annotations

from typing import Any


class TemplateError(Exception):
    """Base exception for all tagtemplate errors."""

    pass


class InvalidContextError(TemplateError, TypeError):
    """Raised when a template is rendered with a context that is not structured."""

    def __init__(self, context: Any):
        self.context = context
        super().__init__(
            f"context must be a structured value, got {type(context).__name__}"
        )


class IllegalConstructionError(TemplateError, TypeError):
    """Raised when Template is instantiated directly instead of compiled."""

    def __init__(self) -> None:
        super().__init__("Illegal constructor.")


class InvalidReceiverError(TemplateError, TypeError):
    """Raised when if_ is applied to something that is not callable."""

    def __init__(self, receiver: Any):
        self.receiver = receiver
        super().__init__(f"receiver must be callable, got {type(receiver).__name__}")


class InvalidContinuationError(TemplateError, TypeError):
    """Raised when if_ is given a continuation that is not callable."""

    def __init__(self, continuation: Any):
        self.continuation = continuation
        super().__init__(
            f"continuation must be callable, got {type(continuation).__name__}"
        )


class TemplateStructureError(TemplateError, ValueError):
    """Raised when the fragments of a template are malformed."""

    pass
