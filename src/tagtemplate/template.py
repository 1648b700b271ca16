"""Template - a compiled evaluator with conditional chaining.

Templates are built with compile_template() and rendered by calling them
with a context:

    greeting = compile_template(["Hello ", "!"], ["name"])
    greeting({"name": "Ada"})  # "Hello Ada!"

    signed = greeting.if_(True, "\\n")(["-- ", ""], ["author"])
    signed({"name": "Ada", "author": "Bob"})  # "Hello Ada!\\n-- Bob"
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from tagtemplate.compiler import compile_evaluator
from tagtemplate.errors import (
    IllegalConstructionError,
    InvalidContinuationError,
    InvalidReceiverError,
    TemplateStructureError,
)

DEFAULT_DELIMITER = " "

Evaluator = Callable[[Any], Any]


@dataclass(frozen=True)
class Chain:
    """Evaluator joining a head and a tail with a delimiter."""

    head: Evaluator
    delimiter: str
    tail: Evaluator

    def __call__(self, context: Any) -> str:
        return str(self.head(context)) + self.delimiter + str(self.tail(context))


class Template:
    """An evaluator that can be conditionally extended with if_().

    Not instantiable directly; use compile_template() or as_template().
    """

    __slots__ = ("_evaluator",)

    def __new__(cls, *args: Any, **kwargs: Any) -> Template:
        raise IllegalConstructionError()

    @classmethod
    def _wrap(cls, evaluator: Evaluator) -> Template:
        self = object.__new__(cls)
        object.__setattr__(self, "_evaluator", evaluator)
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def evaluator(self) -> Evaluator:
        """The wrapped evaluator."""
        return self._evaluator

    def __call__(self, context: Any) -> str:
        return self._evaluator(context)

    def __repr__(self) -> str:
        return f"Template({self._evaluator!r})"

    def if_(
        self,
        condition: Any,
        delimiter: str | Evaluator | None = DEFAULT_DELIMITER,
        continuation: Evaluator | None = None,
    ) -> Template | Callable[..., Template]:
        """Conditionally append another template to this one.

        Can be applied to any callable: Template.if_(func, condition, ...).

        Args:
            condition: Whether to include the continuation. Captured now,
                not re-checked at render time.
            delimiter: Text placed between this template and the
                continuation. If callable, it is taken as the continuation
                and the delimiter stays a single space.
            continuation: Template or any one-argument callable. If omitted,
                a tag function taking (fragments, items) is returned.

        Returns:
            A new Template when the condition holds, this template otherwise,
            or a tag function when no continuation is given.

        Raises:
            InvalidReceiverError: If called on something not callable.
            InvalidContinuationError: If the continuation is not callable.
        """
        if not callable(self):
            raise InvalidReceiverError(self)

        if callable(delimiter):
            continuation = delimiter
            delimiter = DEFAULT_DELIMITER
        elif delimiter is None:
            delimiter = DEFAULT_DELIMITER
        else:
            delimiter = str(delimiter)

        receiver = self

        def extend(tail: Evaluator) -> Template:
            return Template._wrap(Chain(receiver, delimiter, tail))

        if continuation is None:

            def tag(fragments: Any, items: Sequence[Any] = ()) -> Template:
                if not condition:
                    return as_template(receiver)
                return extend(compile_template(fragments, items))

            return tag

        if not callable(continuation):
            raise InvalidContinuationError(continuation)
        if not condition:
            return as_template(receiver)
        return extend(continuation)


def _is_template_string(value: Any) -> bool:
    return hasattr(value, "strings") and hasattr(value, "interpolations")


def compile_template(fragments: Any, items: Sequence[Any] = ()) -> Template:
    """Compile a template from literal fragments and interleaved items.

    Args:
        fragments: Literal text chunks, one more than items. A PEP 750
            template string (t"...") is also accepted, with its
            interpolated values used as items.
        items: Keys looked up in the context, literal() wrappers inserted
            as-is, callables invoked with the context, or None.

    Raises:
        TemplateStructureError: If items are given with a template string.

    Returns:
        Compiled Template.
    """
    if _is_template_string(fragments):
        if items:
            raise TemplateStructureError(
                "items cannot be passed alongside a template string"
            )
        items = tuple(part.value for part in fragments.interpolations)
        fragments = fragments.strings
    return Template._wrap(compile_evaluator(fragments, items))


def as_template(func: Evaluator) -> Template:
    """Wrap any one-argument callable as a Template.

    Templates are returned unchanged.
    """
    if isinstance(func, Template):
        return func
    if not callable(func):
        raise InvalidReceiverError(func)
    return Template._wrap(func)
