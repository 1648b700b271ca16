"""Item classification and context lookup shared by both compiler strategies.

Items interleaved between fragments are classified once, at compile time:

  - ABSENT:   None, renders as ""
  - LITERAL:  a wrapped value whose str() is inserted as-is
  - CALLABLE: called with the context on every render
  - KEY:      str/int/float looked up in the context
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import Any

from tagtemplate.errors import TemplateStructureError

# Text types count as scalars even though they are sequences
_TEXT_TYPES = (str, bytes, bytearray)

# Canonical decimal index, "0" or "12" but not "01" or "+1", short enough for int()
_INDEX_RE = re.compile(r"(?:0|[1-9][0-9]{0,17})\Z")


class ItemKind(Enum):
    """How an item contributes to the rendered string."""

    ABSENT = "absent"
    LITERAL = "literal"
    CALLABLE = "callable"
    KEY = "key"


@dataclass(frozen=True)
class Slot:
    """A classified item."""

    kind: ItemKind
    value: Any = None


class Literal:
    """Wraps a value so it is inserted verbatim instead of looked up.

    Usage:
        compile_template(["sum="], [literal(3)])({})  # "sum=3"
    """

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"literal({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Literal, self.value))


def literal(value: Any) -> Literal:
    """Create a wrapped literal item."""
    return Literal(value)


def classify(item: Any) -> Slot:
    """Classify a single item into a Slot."""
    if item is None:
        return Slot(ItemKind.ABSENT)
    if callable(item):
        return Slot(ItemKind.CALLABLE, item)
    if isinstance(item, (str, int, float)):
        return Slot(ItemKind.KEY, item)
    return Slot(ItemKind.LITERAL, item)


def prepare(
    fragments: Sequence[str], items: Sequence[Any]
) -> tuple[tuple[str, ...], tuple[Slot, ...]]:
    """Freeze fragments and classify the items that will be rendered.

    The walk is driven by fragments: the item at index i follows fragment i,
    so at most len(fragments) items are kept.

    Raises:
        TemplateStructureError: If fragments is a string or holds a non-string.
    """
    if isinstance(fragments, _TEXT_TYPES):
        raise TemplateStructureError(
            "fragments must be a sequence of strings, not a single string"
        )

    frozen = tuple(fragments)
    for index, fragment in enumerate(frozen):
        if not isinstance(fragment, str):
            raise TemplateStructureError(
                f"fragment {index} must be a string, got {type(fragment).__name__}"
            )

    slots = tuple(classify(item) for item in tuple(items)[: len(frozen)])
    return frozen, slots


def is_structured(context: Any) -> bool:
    """Check whether a value can be used as a render context."""
    if context is None or callable(context):
        return False
    return not isinstance(context, (Number, *_TEXT_TYPES))


def to_text(value: Any) -> str:
    """Coerce a substitution to text, None becoming the empty string."""
    if value is None:
        return ""
    return str(value)


def getter(context: Any) -> Callable[[Any], Any]:
    """Return a key lookup function bound to the context.

    Missing keys resolve to None rather than raising.
    """
    if isinstance(context, Mapping):
        return context.get

    if isinstance(context, Sequence):

        def get_index(key: Any) -> Any:
            if isinstance(key, str) and _INDEX_RE.match(key):
                key = int(key)
            if isinstance(key, int) and not isinstance(key, bool):
                if 0 <= key < len(context):
                    return context[key]
            return None

        return get_index

    def get_attr(key: Any) -> Any:
        if isinstance(key, str):
            return getattr(context, key, None)
        return None

    return get_attr


def lookup(context: Any, key: Any) -> Any:
    """Look up a key in a context, returning None when missing."""
    return getter(context)(key)
