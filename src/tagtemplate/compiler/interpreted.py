"""Interpreted strategy - folds over the fragments on every render.

This is the reference behavior; the generated strategy must match it
byte for byte.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import reduce
from itertools import zip_longest
from typing import Any

from tagtemplate.errors import InvalidContextError
from tagtemplate.items import ItemKind, Slot, getter, is_structured, prepare, to_text

_ABSENT = Slot(ItemKind.ABSENT)


def _contribution(slot: Slot, context: Any, get: Callable[[Any], Any]) -> str:
    """Render one slot against the context."""
    if slot.kind is ItemKind.ABSENT:
        return ""
    if slot.kind is ItemKind.LITERAL:
        return str(slot.value)
    if slot.kind is ItemKind.CALLABLE:
        return to_text(slot.value(context))
    return to_text(get(slot.value))


def compile_interpreted(
    fragments: Sequence[str], items: Sequence[Any] = ()
) -> Callable[[Any], str]:
    """Compile fragments and items into an evaluator without generating code.

    Args:
        fragments: Literal text chunks.
        items: Keys, wrapped literals or callables following each fragment.

    Returns:
        Evaluator taking a context and returning the rendered string.
    """
    frozen, slots = prepare(fragments, items)
    pairs = tuple(zip_longest(frozen, slots, fillvalue=_ABSENT))

    def evaluate(context: Any) -> str:
        if not is_structured(context):
            raise InvalidContextError(context)
        get = getter(context)
        return reduce(
            lambda result, pair: result + pair[0] + _contribution(pair[1], context, get),
            pairs,
            "",
        )

    return evaluate
