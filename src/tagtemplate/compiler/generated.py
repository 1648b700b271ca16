"""Generated strategy - renders each template into Python source.

The evaluator source is rendered with Jinja2, compiled once per call to
compile_generated() and reused for every render. Substitutions are bound to
locals in item order, then joined by a single f-string:

    def render_template(context):
        if not is_structured(context):
            raise InvalidContextError(context)
        get = getter(context)
        s0 = text(get("name"))
        return f'Hello {s0}!'
"""

from __future__ import annotations

import itertools
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, StrictUndefined

from tagtemplate.errors import InvalidContextError
from tagtemplate.items import ItemKind, Slot, getter, is_structured, prepare, to_text

log = logging.getLogger(__name__)

FUNCTION_NAME = "render_template"

EVALUATOR_SOURCE = """\
def {{ name }}(context):
    if not is_structured(context):
        raise InvalidContextError(context)
{% if uses_getter %}
    get = getter(context)
{% endif %}
{% for sub in substitutions %}
    {{ sub.local }} = text({{ sub.expression }})
{% endfor %}
    return f'{{ body }}'
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_evaluator_template = _env.from_string(EVALUATOR_SOURCE)

_counter = itertools.count()

# Larger ints may exceed the int-to-str digit limit
INLINE_INT_LIMIT = 10**18

# Characters that end or redirect a single-quoted f-string literal
_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "{": "{{",
    "}": "}}",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_ESCAPE_RE = re.compile(r"[\\'{}]|[^\x20-\x7e]")


@dataclass(frozen=True)
class Substitution:
    """A local variable holding one rendered item."""

    local: str
    expression: str


def _escape_char(match: re.Match[str]) -> str:
    char = match.group()
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char.isprintable():
        return char
    code = ord(char)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def escape_fragment(fragment: str) -> str:
    """Escape literal text for embedding in a single-quoted f-string."""
    return _ESCAPE_RE.sub(_escape_char, fragment)


def key_source(key: Any, index: int) -> str:
    """Return the source of the argument passed to get() for a key.

    Identifier keys are written as plain quoted names, other strings and
    small integers through repr(). Anything else, including integers too
    long for str(), is read from the bound items.
    """
    if type(key) is str:
        if key.isidentifier():
            return f'"{key}"'
        return repr(key)
    if type(key) in (int, bool) and abs(key) < INLINE_INT_LIMIT:
        return repr(key)
    return f"items[{index}]"


def _expression(slot: Slot, index: int) -> str:
    if slot.kind is ItemKind.LITERAL:
        return f"items[{index}]"
    if slot.kind is ItemKind.CALLABLE:
        return f"items[{index}](context)"
    return f"get({key_source(slot.value, index)})"


def render_source(fragments: Sequence[str], slots: Sequence[Slot]) -> str:
    """Render the Python source of an evaluator function."""
    body: list[str] = []
    substitutions: list[Substitution] = []

    for index, fragment in enumerate(fragments):
        body.append(escape_fragment(fragment))
        if index >= len(slots) or slots[index].kind is ItemKind.ABSENT:
            continue
        local = f"s{index}"
        substitutions.append(Substitution(local, _expression(slots[index], index)))
        body.append(f"{{{local}}}")

    return _evaluator_template.render(
        name=FUNCTION_NAME,
        uses_getter=any(slot.kind is ItemKind.KEY for slot in slots),
        substitutions=substitutions,
        body="".join(body),
    )


def compile_generated(
    fragments: Sequence[str], items: Sequence[Any] = ()
) -> Callable[[Any], str]:
    """Compile fragments and items into a generated evaluator.

    Args:
        fragments: Literal text chunks.
        items: Keys, wrapped literals or callables following each fragment.

    Returns:
        Evaluator taking a context and returning the rendered string. The
        generated source is kept on its ``__source__`` attribute.
    """
    frozen, slots = prepare(fragments, items)
    source = render_source(frozen, slots)
    filename = f"<tagtemplate-{next(_counter)}>"
    log.debug("Generated %s:\n%s", filename, source)

    namespace: dict[str, Any] = {
        "items": tuple(slot.value for slot in slots),
        "is_structured": is_structured,
        "InvalidContextError": InvalidContextError,
        "getter": getter,
        "text": to_text,
    }
    exec(compile(source, filename, "exec"), namespace)

    evaluate = namespace[FUNCTION_NAME]
    evaluate.__source__ = source
    return evaluate
