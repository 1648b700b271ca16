"""Strategy selection - decided once per process at import time."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from tagtemplate.compiler.generated import compile_generated
from tagtemplate.compiler.interpreted import compile_interpreted
from tagtemplate.config import Settings, load_settings

log = logging.getLogger(__name__)

# Raised by compile()/exec() in hosts that forbid dynamic code, e.g. audit hooks
CODEGEN_DENIED = (RuntimeError, PermissionError)

_PROBE_SOURCE = "def probe(context):\n    return f''\n"


class Strategy(str, Enum):
    """Compilation strategy."""

    GENERATED = "generated"
    INTERPRETED = "interpreted"


def codegen_available() -> bool:
    """Probe whether the host allows compiling and running generated code."""
    namespace: dict[str, Any] = {}
    try:
        exec(compile(_PROBE_SOURCE, "<tagtemplate-probe>", "exec"), namespace)
        namespace["probe"]({})
    except CODEGEN_DENIED as e:
        log.debug("Code generation unavailable: %s", e)
        return False
    return True


def select_strategy(
    settings: Settings, probe: Callable[[], bool] = codegen_available
) -> Strategy:
    """Pick the compilation strategy for the given settings.

    Args:
        settings: Loaded settings; "auto" runs the probe.
        probe: Capability probe, replaceable for tests.

    Returns:
        The strategy to use.
    """
    if settings.strategy == "generated":
        return Strategy.GENERATED
    if settings.strategy == "interpreted":
        return Strategy.INTERPRETED
    return Strategy.GENERATED if probe() else Strategy.INTERPRETED


_COMPILERS: dict[Strategy, Callable[..., Callable[[Any], str]]] = {
    Strategy.GENERATED: compile_generated,
    Strategy.INTERPRETED: compile_interpreted,
}

STRATEGY = select_strategy(load_settings())
log.debug("Using %s compilation strategy", STRATEGY.value)


def compile_evaluator(
    fragments: Sequence[str], items: Sequence[Any] = ()
) -> Callable[[Any], str]:
    """Compile fragments and items with the process-wide strategy."""
    return _COMPILERS[STRATEGY](fragments, items)
