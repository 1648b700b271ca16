"""tagtemplate compiler - turns fragments and items into evaluators."""

from tagtemplate.compiler.generated import compile_generated
from tagtemplate.compiler.interpreted import compile_interpreted
from tagtemplate.compiler.strategy import (
    STRATEGY,
    Strategy,
    codegen_available,
    compile_evaluator,
    select_strategy,
)

__all__ = [
    "STRATEGY",
    "Strategy",
    "codegen_available",
    "compile_evaluator",
    "compile_generated",
    "compile_interpreted",
    "select_strategy",
]
