"""tagtemplate - compiled string templates with conditional chaining.

Compiles literal fragments interleaved with keys, literal() wrappers and
nested callables into fast render functions.
"""

from tagtemplate.compiler import STRATEGY, Strategy
from tagtemplate.errors import (
    IllegalConstructionError,
    InvalidContextError,
    InvalidContinuationError,
    InvalidReceiverError,
    TemplateError,
    TemplateStructureError,
)
from tagtemplate.items import Literal, literal
from tagtemplate.template import Template, as_template, compile_template

__all__ = [
    # Templates
    "Template",
    "compile_template",
    "as_template",
    "literal",
    "Literal",
    # Strategy
    "STRATEGY",
    "Strategy",
    # Errors
    "TemplateError",
    "InvalidContextError",
    "IllegalConstructionError",
    "InvalidReceiverError",
    "InvalidContinuationError",
    "TemplateStructureError",
]
