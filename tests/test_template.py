"""Tests for Template and the if_ combinator."""

from types import SimpleNamespace

import pytest

from tagtemplate import (
    IllegalConstructionError,
    InvalidContextError,
    InvalidContinuationError,
    InvalidReceiverError,
    Template,
    TemplateStructureError,
    as_template,
    compile_template,
    literal,
)


def fail(ctx):
    """Continuation that must never run."""
    raise AssertionError("continuation should not be evaluated")


@pytest.fixture
def base():
    return compile_template(["ABC"])


def test_compile_template_renders():
    """compile_template returns a callable Template."""
    greeting = compile_template(["Hello ", "!"], ["name"])
    assert isinstance(greeting, Template)
    assert greeting({"name": "Ada"}) == "Hello Ada!"


def test_spec_examples():
    """Key, literal and callable substitutions."""
    assert compile_template(["a ", " b"], ["x"])({"x": "VAL"}) == "a VAL b"
    assert compile_template(["a ", " b"], ["x"])({}) == "a  b"
    assert compile_template(["a ", " b"], ["x"])({"x": None}) == "a  b"
    assert compile_template(["sum="], [literal(3)])({}) == "sum=3"
    assert compile_template(["say "], [lambda ctx: ctx["name"]])({"name": "Al"}) == "say Al"


def test_template_rejects_bad_context():
    """Templates raise InvalidContextError for scalar contexts."""
    with pytest.raises(InvalidContextError):
        compile_template(["a"])(5)


def test_if_true_curried(base):
    """A truthy condition appends the tagged template with a space."""
    assert base.if_(True)(["123"])({}) == "ABC 123"


def test_if_false_curried(base):
    """A falsy condition leaves the template unchanged."""
    extended = base.if_(False)(["123"])
    assert extended is base
    assert extended({}) == "ABC"


def test_if_explicit_delimiter(base):
    """An explicit delimiter replaces the default space."""
    assert base.if_(True, "")(["123"])({}) == "ABC123"
    assert base.if_(True, ", ")(["123"])({}) == "ABC, 123"


def test_if_false_drops_delimiter(base):
    """A gated-off segment leaves no dangling delimiter."""
    assert base.if_(False, " -- ")(["123"])({}) == "ABC"


def test_if_with_continuation(base):
    """A ready-made continuation is appended directly."""
    tail = compile_template(["[", "]"], ["x"])
    assert base.if_(True, "-", tail)({"x": 1}) == "ABC-[1]"


def test_if_delimiter_as_continuation(base):
    """A callable second argument is the continuation, delimiter stays a space."""
    tail = compile_template(["123"])
    assert base.if_(True, tail)({}) == "ABC 123"


def test_if_delimiter_callable_overrides_continuation(base):
    """A callable delimiter wins over a separately passed continuation."""
    first = compile_template(["first"])
    second = compile_template(["second"])
    assert base.if_(True, first, second)({}) == "ABC first"


def test_if_none_delimiter_uses_default(base):
    """None as delimiter falls back to a single space."""
    assert base.if_(True, None, compile_template(["x"]))({}) == "ABC x"


def test_if_false_never_calls_continuation(base):
    """A gated-off continuation is never invoked."""
    assert base.if_(False, fail)({}) == "ABC"
    assert base.if_(False, ", ", fail)({}) == "ABC"


def test_if_false_skips_compiling():
    """The curried form does not compile when gated off."""
    base = compile_template(["ABC"])
    assert base.if_(False)(["a", 1])({}) == "ABC"
    with pytest.raises(TemplateStructureError):
        base.if_(True)(["a", 1])


def test_if_does_not_mutate_receiver(base):
    """if_ returns a new template and leaves the receiver alone."""
    extended = base.if_(True)(["123"])
    assert extended is not base
    assert base({}) == "ABC"
    assert extended({}) == "ABC 123"


def test_if_condition_captured_at_call_time(base):
    """The condition is read when if_ is called, not when rendering."""
    flags = {"on": True}
    extended = base.if_(flags["on"])(["123"])
    flags["on"] = False
    assert extended({}) == "ABC 123"


def test_if_truthiness(base):
    """Any truthy or falsy value works as a condition."""
    assert base.if_("yes")(["1"])({}) == "ABC 1"
    assert base.if_([])(["1"])({}) == "ABC"
    assert base.if_(0)(["1"])({}) == "ABC"


def test_if_continuation_shares_context(base):
    """Both sides render against the same context."""
    extended = base.if_(True, ": ")(["", ""], ["name"])
    assert extended({"name": "Ada"}) == "ABC: Ada"


def test_if_chain():
    """Each gate controls only its own delimiter and segment."""
    a = compile_template(["A"])
    b = compile_template(["B"])
    c = compile_template(["C"])
    d = compile_template(["D"])

    chained = a.if_(True, ",", b).if_(False, ";", c).if_(True, "/", d)
    assert chained({}) == "A,B/D"

    assert a.if_(False, ",", b).if_(True, ";", c)({}) == "A;C"
    assert a.if_(False, ",", b).if_(False, ";", c)({}) == "A"


def test_if_chain_curried():
    """Curried and direct forms chain together."""
    query = (
        compile_template(["SELECT * FROM ", ""], ["table"])
        .if_(True)(["WHERE id = ", ""], ["id"])
        .if_(False)(["LIMIT ", ""], ["limit"])
    )
    assert query({"table": "users", "id": 7, "limit": 1}) == "SELECT * FROM users WHERE id = 7"


def test_if_on_plain_callable():
    """if_ can be applied to any callable."""
    extended = Template.if_(lambda ctx: "x", True, "-", lambda ctx: "y")
    assert isinstance(extended, Template)
    assert extended({}) == "x-y"


def test_if_false_on_plain_callable():
    """A gated-off plain callable is wrapped but otherwise unchanged."""

    def head(ctx):
        return "x"

    result = Template.if_(head, False, fail)
    assert isinstance(result, Template)
    assert result.evaluator is head
    assert result({}) == "x"


def test_if_plain_callable_result_is_coerced():
    """Non-string results of plain callables are stringified."""
    extended = Template.if_(lambda ctx: 1, True, "+", lambda ctx: 2)
    assert extended({}) == "1+2"


def test_if_invalid_receiver():
    """if_ requires a callable receiver."""
    with pytest.raises(InvalidReceiverError):
        Template.if_(42, True)


def test_if_invalid_continuation(base):
    """A non-callable continuation is rejected."""
    with pytest.raises(InvalidContinuationError):
        base.if_(True, " ", "not callable")


def test_if_renders_context_errors(base):
    """Chained templates still validate their context."""
    with pytest.raises(InvalidContextError):
        base.if_(True)(["x"])("text")


def test_template_cannot_be_constructed():
    """Template is only created through compile_template or as_template."""
    with pytest.raises(IllegalConstructionError):
        Template(lambda ctx: "")
    with pytest.raises(IllegalConstructionError):
        type(compile_template(["a"]))()


def test_template_is_immutable(base):
    """Templates reject attribute assignment."""
    with pytest.raises(AttributeError):
        base.extra = 1
    with pytest.raises(AttributeError):
        del base._evaluator


def test_as_template():
    """as_template wraps callables and passes templates through."""
    template = compile_template(["a"])
    assert as_template(template) is template

    wrapped = as_template(lambda ctx: "plain")
    assert isinstance(wrapped, Template)
    assert wrapped.if_(True)(["b"])({}) == "plain b"

    with pytest.raises(InvalidReceiverError):
        as_template("not callable")


def test_nested_templates():
    """Templates can be used as items of other templates."""
    name = compile_template(["", " ", ""], ["first", "last"])
    greeting = compile_template(["Hello, ", "!"], [name])
    assert greeting({"first": "Ada", "last": "Lovelace"}) == "Hello, Ada Lovelace!"


def test_template_string_input():
    """PEP 750 template strings are split into fragments and items."""
    tstring = SimpleNamespace(
        strings=("Hello ", "!"),
        interpolations=(SimpleNamespace(value="name"),),
    )
    assert compile_template(tstring)({"name": "Ada"}) == "Hello Ada!"

    base = compile_template(["ABC"])
    assert base.if_(True)(tstring)({"name": "Ada"}) == "ABC Hello Ada!"


def test_template_string_rejects_items():
    """Items cannot be combined with a template string."""
    tstring = SimpleNamespace(
        strings=("Hello ", "!"),
        interpolations=(SimpleNamespace(value="name"),),
    )
    with pytest.raises(TemplateStructureError):
        compile_template(tstring, ["other"])
    with pytest.raises(TemplateStructureError):
        compile_template(["ABC"]).if_(True)(tstring, ["other"])


def test_callable_context_rejected():
    """Functions and templates are not valid render contexts."""
    template = compile_template(["a ", ""], ["x"])
    with pytest.raises(InvalidContextError):
        template(len)
    with pytest.raises(InvalidContextError):
        template(template)


def test_rendering_is_idempotent():
    """Rendering twice with equal contexts gives equal strings."""
    template = compile_template(["a ", " b"], ["x"]).if_(True)(["c ", ""], ["y"])
    assert template({"x": 1, "y": 2}) == template({"x": 1, "y": 2}) == "a 1 b c 2"


def test_repr():
    """repr shows the wrapped evaluator."""
    assert repr(as_template(len)) == f"Template({len!r})"
