from builders import attr, call, concat, container, ident, jsx, member, node, source, string, template

from i18nscan.matchers import (
    attribute_value,
    callee_name,
    describe_expression,
    is_call_to,
    is_jsx_attribute_value,
    is_jsx_text_node,
    is_string_like,
    member_name,
    resolve_static_string,
    template_pattern,
)
from i18nscan.syntax import NodeKind


def test_resolve_plain_and_template_literals():
    assert resolve_static_string(string("Hello")) == "Hello"
    assert resolve_static_string(template(["Hello there"])) == "Hello there"
    assert resolve_static_string(template(["Hi ", "!"], [ident("name")])) is None


def test_resolve_concatenation_chain():
    assert resolve_static_string(concat("Welcome", " ", "back")) == "Welcome back"
    assert resolve_static_string(concat("Hi ", ident("name"))) is None


def test_resolve_identifier_through_lookup():
    lookup = {"greeting": "Welcome back"}.get

    assert resolve_static_string(ident("greeting")) is None
    assert resolve_static_string(ident("greeting"), lookup) == "Welcome back"
    assert resolve_static_string(concat(ident("greeting"), "!"), lookup) == "Welcome back!"


def test_resolve_unwraps_expression_container():
    assert resolve_static_string(container("Welcome back")) == "Welcome back"


def test_resolve_deep_chain_without_recursion():
    operands = ["a"] * 5000
    assert resolve_static_string(concat(*operands)) == "a" * 5000


def test_resolve_rejects_other_operators():
    expression = node(NodeKind.BINARY_EXPRESSION, None, "-", left=string("a"), right=string("b"))
    assert resolve_static_string(expression) is None


def test_member_and_callee_names():
    assert member_name(member("toast.error")) == "toast.error"
    assert callee_name(call("i18n.t", "key")) == "i18n.t"
    assert is_call_to(call("toast", "Hi"), ["toast", "alert"])
    assert not is_call_to(call("toast.error", "Hi"), ["toast"])

    computed = node(NodeKind.MEMBER_EXPRESSION, None, "computed", object=ident("messages"), property=ident("key"))
    assert member_name(computed) is None


def test_is_string_like():
    assert is_string_like(string("x"))
    assert is_string_like(template(["x"]))
    assert is_string_like(concat("a", "b"))
    assert not is_string_like(ident("x"))
    assert not is_string_like(None)


def test_attribute_helpers():
    program = source(jsx("input", [attr("placeholder", container("Enter your email"))])).tree
    element = program.get_all("body")[0]
    attribute = element.get_all("attributes")[0]
    value = attribute_value(attribute)

    assert value.kind is NodeKind.STRING_LITERAL
    assert is_jsx_attribute_value(value, "placeholder", [program, element, attribute, attribute.get("value")])
    assert not is_jsx_attribute_value(value, "title", [program, element, attribute])


def test_template_pattern_and_description():
    key = template(["plans.", ".name"], [ident("planKey")])

    assert template_pattern(key) == "plans.${planKey}.name"
    assert describe_expression(call("computeKey")) == "computeKey()"
    assert describe_expression(member("item.key")) == "item.key"
    assert describe_expression(key) == "plans.${planKey}.name"


def test_jsx_text_node_predicate():
    element = jsx("p", children=["Welcome back"])

    assert is_jsx_text_node(element.get_all("children")[0])
    assert not is_jsx_text_node(element)
    assert not is_jsx_text_node(string("Welcome back"))
