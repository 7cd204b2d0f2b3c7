import pytest

from builders import call, concat, declare, findings_for, ident, source

from i18nscan.dispatcher import scan
from i18nscan.rules.string_variable import is_technical_name


def test_user_facing_variable_is_flagged():
    src = source(declare("welcomeMessage", "Welcome back to the app"))
    init = src.tree.get_all("body")[0].get("init")

    findings = findings_for(scan(src), "string-variable")

    assert len(findings) == 1
    assert findings[0].span == init.span
    assert findings[0].suggested_key == "auth.loginForm.welcomeMessage.welcomeBackToThe"


@pytest.mark.parametrize("name", ["id", "className", "buttonClass", "apiUrl", "userId", "storageKey", "config_path", "locale"])
def test_technical_names(name):
    assert is_technical_name(name)


def test_technical_names_are_skipped():
    src = source(declare("buttonClass", "Primary button"), declare("helpUrl", "Read the docs"))

    assert findings_for(scan(src), "string-variable") == []


def test_initializer_resolved_through_scope():
    src = source(
        declare("name", "John"),
        declare("greeting", concat("Hello ", ident("name"))),
    )

    findings = findings_for(scan(src), "string-variable")

    assert [finding.text for finding in findings] == ["Hello John"]


def test_translated_initializers_are_skipped():
    src = source(
        declare("title", call("t", "home.title")),
        declare("label", concat(call("t", "common.more"), " and more")),
        declare("heading", ident("title")),
        declare("subtitle", concat(ident("title"), " and more")),
    )

    assert findings_for(scan(src), "string-variable") == []


def test_aliases_are_reported_once():
    src = source(declare("message", "Welcome back"), declare("copy", ident("message")))

    findings = findings_for(scan(src), "string-variable")

    assert [finding.text for finding in findings] == ["Welcome back"]


def test_variables_use_the_stricter_policy():
    src = source(
        declare("heading", "Loading"),
        declare("banner", "Error"),
        declare("greeting", "Hey!"),
        declare("title", "Welcome"),
    )

    assert [finding.text for finding in findings_for(scan(src), "string-variable")] == ["Welcome"]
