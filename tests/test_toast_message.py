from builders import call, findings_for, ident, obj, source, template

from i18nscan.config import ScanConfig
from i18nscan.dispatcher import scan
from i18nscan.rules.toast_message import matches_feedback_name


def test_toast_error_with_literal():
    src = source(call("toast.error", "Something went wrong"))
    argument = src.tree.get_all("body")[0].get_all("arguments")[0]

    report = scan(src)

    assert len(report.findings) == 1
    finding = report.findings[0]
    assert finding.rule_id == "toast-message"
    assert finding.span == argument.span
    assert finding.text == "Something went wrong"
    assert finding.suggested_key == "auth.loginForm.somethingWentWrong"


def test_plain_calls_and_alerts():
    src = source(
        call("toast", "Profile saved successfully"),
        call("window.alert", template(["Are you sure?"])),
        call("console.log", "Something went wrong"),
    )

    texts = [finding.text for finding in findings_for(scan(src), "toast-message")]

    assert texts == ["Profile saved successfully", "Are you sure?"]


def test_translated_and_dynamic_messages_are_skipped():
    src = source(
        call("toast.success", call("t", "profile.saved")),
        call("toast.error", ident("message")),
        call("toast.promise", ident("request"), obj(loading="saving")),
        call("toast.info", "ok"),
    )

    assert findings_for(scan(src), "toast-message") == []


def test_feedback_names_are_configurable():
    src = source(call("notify.info", "Changes saved"), call("toast.error", "Something went wrong"))
    config = ScanConfig(ui_feedback_function_names=["notify.*"])

    texts = [finding.text for finding in findings_for(scan(src, config), "toast-message")]

    assert texts == ["Changes saved"]


def test_wildcard_matching():
    patterns = ["toast.*", "alert"]

    assert matches_feedback_name("toast.error", patterns)
    assert matches_feedback_name("alert", patterns)
    assert not matches_feedback_name("toast", patterns)
    assert not matches_feedback_name("toast.error.extra", patterns)
    assert not matches_feedback_name("myToast.error", patterns)


def test_single_word_toast_is_flagged():
    src = source(call("toast.success", "Success"))

    assert [finding.text for finding in findings_for(scan(src), "toast-message")] == ["Success"]
