from builders import comment, findings_for, jsx, source

from i18nscan.dispatcher import scan
from i18nscan.rules.annotated_keys import parse_annotation


def test_line_annotation_yields_one_finding_per_key():
    src = source(
        jsx("div"),
        comments=[comment(" @i18n-keys: pricing.plans.free.name, pricing.plans.pro.name")],
    )

    findings = findings_for(scan(src), "annotated-keys")

    assert [finding.key for finding in findings] == ["pricing.plans.free.name", "pricing.plans.pro.name"]
    assert len({finding.span for finding in findings}) == 2
    assert all(finding.span.start_offset >= src.comments[0].span.start_offset for finding in findings)
    assert all(finding.span.end_offset <= src.length for finding in findings)


def test_block_annotation_with_bullets():
    body = "\n * @i18n-keys:\n *  - common.title\n *  - common.description\n "
    src = source(comments=[comment(body, block_comment=True)])

    findings = findings_for(scan(src), "annotated-keys")

    assert [finding.key for finding in findings] == ["common.title", "common.description"]
    assert [finding.line for finding in findings] == [3, 4]


def test_plain_comments_are_ignored():
    src = source(comments=[comment(" regular comment about keys")])

    assert findings_for(scan(src), "annotated-keys") == []


def test_parse_annotation_offsets():
    keys = parse_annotation(" @i18n-keys: a.b, c.d")

    assert keys == [("a.b", 13), ("c.d", 18)]
