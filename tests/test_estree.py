import json

import pytest

from builders import babel_file, babel_jsx_text, raw

from i18nscan.dispatcher import scan
from i18nscan.syntax import MalformedTreeError, NodeKind
from i18nscan.utils import iter_ast_files, load_source_file, source_file_from_estree, source_path_for


def test_babel_file_is_converted():
    src = source_file_from_estree(babel_jsx_text(), "src/App.tsx")

    assert src.language == "tsx"
    assert src.length == 23
    statement = src.tree.get_all("body")[0]
    element = statement.get("expression")
    assert element.kind is NodeKind.JSX_ELEMENT
    assert element.value == "div"
    text = element.get_all("children")[0]
    assert text.kind is NodeKind.JSX_TEXT
    assert (text.span.start_line, text.span.start_column) == (1, 6)

    findings = scan(src).findings
    assert [(finding.rule_id, finding.line, finding.column) for finding in findings] == [("jsx-text", 1, 6)]


def test_espree_style_ranges_and_literals():
    program = {
        "type": "Program",
        "range": [0, 20],
        "body": [
            {
                "type": "ExpressionStatement",
                "range": [0, 20],
                "expression": {
                    "type": "CallExpression",
                    "range": [0, 20],
                    "callee": {"type": "Identifier", "name": "t", "range": [0, 1]},
                    "arguments": [{"type": "Literal", "value": "errors.notFound", "range": [2, 19]}],
                },
            }
        ],
    }

    src = source_file_from_estree(program, "src/util.js")

    assert src.language == "js"
    assert src.length == 20
    call = src.tree.get_all("body")[0].get("expression")
    assert call.kind is NodeKind.CALL_EXPRESSION
    assert call.get_all("arguments")[0].kind is NodeKind.STRING_LITERAL
    assert [finding.key for finding in scan(src).findings] == ["errors.notFound"]


def test_typescript_wrappers_are_transparent():
    init = raw("TSAsExpression", 14, 40, expression=raw("StringLiteral", 14, 29, value="Welcome back"))
    declarator = raw("VariableDeclarator", 6, 40, id=raw("Identifier", 6, 11, name="title"), init=init)
    declaration = raw("VariableDeclaration", 0, 40, kind="const", declarations=[declarator])

    src = source_file_from_estree(babel_file([declaration], 40), "src/App.ts")

    node = src.tree.get_all("body")[0].get_all("declarations")[0]
    assert node.kind is NodeKind.VARIABLE_DECLARATOR
    assert node.get("init").kind is NodeKind.STRING_LITERAL


def test_wrapper_document_and_comments():
    comment = raw("CommentLine", 24, 44, value=" @i18n-keys: a.b")
    payload = {"path": "src/Card.jsx", "language": "jsx", "length": 50, "ast": babel_file([], 44, comments=[comment])}

    src = source_file_from_estree(payload, "ignored.json")

    assert src.path == "src/Card.jsx"
    assert src.language == "jsx"
    assert src.length == 50
    assert [(item.kind, item.operator) for item in src.comments] == [(NodeKind.COMMENT, "line")]
    assert [finding.key for finding in scan(src).findings] == ["a.b"]


def test_missing_positions_are_malformed():
    with pytest.raises(MalformedTreeError):
        source_file_from_estree({"type": "Program", "body": []}, "src/App.tsx")
    with pytest.raises(MalformedTreeError):
        source_file_from_estree(["not", "a", "tree"], "src/App.tsx")


def test_load_source_file_from_disk(tmp_path):
    ast_path = tmp_path / "Login.tsx.ast.json"
    ast_path.write_text(json.dumps(babel_jsx_text()), encoding="utf-8")

    src = load_source_file(ast_path)

    assert src.path == (tmp_path / "Login.tsx").as_posix()
    assert src.language == "tsx"


def test_invalid_json_is_malformed(tmp_path):
    ast_path = tmp_path / "Broken.tsx.ast.json"
    ast_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedTreeError):
        load_source_file(ast_path)


def test_iter_ast_files_sorted(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "Z.tsx.ast.json").write_text("{}", encoding="utf-8")
    (tmp_path / "A.tsx.ast.json").write_text("{}", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    found = [path.relative_to(tmp_path).as_posix() for path in iter_ast_files([str(tmp_path)])]

    assert found == ["A.tsx.ast.json", "b/Z.tsx.ast.json"]
    assert source_path_for(tmp_path / "A.tsx.ast.json").endswith("A.tsx")
