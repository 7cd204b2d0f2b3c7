"""Helpers for locating parser output on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

AST_SUFFIX = ".ast.json"


def iter_ast_files(root_paths: Iterable[str], suffix: str = AST_SUFFIX) -> Generator[Path, None, None]:
    """Yield AST dumps beneath the provided paths, in sorted order.

    Plain files are yielded as given regardless of their name.
    """

    for root in root_paths:
        root_path = Path(root)
        if root_path.is_file():
            yield root_path
            continue
        for path in sorted(root_path.rglob(f"*{suffix}")):
            if path.is_file():
                yield path


def source_path_for(ast_path: Path, suffix: str = AST_SUFFIX) -> str:
    """Map ``src/App.tsx.ast.json`` back to ``src/App.tsx``."""

    text = ast_path.as_posix()
    if text.endswith(suffix):
        return text[: -len(suffix)]
    if text.endswith(".json"):
        return text[: -len(".json")]
    return text
