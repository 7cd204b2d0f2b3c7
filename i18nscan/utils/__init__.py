"""Utility helpers for the scanner."""

from .code import iter_ast_files, source_path_for
from .estree import load_source_file, source_file_from_estree
from .fileio import read_json_file, read_yaml_file

__all__ = [
    "iter_ast_files",
    "source_path_for",
    "load_source_file",
    "source_file_from_estree",
    "read_json_file",
    "read_yaml_file",
]
