"""Text helpers for messages and suggested translation keys."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Optional

SOURCE_SUFFIX = re.compile(r"\.(tsx|jsx|ts|js|mjs|cjs|mts|cts)$")
GENERIC_PATH_PARTS = frozenset({"src", "app", "components", "pages", "index", "lib", ""})
MAX_KEY_WORDS = 4


def truncate(text: str, max_length: int) -> str:
    """Collapse whitespace and shorten ``text`` with an ellipsis."""

    cleaned = " ".join(text.split())
    if len(cleaned) <= max_length:
        return cleaned
    return cleaned[: max_length - 1] + "…"


def to_camel_case(text: str) -> str:
    parts = [part for part in re.split(r"[-_\s.\[\]()]+", text) if part]
    if not parts:
        return ""
    head = parts[0][:1].lower() + parts[0][1:]
    return head + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def text_to_key(text: str) -> str:
    """``"Enter your email"`` -> ``"enterYourEmail"`` (first four words)."""

    cleaned = re.sub(r"[^a-z0-9\s]", "", text.lower()).split()
    words = cleaned[:MAX_KEY_WORDS]
    if not words:
        return "text"
    return words[0] + "".join(word.capitalize() for word in words[1:])


def suggest_key(text: str, file_path: str, identifier: Optional[str] = None) -> str:
    """Deterministic key suggestion from path, nearby identifier and text.

    ``src/components/auth/LoginForm.tsx`` with ``"Welcome back"`` becomes
    ``auth.loginForm.welcomeBack``.
    """

    stripped = SOURCE_SUFFIX.sub("", file_path.replace("\\", "/"))
    parts = [part for part in PurePosixPath(stripped).parts if part not in GENERIC_PATH_PARTS and part != "/"]
    context = [to_camel_case(part) for part in parts[-2:]]
    segments = [segment for segment in context if segment]
    if identifier:
        ident = to_camel_case(identifier)
        if ident and ident not in segments:
            segments.append(ident)
    segments.append(text_to_key(text))
    return ".".join(segments)
