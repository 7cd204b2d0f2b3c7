"""Natural-language classifier used to decide whether a literal is user-facing.

This is the most failure-prone part of the engine, so the whole decision is
driven by :class:`NaturalLanguagePolicy`. Every rule goes through
:func:`looks_like_natural_language`. Variable initializers are judged by the
stricter :meth:`NaturalLanguagePolicy.for_variables` variant, which also
rejects short strings and lone technical words such as ``"Primary"``.

Decision order (first match wins):

====================  =======  ==============================================
step                  verdict  example
====================  =======  ==============================================
policy deny list      reject   ``"Lorem"`` when listed
policy allow list     accept   ``"OK"`` when listed
shorter than minimum  reject   ``"Go"``
no letters            reject   ``"→"``, ``"12%"``
deny pattern table    reject   ``"https://x.io"``, ``"items-center"``
CSS class list        reject   ``"flex items-center"``
enough words          accept   ``"Enter your email"``
single word           accept   ``"Welcome"`` (capitalized)
otherwise             reject   ``"submit"``
====================  =======  ==============================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Pattern, Tuple

DEFAULT_DENY_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("url", re.compile(r"^(?:[a-z][a-z0-9+.-]*:)?//|^(?:mailto|tel|data|javascript):", re.IGNORECASE)),
    ("path", re.compile(r"^\.{0,2}/[\w/.\-\[\]@:]*$")),
    ("email", re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")),
    ("hex-color", re.compile(r"^#[0-9a-fA-F]{3,8}$")),
    ("css-function", re.compile(r"^(?:rgba?|hsla?|var|calc|url)\(", re.IGNORECASE)),
    ("number-with-unit", re.compile(r"^-?\d+(?:\.\d+)?(?:px|rem|em|%|vh|vw|ms|s|[KkMm])?$")),
    ("screaming-case", re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+$|^[A-Z]{2,}[0-9]*$")),
    ("snake-case", re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)+$")),
    ("kebab-case", re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)+$")),
    ("camel-case", re.compile(r"^[a-z]+[A-Z][A-Za-z0-9]*$")),
    ("pascal-identifier", re.compile(r"^[A-Z][a-z0-9]+(?:[A-Z][a-z0-9]*)+$")),
    ("dotted-key", re.compile(r"^[A-Za-z_$][\w$-]*(?:\.[A-Za-z_$][\w$-]*)+$")),
    ("html-entity", re.compile(r"^&(?:#\d+|[a-zA-Z]+);$")),
    ("property-value", re.compile(r"^[\w-]+:[\w-]+$")),
    ("placeholder", re.compile(r"^\{\{?[^{}]*\}\}?$")),
    ("file-name", re.compile(r"^[\w.-]+\.(?:png|jpe?g|svg|gif|webp|ico|json|m?js|tsx?|jsx|css|html?|pdf|csv)$", re.IGNORECASE)),
    ("mime-type", re.compile(r"^[a-z]+/[a-z0-9.+-]+$")),
)

VARIABLE_MIN_LENGTH = 5

# Lone words that variables hold as enum-like values rather than copy.
TECHNICAL_WORDS: FrozenSet[str] = frozenset(
    {
        "Primary",
        "Secondary",
        "Default",
        "None",
        "True",
        "False",
        "Null",
        "Undefined",
        "Material",
        "Outlined",
        "Contained",
        "Text",
        "Small",
        "Medium",
        "Large",
        "Left",
        "Right",
        "Center",
        "Top",
        "Bottom",
        "Start",
        "End",
        "Vertical",
        "Horizontal",
        "Enabled",
        "Disabled",
        "Active",
        "Inactive",
        "Loading",
        "Success",
        "Error",
        "Warning",
        "Info",
        "GET",
        "POST",
        "PUT",
        "PATCH",
        "DELETE",
    }
)

CSS_UTILITY_WORDS: FrozenSet[str] = frozenset(
    {
        "flex",
        "grid",
        "block",
        "inline",
        "hidden",
        "contents",
        "relative",
        "absolute",
        "fixed",
        "sticky",
        "static",
        "container",
        "truncate",
        "italic",
        "underline",
        "uppercase",
        "lowercase",
        "capitalize",
        "rounded",
        "border",
        "shadow",
        "transition",
        "grow",
        "shrink",
        "visible",
        "invisible",
        "active",
        "disabled",
        "btn",
        "row",
        "col",
    }
)

CSS_TOKEN = re.compile(r"^[a-z0-9!:/\[\]._#%()&>-]+$")
CSS_MARKERS = re.compile(r"[:/\[\]]|\d")
WORD_TOKEN = re.compile(r"^[\"'(¿¡«]*[^\W\d_]+(?:['’\-][^\W\d_]+)*[\"'»).,!?:;…]*$")
SINGLE_WORD = re.compile(r"^[^\W\d_]+(?:['’][^\W\d_]+)?[.!?…]*$")


@dataclass(frozen=True)
class NaturalLanguagePolicy:
    """Tunable allow/deny policy for :func:`looks_like_natural_language`."""

    min_length: int = 3
    min_words: int = 2
    allow_single_words: bool = True
    allow: FrozenSet[str] = frozenset()
    deny: FrozenSet[str] = frozenset()
    deny_patterns: Tuple[Tuple[str, Pattern[str]], ...] = DEFAULT_DENY_PATTERNS
    technical_words: FrozenSet[str] = frozenset()
    css_utility_words: FrozenSet[str] = CSS_UTILITY_WORDS
    extra_deny_patterns: Tuple[Pattern[str], ...] = field(default_factory=tuple)

    def with_overrides(
        self,
        *,
        min_length: int | None = None,
        min_words: int | None = None,
        allow_single_words: bool | None = None,
        allow: Iterable[str] = (),
        deny: Iterable[str] = (),
        deny_patterns: Iterable[str] = (),
    ) -> "NaturalLanguagePolicy":
        """Return a copy extended with per-project overrides."""

        return replace(
            self,
            min_length=self.min_length if min_length is None else int(min_length),
            min_words=self.min_words if min_words is None else int(min_words),
            allow_single_words=self.allow_single_words if allow_single_words is None else bool(allow_single_words),
            allow=self.allow | frozenset(allow),
            deny=self.deny | frozenset(deny),
            extra_deny_patterns=self.extra_deny_patterns + tuple(re.compile(p) for p in deny_patterns),
        )

    def for_variables(self) -> "NaturalLanguagePolicy":
        """Stricter copy for string variables: longer minimum, technical words rejected."""

        return replace(
            self,
            min_length=max(self.min_length, VARIABLE_MIN_LENGTH),
            technical_words=self.technical_words | TECHNICAL_WORDS,
        )


DEFAULT_POLICY = NaturalLanguagePolicy()


def normalize_text(text: str) -> str:
    return " ".join(text.split())


def is_css_class_list(text: str, policy: NaturalLanguagePolicy = DEFAULT_POLICY) -> bool:
    """True for strings such as ``"flex items-center md:px-4"``."""

    tokens = text.split()
    if not tokens or not all(CSS_TOKEN.match(token) for token in tokens):
        return False
    strong = sum(1 for token in tokens if CSS_MARKERS.search(token) or token in policy.css_utility_words)
    hyphenated = sum(1 for token in tokens if "-" in token)
    # Hyphens alone mark a class list only when every token carries one.
    if strong == 0 and hyphenated < len(tokens):
        return False
    css_like = sum(1 for token in tokens if "-" in token or CSS_MARKERS.search(token) or token in policy.css_utility_words)
    return css_like * 2 >= len(tokens)


def _is_caseless_script(text: str) -> bool:
    # CJK and similar scripts carry no case and rarely use spaces.
    return any(ch.isalpha() and not ch.isascii() and ch.upper() == ch.lower() for ch in text)


def explain_natural_language(text: str, policy: NaturalLanguagePolicy = DEFAULT_POLICY) -> Tuple[bool, str]:
    """Return ``(verdict, reason)`` for ``text`` under ``policy``."""

    normalized = normalize_text(text)
    if normalized in policy.deny:
        return False, "deny-list"
    if normalized in policy.allow:
        return True, "allow-list"
    if len(normalized) < policy.min_length:
        return False, "too-short"
    if not any(ch.isalpha() for ch in normalized):
        return False, "no-letters"
    for name, pattern in policy.deny_patterns:
        if pattern.search(normalized):
            return False, name
    for pattern in policy.extra_deny_patterns:
        if pattern.search(normalized):
            return False, "custom-pattern"
    if is_css_class_list(normalized, policy):
        return False, "css-class-list"

    tokens = normalized.split(" ")
    words = [token for token in tokens if WORD_TOKEN.match(token)]
    if len(tokens) >= 2:
        if len(words) >= policy.min_words and len(words) * 2 >= len(tokens):
            return True, "phrase"
        return False, "not-enough-words"

    if _is_caseless_script(normalized):
        return True, "caseless-script"
    if not policy.allow_single_words:
        return False, "single-word"
    if normalized.rstrip(".!?…") in policy.technical_words:
        return False, "technical-word"
    if SINGLE_WORD.match(normalized) and normalized[0].isupper():
        return True, "capitalized-word"
    return False, "identifier-like"


def looks_like_natural_language(text: str, policy: NaturalLanguagePolicy = DEFAULT_POLICY) -> bool:
    """Heuristic: does ``text`` read like something a user would see?"""

    verdict, _ = explain_natural_language(text, policy)
    return verdict
