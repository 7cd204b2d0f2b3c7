"""Scanner configuration and its YAML loader."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pathspec
import yaml

from .heuristics import DEFAULT_POLICY, NaturalLanguagePolicy
from .severity import Severity
from .utils.fileio import read_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".i18nscan.yaml"

DEFAULT_UI_FEEDBACK_FUNCTIONS = [
    "toast",
    "toast.*",
    "alert",
    "window.alert",
    "confirm",
    "window.confirm",
    "notify",
    "enqueueSnackbar",
]
DEFAULT_TRANSLATION_FUNCTIONS = ["t", "i18n.t", "i18next.t", "$t"]
DEFAULT_NAMESPACE_HOOKS = ["useTranslations", "useTranslation", "getTranslations"]
DEFAULT_TRANSLATOR_PATTERN = r"^t[A-Z]\w*$"
DEFAULT_JSX_ATTRIBUTES = ["title", "alt", "placeholder", "aria-label", "label"]
DEFAULT_IGNORED_JSX_ELEMENTS = ["script", "style", "code", "pre"]
DEFAULT_PROPERTY_NAMES = [
    "message",
    "label",
    "title",
    "text",
    "description",
    "placeholder",
    "tooltip",
    "translationKey",
    "i18nKey",
    "successMessage",
    "errorMessage",
    "warningMessage",
    "infoMessage",
]
DEFAULT_LOCALE_CODES = [
    "ar", "bg", "bn", "ca", "cs", "da", "de", "el", "en", "es", "et", "fa",
    "fi", "fr", "he", "hi", "hr", "hu", "id", "it", "ja", "ko", "lt", "lv",
    "ms", "nb", "nl", "no", "pl", "pt", "ro", "ru", "sk", "sl", "sr", "sv",
    "th", "tr", "uk", "vi", "zh",
]
RULE_SETTINGS = {"error", "warning", "info", "off"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ConfigError(ValueError):
    """Raised when a configuration file has an invalid shape."""


@dataclass
class NaturalLanguageConfig:
    min_words: Optional[int] = None
    allow_single_words: Optional[bool] = None
    allow: List[str] = field(default_factory=list)
    deny: List[str] = field(default_factory=list)
    deny_patterns: List[str] = field(default_factory=list)


@dataclass
class DataStructureConfig:
    enabled: bool = True
    require_translation_scope: bool = True
    max_depth: int = 3
    property_names: List[str] = field(default_factory=list)
    locale_codes: List[str] = field(default_factory=lambda: DEFAULT_LOCALE_CODES.copy())

    def all_property_names(self) -> frozenset:
        return frozenset(DEFAULT_PROPERTY_NAMES) | frozenset(self.property_names)


@dataclass
class ScanConfig:
    enabled_rules: Optional[List[str]] = None
    rules: Dict[str, str] = field(default_factory=dict)
    ignore_patterns: List[str] = field(default_factory=list)
    ui_feedback_function_names: List[str] = field(default_factory=lambda: DEFAULT_UI_FEEDBACK_FUNCTIONS.copy())
    translation_function_names: List[str] = field(default_factory=lambda: DEFAULT_TRANSLATION_FUNCTIONS.copy())
    namespace_hooks: List[str] = field(default_factory=lambda: DEFAULT_NAMESPACE_HOOKS.copy())
    translator_pattern: Optional[str] = DEFAULT_TRANSLATOR_PATTERN
    min_natural_language_length: int = DEFAULT_POLICY.min_length
    natural_language: NaturalLanguageConfig = field(default_factory=NaturalLanguageConfig)
    jsx_attributes: List[str] = field(default_factory=lambda: DEFAULT_JSX_ATTRIBUTES.copy())
    ignored_jsx_elements: List[str] = field(default_factory=lambda: DEFAULT_IGNORED_JSX_ELEMENTS.copy())
    data_structure: DataStructureConfig = field(default_factory=DataStructureConfig)
    max_workers: Optional[int] = None

    def natural_language_policy(self) -> NaturalLanguagePolicy:
        nl = self.natural_language
        return DEFAULT_POLICY.with_overrides(
            min_length=self.min_natural_language_length,
            min_words=nl.min_words,
            allow_single_words=nl.allow_single_words,
            allow=nl.allow,
            deny=nl.deny,
            deny_patterns=nl.deny_patterns,
        )

    def is_rule_enabled(self, rule_id: str) -> bool:
        if self.rules.get(rule_id) == "off":
            return False
        return self.enabled_rules is None or rule_id in self.enabled_rules

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        setting = self.rules.get(rule_id)
        if setting is None or setting == "off":
            return default
        return Severity(setting)

    def ignore_spec(self) -> pathspec.PathSpec:
        return pathspec.PathSpec.from_lines("gitwildmatch", self.ignore_patterns)

    def is_ignored(self, path: str) -> bool:
        if not self.ignore_patterns:
            return False
        return self.ignore_spec().match_file(path)


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalize_keys(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {_snake(str(key)): value for key, value in payload.items()}


def _string_list(payload: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = payload.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"'{key}' must be a list of strings")
    return [str(item) for item in value]


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return _normalize_keys(value)


def config_from_mapping(payload: Dict[str, Any]) -> ScanConfig:
    """Build a :class:`ScanConfig` from a parsed mapping (snake or camel case keys)."""

    if not isinstance(payload, dict):
        raise ConfigError("configuration root must be a mapping")
    payload = _normalize_keys(payload)
    config = ScanConfig()

    enabled = payload.get("enabled_rules")
    config.enabled_rules = _string_list(payload, "enabled_rules", []) if enabled is not None else None

    rules = payload.get("rules") or {}
    if not isinstance(rules, dict):
        raise ConfigError("'rules' must map rule ids to error/warning/info/off")
    for rule_id, setting in rules.items():
        # YAML 1.1 reads a bare `off` as False.
        normalized = "off" if setting is False else str(setting).lower()
        if normalized not in RULE_SETTINGS:
            raise ConfigError(f"rule '{rule_id}' has invalid setting '{setting}'")
        config.rules[str(rule_id)] = normalized

    config.ignore_patterns = _string_list(payload, "ignore_patterns", config.ignore_patterns)
    config.ui_feedback_function_names = _string_list(
        payload, "ui_feedback_function_names", config.ui_feedback_function_names
    )
    config.translation_function_names = _string_list(
        payload, "translation_function_names", config.translation_function_names
    )
    config.namespace_hooks = _string_list(payload, "namespace_hooks", config.namespace_hooks)
    if "translator_pattern" in payload:
        pattern = payload["translator_pattern"]
        config.translator_pattern = str(pattern) if pattern else None
    config.min_natural_language_length = int(
        payload.get("min_natural_language_length", config.min_natural_language_length)
    )
    config.jsx_attributes = _string_list(payload, "jsx_attributes", config.jsx_attributes)
    config.ignored_jsx_elements = _string_list(payload, "ignored_jsx_elements", config.ignored_jsx_elements)
    if payload.get("max_workers") is not None:
        config.max_workers = int(payload["max_workers"])

    nl = _section(payload, "natural_language")
    config.natural_language = NaturalLanguageConfig(
        min_words=nl.get("min_words"),
        allow_single_words=nl.get("allow_single_words"),
        allow=_string_list(nl, "allow", []),
        deny=_string_list(nl, "deny", []),
        deny_patterns=_string_list(nl, "deny_patterns", []),
    )

    ds = _section(payload, "data_structure")
    defaults = DataStructureConfig()
    config.data_structure = DataStructureConfig(
        enabled=bool(ds.get("enabled", defaults.enabled)),
        require_translation_scope=bool(ds.get("require_translation_scope", defaults.require_translation_scope)),
        max_depth=int(ds.get("max_depth", defaults.max_depth)),
        property_names=_string_list(ds, "property_names", []),
        locale_codes=_string_list(ds, "locale_codes", defaults.locale_codes),
    )
    return config


def load_config(path: str | None = None) -> ScanConfig:
    """Load configuration from YAML.

    Without ``path`` the default ``.i18nscan.yaml`` in the working directory is
    used when present; otherwise built-in defaults apply.
    """

    if path is None:
        default = Path(DEFAULT_CONFIG_FILENAME)
        if not default.exists():
            return ScanConfig()
        path = str(default)

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    try:
        payload = read_yaml_file(cfg_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc
    if payload is None:
        return ScanConfig()
    logger.debug("Loaded configuration from %s", cfg_path)
    return config_from_mapping(payload)
