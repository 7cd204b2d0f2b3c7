from builders import arr, call, declare, findings_for, func, obj, source

from i18nscan.config import DataStructureConfig, ScanConfig
from i18nscan.dispatcher import scan
from i18nscan.rules.data_structure import is_language_selector, looks_like_translation_key


def extracted(src, config=None):
    return findings_for(scan(src, config), "data-structure")


def nav_items():
    return declare("items", arr(obj(label="home", href="/"), obj(label="about", href="/about")))


def test_property_names_in_translation_scope():
    src = source(declare("t", call("useTranslations", "nav")), nav_items())

    findings = extracted(src)

    assert [finding.key for finding in findings] == ["nav.home", "nav.about"]
    assert {finding.namespace for finding in findings} == {"nav"}


def test_property_names_require_translation_scope():
    assert extracted(source(nav_items())) == []


def test_translation_scope_can_be_disabled():
    config = ScanConfig(data_structure=DataStructureConfig(require_translation_scope=False))

    findings = extracted(source(nav_items()), config)

    assert [finding.key for finding in findings] == ["home", "about"]


def test_function_with_translator_parameter_opens_scope():
    src = source(func(["t"], declare("links", arr(obj(title="menu.settings", icon="gear")))))

    assert [finding.key for finding in extracted(src)] == ["menu.settings"]


def test_locale_dictionary_is_flattened_per_locale():
    src = source(
        declare(
            "messages",
            obj(
                en=obj(title="Hello", nav=obj(home="Home")),
                tr=obj(title="Merhaba", nav=obj(home="Ana sayfa")),
            ),
        )
    )

    findings = extracted(src)

    assert [(finding.locale, finding.key, finding.default_value) for finding in findings] == [
        ("en", "title", "Hello"),
        ("en", "nav.home", "Home"),
        ("tr", "title", "Merhaba"),
        ("tr", "nav.home", "Ana sayfa"),
    ]


def test_locale_dictionary_with_string_leaves_uses_owner_name():
    src = source(declare("greeting", obj({"en-US": "Hello", "pt_BR": "Olá"})))

    findings = extracted(src)

    assert [(finding.locale, finding.key) for finding in findings] == [("en-US", "greeting"), ("pt_BR", "greeting")]


def test_dotted_catalog():
    src = source(declare("catalog", obj({"auth.login": "Log in", "auth.logout": "Log out"})))

    findings = extracted(src)

    assert [(finding.key, finding.default_value) for finding in findings] == [
        ("auth.login", "Log in"),
        ("auth.logout", "Log out"),
    ]


def test_language_selector_is_skipped():
    languages = arr(obj(value="en", label="English"), obj(value="tr", label="Türkçe"))
    src = source(declare("t", call("useTranslations", "settings")), declare("languages", languages))

    assert extracted(src) == []
    assert is_language_selector(source(languages).tree.get_all("body")[0])


def test_depth_limit():
    nested = obj(section=obj(group=obj(label="deep.key")))
    config = ScanConfig(
        data_structure=DataStructureConfig(require_translation_scope=False, max_depth=1),
    )

    assert extracted(source(declare("config", nested)), config) == []
    assert len(extracted(source(declare("config", nested)), ScanConfig(data_structure=DataStructureConfig(require_translation_scope=False)))) == 1


def test_disabled():
    config = ScanConfig(data_structure=DataStructureConfig(enabled=False))

    assert extracted(source(declare("catalog", obj({"auth.login": "Log in"}))), config) == []


def test_translation_key_filter():
    assert looks_like_translation_key("nav.home")
    assert not looks_like_translation_key("https://example.com")
    assert not looks_like_translation_key("/about")
    assert not looks_like_translation_key("#fff")
    assert not looks_like_translation_key("123")
    assert not looks_like_translation_key("x")
