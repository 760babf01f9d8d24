import pytest

from spantrans.language_codes import (
    LanguagePair,
    extract_base_language,
    get_language_name,
    languages_match,
    normalize_language_code,
)


def test_base_form_strips_region():
    assert extract_base_language("EN-US") == "EN"
    assert extract_base_language("pt-BR") == "PT"
    assert extract_base_language("DE") == "DE"


def test_exact_and_base_matching():
    assert languages_match("EN-US", "EN-GB")
    assert languages_match("de", "DE")
    assert not languages_match("EN-US", "EN-GB", strict=True)
    assert not languages_match("DE", "EN")


def test_normalize_language_code():
    assert normalize_language_code("zh_cn") == "ZH-CN"
    assert get_language_name("en-us") == "English (American)"


def test_other_language():
    pair = LanguagePair("DE", "EN-US")

    assert pair.other_language("DE") == "EN-US"
    assert pair.other_language("DE-AT") == "EN-US"
    assert pair.other_language("EN") == "DE"
    assert pair.other_language("IT") == "DE"


def test_pair_languages_must_differ():
    with pytest.raises(ValueError):
        LanguagePair("DE", "DE")


def test_pair_from_config_normalizes():
    assert LanguagePair.from_config({"first": "de", "second": "en-us"}) == LanguagePair("DE", "EN-US")


def test_pair_to_dict_names_both_languages():
    assert LanguagePair("DE", "EN-US").to_dict() == {
        "first": {"code": "DE", "name": "German"},
        "second": {"code": "EN-US", "name": "English (American)"},
    }
