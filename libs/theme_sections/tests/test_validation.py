"""Tests validation : config totale, avertissements, blocs, instances."""
import json

import pytest

from theme_sections import (
    ConfigValidationError, build_default_registry, build_instance, format_warnings, get_default_config,
    merge_with_defaults, parse_config_or_raise, validate_all_configs, validate_field,
    validate_partial_config, validate_section_config,
)
from theme_sections.sections import BUILTIN_SECTIONS
from theme_sections.sections.ghost_cards import ghost_cards_definition
from theme_sections.sections.ghost_grid import ghost_grid_definition
from theme_sections.sections.hero import hero_definition
from theme_sections.sections.image_with_text import image_with_text_definition


def _codes(result):
    return {w.path: w.code for w in result.warnings}


# ── Config complète ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_defaults_are_valid(definition):
    result = validate_section_config(definition, definition.create_config())
    assert result.ok
    assert result.config == definition.create_config()


@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_empty_config_completes_to_defaults(definition):
    result = validate_section_config(definition, {})
    assert result.config == definition.create_config()
    assert all(w.code == "missing" for w in result.warnings)


def test_none_treated_as_empty():
    assert validate_section_config(hero_definition, None).config == hero_definition.create_config()


@pytest.mark.parametrize("raw", ["hero", 12, ["a"]])
def test_non_mapping_raises(raw):
    with pytest.raises(ConfigValidationError):
        validate_section_config(hero_definition, raw)


def test_invalid_values_fall_back():
    result = validate_section_config(hero_definition, {
        "contentAlignment": "diagonal",
        "cardBorderRadius": 500,
        "backgroundColor": "rouge",
        "showButton": "oui",
        "placeholder": {"title": 42},
    })
    assert result.config["contentAlignment"] == "center"
    assert result.config["cardBorderRadius"] == 96
    assert result.config["backgroundColor"] == "#000000"
    assert result.config["showButton"] is True
    assert result.config["placeholder"]["title"] == ""
    codes = _codes(result)
    assert codes["contentAlignment"] == "invalid_option"
    assert codes["cardBorderRadius"] == "clamped"
    assert codes["backgroundColor"] == "invalid_color"
    assert codes["placeholder.title"] == "invalid_type"


def test_unknown_keys_preserved():
    result = validate_section_config(hero_definition, {"futureKey": {"a": 1}, "placeholder": {"extra": "x"}})
    assert result.config["futureKey"] == {"a": 1}
    assert result.config["placeholder"]["extra"] == "x"


def test_input_not_mutated():
    raw = {"cardBorderRadius": 500}
    validate_section_config(hero_definition, raw)
    assert raw == {"cardBorderRadius": 500}


def test_color_normalized():
    assert validate_section_config(hero_definition, {"backgroundColor": "#ABC"}).config["backgroundColor"] == "#aabbcc"


# ── Blocs ───────────────────────────────────────────────────────────────────

def test_blocks_truncated_to_limit():
    cards = [{"title": f"Carte {i}"} for i in range(4)]
    result = validate_section_config(ghost_grid_definition, {"cards": cards})
    assert [c["title"] for c in result.config["cards"]] == ["Carte 0", "Carte 1"]
    assert _codes(result)["cards"] == "limit_exceeded"


def test_block_items_completed():
    result = validate_section_config(ghost_cards_definition, {"cards": [{"title": "A"}, "pas un objet"]})
    assert result.config["cards"] == [{"title": "A", "description": "", "buttonText": "", "buttonHref": ""}]
    assert _codes(result)["cards[1]"] == "invalid_item"


def test_block_not_a_list():
    result = validate_section_config(ghost_cards_definition, {"cards": "x"})
    assert result.config["cards"] == []
    assert _codes(result)["cards"] == "invalid_type"


# ── Variantes ───────────────────────────────────────────────────────────────

def test_parse_config_or_raise():
    assert parse_config_or_raise(hero_definition, {})["heightMode"] == "regular"
    with pytest.raises(ConfigValidationError) as exc:
        parse_config_or_raise(hero_definition, {"heightMode": "huge"})
    assert exc.value.warnings[0].path == "heightMode"


def test_partial_only_provided_fields():
    result = validate_partial_config(hero_definition, {"heightMode": "expand", "gap": 3})
    assert result.config == {"heightMode": "expand", "gap": 3}
    assert result.ok


def test_validate_field():
    assert validate_field(hero_definition, "cardBorderRadius", -4).config == {"cardBorderRadius": 0}
    with pytest.raises(ConfigValidationError):
        validate_field(hero_definition, "nope", 1)


def test_merge_with_defaults_deep():
    merged = merge_with_defaults(hero_definition, {"placeholder": {"title": "Bonjour"}})
    assert merged["placeholder"]["title"] == "Bonjour"
    assert merged["placeholder"]["buttonText"] == ""


def test_get_default_config():
    assert get_default_config(hero_definition) == hero_definition.create_config()


def test_validate_all_configs_skips_unknown():
    registry = build_default_registry()
    results = validate_all_configs(registry, {"hero": {}, "inconnue": {}})
    assert list(results) == ["hero"]


def test_format_warnings():
    result = validate_section_config(hero_definition, {"heightMode": "huge", "showButton": 1})
    text = format_warnings([w for w in result.warnings if w.code != "missing"])
    assert text.startswith("heightMode: ")
    assert "; showButton: " in text


# ── Instances ───────────────────────────────────────────────────────────────

def test_hero_instance_tag_is_instance_id():
    instance = build_instance(hero_definition, "hero-defalt-1", {"placeholder": {"title": "Bonjour"}})
    assert instance.config["ghostPageTag"] == "hero-defalt-1"
    assert instance.config["placeholder"]["title"] == "Bonjour"
    assert instance.definition_id == "hero"


def test_ghost_cards_instance_tag_from_suffix():
    assert build_instance(ghost_cards_definition, "ghost-cards-2").config["ghostPageTag"] == "#ghost-card-2"
    assert build_instance(ghost_cards_definition, "ghostCards").config["ghostPageTag"] == "#ghost-card"
    custom = build_instance(ghost_cards_definition, "ghost-cards-2", {"ghostPageTag": "promo"})
    assert custom.config["ghostPageTag"] == "#promo"


def test_image_with_text_instance_tag():
    instance = build_instance(image_with_text_definition, "image-with-text-3")
    assert instance.config["ghostPageTag"] == "#image-with-text-3"


# ── Propriétés ──────────────────────────────────────────────────────────────

MESSY_CONFIG = {
    "paddingTop": -10,
    "paddingBottom": 999,
    "backgroundColor": "#ABC",
    "cards": [{"title": "Un"}, "pas une carte", {"title": 3}],
    "placeholder": {"title": ["x"]},
    "futureKey": {"nested": [1, 2]},
}


def test_padding_clamped_to_zero():
    result = validate_section_config(ghost_cards_definition, {"paddingTop": -10})
    assert result.config["paddingTop"] == 0
    assert _codes(result)["paddingTop"] == "clamped"


@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_validation_idempotent(definition):
    once = validate_section_config(definition, MESSY_CONFIG).config
    assert validate_section_config(definition, once).config == once


@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_validated_config_survives_json(definition):
    config = validate_section_config(definition, MESSY_CONFIG).config
    assert validate_section_config(definition, json.loads(json.dumps(config))).config == config
