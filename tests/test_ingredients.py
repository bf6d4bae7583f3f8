"""Tests for the ingredient line parser."""

import pytest

from app.services.ingredients import ParsedIngredient, parse_ingredient_line, parse_quantity


@pytest.mark.parametrize("line, expected", [
    ("2 cups basmati rice", ParsedIngredient("basmati rice", 2.0, "cup")),
    ("1 1/2 tbsp olive oil", ParsedIngredient("olive oil", 1.5, "tbsp")),
    ("1/2 cup milk", ParsedIngredient("milk", 0.5, "cup")),
    ("250g chicken (bone-in pieces)", ParsedIngredient("chicken (bone-in pieces)", 250.0, "g")),
    ("1.5 kg mutton", ParsedIngredient("mutton", 1.5, "kg")),
    ("3 cloves garlic, minced", ParsedIngredient("garlic, minced", 3.0, "clove")),
    ("2 lbs chicken breast", ParsedIngredient("chicken breast", 2.0, "lb")),
    ("1 pao qeema", ParsedIngredient("qeema", 1.0, "pao")),
    ("2 Cups rice", ParsedIngredient("rice", 2.0, "cup")),
])
def test_parses_quantity_measure_and_food(line, expected):
    assert parse_ingredient_line(line) == expected


def test_line_without_leading_number_is_one_unit():
    assert parse_ingredient_line("  Salt to taste ") == ParsedIngredient("Salt to taste", 1.0, "unit")


def test_number_without_known_unit_keeps_unit_measure():
    assert parse_ingredient_line("2 tomatoes") == ParsedIngredient("tomatoes", 2.0, "unit")


def test_unit_must_end_at_word_boundary():
    # "l" must not match the start of "lemons"
    assert parse_ingredient_line("2 lemons") == ParsedIngredient("lemons", 2.0, "unit")


def test_unit_later_in_line_is_used_and_removed_from_food():
    parsed = parse_ingredient_line("2 chicken thighs, about 200g")
    assert parsed.measure == "g"
    assert parsed.quantity == 2.0
    assert parsed.food == "chicken thighs, about"


def test_unit_in_parentheses_leaves_no_empty_brackets():
    parsed = parse_ingredient_line("3 eggs (150 grams)")
    assert parsed == ParsedIngredient("eggs", 3.0, "g")


def test_unit_followed_by_period():
    assert parse_ingredient_line("1 tbsp. olive oil") == ParsedIngredient("olive oil", 1.0, "tbsp")


def test_zero_or_unreadable_quantity_defaults_to_one():
    assert parse_ingredient_line("0 eggs").quantity == 1.0
    assert parse_ingredient_line("0/0 eggs").quantity == 1.0


def test_bare_number_keeps_original_text_as_food():
    assert parse_ingredient_line("2").food == "2"


def test_empty_line_never_raises():
    assert parse_ingredient_line("") == ParsedIngredient("", 1.0, "unit")
    assert parse_ingredient_line(None) == ParsedIngredient("", 1.0, "unit")


@pytest.mark.parametrize("token, value", [
    ("3", 3.0),
    ("0.25", 0.25),
    ("3/4", 0.75),
    ("2 1/4", 2.25),
    ("1/0", 1.0),
])
def test_parse_quantity(token, value):
    assert parse_quantity(token) == pytest.approx(value)
