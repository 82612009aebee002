import pytest

from recipe_parser.parsing import UnitError, parse
from recipe_parser.services.unit_conversion import (
    auto_select_unit,
    convert_recipe_units,
    convert_unit,
    estimate_density,
    format_qty_cook,
)


def test_same_type():
    result = convert_unit(1, "kg", "g")
    assert result.qty == 1000
    assert result.unit == "g"
    assert result.confidence == "high"
    assert result.is_approx is False


def test_cross_type_with_density():
    result = convert_unit(1, "cup", "g", ingredient_name="all purpose flour")
    assert abs(result.qty - 236.588 * 0.593) < 0.01
    assert result.confidence == "medium"
    assert result.is_approx is True


def test_cross_type_without_density():
    result = convert_unit(1, "cup", "g", ingredient_name="gravel")
    assert result.confidence == "low"
    assert result.qty == 1

    forced = convert_unit(1, "cup", "g", ingredient_name="gravel", allow_cross_type=True)
    assert forced.confidence == "none"
    assert abs(forced.qty - 236.588) < 0.01


def test_density_override():
    result = convert_unit(100, "g", "ml", override_density=0.5)
    assert abs(result.qty - 200) < 0.01
    assert result.confidence == "high"
    assert result.is_approx is False


def test_count_units():
    assert convert_unit(2, "cloves", "clove").qty == 2
    assert convert_unit(1, "clove", "g").note == "Cannot convert count to measurement"
    assert convert_unit(1, "can", "slice").confidence == "low"


def test_unknown_unit():
    result = convert_unit(1, "blorp", "g")
    assert result.note == "Unknown unit"


def test_estimate_density():
    assert estimate_density("Brown Sugar") == (0.93, "medium")
    # longest key wins over "sugar"
    assert estimate_density("dark brown sugar") == (0.93, "low")
    assert estimate_density("whole milk") == (1.03, "low")
    assert estimate_density("gravel") == (1.0, "none")


def test_auto_select_unit():
    assert auto_select_unit(2, "cup", "metric") == "ml"
    assert auto_select_unit(5, "cup", "metric") == "l"
    assert auto_select_unit(500, "g", "us_customary") == "lb"
    assert auto_select_unit(100, "g", "us_customary") == "oz"
    assert auto_select_unit(10, "ml", "us_customary") == "tsp"
    assert auto_select_unit(3, "clove", "metric") == "clove"


def test_format_qty_cook():
    assert format_qty_cook(2.4644) == 2.46
    assert format_qty_cook(59.147) == 59.1
    assert format_qty_cook(473.176) == 473.0


def test_convert_recipe_to_metric(pancakes):
    metric = convert_recipe_units(pancakes, "metric")
    flour = metric.ingredients[0]
    assert flour.unit == "ml"
    assert flour.quantity.value == 473.0
    assert metric.ingredients[2].unit is None
    assert metric.ingredients[3].quantity.value == 2.46
    assert metric.subrecipes[0].ingredients[1].unit == "ml"
    # Original untouched
    assert pancakes.ingredients[0].unit == "cup"


def test_convert_recipe_to_us():
    recipe = parse("# A\n## Ingredients\n- 500 g flour\n- 2 cloves garlic\n- 1 pinch salt\n")
    us = convert_recipe_units(recipe, "us_customary")
    assert us.ingredients[0].unit == "lb"
    assert us.ingredients[0].quantity.value == 1.1
    assert us.ingredients[1].unit == "clove"
    assert us.ingredients[2].unit == "pinch"


def test_convert_recipe_unknown_system(pancakes):
    with pytest.raises(UnitError):
        convert_recipe_units(pancakes, "imperial")
