import pytest

from recipe_utils.ingredients.models import ConfidenceScores
from recipe_utils.ingredients.number_utils import _is_fraction, _parse_fraction
from recipe_utils.ingredients.parsing import (
    clean_ingredient_name,
    extract_preparation,
    parse_ingredient_string,
    parse_quantity,
    parse_unit,
)


@pytest.mark.parametrize(
    "input_text, expected_text",
    [
        ("butter (1 stick)", "butter"),
        ("(about 3 cups) kale leaves", "kale leaves"),
        ("  flour,  sifted  ", "flour, sifted"),
        ("chicken thighs (bone-in) (skin on)", "chicken thighs"),
        ("1 (14.5 oz) can diced tomatoes", "1 can diced tomatoes"),
    ],
)
def test_clean_ingredient_name(input_text, expected_text):
    """Test ingredient name cleaning."""
    assert clean_ingredient_name(input_text) == expected_text


@pytest.mark.parametrize(
    "text, expected",
    [("1/2", True), ("½", True), ("¾", True), ("1/x", False), ("2", False)],
)
def test_is_fraction(text, expected):
    assert _is_fraction(text) is expected


def test_parse_fraction_zero_denominator():
    with pytest.raises(ZeroDivisionError):
        _parse_fraction("1/0")


@pytest.mark.parametrize(
    "input_text, expected_amt, expected_conf, expected_rest",
    [
        ("1 1/2 cups flour", 1.5, 0.95, "cups flour"),
        ("1/2 cup heavy cream", 0.5, 0.95, "cup heavy cream"),
        ("¾ cup water", 0.75, 0.95, "cup water"),
        ("1½ cups basmati rice", 1.5, 0.95, "cups basmati rice"),
        ("1 ½ ounces Jamaican rum", 1.5, 0.95, "ounces Jamaican rum"),
        ("1-1/2 cups flour", 1.5, 0.95, "cups flour"),
        ("1/2-1 cup sugar", 0.5, 0.95, "cup sugar"),
        ("½-1 cup sugar", 0.5, 0.95, "cup sugar"),
        ("1 1/2-2 cups flour", 1.5, 0.95, "cups flour"),
        ("1.5-2 cups milk", 1.5, 1.0, "cups milk"),
        ("2-3 cups baby spinach", 2.5, 0.8, "cups baby spinach"),
        ("2 to 3 dashes bitters", 2.5, 0.8, "dashes bitters"),
        ("3 tablespoons sugar", 3.0, 1.0, "tablespoons sugar"),
        ("2.5 ml water", 2.5, 1.0, "ml water"),
        (
            "4 lemons, peeled and peels reserved",
            4.0,
            1.0,
            "lemons, peeled and peels reserved",
        ),
        ("a few sprigs thyme", 3.0, 0.6, "sprigs thyme"),
        ("a couple of eggs", 2.0, 0.8, "eggs"),
        ("One large onion", 1.0, 0.9, "large onion"),
        ("three cloves garlic", 3.0, 0.9, "cloves garlic"),
        ("salt", None, 0.0, "salt"),
        ("onions", None, 0.0, "onions"),
        ("", None, 0.0, ""),
    ],
)
def test_parse_quantity(input_text, expected_amt, expected_conf, expected_rest):
    amount, confidence, rest = parse_quantity(input_text)
    assert amount == expected_amt
    assert confidence == expected_conf
    assert rest == expected_rest


def test_parse_quantity_thirds():
    amount, confidence, rest = parse_quantity("⅓ cup milk")
    assert amount == pytest.approx(1 / 3)
    assert confidence == 0.95
    assert rest == "cup milk"


def test_parse_quantity_malformed_fraction_is_not_a_quantity():
    amount, confidence, rest = parse_quantity("1/0 cup milk")
    assert amount is None
    assert confidence == 0.0
    assert rest == "1/0 cup milk"


@pytest.mark.parametrize(
    "input_text, expected_unit, expected_conf, expected_rest",
    [
        ("cups flour", "cup", 1.0, "flour"),
        ("Cups Flour", "cup", 1.0, "Flour"),
        ("tablespoons sugar", "tablespoon", 1.0, "sugar"),
        ("fluid ounces milk", "fluid ounce", 1.0, "milk"),
        ("ounces Jamaican rum", "ounce", 1.0, "Jamaican rum"),
        ("cloves garlic", "clove", 1.0, "garlic"),
        ("to taste", "to taste", 1.0, ""),
        ("tbsp. sugar", "tablespoon", 0.9, "sugar"),
        ("TBSP olive oil", "tablespoon", 0.9, "olive oil"),
        ("oz chocolate", "ounce", 0.9, "chocolate"),
        ("fl oz cream", "fluid ounce", 0.9, "cream"),
        ("lbs ground beef", "pound", 0.9, "ground beef"),
        ("g butter", "gram", 0.9, "butter"),
        ("l water", "liter", 0.9, "water"),
        ("g, butter", "gram", 0.9, ", butter"),
        ("garlic cloves", None, 0.0, "garlic cloves"),
        ("lemons", None, 0.0, "lemons"),
        ("lg eggs", None, 0.0, "lg eggs"),
        ("canola oil", None, 0.0, "canola oil"),
        ("", None, 0.0, ""),
    ],
)
def test_parse_unit(input_text, expected_unit, expected_conf, expected_rest):
    unit, confidence, rest = parse_unit(input_text)
    assert unit == expected_unit
    assert confidence == expected_conf
    assert rest == expected_rest


@pytest.mark.parametrize(
    "input_text, expected_terms, expected_name",
    [
        ("onion, diced", ["diced"], "onion"),
        ("large onion, thinly sliced", ["thinly sliced"], "large onion"),
        ("butter, room temperature", ["room temperature"], "butter"),
        ("chopped fresh parsley", ["chopped", "fresh"], "parsley"),
        ("carrots, peeled and diced", ["peeled", "diced"], "carrots"),
        ("of salt", [], "salt"),
        ("basil", [], "basil"),
    ],
)
def test_extract_preparation(input_text, expected_terms, expected_name):
    terms, name = extract_preparation(input_text)
    assert terms == expected_terms
    assert name == expected_name


def test_extract_preparation_prefers_longest_term():
    terms, name = extract_preparation("walnuts, coarsely chopped")
    assert terms == ["coarsely chopped"]
    assert name == "walnuts"


@pytest.mark.parametrize(
    "line, amount, unit, preparation, name",
    [
        ("1 1/2 cups flour", 1.5, "cup", None, "flour"),
        ("¾ cup water", 0.75, "cup", None, "water"),
        ("2-3 cups baby spinach", 2.5, "cup", None, "baby spinach"),
        ("1-1/2 cups flour", 1.5, "cup", None, "flour"),
        ("1/2-1 cup sugar", 0.5, "cup", None, "sugar"),
        ("½-1 cup sugar", 0.5, "cup", None, "sugar"),
        ("1 1/2-2 cups flour", 1.5, "cup", None, "flour"),
        ("1.5-2 cups milk", 1.5, "cup", None, "milk"),
        ("3 tablespoons sugar", 3.0, "tablespoon", None, "sugar"),
        ("2 tbsp. olive oil", 2.0, "tablespoon", None, "olive oil"),
        ("1 (14.5 oz) can diced tomatoes", 1.0, "can", "diced", "tomatoes"),
        ("One large onion, thinly sliced", 1.0, None, "thinly sliced", "large onion"),
        ("1 cup butter, softened", 1.0, "cup", "softened", "butter"),
        ("Salt", None, None, None, "Salt"),
        ("red or green cabbage", None, None, None, "red or green cabbage"),
        ("Fresno chiles or jalapeños", None, None, None, "Fresno chiles or jalapeños"),
    ],
)
def test_parse_ingredient_string(line, amount, unit, preparation, name):
    parsed = parse_ingredient_string(line)
    assert parsed.original_text == line
    assert parsed.quantity_amount == amount
    assert parsed.quantity_unit == unit
    assert parsed.preparation == preparation
    assert parsed.ingredient_name == name


def test_parse_ingredient_string_confidences():
    parsed = parse_ingredient_string("1 1/2 cups flour")
    assert parsed.confidence_scores == ConfidenceScores(
        quantity=0.95, unit=1.0, ingredient=0.5
    )

    parsed = parse_ingredient_string("2 tbsp. olive oil")
    assert parsed.confidence_scores.quantity == 1.0
    assert parsed.confidence_scores.unit == 0.9


@pytest.mark.parametrize(
    "line",
    [
        "  2 cups  flour ",
        "1 (14.5 oz) can diced tomatoes",
        "Salt and pepper, to taste",
        "",
        "()",
    ],
)
def test_original_text_is_kept_verbatim(line):
    assert parse_ingredient_string(line).original_text == line


@pytest.mark.parametrize(
    "line",
    [
        "1 1/2 cups flour",
        "a few sprigs thyme",
        "2-3 cups baby spinach",
        "garlic",
        "",
        "3 lbs",
    ],
)
def test_confidence_scores_are_bounded(line):
    scores = parse_ingredient_string(line).confidence_scores
    for score in (scores.quantity, scores.unit, scores.ingredient):
        assert 0.0 <= score <= 1.0


@pytest.mark.parametrize("line", ["", "()", "3 cups"])
def test_lines_without_a_name(line):
    parsed = parse_ingredient_string(line)
    assert parsed.ingredient_name is None
    assert parsed.confidence_scores.ingredient == 0.0
