import asyncio

import pytest

from recipe_utils.ingredients import (
    CatalogEntry,
    CatalogSnapshot,
    DecisionTracker,
    IngredientMatcher,
    InMemoryDecisionSink,
    MatchMethod,
    RecipeContext,
    find_partial_matches,
    load_default_rules,
    match_catalog_name,
    strip_descriptors,
)


@pytest.fixture
def sink():
    return InMemoryDecisionSink()


@pytest.fixture
def matcher(sink):
    return IngredientMatcher(tracker=DecisionTracker(sink))


@pytest.mark.parametrize(
    "name, expected_removed, expected_name",
    [
        ("fresh basil", ["fresh"], "basil"),
        ("large red onion", ["large", "red"], "onion"),
        ("extra-virgin olive oil", ["extra-virgin"], "olive oil"),
        ("basil", [], "basil"),
        # A lone descriptor is not followed by anything, so it stays
        ("dark", [], "dark"),
    ],
)
def test_strip_descriptors(name, expected_removed, expected_name):
    simplified, removed = strip_descriptors(name, load_default_rules())
    assert simplified == expected_name
    assert removed == expected_removed


def test_find_partial_matches(catalog):
    names = [entry.name for entry in find_partial_matches("cabbage slaw", catalog)]
    assert names == ["cabbage"]
    assert find_partial_matches("", catalog) == []


@pytest.mark.parametrize("name", ["sugar", "Sugar", "  sugar "])
def test_exact_match(catalog, name):
    result = match_catalog_name(name, catalog)
    assert result.ingredient_id == 1
    assert result.match_confidence == 1.0
    assert result.match_method == MatchMethod.EXACT
    assert result.match_notes is None
    assert result.needs_review is False


def test_exact_match_on_plural(catalog):
    result = match_catalog_name("onions", catalog)
    assert result.ingredient_id == 12
    assert result.match_method == MatchMethod.EXACT


def test_match_after_removing_descriptors(catalog):
    result = match_catalog_name("fresh basil", catalog)
    assert result.ingredient_id == 2
    assert result.match_confidence == 0.8
    assert result.match_method == MatchMethod.FUZZY
    assert result.needs_review is True
    assert "fresh" in result.match_notes


def test_single_partial_match(catalog):
    result = match_catalog_name("cabbage slaw", catalog)
    assert result.ingredient_id == 5
    assert result.match_confidence == 0.6
    assert result.match_method == MatchMethod.PARTIAL
    assert result.needs_review is True


def test_multiple_partial_matches_resolve_to_generic(catalog):
    result = match_catalog_name("all-purpose flour blend", catalog)
    assert result.ingredient_id == 3
    assert result.match_confidence == 0.7
    assert result.match_method == MatchMethod.FUZZY
    assert result.needs_review is False


def test_ambiguous_partial_matches_stay_unresolved():
    catalog = CatalogSnapshot(
        [
            CatalogEntry(1, "chili"),
            CatalogEntry(2, "capsicum"),
            CatalogEntry(3, "spice"),
            CatalogEntry(4, "chili pepper", None, 1),
            CatalogEntry(5, "bell pepper", None, 2),
            CatalogEntry(6, "black pepper", None, 3),
        ]
    )
    result = match_catalog_name("pepper", catalog)
    assert result.ingredient_id is None
    assert result.match_confidence == 0.3
    assert result.match_method == MatchMethod.NONE
    assert result.needs_review is True
    assert result.match_notes == (
        "Multiple possible matches: chili pepper, bell pepper, black pepper"
    )


@pytest.mark.parametrize("name", ["unobtainium", ""])
def test_no_match(catalog, name):
    result = match_catalog_name(name, catalog)
    assert result.ingredient_id is None
    assert result.match_confidence == 0.0
    assert result.match_method == MatchMethod.NONE
    assert result.needs_review is True


def test_empty_catalog_matches_nothing():
    result = match_catalog_name("sugar", CatalogSnapshot([]))
    assert result.ingredient_id is None
    assert result.match_method == MatchMethod.NONE


def test_catalog_find_generic(catalog):
    assert catalog.find_generic("flour").id == 3
    assert catalog.find_generic("cabbages").id == 5
    # Specific types are never returned as the generic parent
    assert catalog.find_generic("all-purpose flour") is None


def test_catalog_first_entry_wins_on_duplicate_names():
    catalog = CatalogSnapshot([CatalogEntry(1, "lime"), CatalogEntry(2, "Lime")])
    assert catalog.find_by_name("LIME").id == 1
    assert len(catalog) == 2


def test_matcher_matches_plain_line(matcher, catalog, sink):
    parsed = matcher.parse("3 tablespoons sugar")
    result = asyncio.run(matcher.match(parsed, catalog))
    assert result.ingredient_id == 1
    assert result.match_confidence == 1.0
    assert result.match_method == MatchMethod.EXACT
    assert sink.decisions == []


def test_matcher_hyphenated_mixed_number(matcher, catalog):
    parsed = matcher.parse("1-1/2 cups flour")
    result = asyncio.run(matcher.match(parsed, catalog))
    assert parsed.quantity_amount == 1.5
    assert result.ingredient_id == 3
    assert result.match_method == MatchMethod.EXACT
    assert result.needs_review is False


def test_matcher_without_ingredient_name(matcher, catalog):
    result = asyncio.run(matcher.match(matcher.parse("2 cups"), catalog))
    assert result.ingredient_id is None
    assert result.match_method == MatchMethod.NONE
    assert result.match_notes == "No ingredient name extracted from text"
    assert result.needs_review is True


def test_matcher_tracks_or_pattern_decisions(matcher, catalog, sink):
    parsed = matcher.parse("1 head red or green cabbage")
    context = RecipeContext(recipe_id=7, recipe_title="Slaw")
    result = asyncio.run(matcher.match(parsed, catalog, context))

    assert result.match_method == MatchMethod.FUZZY
    assert len(sink.decisions) == 1
    decision = sink.decisions[0]
    assert decision.original_text == "1 head red or green cabbage"
    assert decision.recipe_id == 7
    assert decision.recipe_title == "Slaw"
    assert decision.detected_as_equivalent is True


def test_matcher_survives_failing_tracker(mocker, catalog):
    tracker = DecisionTracker(InMemoryDecisionSink())
    mocker.patch.object(tracker.sink, "write", side_effect=RuntimeError("disk full"))
    matcher = IngredientMatcher(tracker=tracker)

    parsed = matcher.parse("butter or margarine")
    result = asyncio.run(matcher.match(parsed, catalog))

    assert result.ingredient_id == 10
    assert tracker.sink.write.call_count == 1
