import pytest

from recipe_utils.ingredients import CatalogEntry, CatalogSnapshot

CATALOG_ROWS = [
    CatalogEntry(1, "sugar"),
    CatalogEntry(2, "basil"),
    CatalogEntry(3, "flour"),
    CatalogEntry(4, "all-purpose flour", None, 3),
    CatalogEntry(5, "cabbage", "cabbages"),
    CatalogEntry(6, "red cabbage", None, 5),
    CatalogEntry(7, "green cabbage", None, 5),
    CatalogEntry(8, "fresno chile", "fresno chiles"),
    CatalogEntry(9, "jalapeño", "jalapeños"),
    CatalogEntry(10, "butter"),
    CatalogEntry(11, "margarine"),
    CatalogEntry(12, "onion", "onions"),
]


@pytest.fixture
def catalog_entries():
    return list(CATALOG_ROWS)


@pytest.fixture
def catalog(catalog_entries):
    return CatalogSnapshot(catalog_entries)
