"""
FlagQuest - Catalog Tests
"""

import pytest

from src.engine.base import Continent
from src.engine.catalog import COUNTRIES, by_continent, find


class TestCountries:
    """The built-in catalog table."""

    def test_size(self):
        assert len(COUNTRIES) == 29

    def test_duplicate_row_kept(self):
        assert [c.id for c in COUNTRIES].count("eg") == 2

    @pytest.mark.parametrize("continent", list(Continent))
    def test_every_continent_has_rows(self, continent):
        assert by_continent(continent)

    def test_facts_present(self):
        assert all(c.fact for c in COUNTRIES)


class TestLookup:
    """Tests for by_continent() and find()."""

    def test_by_continent_keeps_order(self, small_catalog):
        assert [c.id for c in by_continent(Continent.ASIA, small_catalog)] == ["jp", "in"]

    def test_by_continent_empty(self, small_catalog):
        assert by_continent(Continent.OCEANIA, small_catalog) == ()

    def test_find(self, small_catalog):
        assert find("ke", small_catalog).name == "Kenya"

    def test_find_missing(self, small_catalog):
        assert find("zz", small_catalog) is None

    def test_find_first_of_duplicates(self):
        assert find("eg") is COUNTRIES[[c.id for c in COUNTRIES].index("eg")]
