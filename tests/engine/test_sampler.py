"""
FlagQuest - Question Sampler Tests
"""

import random
from collections import Counter

import pytest

from src.engine.base import Continent, Country
from src.engine.catalog import COUNTRIES
from src.engine.sampler import QuestionSampler


class TestSample:
    """Tests for QuestionSampler.sample()."""

    def test_returns_requested_count(self, small_catalog, rng):
        result = QuestionSampler.sample(5, catalog=small_catalog, rng=rng)
        assert len(result) == 5

    def test_count_capped_by_pool(self, small_catalog, rng):
        result = QuestionSampler.sample(50, catalog=small_catalog, rng=rng)
        assert len(result) == len(small_catalog)

    def test_negative_count_is_empty(self, small_catalog, rng):
        assert QuestionSampler.sample(-3, catalog=small_catalog, rng=rng) == ()

    def test_no_row_drawn_twice(self, small_catalog, rng):
        result = QuestionSampler.sample(8, catalog=small_catalog, rng=rng)
        assert len({c.id for c in result}) == 8

    def test_excludes_id(self, small_catalog):
        for seed in range(50):
            result = QuestionSampler.sample(
                7, exclude_id="jp", catalog=small_catalog, rng=random.Random(seed)
            )
            assert "jp" not in {c.id for c in result}
            assert len(result) == 7

    def test_continent_filter(self, small_catalog, rng):
        result = QuestionSampler.sample(
            10, continent=Continent.AFRICA, catalog=small_catalog, rng=rng
        )
        assert {c.id for c in result} == {"eg", "ke"}

    def test_continent_and_exclusion_combined(self, small_catalog, rng):
        result = QuestionSampler.sample(
            10, exclude_id="eg", continent=Continent.AFRICA, catalog=small_catalog, rng=rng
        )
        assert [c.id for c in result] == ["ke"]

    def test_duplicate_catalog_ids_stay_eligible(self, rng):
        """The bundled catalog lists Egypt twice; both rows can be drawn."""
        egypt_rows = [c for c in COUNTRIES if c.id == "eg"]
        assert len(egypt_rows) == 2
        result = QuestionSampler.sample(len(COUNTRIES), catalog=COUNTRIES, rng=rng)
        assert Counter(c.id for c in result)["eg"] == 2

    def test_exclusion_removes_every_duplicate(self, rng):
        result = QuestionSampler.sample(
            len(COUNTRIES), exclude_id="eg", catalog=COUNTRIES, rng=rng
        )
        assert "eg" not in {c.id for c in result}

    def test_reproducible_with_seed(self, small_catalog):
        a = QuestionSampler.sample(5, catalog=small_catalog, rng=random.Random(7))
        b = QuestionSampler.sample(5, catalog=small_catalog, rng=random.Random(7))
        assert a == b

    def test_default_rng(self, small_catalog):
        result = QuestionSampler.sample(3, catalog=small_catalog)
        assert len(result) == 3


class TestShuffle:
    """Tests for QuestionSampler.shuffle()."""

    def test_is_permutation(self, rng):
        items = list(range(10))
        result = QuestionSampler.shuffle(items, rng)
        assert sorted(result) == items

    def test_returns_new_list(self, rng):
        items = [1, 2, 3]
        result = QuestionSampler.shuffle(items, rng)
        assert result is not items
        assert items == [1, 2, 3]

    def test_every_position_reachable(self):
        """The last element lands in each of four slots over many shuffles."""
        rng = random.Random(99)
        positions = {QuestionSampler.shuffle(["a", "b", "c", "d"], rng).index("d") for _ in range(200)}
        assert positions == {0, 1, 2, 3}

    def test_empty_and_single(self, rng):
        assert QuestionSampler.shuffle([], rng) == []
        assert QuestionSampler.shuffle(["x"], rng) == ["x"]


class TestBuildOptions:
    """Tests for QuestionSampler.build_options()."""

    def test_four_options_with_correct_answer(self, small_catalog, rng):
        correct = small_catalog[0]
        options = QuestionSampler.build_options(correct, catalog=small_catalog, rng=rng)
        assert len(options) == 4
        assert correct in options

    def test_distractors_never_share_correct_id(self, small_catalog):
        correct = small_catalog[2]
        for seed in range(50):
            options = QuestionSampler.build_options(
                correct, catalog=small_catalog, rng=random.Random(seed)
            )
            ids = [c.id for c in options]
            assert ids.count(correct.id) == 1
            assert len(set(ids)) == 4

    def test_continent_scoped_distractors(self, small_catalog, rng):
        correct = small_catalog[0]
        options = QuestionSampler.build_options(
            correct, Continent.EUROPE, catalog=small_catalog, rng=rng
        )
        assert {c.id for c in options} == {"es", "fr"}

    def test_correct_position_varies(self, small_catalog):
        rng = random.Random(3)
        correct = small_catalog[4]
        positions = {
            QuestionSampler.build_options(correct, catalog=small_catalog, rng=rng).index(correct)
            for _ in range(200)
        }
        assert positions == {0, 1, 2, 3}

    def test_tiny_pool_yields_fewer_options(self, rng):
        solo = Country("vu", "Vanuatu", Continent.OCEANIA, "Fact.", 3)
        options = QuestionSampler.build_options(solo, catalog=(solo,), rng=rng)
        assert options == (solo,)
