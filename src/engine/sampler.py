"""
FlagQuest - Question Sampler

Draws question sequences and multiple-choice options from the catalog.
Sampling is uniform without replacement; option order uses an explicit
Fisher-Yates shuffle so the correct answer lands in each slot with equal
probability.

All methods are stateless class methods. Pass a seeded `random.Random`
for reproducible draws.
"""

import random
from typing import ClassVar, Sequence, TypeVar

from src.engine.base import Continent, Country
from src.engine.catalog import COUNTRIES

T = TypeVar("T")


class QuestionSampler:
    """Stateless sampler for questions and answer options."""

    OPTION_COUNT: ClassVar[int] = 4

    @classmethod
    def eligible(
        cls,
        exclude_id: str | None = None,
        continent: Continent | None = None,
        catalog: Sequence[Country] = COUNTRIES,
    ) -> list[Country]:
        """Catalog filtered by continent, then by id.

        Duplicate ids in the catalog stay independently eligible; only
        rows matching `exclude_id` are removed.
        """
        pool = list(catalog)
        if continent is not None:
            pool = [c for c in pool if c.continent == continent]
        if exclude_id:
            pool = [c for c in pool if c.id != exclude_id]
        return pool

    @classmethod
    def sample(
        cls,
        count: int,
        exclude_id: str | None = None,
        continent: Continent | None = None,
        *,
        catalog: Sequence[Country] = COUNTRIES,
        rng: random.Random | None = None,
    ) -> tuple[Country, ...]:
        """Draw up to `count` countries uniformly without replacement.

        Args:
            count: Number of countries wanted
            exclude_id: Id that must not appear in the result
            continent: Restrict the pool to one continent
            catalog: Source rows
            rng: Random source (defaults to the module RNG)

        Returns:
            Tuple of length min(count, pool size)
        """
        rng = rng or random
        pool = cls.eligible(exclude_id, continent, catalog)
        k = max(0, min(count, len(pool)))
        return tuple(rng.sample(pool, k))

    @classmethod
    def shuffle(cls, items: Sequence[T], rng: random.Random | None = None) -> list[T]:
        """Fisher-Yates shuffle into a new list."""
        rng = rng or random
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = rng.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    @classmethod
    def build_options(
        cls,
        correct: Country,
        continent: Continent | None = None,
        *,
        catalog: Sequence[Country] = COUNTRIES,
        rng: random.Random | None = None,
    ) -> tuple[Country, ...]:
        """Three distractors plus the correct answer, freshly shuffled.

        Distractors never share the correct answer's id. If the pool is
        too small the round gets fewer options.
        """
        distractors = cls.sample(
            cls.OPTION_COUNT - 1,
            exclude_id=correct.id,
            continent=continent,
            catalog=catalog,
            rng=rng,
        )
        return tuple(cls.shuffle([*distractors, correct], rng))
