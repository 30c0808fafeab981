"""Competition catalog and deterministic weighted selection.

The catalog is a static, ordered table of CompetitionDefinitions loaded once.
Selection is replayable: the same seed over the same pool always yields the
same definition, so a recorded game session can be replayed exactly.

Selection algorithm:
1. Pool = non-retired definitions, filtered by category and exclusions
2. Weighted list = each pool entry repeated ``weight`` times, in order
3. Index = int(Random(seed).random() * len(weighted list))

Fallbacks:
- Empty pool: first non-retired definition in declaration order
- No non-retired definitions at all: NoCompetitionsAvailable
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from functools import lru_cache

from housecomp.errors import NoCompetitionsAvailable
from housecomp.models.competition import CompetitionCategory, CompetitionDefinition
from housecomp.models.registry import DEFAULT_COMPETITIONS

logger = logging.getLogger(__name__)


class CompetitionCatalog:
    """Ordered, immutable table of competition definitions.

    Args:
        definitions: Definitions in declaration order

    Raises:
        ValueError: If two definitions share a key
    """

    def __init__(self, definitions: Iterable[CompetitionDefinition]):
        self._definitions: tuple[CompetitionDefinition, ...] = tuple(definitions)
        self._by_key: dict[str, CompetitionDefinition] = {}
        for definition in self._definitions:
            if definition.key in self._by_key:
                raise ValueError(f"Duplicate competition key: {definition.key}")
            self._by_key[definition.key] = definition

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get_all(self) -> list[CompetitionDefinition]:
        """Return every definition, retired ones included."""
        return list(self._definitions)

    def get_by_key(self, key: str) -> CompetitionDefinition | None:
        """Return the definition for ``key``, or None if not found."""
        return self._by_key.get(key)

    def get_replacement(self, key: str) -> CompetitionDefinition | None:
        """Follow ``replaced_by`` links from a retired definition.

        Returns the first non-retired definition in the chain, the definition
        itself if it is not retired, or None if the chain dead-ends.
        """
        seen: set[str] = set()
        current = self._by_key.get(key)
        while current is not None and current.retired:
            if current.key in seen or current.replaced_by is None:
                return None
            seen.add(current.key)
            current = self._by_key.get(current.replaced_by)
        return current

    def get_pool(
        self,
        retired: bool | None = None,
        category: CompetitionCategory | str | None = None,
        exclude_keys: Iterable[str] | None = None,
    ) -> list[CompetitionDefinition]:
        """Return definitions matching every given filter, in declaration order.

        Args:
            retired: Keep only entries with this retired flag (None = both)
            category: Keep only this category
            exclude_keys: Keys to drop
        """
        excluded = set(exclude_keys or ())
        wanted = CompetitionCategory(category) if category is not None else None
        return [
            definition
            for definition in self._definitions
            if (retired is None or definition.retired == retired)
            and (wanted is None or definition.category == wanted)
            and definition.key not in excluded
        ]

    def pick_random(
        self,
        seed: int,
        category: CompetitionCategory | str | None = None,
        exclude_keys: Iterable[str] | None = None,
    ) -> CompetitionDefinition:
        """Pick a non-retired definition by seeded weighted selection.

        Args:
            seed: Seed for the generator; same seed + same pool = same pick
            category: Optional category filter
            exclude_keys: Optional keys to leave out

        Returns:
            The selected definition

        Raises:
            NoCompetitionsAvailable: If the catalog has no non-retired entries
        """
        pool = self.get_pool(retired=False, category=category, exclude_keys=exclude_keys)

        if not pool:
            fallback = next((d for d in self._definitions if not d.retired), None)
            if fallback is None:
                raise NoCompetitionsAvailable("Catalog has no non-retired competitions")
            logger.warning(
                f"No competitions match category={category} exclude={list(exclude_keys or ())}; "
                f"falling back to {fallback.key}"
            )
            return fallback

        weighted: list[CompetitionDefinition] = []
        for definition in pool:
            weighted.extend([definition] * definition.weight)

        rng = random.Random(seed)
        choice = weighted[int(rng.random() * len(weighted))]
        logger.info(f"Picked competition {choice.key} (seed={seed}, pool={len(pool)}, slots={len(weighted)})")
        return choice


@lru_cache(maxsize=1)
def get_default_catalog() -> CompetitionCatalog:
    """Catalog over the built-in competition table."""
    return CompetitionCatalog(DEFAULT_COMPETITIONS)
