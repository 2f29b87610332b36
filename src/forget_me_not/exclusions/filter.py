"""
Filtering of update-check candidates against the excluded module set.
"""

from collections.abc import Mapping, MutableMapping
from typing import TypeVar

from forget_me_not.exclusions.store import ExclusionStoreProtocol
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ExclusionFilter:
    """Drops candidates whose identifier is excluded."""

    def __init__(self, store: ExclusionStoreProtocol) -> None:
        self._store = store

    async def apply(self, candidates: Mapping[str, T]) -> dict[str, T]:
        """Return a copy of ``candidates`` without the excluded keys.

        Excluded identifiers that match no candidate are ignored.
        """
        excluded = await self._store.get()
        kept = {key: value for key, value in candidates.items() if key not in excluded}
        if len(kept) != len(candidates):
            logger.debug(
                "Excluded candidates filtered",
                extra={"removed": len(candidates) - len(kept), "remaining": len(kept)},
            )
        return kept

    async def apply_in_place(self, candidates: MutableMapping[str, T]) -> list[str]:
        """Delete excluded keys from ``candidates``.

        Returns:
            The removed keys, sorted.
        """
        excluded = await self._store.get()
        removed = sorted(key for key in excluded if key in candidates)
        for key in removed:
            del candidates[key]
        return removed
