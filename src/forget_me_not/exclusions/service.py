"""
Service layer for excluded module management.
"""

from collections.abc import Iterable

from forget_me_not.exclusions.store import ExclusionStore
from forget_me_not.modules.providers import CandidateProvider, eligible_candidates
from forget_me_not.shared.exceptions import NotFoundError, ValidationError
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)


class ExclusionService:
    """Reads and mutates the excluded module set on behalf of the admin pages."""

    def __init__(self, store: ExclusionStore, candidates: CandidateProvider) -> None:
        """Initialize service.

        Args:
            store: Excluded module storage.
            candidates: Source of enabled modules.
        """
        self._store = store
        self._candidates = candidates

    async def list_excluded(self) -> list[str]:
        """Excluded modules, sorted by name."""
        return sorted(await self._store.get())

    async def list_eligible(self) -> list[str]:
        """Enabled modules that are not excluded yet, sorted by name."""
        return eligible_candidates(self._candidates, await self._store.get())

    async def exclude_modules(self, selected: Iterable[str]) -> list[str]:
        """Add the selected modules to the excluded set.

        Args:
            selected: Module names chosen on the selection form.

        Returns:
            The newly excluded modules, sorted.

        Raises:
            ValidationError: If a selection is not an eligible candidate.
        """
        chosen = set(selected)
        if not chosen:
            return []

        eligible = set(await self.list_eligible())
        invalid = sorted(chosen - eligible)
        if invalid:
            logger.warning(
                "Rejected ineligible module selection",
                extra={"invalid": invalid},
            )
            raise ValidationError(
                "An illegal choice has been detected.",
                details={"invalid": invalid},
            )

        added = sorted(await self._store.add(chosen))
        logger.info(
            "Modules excluded from update checks",
            extra={"modules": added, "count": len(added)},
        )
        return added

    async def remove_module(self, identifier: str) -> None:
        """Remove one module from the excluded set.

        Raises:
            NotFoundError: If the module is not excluded.
        """
        if not await self._store.remove(identifier):
            raise NotFoundError(
                f"Module is not excluded: {identifier}",
                details={"module": identifier},
            )

        logger.info(
            "Module removed from exclusion list",
            extra={"module_name": identifier},
        )
