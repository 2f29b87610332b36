"""
Persistence of the excluded module set.

The set lives in a single configuration variable as a sorted JSON array.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from forget_me_not.shared.logging import get_logger
from forget_me_not.variables.repository import VariableRepository

logger = get_logger(__name__)

DEFAULT_VARIABLE_NAME = "forget_me_not_excluded_modules"


class ExclusionStoreProtocol(Protocol):
    """Protocol for excluded module storage."""

    async def get(self) -> set[str]: ...

    async def set(self, items: Iterable[str]) -> None: ...

    async def delete(self) -> None: ...


class ExclusionStore:
    """Base implementation with the read-modify-write helpers.

    Subclasses provide ``get``, ``set`` and ``delete``.
    """

    async def get(self) -> set[str]:  # pragma: no cover - interface
        raise NotImplementedError

    async def set(self, items: Iterable[str]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    async def delete(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    async def add(self, items: Iterable[str]) -> set[str]:
        """Union ``items`` into the stored set.

        Returns:
            The identifiers that were not excluded before.
        """
        current = await self.get()
        added = set(items) - current
        if added:
            await self.set(current | added)
        return added

    async def remove(self, identifier: str) -> bool:
        """Remove a single identifier.

        Returns:
            True if it was present. The stored set is untouched otherwise.
        """
        current = await self.get()
        if identifier not in current:
            return False
        current.discard(identifier)
        await self.set(current)
        return True


class VariableExclusionStore(ExclusionStore):
    """Excluded module set persisted in the ``variables`` table."""

    def __init__(
        self,
        repository: VariableRepository,
        variable_name: str = DEFAULT_VARIABLE_NAME,
    ) -> None:
        self._repository = repository
        self._variable_name = variable_name

    @property
    def variable_name(self) -> str:
        return self._variable_name

    async def get(self) -> set[str]:
        value = await self._repository.get(self._variable_name, default=None)
        if not value:
            return set()
        if not isinstance(value, list):
            logger.warning(
                "Ignoring malformed exclusion variable",
                extra={"variable": self._variable_name, "value_type": type(value).__name__},
            )
            return set()
        return {str(item) for item in value}

    async def set(self, items: Iterable[str]) -> None:
        values = sorted(set(items))
        await self._repository.set(self._variable_name, values)
        logger.info(
            "Excluded modules saved",
            extra={"variable": self._variable_name, "count": len(values)},
        )

    async def delete(self) -> None:
        deleted = await self._repository.delete(self._variable_name)
        logger.info(
            "Excluded modules variable deleted",
            extra={"variable": self._variable_name, "existed": deleted},
        )


class InMemoryExclusionStore(ExclusionStore):
    """Process-local store, used in tests and when embedding the filter."""

    def __init__(self, items: Iterable[str] | None = None) -> None:
        self._items: set[str] | None = set(items) if items is not None else None

    async def get(self) -> set[str]:
        return set(self._items) if self._items else set()

    async def set(self, items: Iterable[str]) -> None:
        self._items = set(items)

    async def delete(self) -> None:
        self._items = None

    @property
    def is_set(self) -> bool:
        """Whether a value is currently stored (False after ``delete``)."""
        return self._items is not None
