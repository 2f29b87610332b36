"""
Tests for excluded module storage.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from forget_me_not.exclusions.store import (
    DEFAULT_VARIABLE_NAME,
    InMemoryExclusionStore,
    VariableExclusionStore,
)
from forget_me_not.variables.repository import VariableRepository


@pytest.fixture
def variable_store(sqlite_session: AsyncSession) -> VariableExclusionStore:
    return VariableExclusionStore(VariableRepository(sqlite_session))


class TestVariableExclusionStore:
    """Tests for the variable-backed store."""

    @pytest.mark.asyncio
    async def test_get_defaults_to_empty_set(
        self, variable_store: VariableExclusionStore
    ) -> None:
        assert await variable_store.get() == set()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "items",
        [set(), {"alpha"}, {"alpha", "beta", "views_ui"}],
    )
    async def test_set_then_get_round_trips(
        self, variable_store: VariableExclusionStore, items: set[str]
    ) -> None:
        await variable_store.set(items)
        assert await variable_store.get() == items

    @pytest.mark.asyncio
    async def test_set_replaces_previous_contents(
        self, variable_store: VariableExclusionStore
    ) -> None:
        await variable_store.set({"alpha", "beta"})
        await variable_store.set({"gamma"})
        assert await variable_store.get() == {"gamma"}

    @pytest.mark.asyncio
    async def test_value_is_stored_as_sorted_list(
        self, sqlite_session: AsyncSession, variable_store: VariableExclusionStore
    ) -> None:
        await variable_store.set({"zeta", "alpha", "mu"})
        stored = await VariableRepository(sqlite_session).get(DEFAULT_VARIABLE_NAME)
        assert stored == ["alpha", "mu", "zeta"]

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_empty(
        self, variable_store: VariableExclusionStore
    ) -> None:
        await variable_store.set({"alpha"})
        await variable_store.delete()
        assert await variable_store.get() == set()

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, variable_store: VariableExclusionStore) -> None:
        await variable_store.delete()
        await variable_store.delete()
        assert await variable_store.get() == set()

    @pytest.mark.asyncio
    async def test_custom_variable_name(self, sqlite_session: AsyncSession) -> None:
        store = VariableExclusionStore(VariableRepository(sqlite_session), "other_key")
        await store.set({"alpha"})
        repo = VariableRepository(sqlite_session)
        assert await repo.get("other_key") == ["alpha"]
        assert await repo.get(DEFAULT_VARIABLE_NAME) is None

    @pytest.mark.asyncio
    async def test_malformed_value_reads_as_empty(self) -> None:
        repository = AsyncMock(spec=VariableRepository)
        repository.get.return_value = {"not": "a list"}
        store = VariableExclusionStore(repository)
        assert await store.get() == set()


class TestReadModifyWrite:
    """Tests for add/remove helpers."""

    @pytest.mark.asyncio
    async def test_repeated_add_does_not_duplicate(
        self, variable_store: VariableExclusionStore
    ) -> None:
        assert await variable_store.add(["alpha"]) == {"alpha"}
        assert await variable_store.add(["alpha", "alpha"]) == set()
        assert await variable_store.get() == {"alpha"}

    @pytest.mark.asyncio
    async def test_add_unions_with_existing(
        self, variable_store: VariableExclusionStore
    ) -> None:
        await variable_store.set({"alpha"})
        added = await variable_store.add(["alpha", "beta"])
        assert added == {"beta"}
        assert await variable_store.get() == {"alpha", "beta"}

    @pytest.mark.asyncio
    async def test_remove_present_identifier(
        self, variable_store: VariableExclusionStore
    ) -> None:
        await variable_store.set({"alpha", "beta"})
        assert await variable_store.remove("alpha") is True
        assert await variable_store.get() == {"beta"}

    @pytest.mark.asyncio
    async def test_remove_absent_identifier_leaves_set_unchanged(self) -> None:
        store = InMemoryExclusionStore({"alpha"})
        assert await store.remove("beta") is False
        assert await store.get() == {"alpha"}


class TestInMemoryExclusionStore:
    @pytest.mark.asyncio
    async def test_delete_clears_value(self) -> None:
        store = InMemoryExclusionStore({"alpha"})
        assert store.is_set
        await store.delete()
        assert not store.is_set
        assert await store.get() == set()

    @pytest.mark.asyncio
    async def test_get_returns_copy(self) -> None:
        store = InMemoryExclusionStore({"alpha"})
        items = await store.get()
        items.add("beta")
        assert await store.get() == {"alpha"}
