"""
Tests for the exclusion filter.
"""

import pytest

from forget_me_not.exclusions.filter import ExclusionFilter
from forget_me_not.exclusions.store import InMemoryExclusionStore


class TestApply:
    @pytest.mark.asyncio
    async def test_removes_excluded_candidates(self) -> None:
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"foo", "bar"}))
        result = await exclusion_filter.apply({"foo": "X", "bar": "Y", "baz": "Z"})
        assert result == {"baz": "Z"}

    @pytest.mark.asyncio
    async def test_disjoint_set_returns_equal_mapping(self) -> None:
        candidates = {"alpha": 1, "beta": 2}
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"gamma"}))
        assert await exclusion_filter.apply(candidates) == candidates

    @pytest.mark.asyncio
    async def test_empty_excluded_set(self) -> None:
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore())
        assert await exclusion_filter.apply({"alpha": 1}) == {"alpha": 1}

    @pytest.mark.asyncio
    async def test_does_not_mutate_input(self) -> None:
        candidates = {"foo": 1, "baz": 2}
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"foo"}))
        await exclusion_filter.apply(candidates)
        assert candidates == {"foo": 1, "baz": 2}

    @pytest.mark.asyncio
    async def test_values_are_passed_through_unchanged(self) -> None:
        value = object()
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"foo"}))
        result = await exclusion_filter.apply({"foo": object(), "kept": value})
        assert result["kept"] is value


class TestApplyInPlace:
    @pytest.mark.asyncio
    async def test_deletes_excluded_keys(self) -> None:
        candidates = {"foo": "X", "bar": "Y", "baz": "Z"}
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"foo", "bar"}))

        removed = await exclusion_filter.apply_in_place(candidates)

        assert removed == ["bar", "foo"]
        assert candidates == {"baz": "Z"}

    @pytest.mark.asyncio
    async def test_stale_exclusions_are_ignored(self) -> None:
        candidates = {"baz": "Z"}
        exclusion_filter = ExclusionFilter(InMemoryExclusionStore({"uninstalled_module"}))

        removed = await exclusion_filter.apply_in_place(candidates)

        assert removed == []
        assert candidates == {"baz": "Z"}
