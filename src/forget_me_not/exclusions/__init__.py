"""
Excluded module list management.
"""

from forget_me_not.exclusions.filter import ExclusionFilter
from forget_me_not.exclusions.store import (
    ExclusionStore,
    ExclusionStoreProtocol,
    InMemoryExclusionStore,
    VariableExclusionStore,
)

__all__ = [
    "ExclusionFilter",
    "ExclusionStore",
    "ExclusionStoreProtocol",
    "InMemoryExclusionStore",
    "VariableExclusionStore",
]
