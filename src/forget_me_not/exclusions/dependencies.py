"""
FastAPI dependencies for exclusion management.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forget_me_not.config import Settings, get_settings
from forget_me_not.exclusions.filter import ExclusionFilter
from forget_me_not.exclusions.service import ExclusionService
from forget_me_not.exclusions.store import ExclusionStore, VariableExclusionStore
from forget_me_not.modules.dependencies import get_candidate_provider
from forget_me_not.modules.providers import CandidateProvider
from forget_me_not.shared.database import get_db_session
from forget_me_not.variables.repository import VariableRepository


def get_exclusion_store(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> ExclusionStore:
    """Excluded module store bound to the request's database session."""
    return VariableExclusionStore(
        VariableRepository(session),
        variable_name=settings.exclusions_variable_name,
    )


def get_exclusion_filter(
    store: ExclusionStore = Depends(get_exclusion_store),
) -> ExclusionFilter:
    return ExclusionFilter(store)


def get_exclusion_service(
    store: ExclusionStore = Depends(get_exclusion_store),
    candidates: CandidateProvider = Depends(get_candidate_provider),
) -> ExclusionService:
    """Dependency for exclusion service."""
    return ExclusionService(store=store, candidates=candidates)
