"""
FastAPI dependencies for the module collaborators.
"""

from fastapi import Depends

from forget_me_not.config import Settings, get_settings
from forget_me_not.modules.providers import (
    CandidateProvider,
    InMemoryUpdateStatusProvider,
    JsonFileUpdateStatusProvider,
    StaticCandidateProvider,
    UpdateStatusProvider,
)


def get_candidate_provider(
    settings: Settings = Depends(get_settings),
) -> CandidateProvider:
    """Enabled modules from configuration."""
    return StaticCandidateProvider(settings.enabled_modules_list)


def get_update_status_provider(
    settings: Settings = Depends(get_settings),
) -> UpdateStatusProvider:
    """Pending projects from the configured JSON file, if any."""
    if settings.update_status_file:
        return JsonFileUpdateStatusProvider(settings.update_status_file)
    return InMemoryUpdateStatusProvider()
