"""
Update-status report with excluded projects removed.
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from forget_me_not.auth.middleware import CurrentUser
from forget_me_not.auth.rbac import Permission, PermissionChecker
from forget_me_not.exclusions.dependencies import get_exclusion_filter
from forget_me_not.exclusions.filter import ExclusionFilter
from forget_me_not.modules.dependencies import get_update_status_provider
from forget_me_not.modules.providers import UpdateStatusProvider
from forget_me_not.modules.schemas import UpdateReportResponse
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/reports", tags=["updates"])
require_update_reports = PermissionChecker(Permission.VIEW_UPDATE_REPORTS)


@router.get(
    "/updates",
    response_model=UpdateReportResponse,
    summary="Projects pending update-check presentation",
    description="Excluded modules are removed before the report is returned.",
)
async def update_report(
    current_user: CurrentUser = Depends(require_update_reports),
    provider: UpdateStatusProvider = Depends(get_update_status_provider),
    exclusion_filter: ExclusionFilter = Depends(get_exclusion_filter),
) -> UpdateReportResponse:
    # Providers may read files; keep that off the event loop.
    projects = await run_in_threadpool(provider.pending_projects)
    hidden = await exclusion_filter.apply_in_place(projects)

    logger.info(
        "Update report generated",
        extra={
            "user_id": current_user.id,
            "projects": len(projects),
            "hidden": len(hidden),
        },
    )

    return UpdateReportResponse(
        projects=sorted(projects.values(), key=lambda p: p.name),
        excluded=hidden,
    )
