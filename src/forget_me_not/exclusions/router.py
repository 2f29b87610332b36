"""
Routes for the excluded module administration pages and removal endpoint.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from forget_me_not.auth.middleware import CurrentUser
from forget_me_not.auth.rbac import require_site_configuration
from forget_me_not.exclusions.dependencies import get_exclusion_service
from forget_me_not.exclusions.schemas import (
    RemovalResponse,
    media_type,
    parse_removal_payload,
    removal_field_from_form,
    sanitize_identifier,
)
from forget_me_not.exclusions.service import ExclusionService
from forget_me_not.shared.database import get_db_session
from forget_me_not.shared.exceptions import NotFoundError, ValidationError
from forget_me_not.shared.logging import get_logger
from forget_me_not.ui.flash import clear_flash, read_flash, set_flash
from forget_me_not.ui.rendering import (
    OverviewView,
    PageRenderer,
    SelectionView,
    get_page_renderer,
)

logger = get_logger(__name__)

OVERVIEW_PATH = "/admin/config/system/forget_me_not"
SELECT_PATH = f"{OVERVIEW_PATH}/select_modules"
REMOVE_PATH = f"{OVERVIEW_PATH}/remove_module"
SCRIPT_PATH = "/static/forget_me_not.js"

router = APIRouter(prefix=OVERVIEW_PATH, tags=["forget_me_not"])


@router.get(
    "",
    response_class=HTMLResponse,
    summary="List excluded modules",
)
async def overview(
    request: Request,
    current_user: CurrentUser = Depends(require_site_configuration),
    service: ExclusionService = Depends(get_exclusion_service),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> HTMLResponse:
    """Excluded modules with remove controls and a link to the selection form."""
    message = read_flash(request)
    view = OverviewView(
        excluded=await service.list_excluded(),
        message=message,
        select_url=SELECT_PATH,
        remove_url=REMOVE_PATH,
        script_url=SCRIPT_PATH,
    )
    response = HTMLResponse(renderer.render_overview(view))
    if message is not None:
        clear_flash(response)
    return response


@router.get(
    "/select_modules",
    response_class=HTMLResponse,
    summary="Show the module selection form",
)
async def select_modules_form(
    current_user: CurrentUser = Depends(require_site_configuration),
    service: ExclusionService = Depends(get_exclusion_service),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> HTMLResponse:
    view = SelectionView(
        candidates=await service.list_eligible(),
        action_url=SELECT_PATH,
        overview_url=OVERVIEW_PATH,
    )
    return HTMLResponse(renderer.render_selection(view))


@router.post(
    "/select_modules",
    response_class=HTMLResponse,
    response_model=None,
    summary="Exclude the selected modules",
)
async def select_modules_submit(
    request: Request,
    current_user: CurrentUser = Depends(require_site_configuration),
    service: ExclusionService = Depends(get_exclusion_service),
    renderer: PageRenderer = Depends(get_page_renderer),
    session: AsyncSession = Depends(get_db_session),
) -> HTMLResponse | RedirectResponse:
    """Union the checked modules into the excluded set and redirect to the overview."""
    form = await request.form()
    selected = [str(value) for value in form.getlist("modules")]

    try:
        added = await service.exclude_modules(selected)
    except ValidationError as e:
        view = SelectionView(
            candidates=await service.list_eligible(),
            selected=selected,
            error=e.message,
            action_url=SELECT_PATH,
            overview_url=OVERVIEW_PATH,
        )
        return HTMLResponse(
            renderer.render_selection(view),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if selected:
        # The request session never commits on its own.
        await session.commit()
        message = "The selected modules have been excluded from update checks."
    else:
        message = "No modules were selected."

    logger.info(
        "Module selection submitted",
        extra={
            "user_id": current_user.id,
            "selected": len(selected),
            "added": added,
        },
    )

    response = RedirectResponse(url=OVERVIEW_PATH, status_code=status.HTTP_303_SEE_OTHER)
    set_flash(response, message)
    return response


@router.post(
    "/remove_module",
    response_model=RemovalResponse,
    summary="Remove a module from the exclusion list",
)
async def remove_module(
    request: Request,
    current_user: CurrentUser = Depends(require_site_configuration),
    service: ExclusionService = Depends(get_exclusion_service),
    session: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    """Remove one module; always answers with a status payload."""
    content_type = request.headers.get("content-type")
    try:
        if media_type(content_type) == "multipart/form-data":
            try:
                form = await request.form()
            except StarletteHTTPException as e:
                raise ValidationError("Malformed removal payload", details={"error": e.detail}) from e
            raw = removal_field_from_form(form)
        else:
            raw = parse_removal_payload(await request.body(), content_type)
    except ValidationError as e:
        logger.info(
            "Malformed removal payload",
            extra={"user_id": current_user.id, "error": e.message},
        )
        raw = ""

    module = sanitize_identifier(raw)

    try:
        await service.remove_module(module)
    except NotFoundError:
        logger.info(
            "Removal requested for module that is not excluded",
            extra={"user_id": current_user.id, "module_name": module},
        )
        return JSONResponse(RemovalResponse(status="error").model_dump())

    # The request session never commits on its own.
    await session.commit()
    logger.info(
        "Module removed via endpoint",
        extra={"user_id": current_user.id, "module_name": module},
    )
    return JSONResponse(RemovalResponse(status="success").model_dump())
