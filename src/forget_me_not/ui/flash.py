"""
One-shot status messages carried across a redirect in a cookie.
"""

from urllib.parse import quote, unquote

from starlette.requests import Request
from starlette.responses import Response

FLASH_COOKIE = "forget_me_not_message"
FLASH_MAX_AGE = 60


def set_flash(response: Response, message: str) -> None:
    response.set_cookie(
        FLASH_COOKIE,
        quote(message),
        max_age=FLASH_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


def read_flash(request: Request) -> str | None:
    raw = request.cookies.get(FLASH_COOKIE)
    if not raw:
        return None
    return unquote(raw) or None


def clear_flash(response: Response) -> None:
    response.delete_cookie(FLASH_COOKIE)
