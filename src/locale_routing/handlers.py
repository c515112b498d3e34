from starlette.requests import Request
from starlette.responses import JSONResponse

from locale_routing.core.context import get_locale
from locale_routing.core.exceptions import AppException
from locale_routing.core.logging import get_logger

logger = get_logger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses with consistent JSON format."""
    locale = get_locale()

    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        path=str(request.url.path),
    )

    headers = {"Content-Language": locale} if locale else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )
