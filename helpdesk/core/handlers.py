# helpdesk/core/handlers.py
import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from helpdesk.core.context import get_request_context, json_response, redirect, render
from helpdesk.core.errors import AppError, AuthRequired

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError):
    ctx = get_request_context(request)
    if isinstance(exc, AuthRequired):
        ctx.set_flash("error", "Please log in to continue.")
    else:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)

    if ctx.expects_json:
        return json_response(ctx, {"status": "error", "message": exc.message}, status_code=exc.status_code)
    if not isinstance(exc, AuthRequired):
        ctx.set_flash("error", exc.message)
    return redirect(ctx, exc.redirect_to)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    ctx = get_request_context(request)
    status_code, detail = exc.status_code, exc.detail
    # a known path hit with an undeclared method is just another unknown route
    if status_code == 405:
        status_code, detail = 404, "Not Found"
    if ctx.expects_json:
        return json_response(ctx, {"status": "error", "message": str(detail)}, status_code=status_code)
    return render(ctx, "error.html", status_code=status_code, detail=detail, error_status=status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    ctx = get_request_context(request)
    message = "Server error"
    if ctx.expects_json:
        return json_response(ctx, {"status": "error", "message": message}, status_code=500)
    ctx.set_flash("error", message)
    return redirect(ctx, "/")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
