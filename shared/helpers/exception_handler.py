import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.helpers.exceptions import AppError
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning("%s %s rejected (%s): %s", request.method,
                       request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            content=error_response(exc.message, exc.app_status_code),
            status_code=exc.status_code,
            headers=exc.headers
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content=error_response(str(exc.detail), str(exc.status_code)),
            status_code=exc.status_code,
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ())[1:])
            messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

        return JSONResponse(
            content=error_response("; ".join(messages), AppStatusCode.INVALID_INPUT),
            status_code=400
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)

        return JSONResponse(
            content=error_response("Internal server error", AppStatusCode.OPERATION_FAILED),
            status_code=500
        )
