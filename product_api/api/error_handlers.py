"""Global exception handlers.

Every failure that reaches this layer becomes a 500 response with a JSON
body of the form {"message": "<error message>"}. Not-found outcomes never
get here; the controller answers those with a bare 404.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_api.errors import ProductError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_product_error_handler(app)
    _register_request_validation_handler(app)
    _register_generic_error_handler(app)


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


def _register_product_error_handler(app: FastAPI) -> None:
    @app.exception_handler(ProductError)
    async def product_error_handler(request: Request, exc: ProductError):
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.message)


def _register_request_validation_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies share the single 500 error contract."""
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        logger.warning(f"Invalid request on {request.url.path}: {message}")
        return _error_response(f"Invalid request: {message}")


def _register_generic_error_handler(app: FastAPI) -> None:
    # Registered as middleware rather than exception_handler(Exception), which
    # Starlette runs outside every user middleware. Must be added before CORS.
    @app.middleware("http")
    async def generic_error_handler(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.url.path}: {exc}",
                exc_info=True,
            )
            return _error_response(str(exc))
