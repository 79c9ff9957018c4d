"""HTTP API exposing order creation."""

from typing import Annotated, Any

from fastapi import BackgroundTasks, Body, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from order_desk.common import ORDER_DESK_VERSION, logger
from order_desk.common.exceptions import (
    InvalidOrderError,
    OrderDeskError,
    OrderNotFoundError,
    UpstreamUnavailableError,
    UserNotFoundError,
)
from order_desk.service import OrderService

ERROR_STATUS_CODES: dict[type[OrderDeskError], int] = {
    InvalidOrderError: 400,
    UserNotFoundError: 404,
    OrderNotFoundError: 404,
    UpstreamUnavailableError: 502,
}

ERROR_NAMES: dict[type[OrderDeskError], str] = {
    InvalidOrderError: "InvalidOrder",
    UserNotFoundError: "UserNotFound",
    OrderNotFoundError: "OrderNotFound",
    UpstreamUnavailableError: "UpstreamUnavailable",
}


def get_service(request: Request) -> OrderService:
    """Return the order service attached to the application."""
    return request.app.state.service


OrderServiceDependency = Annotated[OrderService, Depends(get_service)]


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report missing or unparseable request bodies as client errors."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request",
            "error": "InvalidOrder",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def order_desk_exception_handler(_request: Request, exc: OrderDeskError) -> JSONResponse:
    """Translate service errors into their HTTP status codes."""
    status_code = 500
    error_name = "InternalServerError"
    for error_class, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_class):
            status_code = code
            error_name = ERROR_NAMES[error_class]
            break

    content: dict[str, Any] = {"detail": str(exc), "error": error_name}
    if isinstance(exc, InvalidOrderError):
        content["errors"] = jsonable_encoder(exc.errors)
    if isinstance(exc, UserNotFoundError) and exc.code:
        content["code"] = exc.code

    if status_code >= 500:
        logger.error("Request failed: %s", exc)
    return JSONResponse(status_code=status_code, content=content)


async def general_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors."""
    logger.error("Unhandled exception in API: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": f"An error occurred: {exc}", "error": "InternalServerError"},
    )


def create_app(service: OrderService) -> FastAPI:
    """Build the FastAPI application wired to *service*."""
    app = FastAPI(title="Order desk", version=ORDER_DESK_VERSION)
    app.state.service = service

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(OrderDeskError, order_desk_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.post("/order")
    def create_order(
        order_service: OrderServiceDependency,
        background_tasks: BackgroundTasks,
        payload: Annotated[Any, Body()],
    ) -> JSONResponse:
        """Create an order; the notification, if any, is sent after the response."""
        order = order_service.create_order(payload, schedule=background_tasks.add_task)
        return JSONResponse(content=order.to_dict(), background=background_tasks)

    @app.get("/order/{order_id}")
    def get_order(order_service: OrderServiceDependency, order_id: int) -> JSONResponse:
        """Return a persisted order."""
        return JSONResponse(content=order_service.get_order(order_id).to_dict())

    @app.get("/health")
    def health(order_service: OrderServiceDependency) -> JSONResponse:
        """Report service status and directory reachability."""
        directory_ok = order_service.directory.ping()
        return JSONResponse(content={"status": "ok", "directory": directory_ok})

    return app
