"""Map domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from shopping.errors import NotFound, ProductNotInBasket, ShoppingError

_NOT_FOUND_ERRORS = (NotFound, ProductNotInBasket)


def status_code_for(error: ShoppingError) -> int:
    return 404 if isinstance(error, _NOT_FOUND_ERRORS) else 400


async def shopping_error_handler(request: Request, exc: ShoppingError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content={"error": exc.to_dict()})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": {"kind": "ValidationError", "message": exc.messages}},
    )


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": {"kind": "NotFound", "message": str(exc)}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShoppingError, shopping_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
