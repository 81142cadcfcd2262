from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog import get_logger

logger = get_logger()

class ServiceError(Exception):
    """Base for failures the caller can fix; rendered as 400 by the handler in register_error_handlers."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body

class InputValidationError(ServiceError):
    pass

class MissingDataError(InputValidationError):
    def __init__(self, entity: str):
        super().__init__(f"{entity} data must not be empty")

class FieldRequiredError(InputValidationError):
    def __init__(self, field: str):
        super().__init__(f"{field} is required", field)

class FieldLengthError(InputValidationError):
    def __init__(self, field: str, min_length: int, max_length: int):
        super().__init__(f"{field} must be between {min_length} and {max_length} characters", field)

class FieldRangeError(InputValidationError):
    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"{field} must be greater than 0", field)

class FieldFormatError(InputValidationError):
    def __init__(self, field: str, expected: str):
        super().__init__(f"{field} must be a valid {expected}", field)

class ReferentialError(ServiceError):
    pass

class ConflictError(ServiceError):
    pass

def register_error_handlers(app: FastAPI):
    @app.exception_handler(ServiceError)
    async def service_error(request: Request, exc: ServiceError):
        logger.warning("Service error", path=request.url.path, error=exc.message, field=exc.field)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("Invalid request", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({"message": "Invalid input data", "errors": errors}),
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unhandled error",
            method=request.method,
            path=request.url.path,
            error=f"{type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
