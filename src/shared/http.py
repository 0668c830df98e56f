"""HTTP error mapping shared by every domain router."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers


def install_error_handlers(app: FastAPI) -> None:
    """Translate domain exceptions into 4xx responses.

    Protean's handlers cover validation (400) and missing aggregates (404).
    A version conflict that survived ``process_with_retry`` becomes a 409.
    """
    register_exception_handlers(app)

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict(request: Request, exc: ExpectedVersionError):
        return JSONResponse(status_code=409, content={"error": str(exc)})
