"""
Maps ledger errors to HTTP responses.

The core raises domain exceptions without knowing about HTTP; these handlers
translate them so every endpoint reports failures the same way.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions import (
    AuthenticationError, DuplicateUsernameError, LedgerError, NotFoundError
)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach domain exception handlers to the app"""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"ok": False, "detail": exc.detail})

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content={"ok": False, "detail": exc.detail})

    @app.exception_handler(DuplicateUsernameError)
    async def duplicate_handler(request: Request, exc: DuplicateUsernameError):
        return JSONResponse(status_code=409, content={"ok": False, "detail": exc.detail})

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        return JSONResponse(status_code=400, content={"ok": False, "detail": exc.detail})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"ok": False, "detail": str(exc)})
