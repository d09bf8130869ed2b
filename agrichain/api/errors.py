import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from agrichain.core.exceptions import LedgerServiceError

logger = logging.getLogger(__name__)


async def ledger_error_handler(request: Request, exc: LedgerServiceError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerServiceError, ledger_error_handler)
