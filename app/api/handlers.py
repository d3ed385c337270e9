import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from app.core.errors import EngineTimeoutError, ParseError, ProcessError, ValidationError
from app.services.romanization import TEXT_REQUIRED


def _rid(request: Request) -> str:
    return getattr(request.state, "request_id", "n/a")


async def validation_error_handler(request: Request, exc: ValidationError):
    logging.info("[API] request_id=%s validation_error=%s", _rid(request), exc)
    return JSONResponse({"error": str(exc)}, status_code=400)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logging.info("[API] request_id=%s invalid_body errors=%d", _rid(request), len(errors))
    # a missing body or a bad `text` reads as "no text"
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if loc == ("body",) or "text" in loc:
            return JSONResponse({"error": TEXT_REQUIRED}, status_code=400)
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in errors
    )
    return JSONResponse({"error": "Invalid request body", "message": message}, status_code=400)


async def timeout_handler(request: Request, exc: EngineTimeoutError):
    logging.error("[API] request_id=%s timeout err=%s", _rid(request), exc)
    return JSONResponse({"error": "Request timeout"}, status_code=504)


async def parse_error_handler(request: Request, exc: ParseError):
    logging.error("[API] request_id=%s parse_error err=%s", _rid(request), exc)
    return JSONResponse(
        {"error": "Failed to parse ichiran-cli output", "message": str(exc)}, status_code=500
    )


async def process_error_handler(request: Request, exc: ProcessError):
    logging.error("[API] request_id=%s process_error err=%s", _rid(request), exc)
    return JSONResponse({"error": "Internal server error", "message": str(exc)}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(EngineTimeoutError, timeout_handler)
    app.add_exception_handler(ParseError, parse_error_handler)
    app.add_exception_handler(ProcessError, process_error_handler)
