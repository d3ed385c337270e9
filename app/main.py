import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.handlers import register_exception_handlers
from app.api.routes import router as api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.middleware.request_id import RequestIDMiddleware
from app.middleware.access_log import AccessLogMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    port = settings.PORT
    logging.info("Ichiran API server listening on port %s", port)
    logging.info("Health check: http://localhost:%s/health", port)
    logging.info("API endpoint: http://localhost:%s/api/romanize", port)
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Ichiran API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    logging.info(
        "ichiran_cli executable=%s timeout_s=%s max_output_bytes=%d",
        settings.ICHIRAN_CLI,
        settings.ICHIRAN_TIMEOUT_SECONDS,
        settings.ICHIRAN_MAX_OUTPUT_BYTES,
    )

    app.include_router(api_router)
    return app


app = create_app()


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
