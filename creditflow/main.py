"""Main FastAPI application entry point."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creditflow.api.routes import router
from creditflow.database import init_audit_store, init_db

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Both stores are set up once, before any request is served
    init_db()
    init_audit_store()
    logger.info("CreditFlow ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="CreditFlow - Credit Application Service",
        description="Creates credit applications, moves them between statuses and keeps an append-only audit trail.",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api", tags=["Credit applications"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "CreditFlow"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
