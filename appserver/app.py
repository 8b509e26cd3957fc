import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from appserver.domain import AppError
from appserver.infrastructure import HttpAnalyticsClient, NoOpAnalyticsClient, configure_analytics_client
from appserver.routes import application, asset, user, workspace

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    analytics_client: HttpAnalyticsClient | None = None
    endpoint = os.getenv("ANALYTICS_ENDPOINT")
    if endpoint:
        analytics_client = HttpAnalyticsClient(endpoint, write_key=os.getenv("ANALYTICS_WRITE_KEY"))
        configure_analytics_client(analytics_client)
        logger.info("analytics events will be sent to %s", endpoint)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if analytics_client is not None:
            analytics_client.close()
            configure_analytics_client(NoOpAnalyticsClient())
            logger.info("analytics client closed")

    app = FastAPI(title="App Builder Workspace API", version="0.1.0", lifespan=lifespan)
    app.state.admin_emails = frozenset(
        email.strip().lower() for email in os.getenv("ADMIN_EMAILS", "").split(",") if email.strip()
    )

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        origins = ["http://localhost:3000", "http://127.0.0.1:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    app.include_router(user.router, prefix="/api")
    app.include_router(workspace.router, prefix="/api")
    app.include_router(application.router, prefix="/api")
    app.include_router(asset.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "App Builder Workspace API",
                "docs": "/docs",
                "health": "/api/workspaces",
            }
        )

    return app


app = create_app()
