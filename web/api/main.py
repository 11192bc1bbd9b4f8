"""FastAPI league API."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from league.errors import LeagueError, StorageError
from league.models import init_db, make_engine, make_session_factory

from web.api.admin_routes import router as admin_router
from web.api.auth_routes import router as auth_router
from web.api.routes import router as api_router
from web.api.settings_routes import router as settings_router

logger = logging.getLogger("league.web")


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the app with its own engine. Sessions are opened per request (see web.auth.get_store)."""
    engine = make_engine(database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(engine)
        yield
        await engine.dispose()

    app = FastAPI(title="Fairway League API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LeagueError)
    async def league_error_handler(request: Request, exc: LeagueError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    app.include_router(api_router)
    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(settings_router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
