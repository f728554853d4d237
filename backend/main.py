# backend/main.py
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from config import Settings, get_settings
from database import init_db, make_engine, make_session_factory
from utils.errors import SOSError, StorageFailure, Unauthorized
from utils.tokenJWT import AccessGate, TokenService

load_dotenv()

# Routers
from routes.auth import router as auth_router
from routes.resources import ambulance_router, doctor_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the API with its own engine, session factory and token service.

    Served with ``uvicorn main:create_app --factory``.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = engine or make_engine(settings.DATABASE_URL)
    init_db(engine)

    app = FastAPI(title="SOS Directory API", version="1.0.0")

    token_service = TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.token_service = token_service
    app.state.access_gate = AccessGate(token_service)

    # CORS Configuration
    origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SOSError)
    async def sos_error_handler(request: Request, exc: SOSError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

    # Anything the services did not wrap still must not leak driver messages
    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Unhandled storage error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": StorageFailure.detail})

    # Router registration
    app.include_router(auth_router)
    app.include_router(ambulance_router)
    app.include_router(doctor_router)

    @app.get("/health")
    def health():
        return {"status": "ok", "message": "SOS API is running"}

    logger.info("SOS API ready (database: %s)", engine.url.render_as_string(hide_password=True))
    return app

