# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, get_settings
from app.core.errors import AppError, StorageError, ValidationError
from app.core.json import UTF8JSONResponse, error_response
from app.core.security import PasswordHasher, TokenService
from app.db.init_db import init_models
from app.db.session import build_engine, build_sessionmaker

# routers
from app.users.router import auth_router
from app.users.router import router as users_router
from app.messages.router import router as messages_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("🚀 Iniciando servicio…")
    await init_models(app.state.engine)
    log.info("✅ Startup listo.")
    yield
    await app.state.engine.dispose()
    log.info("👋 Servicio detenido.")


async def handle_app_error(request: Request, exc: AppError):
    return error_response(exc)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # 400 (no 422) para input inválido
    fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in exc.errors()]
    fields = [f for f in fields if f]
    detail = "invalid input: " + ", ".join(fields) if fields else None
    return error_response(ValidationError(detail))


async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    log.error(f"❌ storage error on {request.url.path}: {exc!r}")
    return error_response(StorageError())


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Construye la app con su configuración explícita: engine, sesiones,
    hasher y servicio de tokens se crean una vez y viven en app.state.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Messagely API",
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.sessionmaker = build_sessionmaker(app.state.engine)
    app.state.hasher = PasswordHasher.from_settings(settings)
    app.state.tokens = TokenService.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)

    @app.get("/api/health/")
    async def health():
        return {"ok": True, "service": "messagely"}

    app.include_router(auth_router)      # /api/auth/...
    app.include_router(users_router)     # /api/users/...
    app.include_router(messages_router)  # /api/messages/...

    return app


app = create_app()
