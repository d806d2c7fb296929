import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsearch import __version__
from docsearch.api.http import auth_router, documents_router
from docsearch.core.cache import QueryCache
from docsearch.core.config import Settings, settings as default_settings
from docsearch.core.db import Base, SessionLocal, build_engine, build_session_factory, engine as default_engine
from docsearch.core.errors import DocumentError, ValidationFailed

logger = logging.getLogger(__name__)


async def document_error_handler(request: Request, exc: DocumentError) -> JSONResponse:
    """Ошибки операций с документами в HTTP ответ"""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    content = {"detail": exc.message}
    if isinstance(exc, ValidationFailed):
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ошибки валидации запроса: первое нарушенное правило и полный список"""
    errors = exc.errors()
    first = errors[0] if errors else {"msg": "Invalid request", "loc": ()}
    loc = [part for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return JSONResponse(
        status_code=422,
        content={
            "detail": first["msg"],
            "field": str(loc[0]) if loc else None,
            "errors": [{"loc": list(e.get("loc", ())), "msg": e["msg"], "type": e["type"]} for e in errors],
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.settings.auto_create_tables:
        # Импорт моделей регистрирует таблицы в Base.metadata
        import docsearch.db.models  # noqa: F401

        async with app.state.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    yield
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Сборка приложения.

    База данных, кэш, CORS и уровень логов берутся из ``settings``;
    токены подписываются секретом из настроек окружения процесса.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="DocSearch",
        description="Поиск и управление текстовыми документами",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    if settings is default_settings:
        app.state.engine = default_engine
        app.state.session_factory = SessionLocal
    else:
        app.state.engine = build_engine(settings)
        app.state.session_factory = build_session_factory(app.state.engine)
    app.state.query_cache = QueryCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_entries=settings.cache_max_entries
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DocumentError, document_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(auth_router)
    app.include_router(documents_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
