from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from docsearch.core.config import Settings, settings

# Базовый класс для моделей
Base = declarative_base()


def build_engine(config: Settings) -> AsyncEngine:
    """Асинхронный движок по настройкам"""
    return create_async_engine(config.database_url, future=True, echo=config.database_echo)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


# Движок и сессии процесса по настройкам окружения
engine = build_engine(settings)
SessionLocal = build_session_factory(engine)


# Функция для dependency injection в FastAPI
async def get_db(request: Request):
    # Приложение, созданное со своими настройками, держит свою фабрику сессий
    session_factory = getattr(request.app.state, "session_factory", SessionLocal)
    async with session_factory() as session:
        yield session
