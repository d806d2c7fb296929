import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from docsearch.core.errors import RemoteFailure

logger = logging.getLogger(__name__)


def storage_errors(method):
    """Откат сессии и перевод ошибок SQLAlchemy в RemoteFailure"""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.warning(f"{method.__qualname__} failed: {e}")
            await self.session.rollback()
            raise RemoteFailure() from e

    return wrapper
