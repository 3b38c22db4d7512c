from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.application.interfaces.transaction_manager import TransactionManager


class SQLAlchemyTransactionManager(TransactionManager):
    """
    Cada bloque ``start()`` termina confirmado en la base.

    Las lecturas previas (usuario actual, booking a validar) abren la
    transacción por autobegin; en ese caso el bloque hace commit o rollback
    explícito al salir, para que las notificaciones posteriores vean la
    escritura ya persistida.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if not self._session.in_transaction():
            async with self._session.begin():
                yield
            return

        try:
            yield
        except Exception:
            await self._session.rollback()
            raise
        await self._session.commit()
