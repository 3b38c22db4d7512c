from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from tourbook.config import get_settings

settings = get_settings()

DB_URL = settings.database_url or "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(DB_URL, echo=settings.sql_echo)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)