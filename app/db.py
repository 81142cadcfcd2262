from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from structlog import get_logger

from app.config import settings
from app.models.base import Base

logger = get_logger()

def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value

def make_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine; on SQLite, lower() is replaced so ILIKE folds non-ASCII text."""
    bind = create_async_engine(url, **kwargs)
    if bind.dialect.name == "sqlite":
        @event.listens_for(bind.sync_engine, "connect")
        def _register_functions(dbapi_conn, connection_record):
            dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)
    return bind

engine: AsyncEngine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def create_schema(bind: AsyncEngine = engine):
    # Import registers the tables on Base.metadata
    import app.models.owner  # noqa: F401
    import app.models.property  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured", url=bind.url.render_as_string(hide_password=True))

async def ping(bind: AsyncEngine = engine) -> bool:
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database ping failed", error=str(e))
        return False
