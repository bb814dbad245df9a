# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.utils.settings import DATABASE_URL
from storefront.utils.retry import db_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    #in-memory sqlite lives as long as its connection, so every session has to share one
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


#dialects with INSERT ... ON CONFLICT, needed for cart merges and favorites
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def ensure_supported_dialect(bind) -> None:
    name = bind.dialect.name
    if name not in UPSERT_INSERTS:
        raise RuntimeError(
            f"Unsupported database dialect {name!r}, use one of: {', '.join(UPSERT_INSERTS)}"
        )


def dialect_insert(db: Session):
    """
    Returns the dialect specific ``insert`` construct (with ``on_conflict_*``)
    for the database the session is bound to. The dialect is validated at
    startup by ``init_db``.
    """
    return UPSERT_INSERTS[db.get_bind().dialect.name]


@db_retry()
def init_db(bind=None) -> None:
    #models have to be registered in Base.metadata before create_all
    import storefront.data.models  # noqa: F401

    bind = bind or engine
    ensure_supported_dialect(bind)
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=bind)
