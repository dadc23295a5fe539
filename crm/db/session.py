from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from crm.core.config import settings

# Global engine instance
_engine = None


def build_engine(db_url: str):
    # SQLite fix for multithreading; in-memory databases share one connection
    if db_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if ":memory:" in db_url or db_url == "sqlite://":
            return create_engine(db_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(db_url, connect_args=connect_args)
    return create_engine(db_url, pool_pre_ping=True)


def get_engine():
    global _engine

    if _engine is not None:
        return _engine

    # Fallback to SQLite when DATABASE_URL is not configured
    db_url = settings.DATABASE_URL or "sqlite:///./sqlite.db"
    _engine = build_engine(db_url)
    return _engine


def init_db(engine=None) -> None:
    # Importing the models registers their tables on SQLModel.metadata
    import crm.models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())


engine = get_engine()


def get_db():
    with Session(engine) as session:
        yield session
