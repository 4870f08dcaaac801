from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from hackhub.core.config import settings


def build_engine(url: str, **kwargs) -> Engine:
    """
    Creates an engine for `url`. SQLite needs two tweaks: connections are
    shared across FastAPI's worker threads, and foreign keys (and with them
    ON DELETE CASCADE) are off unless enabled per connection.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args

    new_engine = create_engine(url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    # Import models so every table is registered on Base.metadata
    import hackhub.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
