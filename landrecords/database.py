from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from landrecords.db_models import Base


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    # Detail, ownership and boundary rows cascade from their parent only when
    # SQLite is told to enforce foreign keys on every new connection.
    @event.listens_for(engine, "connect")
    def set_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str) -> Engine:
    is_sqlite = database_url.startswith("sqlite")
    connect_args: dict[str, object] = {"check_same_thread": False} if is_sqlite else {}

    engine = create_engine(database_url, future=True, connect_args=connect_args)
    if is_sqlite:
        _enable_sqlite_foreign_keys(engine)
    return engine


def build_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create the schema if needed and return a session factory bound to it."""
    engine = build_engine(database_url)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
