from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def enable_sqlite_savepoints(engine: Engine) -> None:
    """
    pysqlite defers BEGIN until the first DML statement, which breaks
    SAVEPOINT semantics. Take over transaction control so that
    Session.begin_nested() behaves like it does on PostgreSQL.
    """
    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, echo=settings.DEBUG, **kwargs)
        enable_sqlite_savepoints(engine)
        return engine

    if "poolclass" not in kwargs:
        # Connection pooling settings
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        # Only echo SQL queries in debug mode
        echo=settings.DEBUG,
        connect_args={"options": "-c timezone=utc"},
        **kwargs,
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
