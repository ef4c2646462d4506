import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def make_engine(url: str, **kwargs) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections are shared across threads and enforce foreign keys
    (off by default in SQLite); server databases ping pooled connections
    before handing them out.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    kwargs.setdefault("pool_pre_ping", True)  # Verify connections before using them
    return create_engine(url, **kwargs)


engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def get_db() -> Iterator[Session]:
    """
    Provide a database session and close it afterwards.

    Usage:
        with get_db() as db:
            companies = company_crud.find_all(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create the companies and jobs tables if they don't exist.

    There are no migrations; the ORM models are the schema.
    """
    from app.models import company, job  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=bind or engine)


def positional_to_named(sql: str, values: Sequence[Any] = ()) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $N placeholders as SQLAlchemy named binds.

    >>> positional_to_named('"name"=$1 WHERE handle = $2', ["New", "c1"])
    ('"name"=:p1 WHERE handle = :p2', {'p1': 'New', 'p2': 'c1'})

    Raises:
        ValueError: If the highest placeholder index doesn't match len(values)
    """
    indices = [int(n) for n in PLACEHOLDER_RE.findall(sql)]
    highest = max(indices, default=0)
    if highest != len(values):
        raise ValueError(
            f"Statement uses {highest} placeholder(s) but {len(values)} value(s) were given"
        )

    named_sql = PLACEHOLDER_RE.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return named_sql, params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """Execute raw SQL written with $N placeholders."""
    named_sql, params = positional_to_named(sql, values)
    return db.execute(text(named_sql), params)
