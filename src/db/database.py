"""Generate database sessions"""

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """SQLite in-memory databases need a single shared connection, everything else uses the default pool."""
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo)


def init_db(engine: Engine) -> sessionmaker[Session]:
    """Ensure all tables are created and hand out a session factory bound to the engine."""
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False)

