from typing import Iterator

from sqlmodel import SQLModel, Session, create_engine

from app.config import settings


engine = create_engine(settings.database_dsn, pool_pre_ping=True)


def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with Session(engine) as session:
        yield session
