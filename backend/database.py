# backend/database.py
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    # Hosted Postgres providers still hand out postgres:// which SQLAlchemy rejects
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def make_engine(url: str, **kwargs) -> Engine:
    url = normalize_database_url(url)
    if "sqlite" in url:
        connect_args = {"check_same_thread": False}  # Only for SQLite
    else:
        connect_args = {}
    return create_engine(url, connect_args=connect_args, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    # Register every table on Base.metadata before creating them
    import models.users  # noqa: F401
    import models.resources  # noqa: F401

    Base.metadata.create_all(bind=engine)


# One session per request, taken from the factory the app was built with
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
