from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from video_downloader.config.settings import config
from video_downloader.models.database import Base

def build_engine(url: str) -> Engine:
    """SQLAlchemy engine for the history store"""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, or every session sees an empty database
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

engine = build_engine(config.database.url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(bind: Engine = engine) -> None:
    Base.metadata.create_all(bind=bind)

def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
