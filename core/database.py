from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from core.config import settings
# Use the same Base as models to ensure one metadata registry
from models.base import Base


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions and threads
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
            "future": True,
        }
    return {"pool_pre_ping": True, "pool_recycle": 3600, "future": True}


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URI),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
