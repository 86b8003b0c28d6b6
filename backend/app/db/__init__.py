from app.db.base import Base, new_id
from app.db.session import SessionLocal, engine

__all__ = ["Base", "new_id", "SessionLocal", "engine"]
