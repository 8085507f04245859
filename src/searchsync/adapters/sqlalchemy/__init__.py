"""SQLAlchemy adapter – backing record store and session factory."""
from searchsync.adapters.sqlalchemy.record_store import SqlAlchemyRecordStore
from searchsync.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = ["SqlAlchemyRecordStore", "SqlAlchemySessionFactory"]
