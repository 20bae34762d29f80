"""Storage manager for content.db.

This module provides the main interface for opening the content database:
engine creation, schema versioning and session management. Query functions
live in storage/repository.py.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from storage.content_models import CONTENT_SCHEMA_VERSION, ContentBase, Meta

# Default paths
DATA_DIR = Path(__file__).parent.parent / "data"


# CRITICAL: Set PRAGMAs per connection, not per engine
# SQLite requires these settings on every new connection
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Set SQLite PRAGMAs for every new connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class StorageManager:
    """Manager for the content.db database.

    Usage:
        manager = StorageManager(path)

        with manager.get_session(read_only=True) as session:
            categories = fetch_categories(session)

    IMPORTANT:
    - Browse and sitemap reads should use read_only=True sessions
    - Schema versions are checked on initialization
    """

    def __init__(self, database_path: Path | None):
        """Initialize storage manager.

        Args:
            database_path: Directory where content.db lives (defaults to data/)
        """
        if database_path is None:
            database_path = DATA_DIR
        self.content_path = database_path / "content.db"
        self.engine: Engine | None = None

        self._ensure_database()

    def _ensure_database(self):
        """Ensure the database file exists and the schema is initialized."""
        self.content_path.parent.mkdir(parents=True, exist_ok=True)

        # Sessions are opened from FastAPI's threadpool, so pooled
        # connections must not be pinned to their creating thread.
        self.engine = create_engine(
            f"sqlite:///{self.content_path}",
            connect_args={"check_same_thread": False},
        )

        # Create tables if needed
        ContentBase.metadata.create_all(self.engine)

        # Check/set schema version
        self._verify_schema_version(self.engine)

    def _verify_schema_version(self, engine):
        """Verify content.db schema version matches code version.

        Args:
            engine: SQLAlchemy engine for content.db

        Raises:
            RuntimeError: If schema version mismatch detected
        """
        Session = sessionmaker(bind=engine)
        session = Session()

        try:
            meta = session.query(Meta).filter_by(key="schema_version").first()

            if meta is None:
                # New database, set version
                meta = Meta(key="schema_version", value=CONTENT_SCHEMA_VERSION)
                session.add(meta)
                session.commit()
            elif meta.value != CONTENT_SCHEMA_VERSION:
                raise RuntimeError(
                    f"content.db schema version mismatch: "
                    f"database is v{meta.value}, code expects v{CONTENT_SCHEMA_VERSION}. "
                    f"Delete {self.content_path} and re-seed the content."
                )
        finally:
            session.close()

    @contextmanager
    def get_session(self, read_only: bool = False) -> Iterator[Session]:
        """Get SQLAlchemy session for content.db.

        Args:
            read_only: If True, returns session that raises error on flush/commit.

        Returns:
            Context manager yielding a SQLAlchemy session
        """
        Session = sessionmaker(bind=self.engine)
        session = Session()

        if read_only:
            # Prevent writes by raising on flush
            @event.listens_for(session, "before_flush")
            def prevent_flush(session, flush_context, instances):
                raise RuntimeError("Cannot modify content.db with a read-only session.")

        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
