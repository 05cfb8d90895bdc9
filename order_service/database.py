import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base class for SQLAlchemy models
Base = declarative_base()


class Database:
    """Owns the engine and session factory for the lifetime of the app"""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine = None
        self.SessionLocal = None

    def open(self):
        # Create SQLAlchemy engine and session
        if self.url.startswith("sqlite"):
            self.engine = create_engine(
                self.url, echo=self.echo, connect_args={"check_same_thread": False}
            )
        else:
            self.engine = create_engine(self.url, echo=self.echo, pool_pre_ping=True)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Database engine opened for {self.engine.url.render_as_string(hide_password=True)}")

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)

    def session(self):
        if self.SessionLocal is None:
            raise RuntimeError("database is not open")
        return self.SessionLocal()

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self.SessionLocal = None
