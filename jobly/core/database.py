from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from jobly.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Alembic owns table creation, so this only makes sure the models are
    imported and registered on Base.metadata.
    Use "alembic upgrade head" to create/update database schema.
    """
    from jobly.models import company, job  # noqa: F401


def execute_returning(db: Session, stmt) -> Optional[dict]:
    """
    Execute an INSERT/UPDATE/DELETE ... RETURNING statement and commit.

    Returns the first returned row as a dict, or None (after rolling back)
    when the statement matched nothing. Database errors roll back and propagate.
    """
    try:
        row = db.execute(stmt).mappings().first()
        if row is None:
            db.rollback()
            return None
        row = dict(row)
        db.commit()
        return row
    except SQLAlchemyError:
        db.rollback()
        raise
