# HORECA/backend/horeca/database.py

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from horeca.config import DATABASE_URL, LOG_LEVEL
import logging

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Pool options only make sense for a real server database
if DATABASE_URL.startswith("sqlite"):
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    engine_options = {
        "pool_size": 5,  # Permanent connections
        "max_overflow": 10,  # Temporary extra connections
        "pool_pre_ping": True,  # Check the connection is alive before use
    }

try:
    engine = create_engine(DATABASE_URL, echo=False, **engine_options)
    logger.info("✅ Database engine created")
except Exception as e:
    logger.error(f"❌ Could not create database engine: {e}")
    raise

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()

# FastAPI dependency
def get_db():
    """
    FastAPI dependency yielding a database session.
    Use in routes with: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def create_tables():
    """Create every table declared on the models"""
    # Models must be imported so they register on Base.metadata
    from horeca.models import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Tables created/checked")

def check_connection():
    """Check that the database answers"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"❌ Connection error: {e}")
        return False
