from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings

# The channel registry lives in DB_URL (sqlite fallback for local runs).
db_url = settings.DB_URL

# Startup provisioning and request handlers run on different threads, so sqlite
# connections must not be pinned to the creating thread.
connect_args = {}
if db_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(db_url, connect_args=connect_args, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()
