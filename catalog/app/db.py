import os
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session

DB_USER = os.getenv("DB_USER", "app")
DB_PASS = os.getenv("DB_PASS", "app")
DB_NAME = os.getenv("DB_NAME", "appdb")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_SCHEMA = os.getenv("DB_SCHEMA", "catalog")

# DATABASE_URL wins over the DB_* parts, e.g. sqlite:///catalog.db for local runs.
DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
    # psycopg3; search_path so the unqualified products table lands in our schema
    options = f"-csearch_path={DB_SCHEMA},public"
    DATABASE_URL = (
        f"postgresql+psycopg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        f"?options={options}"
    )

engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def init_db():
    """
    Ensure the schema exists (PostgreSQL only), then create tables (idempotent).
    Called once at application startup.
    """
    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{DB_SCHEMA}"'))
    from .models import Base  # noqa
    Base.metadata.create_all(bind=engine)

def get_session() -> Session:
    """
    FastAPI dependency: one session per request.
    Commits on success, rolls back and re-raises on error, always closes.
    """
    s: Session = SessionLocal()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
