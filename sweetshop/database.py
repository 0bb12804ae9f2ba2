from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from sweetshop.core import config


DATABASE_URL = config.DATABASE_URL

connect_args = {'check_same_thread': False} if DATABASE_URL.startswith('sqlite') else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_sweet_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_sweet_schema(bind=None) -> None:
    global _sweet_schema_checked

    if _sweet_schema_checked:
        return

    with _schema_lock:
        if _sweet_schema_checked:
            return

        bind = bind or engine
        inspector = inspect(bind)

        if 'sweets' not in inspector.get_table_names():
            _sweet_schema_checked = True
            return

        with bind.begin() as connection:
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_sweets_category_price ON sweets(category, price)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_sweets_created_at ON sweets(created_at)')
            )

        _sweet_schema_checked = True

