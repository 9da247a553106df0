# storefront/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _unicode_lower(dbapi_connection, connection_record):
        #sqlite's lower() only folds ASCII, catalog search needs "Á" -> "á" like postgres
        dbapi_connection.create_function(
            "lower", 1, lambda s: s.lower() if s is not None else None, deterministic=True
        )

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    #one session per request, always closed
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
