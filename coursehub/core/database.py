from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from coursehub.core.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def enum_values(enum_cls):
    """Stores enum ``value`` strings rather than member names."""
    return [member.value for member in enum_cls]
