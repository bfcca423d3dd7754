import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.config.settings import settings

logger = logging.getLogger(__name__)

# ============= CONFIGURACIÓN BD =============
def build_database_url():
    """URL de conexión: DATABASE_URL o MySQL (mysql-connector) a partir de DB_*"""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    return URL.create(
        "mysql+mysqlconnector",
        username=settings.DB_USERNAME,
        password=settings.DB_PASSWORD,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_DATABASE,
        query={"charset": "utf8mb4", "collation": "utf8mb4_unicode_ci"},
    )


def create_db_engine(url):
    url_text = str(url)
    if url_text.startswith("sqlite"):
        # Una sola conexión compartida para que la BD en memoria sobreviva entre sesiones
        return create_engine(
            url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=settings.DB_ECHO, pool_pre_ping=True, pool_recycle=3600)


engine = create_db_engine(build_database_url())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Sesión de base de datos por request"""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Crear las tablas que no existan"""
    # Registrar todas las entidades en Base.metadata
    import app.entities.users  # noqa: F401
    import app.entities.catalog  # noqa: F401
    import app.entities.carts  # noqa: F401
    import app.entities.orders  # noqa: F401
    import app.entities.coupons  # noqa: F401
    import app.entities.finance  # noqa: F401
    import app.entities.community  # noqa: F401
    import app.entities.analytics  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Tablas verificadas en %s", engine.url.render_as_string(hide_password=True))


def drop_db():
    Base.metadata.drop_all(bind=engine)
