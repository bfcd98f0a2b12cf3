from typing import Generator

from sqlmodel import create_engine, Session

from farmtrak.config import settings


def _engine_kwargs(url: str) -> dict:
    """
    Limites por chamada ao banco.

    Em PostgreSQL aplica statement_timeout na conexão e pool_timeout no checkout,
    para que nenhuma etapa da request fique suspensa indefinidamente.
    """
    if not url.startswith("postgresql"):
        return {}
    kwargs: dict = {"pool_timeout": settings.db_pool_timeout, "pool_pre_ping": True}
    if settings.db_statement_timeout_ms > 0:
        kwargs["connect_args"] = {"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"}
    return kwargs


DATABASE_URL = settings.database_url

# Engine singleton
engine = create_engine(DATABASE_URL, echo=False, **_engine_kwargs(DATABASE_URL))


def get_session() -> Generator[Session, None, None]:
    """Dependency do FastAPI para obter sessão do banco."""
    with Session(engine) as session:
        yield session
