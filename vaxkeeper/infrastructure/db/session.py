from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from vaxkeeper.infrastructure.db.engine import get_engine

SessionFactory = Callable[[], AbstractContextManager[Session]]


def make_session_scope(engine: Engine) -> SessionFactory:
    session_local = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True
    )

    @contextmanager
    def _session_scope() -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session: Session = session_local()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _session_scope


engine = get_engine()
session_scope = make_session_scope(engine)
