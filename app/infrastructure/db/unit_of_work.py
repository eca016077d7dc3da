"""
SQLAlchemy unit of work.
One session, one transaction, shared by every repository of a use case.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.domain.repositories.unit_of_work import UnitOfWork
from app.infrastructure.db.database import SessionLocal
from app.infrastructure.repositories.customer_repository import SQLAlchemyCustomerRepository
from app.infrastructure.repositories.invoice_repository import SQLAlchemyInvoiceRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work backed by a SQLAlchemy session."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self.session_factory()
        self.users = SQLAlchemyUserRepository(self.session)
        self.customers = SQLAlchemyCustomerRepository(self.session)
        self.invoices = SQLAlchemyInvoiceRepository(self.session)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            if exc_type is not None:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()
        finally:
            self.session.close()
            self.session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        # No-op after a successful commit
        self.session.rollback()
