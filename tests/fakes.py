"""
In-memory collaborators for use case tests.
The unit of work snapshots every store on enter and restores it unless the
block committed, which mimics a database transaction.
"""

import copy
import threading
import time
from typing import Dict, List, Optional

from app.domain.models.base import DuplicateEntityError
from app.domain.models.customer import Customer
from app.domain.models.invoice import Invoice, InvoiceStatus, InvoiceSummary
from app.domain.models.user import User, UserSettings
from app.domain.repositories.customer_repository import CustomerRepository
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.repositories.user_repository import UserRepositoryInterface
from app.domain.services.auth_service import AuthService
from app.domain.services.email_service import EmailService
from app.domain.services.storage_service import FileStorage


class InMemoryUserRepository(UserRepositoryInterface):

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.settings: Dict[str, UserSettings] = {}
        self.locked: List[str] = []

    def save(self, user: User) -> User:
        for other in self.users.values():
            if other.email == user.email and other.id != user.id:
                raise DuplicateEntityError("User", "email", user.email)
        self.users[user.id] = copy.deepcopy(user)
        if user.settings is not None:
            self.settings[user.id] = copy.deepcopy(user.settings)
        return user

    def _load(self, user: Optional[User]) -> Optional[User]:
        if user is None:
            return None
        loaded = copy.deepcopy(user)
        loaded.settings = copy.deepcopy(self.settings.get(user.id))
        return loaded

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._load(self.users.get(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._load(next((u for u in self.users.values() if u.email == email), None))

    def count_active(self) -> int:
        return sum(1 for user in self.users.values() if user.is_active)

    def get_settings(self, user_id: str, for_update: bool = False) -> Optional[UserSettings]:
        if for_update:
            self.locked.append(user_id)
        return copy.deepcopy(self.settings.get(user_id))

    def save_settings(self, settings: UserSettings) -> UserSettings:
        self.settings[settings.user_id] = copy.deepcopy(settings)
        return settings


class InMemoryCustomerRepository(CustomerRepository):

    def __init__(self):
        self.customers: Dict[str, Customer] = {}

    def save(self, customer: Customer) -> Customer:
        self.customers[customer.id] = copy.deepcopy(customer)
        return customer

    def get_by_id(self, customer_id: str, user_id: str) -> Optional[Customer]:
        customer = self.customers.get(customer_id)
        if customer is None or customer.user_id != user_id:
            return None
        return copy.deepcopy(customer)

    def list_by_user(self, user_id: str) -> List[Customer]:
        owned = [c for c in self.customers.values() if c.user_id == user_id]
        return [copy.deepcopy(c) for c in sorted(owned, key=lambda c: c.name)]

    def delete(self, customer_id: str, user_id: str) -> bool:
        if self.get_by_id(customer_id, user_id) is None:
            return False
        del self.customers[customer_id]
        return True


class InMemoryInvoiceRepository(InvoiceRepository):

    def __init__(self):
        self.invoices: Dict[str, Invoice] = {}
        self.fail_on_save = False

    def save(self, invoice: Invoice) -> Invoice:
        if self.fail_on_save:
            raise RuntimeError("insert failed")
        for other in self.invoices.values():
            if (other.user_id, other.number) == (invoice.user_id, invoice.number) and other.id != invoice.id:
                raise DuplicateEntityError("Invoice", "number", invoice.number)
        stored = copy.deepcopy(invoice)
        stored.pull_events()
        self.invoices[invoice.id] = stored
        return invoice

    def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        invoice = self.invoices.get(invoice_id)
        if invoice is None or invoice.user_id != user_id:
            return None
        return copy.deepcopy(invoice)

    def list_by_user(self, user_id: str, status: Optional[InvoiceStatus] = None) -> List[Invoice]:
        return [
            copy.deepcopy(i) for i in self.invoices.values()
            if i.user_id == user_id and (status is None or i.status == status)
        ]

    def delete(self, invoice_id: str, user_id: str) -> bool:
        if self.get_by_id(invoice_id, user_id) is None:
            return False
        del self.invoices[invoice_id]
        return True

    def count_by_customer(self, customer_id: str) -> int:
        return sum(1 for i in self.invoices.values() if i.customer_id == customer_id)

    def list_summaries(self, user_id, start_date=None, end_date=None) -> List[InvoiceSummary]:
        return [
            InvoiceSummary(issue_date=i.issue_date, status=i.status, total=i.total)
            for i in self.invoices.values()
            if i.user_id == user_id
            and (start_date is None or i.issue_date >= start_date)
            and (end_date is None or i.issue_date <= end_date)
        ]


class InMemoryUnitOfWork(UnitOfWork):

    def __init__(self):
        self.users = InMemoryUserRepository()
        self.customers = InMemoryCustomerRepository()
        self.invoices = InMemoryInvoiceRepository()
        self.commits = 0
        self.rollbacks = 0
        self._snapshot = None

    def _stores(self):
        return (
            self.users.users, self.users.settings,
            self.customers.customers, self.invoices.invoices,
        )

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._snapshot = copy.deepcopy(self._stores())
        return self

    def commit(self) -> None:
        self.commits += 1
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        self.rollbacks += 1
        users, settings, customers, invoices = self._snapshot
        self.users.users, self.users.settings = users, settings
        self.customers.customers = customers
        self.invoices.invoices = invoices
        self._snapshot = None


class RowLockingUserRepository(InMemoryUserRepository):
    """Reads the shared user stores; reading settings for update takes the row lock."""

    def __init__(self, shared: InMemoryUserRepository, uow: "RowLockingUnitOfWork", read_delay: float):
        super().__init__()
        self.users = shared.users
        self.settings = shared.settings
        self.locked = shared.locked
        self.uow = uow
        self.read_delay = read_delay

    def get_settings(self, user_id: str, for_update: bool = False) -> Optional[UserSettings]:
        if for_update:
            self.uow.lock_row()
        # widens the window between reading and advancing the counter
        time.sleep(self.read_delay)
        return super().get_settings(user_id, for_update)


class RowLockingUnitOfWork(InMemoryUnitOfWork):
    """
    One transaction over the stores of a shared unit of work.
    The row lock is held from the settings read until commit or rollback,
    like SELECT ... FOR UPDATE. Rollback does not restore the stores.
    """

    def __init__(self, shared: InMemoryUnitOfWork, row_lock: threading.Lock, read_delay: float = 0.0):
        super().__init__()
        self.users = RowLockingUserRepository(shared.users, self, read_delay)
        self.customers = shared.customers
        self.invoices = shared.invoices
        self.row_lock = row_lock
        self._holding = False

    def lock_row(self) -> None:
        if not self._holding:
            self.row_lock.acquire()
            self._holding = True

    def _release(self) -> None:
        if self._holding:
            self._holding = False
            self.row_lock.release()

    def __enter__(self) -> "RowLockingUnitOfWork":
        return self

    def commit(self) -> None:
        self.commits += 1
        self._release()

    def rollback(self) -> None:
        self._release()


class FakeAuthService(AuthService):
    """Reversible 'hashing' so tests can reason about stored hashes."""

    def hash_password(self, password: str) -> str:
        return f"hashed:{password}"

    def verify_password(self, password: str, hashed_password: str) -> bool:
        return hashed_password == f"hashed:{password}"

    def generate_access_token(self, user_id: str, email: str) -> str:
        return f"token-{user_id}"

    def verify_token(self, token: str) -> Optional[str]:
        return token[len("token-"):] if token.startswith("token-") else None


class FakeStorage(FileStorage):

    def __init__(self):
        self.uploads = []

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.uploads.append((path, content, content_type))
        return f"https://storage.test/{path}"


class FakeEmailService(EmailService):

    def __init__(self, delivered: bool = True):
        self.delivered = delivered
        self.sent = []

    async def send_email(self, to, subject, body, html_body=None) -> bool:
        self.sent.append((to, subject))
        return self.delivered

    async def send_invoice_email(self, invoice, customer, issuer) -> bool:
        self.sent.append((customer.email, invoice.number))
        return self.delivered
