"""
Shared FastAPI dependencies for the routers.
Tests override these to swap the database, storage and email backends.
"""

from fastapi import UploadFile

from app.application.use_cases.base_use_case import Clock
from app.domain.models.base import utc_now
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.email_service import EmailService
from app.domain.services.storage_service import FileStorage, UploadedFile
from app.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.email import get_email_service as _get_email_service
from app.infrastructure.storage import get_storage_service


def get_unit_of_work() -> UnitOfWork:
    """Dependency to get a fresh unit of work."""
    return SQLAlchemyUnitOfWork()


def get_storage() -> FileStorage:
    """Dependency to get the file storage backend."""
    return get_storage_service()


def get_email_service() -> EmailService:
    """Dependency to get the email backend."""
    return _get_email_service()


def get_clock() -> Clock:
    return utc_now


async def read_upload(file: UploadFile) -> UploadedFile:
    """Read a multipart upload into memory."""
    content = await file.read()
    return UploadedFile(
        filename=file.filename or "",
        content_type=file.content_type or "",
        content=content,
    )
