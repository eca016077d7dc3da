#!/usr/bin/env python3
"""
Database management script for the Fakturly backend.
Handles table creation, resets, invoice-settings backfill and licences.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import select

from app.domain.models.base import new_id
from app.domain.models.user import LicenseStatus, UserSettings
from app.infrastructure.db.database import SessionLocal, create_tables, drop_tables
from app.infrastructure.db.models import UserModel, UserSettingsModel
from app.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from app.infrastructure.mappers.user_mapper import UserMapper


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Resetting database...")
        drop_tables()
        create_tables()
    else:
        print("Database reset cancelled.")


def backfill_settings():
    """Create invoice settings for users that have none."""
    mapper = UserMapper()
    session = SessionLocal()
    try:
        user_ids = session.execute(
            select(UserModel.id)
            .outerjoin(UserSettingsModel, UserSettingsModel.user_id == UserModel.id)
            .where(UserSettingsModel.id.is_(None))
        ).scalars().all()

        for user_id in user_ids:
            session.add(mapper.settings_to_model(UserSettings(id=new_id(), user_id=user_id)))
        session.commit()
        print(f"Created settings for {len(user_ids)} user(s)")
    finally:
        session.close()


def set_license_status(email: str, status: str):
    """Activate or suspend a user's licence."""
    license_status = LicenseStatus(status.upper())
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_email(email.lower())
        if user is None or user.settings is None:
            print(f"No user with settings found for {email}")
            return
        user.settings.license_status = license_status
        user.settings.mark_as_updated()
        uow.users.save_settings(user.settings)
        uow.commit()
    print(f"Licence for {email} is now {license_status.value}")


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  create                   - Create missing tables")
        print("  drop                     - Drop all tables")
        print("  reset                    - Reset database (WARNING: drops all data)")
        print("  backfill-settings        - Create invoice settings for users without them")
        print("  license <email> <status> - Set licence status (ACTIVE or SUSPENDED)")
        return

    command_name = sys.argv[1]

    if command_name == "create":
        create_tables()
        print("Tables created")
    elif command_name == "drop":
        drop_tables()
        print("Tables dropped")
    elif command_name == "reset":
        reset_database()
    elif command_name == "backfill-settings":
        backfill_settings()
    elif command_name == "license" and len(sys.argv) == 4:
        set_license_status(sys.argv[2], sys.argv[3])
    else:
        print(f"Unknown command: {' '.join(sys.argv[1:])}")


if __name__ == "__main__":
    main()
