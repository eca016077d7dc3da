"""
Infrastructure layer for the Fakturly invoicing service.

This layer contains the implementation details for external systems integration:
- Database (SQLAlchemy)
- Authentication (passlib and python-jose)
- File Storage (Supabase Storage)
- Email (SMTP with Jinja2 templates)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
