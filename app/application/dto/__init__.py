"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .customer_dto import *
from .invoice_dto import *
from .user_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "NotesMixin",

    # Customer DTOs
    "CreateCustomerRequestDTO",
    "UpdateCustomerRequestDTO",
    "CustomerResponseDTO",

    # Invoice DTOs
    "InvoiceItemRequestDTO",
    "CreateInvoiceRequestDTO",
    "UpdateInvoiceRequestDTO",
    "InvoiceItemResponseDTO",
    "BusinessProfileDTO",
    "InvoiceResponseDTO",
    "PaymentProofResponseDTO",
    "SendInvoiceResponseDTO",
    "DashboardResponseDTO",
    "DailyRevenueDTO",

    # User DTOs
    "RegisterRequestDTO",
    "LoginRequestDTO",
    "UpdateProfileRequestDTO",
    "UpdatePasswordRequestDTO",
    "UpdateSettingsRequestDTO",
    "SettingsResponseDTO",
    "UserResponseDTO",
    "AuthResponseDTO",
    "LogoResponseDTO",
    "UserCountResponseDTO",
]
