"""
Application layer use cases.
Business logic for the invoicing service.
"""

from .base_use_case import *
from .customer_use_cases import *
from .invoice_use_cases import *
from .user_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",

    # Customer Use Cases
    "CreateCustomerUseCase",
    "UpdateCustomerUseCase",
    "GetCustomerUseCase",
    "ListCustomersUseCase",
    "DeleteCustomerUseCase",

    # Invoice Use Cases
    "CreateInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "GetInvoiceUseCase",
    "ListInvoicesUseCase",
    "DeleteInvoiceUseCase",
    "UploadPaymentProofUseCase",
    "SendInvoiceUseCase",
    "GetDashboardStatisticsUseCase",
    "GetRevenueByRangeUseCase",

    # User Use Cases
    "PasswordPolicy",
    "RegisterUserUseCase",
    "LoginUseCase",
    "GetCurrentUserUseCase",
    "UpdateProfileUseCase",
    "UpdatePasswordUseCase",
    "UploadLogoUseCase",
    "UpdateSettingsUseCase",
    "CountActiveUsersUseCase",
]
