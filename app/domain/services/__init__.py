"""
Domain services for the invoicing service.
This module exports all domain services for complex business logic.
"""

from .billing_service import BillingService, LineItemInput, PricedLine, InvoiceTotals
from .numbering_service import NumberingService
from .status_machine import InvoiceStateMachine, TRANSITIONS
from .statistics_service import StatisticsService, DashboardStatistics, DailyRevenue
from .auth_service import AuthService
from .email_service import EmailService
from .storage_service import FileStorage, UploadedFile

__all__ = [
    "BillingService",
    "LineItemInput",
    "PricedLine",
    "InvoiceTotals",
    "NumberingService",
    "InvoiceStateMachine",
    "TRANSITIONS",
    "StatisticsService",
    "DashboardStatistics",
    "DailyRevenue",
    "AuthService",
    "EmailService",
    "FileStorage",
    "UploadedFile",
]
