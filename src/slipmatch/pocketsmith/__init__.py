"""
PocketSmith Integration Package

Domain models and the HTTP client for the PocketSmith ledger API.

Key Components:
- PocketsmithClient: current user, category rules, transaction search and update, attachments
- PocketsmithTransaction, CategoryRule, Attachment: typed API models
- TransactionUpdate: body of a transaction update
"""

from .client import PocketsmithClient
from .models import (
    Attachment,
    CategoryRule,
    PocketsmithCategory,
    PocketsmithTransaction,
    PocketsmithUser,
    TransactionUpdate,
)

__all__ = [
    "Attachment",
    "CategoryRule",
    "PocketsmithCategory",
    "PocketsmithClient",
    "PocketsmithTransaction",
    "PocketsmithUser",
    "TransactionUpdate",
]
