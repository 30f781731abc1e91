"""
slipmatch - Bank Transfer Slip Enrichment for PocketSmith

Matches bank-transfer notification records (one semicolon-delimited line per
transfer slip) to the transactions PocketSmith imported from the bank feed,
and enriches each match with the real payee, the transfer reference, a
category from the user's rules and the slip image.

Domain Packages:
- core: Configuration, money and date primitives, errors, telemetry
- notifications: Notification record parsing and source loading
- pocketsmith: PocketSmith API models and client
- enrichment: Candidate matching and the reconciliation loop
- cli: Command-line interface

Example Usage:
    from slipmatch.notifications import NotificationRecord
    from slipmatch.enrichment import CandidateSelector, ProcessedReferenceSet

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "slipmatch contributors"

from .core.config import Environment, get_config
from .core.money import Money
from .notifications.models import NotificationRecord

__all__ = [
    "Environment",
    "Money",
    "NotificationRecord",
    "get_config",
]
