"""Domain layer for jobledger application."""

from jobledger.domain.ledger import Ledger
from jobledger.domain.job import JobService
from jobledger.domain.company import CompanyService

__all__ = [
    "Ledger",
    "JobService",
    "CompanyService",
]
