"""Company domain service."""

from dataclasses import replace
from typing import Callable, Optional

from jobledger.domain.entities import Company as CompanyEntity
from jobledger.domain.ledger import Ledger
from jobledger.utils.ids import new_id


def _name_key(name: str) -> str:
    return name.strip().casefold()


class CompanyService:
    """Service for looking up and registering companies."""

    def __init__(self, ledger: Ledger, id_factory: Callable[[], str] = new_id):
        """Initialize company service.

        Args:
            ledger: Ledger holding the current state
            id_factory: Source of new company IDs
        """
        self.ledger = ledger
        self.id_factory = id_factory

    def list_companies(self) -> list[CompanyEntity]:
        """List all companies, newest first."""
        return list(self.ledger.data.companies)

    def get_company(self, company_id: Optional[str]) -> Optional[CompanyEntity]:
        """Get company by ID, or None if absent."""
        if not company_id:
            return None
        for company in self.ledger.data.companies:
            if company.id == company_id:
                return company
        return None

    def find_company_by_name(self, name: Optional[str]) -> Optional[CompanyEntity]:
        """Find a company by name, ignoring case and surrounding whitespace."""
        key = _name_key(name or "")
        if not key:
            return None
        for company in self.ledger.data.companies:
            if _name_key(company.name) == key:
                return company
        return None

    def get_company_name(self, company_id: Optional[str] = None) -> str:
        """Get a company's name.

        Returns "" when the ID is missing or points at no company, so
        dangling references render as blank instead of failing.
        """
        company = self.get_company(company_id)
        return company.name if company is not None else ""

    def upsert_company_by_name(self, name: Optional[str]) -> str:
        """Return the ID of the company with this name, creating it if needed.

        Matching ignores case and surrounding whitespace. An existing match
        is returned untouched, even if its casing differs from `name`. New
        companies store the trimmed name and go to the front of the list.

        Args:
            name: Company name as typed

        Returns:
            Company ID, or "" if the name is blank (nothing is created)
        """
        trimmed = (name or "").strip()
        if not trimmed:
            return ""

        existing = self.find_company_by_name(trimmed)
        if existing is not None:
            return existing.id

        company = CompanyEntity(id=self.id_factory(), name=trimmed)
        data = self.ledger.data
        self.ledger.commit(replace(data, companies=(company, *data.companies)))
        return company.id
