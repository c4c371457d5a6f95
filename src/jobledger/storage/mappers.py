"""Mapper functions to convert between domain entities and JSON documents.

The persisted document uses camelCase keys and plain JSON numbers. Reading
is lenient: unknown keys are dropped, numbers go through parse_number, and
entries that are not objects are skipped. Absent optional fields are left
out when writing.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

from jobledger.domain import entities as domain
from jobledger.utils.amount_parser import parse_number
from jobledger.utils.ids import new_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _amount_to_json(value: Any) -> int | float:
    number = parse_number(value)
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def _text(raw: dict, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _optional_text(raw: dict, key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _entity_id(raw: dict, kind: str) -> str:
    entity_id = _text(raw, "id")
    if not entity_id:
        entity_id = new_id()
        logger.warning("Stored %s without id; assigned %s", kind, entity_id)
    return entity_id


def _entries(raw_list: Any, convert: Callable[[dict], T], kind: str) -> tuple[T, ...]:
    """Convert a list of stored objects, skipping anything that is not an object."""
    if not isinstance(raw_list, list):
        return ()
    converted = []
    for raw in raw_list:
        if not isinstance(raw, dict):
            logger.warning("Skipping malformed %s entry: %r", kind, raw)
            continue
        converted.append(convert(raw))
    return tuple(converted)


def _put_optional(document: dict, key: str, value: Optional[str]) -> None:
    if value is not None:
        document[key] = value


# Entities -> documents

def company_to_dict(company: domain.Company) -> dict[str, Any]:
    """Convert domain Company entity to a JSON object."""
    document = {"id": company.id, "name": company.name}
    _put_optional(document, "rut", company.rut)
    return document


def invoice_to_dict(invoice: domain.Invoice) -> dict[str, Any]:
    """Convert domain Invoice entity to a JSON object."""
    document = {"id": invoice.id, "jobId": invoice.job_id}
    _put_optional(document, "companyId", invoice.company_id)
    document.update(
        number=invoice.number,
        issueDate=invoice.issue_date,
        dueDate=invoice.due_date,
        net=_amount_to_json(invoice.net),
        vat=_amount_to_json(invoice.vat),
        total=_amount_to_json(invoice.total),
        paid=invoice.paid,
    )
    return document


def expense_to_dict(expense: domain.Expense) -> dict[str, Any]:
    """Convert domain Expense entity to a JSON object."""
    document = {
        "id": expense.id,
        "jobId": expense.job_id,
        "description": expense.description,
        "amount": _amount_to_json(expense.amount),
        "createdAt": expense.created_at,
    }
    _put_optional(document, "invoiceId", expense.invoice_id)
    return document


def job_to_dict(job: domain.Job) -> dict[str, Any]:
    """Convert domain Job entity to a JSON object."""
    document = {
        "id": job.id,
        "name": job.name,
        "quote": _amount_to_json(job.quote),
        "quoteDate": job.quote_date,
    }
    _put_optional(document, "dueDate", job.due_date)
    document["paid"] = job.paid
    _put_optional(document, "companyId", job.company_id)
    if job.invoices is not None:
        document["invoices"] = [invoice_to_dict(i) for i in job.invoices]
    document["expenses"] = [expense_to_dict(e) for e in job.expenses]
    return document


def app_data_to_dict(data: domain.AppData) -> dict[str, Any]:
    """Convert the aggregate root to the current document shape."""
    return {
        "jobs": [job_to_dict(job) for job in data.jobs],
        "companies": [company_to_dict(company) for company in data.companies],
    }


# Documents -> entities

def company_from_dict(raw: dict) -> domain.Company:
    """Convert a stored company object to a domain Company entity."""
    return domain.Company(
        id=_entity_id(raw, "company"),
        name=_text(raw, "name"),
        rut=_optional_text(raw, "rut"),
    )


def invoice_from_dict(raw: dict, job_id: str = "") -> domain.Invoice:
    """Convert a stored invoice object to a domain Invoice entity."""
    return domain.Invoice(
        id=_entity_id(raw, "invoice"),
        job_id=_text(raw, "jobId") or job_id,
        number=_text(raw, "number"),
        issue_date=_text(raw, "issueDate"),
        due_date=_text(raw, "dueDate"),
        net=parse_number(raw.get("net")),
        vat=parse_number(raw.get("vat")),
        total=parse_number(raw.get("total")),
        paid=bool(raw.get("paid")),
        company_id=_optional_text(raw, "companyId"),
    )


def expense_from_dict(raw: dict, job_id: str = "") -> domain.Expense:
    """Convert a stored expense object to a domain Expense entity."""
    return domain.Expense(
        id=_entity_id(raw, "expense"),
        job_id=_text(raw, "jobId") or job_id,
        description=_text(raw, "description"),
        amount=parse_number(raw.get("amount")),
        created_at=_text(raw, "createdAt"),
        invoice_id=_optional_text(raw, "invoiceId"),
    )


def job_from_dict(raw: dict) -> domain.Job:
    """Convert a stored job object to a domain Job entity."""
    job_id = _entity_id(raw, "job")
    invoices = None
    if raw.get("invoices") is not None:
        invoices = _entries(raw["invoices"], lambda r: invoice_from_dict(r, job_id), "invoice")
    return domain.Job(
        id=job_id,
        name=_text(raw, "name"),
        quote=parse_number(raw.get("quote")),
        quote_date=_text(raw, "quoteDate"),
        due_date=_optional_text(raw, "dueDate"),
        paid=bool(raw.get("paid")),
        company_id=_optional_text(raw, "companyId"),
        invoices=invoices,
        expenses=_entries(raw.get("expenses"), lambda r: expense_from_dict(r, job_id), "expense"),
    )


def jobs_from_list(raw_jobs: list) -> tuple[domain.Job, ...]:
    """Convert a stored job list, skipping malformed entries."""
    return _entries(raw_jobs, job_from_dict, "job")


def companies_from_list(raw_companies: list) -> tuple[domain.Company, ...]:
    """Convert a stored company list, skipping malformed entries."""
    return _entries(raw_companies, company_from_dict, "company")
