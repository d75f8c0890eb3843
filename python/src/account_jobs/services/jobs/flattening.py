"""
Expense export flattening.

Turns one (event, expense) pair into a flat row and renders rows as CSV.

Payment projection:
- one-off payment: its fields as-is
- payment schedule: name/description/isPaid/date/method of the LAST
  installment, amount = sum of every installment amount
- neither: no payment columns at all
"""

import csv
import io
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from ...models import DocumentSnapshot

ExportRecord = Dict[str, Any]

PAYMENT_PREFIX = "expense_payment_"


def _audit(data: Dict[str, Any], name: str) -> Any:
    # Stored as _createdDate etc.; plain names accepted too
    if f"_{name}" in data:
        return data[f"_{name}"]
    return data.get(name)


def _embedded(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def _payment_columns(payment: Dict[str, Any], amount: Any) -> ExportRecord:
    return {
        f"{PAYMENT_PREFIX}name": payment.get("name"),
        f"{PAYMENT_PREFIX}description": payment.get("description"),
        f"{PAYMENT_PREFIX}amount": amount,
        f"{PAYMENT_PREFIX}isPaid": payment.get("isPaid"),
        f"{PAYMENT_PREFIX}date": payment.get("date"),
        f"{PAYMENT_PREFIX}method": payment.get("method"),
    }


def project_payment(expense: Dict[str, Any]) -> ExportRecord:
    """
    Derive the ``expense_payment_*`` columns of an expense.

    Returns:
        Payment columns, or an empty dict when the expense has no payment
    """
    one_off = expense.get("oneOffPayment")
    if isinstance(one_off, dict):
        return _payment_columns(one_off, one_off.get("amount"))

    schedule = expense.get("paymentSchedule") or []
    if schedule:
        total = sum(installment.get("amount") or 0 for installment in schedule)
        return _payment_columns(schedule[-1], total)

    return {}


def flatten_expense(event: DocumentSnapshot, expense: DocumentSnapshot) -> ExportRecord:
    """Build one export row from an expense and its parent event."""
    ev = event.data
    ex = expense.data
    vendor = _embedded(ex, "vendor")

    record: ExportRecord = {
        "event_id": event.id,
        "event_name": ev.get("name"),
        "event_description": ev.get("description"),
        "event_date": ev.get("eventDate"),
        "event_created": _audit(ev, "createdDate"),
        "event_createdBy": _audit(ev, "createdBy"),
        "event_updated": _audit(ev, "updatedDate"),
        "event_updatedBy": _audit(ev, "updatedBy"),

        "expense_id": expense.id,
        "expense_date": ex.get("date"),
        "expense_name": ex.get("name"),
        "expense_description": ex.get("description"),
        "expense_amount": ex.get("amount"),
        "expense_currency": ex.get("currency"),
        "expense_notes": ex.get("notes"),
        "expense_category": _embedded(ex, "category").get("name"),

        "expense_vendor_name": vendor.get("name"),
        "expense_vendor_email": vendor.get("email"),
        "expense_vendor_website": vendor.get("website"),
        "expense_vendor_address": vendor.get("address"),
    }
    record.update(project_payment(ex))
    record.update({
        "expense_created": _audit(ex, "createdDate"),
        "expense_createdBy": _audit(ex, "createdBy"),
        "expense_updated": _audit(ex, "updatedDate"),
        "expense_updatedBy": _audit(ex, "updatedBy"),
    })
    return record


def collect_columns(records: Iterable[ExportRecord]) -> List[str]:
    """Union of record keys, in first-encounter order."""
    columns: Dict[str, None] = {}
    for record in records:
        for key in record:
            columns.setdefault(key)
    return list(columns)


def _format_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def render_csv(records: List[ExportRecord]) -> str:
    """Render rows as CSV text with a header row."""
    columns = collect_columns(records)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(columns)
    for record in records:
        writer.writerow([_format_cell(record.get(column)) for column in columns])

    return output.getvalue()
