"""File-name based document classification.

Outgoing invoices are filed as ``YYYY-MM-DD Faktura <number/customer>.pdf``;
everything else dropped into the invoice folders is treated as an incoming
supplier document.
"""

import re
from datetime import date
from typing import Optional

from ledgerfile.domain.entities import InvoiceKind

LEADING_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")

# "Faktura" must be a whole word, so "Fakturaportal" is a supplier document
CUSTOMER_INVOICE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}\s+(?:faktura|invoice)\b", re.IGNORECASE)

DOCUMENT_SUFFIX_PATTERN = re.compile(r"\.[A-Za-z0-9]{2,5}$")
CUSTOMER_NAME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}\s+(?:faktura|invoice)\s+(?:\d+\s+)?(?P<rest>.+)$", re.IGNORECASE
)
SUPPLIER_NAME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}\s+(?P<rest>.+)$")
NAME_UNTIL_AMOUNT_PATTERN = re.compile(r"^(?P<name>[^\d]+?)(?:\s+\d.*|\s+(?:kr|sek)\b.*)?$", re.IGNORECASE)

SUPPLIER_SUFFIX_PATTERNS = (
    re.compile(r"\s+\d+[,.]?\d*\s*(?:kr|sek|:-)?\.?$", re.IGNORECASE),
    re.compile(r"\s+(?:jan|feb|mar|apr|maj|jun|jul|aug|sep|okt|nov|dec)\.?\s*[-–]?\s*\d*$", re.IGNORECASE),
    re.compile(
        r"\s+(?:januari|februari|mars|april|maj|juni|juli|augusti|september|oktober|november|december)"
        r"\s*[-–]?\s*\d*$",
        re.IGNORECASE,
    ),
    re.compile(r"\s+[-–]\s*\d+$"),
    re.compile(r"\s+[A-ZÅÄÖ]$"),
    re.compile(r"\s+[-–]\s*$"),
)


def classify(file_name: str) -> InvoiceKind:
    """Classify a document by its file name.

    A customer invoice starts with an ISO date, whitespace and the word
    "Faktura" or "Invoice" (any case). Every other name is a supplier
    document.
    """
    if CUSTOMER_INVOICE_PATTERN.match(file_name):
        return InvoiceKind.CUSTOMER
    return InvoiceKind.SUPPLIER


def extract_date(file_name: str) -> Optional[date]:
    """Return the ISO date a file name starts with, or None."""
    match = LEADING_DATE_PATTERN.match(file_name)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def suggest_counterparty_name(file_name: str) -> Optional[str]:
    """Derive a customer or supplier name hint from a dated file name.

    Examples:
        "2025-12-13 Faktura 1368 UR.pdf"  -> "UR"
        "2025-01-06 Fortnox 159 kr.pdf"   -> "Fortnox"
        "2025-01-08 Parkering SVT.pdf"    -> "Parkering SVT"

    Returns None when the name carries no usable hint.
    """
    base_name = DOCUMENT_SUFFIX_PATTERN.sub("", file_name).strip()

    if classify(file_name) is InvoiceKind.CUSTOMER:
        match = CUSTOMER_NAME_PATTERN.match(base_name)
        if match is None:
            return None
        name_match = NAME_UNTIL_AMOUNT_PATTERN.match(match.group("rest").strip())
        if name_match is None:
            return None
        name = name_match.group("name").strip().rstrip("- ").strip()
        return name if len(name) >= 2 else None

    match = SUPPLIER_NAME_PATTERN.match(base_name)
    if match is None:
        return None
    name = re.sub(r"^[-–]\s*", "", match.group("rest").strip())
    for pattern in SUPPLIER_SUFFIX_PATTERNS:
        name = pattern.sub("", name)
    name = name.strip()
    if len(name) < 2 or not re.search(r"[^\W\d_]", name):
        return None
    return name
