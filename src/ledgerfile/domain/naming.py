"""Company name normalization used for counterparty matching."""

import re
from typing import Optional

from ledgerfile.domain.entities import InvoiceKind

# Only stripped when it is the last word of the name
LEGAL_FORM_PATTERN = re.compile(r"\s+(?:ab|hb|kb|ltd|inc|llc|as|a/s|aktiebolag)$")

# Supplier names are usually taken from file names and carry period and
# document-type noise at the end
MONTH_NAME_PATTERN = re.compile(
    r"\s+(?:januari|februari|mars|april|maj|juni|juli|augusti|september|oktober|november|december)$"
)
MONTH_ABBREVIATION_PATTERN = re.compile(r"\s+(?:jan|feb|mar|apr|jun|jul|aug|sep|okt|nov|dec)$")
SINGLE_LETTER_PATTERN = re.compile(r"\s+[a-zåäö]$")
INVOICE_NOUN_PATTERN = re.compile(
    r"\s+(?:kvitto|utlägg|faktura|bokfo|bokföring|receipt|expense|invoice)$"
)

SUPPLIER_NOISE_PATTERNS = (
    MONTH_NAME_PATTERN,
    MONTH_ABBREVIATION_PATTERN,
    SINGLE_LETTER_PATTERN,
    INVOICE_NOUN_PATTERN,
)

SEPARATOR_PATTERN = re.compile(r"[-_&]")
WHITESPACE_PATTERN = re.compile(r"\s+")

MIN_CORE_TOKEN_LENGTH = 2
CORE_TOKEN_COUNT = 2


def normalize_name(name: Optional[str], kind: InvoiceKind = InvoiceKind.CUSTOMER) -> str:
    """Normalize a company name for comparison.

    Lower-cases the name and strips a trailing legal form ("AB", "Ltd", ...).
    Supplier names additionally lose a trailing month name or abbreviation, a
    single trailing letter and a trailing document noun ("kvitto", "invoice").
    Hyphens, underscores and ampersands become spaces and whitespace is
    collapsed.

    Examples:
        >>> normalize_name("Acme Consulting AB")
        'acme consulting'
        >>> normalize_name("Telia Mars", InvoiceKind.SUPPLIER)
        'telia'
    """
    if not name:
        return ""

    value = name.lower().strip()
    value = LEGAL_FORM_PATTERN.sub("", value)
    if kind is InvoiceKind.SUPPLIER:
        for pattern in SUPPLIER_NOISE_PATTERNS:
            value = pattern.sub("", value)

    value = SEPARATOR_PATTERN.sub(" ", value)
    value = WHITESPACE_PATTERN.sub(" ", value)
    return value.strip()


def core_name(name: Optional[str], kind: InvoiceKind = InvoiceKind.CUSTOMER) -> str:
    """Return the first two significant words of a normalized name.

    Words shorter than two characters are ignored. Returns an empty string
    when no word qualifies; callers treat anything shorter than three
    characters as unusable for matching.
    """
    tokens = [t for t in normalize_name(name, kind).split(" ") if len(t) >= MIN_CORE_TOKEN_LENGTH]
    return " ".join(tokens[:CORE_TOKEN_COUNT])
