"""Extraction of net amount, VAT and total from invoice text."""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from ledgerfile.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Totals (amount to pay, VAT included), most specific first
TOTAL_PATTERNS = [
    # "Att betala 29 250,00 SEK" with space as thousands separator
    re.compile(r"\batt\s+betala\s+(\d{1,3}(?:\s\d{3})*[.,]\d+)\s*sek", re.IGNORECASE),
    # "ATT BETALA\n41,250.00 SEK"
    re.compile(r"\batt\s+betala\s*\n\s*(\d[\d\s.,]*\d)\s*sek", re.IGNORECASE),
    re.compile(r"\batt\s+betala\s+(\d[\d.,]*)\s*sek", re.IGNORECASE),
    re.compile(r"\batt\s+betala:\s*([−-]?\d[\d\s.,]*\d)\s*(?:kr|sek)?", re.IGNORECASE),
    re.compile(r"belopp\s+inkl\.?\s*moms\s+(\d[\d\s.,]*\d)", re.IGNORECASE),
    # "ATT BETALA ... SEK 18 763,00"
    re.compile(r"\batt\s+betala[^\n]*sek\s+(\d[\d\s.,]+)", re.IGNORECASE),
    re.compile(r"\bamount\s+(\d[\d.,]+)\s*(?:sek|usd|eur|gbp)", re.IGNORECASE),
    re.compile(r"brutto[:\s]+(\d[\d.,]*)\s*(?:kr|sek)?", re.IGNORECASE),
    re.compile(r"your\s+order[:\s]+(?:sek|usd|eur|gbp)?\s*(\d[\d.,]*)", re.IGNORECASE),
    # "Belopp kr\n415,00"
    re.compile(r"belopp\s+kr\s*\n\s*(\d[\d.,]*)", re.IGNORECASE),
    re.compile(r"totalt?\s+inkl\.?\s*moms\s+(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"\bsumma\s+inkl\.?\s*moms[:\s]+(?:kr)?(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"fakturabelopp[:\s]+(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"\batt\s+betala\s+(\d[\d\s.,]*\d)\s*kr", re.IGNORECASE),
]

# Totals at or below this are usually line items caught by a loose pattern
TOTAL_SANITY_THRESHOLD = Decimal("100")

# Captures avoid \s so that neighbouring numbers are not merged
VAT_PATTERNS = [
    # "Totalt momsbelopp\n25,00%\n5 850,00"
    re.compile(r"totalt\s+momsbelopp\s*\n[^\n]*\n\s*(\d[\d.,]*\d)", re.IGNORECASE | re.MULTILINE),
    # last number on the line after a "Momsbelopp" header
    re.compile(r"momsbelopp[^\n]*\n.*\s(\d[\d.,]*\d)\s*$", re.IGNORECASE | re.MULTILINE),
    # VAT table row "25 33,000.00 8,250.00": rate, base, VAT
    re.compile(r"^25\s+[\d.,]+\s+([\d.,]+)\s*$", re.MULTILINE),
    re.compile(r"varav\s+moms[:\s]+(\d[\d.,]*\d)", re.IGNORECASE),
    re.compile(r"moms\s+\d+\s*%\s*:\s*(\d[\d.,]+)\s*(?:kr|sek)?", re.IGNORECASE),
    re.compile(r"vat\s*\(\d+\s*%\)[:\s]+(?:sek|usd|eur|gbp)?\s*(\d[\d.,]+)", re.IGNORECASE),
    re.compile(r"utgående\s+moms:\s*(\d[\d.,]*\d)", re.IGNORECASE),
]

# Net amounts (VAT excluded)
AMOUNT_PATTERNS = [
    re.compile(r"summa\s+exkl\.?\s*moms\s+(\d[\d\s.,]*\d)\s*sek", re.IGNORECASE),
    re.compile(r"summa\s+exkl\.?\s*moms\s*\n\s*(\d[\d\s.,]+)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"summa\s+exkl\.?\s*moms[^\n]*\s(\d[\d\s.,]+)\s*$", re.IGNORECASE | re.MULTILINE),
    # VAT table row: rate, base (first amount)
    re.compile(r"^25\s+([\d\s.,]+)\s+[\d\s.,]+\s*$", re.MULTILINE),
    re.compile(r"nettobelopp[^:]*[:\s]+(\d[\d.,]*)\s*(?:kr|sek)?", re.IGNORECASE),
    re.compile(r"exkl\.?\s*moms:\s*(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"\bnetto:\s*(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"(?:subtotal|delsumma)[:\s]+(?:sek|usd|eur|gbp|kr)?\s*(\d[\d\s.,]*\d)", re.IGNORECASE),
    re.compile(r"belopp\s+exkl\.?\s*moms[:\s]+(\d[\d\s.,]*\d)", re.IGNORECASE),
]

# VAT rate mentioned in the text -> divisor used to split a bare total
REDUCED_RATE_PATTERNS = [
    (re.compile(r"\b6\s*%"), Decimal("1.06")),
    (re.compile(r"\b12\s*%"), Decimal("1.12")),
    (re.compile(r"25\s*%|moms|vat", re.IGNORECASE), Decimal("1.25")),
]


@dataclass(frozen=True)
class ExtractedAmounts:
    """Amounts found in an invoice text; any of them may be missing."""

    amount: Optional[Decimal] = None
    vat: Optional[Decimal] = None
    total: Optional[Decimal] = None

    @property
    def found(self) -> bool:
        return self.amount is not None or self.vat is not None or self.total is not None


def _parse(raw: str) -> Optional[Decimal]:
    try:
        return parse_amount(raw)
    except (ValueError, ArithmeticError):
        logger.debug("Ignoring unparsable amount %r", raw)
        return None


def _round(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.debug("Ignoring amount too large to round: %s", value)
        return None


def _first_parsed(patterns: list[re.Pattern], content: str) -> Optional[Decimal]:
    for pattern in patterns:
        match = pattern.search(content)
        if match:
            value = _parse(match.group(1))
            if value is not None:
                return value
    return None


def extract_invoice_amounts(parsed_content: Optional[str]) -> ExtractedAmounts:
    """Find net amount, VAT and total in extracted invoice text.

    When two of the three values are found the third is derived. When only
    the total is found it is split using the VAT rate mentioned in the text
    (6 %, 12 %, otherwise 25 % if VAT is mentioned at all); without any VAT
    reference the document is treated as VAT exempt.
    """
    if not parsed_content:
        return ExtractedAmounts()

    content = parsed_content.replace("\r\n", "\n")

    total: Optional[Decimal] = None
    for pattern in TOTAL_PATTERNS:
        match = pattern.search(content)
        if match:
            total = _parse(match.group(1))
            if total is not None and total > TOTAL_SANITY_THRESHOLD:
                break

    vat = _first_parsed(VAT_PATTERNS, content)
    amount = _first_parsed(AMOUNT_PATTERNS, content)

    if total is not None and vat is not None and amount is None:
        amount = total - vat
    elif total is not None and amount is not None and vat is None:
        vat = total - amount
    elif amount is not None and vat is not None and total is None:
        total = amount + vat

    if total is not None and amount is None and vat is None:
        for pattern, divisor in REDUCED_RATE_PATTERNS:
            if pattern.search(content):
                amount = _round(total / divisor)
                vat = _round(total - amount) if amount is not None else None
                break
        else:
            amount = total
            vat = Decimal("0")

    return ExtractedAmounts(amount=_round(amount), vat=_round(vat), total=_round(total))
