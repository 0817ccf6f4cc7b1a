"""Find-or-create resolution of company names to customer/supplier records."""

import logging
from typing import Callable, Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.entities import Counterparty, InvoiceKind
from ledgerfile.domain.naming import core_name, normalize_name

logger = logging.getLogger(__name__)

MIN_CORE_NAME_LENGTH = 3


def strip_org_number(org_number: Optional[str]) -> str:
    """Registration number with hyphens and surrounding whitespace removed."""
    if not org_number:
        return ""
    return org_number.replace("-", "").strip()


class CounterpartyResolver:
    """Resolve a display name (and optional registration number) to a record.

    Stages are tried in order over all existing records, enumerated in
    creation order; the first stage with a match wins:

    1. registration number, hyphens ignored
    2. display name, case-insensitive
    3. normalized name
    4. core name, equal or one a prefix of the other
    5. otherwise a new record is created
    """

    def __init__(self, db: Database, kind: InvoiceKind):
        """Initialize resolver.

        Args:
            db: Database instance
            kind: Whether customers or suppliers are resolved
        """
        self.db = db
        self.kind = kind

    def find(self, name: str, org_number: Optional[str] = None) -> Optional[Counterparty]:
        """Return the first existing record matching the cascade, or None."""
        candidates = self.db.list_counterparties(self.kind, creation_order=True)
        stages: list[tuple[str, Callable[[Counterparty], bool]]] = []

        wanted_org = strip_org_number(org_number)
        if wanted_org:
            stages.append(("org number", lambda c: strip_org_number(c.org_number) == wanted_org))

        lowered = name.lower()
        stages.append(("name", lambda c: c.name.lower() == lowered))

        normalized = normalize_name(name, self.kind)
        stages.append(("normalized name", lambda c: normalize_name(c.name, self.kind) == normalized))

        core = core_name(name, self.kind)
        if len(core) >= MIN_CORE_NAME_LENGTH:
            stages.append(("core name", lambda c: self._core_names_match(core, core_name(c.name, self.kind))))

        for stage, matches in stages:
            for candidate in candidates:
                if matches(candidate):
                    logger.debug(
                        "Resolved %s '%s' to %d (%s) by %s",
                        self.kind.value, name, candidate.id, candidate.name, stage,
                    )
                    return candidate
        return None

    def find_or_create(self, name: str, org_number: Optional[str] = None) -> int:
        """Return the id of the matching record, creating one if none matches.

        A new record keeps the name and registration number as supplied; an
        empty registration number is stored as NULL.
        """
        existing = self.find(name, org_number)
        if existing is not None:
            return existing.id

        counterparty_id = self.db.create_counterparty(
            self.kind,
            name=name,
            org_number=org_number if org_number and org_number.strip() else None,
        )
        logger.info("Created %s '%s' (%d)", self.kind.value, name, counterparty_id)
        return counterparty_id

    @staticmethod
    def _core_names_match(wanted: str, existing: str) -> bool:
        if wanted == existing:
            return True
        if len(existing) < MIN_CORE_NAME_LENGTH:
            return False
        return wanted.startswith(existing) or existing.startswith(wanted)
