"""Domain layer for ledgerfile application."""

__all__ = [
    "CounterpartyResolver",
    "CounterpartyService",
    "FiscalYearService",
    "InvoiceImportService",
    "InvoiceService",
    "WatchedFolderService",
]

_SERVICES = {
    "CounterpartyResolver": "ledgerfile.domain.resolver",
    "CounterpartyService": "ledgerfile.domain.counterparty",
    "FiscalYearService": "ledgerfile.domain.fiscal_year",
    "InvoiceImportService": "ledgerfile.domain.ingestion",
    "InvoiceService": "ledgerfile.domain.invoice",
    "WatchedFolderService": "ledgerfile.domain.watched_folder",
}


# Services import the database layer, which imports domain entities; resolve
# them lazily so importing an entity does not pull in the services
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
