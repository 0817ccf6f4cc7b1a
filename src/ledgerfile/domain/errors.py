"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class AlreadyImportedError(ConflictError):
    """A document is already on file under the same path."""


def fiscal_year_not_found(fiscal_year_id: int) -> str:
    """Return message for missing fiscal year by ID."""
    return f"Fiscal year {fiscal_year_id} not found"


def fiscal_year_number_not_found(year: int) -> str:
    """Return message for missing fiscal year by year number."""
    return f"Fiscal year {year} not found"


def counterparty_not_found(kind: str, counterparty_id: int) -> str:
    """Return message for missing customer or supplier."""
    return f"{kind.capitalize()} {counterparty_id} not found"


def invoice_not_found(kind: str, invoice_id: int) -> str:
    """Return message for missing customer or supplier invoice."""
    return f"{kind.capitalize()} invoice {invoice_id} not found"


def watched_folder_not_found(folder_id: int) -> str:
    """Return message for missing watched folder."""
    return f"Folder {folder_id} not found"


def already_imported(file_path: str) -> str:
    """Return message for a document that is already on file."""
    return f"File is already imported: {file_path}"


def delete_blocked(what: str, invoice_count: int) -> str:
    """Return message when a record still has invoices attached."""
    return (
        f"Cannot delete {what}: it has {invoice_count} "
        f"invoice{'s' if invoice_count != 1 else ''}. "
        "Please reassign or delete them first."
    )


def path_not_storable(file_name: str) -> str:
    """Return message for a file whose name is not valid UTF-8."""
    return f"File name is not valid UTF-8: {file_name!r}"
