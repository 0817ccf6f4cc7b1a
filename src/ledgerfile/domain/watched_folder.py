"""Watched folder domain service."""

from pathlib import Path
from typing import Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.entities import WatchedFolder
from ledgerfile.domain.errors import NotFoundError, ValidationError, watched_folder_not_found


class WatchedFolderService:
    """Service for managing folders registered for scanning."""

    def __init__(self, db: Database):
        """Initialize watched folder service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_folder(self, path: str) -> WatchedFolder:
        """Register a folder by its absolute path.

        Raises:
            ValidationError: If the path is not an existing directory
            ConflictError: If the folder is already registered
        """
        folder_path = Path(path).expanduser().absolute()
        if not folder_path.is_dir():
            raise ValidationError(f"Not a directory: {path}")
        folder_id = self.db.create_watched_folder(str(folder_path))
        return self.db.get_watched_folder(folder_id)

    def list_folders(self) -> list[WatchedFolder]:
        """List registered folders ordered by path."""
        return self.db.list_watched_folders()

    def get_folder(self, folder_id: int) -> Optional[WatchedFolder]:
        """Get registered folder by ID."""
        return self.db.get_watched_folder(folder_id)

    def remove_folder(self, folder_id: int) -> None:
        """Unregister a folder. Imported invoices are kept.

        Raises:
            NotFoundError: If the folder is not registered
        """
        if self.db.get_watched_folder(folder_id) is None:
            raise NotFoundError(watched_folder_not_found(folder_id))
        self.db.delete_watched_folder(folder_id)
