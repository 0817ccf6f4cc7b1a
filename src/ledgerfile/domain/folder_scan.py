"""Preview of a fiscal-year folder tree before import.

A year folder ("Bokföring 2025") holds one sub-folder per month ("01 Januari",
"2025-03", "Mars") plus, sometimes, loose documents in the root itself.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ledgerfile.domain.errors import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_EXTENSION = ".pdf"

# Probed in this order; the first name contained in the folder name wins
MONTH_NAMES = {
    "januari": 1,
    "jan": 1,
    "februari": 2,
    "feb": 2,
    "mars": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "maj": 5,
    "juni": 6,
    "jun": 6,
    "juli": 7,
    "jul": 7,
    "augusti": 8,
    "aug": 8,
    "september": 9,
    "sep": 9,
    "sept": 9,
    "oktober": 10,
    "okt": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

YEAR_PATTERN = re.compile(r"\b(20\d{2})\b")
NUMERIC_MONTH_PATTERN = re.compile(r"^(?:\d{4}[-_])?(\d{1,2})(?:\s|_|$|-|[a-zA-ZåäöÅÄÖ])")


@dataclass(frozen=True)
class MonthFolderInfo:
    """A sub-folder of a year folder."""

    name: str
    path: str
    month: Optional[int]
    document_count: int


@dataclass(frozen=True)
class YearFolderPreview:
    """What an import of a year folder would touch."""

    folder_path: str
    folder_name: str
    detected_year: Optional[int]
    month_folders: list[MonthFolderInfo]
    root_document_count: int
    total_document_count: int


def detect_year(folder_name: str) -> Optional[int]:
    """Return the first standalone 20xx number in a folder name."""
    match = YEAR_PATTERN.search(folder_name)
    if match:
        return int(match.group(1))
    return None


def detect_month(folder_name: str) -> Optional[int]:
    """Detect which month a folder holds.

    A leading month number ("01", "3 Mars", "2025-03") takes precedence and is
    only accepted in the range 1-12. Otherwise the name is searched for a
    Swedish month name or abbreviation.

    Examples:
        "01 Januari" -> 1, "2025-03" -> 3, "Mars" -> 3, "13" -> None
    """
    match = NUMERIC_MONTH_PATTERN.match(folder_name)
    if match:
        month = int(match.group(1))
        if 1 <= month <= 12:
            return month

    lowered = folder_name.lower()
    for month_name, month in MONTH_NAMES.items():
        if month_name in lowered:
            return month
    return None


def has_extension(file_name: str, extension: str) -> bool:
    """Case-insensitive check of a file's extension."""
    return os.path.splitext(file_name)[1].lower() == extension.lower()


def count_documents(folder_path: str, extension: str = DEFAULT_DOCUMENT_EXTENSION) -> int:
    """Count documents directly inside a folder.

    An unreadable folder counts as empty.
    """
    try:
        with os.scandir(folder_path) as entries:
            return sum(1 for entry in entries if entry.is_file() and has_extension(entry.name, extension))
    except OSError as e:
        logger.warning("Could not read folder %s: %s", folder_path, e)
        return 0


def scan_year_folder(folder_path: str, extension: str = DEFAULT_DOCUMENT_EXTENSION) -> YearFolderPreview:
    """Describe a year folder and its month sub-folders.

    Month folders are ordered by detected month; folders whose month could
    not be detected come last in name order.

    Raises:
        NotFoundError: If the folder does not exist or is not a directory
        OSError: If the folder cannot be listed
    """
    root = Path(folder_path)
    if not root.is_dir():
        raise NotFoundError(f"Folder not found: {folder_path}")

    month_folders = []
    with os.scandir(root) as entries:
        children = sorted((entry for entry in entries if entry.is_dir()), key=lambda entry: entry.name)
    for entry in children:
        month_folders.append(
            MonthFolderInfo(
                name=entry.name,
                path=entry.path,
                month=detect_month(entry.name),
                document_count=count_documents(entry.path, extension),
            )
        )
    month_folders.sort(key=lambda info: (info.month is None, info.month or 0))

    root_count = count_documents(str(root), extension)
    total = root_count + sum(info.document_count for info in month_folders)
    logger.debug(
        "Scanned %s: %d month folders, %d documents", folder_path, len(month_folders), total
    )

    return YearFolderPreview(
        folder_path=str(root),
        folder_name=root.name,
        detected_year=detect_year(root.name),
        month_folders=month_folders,
        root_document_count=root_count,
        total_document_count=total,
    )
