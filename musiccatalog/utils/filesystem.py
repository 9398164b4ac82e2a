"""
Filesystem utilities for Music Catalog Sync

This module provides directory listing, extension handling and safe copy
utilities used by the library scanner and the spreadsheet backup.
"""

import os
import shutil
import logging
from pathlib import Path
from typing import Iterable, FrozenSet, List, Optional
import time

from ..core.exceptions import FileOperationError

logger = logging.getLogger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> FrozenSet[str]:
    """
    Normalize configured extensions for comparison

    Args:
        extensions: Extensions such as ``"mp3"``, ``".FLAC"``

    Returns:
        Upper-cased extensions without the leading dot
    """
    normalized = set()
    for ext in extensions:
        ext = str(ext).strip().lstrip('.').upper()
        if ext:
            normalized.add(ext)
    return frozenset(normalized)


def file_extension(path: Path) -> str:
    """Upper-cased extension of a file without the dot, '' if it has none"""
    return Path(path).suffix.lstrip('.').upper()


def list_subdirectories(directory: Path, follow_symlinks: bool = True) -> List[Path]:
    """
    List the immediate subdirectories of a directory in name order

    Unreadable directories yield an empty list.
    """
    try:
        with os.scandir(directory) as entries:
            found = [Path(entry.path) for entry in entries
                     if _is_dir(entry, follow_symlinks)]
    except OSError as e:
        logger.debug(f"Cannot list directory {directory}: {e}")
        return []
    return sorted(found, key=lambda p: p.name)


def list_files(directory: Path) -> List[Path]:
    """List the regular files directly inside a directory in name order"""
    try:
        with os.scandir(directory) as entries:
            found = [Path(entry.path) for entry in entries if _is_file(entry)]
    except OSError as e:
        logger.debug(f"Cannot list directory {directory}: {e}")
        return []
    return sorted(found, key=lambda p: p.name)


def ensure_directory(path: str, create: bool = True) -> bool:
    """
    Ensure a directory exists, optionally creating it

    Args:
        path: Directory path to check/create
        create: Whether to create the directory if it doesn't exist

    Returns:
        True if directory exists or was created successfully

    Raises:
        FileOperationError: If directory creation fails
    """
    path_obj = Path(path)

    if path_obj.exists():
        if path_obj.is_dir():
            return True
        raise FileOperationError(
            f"Path exists but is not a directory: {path}",
            filepath=path
        )

    if not create:
        return False

    try:
        path_obj.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(
            f"Failed to ensure directory: {str(e)}",
            details=str(e),
            filepath=path
        )
    return True


def safe_copy_file(src_path: str, dst_path: str, preserve_metadata: bool = True) -> bool:
    """
    Safely copy a file with metadata preservation

    Args:
        src_path: Source file path
        dst_path: Destination file path
        preserve_metadata: Whether to preserve file metadata

    Returns:
        True if copy was successful

    Raises:
        FileOperationError: If copy operation fails
    """
    src = Path(src_path)
    dst = Path(dst_path)

    if not src.exists() or not src.is_file():
        raise FileOperationError(
            f"Source file does not exist or is not a file: {src_path}",
            filepath=src_path
        )

    ensure_directory(str(dst.parent))

    try:
        if preserve_metadata:
            shutil.copy2(str(src), str(dst))
        else:
            shutil.copy(str(src), str(dst))
    except OSError as e:
        raise FileOperationError(
            f"Failed to copy file: {str(e)}",
            details=f"From: {src_path}, To: {dst_path}",
            filepath=src_path
        )
    return True


def create_backup_path(filepath: str, backup_dir: Optional[str] = None) -> str:
    """Create a backup file path with timestamp next to the file or in ``backup_dir``"""
    path = Path(filepath)
    timestamp = time.strftime("%Y%m%d_%H%M%S")

    if backup_dir:
        backup_parent = Path(backup_dir)
        ensure_directory(str(backup_parent))
    else:
        backup_parent = path.parent

    backup_name = f"{path.stem}_backup_{timestamp}{path.suffix}"
    return str(backup_parent / backup_name)


def backup_file(filepath: str, backup_dir: Optional[str] = None) -> str:
    """Copy a file to a timestamped backup and return the backup path"""
    backup_path = create_backup_path(filepath, backup_dir)
    safe_copy_file(filepath, backup_path)
    return backup_path


# Private helper functions

def _is_dir(entry: os.DirEntry, follow_symlinks: bool) -> bool:
    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


# Export functions
__all__ = [
    'normalize_extensions',
    'file_extension',
    'list_subdirectories',
    'list_files',
    'ensure_directory',
    'safe_copy_file',
    'create_backup_path',
    'backup_file',
]
