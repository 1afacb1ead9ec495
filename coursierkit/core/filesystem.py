"""
File system utilities for coursierkit.

This module provides the handful of file operations the installer, the
remover and the cache store need:
- gzip decompression of downloaded executables
- Marking files executable
- Tolerant removal of files and directory trees
- Safe tar extraction (directory traversal protection)
"""

import gzip
import os
import shutil
import stat
import tarfile
from pathlib import Path
from typing import Union

from coursierkit.core.exceptions import CoursierKitError

IS_WINDOWS = os.name == "nt"

# Extraction filters exist on Python 3.12+ (and security backports)
_EXTRACT_KWARGS = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}


class FilesystemError(CoursierKitError):
    """Base exception for filesystem operations."""

    pass


class InsecureArchiveError(FilesystemError):
    """Archive contains potentially malicious paths."""

    pass


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Args:
        path: Path to check
        parent: Potential parent path

    Returns:
        True if path is under parent, False otherwise
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def decompress_gzip(archive_path: Union[str, Path]) -> Path:
    """
    Decompress a ``.gz`` file next to itself and delete the archive.

    Behaves like ``gzip -d``: ``bin/cs.gz`` becomes ``bin/cs``.

    Args:
        archive_path: Path to the gzip file (must end with ``.gz``)

    Returns:
        Path to the decompressed file

    Raises:
        FilesystemError: If the file is missing, not gzip, or unreadable
    """
    archive_path = Path(archive_path)

    if archive_path.suffix != ".gz":
        raise FilesystemError(f"Not a .gz file: {archive_path}")

    if not archive_path.exists():
        raise FilesystemError(f"Archive not found: {archive_path}")

    target = archive_path.with_suffix("")

    try:
        with gzip.open(archive_path, "rb") as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except (OSError, EOFError) as e:
        target.unlink(missing_ok=True)
        raise FilesystemError(f"Failed to decompress {archive_path}: {e}") from e

    archive_path.unlink()
    return target


def make_executable(path: Union[str, Path]) -> Path:
    """
    Add execute permission for user, group and others (``chmod +x``).

    Raises:
        FilesystemError: If the file is missing or permissions can't be changed
    """
    path = Path(path)

    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise FilesystemError(f"Failed to make {path} executable: {e}") from e

    return path


def remove_path(path: Union[str, Path]) -> None:
    """
    Remove a file, symlink or directory tree (``rm -rf``).

    A path that does not exist is not an error.

    Raises:
        FilesystemError: If deletion fails
    """
    path = Path(path)

    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            if IS_WINDOWS:

                def handle_remove_readonly(func, p, exc):
                    """Error handler for Windows read-only files."""
                    if not os.access(p, os.W_OK):
                        os.chmod(p, 0o777)
                        func(p)
                    else:
                        raise

                shutil.rmtree(path, onerror=handle_remove_readonly)
            else:
                shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise FilesystemError(f"Failed to remove '{path}': {e}") from e


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def safe_extract_members(
    tar: tarfile.TarFile, prefix: str, destination: Union[str, Path]
) -> int:
    """
    Extract the members stored under ``prefix/`` into ``destination``.

    Member names are re-rooted so that ``prefix/a/b`` lands in
    ``destination/a/b``. Links pointing outside the destination and
    special files are rejected.

    Returns:
        Number of extracted members

    Raises:
        InsecureArchiveError: If a member would escape ``destination``
    """
    destination = ensure_directory(destination)
    root = prefix.rstrip("/") + "/"
    extracted = 0

    for member in tar.getmembers():
        if not member.name.startswith(root):
            continue

        relative = member.name[len(root):]
        if not relative:
            continue

        _validate_archive_path(relative, destination)

        if member.issym():
            _validate_archive_path(
                str(Path(relative).parent / member.linkname), destination
            )
        elif member.islnk():
            # Hard link targets are archive names, so they need re-rooting too
            if member.linkname.startswith(root):
                member.linkname = member.linkname[len(root):]
            _validate_archive_path(member.linkname, destination)
        elif not (member.isfile() or member.isdir()):
            raise InsecureArchiveError(
                f"Archive member '{member.name}' is not a regular file or directory"
            )

        member.name = relative
        tar.extract(member, destination, **_EXTRACT_KWARGS)
        extracted += 1

    return extracted
