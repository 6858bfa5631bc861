"""Zip packaging of rendered scaffolds.

Every entry is placed under one fixed root folder.  The root folder entry is
written first, then the tree is walked in sorted order: directories become
content-less entries ending in ``/``, files are deflated.
"""

from __future__ import annotations

import os
import zipfile
from pathlib import Path

DEFAULT_ARCHIVE_ROOT = "codebase"

_DIR_MODE = 0o40755


def write_archive(
    source_dir: str | Path,
    archive_path: str | Path,
    root: str = DEFAULT_ARCHIVE_ROOT,
) -> int:
    """Zip *source_dir* into *archive_path* under ``<root>/``.

    Returns:
        The size of the written archive in bytes.

    Raises:
        OSError: If the source cannot be read or the archive written.
        zipfile.BadZipFile: If the archive cannot be assembled.
    """
    source = Path(source_dir)
    target = Path(archive_path)
    prefix = root.strip("/") + "/"

    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(_dir_info(prefix), b"")

        for dirpath, dirnames, filenames in os.walk(source):
            dirnames.sort()
            current = Path(dirpath)
            rel_dir = current.relative_to(source)

            if rel_dir != Path("."):
                zf.writestr(_dir_info(f"{prefix}{rel_dir.as_posix()}/"), b"")

            for filename in sorted(filenames):
                path = current / filename
                arcname = prefix + path.relative_to(source).as_posix()
                zf.write(path, arcname=arcname, compress_type=zipfile.ZIP_DEFLATED)

    return target.stat().st_size


def _dir_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name)
    info.external_attr = (_DIR_MODE << 16) | 0x10
    info.compress_type = zipfile.ZIP_STORED
    return info
