#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/io_utils.py
"""I/O utilities for export outputs.

Exports are all-or-nothing: content is fully produced in memory, written to
a temporary file beside the destination and moved into place in one step,
so a failed export never leaves a partial file behind.

"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Union

from richexport.constants import DEFAULT_FILE_NAME

_UNSAFE_FILE_NAME_CHARS = re.compile(r'[\x00-\x1f\x7f<>:"/\\|?*]+')


def atomic_write(path: Union[str, Path], content: Union[str, bytes]) -> Path:
    """Write ``content`` to ``path`` atomically.

    Parameters
    ----------
    path : str or Path
        Destination file. Its parent directory must exist.
    content : str or bytes
        Text is encoded as UTF-8

    Returns
    -------
    Path
        The destination path

    Raises
    ------
    OSError
        If the temporary file cannot be created or moved into place. The
        destination is left untouched in that case.

    Examples
    --------
        >>> atomic_write("report.md", "# Report\\n")
        PosixPath('report.md')

    """
    destination = Path(path)
    data = content.encode("utf-8") if isinstance(content, str) else content

    fd, temp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent or None)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, destination)
    except BaseException:
        try:
            os.unlink(temp_name)
        except OSError:
            pass
        raise
    return destination


def sanitize_file_name(name: str | None, default: str = DEFAULT_FILE_NAME) -> str:
    """Reduce a user-supplied export name to a safe file stem.

    Path separators and control characters are removed, surrounding dots and
    whitespace are trimmed, and a known export extension is dropped so the
    caller can append the target's own.

    Examples
    --------
        >>> sanitize_file_name("../../etc/passwd")
        'etcpasswd'
        >>> sanitize_file_name("  ")
        'document'
        >>> sanitize_file_name("notes.md")
        'notes'

    """
    if not name:
        return default
    cleaned = _UNSAFE_FILE_NAME_CHARS.sub("", name).strip().strip(".").strip()
    stem, dot, extension = cleaned.rpartition(".")
    if dot and stem and extension.lower() in {"txt", "md", "markdown", "html", "htm", "docx", "json"}:
        cleaned = stem.rstrip(". ")
    cleaned = cleaned[:200]
    return cleaned or default
