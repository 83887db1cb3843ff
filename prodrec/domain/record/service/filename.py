"""Collision-free filenames inside a (record, version) bucket.

The functions here are pure. The store's unique constraint on
(record_id, version, filename) is the final arbiter; resolution against a
snapshot of the bucket is only the fast path.
"""

import re
from collections.abc import Collection

# Widths of the file_revisions.filename and file_revisions.extension columns.
FILENAME_MAX_LENGTH = 255
EXTENSION_MAX_LENGTH = 20

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with '_'."""
    return _UNSAFE_CHARS.sub("_", filename)


def split_filename(filename: str) -> tuple[str, str]:
    """Split into (stem, extension), the extension keeping its dot.

    A leading dot does not start an extension ('.env' -> ('.env', '')).
    """
    dot_idx = filename.rfind(".")
    if dot_idx <= 0:
        return filename, ""
    return filename[:dot_idx], filename[dot_idx:]


def resolve_filename(
    existing: Collection[str],
    desired: str,
    max_length: int = FILENAME_MAX_LENGTH,
) -> str:
    """Return the sanitized name, or the first free ``stem_N.ext`` (N = 1, 2, ...).

    The stem is shortened when needed so that ``stem_N.ext`` stays within
    ``max_length`` characters.
    """
    name = sanitize_filename(desired)
    if name not in existing:
        return name

    stem, ext = split_filename(name)
    suffix = 1
    candidate = _with_suffix(stem, ext, suffix, max_length)
    while candidate in existing:
        suffix += 1
        candidate = _with_suffix(stem, ext, suffix, max_length)
    return candidate


def _with_suffix(stem: str, ext: str, suffix: int, max_length: int) -> str:
    tail = f"_{suffix}{ext}"
    return stem[: max(max_length - len(tail), 0)] + tail
