"""Filename resolution for uploads.

A user's stored filenames must be unique within that user's namespace.
When an upload collides with an existing name we append ``(n)`` to the
base, picking the lowest ``n`` whose candidate is still free, so numbering
gaps left by deletions or seeded fixtures get filled first:

    >>> resolve_filename("cat.jpg", {"cat.jpg", "cat(1).jpg", "cat(3).jpg"})
    'cat(2).jpg'

Existing filenames are only ever tested for membership, never parsed. A
desired name that already looks like ``test(1).png`` keeps its ``(1)`` as
plain text and gets a fresh group appended (``test(1)(1).png``).
"""
from __future__ import annotations

from itertools import count
from typing import Iterable, Tuple


def parse_filename(filename: str) -> Tuple[str, str]:
    """Split ``filename`` into ``(base, extension)`` on the last dot."""
    base, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, ""
    return base, extension


def render_candidate(base: str, extension: str, n: int) -> str:
    """Build the filename for suffix ``n``; ``n == 0`` means no suffix."""
    name = f"{base}({n})" if n else base
    return f"{name}.{extension}" if extension else name


def resolve_filename(desired: str, existing: Iterable[str]) -> str:
    """
    Return the name to persist for ``desired`` given the user's ``existing``
    filenames. The result is never a member of ``existing``.
    """
    taken = existing if isinstance(existing, (set, frozenset)) else set(existing)
    if desired not in taken:
        return desired

    base, extension = parse_filename(desired)
    # at most len(taken) candidates can be occupied
    for n in count(1):
        candidate = render_candidate(base, extension, n)
        if candidate not in taken:
            return candidate
