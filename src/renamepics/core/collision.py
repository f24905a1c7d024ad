"""Deterministic placement of entries that share a numeric key."""

import logging
from typing import Dict, Iterable, Tuple

from renamepics.models.core import FileEntry

logger = logging.getLogger(__name__)


def resolve_collisions(
    keyed_entries: Iterable[Tuple[int, FileEntry]],
) -> Dict[int, FileEntry]:
    """Place every entry on a unique key.

    Entries are placed in the order given. When an entry's key is already
    occupied, the key is incremented until a free one is found. Callers feed
    entries in case-insensitive filename order, so among files sharing a
    number the alphanumerically earlier name always keeps the lower key.

    Args:
        keyed_entries: ``(raw_key, entry)`` pairs in placement order.

    Returns:
        Mapping of final key to entry.
    """
    occupied: Dict[int, FileEntry] = {}
    for key, entry in keyed_entries:
        slot = key
        while slot in occupied:
            slot += 1
        if slot != key:
            logger.debug(
                "Key %d for '%s' is taken by '%s'; placed at %d",
                key,
                entry.original_name,
                occupied[key].original_name,
                slot,
            )
        occupied[slot] = entry
    return occupied
