#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/lists.py
"""List numbering registry for structured printers.

Word numbers list paragraphs through numbering instances (``w:num``). Every
List node gets its own instance so that numbering restarts per list and
nested lists keep their own ordered-ness. Entries are created lazily the
first time an item of the list asks for them, which may happen from several
worker threads at once.

"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from mdprinters.ast.nodes import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListRef:
    """Numbering reference of one List node.

    Attributes
    ----------
    reference : str
        Deterministic token identifying the list, ``list-<n>``
    is_ordered : bool
        Copy of the list's ordered flag
    num_id : int
        Numbering instance id used by the list's paragraphs

    """

    reference: str
    is_ordered: bool
    num_id: int


class ListRefRegistry:
    """Side table from List nodes to numbering references.

    Parameters
    ----------
    first_num_id : int, default 1
        First free numbering id of the target document. It is reserved for
        heading numbering; lists get the following ids.
    lock : threading.RLock, optional
        Lock shared with the printer; a private one is created otherwise

    """

    def __init__(self, first_num_id: int = 1, lock: Optional[threading.RLock] = None):
        self._lock = lock if lock is not None else threading.RLock()
        self.heading_num_id = first_num_id
        self._next_num_id = first_num_id + 1
        # id(list) -> (list, ref); the node is held so its id cannot be reused
        self._entries: dict[int, tuple[List, ListRef]] = {}

    def get_or_create(self, list_node: List) -> ListRef:
        """Return the reference of ``list_node``, creating it on first use."""
        key = id(list_node)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                ref = ListRef(
                    reference=f"list-{len(self._entries) + 1}",
                    is_ordered=list_node.ordered,
                    num_id=self._next_num_id,
                )
                self._next_num_id += 1
                self._entries[key] = (list_node, ref)
                logger.debug("Registered %s (ordered=%s, numId=%d)", ref.reference, ref.is_ordered, ref.num_id)
                return ref
            return entry[1]

    def get(self, list_node: List) -> Optional[ListRef]:
        with self._lock:
            entry = self._entries.get(id(list_node))
        return entry[1] if entry is not None else None

    def refs(self) -> list[ListRef]:
        """All references in creation order."""
        with self._lock:
            return [ref for _, ref in self._entries.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, list_node: object) -> bool:
        with self._lock:
            return id(list_node) in self._entries
