"""
Correlation Table — pending requests awaiting their response.

A REQUEST frame records (method name, response type) under its u16 id; the
RESPONSE frame with the same id takes the entry back out and is decoded
with that type. Entries never expire on their own; callers that need
eviction track ages themselves and call remove().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from google.protobuf.descriptor import Descriptor

from liqi.errors import NotFoundError

log = logging.getLogger("liqi")


@dataclass
class PendingRequest:
    """What a later RESPONSE needs from its REQUEST."""
    method_name: str
    response_type: Descriptor


class PendingRequests:
    """Request id → PendingRequest. One per connection."""

    def __init__(self):
        self._entries: dict[int, PendingRequest] = {}

    def insert(self, msg_id: int, entry: PendingRequest) -> None:
        """Record a request. Last write wins for a reused id."""
        old = self._entries.get(msg_id)
        if old is not None:
            log.debug("Request id %d reused: %s replaces %s",
                      msg_id, entry.method_name, old.method_name)
        self._entries[msg_id] = entry

    def take(self, msg_id: int) -> PendingRequest:
        """Remove and return the entry for `msg_id`."""
        try:
            return self._entries.pop(msg_id)
        except KeyError:
            raise NotFoundError(f"No corresponding request: {msg_id}", msg_id) from None

    def remove(self, msg_id: int) -> bool:
        """Drop an entry without decoding a response. Returns True if it existed."""
        entry = self._entries.pop(msg_id, None)
        if entry is None:
            return False
        log.debug("Evicted pending request %d (%s)", msg_id, entry.method_name)
        return True

    def ids(self) -> list[int]:
        return list(self._entries)

    def __contains__(self, msg_id: int) -> bool:
        return msg_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
