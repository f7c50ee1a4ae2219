"""Structural identifiers for addressable document nodes.

Headings, tables, task lists, mentions and the rich blocks each carry a
``uid`` so the editor can address them.  Ids are sampled independently on
every call.  Nothing checks for collisions: with 62**12 possible values a
clash is unlikely but not impossible, and keeping ids unique across a
document is the caller's concern.
"""

from __future__ import annotations

import random
import string

UID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
UID_LENGTH = 12


def new_id() -> str:
    """Return a fresh 12-character alphanumeric id.

    Uses the process-wide :mod:`random` source; not suitable where ids
    must be unguessable.
    """
    return "".join(random.choices(UID_ALPHABET, k=UID_LENGTH))
