"""Short UID generation for library panels.

UIDs are opaque to the rest of the package: nothing parses them, and a
collision is not prevented here. The unique index on ``library_panels.uid``
catches it and the repository reports it as ALREADY_EXISTS.

INVARIANT: UIDs are permanent. Once assigned, a panel's UID never changes.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

UID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-_"
UID_LENGTH = 9

UidGenerator = Callable[[], str]


def generate_short_uid() -> str:
    """Return a random 9-character URL-safe UID."""
    return "".join(secrets.choice(UID_ALPHABET) for _ in range(UID_LENGTH))

