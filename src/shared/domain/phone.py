"""Phone number normalization.

Receiver phone numbers arrive in whatever format the sender typed
(``"012-345 6495"``, ``"(012) 3456495"``, ``"0060123456495"``).  Lookups and
comparisons use the normalized form: digits only, with a single leading ``+``
when the number carries an international prefix.
"""

from __future__ import annotations

import re
from typing import Optional

_NON_DIGITS = re.compile(r"\D")


def normalize_phone_number(phone_number: Optional[str]) -> str:
    """Return the canonical form of *phone_number*.

    ``None`` and blank input normalize to ``""``.  The function is
    idempotent: normalizing an already-normalized number is a no-op.
    """
    if not phone_number:
        return ""

    value = phone_number.strip()
    digits = _NON_DIGITS.sub("", value)
    if not digits:
        return ""

    if value.startswith("+"):
        return f"+{digits}"
    if digits.startswith("00") and len(digits) > 2:
        return f"+{digits[2:]}"
    return digits
