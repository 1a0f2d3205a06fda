"""Opaque continuation tokens for keyset paging over ``_id``."""

import base64
import binascii
import json
from typing import Any

from ..errors import StoreError


def encode_continuation(last_id: Any) -> str:
    payload = json.dumps({"after": last_id}, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(payload).decode("ascii")


def decode_continuation(token: str) -> Any:
    """Return the last ``_id`` encoded in ``token``.

    Raises:
        StoreError: (400) if the token was not issued by this store
    """
    try:
        payload = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        return payload["after"]
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError) as e:
        raise StoreError(f"Invalid continuation token: {token!r}", code=400) from e
