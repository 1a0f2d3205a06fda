"""Unit tests for continuation tokens."""

import base64

import pytest

from docrepo.api.database.continuation import decode_continuation, encode_continuation
from docrepo.api.errors import StoreError


@pytest.mark.parametrize("last_id", ["user-1", "ü/ß", ""])
def test_token_carries_last_id(last_id):
    token = encode_continuation(last_id)
    assert isinstance(token, str)
    assert decode_continuation(token) == last_id


@pytest.mark.parametrize(
    "token",
    [
        "not a token",
        base64.urlsafe_b64encode(b"[1, 2]").decode("ascii"),
        base64.urlsafe_b64encode(b'{"before": "x"}').decode("ascii"),
        base64.urlsafe_b64encode(b"not json").decode("ascii"),
    ],
)
def test_foreign_tokens_are_rejected(token):
    with pytest.raises(StoreError) as exc_info:
        decode_continuation(token)
    assert exc_info.value.code == 400
