from __future__ import annotations

from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac

from .errors import InvalidKeyError
from .jose_utils import b64url_encode
from .models import Algorithm
from .token import Token
from .validator import Validator


def _key_bytes(key: Union[bytes, str, None]) -> Optional[bytes]:
    if key is None or isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    raise InvalidKeyError(f"HMAC key must be bytes or str, got {type(key).__name__}")


class HMACValidator(Validator):
    """HS256 / HS384 / HS512 with a shared secret."""

    SUPPORTED = frozenset({Algorithm.HS256.value, Algorithm.HS384.value, Algorithm.HS512.value})

    def __init__(self, algorithm: str, key: Union[bytes, str, None] = None) -> None:
        super().__init__(algorithm)
        self.key = _key_bytes(key)

    def _mac(self, data: bytes) -> hmac.HMAC:
        mac = hmac.HMAC(self.key, self.hash_algorithm())
        mac.update(data)
        return mac

    def sign(self, token: Token) -> None:
        if not self.key:
            raise InvalidKeyError(f"{self.algorithm} signing requires a key")

        signing_input = self._prepare(token)
        token.signature = b64url_encode(self._mac(signing_input).finalize())

    def validate(self, token: Token) -> bool:
        signature = token.signature_bytes()

        # no key, no match
        if not self.key:
            return False

        try:
            # constant-time comparison
            self._mac(token.signing_input()).verify(signature)
            return True
        except InvalidSignature:
            return False
