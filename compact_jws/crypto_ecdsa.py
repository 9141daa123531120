from __future__ import annotations

from typing import Dict, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .errors import BadSignatureError, InvalidKeyError, MalformedTokenError
from .jose_utils import b64url_encode
from .models import Algorithm
from .token import Token
from .validator import Validator

# Each algorithm is bound to exactly one curve
CURVES: Dict[str, type] = {
    Algorithm.ES256.value: ec.SECP256R1,
    Algorithm.ES384.value: ec.SECP384R1,
    Algorithm.ES512.value: ec.SECP521R1,
}


def coordinate_size(curve: ec.EllipticCurve) -> int:
    """Byte width of one signature component (P-521 rounds up to 66)."""
    return (curve.key_size + 7) // 8


def der_to_raw(der: bytes, size: int) -> bytes:
    """
    DER (r, s) -> fixed-width r || s, each zero-padded to `size` bytes.
    """
    r, s = decode_dss_signature(der)
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def raw_to_der(raw: bytes, size: int) -> bytes:
    """
    Fixed-width r || s -> DER. The input must be exactly 2 * size bytes.
    """
    if len(raw) != 2 * size:
        raise MalformedTokenError(
            f"ECDSA signature must be {2 * size} bytes, got {len(raw)}"
        )
    r = int.from_bytes(raw[:size], "big")
    s = int.from_bytes(raw[size:], "big")
    return encode_dss_signature(r, s)


class ECDSAValidator(Validator):
    """
    ES256 / ES384 / ES512 on P-256 / P-384 / P-521.

    Nonces come from OpenSSL's CSPRNG, which is safe to use from several
    threads at once. deterministic=True switches to RFC 6979 nonces so the
    same key and input always give the same signature (needs OpenSSL 3.2+).
    """

    SUPPORTED = frozenset(CURVES)

    def __init__(
        self,
        algorithm: str,
        private_key: Optional[ec.EllipticCurvePrivateKey] = None,
        public_key: Optional[ec.EllipticCurvePublicKey] = None,
        deterministic: bool = False,
    ) -> None:
        super().__init__(algorithm)

        if private_key is not None:
            self._check_key(private_key, ec.EllipticCurvePrivateKey)
            if public_key is None:
                public_key = private_key.public_key()
        if public_key is not None:
            self._check_key(public_key, ec.EllipticCurvePublicKey)

        self.private_key = private_key
        self.public_key = public_key
        self.deterministic = deterministic
        self.size = coordinate_size(CURVES[self.algorithm]())

    def _check_key(
        self,
        key: Union[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey],
        kind: type,
    ) -> None:
        if not isinstance(key, kind):
            raise InvalidKeyError(f"expected {kind.__name__}, got {type(key).__name__}")
        if not isinstance(key.curve, CURVES[self.algorithm]):
            raise InvalidKeyError(f"{self.algorithm} cannot use a {key.curve.name} key")

    def _ecdsa(self) -> ec.ECDSA:
        if self.deterministic:
            return ec.ECDSA(self.hash_algorithm(), deterministic_signing=True)
        return ec.ECDSA(self.hash_algorithm())

    def sign(self, token: Token) -> None:
        if self.private_key is None:
            raise InvalidKeyError(f"{self.algorithm} signing requires a private key")

        signing_input = self._prepare(token)
        der = self.private_key.sign(signing_input, self._ecdsa())
        token.signature = b64url_encode(der_to_raw(der, self.size))

    def validate(self, token: Token) -> bool:
        der = raw_to_der(token.signature_bytes(), self.size)

        if self.public_key is None:
            raise BadSignatureError(f"no public key configured for {self.algorithm}")

        try:
            self.public_key.verify(der, token.signing_input(), ec.ECDSA(self.hash_algorithm()))
            return True
        except InvalidSignature:
            return False
