from __future__ import annotations

from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import BadSignatureError, InvalidKeyError
from .jose_utils import b64url_encode
from .models import Algorithm
from .token import Token
from .validator import Validator


class RSAValidator(Validator):
    """
    RS256 / RS384 / RS512: RSASSA-PKCS1-v1_5 over the signing input.

    PKCS#1 v1.5 signatures are deterministic, so a given key and signing
    input always produce the same signature.
    """

    SUPPORTED = frozenset({Algorithm.RS256.value, Algorithm.RS384.value, Algorithm.RS512.value})

    def __init__(
        self,
        algorithm: str,
        private_key: Optional[rsa.RSAPrivateKey] = None,
        public_key: Optional[rsa.RSAPublicKey] = None,
    ) -> None:
        super().__init__(algorithm)

        if private_key is not None and not isinstance(private_key, rsa.RSAPrivateKey):
            raise InvalidKeyError(f"expected an RSA private key, got {type(private_key).__name__}")
        if public_key is not None and not isinstance(public_key, rsa.RSAPublicKey):
            raise InvalidKeyError(f"expected an RSA public key, got {type(public_key).__name__}")

        if public_key is None and private_key is not None:
            public_key = private_key.public_key()

        self.private_key = private_key
        self.public_key = public_key

    def sign(self, token: Token) -> None:
        if self.private_key is None:
            raise InvalidKeyError(f"{self.algorithm} signing requires a private key")

        signing_input = self._prepare(token)
        signature = self.private_key.sign(signing_input, padding.PKCS1v15(), self.hash_algorithm())
        token.signature = b64url_encode(signature)

    def validate(self, token: Token) -> bool:
        if self.public_key is None:
            raise BadSignatureError(f"no public key configured for {self.algorithm}")

        signature = token.signature_bytes()

        try:
            self.public_key.verify(
                signature,
                token.signing_input(),
                padding.PKCS1v15(),
                self.hash_algorithm(),
            )
            return True
        except InvalidSignature:
            return False
