from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, FrozenSet

from cryptography.hazmat.primitives import hashes

from .errors import AlgorithmNotImplementedError
from .token import Token

# Hash function fixed by the numeric suffix of the algorithm identifier
HASHES: Dict[str, type] = {
    "256": hashes.SHA256,
    "384": hashes.SHA384,
    "512": hashes.SHA512,
}


class Validator(ABC):
    """
    Abstract base class for one signing algorithm.

    Validators hold key material but no token state, so a single instance
    can be shared across many sign/validate calls.
    """

    SUPPORTED: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, algorithm: str) -> None:
        algorithm = getattr(algorithm, "value", algorithm)
        if algorithm not in self.SUPPORTED:
            raise AlgorithmNotImplementedError(algorithm)
        self.algorithm: str = algorithm

    @abstractmethod
    def sign(self, token: Token) -> None:
        """
        Set the token's algorithm, refresh its raw fields and store the
        base64url signature on it.
        """
        raise NotImplementedError

    @abstractmethod
    def validate(self, token: Token) -> bool:
        """
        Check the token's signature against the raw fields captured when it
        was parsed. Returns False for a well-formed but wrong signature.
        """
        raise NotImplementedError

    def _prepare(self, token: Token) -> bytes:
        token.header.alg = self.algorithm
        token.refresh_raw()
        return token.signing_input()

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        return HASHES[self.algorithm[2:]]()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.algorithm!r})"
