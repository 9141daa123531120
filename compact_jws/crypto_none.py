from __future__ import annotations

from .models import Algorithm
from .token import Token
from .validator import Validator


class NoneValidator(Validator):
    """
    Unsecured "none" algorithm.

    validate() accepts every token without looking at the signature. This is
    deliberate; callers that receive untrusted tokens must refuse "none"
    themselves before decoding.
    """

    SUPPORTED = frozenset({Algorithm.NONE.value})

    def __init__(self, algorithm: str = Algorithm.NONE.value) -> None:
        super().__init__(algorithm)

    def sign(self, token: Token) -> None:
        self._prepare(token)
        token.signature = ""

    def validate(self, token: Token) -> bool:
        return True
