"""
Encode/decode façade: builds compact tokens and consumes them end to end.

Dispatch on decode always follows the `alg` declared in the token header.
Callers that only expect one algorithm family must check
get_unverified_header(token).alg themselves before trusting a token.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, IO, Optional, Union

from pydantic import ValidationError

from .algorithms import resolve
from .config import settings
from .errors import (
    BadSignatureError,
    InvalidKeyError,
    JWSError,
    MalformedTokenError,
    SerializationError,
)
from .jose_utils import split_jws
from .metrics import JWS_ERRORS_TOTAL, SIGN_LATENCY_SECONDS, VERIFY_LATENCY_SECONDS
from .models import Header
from .token import ClaimsType, Token, parse_header
from .validator import Validator

logger = logging.getLogger(__name__)


def _implicit_key(alg: Any, key: Any) -> Any:
    if key is None and isinstance(alg, str) and alg.startswith("HS"):
        return settings.hmac_key
    return key


def _validator_for_encode(algorithm: Union[str, Validator, None], key: Any) -> Validator:
    if isinstance(algorithm, Validator):
        if key is not None:
            raise InvalidKeyError("key must not be given together with a configured Validator")
        return algorithm
    alg = getattr(algorithm, "value", algorithm) or settings.default_alg
    return resolve(alg, _implicit_key(alg, key))


def encode(
    claims: Any,
    algorithm: Union[str, Validator, None] = None,
    key: Any = None,
    *,
    headers: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Sign `claims` and return the compact serialization.

    Args:
        claims: dict, pydantic model or any other JSON-serializable value
        algorithm: identifier (e.g. "HS256") or a configured Validator.
            Defaults to settings.default_alg.
        key: key material for the identifier; HMAC falls back to
            settings.hmac_key when omitted. Must be left out when
            `algorithm` is already a Validator.
        headers: extra header members such as "kid". "alg" is always
            set by the validator.
    """
    try:
        validator = _validator_for_encode(algorithm, key)

        fields: Dict[str, Any] = {"typ": settings.default_typ}
        fields.update(headers or {})
        fields["alg"] = validator.algorithm
        try:
            header = Header(**fields)
        except ValidationError as exc:
            raise SerializationError(f"invalid header: {exc.errors()[0]['msg']}") from exc
        token = Token(header, claims)

        t0 = time.perf_counter()
        validator.sign(token)
        SIGN_LATENCY_SECONDS.labels(alg=validator.algorithm).observe(time.perf_counter() - t0)
    except JWSError as exc:
        JWS_ERRORS_TOTAL.labels(type=type(exc).__name__).inc()
        raise

    logger.debug("signed token alg=%s", validator.algorithm)
    return token.serialize()


def decode(token: str, key: Any = None, claims_type: ClaimsType = dict) -> Any:
    """
    Parse, dispatch on the header's algorithm, verify, and return the claims.

    Raises:
        MalformedTokenError: structure, base64url or JSON problems
        AlgorithmNotImplementedError: unknown `alg` in the header
        BadSignatureError: signature mismatch, or no usable key for `alg`
    """
    try:
        parsed = Token.parse(token, claims_type)
        alg = parsed.header.alg

        try:
            validator = resolve(alg, _implicit_key(alg, key))
        except InvalidKeyError as exc:
            raise BadSignatureError(f"no usable key for {alg}: {exc}") from exc

        logger.debug("dispatching token alg=%s to %r", alg, validator)

        t0 = time.perf_counter()
        valid = validator.validate(parsed)
        VERIFY_LATENCY_SECONDS.labels(alg=validator.algorithm).observe(time.perf_counter() - t0)

        if not valid:
            raise BadSignatureError("signature_invalid")
    except JWSError as exc:
        JWS_ERRORS_TOTAL.labels(type=type(exc).__name__).inc()
        raise

    return parsed.payload


def get_unverified_header(token: str) -> Header:
    """
    Return the header without checking the signature.
    For algorithm pinning and key lookup only; never trust the result.
    """
    h_seg, _, _ = split_jws(token)
    return parse_header(h_seg)


class Encoder:
    """Writes signed tokens to a text stream."""

    def __init__(self, writer: IO[str], validator: Validator) -> None:
        self.writer = writer
        self.validator = validator

    def encode(self, claims: Any, headers: Optional[Dict[str, Any]] = None) -> None:
        self.writer.write(encode(claims, self.validator, headers=headers))


class Decoder:
    """Reads whitespace-separated tokens from a text stream and verifies them."""

    def __init__(self, reader: IO[str], key: Any = None) -> None:
        self.reader = reader
        self.key = key

    def _next_token(self) -> str:
        chars = []
        while True:
            ch = self.reader.read(1)
            if not ch:
                break
            if ch.isspace():
                if chars:
                    break
                continue
            chars.append(ch)

        if not chars:
            raise MalformedTokenError("no token in input")
        return "".join(chars)

    def decode(self, claims_type: ClaimsType = dict) -> Any:
        return decode(self._next_token(), self.key, claims_type)
