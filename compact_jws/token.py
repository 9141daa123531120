"""
Compact JWS token: parsing from the wire form and assembly back into it.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from .errors import MalformedTokenError
from .jose_utils import b64url_decode, build_signing_input, decode_segment, split_jws
from .models import Header

ClaimsType = Union[Type[BaseModel], Callable[[Any], Any]]


def parse_header(segment: str) -> Header:
    """
    Decode and validate the header field of a compact token.
    """
    value = decode_segment(segment)
    if not isinstance(value, dict):
        raise MalformedTokenError("header is not a JSON object")
    try:
        return Header.model_validate(value)
    except ValidationError as exc:
        raise MalformedTokenError(f"invalid header: {exc.errors()[0]['msg']}") from exc


def parse_payload(segment: str, claims_type: ClaimsType = dict) -> Any:
    """
    Decode the payload field into `claims_type`.

    `dict` returns the JSON object unchanged, a pydantic model class is
    validated, anything else is called with the decoded value.
    """
    value = decode_segment(segment)
    if claims_type is dict:
        if not isinstance(value, dict):
            raise MalformedTokenError("payload is not a JSON object")
        return value
    if isinstance(claims_type, type) and issubclass(claims_type, BaseModel):
        try:
            return claims_type.model_validate(value)
        except ValidationError as exc:
            raise MalformedTokenError("payload does not match claims type") from exc
    try:
        return claims_type(value)
    except (TypeError, ValueError) as exc:
        raise MalformedTokenError("payload does not match claims type") from exc


class Token:
    """
    A JWS in compact serialization.

    The raw (base64url) header and payload fields are the canonical signing
    input. They are captured verbatim when parsing and regenerated only by
    refresh_raw(), which validators call while signing. Verification never
    re-serializes the structured values.
    """

    def __init__(self, header: Header, payload: Any, signature: str = "") -> None:
        self.header = header
        self.payload = payload
        self.signature = signature
        self._header_raw: Optional[str] = None
        self._payload_raw: Optional[str] = None

    @property
    def header_raw(self) -> Optional[str]:
        return self._header_raw

    @property
    def payload_raw(self) -> Optional[str]:
        return self._payload_raw

    @classmethod
    def parse(cls, compact: str, claims_type: ClaimsType = dict) -> "Token":
        h_seg, p_seg, s_seg = split_jws(compact)

        header = parse_header(h_seg)
        payload = parse_payload(p_seg, claims_type)

        token = cls(header, payload, signature=s_seg)
        token._header_raw = h_seg
        token._payload_raw = p_seg
        return token

    def refresh_raw(self) -> None:
        """
        Re-encode header and payload. Must run after the header's algorithm
        has been set, since `alg` is covered by the signature.
        """
        self._header_raw, self._payload_raw = build_signing_input(self.header, self.payload)

    def signing_input(self) -> bytes:
        if self._header_raw is None or self._payload_raw is None:
            raise MalformedTokenError("token has no raw header/payload to verify")
        return f"{self._header_raw}.{self._payload_raw}".encode("ascii")

    def signature_bytes(self) -> bytes:
        return b64url_decode(self.signature)

    def serialize(self) -> str:
        if self._header_raw is None or self._payload_raw is None:
            raise MalformedTokenError("token has not been signed")
        return f"{self._header_raw}.{self._payload_raw}.{self.signature}"

    def __repr__(self) -> str:
        return f"Token(alg={self.header.alg!r}, typ={self.header.typ!r})"
