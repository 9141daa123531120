from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Tuple

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .errors import MalformedTokenError, SerializationError

# Strict base64url charset
BASE64URL_RE = re.compile(r"^[A-Za-z0-9\-_]*$")


def b64url_encode(data: bytes) -> str:
    """
    Base64url encode without padding, as required by JOSE / JWT.
    """
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def add_padding(field: str) -> str:
    """
    Add the minimum number of '=' to reach a multiple-of-4 length.

    A length of 1 mod 4 can never be valid base64.
    """
    missing = -len(field) % 4
    if missing == 3:
        raise MalformedTokenError("invalid base64url length")
    return field + "=" * missing


def decode_padded(padded: str) -> bytes:
    """
    Decode a base64url string that already carries its '=' padding.
    """
    try:
        return base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("invalid base64url") from exc


def b64url_decode(field: str) -> bytes:
    """
    Strict base64url decode of a single token field.

      - Only allows A-Z, a-z, 0-9, '-' and '_'
      - Adds padding if missing
      - Rejects non-canonical encodings (stray bits in the last character)
      - Raises MalformedTokenError if invalid
    """
    if not BASE64URL_RE.fullmatch(field):
        raise MalformedTokenError("invalid base64url characters")

    data = decode_padded(add_padding(field))
    if b64url_encode(data) != field:
        raise MalformedTokenError("non-canonical base64url")
    return data


def _reject_constant(name: str) -> Any:
    raise MalformedTokenError(f"invalid JSON constant {name}")


def _model_json(model: BaseModel) -> Any:
    # unset declared fields are dropped, extra members are kept even when null
    unset = {name for name in type(model).model_fields if getattr(model, name) is None}
    return model.model_dump(mode="json", exclude=unset)


def compact_json(value: Any) -> bytes:
    """
    Compact JSON (no insignificant whitespace), key order preserved.

    pydantic models are dumped in JSON mode with their None-valued declared
    fields left out, so absent registered claims never show up as null.
    NaN and Infinity are refused since they are not JSON.
    """
    try:
        if isinstance(value, BaseModel):
            value = _model_json(value)
        raw = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise SerializationError(f"value is not JSON serializable: {exc}") from exc
    return raw.encode("utf-8")


def encode_header(header: Any) -> str:
    """
    JSON-encode then base64url-encode the JOSE header.
    """
    return b64url_encode(compact_json(header))


def encode_payload(payload: Any) -> str:
    """
    JSON-encode then base64url-encode the JWT payload (claims).
    """
    return b64url_encode(compact_json(payload))


def build_signing_input(header: Any, payload: Any) -> Tuple[str, str]:
    """
    Produce (header_raw, payload_raw) for a header/payload pair.

    The bytes actually signed are header_raw + "." + payload_raw.
    """
    return encode_header(header), encode_payload(payload)


def decode_segment(segment: str) -> Any:
    """
    Decode a base64url-encoded JSON segment (header or payload).
    """
    raw = b64url_decode(segment)
    try:
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedTokenError("invalid JSON in token segment") from exc


def split_jws(token: str) -> Tuple[str, str, str]:
    """
    Split a compact JWS into 3 segments.
    Raises MalformedTokenError if the structure is wrong.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError("malformed_token: expected 3 segments")
    return parts[0], parts[1], parts[2]
