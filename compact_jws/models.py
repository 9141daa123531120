from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class Algorithm(str, Enum):
    NONE = "none"
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"


class Header(BaseModel):
    """
    JOSE header. `alg` is kept as a plain string so that an unknown value
    parsed from the wire surfaces as AlgorithmNotImplementedError at
    dispatch time rather than as a malformed header.
    """

    model_config = ConfigDict(extra="allow")

    alg: str
    typ: Optional[str] = "JWT"

    @field_validator("alg", mode="before")
    @classmethod
    def _alg_value(cls, value):
        if isinstance(value, Algorithm):
            return value.value
        return value


class Claims(BaseModel):
    """
    Registered JWT claims plus any application-specific members.

    Time-valued claims are stored as integer Unix timestamps; unset claims
    are omitted when the token is encoded.
    """

    model_config = ConfigDict(extra="allow")

    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[Union[str, List[str]]] = None
    exp: Optional[int] = None
    nbf: Optional[int] = None
    iat: Optional[int] = None
    jti: Optional[str] = None

    @field_validator("exp", "nbf", "iat", mode="before")
    @classmethod
    def _to_timestamp(cls, value):
        if isinstance(value, datetime):
            return int(value.timestamp())
        if isinstance(value, float):
            return int(value)
        return value
