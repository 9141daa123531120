"""compact_jws: JSON Web Signature compact serialization (HS*, RS*, ES*, none)."""

from .algorithms import resolve, supported_algorithms
from .codec import Decoder, Encoder, decode, encode, get_unverified_header
from .crypto_ecdsa import ECDSAValidator
from .crypto_hmac import HMACValidator
from .crypto_none import NoneValidator
from .crypto_rsa import RSAValidator
from .errors import (
    AlgorithmNotImplementedError,
    BadSignatureError,
    InvalidKeyError,
    JWSError,
    MalformedTokenError,
    SerializationError,
)
from .models import Algorithm, Claims, Header
from .token import Token
from .validator import Validator

__version__ = "0.1.0"
__all__ = [
    "Algorithm",
    "Claims",
    "Header",
    "Token",
    "Validator",
    "NoneValidator",
    "HMACValidator",
    "RSAValidator",
    "ECDSAValidator",
    "resolve",
    "supported_algorithms",
    "encode",
    "decode",
    "get_unverified_header",
    "Encoder",
    "Decoder",
    "JWSError",
    "MalformedTokenError",
    "AlgorithmNotImplementedError",
    "BadSignatureError",
    "InvalidKeyError",
    "SerializationError",
]
