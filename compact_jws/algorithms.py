"""
Algorithm registry: the one place that maps an identifier to a validator.

The table is built once at import time from (identifier, factory) pairs.
Adding an algorithm means adding a row here.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .crypto_ecdsa import ECDSAValidator
from .crypto_hmac import HMACValidator
from .crypto_none import NoneValidator
from .crypto_rsa import RSAValidator
from .errors import AlgorithmNotImplementedError, InvalidKeyError
from .models import Algorithm
from .validator import Validator

Factory = Callable[[str, Any], Validator]


def _none(alg: str, key: Any) -> Validator:
    return NoneValidator(alg)


def _hmac(alg: str, key: Any) -> Validator:
    return HMACValidator(alg, key)


def _rsa(alg: str, key: Any) -> Validator:
    if key is None:
        return RSAValidator(alg)
    if isinstance(key, rsa.RSAPrivateKey):
        return RSAValidator(alg, private_key=key)
    if isinstance(key, rsa.RSAPublicKey):
        return RSAValidator(alg, public_key=key)
    raise InvalidKeyError(f"{alg} needs an RSA key, got {type(key).__name__}")


def _ecdsa(alg: str, key: Any) -> Validator:
    if key is None:
        return ECDSAValidator(alg)
    if isinstance(key, ec.EllipticCurvePrivateKey):
        return ECDSAValidator(alg, private_key=key)
    if isinstance(key, ec.EllipticCurvePublicKey):
        return ECDSAValidator(alg, public_key=key)
    raise InvalidKeyError(f"{alg} needs an EC key, got {type(key).__name__}")


_TABLE: List[Tuple[Algorithm, Factory]] = [
    (Algorithm.NONE, _none),
    (Algorithm.HS256, _hmac),
    (Algorithm.HS384, _hmac),
    (Algorithm.HS512, _hmac),
    (Algorithm.RS256, _rsa),
    (Algorithm.RS384, _rsa),
    (Algorithm.RS512, _rsa),
    (Algorithm.ES256, _ecdsa),
    (Algorithm.ES384, _ecdsa),
    (Algorithm.ES512, _ecdsa),
]

_REGISTRY: Dict[str, Factory] = {alg.value: factory for alg, factory in _TABLE}


def supported_algorithms() -> List[str]:
    return list(_REGISTRY)


def resolve(identifier: Any, key: Any = None) -> Validator:
    """
    Return a validator for `identifier`, built around `key`.

    A configured Validator passed as `key` is returned unchanged when it
    implements `identifier`. One built for another algorithm carries no
    usable key material for this one, so InvalidKeyError is raised.
    """
    identifier = getattr(identifier, "value", identifier)
    factory = _REGISTRY.get(identifier) if isinstance(identifier, str) else None
    if factory is None:
        raise AlgorithmNotImplementedError(identifier)

    if isinstance(key, Validator):
        if key.algorithm != identifier:
            raise InvalidKeyError(
                f"validator for {key.algorithm} cannot handle {identifier} tokens"
            )
        return key

    return factory(identifier, key)
