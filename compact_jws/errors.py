class JWSError(Exception):
    """Base class for every error raised by compact_jws."""
    pass


class MalformedTokenError(JWSError):
    """
    Raised when a token is structurally invalid: wrong field count,
    bad base64url, bad JSON, or a mis-sized signature encoding.
    """
    pass


class AlgorithmNotImplementedError(JWSError):
    """Raised when an algorithm identifier has no registered validator."""

    def __init__(self, algorithm: object) -> None:
        super().__init__(f"algorithm not implemented: {algorithm!r}")
        self.algorithm = algorithm


class BadSignatureError(JWSError):
    """
    Raised when a well-formed token's signature does not match, or when
    no key material is available to check it.
    """
    pass


class InvalidKeyError(JWSError):
    """
    Caller configuration error: missing private key, key of the wrong type,
    or a curve that does not belong to the requested algorithm.
    """
    pass


class SerializationError(JWSError):
    """Raised when a header or claims value cannot be encoded as JSON."""
    pass
