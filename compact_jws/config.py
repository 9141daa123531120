import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for compact_jws.
    Values can be overridden via JWS_* environment variables or a .env file.
    """

    model_config = SettingsConfigDict(env_prefix="JWS_", env_file=".env", extra="ignore")

    # Algorithm used by encode() when the caller does not name one
    default_alg: str = "HS256"

    default_typ: str = "JWT"

    # Implicit secret for HMAC algorithms when encode()/decode() get no key
    hmac_key: Optional[str] = None

    log_level: str = "WARNING"


# create a single settings instance we can import everywhere
settings = Settings()


def setup_logging(level: Optional[str] = None) -> None:
    log_level = (level or settings.log_level).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    logging.getLogger("compact_jws").setLevel(log_level)
