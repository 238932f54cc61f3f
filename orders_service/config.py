"""
Environment-driven settings and logging setup.
"""
import logging
import os
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def env(key, default=None):
    """Fetch an env var with a default, treat empty as missing."""
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return value


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    service_name: str = "orders-service"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=env("HOST", cls.host),
            port=int(env("PORT", cls.port)),
            service_name=env("SERVICE_NAME", cls.service_name),
            log_level=env("LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level="INFO"):
    logging.basicConfig(level=level, format=LOG_FORMAT)
