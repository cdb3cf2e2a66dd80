from __future__ import annotations

import os
from dataclasses import dataclass

from . import __version__


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Role: "all", "frontend" or the name of a single body part
    component: str = os.getenv("PODTATO_COMPONENT", "all")
    host: str = os.getenv("PODTATO_HOST", "0.0.0.0")
    port: int = _env_int("PODTATO_PORT", 9000)
    # Duration string such as "5s" or "1m30s"; empty means no delay
    startup_delay: str = os.getenv("PODTATO_STARTUP_DELAY", "")
    secret_message: str = os.getenv("PODTATO_SECRET_MESSAGE", "")

    # Identity reported by the part route
    version: str = os.getenv("PODTATO_VERSION", __version__)
    part_number: str = os.getenv("PODTATO_PART_NUMBER", "01")

    # Peer calls
    peer_timeout_s: float = _env_float("PODTATO_PEER_TIMEOUT_S", 2.0)
    services_config_path: str | None = os.getenv("SERVICES_CONFIG_FILE_PATH")
    service_env_prefix: str = os.getenv("PODTATO_SERVICE_ENV_PREFIX", "PODTATO_HEAD")

    log_level: str = os.getenv("PODTATO_LOG_LEVEL", "INFO")


settings = Settings()
