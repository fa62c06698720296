# ============================================================================
# sitelink/base/config.py
# Client Configuration Management
# ============================================================================
#
# PURPOSE:
# One place for the knobs that shape how a SiteClient talks to the network:
# HTTP timeouts and TLS verification, WebSocket handshake limits, logging.
#
# KEY CONCEPTS:
# 1. Dataclasses: frozen containers, one per concern
# 2. Environment Variables: every field can be set via SITELINK_* variables
# 3. Singleton: get_config() returns one shared instance, set_config() swaps it
#
# ============================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


# ============================================================================
# HTTP Transport Configuration
# ============================================================================
# Passed to httpx.AsyncClient when the SiteClient builds its own transport.

@dataclass(frozen=True)
class HttpConfig:
    # Seconds to wait on connect/read/write before httpx gives up
    timeout: float = 30.0

    # Verify TLS certificates (turn off only for local test servers)
    verify: bool = True

    # Follow 3xx responses like a browser fetch would
    follow_redirects: bool = True

    # Optional User-Agent header; empty means "keep the httpx default"
    user_agent: str = ""


# ============================================================================
# WebSocket Configuration
# ============================================================================
# Passed to websockets' connect() for every SiteClient.connect() call.

@dataclass(frozen=True)
class WebSocketConfig:
    # Seconds allowed for the opening handshake
    open_timeout: float = 10.0

    # Largest incoming message in bytes (1 MiB)
    max_size: int = 2 ** 20


# ============================================================================
# Logging Configuration
# ============================================================================

@dataclass(frozen=True)
class LogConfig:
    # DEBUG shows every outgoing request, INFO shows captured cookies
    level: str = "INFO"

    # %(name)s is the module that logged (e.g., "sitelink.net.client")
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Write to this file as well as the console (None = console only)
    file_path: Optional[Path] = None

    # Rotate the log file once it reaches this size
    max_file_size_mb: int = 10

    # How many rotated files to keep
    backup_count: int = 5


# ============================================================================
# Master Configuration Container
# ============================================================================

@dataclass(frozen=True)
class SiteLinkConfig:
    http: HttpConfig = field(default_factory=HttpConfig)
    websocket: WebSocketConfig = field(default_factory=WebSocketConfig)
    log: LogConfig = field(default_factory=LogConfig)

    # Debug mode forces DEBUG logging regardless of log.level
    debug: bool = False

    @classmethod
    def from_env(cls) -> "SiteLinkConfig":
        http = HttpConfig(
            timeout=float(os.getenv("SITELINK_HTTP_TIMEOUT", "30")),
            verify=_env_bool("SITELINK_HTTP_VERIFY", "true"),
            follow_redirects=_env_bool("SITELINK_FOLLOW_REDIRECTS", "true"),
            user_agent=os.getenv("SITELINK_USER_AGENT", ""),
        )

        websocket = WebSocketConfig(
            open_timeout=float(os.getenv("SITELINK_WS_OPEN_TIMEOUT", "10")),
            max_size=int(os.getenv("SITELINK_WS_MAX_SIZE", str(2 ** 20))),
        )

        log_file = os.getenv("SITELINK_LOG_FILE")
        log = LogConfig(
            level=os.getenv("SITELINK_LOG_LEVEL", "INFO"),
            file_path=Path(log_file) if log_file else None,
        )

        return cls(
            http=http,
            websocket=websocket,
            log=log,
            debug=_env_bool("SITELINK_DEBUG", "false"),
        )


# ============================================================================
# Global Configuration Singleton
# ============================================================================

_config: Optional[SiteLinkConfig] = None


def get_config() -> SiteLinkConfig:
    """
    Get the global configuration instance.

    Loaded from the environment on first use and reused afterwards.
    """
    global _config
    if _config is None:
        _config = SiteLinkConfig.from_env()
    return _config


def set_config(config: Optional[SiteLinkConfig]) -> None:
    """
    Replace the global configuration (mainly used for testing).

    Passing None drops the cached instance so the next get_config()
    re-reads the environment.
    """
    global _config
    _config = config


def setup_logging(config: Optional[SiteLinkConfig] = None) -> None:
    """
    Configure Python's logging system based on our settings.

    Call this once at application startup; library code never calls it.
    """
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path is not None:
        from logging.handlers import RotatingFileHandler
        cfg.log.file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                cfg.log.file_path,
                maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
                backupCount=cfg.log.backup_count,
            )
        )

    level = logging.DEBUG if cfg.debug else getattr(logging, cfg.log.level.upper())
    logging.basicConfig(
        level=level,
        format=cfg.log.format,
        handlers=handlers,
        force=True,  # Replace any existing logging configuration
    )
    logger.debug("Logging configured at level %s", logging.getLevelName(level))
