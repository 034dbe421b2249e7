"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

One dataclass holds every tunable. It is built once at startup, from the
CLI (chirpy.__main__) or from the environment (ServerConfig.from_env()),
validated, and then only read.

    ┌──────────────────────┬──────────────┬───────────────────────────────┐
    │ Setting              │ Default      │ Environment                   │
    ├──────────────────────┼──────────────┼───────────────────────────────┤
    │ host                 │ 0.0.0.0      │ CHIRPY_HOST                   │
    │ port                 │ 8080         │ CHIRPY_PORT                   │
    │ timeout              │ 30.0         │ CHIRPY_TIMEOUT                │
    │ max_workers          │ 16           │ CHIRPY_WORKERS                │
    │ static_dir           │ .            │ CHIRPY_STATIC_DIR             │
    │ log_level            │ INFO         │ CHIRPY_LOG_LEVEL              │
    │ log_format           │ text         │ CHIRPY_LOG_FORMAT             │
    └──────────────────────┴──────────────┴───────────────────────────────┘

With no arguments at all the server behaves like the classic Chirpy
binary: listen on every interface, port 8080, serve the working directory.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServerConfig:
    """
    Configuration for the Chirpy server.

        ServerConfig()                                   # production defaults
        ServerConfig(host="127.0.0.1", port=0,           # tests
                     log_level="WARNING")
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    port: int = 8080
    backlog: int = 128
    buffer_size: int = 8192

    timeout: Optional[float] = 30.0
    """Seconds to wait for the first request on a connection."""

    # ─────────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────────

    keep_alive: bool = True
    keep_alive_timeout: float = 5.0
    """Idle seconds before a kept-alive connection is dropped."""

    max_request_size: int = 1024 * 1024
    """Chirps are 140 characters; a megabyte is plenty for anything we serve."""

    # ─────────────────────────────────────────────────────────────────────
    # WORKERS
    # ─────────────────────────────────────────────────────────────────────

    min_workers: int = 4
    max_workers: int = 16
    queue_size: int = 100
    """Accepted connections waiting for a worker before we answer 503."""

    # ─────────────────────────────────────────────────────────────────────
    # STATIC FILES
    # ─────────────────────────────────────────────────────────────────────

    static_dir: str = "."
    static_url_prefix: str = "/app"
    """Subtree served from static_dir and counted by the hit counter."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    log_format: str = "text"
    """Access log format: "text" (one line per request) or "json"."""

    server_name: str = "Chirpy/1.0"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Build a config from CHIRPY_* environment variables.

            CHIRPY_PORT=3000 CHIRPY_LOG_LEVEL=DEBUG python -m chirpy
        """
        max_workers = int(os.getenv("CHIRPY_WORKERS", "16"))
        return cls(
            host=os.getenv("CHIRPY_HOST", "0.0.0.0"),
            port=int(os.getenv("CHIRPY_PORT", "8080")),
            min_workers=min(cls.min_workers, max_workers),
            max_workers=max_workers,
            timeout=float(os.getenv("CHIRPY_TIMEOUT", "30")),
            static_dir=os.getenv("CHIRPY_STATIC_DIR", "."),
            log_level=os.getenv("CHIRPY_LOG_LEVEL", "INFO"),
            log_format=os.getenv("CHIRPY_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Reject impossible settings at startup.

        Port 0 is allowed: the OS picks a free port, which is what the test
        suite relies on.

        Raises:
            ValueError: On the first invalid field.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")
        if self.min_workers < 1:
            raise ValueError("min_workers must be >= 1")
        if self.max_workers < self.min_workers:
            raise ValueError("max_workers must be >= min_workers")
        if self.queue_size < 1:
            raise ValueError("queue_size must be >= 1")
        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.log_format not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got {self.log_format!r}")
        if not self.static_url_prefix.startswith("/"):
            raise ValueError("static_url_prefix must start with '/'")
