"""
Re-check server configuration.
"""

from dataclasses import dataclass


@dataclass
class ServerConfig:
    """Settings for signing re-check links and serving the callback endpoint."""

    secret_key: str
    host: str = "localhost"
    protocol: str = "http"
    port: str | None = None  # Public port used in links; empty for the protocol default
    server_port: int = 8100  # Port the callback server binds to
    recheck_cooldown: float = 10.0  # Seconds before the same PR may be re-checked

    @property
    def public_base_url(self) -> str:
        """Base URL under which the callback server is reachable from GitHub users."""
        port = f":{self.port}" if self.port else ""
        return f"{self.protocol}://{self.host}{port}"
