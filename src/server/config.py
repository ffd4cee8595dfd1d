"""UI server settings validated before the server thread starts."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

WEBSOCKET_PATH = "/ws"
ROOT_PATH = "/"
INDEX_PATH = "/index.html"
HEALTHZ_PATH = "/healthz"


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


def default_index_file() -> Path:
    """Bundled page: ``web_ui/index.html`` at the repo root or inside a frozen bundle."""
    bundle_root = getattr(sys, "_MEIPASS", None)
    root = Path(bundle_root) if bundle_root else Path(__file__).resolve().parents[2]
    return root / "web_ui" / "index.html"


@dataclass(frozen=True)
class UIServerConfig:
    """Host, port and page served by the UI server."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("ui_server.host cannot be empty")
        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"ui_server.port must be in [1, 65535], got: {self.port}"
            )
        # A disabled server never reads the page.
        if self.enabled and not Path(self.index_file or "").is_file():
            raise ServerConfigurationError(
                f"ui_server.index_file is not a readable file: {self.index_file!r}"
            )

    @property
    def websocket_path(self) -> str:
        return WEBSOCKET_PATH

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        index_file = (settings.index_file or "").strip() or str(default_index_file())
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            index_file=index_file,
        )
