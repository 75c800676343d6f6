from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the fittrack service and device client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITTRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("FITTRACK_DB_PATH") or (self.data_root / "fittrack.db")
        ).expanduser()

        # ---- Device side (daily reset coordinator) ----
        self.reset_marker_path: Path = Path(
            os.environ.get("FITTRACK_RESET_MARKER_PATH")
            or (self.data_root / "device" / "reset_marker.json")
        ).expanduser()
        self.api_base_url: str = os.environ.get(
            "FITTRACK_API_BASE_URL", "http://127.0.0.1:8000"
        )
        self.http_timeout: float = float(os.environ.get("FITTRACK_HTTP_TIMEOUT") or "10")

        self.recent_limit: int = int(os.environ.get("FITTRACK_RECENT_LIMIT") or "5")
        self.log_level: str = (os.environ.get("FITTRACK_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("FITTRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
