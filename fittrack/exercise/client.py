# -*- coding: utf-8 -*-
"""Reset services used by the daily reset coordinator."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx

from ..config import settings
from .models import ResetRequest, ResetResponse
from .service import reset_completed_exercises


class HttpResetService:
    """Calls ``POST /api/exercise/reset`` on the fittrack API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport

    def __call__(self, user_id: str, previous_date: str, new_date: str) -> ResetResponse:
        payload = ResetRequest(user_id=user_id, previous_date=previous_date, new_date=new_date)
        with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport) as client:
            resp = client.post(f"{self.base_url}/api/exercise/reset", json=payload.model_dump())
            resp.raise_for_status()
            data = resp.json()
        result = ResetResponse.model_validate(data)
        if not result.success:
            raise RuntimeError(f"reset rejected by server: {result.message}")
        return result


class LocalResetService:
    """Runs the reset against a local database (single-process deployments, tests)."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def __call__(self, user_id: str, previous_date: str, new_date: str) -> ResetResponse:
        return reset_completed_exercises(user_id, previous_date, new_date, db_path=self.db_path)
