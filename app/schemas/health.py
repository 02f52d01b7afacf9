"""
app/schemas/health.py
"""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: bool
    providers: list[str]
