from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TaskResult(BaseModel):
    success: bool = Field(description="Whether the action succeeded.")
    message: str = Field(description="Human readable outcome.")
    data: dict[str, Any] | None = Field(
        default=None, description="Action specific result payload."
    )
    transaction_hash: str | None = Field(
        default=None, description="On-chain transaction hash, when one was produced."
    )
