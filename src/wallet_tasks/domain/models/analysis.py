from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AnalysisType = Literal["savings", "spending", "general"]


class WalletTransaction(BaseModel):
    """A wallet transfer as supplied by the caller or the wallet data source."""

    model_config = ConfigDict(populate_by_name=True)

    hash: str = Field(description="Transaction hash.")
    from_address: str | None = Field(default=None, alias="from")
    to_address: str | None = Field(default=None, alias="to")
    value: str | None = Field(default=None, description="Transferred value.")
    token: str | None = Field(default=None, description="Token contract address.")
    token_symbol: str | None = Field(default=None, alias="tokenSymbol")
    timestamp: datetime | None = None
    block_number: int | None = Field(default=None, alias="blockNumber")
    status: Literal["pending", "confirmed", "failed"] | None = None


class WalletAnalysis(BaseModel):
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""
    confidence: int | float = Field(default=0, description="Confidence from 0 to 100.")
