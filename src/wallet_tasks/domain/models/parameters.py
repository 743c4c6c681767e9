from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.wallet_tasks.domain.models.analysis import AnalysisType, WalletTransaction

Amount = str | int | float
Percentage = Annotated[int, Field(gt=0, le=100)] | Annotated[float, Field(gt=0, le=100)]


class TaskParameters(BaseModel):
    """Base class for the per-type views over a task's parameter bag."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SaveMoneyParameters(TaskParameters):
    amount: Amount = Field(description="Amount to move into savings.")
    token: str = Field(default="USDT", description="Token symbol.")


class SendMoneyParameters(TaskParameters):
    amount: Amount = Field(description="Amount to send.")
    token: str = Field(default="USDT", description="Token symbol.")
    recipient: str = Field(min_length=1, description="Recipient wallet address.")


class SetSubscriptionParameters(TaskParameters):
    amount: Amount = Field(description="Amount charged per period.")
    frequency: str = Field(default="monthly", description="Billing frequency.")
    service_address: str = Field(
        alias="serviceAddress", min_length=1, description="Service wallet address."
    )


class CheckBalanceParameters(TaskParameters):
    pass


class AnalyzeSpendingParameters(TaskParameters):
    analysis_type: AnalysisType = Field(
        default="general", alias="analysisType", description="Focus of the analysis."
    )
    transactions: list[WalletTransaction] = Field(
        default_factory=list, description="Transactions to analyze."
    )


class OptimizeYieldParameters(TaskParameters):
    amount: Amount = Field(description="Amount to put to work.")
    token: str = Field(default="USDT", description="Token symbol.")
    duration: str = Field(default="30d", description="Target holding period.")


class SetBudgetLimitParameters(TaskParameters):
    amount: Amount = Field(description="Spending ceiling per period.")
    token: str = Field(default="USDT", description="Token symbol.")
    frequency: str = Field(default="monthly", description="Budget period.")


class AutoSaveParameters(TaskParameters):
    percentage: Percentage = Field(
        description="Share of each incoming transaction to save, in percent."
    )
    token: str = Field(default="USDT", description="Token symbol.")
