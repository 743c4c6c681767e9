"""Business actions executed for each task type.

The money-moving handlers simulate the action and report what would be done;
settlement happens on-chain through the wallet, outside this service.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from src.wallet_tasks.domain.exceptions import TaskHandlerError
from src.wallet_tasks.domain.models.parameters import (
    AnalyzeSpendingParameters,
    AutoSaveParameters,
    CheckBalanceParameters,
    OptimizeYieldParameters,
    SaveMoneyParameters,
    SendMoneyParameters,
    SetBudgetLimitParameters,
    SetSubscriptionParameters,
    TaskParameters,
)
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_type import TaskType
from src.wallet_tasks.domain.repositories import AnalysisProvider

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=TaskParameters)


def parse_parameters(model: type[P], parameters: dict[str, Any], task_type: TaskType) -> P:
    """Validate the parameter bag against ``model`` or raise TaskHandlerError."""
    try:
        return model.model_validate(parameters)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'parameters'}: {error['msg']}"
            for error in exc.errors()
        )
        raise TaskHandlerError(f"Invalid parameters for {task_type.value}: {problems}") from exc


async def save_money(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(SaveMoneyParameters, parameters, TaskType.SAVE_MONEY)
    return TaskResult(
        success=True,
        message=f"Successfully saved {params.amount} {params.token} to your savings account.",
        data={
            "amount": params.amount,
            "token": params.token,
            "action": TaskType.SAVE_MONEY.value,
        },
    )


async def send_money(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(SendMoneyParameters, parameters, TaskType.SEND_MONEY)
    return TaskResult(
        success=True,
        message=f"Successfully sent {params.amount} {params.token} to {params.recipient}.",
        data={
            "amount": params.amount,
            "token": params.token,
            "recipient": params.recipient,
            "action": TaskType.SEND_MONEY.value,
        },
    )


async def set_subscription(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(SetSubscriptionParameters, parameters, TaskType.SET_SUBSCRIPTION)
    return TaskResult(
        success=True,
        message=(
            f"Successfully set up {params.frequency} subscription for {params.amount} "
            f"to service {params.service_address}."
        ),
        data={
            "amount": params.amount,
            "frequency": params.frequency,
            "serviceAddress": params.service_address,
            "action": TaskType.SET_SUBSCRIPTION.value,
        },
    )


async def check_balance(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    parse_parameters(CheckBalanceParameters, parameters, TaskType.CHECK_BALANCE)
    return TaskResult(
        success=True,
        message="Balance check completed. Check your wallet for current balances.",
        data={"action": TaskType.CHECK_BALANCE.value},
    )


async def optimize_yield(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(OptimizeYieldParameters, parameters, TaskType.OPTIMIZE_YIELD)
    return TaskResult(
        success=True,
        message=(
            f"Yield optimization scheduled for {params.amount} {params.token} "
            f"over {params.duration}."
        ),
        data={
            "amount": params.amount,
            "token": params.token,
            "duration": params.duration,
            "action": TaskType.OPTIMIZE_YIELD.value,
        },
    )


async def set_budget_limit(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(SetBudgetLimitParameters, parameters, TaskType.SET_BUDGET_LIMIT)
    return TaskResult(
        success=True,
        message=(
            f"Budget limit set: {params.amount} {params.token} "
            f"per {params.frequency} period."
        ),
        data={
            "amount": params.amount,
            "token": params.token,
            "frequency": params.frequency,
            "action": TaskType.SET_BUDGET_LIMIT.value,
        },
    )


async def auto_save(parameters: dict[str, Any], wallet_address: str) -> TaskResult:
    params = parse_parameters(AutoSaveParameters, parameters, TaskType.AUTO_SAVE)
    return TaskResult(
        success=True,
        message=(
            f"Auto-save configured: {params.percentage}% of incoming transactions "
            f"will be saved in {params.token}."
        ),
        data={
            "percentage": params.percentage,
            "token": params.token,
            "action": TaskType.AUTO_SAVE.value,
        },
    )


class AnalyzeSpendingHandler:
    """Wraps the analysis provider's answer into a task result."""

    def __init__(self, provider: AnalysisProvider) -> None:
        self._provider = provider

    async def __call__(self, parameters: dict[str, Any], wallet_address: str) -> TaskResult:
        params = parse_parameters(
            AnalyzeSpendingParameters, parameters, TaskType.ANALYZE_SPENDING
        )
        logger.info(
            "Requesting spending analysis",
            extra={
                "wallet_address": wallet_address,
                "analysis_type": params.analysis_type,
                "transactions": len(params.transactions),
            },
        )
        analysis = await self._provider.analyze(
            wallet_address, params.transactions, params.analysis_type
        )
        return TaskResult(
            success=True,
            message="Spending analysis completed successfully.",
            data={
                "analysis": analysis.model_dump(mode="json"),
                "action": TaskType.ANALYZE_SPENDING.value,
            },
        )
