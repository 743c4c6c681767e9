from typing import Any

from pydantic import BaseModel, Field

from src.wallet_tasks.domain.models.task_type import TaskType


class TaskTemplate(BaseModel):
    """A ready-made task request clients can offer as a shortcut."""

    task_type: TaskType = Field(description="Type of task the template creates.")
    parameters: dict[str, Any] = Field(description="Default parameters.")
    description: str = Field(description="What the template does.")


TASK_TEMPLATES: dict[str, TaskTemplate] = {
    "SAVE_USDT": TaskTemplate(
        task_type=TaskType.SAVE_MONEY,
        parameters={"token": "USDT", "amount": "0"},
        description="Save money in USDT",
    ),
    "SEND_USDT": TaskTemplate(
        task_type=TaskType.SEND_MONEY,
        parameters={"token": "USDT", "amount": "0", "recipient": ""},
        description="Send USDT to another address",
    ),
    "SET_SUBSCRIPTION": TaskTemplate(
        task_type=TaskType.SET_SUBSCRIPTION,
        parameters={"amount": "0", "frequency": "monthly", "serviceAddress": ""},
        description="Set up a recurring subscription",
    ),
    "CHECK_BALANCE": TaskTemplate(
        task_type=TaskType.CHECK_BALANCE,
        parameters={},
        description="Check wallet balances",
    ),
    "ANALYZE_SPENDING": TaskTemplate(
        task_type=TaskType.ANALYZE_SPENDING,
        parameters={"analysisType": "general"},
        description="Analyze spending patterns",
    ),
    "AUTO_SAVE": TaskTemplate(
        task_type=TaskType.AUTO_SAVE,
        parameters={"percentage": 10, "token": "USDT"},
        description="Automatically save a percentage of transactions",
    ),
}


def list_templates() -> dict[str, TaskTemplate]:
    return {name: template.model_copy(deep=True) for name, template in TASK_TEMPLATES.items()}
