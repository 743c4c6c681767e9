from src.wallet_tasks.domain.models.analysis import (
    AnalysisType,
    WalletAnalysis,
    WalletTransaction,
)
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
from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_status import TaskStatus
from src.wallet_tasks.domain.models.task_type import TaskType
from src.wallet_tasks.domain.models.task_view import TaskStatusView

__all__ = [
    "Task",
    "TaskPatch",
    "TaskStatus",
    "TaskStatusView",
    "TaskType",
    "TaskResult",
    "TaskParameters",
    "SaveMoneyParameters",
    "SendMoneyParameters",
    "SetSubscriptionParameters",
    "CheckBalanceParameters",
    "AnalyzeSpendingParameters",
    "OptimizeYieldParameters",
    "SetBudgetLimitParameters",
    "AutoSaveParameters",
    "AnalysisType",
    "WalletAnalysis",
    "WalletTransaction",
]
