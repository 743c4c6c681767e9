from enum import Enum


class TaskType(str, Enum):
    SAVE_MONEY = "SAVE_MONEY"
    SEND_MONEY = "SEND_MONEY"
    SET_SUBSCRIPTION = "SET_SUBSCRIPTION"
    CHECK_BALANCE = "CHECK_BALANCE"
    ANALYZE_SPENDING = "ANALYZE_SPENDING"
    OPTIMIZE_YIELD = "OPTIMIZE_YIELD"
    SET_BUDGET_LIMIT = "SET_BUDGET_LIMIT"
    AUTO_SAVE = "AUTO_SAVE"
