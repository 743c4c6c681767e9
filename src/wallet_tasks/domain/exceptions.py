class TaskNotFoundError(Exception):
    """Raised when a task identifier does not exist in the task store."""
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id '{task_id}' was not found.")
        self.task_id = task_id


class DuplicateTaskIdError(Exception):
    """Raised when inserting a task whose id is already stored."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id '{task_id}' already exists.")
        self.task_id = task_id


class PersistenceError(Exception):
    """Raised when the task store fails unexpectedly."""


class UnknownTaskTypeError(Exception):
    """Raised when no handler is registered for a task type."""

    def __init__(self, task_type: str) -> None:
        super().__init__(f"Unknown task type: {task_type}")
        self.task_type = task_type


class TaskHandlerError(Exception):
    """Raised by a handler when the requested action cannot be performed."""


class InvalidTransitionError(Exception):
    """Raised when a status change is not allowed by the task state machine."""

    def __init__(self, current: object, target: object) -> None:
        super().__init__(f"Transition {current} -> {target} is not allowed.")
        self.current = current
        self.target = target


class AnalysisProviderError(Exception):
    """Raised when the analysis provider cannot produce an analysis."""


class TaskDispatchError(Exception):
    """Raised when a created task could not be handed to the dispatcher."""

    def __init__(self, task_id: str, reason: str) -> None:
        super().__init__(f"Task '{task_id}' could not be dispatched: {reason}")
        self.task_id = task_id
