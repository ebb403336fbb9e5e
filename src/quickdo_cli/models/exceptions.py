"""Custom exceptions for quickdo."""


class QuickdoError(Exception):
    """Base exception for all quickdo errors."""


class TaskNotFoundError(QuickdoError):
    """Raised when a task id (or id prefix) matches no task, or several."""


class TaskImportError(QuickdoError):
    """Raised when an import payload is not a JSON array of task objects."""


class EmptyTaskInputError(QuickdoError):
    """Raised when a task is added from blank text."""


class StorageError(QuickdoError):
    """Raised when the task file cannot be read or written."""
