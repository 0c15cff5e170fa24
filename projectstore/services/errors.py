"""
Typed failures raised by the project store.

Each error carries the fields the request layer turns into a response:
``status_code``, ``error``, ``error_code`` and ``message``.
"""


class ProjectStoreError(Exception):
    status_code = 500
    error = "Internal Server Error"
    error_code = "store_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProjectNotFoundError(ProjectStoreError):
    """
    The project does not exist, or exists under another user or class.

    Both cases look the same to the caller so that project ids from other
    tenants cannot be probed.
    """
    status_code = 404
    error = "Not Found"
    error_code = "inexistent_project"

    def __init__(self, message: str = "Project not found"):
        super().__init__(message)


class DuplicateTrainingError(ProjectStoreError):
    status_code = 409
    error = "Conflict"
    error_code = "duplicate_training"


class StorageError(ProjectStoreError):
    """The storage backend failed."""
