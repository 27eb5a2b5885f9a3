"""
Error types raised by the developer storage and GraphQL layers
"""


class DeveloperError(Exception):
    """Base class for devgraph errors."""

    pass


class ConfigurationError(DeveloperError):
    """Raised when the process is missing required configuration."""

    pass


class ValidationError(DeveloperError):
    """Raised when a request cannot be applied as given."""

    pass


class StorageError(DeveloperError):
    """Raised when the datastore fails to run a statement."""

    pass


class NotFoundError(StorageError):
    """Raised when no developer row matches the requested id."""

    def __init__(self, developer_id: int):
        super().__init__(f"developer ID {developer_id} not found")
        self.developer_id = developer_id


class CoercionError(DeveloperError, TypeError):
    """Raised when a request argument does not have the expected shape."""

    def __init__(self, argument: str, expected: str, value: object):
        super().__init__(f"{argument}: expected {expected}, got {type(value).__name__}")
        self.argument = argument
        self.value = value


class OperationError(DeveloperError):
    """Error surfaced to GraphQL clients, prefixed with the failing operation."""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause
