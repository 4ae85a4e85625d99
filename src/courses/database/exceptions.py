"""
Database exceptions
"""


class DatabaseConnectionError(Exception):
    """Raised when a session with the document store cannot be established.

    Always fatal: the process is expected to terminate once this reaches the
    entry point.
    """

    def __init__(self, message: str, target: str | None = None):
        super().__init__(message)
        self.target = target
