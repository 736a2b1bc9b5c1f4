"""Exceptions raised by the persistence layer.

Driver errors (psycopg2) never leave a repository as-is: they are wrapped
in a PersistenceError that keeps the original exception as its cause.
"""

from typing import Optional


class PersistenceError(Exception):
    """Raised when a storage operation fails.

    Attributes:
        message: Description of the attempted operation and its input.
        cause: The underlying driver exception, if any.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


__all__ = ['PersistenceError']
