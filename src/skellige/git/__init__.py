"""Git layer for skellige.

Provides the unified ``Error`` type and the GitPython-backed repository
operations that raise it.
"""

from .errors import Error, ErrorKind, converted
from .repository import StreamProgress, branch, clone, last_message, repo, update, url

__all__ = [
    # Errors
    "Error",
    "ErrorKind",
    "converted",
    # Operations
    "StreamProgress",
    "branch",
    "clone",
    "last_message",
    "repo",
    "update",
    "url",
]
