"""
Application package initializer.

``core`` holds configuration, logging, the database connection and the
pets contract; ``services`` the record store, the change notifier and
the gateway; ``presenters`` the catalog and editor presenters; ``api``
the versioned HTTP routes assembled by ``main``.
"""

from .main import app  # noqa: F401
