"""
Top‑level package for the Pet Catalog.

All functionality lives in submodules under ``app``: the record store
and gateway in ``app.services``, the list and editor presenters in
``app.presenters`` and the HTTP API in ``app.api``.
"""

__all__ = []
