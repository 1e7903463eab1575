"""
Endpoint subpackage.

Each module in this package defines an APIRouter for a specific
domain.  Lesson and order routers are aggregated in ``api/router.py``;
``images`` and ``health`` are included directly by the application.
"""
