"""
API package containing the HTTP routes.

``router`` aggregates the lesson and order endpoints mounted under
``/api``; static images and health checks are mounted separately by
``main.create_app``.
"""
