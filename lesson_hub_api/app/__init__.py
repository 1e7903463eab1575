"""
Application package initializer.

The project is organised into small layers: ``core`` holds
configuration, logging, error types and the document store accessor;
``schemas`` defines request and response bodies; ``services`` holds
the business logic for lessons, orders and seeding; ``api`` exposes
the HTTP routes.
"""

from .main import app  # noqa: F401
