"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, storage and errors),
``schemas`` (request and response models), ``services`` (filtering,
mutation and aggregation logic over the consultant collection) and
``api`` (HTTP routers).
"""

from .main import app, create_app  # noqa: F401
