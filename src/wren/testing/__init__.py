"""Test utilities for wren stacks.

Provides an in-process ASGI client and the pieces it is built from::

    from wren.testing import TestClient
"""

from wren.testing.client import ResponseCollector, TestClient, build_scope

__all__ = [
    "ResponseCollector",
    "TestClient",
    "build_scope",
]
