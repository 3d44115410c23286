"""Test utilities for staticserve applications::

    from staticserve.testing import TestClient
"""

from staticserve.testing.client import TestClient

__all__ = ["TestClient"]
