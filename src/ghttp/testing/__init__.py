"""Test utilities for ghttp applications::

    from ghttp.testing import TestClient
"""

from ghttp.testing.client import TestClient

__all__ = ["TestClient"]
