"""HTTP access to the coaching service."""

from coachai.api.client import ApiClient
from coachai.api.http import create_http_client

__all__ = ["ApiClient", "create_http_client"]
