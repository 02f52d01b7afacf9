"""
app/connectors package marker.
"""

from app.connectors.app_store_connector import AppStoreProvider
from app.connectors.base import BaseProvider, ConnectorRequestError
from app.connectors.brandfetch_connector import BrandfetchProvider
from app.connectors.clearbit_connector import ClearbitProvider

__all__ = [
    "AppStoreProvider",
    "BaseProvider",
    "BrandfetchProvider",
    "ClearbitProvider",
    "ConnectorRequestError",
]
