"""
devdb - Disposable, dump-seeded database containers for local development
"""

__version__ = "0.1.0"

from .core import DevDB
from .errors import DevDBError

__all__ = ["DevDB", "DevDBError"]
