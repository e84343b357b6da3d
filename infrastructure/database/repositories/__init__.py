"""Repository facades exposing typed accessors over low-level mixins.

The store protocol is available for type-checking and dependency injection::

    from infrastructure.database.repositories.base import MetricReadingStore
"""

from infrastructure.database.repositories.base import MetricReadingStore
from infrastructure.database.repositories.metrics import MetricRepository

__all__ = [
    "MetricReadingStore",
    "MetricRepository",
]
