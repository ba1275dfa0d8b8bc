from .base import Base
from .record import Record

__all__ = [
    'Base',
    'Record',
]
