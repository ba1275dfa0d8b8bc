from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.position import PositionRepository
from database.repositories.application import ApplicationRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'PositionRepository',
    'ApplicationRepository',
]
