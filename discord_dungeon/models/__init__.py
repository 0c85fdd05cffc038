from .base import db
from .dungeon import DungeonSession, DungeonStoryItem

__all__ = ['db', 'DungeonSession', 'DungeonStoryItem']
