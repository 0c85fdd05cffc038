from .dungeon import (
    DungeonError,
    EngineError,
    IdentityParseError,
    RepositoryError,
    SessionConflict,
    SessionNotFound,
    TransportError,
)

__all__ = [
    'DungeonError',
    'EngineError',
    'IdentityParseError',
    'RepositoryError',
    'SessionConflict',
    'SessionNotFound',
    'TransportError',
]
