class DungeonError(Exception):
    """Base class for failures raised by the dungeon's collaborators."""


class TransportError(DungeonError):
    """The chat platform could not be reached, or refused a request."""


class RepositoryError(DungeonError):
    """The record store failed to create, read or update a record."""


class SessionNotFound(RepositoryError):
    pass


class SessionConflict(RepositoryError):
    """More than one session is bound to the same thread, or a conditional write lost."""


class EngineError(DungeonError):
    """The narrative engine failed, or returned nothing usable."""


class IdentityParseError(ValueError):
    pass
