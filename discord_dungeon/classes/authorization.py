from discord_dungeon.classes.identity import Identity


def is_authorized(session, identity: Identity) -> bool:
    """Only the creator and their companions may steer a journey. Names are ignored."""
    if session.creator == identity:
        return True
    return any(companion == identity for companion in session.companions)
