"""Chat identities and their denormalized text form.

Sessions keep their creator and companions as plain strings such as
``"Ada <@123>, Grace <@456>"`` so the record stays readable in the store.
"""
import logging, re
from dataclasses import dataclass, field
from typing import Iterable, List

import discord

from discord_dungeon.exceptions import IdentityParseError, TransportError

logger = logging.getLogger(__name__)

MENTION_PATTERN = r"<@!?([A-Za-z0-9]+)>"

# One entry per match. The name is the shortest run of text before the entry's
# own tag, and may not swallow an earlier tag.
_IDENTITY_REGEX = re.compile(
    r"(?:,\s*)?(?:(?P<name>(?:(?!<@!?[A-Za-z0-9]+>).)+?) )?<@!?(?P<id>[A-Za-z0-9]+)>",
    re.DOTALL,
)
_MENTION_REGEX = re.compile(MENTION_PATTERN)


@dataclass(frozen=True)
class Identity:
    id: str
    display_name: str = field(default="", compare=False)

    def mention(self) -> str:
        return f"<@{self.id}>"

    def to_string(self) -> str:
        if not self.display_name:
            return self.mention()
        return f"{self.display_name} {self.mention()}"

    def __str__(self):
        return self.to_string()


def mention_ids(text: str) -> List[str]:
    """Every user id mentioned in *text*, in order of appearance."""
    return _MENTION_REGEX.findall(text or "")


def identity_from_string(text: str) -> Identity:
    match = _IDENTITY_REGEX.search(text or "")
    if match is None:
        raise IdentityParseError(f"No identity found in {text!r}")
    return Identity(id=match.group("id"), display_name=(match.group("name") or "").strip())


def identities_to_string(identities: Iterable[Identity]) -> str:
    return ", ".join(identity.to_string() for identity in identities)


def identities_from_string(text: str) -> List[Identity]:
    identities = [
        Identity(id=match.group("id"), display_name=(match.group("name") or "").strip())
        for match in _IDENTITY_REGEX.finditer(text or "")
    ]
    if not identities:
        raise IdentityParseError(f"No identities found in {text!r}")
    return identities


class DiscordIdentityResolver:
    """Looks up the display name behind a Discord user id."""

    def __init__(self, bot):
        self.bot = bot

    async def resolve(self, user_id: str) -> Identity:
        try:
            snowflake = int(user_id)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Not a Discord user id: {user_id!r}") from e
        user = self.bot.get_user(snowflake)
        if user is None:
            try:
                user = await self.bot.fetch_user(snowflake)
            except discord.HTTPException as e:
                raise TransportError(f"Could not look up user {user_id}: {e}") from e
        logger.debug(f"Resolved user {user_id} to {user.display_name}")
        return Identity(id=str(user.id), display_name=user.display_name)

    async def resolve_many(self, user_ids: Iterable[str]) -> List[Identity]:
        return [await self.resolve(user_id) for user_id in user_ids]
