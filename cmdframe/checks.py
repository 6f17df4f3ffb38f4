"""Permission, ownership, channel and cooldown checks run before a command."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, FrozenSet, Hashable, Optional, Sequence

from .commands import Command
from .cooldown import CooldownContext


class Permissions(enum.IntFlag):
    """Permission bits of a user in a channel."""

    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VAD = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_GUILD_EXPRESSIONS = 1 << 30
    USE_APPLICATION_COMMANDS = 1 << 31
    REQUEST_TO_SPEAK = 1 << 32
    MANAGE_EVENTS = 1 << 33
    MANAGE_THREADS = 1 << 34
    CREATE_PUBLIC_THREADS = 1 << 35
    CREATE_PRIVATE_THREADS = 1 << 36
    USE_EXTERNAL_STICKERS = 1 << 37
    SEND_MESSAGES_IN_THREADS = 1 << 38
    USE_EMBEDDED_ACTIVITIES = 1 << 39
    MODERATE_MEMBERS = 1 << 40

    @classmethod
    def all(cls) -> "Permissions":
        """Return every permission."""
        return cls(reduce(lambda acc, member: acc | int(member), cls, 0))


class CommandCheckError(Exception):
    """A command may not run for this invocation."""


class NotAnOwner(CommandCheckError):
    def __init__(self) -> None:
        super().__init__("Only bot owners can call this command")


class GuildOnly(CommandCheckError):
    def __init__(self) -> None:
        super().__init__("You cannot run this command in DMs.")


class DmOnly(CommandCheckError):
    def __init__(self) -> None:
        super().__init__("You cannot run this command outside DMs.")


class NsfwOnly(CommandCheckError):
    def __init__(self) -> None:
        super().__init__("You cannot run this command outside NSFW channels.")


class MissingUserPermissions(CommandCheckError):
    """The user lacks permissions; ``missing`` is ``None`` when they could not be determined."""

    def __init__(self, missing: Optional[Permissions]) -> None:
        if missing is None:
            super().__init__("You may be lacking permissions. Not executing for safety")
        else:
            super().__init__(f"You're lacking permissions: {missing!r}")
        self.missing = missing


class MissingBotPermissions(CommandCheckError):
    def __init__(self, missing: Permissions) -> None:
        super().__init__(
            f"Command cannot be executed because the bot is lacking permissions: {missing!r}"
        )
        self.missing = missing


class CommandCheckFailed(CommandCheckError):
    """A check returned false (``error`` is ``None``) or raised ``error``."""

    def __init__(self, error: Optional[BaseException] = None) -> None:
        super().__init__("A command check failed" + (f": {error}" if error else ""))
        self.error = error


class CooldownHit(CommandCheckError):
    def __init__(self, remaining: float) -> None:
        super().__init__(
            f"You're too fast. Please wait {int(remaining)} seconds before retrying"
        )
        self.remaining = remaining


@dataclass
class CheckContext:
    """What the checks need to know about an invocation and the framework.

    ``user_permissions`` and ``bot_permissions`` are the permissions in the
    channel, ``None`` when unknown. ``channel_nsfw`` is ``None`` for channels
    outside a guild; ``channel_known`` is false when the channel could not be
    fetched.
    """

    author_id: Hashable
    channel_id: Hashable
    guild_id: Optional[Hashable] = None
    bot_id: Optional[Hashable] = None
    owners: FrozenSet[Hashable] = field(default_factory=frozenset)
    user_permissions: Optional[Permissions] = None
    bot_permissions: Optional[Permissions] = None
    channel_nsfw: Optional[bool] = None
    channel_known: bool = True
    guild_cached: bool = True
    skip_checks_for_owners: bool = False
    require_cache_for_guild_check: bool = False
    manual_cooldowns: bool = False
    command_check: Optional[Callable[["CheckContext"], Any]] = None

    @property
    def is_owner(self) -> bool:
        return self.author_id in self.owners

    def cooldown_context(self) -> CooldownContext:
        return CooldownContext(
            user_id=self.author_id, channel_id=self.channel_id, guild_id=self.guild_id
        )

    def _permissions(self, known: Optional[Permissions]) -> Optional[Permissions]:
        if self.guild_id is None:
            return Permissions.all()
        return known


def missing_permissions(
    required: int, available: Optional[int]
) -> Optional[Permissions]:
    """Return the required permissions not in ``available``.

    Nothing required means nothing missing; otherwise unknown ``available``
    gives ``None``.
    """
    if not required:
        return Permissions(0)
    if available is None:
        return None
    return Permissions(int(required) & ~int(available))


def check_single_command(ctx: CheckContext, command: Command) -> None:
    """Run the checks of one command, raising a :class:`CommandCheckError` on failure."""
    if ctx.skip_checks_for_owners and ctx.is_owner:
        return

    if command.owners_only and not ctx.is_owner:
        raise NotAnOwner()

    if command.guild_only:
        if ctx.guild_id is None:
            raise GuildOnly()
        if ctx.require_cache_for_guild_check and not ctx.guild_cached:
            raise GuildOnly()

    if command.dm_only and ctx.guild_id is not None:
        raise DmOnly()

    if command.nsfw_only:
        if not ctx.channel_known:
            raise NsfwOnly()
        if ctx.channel_nsfw is False:
            raise NsfwOnly()

    user_missing = missing_permissions(
        command.required_permissions, ctx._permissions(ctx.user_permissions)
    )
    if user_missing is None or user_missing:
        raise MissingUserPermissions(user_missing)

    bot_missing = missing_permissions(
        command.required_bot_permissions, ctx._permissions(ctx.bot_permissions)
    )
    if bot_missing:
        raise MissingBotPermissions(bot_missing)

    checks = ([ctx.command_check] if ctx.command_check else []) + list(command.checks)
    for check in checks:
        try:
            passed = check(ctx)
        except Exception as error:
            raise CommandCheckFailed(error) from error
        if not passed:
            raise CommandCheckFailed(None)

    if not ctx.manual_cooldowns:
        remaining = command.cooldowns.remaining_cooldown(
            ctx.cooldown_context(), command.cooldown_config
        )
        if remaining is not None:
            raise CooldownHit(remaining)


def check_permissions_and_cooldown(
    ctx: CheckContext, command: Command, parent_commands: Sequence[Command] = ()
) -> None:
    """Check the parents, then the command itself. Does not start the cooldown."""
    for parent in parent_commands:
        check_single_command(ctx, parent)
    check_single_command(ctx, command)