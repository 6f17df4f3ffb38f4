"""Cooldown tracking for commands: global, per user, guild, channel and member."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Optional, Tuple


@dataclass(frozen=True)
class CooldownContext:
    """The part of an invocation that cooldown buckets are keyed on."""

    user_id: Hashable
    channel_id: Hashable
    guild_id: Optional[Hashable] = None


@dataclass(frozen=True)
class CooldownConfig:
    """Cooldown durations in seconds for each bucket; ``None`` disables a bucket."""

    global_: Optional[float] = None
    user: Optional[float] = None
    guild: Optional[float] = None
    channel: Optional[float] = None
    member: Optional[float] = None


class CooldownType(enum.Enum):
    """The kinds of cooldown bucket."""

    GLOBAL = "global"
    USER = "user"
    GUILD = "guild"
    CHANNEL = "channel"
    MEMBER = "member"


@dataclass
class CooldownTracker:
    """Tracks the last invocation times of a single command in every bucket.

    Times are taken from ``clock``, a monotonic clock returning seconds.
    """

    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)
    _global_invocation: Optional[float] = field(default=None, init=False)
    _user_invocations: Dict[Hashable, float] = field(default_factory=dict, init=False)
    _guild_invocations: Dict[Hashable, float] = field(default_factory=dict, init=False)
    _channel_invocations: Dict[Hashable, float] = field(default_factory=dict, init=False)
    _member_invocations: Dict[Tuple[Hashable, Hashable], float] = field(
        default_factory=dict, init=False
    )

    def remaining_cooldown(
        self, ctx: CooldownContext, config: CooldownConfig
    ) -> Optional[float]:
        """Return the longest remaining cooldown in seconds, or ``None`` if none is active."""
        buckets = [
            (config.global_, self._global_invocation),
            (config.user, self._user_invocations.get(ctx.user_id)),
            (config.channel, self._channel_invocations.get(ctx.channel_id)),
        ]
        if ctx.guild_id is not None:
            buckets.append((config.guild, self._guild_invocations.get(ctx.guild_id)))
            buckets.append(
                (config.member, self._member_invocations.get((ctx.user_id, ctx.guild_id)))
            )

        now = self.clock()
        remaining = []
        for cooldown, last_invocation in buckets:
            if cooldown is None or last_invocation is None:
                continue
            elapsed = max(0.0, now - last_invocation)
            if elapsed <= cooldown:
                remaining.append(cooldown - elapsed)
        return max(remaining, default=None)

    def start_cooldown(self, ctx: CooldownContext) -> None:
        """Record an invocation now, starting every applicable cooldown."""
        now = self.clock()
        self._global_invocation = now
        self._user_invocations[ctx.user_id] = now
        self._channel_invocations[ctx.channel_id] = now
        if ctx.guild_id is not None:
            self._guild_invocations[ctx.guild_id] = now
            self._member_invocations[(ctx.user_id, ctx.guild_id)] = now

    def set_last_invocation(
        self, cooldown_type: CooldownType, key: Optional[Hashable], instant: float
    ) -> None:
        """Set the last invocation time of one bucket.

        ``key`` is ignored for the global bucket; for the member bucket it is a
        ``(user_id, guild_id)`` pair.
        """
        if cooldown_type is CooldownType.GLOBAL:
            self._global_invocation = instant
            return
        if key is None:
            raise ValueError(f"a key is required for the {cooldown_type.value} bucket")
        buckets = {
            CooldownType.USER: self._user_invocations,
            CooldownType.GUILD: self._guild_invocations,
            CooldownType.CHANNEL: self._channel_invocations,
            CooldownType.MEMBER: self._member_invocations,
        }
        if cooldown_type is CooldownType.MEMBER and not (
            isinstance(key, tuple) and len(key) == 2
        ):
            raise ValueError("member key must be a (user_id, guild_id) pair")
        buckets[cooldown_type][key] = instant


Cooldowns = CooldownTracker