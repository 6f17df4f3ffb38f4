"""The framework object that holds options and user data, and its builder."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    FrozenSet,
    Hashable,
    Iterable,
    List,
    Optional,
    Sequence,
    Set,
)

from .checks import CheckContext
from .commands import Command, set_qualified_names
from .prefix import Prefix

logger = logging.getLogger(__name__)

_MESSAGE_CONTENT_WARNING = (
    "Warning: MESSAGE_CONTENT intent not set; prefix commands will not be received"
)


class TeamMemberRole(enum.Enum):
    """The role of a member of the team owning the bot application."""

    ADMIN = "admin"
    DEVELOPER = "developer"
    READ_ONLY = "read_only"


class MembershipState(enum.Enum):
    """Whether a team member has accepted the team invitation."""

    INVITED = "invited"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class TeamMember:
    """A member of the team owning the bot application."""

    user_id: Hashable
    role: TeamMemberRole
    membership_state: MembershipState = MembershipState.ACCEPTED


@dataclass(frozen=True)
class ApplicationInfo:
    """Ownership information of the bot application."""

    owner_id: Optional[Hashable] = None
    team_members: Sequence[TeamMember] = ()


def _log_error(error: BaseException) -> None:
    logger.error("Error in user data setup: %s", error)


@dataclass
class FrameworkOptions:
    """Framework configuration, including the commands."""

    commands: List[Command] = field(default_factory=list)
    owners: Set[Hashable] = field(default_factory=set)
    initialize_owners: bool = True
    initialized_team_roles: Optional[Sequence[TeamMemberRole]] = None
    prefix: Optional[str] = None
    dynamic_prefix: Optional[Callable[..., Any]] = None
    stripped_dynamic_prefix: Optional[Callable[..., Any]] = None
    additional_prefixes: Sequence[Prefix] = ()
    mention_as_prefix: bool = True
    case_insensitive_commands: bool = False
    execute_untracked_edits: bool = True
    skip_checks_for_owners: bool = False
    require_cache_for_guild_check: bool = False
    manual_cooldowns: bool = False
    command_check: Optional[Callable[[CheckContext], Any]] = None
    on_error: Callable[[BaseException], None] = _log_error

    @property
    def prefix_configured(self) -> bool:
        """Tell whether any prefix by which prefix commands are recognised is set."""
        return (
            self.prefix is not None
            or self.dynamic_prefix is not None
            or self.stripped_dynamic_prefix is not None
        )


Setup = Callable[[Any, "Framework"], Any]


def insert_owners(
    application_info: ApplicationInfo,
    owners: Iterable[Hashable],
    initialized_team_roles: Optional[Sequence[TeamMemberRole]] = None,
) -> Set[Hashable]:
    """Return ``owners`` together with the owners named by ``application_info``.

    Only team members who accepted count. Without ``initialized_team_roles``,
    admins and developers are owners; otherwise the members with those roles.
    """
    result = set(owners)
    if application_info.owner_id is not None:
        result.add(application_info.owner_id)
    for member in application_info.team_members:
        if member.membership_state is not MembershipState.ACCEPTED:
            continue
        if initialized_team_roles is None:
            if member.role in (TeamMemberRole.ADMIN, TeamMemberRole.DEVELOPER):
                result.add(member.user_id)
        elif member.role in initialized_team_roles:
            result.add(member.user_id)
    return result


def message_content_intent_warning(
    prefix_configured: bool, can_receive_message_content: bool
) -> Optional[str]:
    """Return (and log) a warning if prefixes are set but message content is not received."""
    if prefix_configured and not can_receive_message_content:
        logger.warning(_MESSAGE_CONTENT_WARNING)
        return _MESSAGE_CONTENT_WARNING
    return None


class Framework:
    """Holds the options and, once the bot is ready, the bot id and user data."""

    def __init__(self, options: FrameworkOptions, setup: Setup) -> None:
        self.options = options
        self._setup: Optional[Setup] = setup
        self._lock = threading.Lock()
        self._bot_id: Optional[Hashable] = None
        self._user_data: Any = None
        self._has_user_data = False
        set_qualified_names(self.options.commands)

    @classmethod
    def builder(cls) -> "FrameworkBuilder":
        """Return a builder to configure a framework."""
        return FrameworkBuilder()

    @property
    def bot_id(self) -> Optional[Hashable]:
        """The bot's user id, ``None`` before the first ready event."""
        return self._bot_id

    def initialize(
        self,
        application_info: Optional[ApplicationInfo] = None,
        can_receive_message_content: bool = True,
    ) -> None:
        """Check the intents and, if enabled, add the application's owners."""
        message_content_intent_warning(
            self.options.prefix_configured, can_receive_message_content
        )
        if self.options.initialize_owners and application_info is not None:
            self.options.owners = insert_owners(
                application_info,
                self.options.owners,
                self.options.initialized_team_roles,
            )

    def handle_ready(self, bot_id: Hashable, ready: Any) -> None:
        """Handle a ready event: store the bot id and run the setup once.

        Later ready events are ignored. An error raised by the setup is passed
        to the options' ``on_error`` handler.
        """
        with self._lock:
            if self._bot_id is None:
                self._bot_id = bot_id
            setup, self._setup = self._setup, None
        if setup is None:
            return
        try:
            user_data = setup(ready, self)
        except Exception as error:
            self.options.on_error(error)
            return
        with self._lock:
            if not self._has_user_data:
                self._user_data = user_data
                self._has_user_data = True

    def user_data(self) -> Any:
        """Return the user data; raise ``RuntimeError`` if setup has not completed."""
        with self._lock:
            if not self._has_user_data:
                raise RuntimeError("user data has not been initialized yet")
            return self._user_data


class FrameworkBuilder:
    """Configures and builds a :class:`Framework`; setup and options are required."""

    def __init__(self) -> None:
        self._setup: Optional[Setup] = None
        self._options: Optional[FrameworkOptions] = None
        self._initialize_owners = True

    def setup(self, setup: Setup) -> "FrameworkBuilder":
        """Set the callback that creates the user data on the first ready event."""
        self._setup = setup
        return self

    def options(self, options: FrameworkOptions) -> "FrameworkBuilder":
        """Set the framework options."""
        self._options = options
        return self

    def initialize_owners(self, initialize_owners: bool) -> "FrameworkBuilder":
        """Set whether the application's owner and team are added to the owners."""
        self._initialize_owners = initialize_owners
        return self

    def build(self) -> Framework:
        """Build the framework; raise ``ValueError`` if setup or options are missing."""
        if self._setup is None:
            raise ValueError("No user data setup function was provided to the framework")
        if self._options is None:
            raise ValueError("No framework options provided")
        self._options.initialize_owners = self._initialize_owners
        return Framework(self._options, self._setup)


__all__: FrozenSet[str] = frozenset()