"""Command definitions and lookup of commands and subcommands by name."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .cooldown import CooldownConfig, CooldownTracker

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_FIRST_WHITESPACE = re.compile(r"\s")


class ContextMenuKind(enum.Enum):
    """What a context menu command is invoked on."""

    USER = "user"
    MESSAGE = "message"


@dataclass
class CommandParameter:
    """A parameter of a command, as shown in help and used for autocomplete."""

    name: str
    description: Optional[str] = None
    required: bool = True
    autocomplete_callback: Optional[Callable[..., Any]] = None
    choices: List[Any] = field(default_factory=list)


@dataclass(eq=False)
class Command:
    """A framework command with its settings, actions and subcommands.

    Commands compare by identity, so the same definition found twice is the
    same command.
    """

    name: str
    qualified_name: str = ""
    description: Optional[str] = None
    help_text: Optional[str] = None
    category: Optional[str] = None
    aliases: List[str] = field(default_factory=list)
    subcommands: List["Command"] = field(default_factory=list)
    parameters: List[CommandParameter] = field(default_factory=list)
    prefix_action: Optional[Callable[..., Any]] = None
    slash_action: Optional[Callable[..., Any]] = None
    context_menu_action: Optional[Callable[..., Any]] = None
    context_menu_kind: Optional[ContextMenuKind] = None
    context_menu_name: Optional[str] = None
    hide_in_help: bool = False
    subcommand_required: bool = False
    invoke_on_edit: bool = False
    track_deletion: bool = False
    broadcast_typing: bool = False
    owners_only: bool = False
    guild_only: bool = False
    dm_only: bool = False
    nsfw_only: bool = False
    required_permissions: int = 0
    required_bot_permissions: int = 0
    checks: List[Callable[..., Any]] = field(default_factory=list)
    cooldowns: CooldownTracker = field(default_factory=CooldownTracker)
    cooldown_config: CooldownConfig = field(default_factory=CooldownConfig)

    def __post_init__(self) -> None:
        if not self.qualified_name:
            self.qualified_name = self.name
        if self.context_menu_action is not None and self.context_menu_kind is None:
            raise ValueError("a context menu action needs a context menu kind")

    def matches(self, name: str, case_insensitive: bool = False) -> bool:
        """Tell whether ``name`` is this command's name or one of its aliases."""
        return any(
            _names_equal(candidate, name, case_insensitive)
            for candidate in (self.name, *self.aliases)
        )


@dataclass(frozen=True)
class CommandMatch:
    """A command found in a message, with the name it was invoked by and its arguments."""

    command: Command
    invoked_name: str
    args: str
    parent_commands: Tuple[Command, ...] = ()


def _names_equal(a: str, b: str, case_insensitive: bool) -> bool:
    if case_insensitive:
        return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)
    return a == b


def _split_name(message: str) -> Tuple[str, str]:
    parts = _FIRST_WHITESPACE.split(message, maxsplit=1)
    name = parts[0]
    rest = parts[1].lstrip() if len(parts) > 1 else ""
    return name, rest


def find_command(
    commands: Sequence[Command],
    remaining_message: str,
    case_insensitive: bool = False,
) -> Optional[CommandMatch]:
    """Find the command or nested subcommand invoked by a message without prefix.

    Returns ``None`` if no command matches. Otherwise the deepest matching
    subcommand is returned together with the parents leading to it.
    """
    command_name, rest = _split_name(remaining_message)
    command = next(
        (cmd for cmd in commands if cmd.matches(command_name, case_insensitive)),
        None,
    )
    if command is None:
        return None
    sub_match = find_command(command.subcommands, rest, case_insensitive)
    if sub_match is None:
        return CommandMatch(command, command_name, rest)
    return CommandMatch(
        sub_match.command,
        sub_match.invoked_name,
        sub_match.args,
        (command, *sub_match.parent_commands),
    )


def set_qualified_names(commands: Sequence[Command]) -> None:
    """Set every subcommand's qualified name to its parents' names and its own."""

    def visit(parents: str, children: Sequence[Command]) -> None:
        for cmd in children:
            cmd.qualified_name = f"{parents} {cmd.name}"
            visit(cmd.qualified_name, cmd.subcommands)

    for command in commands:
        visit(command.name, command.subcommands)