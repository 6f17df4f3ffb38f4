"""Recognising prefix command invocations in message text."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple, Union

from .commands import Command, find_command

Prefix = Union[str, "re.Pattern[str]"]


class MessageDispatchTrigger(enum.Enum):
    """What caused a message to be dispatched."""

    MESSAGE_CREATE = "message_create"
    MESSAGE_EDIT = "message_edit"
    MESSAGE_EDIT_FROM_INVALID = "message_edit_from_invalid"


class UnknownCommand(Exception):
    """A prefix was recognised but no command name followed it."""

    def __init__(self, prefix: str, msg_content: str) -> None:
        super().__init__(
            f"Recognized prefix `{prefix}`, but didn't recognize command name in `{msg_content}`"
        )
        self.prefix = prefix
        self.msg_content = msg_content


@dataclass(frozen=True)
class PrefixInvocation:
    """A parsed prefix command invocation."""

    prefix: str
    invoked_command_name: str
    args: str
    command: Command
    parent_commands: Tuple[Command, ...] = ()


def _strip_additional(content: str, prefix: Prefix) -> Optional[Tuple[str, str]]:
    if isinstance(prefix, str):
        if content.startswith(prefix):
            return prefix, content[len(prefix):]
        return None
    match = prefix.search(content)
    if match is None or match.start() != 0:
        return None
    return content[: match.end()], content[match.end():]


def _strip_mention(content: str, bot_id: Hashable) -> Optional[Tuple[str, str]]:
    if not content.startswith("<@"):
        return None
    rest = content[2:].lstrip("!")
    bot = str(bot_id)
    if not rest.startswith(bot):
        return None
    rest = rest[len(bot):]
    if not rest.startswith(">"):
        return None
    rest = rest[1:]
    return content[: len(content) - len(rest)], rest


def strip_prefix(
    content: str,
    prefix: Optional[str] = None,
    additional_prefixes: Sequence[Prefix] = (),
    mention_as_prefix: bool = True,
    bot_id: Optional[Hashable] = None,
) -> Optional[Tuple[str, str]]:
    """Split ``content`` into the matching prefix and the rest, or return ``None``.

    The main prefix is tried first, then the additional prefixes (strings or
    compiled patterns that must match at the start), then a mention of the bot.
    """
    if prefix is not None and content.startswith(prefix):
        return prefix, content[len(prefix):]

    for additional in additional_prefixes:
        stripped = _strip_additional(content, additional)
        if stripped is not None:
            return stripped

    if mention_as_prefix and bot_id is not None:
        return _strip_mention(content, bot_id)
    return None


def parse_invocation(
    content: str,
    commands: Sequence[Command],
    prefix: Optional[str] = None,
    additional_prefixes: Sequence[Prefix] = (),
    mention_as_prefix: bool = True,
    bot_id: Optional[Hashable] = None,
    case_insensitive: bool = False,
) -> Optional[PrefixInvocation]:
    """Parse a message into a command invocation.

    Returns ``None`` if the message is not an invocation or the command has no
    prefix implementation; raises :class:`UnknownCommand` if a prefix matched
    but no command did.
    """
    stripped = strip_prefix(content, prefix, additional_prefixes, mention_as_prefix, bot_id)
    if stripped is None:
        return None
    used_prefix, msg_content = stripped
    msg_content = msg_content.lstrip()

    found = find_command(commands, msg_content, case_insensitive)
    if found is None:
        raise UnknownCommand(used_prefix, msg_content)
    if found.command.prefix_action is None:
        return None
    return PrefixInvocation(
        prefix=used_prefix,
        invoked_command_name=found.invoked_name,
        args=found.args,
        command=found.command,
        parent_commands=found.parent_commands,
    )


def should_run_invocation(
    trigger: MessageDispatchTrigger,
    invoke_on_edit: bool,
    execute_untracked_edits: bool,
) -> bool:
    """Tell whether an invocation caused by ``trigger`` should be run."""
    if trigger is MessageDispatchTrigger.MESSAGE_EDIT and not invoke_on_edit:
        return False
    if (
        trigger is MessageDispatchTrigger.MESSAGE_EDIT_FROM_INVALID
        and not execute_untracked_edits
    ):
        return False
    return True