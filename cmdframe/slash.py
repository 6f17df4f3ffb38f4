"""Matching application command interactions onto framework commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from .commands import Command

SlashMatch = Tuple[Command, Tuple["ResolvedOption", ...], Tuple[Command, ...]]


class OptionKind(enum.Enum):
    """The kind of a resolved interaction option."""

    VALUE = "value"
    SUBCOMMAND = "subcommand"
    SUBCOMMAND_GROUP = "subcommand_group"
    AUTOCOMPLETE = "autocomplete"


_SUBCOMMAND_KINDS = (OptionKind.SUBCOMMAND, OptionKind.SUBCOMMAND_GROUP)


@dataclass(frozen=True)
class ResolvedOption:
    """An option of an interaction.

    For subcommands and subcommand groups, ``value`` is the sequence of nested
    options. For a focused autocomplete option, ``value`` is the partial input.
    """

    name: str
    value: Any = None
    kind: OptionKind = OptionKind.VALUE


class UnknownInteraction(Exception):
    """An interaction named no known command."""

    def __init__(self, interaction_name: str) -> None:
        super().__init__(f'received unknown interaction "{interaction_name}"')
        self.interaction_name = interaction_name


def find_matching_command(
    interaction_name: str,
    options: Sequence[ResolvedOption],
    commands: Sequence[Command],
) -> Optional[SlashMatch]:
    """Find the command an interaction invokes, descending into subcommands.

    Returns ``(command, leaf_options, parent_commands)`` or ``None``. A command
    matches by its name or its context menu name.
    """
    for cmd in commands:
        if interaction_name != cmd.name and interaction_name != cmd.context_menu_name:
            continue
        sub = next((o for o in options if o.kind in _SUBCOMMAND_KINDS), None)
        if sub is None:
            return cmd, tuple(options), ()
        found = find_matching_command(sub.name, tuple(sub.value or ()), cmd.subcommands)
        if found is not None:
            leaf, leaf_options, parents = found
            return leaf, leaf_options, (cmd, *parents)
    return None


def extract_command(
    interaction_name: str,
    options: Sequence[ResolvedOption],
    commands: Sequence[Command],
) -> SlashMatch:
    """Like :func:`find_matching_command`, but raise :class:`UnknownInteraction` on no match."""
    found = find_matching_command(interaction_name, options, commands)
    if found is None:
        raise UnknownInteraction(interaction_name)
    return found


def focused_option(options: Sequence[ResolvedOption]) -> Optional[Tuple[str, Any]]:
    """Return the name and partial input of the focused autocomplete option, if any."""
    return next(
        ((o.name, o.value) for o in options if o.kind is OptionKind.AUTOCOMPLETE),
        None,
    )