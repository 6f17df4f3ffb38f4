"""A help command that presents commands in an embed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .commands import Command, ContextMenuKind, find_command
from .help import Reply

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_FIELD_LIMIT = 1024
_NO_PREFIX = "<prefix>"


@dataclass(frozen=True)
class EmbedField:
    """A titled section of an embed."""

    name: str
    value: str
    inline: bool = False


@dataclass
class Embed:
    """A rich message with a title, description, fields, color and footer."""

    title: Optional[str] = None
    description: Optional[str] = None
    fields: List[EmbedField] = field(default_factory=list)
    color: Optional[Tuple[int, int, int]] = None
    footer: Optional[str] = None


@dataclass(frozen=True)
class PrettyHelpConfiguration:
    """How the embed help message looks."""

    extra_text_at_bottom: str = ""
    ephemeral: bool = True
    show_context_menu_commands: bool = False
    show_subcommands: bool = False
    include_description: bool = True
    color: Tuple[int, int, int] = (0, 110, 51)


def _eq_ignore_ascii_case(a: str, b: str) -> bool:
    return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


def _display_name(command: Command) -> str:
    return command.context_menu_name or command.name


def format_cmd_prefix(command: Command, options_prefix: Optional[str]) -> str:
    """Return the text shown before a command's name, opening its code span."""
    if command.slash_action is not None:
        return "`/"
    if command.prefix_action is not None:
        return f"`{options_prefix or ''}"
    if command.context_menu_action is not None:
        if command.context_menu_kind is ContextMenuKind.MESSAGE:
            return "Message menu: `"
        return "User menu: `"
    return "`"


def _overview_lines(
    command: Command, config: PrettyHelpConfiguration, prefix: Optional[str]
) -> List[str]:
    lead = format_cmd_prefix(command, prefix)
    name = _display_name(command)
    if command.description is not None:
        lines = [f"{lead}{name}`: *{command.description}*"]
    else:
        lines = [f"{lead}{name}`."]
    if config.show_subcommands:
        for sub in command.subcommands:
            sub_lead = format_cmd_prefix(sub, prefix)
            sub_name = _display_name(sub)
            if sub.description is not None:
                lines.append(f"> {sub_lead}{sub_name}`: *{sub.description}*")
            else:
                lines.append(f"> {sub_lead}{sub_name}`.")
    return lines


def pretty_help_all_commands(
    commands: Sequence[Command],
    config: Optional[PrettyHelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> Reply:
    """Build an embed listing all visible commands, one field per category."""
    config = config or PrettyHelpConfiguration()
    categories: Dict[Optional[str], List[Command]] = {}
    for cmd in commands:
        visible = not cmd.hide_in_help and (
            cmd.prefix_action is not None
            or cmd.slash_action is not None
            or (cmd.context_menu_action is not None and config.show_context_menu_commands)
        )
        if visible:
            categories.setdefault(cmd.category, []).append(cmd)

    fields = []
    for category, members in categories.items():
        # context menu commands go to the bottom of their category
        ordered = sorted(
            members, key=lambda c: c.slash_action is None and c.prefix_action is None
        )
        buffer = "".join(
            f"{line}\n"
            for cmd in ordered
            for line in _overview_lines(cmd, config, prefix)
        )
        fields.append(EmbedField(category or "", buffer[:_FIELD_LIMIT], False))

    embed = Embed(
        title="Help",
        fields=fields,
        color=config.color,
        footer=config.extra_text_at_bottom,
    )
    return Reply(embed=embed, ephemeral=config.ephemeral)


def _find_target(commands: Sequence[Command], command_name: str) -> Optional[Command]:
    for command in commands:
        if command.context_menu_name is not None and _eq_ignore_ascii_case(
            command.context_menu_name, command_name
        ):
            return command
    found = find_command(commands, command_name, True)
    return found.command if found is not None else None


def _description(command: Command, config: PrettyHelpConfiguration) -> str:
    description, help_text = command.description, command.help_text
    if description is not None and help_text is not None and config.include_description:
        return f"{description}\n\n{help_text}"
    if help_text is not None:
        return help_text
    if description is not None:
        return description
    return "No help available"


def pretty_help_single_command(
    commands: Sequence[Command],
    command_name: str,
    config: Optional[PrettyHelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> Reply:
    """Build the embed help for one command, or a notice if it does not exist."""
    config = config or PrettyHelpConfiguration()
    command = _find_target(commands, command_name)
    if command is None:
        return Reply(content=f"No such command `{command_name}`", ephemeral=config.ephemeral)

    invocations: List[str] = []
    subprefix: Optional[str] = None
    if command.slash_action is not None:
        invocations.append(f"`/{command.name}`")
        subprefix = f"> `/{command.name}`"
    if command.prefix_action is not None:
        shown_prefix = prefix if prefix is not None else _NO_PREFIX
        invocations.append(f"`{shown_prefix}{command.name}`")
        if subprefix is None:
            subprefix = f"> `{shown_prefix}{command.name}`"
    if (
        command.context_menu_name is not None
        and command.context_menu_action is not None
        and command.context_menu_kind is not None
    ):
        invocations.append(
            f"`{_display_name(command)}` (on {command.context_menu_kind.value})"
        )
        if subprefix is None:
            subprefix = "> "
    if not invocations or subprefix is None:
        raise ValueError(f"command {command.name!r} cannot be invoked in any way")

    fields = [EmbedField("", "\n".join(invocations), False)]

    parameter_lines = []
    for parameter in command.parameters:
        kind = "required" if parameter.required else "optional"
        if parameter.description is not None:
            parameter_lines.append(
                f"`{parameter.name}` ({kind}) *{parameter.description} *."
            )
        else:
            parameter_lines.append(f"`{parameter.name}` ({kind}).")
    if parameter_lines:
        fields.append(EmbedField("Parameters", "\n".join(parameter_lines), False))

    sub_lines = []
    for sub in command.subcommands:
        lead = format_cmd_prefix(sub, subprefix)
        name = _display_name(sub)
        if sub.description is not None:
            sub_lines.append(f"> {lead}{name}`: *{sub.description} *")
        else:
            sub_lines.append(f"> {lead}{name}`")
    if sub_lines:
        fields.append(EmbedField("Subcommands", "\n".join(sub_lines), False))

    embed = Embed(description=_description(command, config), fields=fields)
    return Reply(embed=embed, ephemeral=config.ephemeral)


def pretty_help(
    commands: Sequence[Command],
    command: Optional[str] = None,
    config: Optional[PrettyHelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> Reply:
    """Build embed help for ``command``, or for all commands if it is ``None``."""
    if command is not None:
        return pretty_help_single_command(commands, command, config, prefix)
    return pretty_help_all_commands(commands, config, prefix)