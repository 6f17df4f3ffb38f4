"""A plain-text help command that lists commands in a code block."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .commands import Command, find_command

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_NO_PREFIX = "<prefix>"


def _eq_ignore_ascii_case(a: str, b: str) -> bool:
    return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


@dataclass
class Reply:
    """A response message to send: text content and/or an embed."""

    content: Optional[str] = None
    ephemeral: bool = False
    embed: Any = None


@dataclass(frozen=True)
class HelpConfiguration:
    """How the help message looks."""

    extra_text_at_bottom: str = ""
    ephemeral: bool = True
    show_context_menu_commands: bool = False
    show_subcommands: bool = False
    include_description: bool = True


@dataclass
class TwoColumnList:
    """Lines of commands whose descriptions are aligned in a second column."""

    _rows: List[Tuple[str, Optional[str]]] = field(default_factory=list)

    def push_two_columns(self, command: str, description: str) -> None:
        """Add a line whose description is aligned with the others."""
        self._rows.append((command, description))

    def push_heading(self, category: str) -> None:
        """Add a heading line, preceded by a blank line unless it comes first."""
        if self._rows:
            self._rows.append(("", None))
        self._rows.append((f"{category}:", None))

    def render(self) -> str:
        """Return the lines as text, each ending in a newline."""
        longest = max(
            (len(command) for command, description in self._rows if description is not None),
            default=0,
        )
        lines = []
        for command, description in self._rows:
            if description is None:
                lines.append(f"{command}\n")
            else:
                padding = " " * (longest - len(command) + 3)
                lines.append(f"{command}{padding}{description}\n")
        return "".join(lines)


def format_context_menu_name(command: Command) -> Optional[str]:
    """Return e.g. ``"Inspect (on user)"``, or ``None`` for non context menu commands."""
    if command.context_menu_action is None or command.context_menu_kind is None:
        return None
    name = command.context_menu_name or command.name
    return f"{name} (on {command.context_menu_kind.value})"


def _preformat_subcommands(lines: TwoColumnList, command: Command, prefix: str) -> None:
    as_context_command = command.slash_action is None and command.prefix_action is None
    for subcommand in command.subcommands:
        if as_context_command:
            name = format_context_menu_name(subcommand)
            if name is None:
                continue
        else:
            name = f"{prefix} {subcommand.name}"
        lines.push_two_columns(name, subcommand.description or "")


def _preformat_command(
    lines: TwoColumnList,
    config: HelpConfiguration,
    command: Command,
    indent: str,
    options_prefix: Optional[str],
) -> None:
    if command.slash_action is not None:
        prefix = "/"
    elif command.prefix_action is not None:
        prefix = options_prefix or ""
    else:
        raise ValueError(f"command {command.name!r} is neither a prefix nor a slash command")
    line = f"{indent}{prefix}{command.name}"
    lines.push_two_columns(line, command.description or "")
    if config.show_subcommands:
        _preformat_subcommands(lines, command, line)


def _find_help_target(commands: Sequence[Command], command_name: str) -> Optional[Command]:
    for command in commands:
        if command.context_menu_name is not None and _eq_ignore_ascii_case(
            command.context_menu_name, command_name
        ):
            return command
    found = find_command(commands, command_name, True)
    return found.command if found is not None else None


def _command_text(command: Command, config: HelpConfiguration) -> str:
    description, help_text = command.description, command.help_text
    if description is not None and help_text is not None:
        if config.include_description:
            return f"{description}\n\n{help_text}"
        return help_text
    if description is not None:
        return description
    if help_text is not None:
        return help_text
    return "No help available"


def help_single_command(
    commands: Sequence[Command],
    command_name: str,
    config: Optional[HelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> Reply:
    """Build the help reply for one command, e.g. for ``~help my_command``.

    ``prefix`` is the bot's prefix, ``None`` if it could not be determined.
    """
    config = config or HelpConfiguration()
    command = _find_help_target(commands, command_name)
    if command is None:
        return Reply(content=f"No such command `{command_name}`", ephemeral=config.ephemeral)

    invocations: List[str] = []
    subprefix: Optional[str] = None
    if command.slash_action is not None:
        invocations.append(f"`/{command.name}`")
        subprefix = f"  /{command.name}"
    if command.prefix_action is not None:
        shown_prefix = prefix if prefix is not None else _NO_PREFIX
        invocations.append(f"`{shown_prefix}{command.name}`")
        if subprefix is None:
            subprefix = f"  {shown_prefix}{command.name}"
    context_menu_name = format_context_menu_name(command)
    if command.context_menu_name is not None and context_menu_name is not None:
        invocations.append(context_menu_name)
        if subprefix is None:
            subprefix = "  "
    if subprefix is None or not invocations:
        raise ValueError(f"command {command.name!r} cannot be invoked in any way")

    text = _command_text(command, config)
    if command.parameters:
        parameters = TwoColumnList()
        for parameter in command.parameters:
            kind = "required" if parameter.required else "optional"
            parameters.push_two_columns(
                parameter.name, f"({kind}) {parameter.description or ''}"
            )
        text += "\n\n```\nParameters:\n" + parameters.render() + "```"
    if command.subcommands:
        subcommands = TwoColumnList()
        _preformat_subcommands(subcommands, command, subprefix)
        text += "\n\n```\nSubcommands:\n" + subcommands.render() + "```"

    content = "**{}**\n\n{}".format("\n".join(invocations), text)
    return Reply(content=content, ephemeral=config.ephemeral)


def generate_all_commands(
    commands: Sequence[Command],
    config: Optional[HelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> str:
    """Build the overview of all commands, grouped by category, in a code block."""
    config = config or HelpConfiguration()
    categories: Dict[Optional[str], List[Command]] = {}
    for command in commands:
        categories.setdefault(command.category, []).append(command)

    lines = TwoColumnList()
    for category, members in categories.items():
        shown = [
            cmd
            for cmd in members
            if not cmd.hide_in_help
            and (cmd.prefix_action is not None or cmd.slash_action is not None)
        ]
        if not shown:
            continue
        lines.push_heading(category if category is not None else "Commands")
        for command in shown:
            _preformat_command(lines, config, command, "  ", prefix)

    menu = "```\n" + lines.render()
    if config.show_context_menu_commands:
        menu += "\nContext menu commands:\n"
        for command in commands:
            name = format_context_menu_name(command)
            if name is not None:
                menu += f"  {name}\n"
    menu += "\n" + config.extra_text_at_bottom + "\n```"
    return menu


def help(
    commands: Sequence[Command],
    command: Optional[str] = None,
    config: Optional[HelpConfiguration] = None,
    prefix: Optional[str] = None,
) -> Reply:
    """Build help for ``command``, or an overview of all commands if it is ``None``."""
    config = config or HelpConfiguration()
    if command is not None:
        return help_single_command(commands, command, config, prefix)
    return Reply(
        content=generate_all_commands(commands, config, prefix),
        ephemeral=config.ephemeral,
    )