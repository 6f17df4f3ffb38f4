import pytest

from cmdframe.commands import Command, CommandParameter, ContextMenuKind
from cmdframe.help import (
    HelpConfiguration,
    TwoColumnList,
    format_context_menu_name,
    generate_all_commands,
    help,
    help_single_command,
)


def _action(*args):
    return None


def _slash(name, **kwargs):
    return Command(name=name, slash_action=_action, **kwargs)


def _prefixed(name, **kwargs):
    return Command(name=name, prefix_action=_action, **kwargs)


def test_two_column_list_aligns_descriptions():
    lines = TwoColumnList()
    lines.push_two_columns("a", "first")
    lines.push_two_columns("abcdef", "second")
    rendered = lines.render().splitlines()
    assert rendered[0].index("first") == rendered[1].index("second")
    assert rendered[1].startswith("abcdef")
    assert rendered[1].index("second") == len("abcdef") + 3


def test_two_column_list_headings():
    lines = TwoColumnList()
    lines.push_heading("One")
    lines.push_two_columns("x", "y")
    lines.push_heading("Two")
    rendered = lines.render()
    assert rendered.startswith("One:\n")
    assert "\n\nTwo:\n" in rendered
    assert rendered.endswith("\n")


def test_heading_does_not_affect_width():
    lines = TwoColumnList()
    lines.push_heading("A very long heading")
    lines.push_two_columns("ab", "desc")
    assert lines.render().splitlines()[-1].index("desc") == len("ab") + 3


def test_format_context_menu_name():
    cmd = Command(
        name="inspect",
        context_menu_action=_action,
        context_menu_kind=ContextMenuKind.MESSAGE,
        context_menu_name="Inspect",
    )
    assert format_context_menu_name(cmd) == "Inspect (on message)"
    assert format_context_menu_name(_slash("ping")) is None


def test_unknown_command():
    reply = help_single_command([_slash("ping")], "nope")
    assert reply.content == "No such command `nope`"
    assert reply.ephemeral is True


def test_single_slash_command_with_description_and_help():
    cmd = _slash("ping", description="Pings", help_text="Use it often")
    reply = help_single_command([cmd], "ping")
    assert reply.content.startswith("**`/ping`**\n\n")
    assert "Pings\n\nUse it often" in reply.content


def test_description_can_be_excluded():
    cmd = _slash("ping", description="Pings", help_text="Use it often")
    config = HelpConfiguration(include_description=False)
    reply = help_single_command([cmd], "ping", config)
    assert "Pings" not in reply.content
    assert reply.content.endswith("Use it often")


def test_no_help_available():
    reply = help_single_command([_slash("ping")], "ping")
    assert reply.content.endswith("No help available")


def test_prefix_command_with_unknown_prefix():
    reply = help_single_command([_prefixed("ping")], "ping", prefix=None)
    assert reply.content.startswith("**`<prefix>ping`**")


def test_prefix_command_with_prefix():
    reply = help_single_command([_prefixed("ping")], "PING", prefix="~")
    assert reply.content.startswith("**`~ping`**")


def test_parameters_listed():
    cmd = _slash(
        "ban",
        parameters=[
            CommandParameter("user", "Whom to ban", required=True),
            CommandParameter("reason", None, required=False),
        ],
    )
    content = help_single_command([cmd], "ban").content
    assert "\n\n```\nParameters:\n" in content
    assert "(required) Whom to ban" in content
    assert "(optional) " in content
    assert content.endswith("```")


def test_subcommands_listed_and_found():
    child = _slash("child", description="Child command")
    parent = _slash("parent", subcommands=[child])
    content = help_single_command([parent], "parent").content
    assert "Subcommands:" in content
    assert "  /parent child" in content
    sub = help_single_command([parent], "parent child").content
    assert sub.startswith("**`/child`**")
    assert sub.endswith("Child command")


def test_context_menu_name_found_case_insensitively():
    cmd = Command(
        name="inspect_user",
        context_menu_action=_action,
        context_menu_kind=ContextMenuKind.USER,
        context_menu_name="Inspect",
    )
    reply = help_single_command([cmd], "iNsPeCt")
    assert reply.content.startswith("**Inspect (on user)**")


def test_command_without_any_invocation_raises():
    with pytest.raises(ValueError):
        help_single_command([Command(name="ghost")], "ghost")


def test_generate_all_commands_groups_by_category():
    commands = [
        _slash("ping", description="Pings"),
        _prefixed("roll", category="Fun"),
        _slash("secret", hide_in_help=True),
        _slash("pong"),
    ]
    menu = generate_all_commands(commands, prefix="?")
    assert menu.startswith("```\nCommands:\n")
    assert menu.endswith("\n```")
    assert "  /ping" in menu
    assert "  /pong" in menu
    assert "secret" not in menu
    assert "\n\nFun:\n  ?roll" in menu
    assert menu.index("Commands:") < menu.index("Fun:")


def test_generate_all_commands_extra_text_and_context_menu():
    commands = [
        _slash("ping"),
        Command(
            name="inspect",
            context_menu_action=_action,
            context_menu_kind=ContextMenuKind.USER,
            context_menu_name="Inspect",
        ),
    ]
    config = HelpConfiguration(show_context_menu_commands=True, extra_text_at_bottom="Bye")
    menu = generate_all_commands(commands, config)
    assert "\nContext menu commands:\n  Inspect (on user)\n" in menu
    assert menu.endswith("\nBye\n```")


def test_generate_all_commands_show_subcommands():
    parent = _slash("parent", subcommands=[_slash("child")])
    shown = generate_all_commands([parent], HelpConfiguration(show_subcommands=True))
    hidden = generate_all_commands([parent], HelpConfiguration())
    assert "  /parent child" in shown
    assert "child" not in hidden


def test_help_dispatches():
    commands = [_slash("ping", description="Pings")]
    overview = help(commands, None, HelpConfiguration(ephemeral=False))
    assert overview.content == generate_all_commands(commands)
    assert overview.ephemeral is False
    single = help(commands, "ping")
    assert single.content == help_single_command(commands, "ping").content