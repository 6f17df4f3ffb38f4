import pytest

from cmdframe.commands import Command, ContextMenuKind
from cmdframe.slash import (
    OptionKind,
    ResolvedOption,
    UnknownInteraction,
    extract_command,
    find_matching_command,
    focused_option,
)


def _action(*args):
    return None


def test_top_level_match_keeps_options():
    ping = Command("ping")
    opts = (ResolvedOption("count", 3),)
    cmd, leaf_opts, parents = find_matching_command("ping", opts, [Command("other"), ping])
    assert cmd is ping
    assert leaf_opts == opts
    assert parents == ()


def test_nested_subcommand_group():
    leaf = Command("leaf")
    group = Command("group", subcommands=[leaf])
    parent = Command("parent", subcommands=[group])
    leaf_opts = (ResolvedOption("arg", "hello"),)
    options = (
        ResolvedOption(
            "group",
            (ResolvedOption("leaf", leaf_opts, OptionKind.SUBCOMMAND),),
            OptionKind.SUBCOMMAND_GROUP,
        ),
    )
    cmd, found_opts, parents = find_matching_command("parent", options, [parent])
    assert cmd is leaf
    assert found_opts == leaf_opts
    assert parents == (parent, group)


def test_context_menu_name_matches():
    cmd = Command(
        "inspect",
        context_menu_name="Inspect User",
        context_menu_action=_action,
        context_menu_kind=ContextMenuKind.USER,
    )
    found = find_matching_command("Inspect User", (), [cmd])
    assert found[0] is cmd


def test_unknown_name_gives_none():
    assert find_matching_command("nope", (), [Command("ping")]) is None


def test_missing_subcommand_continues_search():
    first = Command("a", subcommands=[Command("y")])
    x = Command("x")
    second = Command("a", subcommands=[x])
    options = (ResolvedOption("x", (), OptionKind.SUBCOMMAND),)
    cmd, _, parents = find_matching_command("a", options, [first, second])
    assert cmd is x
    assert parents == (second,)


def test_missing_subcommand_everywhere_gives_none():
    options = (ResolvedOption("x", (), OptionKind.SUBCOMMAND),)
    assert find_matching_command("a", options, [Command("a")]) is None


def test_extract_command_raises_unknown_interaction():
    with pytest.raises(UnknownInteraction) as info:
        extract_command("ghost", (), [Command("ping")])
    assert info.value.interaction_name == "ghost"


def test_extract_command_returns_match():
    ping = Command("ping")
    cmd, opts, parents = extract_command("ping", (), [ping])
    assert (cmd, opts, parents) == (ping, (), ())


def test_focused_option_found():
    options = (
        ResolvedOption("first", "done"),
        ResolvedOption("second", "par", OptionKind.AUTOCOMPLETE),
    )
    assert focused_option(options) == ("second", "par")


def test_focused_option_absent():
    assert focused_option((ResolvedOption("first", "done"),)) is None