import pytest

from cmdframe.commands import Command
from cmdframe.framework import (
    ApplicationInfo,
    Framework,
    FrameworkBuilder,
    FrameworkOptions,
    MembershipState,
    TeamMember,
    TeamMemberRole,
    insert_owners,
    message_content_intent_warning,
)


def _setup_returning(value, calls=None):
    def setup(ready, framework):
        if calls is not None:
            calls.append((ready, framework))
        return value

    return setup


def test_build_requires_setup():
    with pytest.raises(ValueError):
        FrameworkBuilder().options(FrameworkOptions()).build()


def test_build_requires_options():
    with pytest.raises(ValueError):
        Framework.builder().setup(_setup_returning(1)).build()


def test_build_sets_initialize_owners():
    options = FrameworkOptions()
    framework = (
        Framework.builder()
        .setup(_setup_returning(1))
        .options(options)
        .initialize_owners(False)
        .build()
    )
    assert framework.options is options
    assert framework.options.initialize_owners is False


def test_user_data_before_ready_raises():
    framework = Framework(FrameworkOptions(), _setup_returning("data"))
    with pytest.raises(RuntimeError):
        framework.user_data()
    assert framework.bot_id is None


def test_ready_runs_setup_once():
    calls = []
    framework = Framework(FrameworkOptions(), _setup_returning("data", calls))
    framework.handle_ready(42, "ready-1")
    framework.handle_ready(43, "ready-2")
    assert framework.user_data() == "data"
    assert framework.bot_id == 42
    assert calls == [("ready-1", framework)]


def test_setup_error_goes_to_on_error():
    errors = []
    failure = RuntimeError("boom")

    def setup(ready, framework):
        raise failure

    framework = Framework(FrameworkOptions(on_error=errors.append), setup)
    framework.handle_ready(7, None)
    assert errors == [failure]
    assert framework.bot_id == 7
    with pytest.raises(RuntimeError):
        framework.user_data()


def test_qualified_names_set_on_construction():
    child = Command("child", subcommands=[Command("leaf")])
    parent = Command("parent", subcommands=[child])
    Framework(FrameworkOptions(commands=[parent]), _setup_returning(None))
    assert child.qualified_name == "parent child"
    assert child.subcommands[0].qualified_name == "parent child leaf"
    assert parent.qualified_name == "parent"


def test_insert_owners_default_roles():
    info = ApplicationInfo(
        owner_id=1,
        team_members=[
            TeamMember(2, TeamMemberRole.ADMIN),
            TeamMember(3, TeamMemberRole.DEVELOPER),
            TeamMember(4, TeamMemberRole.READ_ONLY),
            TeamMember(5, TeamMemberRole.ADMIN, MembershipState.INVITED),
        ],
    )
    assert insert_owners(info, {9}) == {9, 1, 2, 3}


def test_insert_owners_configured_roles():
    info = ApplicationInfo(
        team_members=[
            TeamMember(2, TeamMemberRole.ADMIN),
            TeamMember(4, TeamMemberRole.READ_ONLY),
        ],
    )
    assert insert_owners(info, set(), [TeamMemberRole.READ_ONLY]) == {4}


def test_insert_owners_does_not_modify_input():
    owners = {9}
    result = insert_owners(ApplicationInfo(owner_id=1), owners)
    assert owners == {9}
    assert result == {1, 9}


def test_initialize_adds_owners_when_enabled():
    framework = Framework(FrameworkOptions(owners={5}), _setup_returning(None))
    framework.initialize(ApplicationInfo(owner_id=6))
    assert framework.options.owners == {5, 6}


def test_initialize_skips_owners_when_disabled():
    options = FrameworkOptions(owners={5}, initialize_owners=False)
    framework = Framework(options, _setup_returning(None))
    framework.initialize(ApplicationInfo(owner_id=6))
    assert framework.options.owners == {5}


def test_message_content_warning():
    assert message_content_intent_warning(True, False) == (
        "Warning: MESSAGE_CONTENT intent not set; prefix commands will not be received"
    )
    assert message_content_intent_warning(True, True) is None
    assert message_content_intent_warning(False, False) is None


def test_prefix_configured():
    assert FrameworkOptions().prefix_configured is False
    assert FrameworkOptions(prefix="~").prefix_configured is True
    assert FrameworkOptions(dynamic_prefix=lambda ctx: "!").prefix_configured is True