# cmdframe

cmdframe is the core of a chat-bot command framework. It contains no network client. Your bot
passes message text or interaction data in, and cmdframe:

- works out which command was invoked;
- checks whether the invoker may run it;
- tracks cooldowns;
- builds help replies.

It has no dependencies outside the standard library.

## Installation

```
pip install cmdframe
```

To run the tests:

```
pip install "cmdframe[test]"
pytest
```

## Modules

### `cmdframe.commands`

This module defines the command tree.

- `Command` holds a command's name, aliases, subcommands and parameters (`CommandParameter`). It also holds its actions (`prefix_action`, `slash_action`, `context_menu_action` with a `ContextMenuKind`), its check flags and its cooldown state.
- Commands compare by identity.
- `find_command(commands, remaining_message, case_insensitive)` resolves a message, given without its prefix, down to the deepest matching subcommand. It returns a `CommandMatch` or `None`.
- `set_qualified_names(commands)` sets each subcommand's `qualified_name` to its parents' names followed by its own, separated by spaces.

### `cmdframe.prefix`

This module handles prefix commands in text messages.

- `strip_prefix` tries three prefixes in order: the main prefix, then additional prefixes (strings, or compiled regexes that must match at the start), then a mention of the bot (`<@ID>` or `<@!ID>`).
- `parse_invocation` turns a message into a `PrefixInvocation`.
  - It returns `None` if the message carries no prefix, or if the command has no prefix action.
  - It raises `UnknownCommand` if a prefix matched but no command did.
- `should_run_invocation(trigger, invoke_on_edit, execute_untracked_edits)` applies the edit rules for a `MessageDispatchTrigger`.

### `cmdframe.slash`

This module resolves application-command interactions from their `ResolvedOption`s.

- `find_matching_command` returns `(command, leaf_options, parent_commands)` or `None`. A command matches by its name or by its context-menu name.
- `extract_command` does the same, but raises `UnknownInteraction` when nothing matches.
- `focused_option` returns the name and partial input of the option being autocompleted.

### `cmdframe.checks`

`check_permissions_and_cooldown(ctx, command, parent_commands)` runs the checks on each parent command, then on the command itself. It uses a `CheckContext` and applies these checks:

- owner-only;
- guild-only and DM-only;
- NSFW channel;
- user and bot permissions (`Permissions` flags);
- the global check, then the command's own checks;
- the cooldown.

A failure raises a subclass of `CommandCheckError`:

- `NotAnOwner`
- `GuildOnly`
- `DmOnly`
- `NsfwOnly`
- `MissingUserPermissions`
- `MissingBotPermissions`
- `CommandCheckFailed`
- `CooldownHit`

Running the checks does not start the cooldown. Call `command.cooldowns.start_cooldown(...)` once the command has actually run.

### `cmdframe.cooldown`

`CooldownTracker` records the last invocation in five buckets: global, per user, per guild, per channel and per member.

- `CooldownConfig` gives the duration of each bucket in seconds. `None` switches a bucket off.
- `remaining_cooldown` returns the longest remaining time in seconds, or `None` when no cooldown is active.
- `set_last_invocation` sets the time of one bucket directly.
- The clock can be replaced, which is useful in tests.

### `cmdframe.modal`

`find_modal_text(data, custom_id)` takes a text input's value out of a submitted `ModalInteractionData`. A blank or missing value gives `None`.

### `cmdframe.help`

This module builds a plain-text help menu in a code block.

- `help`, `help_single_command` and `generate_all_commands` build the menu. The first two return a `Reply`, configured by `HelpConfiguration`.
- `TwoColumnList` aligns the descriptions in a second column.

### `cmdframe.pretty_help`

This module builds the same help as an `Embed` with `EmbedField`s.

- The functions are `pretty_help`, `pretty_help_all_commands` and `pretty_help_single_command`.
- The look is configured by `PrettyHelpConfiguration`.

### `cmdframe.paginate`

`Paginator(pages, ctx_id)` follows presses of the previous and next buttons. It wraps around at both ends.

### `cmdframe.framework`

This module ties the options and the user data together.

- `FrameworkOptions` holds the commands, owners, prefixes and check settings.
- `Framework.builder()` returns a `FrameworkBuilder`. `setup` and `options` must both be set before `build()`; if either is missing, `build()` raises `ValueError`.
- `Framework.handle_ready(bot_id, ready)` stores the bot id and runs the setup callback once. An error raised by the setup callback goes to `options.on_error`.
- `Framework.user_data()` raises `RuntimeError` until setup has completed.
- `Framework.initialize(application_info, can_receive_message_content)` warns when a prefix is set but message content cannot be received. It also adds owners with `insert_owners`.

## Examples

Finding a command:

```python
from cmdframe.commands import Command, find_command

noop = lambda ctx: None
commands = [
    Command(name="ping", prefix_action=noop),
    Command(name="admin", prefix_action=noop,
            subcommands=[Command(name="ban", prefix_action=noop)]),
]

match = find_command(commands, "admin ban someone", case_insensitive=False)
print(match.command.name, match.invoked_name, match.args)  # ban ban someone
print([c.name for c in match.parent_commands])             # ['admin']
```

Parsing a message with a prefix:

```python
from cmdframe.prefix import parse_invocation

inv = parse_invocation("!ping now", commands, prefix="!")
print(inv.prefix, inv.invoked_command_name, inv.args)  # ! ping now
```

Cooldowns:

```python
from cmdframe.cooldown import CooldownConfig, CooldownContext, CooldownTracker

tracker = CooldownTracker()
config = CooldownConfig(user=10.0)
ctx = CooldownContext(user_id=1, channel_id=2)

tracker.start_cooldown(ctx)
print(tracker.remaining_cooldown(ctx, config))  # about 10.0
```

Checks:

```python
from cmdframe.checks import CheckContext, MissingUserPermissions, Permissions, check_permissions_and_cooldown

ban = Command(name="ban", prefix_action=noop, required_permissions=Permissions.BAN_MEMBERS)
ctx = CheckContext(author_id=1, channel_id=2, guild_id=3,
                   user_permissions=Permissions.SEND_MESSAGES)
try:
    check_permissions_and_cooldown(ctx, ban)
except MissingUserPermissions as err:
    print(err.missing)  # Permissions.BAN_MEMBERS
```

## What it does not do

cmdframe does not connect to a chat service or receive events. Sending replies, fetching permissions, fetching channel data and registering slash commands are all left to the code that uses it.

It also does not provide:

- parsing of command arguments into typed values, or choice-type parameters;
- a built-in error handler that turns framework errors into messages;
- a server-listing command;
- command-name autocompletion;
- an edit tracker that reruns commands when messages are edited.