"""Command framework core for chat bots: command matching, checks, cooldowns and help menus."""

__version__ = "0.1.0"

__all__ = [
    "checks",
    "commands",
    "cooldown",
    "framework",
    "help",
    "modal",
    "paginate",
    "prefix",
    "pretty_help",
    "slash",
]