"""Subcommand handlers, looked up by the name given on the command line."""

import argparse
from typing import Callable, Dict, Optional

# A handler takes the parsed namespace and returns the process exit code
CommandFn = Callable[[argparse.Namespace], int]

_COMMANDS: Dict[str, CommandFn] = {}


def register_command(name: str) -> Callable[[CommandFn], CommandFn]:
    """Register the decorated handler under a subcommand name."""

    def decorator(fn: CommandFn) -> CommandFn:
        _COMMANDS[name] = fn
        return fn

    return decorator


def get_command(name: str) -> Optional[CommandFn]:
    return _COMMANDS.get(name)


def dispatch_command(name: str, args: argparse.Namespace) -> int:
    """Run the handler for ``name``; a name with no handler is a KeyError."""
    if name not in _COMMANDS:
        raise KeyError(f"Unknown command: {name}")
    return _COMMANDS[name](args)


def list_commands() -> list[str]:
    return list(_COMMANDS)


# Handlers register themselves on import
from vnquote.cli.commands import illustrate  # noqa: E402, F401
from vnquote.cli.commands import inspect  # noqa: E402, F401
from vnquote.cli.commands import quote  # noqa: E402, F401
