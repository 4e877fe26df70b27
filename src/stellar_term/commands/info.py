"""Informational and session commands.

These commands never touch the file system: they describe the command
table, print facts about the session, and edit the environment.
"""

from __future__ import annotations

import time
from datetime import datetime

from stellar_term.commands._args import leading_int, pad_right
from stellar_term.context import CommandContext
from stellar_term.errors import UsageError
from stellar_term.net import to_url, validate_url
from stellar_term.registry import CommandRegistry, CommandResult, CommandSpec
from stellar_term.theme import THEME_NAMES

UNAME = "Darwin Web 24.4.0 x86_64 (Browser)"

ABOUT_LINES = [
    "Stellar Terminal v1.1",
    "Web terminal with a virtual filesystem and rich commands.",
    "Type `help` to see commands.",
]


def _cmd_help(args: list[str], ctx: CommandContext) -> CommandResult:
    """List every command, or describe one."""
    spec = ctx.registry.get(args[0]) if args else None
    if spec is not None:
        return CommandResult(lines=spec.describe())
    names = ctx.registry.names()
    width = max(len(name) for name in names)
    rows = ["Available commands:"]
    for spec in ctx.registry:
        rows.append(f"{pad_right(spec.name, width)}  - {spec.description}")
    rows.append("Use `help <command>` or `man <command>` to learn more.")
    return CommandResult(lines=rows)


def _cmd_man(args: list[str], ctx: CommandContext) -> CommandResult:
    """Describe one command."""
    if not args:
        raise UsageError("man <command>")
    spec = ctx.registry.get(args[0])
    if spec is None:
        return CommandResult(lines=[f"man: {args[0]}: not found"])
    return CommandResult(lines=spec.describe())


def _cmd_clear(_args: list[str], _ctx: CommandContext) -> CommandResult:
    return CommandResult(clear=True)


def _cmd_echo(args: list[str], _ctx: CommandContext) -> CommandResult:
    return CommandResult(lines=[" ".join(args)])


def _cmd_pwd(_args: list[str], ctx: CommandContext) -> CommandResult:
    return CommandResult(lines=[ctx.cwd])


def _cmd_whoami(_args: list[str], ctx: CommandContext) -> CommandResult:
    return CommandResult(lines=[ctx.env.get("USER", "")])


def _cmd_uname(_args: list[str], _ctx: CommandContext) -> CommandResult:
    return CommandResult(lines=[UNAME])


def _cmd_date(_args: list[str], _ctx: CommandContext) -> CommandResult:
    now = datetime.now().astimezone()
    return CommandResult(lines=[now.strftime("%a %b %d %Y %H:%M:%S GMT%z (%Z)")])


def _cmd_about(_args: list[str], _ctx: CommandContext) -> CommandResult:
    return CommandResult(lines=list(ABOUT_LINES))


def _cmd_uptime(_args: list[str], ctx: CommandContext) -> CommandResult:
    """Show whole seconds since the session started."""
    seconds = int(time.monotonic() - ctx.started_at)
    return CommandResult(lines=[f"up {seconds}s"])


def _cmd_env(_args: list[str], ctx: CommandContext) -> CommandResult:
    """Print ``KEY=value`` for every variable, sorted by key."""
    return CommandResult(lines=[f"{key}={value}" for key, value in ctx.env.items()])


def _cmd_set(args: list[str], ctx: CommandContext) -> CommandResult:
    """Set one variable from a ``KEY=value`` token.

    Setting ``PWD`` moves the working directory too.
    """
    if not args or "=" not in args[0]:
        raise UsageError("set KEY=value")
    key, value = args[0].split("=", 1)
    if not key:
        raise UsageError("set KEY=value")
    ctx.set_env(key, value)
    if key == "PWD":
        ctx.set_cwd(value)
    return CommandResult()


def _cmd_theme(args: list[str], ctx: CommandContext) -> CommandResult:
    """Show, list, or switch the colour theme."""
    sub = args[0].lower() if args else ""
    available = f"Available themes: {', '.join(THEME_NAMES)}"
    current = f"Current theme: {ctx.env.get('THEME')}"
    if not sub:
        return CommandResult(lines=[current, available])
    if sub == "list":
        return CommandResult(lines=[available])
    if sub == "current":
        return CommandResult(lines=[current])
    if sub not in THEME_NAMES:
        return CommandResult(lines=[available])
    ctx.set_env("THEME", sub)
    return CommandResult(lines=[f"Theme set to {sub}"])


def _cmd_open(args: list[str], ctx: CommandContext) -> CommandResult:
    """Validate a URL and hand it to the link opener."""
    if not args:
        raise UsageError("open <url>")
    try:
        url = validate_url(to_url(args[0]))
    except ValueError:
        return CommandResult(lines=["open: invalid URL"])
    ctx.open_link(url)
    return CommandResult(lines=[f"Opening {url}..."])


def _cmd_history(args: list[str], ctx: CommandContext) -> CommandResult:
    """Print the history, numbered by position in the *full* history.

    ``history -n 2`` after five submissions prints entries 4 and 5.
    """
    history = ctx.history
    if "-n" not in args:
        return CommandResult(lines=[f"{i + 1}  {line}" for i, line in enumerate(history)])
    idx = args.index("-n")
    count = leading_int(args[idx + 1]) if idx + 1 < len(args) else None
    if count is None or count <= 0:
        raise UsageError("history [-n N]")
    tail = history[-count:]
    offset = len(history) - len(tail)
    return CommandResult(lines=[f"{offset + i + 1}  {line}" for i, line in enumerate(tail)])


def _cmd_alias(args: list[str], _ctx: CommandContext) -> CommandResult:
    if not args:
        return CommandResult(lines=["(alias not implemented)"])
    return CommandResult(lines=["(alias set - no effect in demo)"])


def _cmd_which(args: list[str], ctx: CommandContext) -> CommandResult:
    if not args:
        raise UsageError("which <command>")
    name = args[0]
    return CommandResult(lines=[f"/bin/{name}" if name in ctx.registry else f"{name} not found"])


COMMANDS: list[CommandSpec] = [
    CommandSpec(
        "help",
        "List available commands or show help for one",
        _cmd_help,
        usage="help [command]",
    ),
    CommandSpec("man", "Show manual/help for a command", _cmd_man, usage="man <command>"),
    CommandSpec("clear", "Clear the terminal screen", _cmd_clear),
    CommandSpec("echo", "Print text", _cmd_echo, usage="echo [text...]"),
    CommandSpec("pwd", "Print working directory", _cmd_pwd),
    CommandSpec("whoami", "Show current user", _cmd_whoami),
    CommandSpec("uname", "Show system information", _cmd_uname),
    CommandSpec("date", "Print the current date and time", _cmd_date),
    CommandSpec("env", "Print environment variables", _cmd_env),
    CommandSpec("set", "Set an environment variable", _cmd_set, usage="set KEY=value"),
    CommandSpec(
        "theme",
        "Change or inspect terminal theme",
        _cmd_theme,
        usage="theme [name] | theme list | theme current",
    ),
    CommandSpec("open", "Open a URL in a new tab", _cmd_open, usage="open <url>"),
    CommandSpec("about", "About this terminal", _cmd_about),
    CommandSpec("history", "Show command history", _cmd_history, usage="history [-n N]"),
    CommandSpec("uptime", "Show how long the session has been open", _cmd_uptime),
    CommandSpec(
        "alias",
        "List or set command aliases (no-op demo)",
        _cmd_alias,
        usage="alias [name=value]...",
    ),
    CommandSpec("which", "Locate a command", _cmd_which, usage="which <command>"),
]


def register(registry: CommandRegistry) -> None:
    """Add the informational commands and their aliases to *registry*."""
    for spec in COMMANDS:
        registry.add(spec)
    registry.alias("cls", "clear", "Clear the terminal screen (alias)")
    registry.alias("printenv", "env", "Print environment variables (alias)")
    registry.alias("export", "set", "Set an environment variable (alias)")
