"""File system commands — listing, navigation, editing, and searching.

Every handler works through ``ctx.fs``, so relative paths resolve
against the live working directory.  Anticipated failures (missing
paths, wrong node type) read as ``<cmd>: <path>: <reason>``; handlers
either return that line or raise it as a ``TerminalError`` when it ends
the command early.  Anything else propagates to the session, which
prints it.
"""

from __future__ import annotations

import re

from stellar_term.commands._args import (
    count_option,
    flag_letters,
    human_date,
    leading_int,
    pad_right,
    positional,
)
from stellar_term.context import CommandContext
from stellar_term.errors import NotFoundError, PreconditionError, TypeMismatchError, UsageError
from stellar_term.fs import FsError, FsStat, NodeType, normalize, resolve, split_path
from stellar_term.registry import CommandRegistry, CommandResult, CommandSpec

NO_SUCH = "No such file or directory"
DEFAULT_TREE_DEPTH = 2
DEFAULT_LINE_COUNT = 10

# Column widths of the long listing: type, size, updated.
_TYPE_WIDTH = 4
_SIZE_WIDTH = 6
_DATE_WIDTH = 16


def _long_row(display: str, st: FsStat, width: int) -> str:
    return (
        f"{pad_right(display, width)}  "
        f"{pad_right(st.node_type, _TYPE_WIDTH)}  "
        f"{pad_right(str(st.size), _SIZE_WIDTH)}  "
        f"{human_date(st.updated_at)}"
    )


def _cmd_ls(args: list[str], ctx: CommandContext) -> CommandResult:
    """List a directory in short (two-space joined) or long (``-l``) form.

    ``-a`` adds ``.`` and ``..`` entries.  Sizes in the long form are raw
    character counts.
    """
    flags = flag_letters(args)
    paths = positional(args)
    path_arg = paths[0] if paths else "."
    path = ctx.fs.resolve(path_arg)
    if not ctx.fs.exists(path):
        return CommandResult(lines=[f"ls: {path_arg}: {NO_SUCH}"])
    if not ctx.fs.is_dir(path):
        return CommandResult(lines=[path_arg])

    names = ctx.fs.list_dir(path)
    show_all = "a" in flags
    if "l" not in flags:
        shown = [".", "..", *names] if show_all else names
        return CommandResult(lines=["  ".join(shown)])

    entries: list[tuple[str, FsStat]] = []
    if show_all:
        parent = "/" + "/".join(split_path(path)[:-1])
        entries.append((".", ctx.fs.stat(path)))
        entries.append(("..", ctx.fs.stat(parent)))
    for name in names:
        st = ctx.fs.stat(resolve(path, name))
        entries.append((name + ("/" if st.node_type is NodeType.DIRECTORY else ""), st))

    width = max([4, *(len(display) for display, _st in entries)])
    rows = [
        pad_right("name", width) + "  type  size  updated",
        "-" * (width + 2 + _TYPE_WIDTH + 2 + _SIZE_WIDTH + 2 + _DATE_WIDTH),
    ]
    rows.extend(_long_row(display, st, width) for display, st in entries)
    return CommandResult(lines=rows)


def _cmd_cd(args: list[str], ctx: CommandContext) -> CommandResult:
    """Change directory; ``~`` is home, ``-`` is the previous directory."""
    target = args[0] if args else "/"
    if target == "~":
        resolved = ctx.config.home
    elif target == "-":
        resolved = ctx.env.get("OLDPWD") or ctx.cwd
    else:
        resolved = normalize(ctx.fs.resolve(target))
    if not ctx.fs.exists(resolved):
        msg = f"cd: {target}: {NO_SUCH}"
        raise NotFoundError(msg)
    if not ctx.fs.is_dir(resolved):
        msg = f"cd: {target}: Not a directory"
        raise TypeMismatchError(msg)
    ctx.set_env("OLDPWD", ctx.cwd)
    if target == "-":
        return CommandResult(cwd=resolved, lines=[resolved])
    return CommandResult(cwd=resolved)


def _cmd_cat(args: list[str], ctx: CommandContext) -> CommandResult:
    if not args:
        raise UsageError("cat <file>")
    try:
        content = ctx.fs.read_file(args[0])
    except FsError as e:
        return CommandResult(lines=[f"cat: {args[0]}: {e}"])
    return CommandResult(lines=content.split("\n"))


def _cmd_touch(args: list[str], ctx: CommandContext) -> CommandResult:
    if not args:
        raise UsageError("touch <file>")
    try:
        ctx.fs.touch(args[0])
    except FsError as e:
        return CommandResult(lines=[f"touch: {args[0]}: {e}"])
    return CommandResult()


def _cmd_mkdir(args: list[str], ctx: CommandContext) -> CommandResult:
    """Create a directory; ``-p`` creates every missing segment.

    Without ``-p`` the parent must already exist.
    """
    recursive = "-p" in args
    paths = positional(args)
    if not paths:
        raise UsageError("mkdir [-p] <dir>")
    path_arg = paths[0]
    path = ctx.fs.resolve(path_arg)
    try:
        if recursive:
            prefix = ""
            for part in split_path(path):
                prefix += "/" + part
                ctx.fs.mkdir(prefix)
        else:
            parent = "/" + "/".join(split_path(path)[:-1])
            if not ctx.fs.is_dir(parent):
                return CommandResult(lines=[f"mkdir: {path_arg}: {NO_SUCH}"])
            ctx.fs.mkdir(path)
    except FsError as e:
        return CommandResult(lines=[f"mkdir: {path_arg}: {e}"])
    return CommandResult()


def _collect_subtree(ctx: CommandContext, root: str) -> list[str]:
    """Return *root* and every path below it, deepest (longest) first.

    Walks with an explicit stack, then orders by path length so that
    every child is removed before its parent.
    """
    stack = [root]
    found: list[str] = []
    while stack:
        current = stack.pop()
        found.append(current)
        if ctx.fs.is_dir(current):
            stack.extend(resolve(current, name) for name in ctx.fs.list_dir(current))
    return sorted(found, key=len, reverse=True)


def _cmd_rm(args: list[str], ctx: CommandContext) -> CommandResult:
    """Remove a file, or a whole directory tree with ``-r``."""
    recursive = "-r" in args
    paths = positional(args)
    if not paths:
        raise UsageError("rm [-r] <path>")
    path_arg = paths[0]
    path = ctx.fs.resolve(path_arg)
    if not ctx.fs.exists(path):
        return CommandResult(lines=[f"rm: {path_arg}: {NO_SUCH}"])
    try:
        if ctx.fs.is_dir(path):
            if not recursive:
                msg = "rm: is a directory (use -r)"
                raise PreconditionError(msg)
            for victim in _collect_subtree(ctx, path):
                if ctx.fs.is_dir(victim):
                    ctx.fs.rmdir(victim)
                else:
                    ctx.fs.rm(victim)
        else:
            ctx.fs.rm(path)
    except FsError as e:
        return CommandResult(lines=[f"rm: {path_arg}: {e}"])
    return CommandResult()


def _cmd_tree(args: list[str], ctx: CommandContext) -> CommandResult:
    """Draw a directory tree, ``depth`` levels deep (default 2)."""
    path_arg = args[0] if args else "."
    depth = DEFAULT_TREE_DEPTH
    if len(args) > 1:
        value = leading_int(args[1])
        if value is not None:
            depth = max(0, value)
    path = ctx.fs.resolve(path_arg)
    if not ctx.fs.exists(path):
        msg = f"tree: {path_arg}: {NO_SUCH}"
        raise NotFoundError(msg)
    if not ctx.fs.is_dir(path):
        msg = f"tree: {path_arg}: Not a directory"
        raise TypeMismatchError(msg)
    return CommandResult(lines=ctx.fs.tree(path, depth).split("\n"))


def _cmd_mv(args: list[str], ctx: CommandContext) -> CommandResult:
    if len(args) < 2:  # noqa: PLR2004
        raise UsageError("mv <src> <dest>")
    try:
        ctx.fs.rename(args[0], args[1])
    except FsError as e:
        return CommandResult(lines=[f"mv: {e}"])
    return CommandResult()


def _cmd_cp(args: list[str], ctx: CommandContext) -> CommandResult:
    if len(args) < 2:  # noqa: PLR2004
        raise UsageError("cp <src> <dest>")
    try:
        ctx.fs.copy_file(args[0], args[1])
    except FsError as e:
        return CommandResult(lines=[f"cp: {e}"])
    return CommandResult()


def _read_lines(ctx: CommandContext, name: str, args: list[str]) -> tuple[list[str], int] | str:
    """Shared front half of ``head`` and ``tail``.

    Returns the file's lines and the requested count, or an error line.
    """
    usage = f"{name} [-n N] <file>"
    option = count_option(args, "-n", DEFAULT_LINE_COUNT, usage)
    if not option.rest:
        raise UsageError(usage)
    try:
        content = ctx.fs.read_file(option.rest[0])
    except FsError as e:
        return f"{name}: {e}"
    return content.split("\n"), option.count


def _cmd_head(args: list[str], ctx: CommandContext) -> CommandResult:
    result = _read_lines(ctx, "head", args)
    if isinstance(result, str):
        return CommandResult(lines=[result])
    lines, count = result
    return CommandResult(lines=lines[:count])


def _cmd_tail(args: list[str], ctx: CommandContext) -> CommandResult:
    result = _read_lines(ctx, "tail", args)
    if isinstance(result, str):
        return CommandResult(lines=[result])
    lines, count = result
    return CommandResult(lines=lines[-count:])


def _cmd_grep(args: list[str], ctx: CommandContext) -> CommandResult:
    """Print the lines of a file that match a regular expression.

    ``-i`` ignores case, ``-n`` prefixes each match with its line
    number.  Matches come out in file order.
    """
    flags = flag_letters(args)
    operands = positional(args)
    if len(operands) < 2:  # noqa: PLR2004
        raise UsageError("grep [-i] [-n] <pattern> <file>")
    pattern, file_arg = operands[0], operands[1]
    try:
        regex = re.compile(pattern, re.IGNORECASE if "i" in flags else 0)
        lines = ctx.fs.read_file(file_arg).split("\n")
    except (re.error, FsError) as e:
        return CommandResult(lines=[f"grep: {e}"])
    numbered = "n" in flags
    matches = [
        f"{idx + 1}:{line}" if numbered else line
        for idx, line in enumerate(lines)
        if regex.search(line)
    ]
    return CommandResult(lines=matches or ["(no matches)"])


def _cmd_wc(args: list[str], ctx: CommandContext) -> CommandResult:
    """Print line, word, and character counts."""
    if not args:
        raise UsageError("wc <file>")
    file_arg = args[0]
    try:
        content = ctx.fs.read_file(file_arg)
    except FsError as e:
        return CommandResult(lines=[f"wc: {e}"])
    lines = len(content.split("\n"))
    words = len(content.split())
    return CommandResult(lines=[f"{lines} {words} {len(content)} {file_arg}"])


def _cmd_nano(args: list[str], ctx: CommandContext) -> CommandResult:
    """Show a file under the editor banner (the editor is not interactive)."""
    if not args:
        raise UsageError("nano <file>")
    file_arg = args[0]
    try:
        content = ctx.fs.read_file(file_arg)
    except FsError:
        content = ""
    ctx.println(f"--- Editing {file_arg} (type :wq to save & exit) ---")
    for line in content.split("\n"):
        ctx.println(line)
    ctx.println("")
    ctx.println("(editor not interactive in this demo)")
    return CommandResult()


def _cmd_stat(args: list[str], ctx: CommandContext) -> CommandResult:
    """Display node metadata (type, size, timestamps)."""
    if not args:
        raise UsageError("stat <path>")
    try:
        st = ctx.fs.stat(args[0])
    except FsError:
        return CommandResult(lines=[f"stat: {args[0]}: {NO_SUCH}"])
    return CommandResult(
        lines=[
            f"  File: {st.path}",
            f"  Type: {st.node_type}",
            f"  Size: {st.size}",
            f"Create: {human_date(st.created_at)}",
            f"Modify: {human_date(st.updated_at)}",
        ]
    )


COMMANDS: list[CommandSpec] = [
    CommandSpec("ls", "List directory contents", _cmd_ls, usage="ls [-l] [-a] [path]"),
    CommandSpec("cd", "Change directory", _cmd_cd, usage="cd [path] | cd - | cd ~"),
    CommandSpec("cat", "Print file content", _cmd_cat, usage="cat <file>"),
    CommandSpec("touch", "Create file or update timestamp", _cmd_touch, usage="touch <file>"),
    CommandSpec(
        "mkdir",
        "Create directory (the parent must exist unless -p is given)",
        _cmd_mkdir,
        usage="mkdir [-p] <dir>",
    ),
    CommandSpec("rm", "Remove files or directories", _cmd_rm, usage="rm [-r] <path>"),
    CommandSpec("tree", "Show directory tree", _cmd_tree, usage="tree [path] [depth]"),
    CommandSpec("mv", "Move/rename a file", _cmd_mv, usage="mv <src> <dest>"),
    CommandSpec("cp", "Copy a file", _cmd_cp, usage="cp <src> <dest>"),
    CommandSpec("head", "Output the first part of files", _cmd_head, usage="head [-n N] <file>"),
    CommandSpec("tail", "Output the last part of files", _cmd_tail, usage="tail [-n N] <file>"),
    CommandSpec(
        "grep",
        "Search for patterns in files",
        _cmd_grep,
        usage="grep [-i] [-n] <pattern> <file>",
    ),
    CommandSpec("wc", "Word, line, byte counts", _cmd_wc, usage="wc <file>"),
    CommandSpec(
        "nano",
        "Simple inline editor",
        _cmd_nano,
        usage='nano <file> (type ":wq" on a new line to save and exit)',
    ),
    CommandSpec("stat", "Show file metadata", _cmd_stat, usage="stat <path>"),
]


def register(registry: CommandRegistry) -> None:
    """Add the file system commands and their aliases to *registry*."""
    for spec in COMMANDS:
        registry.add(spec)
    registry.alias("dir", "ls", "List directory contents (alias)")
