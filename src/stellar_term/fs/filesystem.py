"""In-memory virtual file system with nested directory nodes.

The terminal's file system is a plain tree held entirely in memory:

- **File**: a leaf node carrying text content and two timestamps.

- **Directory**: a node whose ``children`` dict maps names to child
  nodes.  A name is unique among its siblings, and every node has
  exactly one parent, so the structure is always a tree.

- **Path resolution**: ``resolve(cwd, path)`` turns a relative path
  into an absolute one *without* touching the tree.  Every other
  operation takes the resulting absolute path and walks the tree from
  the root, one component at a time.

Why nested nodes instead of an inode table?
    Nothing here needs hard links or orphaned files.  Parent-to-child
    ownership is all the terminal uses, and it keeps ``rm`` a single
    dict deletion.

Errors are raised as subclasses of both ``FsError`` and the matching
builtin ``OSError`` subclass, so callers can catch either the terminal
family or the familiar Python exception.
"""

from __future__ import annotations

from typing import TypeAlias

import time
from dataclasses import dataclass, field
from enum import StrEnum

ROOT_PATH = "/"

SEED_README = "Welcome to Terminal. Type `help` to get started."
SEED_TODO = "- build terminal\n- ship app"


class NodeType(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    DIRECTORY = "dir"


class FsError(Exception):
    """Base class for every virtual file system failure."""


class PathIsFileError(FsError, NotADirectoryError):
    """A path segment that must be a directory is an existing file."""


class NotAFileError(FsError, IsADirectoryError):
    """A file operation was aimed at a directory."""


class NotADirError(FsError, NotADirectoryError):
    """A directory operation was aimed at a file."""


class NoSuchFileError(FsError, FileNotFoundError):
    """The file to read or copy does not exist."""


class NoSuchPathError(FsError, FileNotFoundError):
    """The path does not exist at all."""


class DirectoryNotEmptyError(FsError, OSError):
    """``rmdir`` was called on a directory that still has children."""


class InvalidPathError(FsError, ValueError):
    """The path cannot name a file (for example the root itself)."""


class UnsupportedOperationError(FsError, OSError):
    """The operation is not supported for this kind of node."""


def _now() -> float:
    return time.time()


@dataclass
class File:
    """A file node holding text content."""

    name: str
    content: str = ""
    created_at: float = field(default_factory=_now)
    updated_at: float = field(default_factory=_now)

    @property
    def node_type(self) -> NodeType:
        """Return ``NodeType.FILE``."""
        return NodeType.FILE

    @property
    def size(self) -> int:
        """Return the content length in characters."""
        return len(self.content)


@dataclass
class Directory:
    """A directory node owning its children by name."""

    name: str
    children: dict[str, File | Directory] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]
    created_at: float = field(default_factory=_now)
    updated_at: float = field(default_factory=_now)

    @property
    def node_type(self) -> NodeType:
        """Return ``NodeType.DIRECTORY``."""
        return NodeType.DIRECTORY

    @property
    def size(self) -> int:
        """Directories report a size of zero."""
        return 0


FsNode: TypeAlias = File | Directory


@dataclass(frozen=True)
class FsStat:
    """Read-only snapshot of a node's metadata (returned by stat)."""

    path: str
    name: str
    node_type: NodeType
    size: int
    created_at: float
    updated_at: float


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty components.

    Backslashes count as separators and trailing slashes are ignored::

        "/home/guest/"  → ["home", "guest"]
        "/"             → []

    """
    return [part for part in path.replace("\\", "/").split("/") if part]


def resolve(cwd: str, path: str) -> str:
    """Resolve *path* against *cwd* and return an absolute path.

    Resolution is pure — the tree is never consulted:

    - empty input or ``.`` returns *cwd* itself;
    - absolute input (leading ``/``) is returned verbatim;
    - relative input is appended to *cwd*, ``.`` segments are dropped
      and ``..`` pops the previous segment (a no-op at the root).

    Args:
        cwd: The current working directory (absolute).
        path: The user-supplied path.

    Returns:
        An absolute path string.

    """
    if not path or path == ".":
        return cwd or ROOT_PATH
    if path.startswith("/"):
        return path
    base = cwd.rstrip("/") or ROOT_PATH
    parts: list[str] = []
    for part in split_path(f"{base}/{path}"):
        if part == ".":
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return "/" + "/".join(parts)


def normalize(path: str) -> str:
    """Collapse ``.``/``..`` segments and stray slashes of an absolute path.

    ``"/home/guest/../"`` → ``"/home"``.  Used where a path is stored
    (the working directory) rather than only looked up.
    """
    return resolve(ROOT_PATH, path.lstrip("/")) if path.strip("/") else ROOT_PATH


class VirtualFS:
    """An in-memory file system with hierarchical directories.

    The file system starts with a seeded fixture: ``/home/guest`` with a
    ``readme.txt`` and ``/projects`` with a ``todo.md``.  Pass
    ``seed=False`` to start from an empty root instead.
    """

    def __init__(self, *, seed: bool = True) -> None:
        """Create the root directory and, by default, the seed files."""
        self._root = Directory(name=ROOT_PATH)
        if seed:
            self.mkdir("/home")
            self.mkdir("/home/guest")
            self.write_file("/home/guest/readme.txt", SEED_README)
            self.mkdir("/projects")
            self.write_file("/projects/todo.md", SEED_TODO)

    # -- lookup -------------------------------------------------------------

    @staticmethod
    def resolve(cwd: str, path: str) -> str:
        """Resolve *path* against *cwd* (see module-level ``resolve``)."""
        return resolve(cwd, path)

    def _get(self, path: str) -> FsNode | None:
        """Walk *path* from the root and return the node, or None."""
        node: FsNode = self._root
        for part in split_path(path):
            if not isinstance(node, Directory):
                return None
            child = node.children.get(part)
            if child is None:
                return None
            node = child
        return node

    def _get_dir(self, path: str) -> Directory | None:
        node = self._get(path)
        return node if isinstance(node, Directory) else None

    def exists(self, path: str) -> bool:
        """Check whether a path exists."""
        return self._get(path) is not None

    def is_dir(self, path: str) -> bool:
        """Check whether a path exists and is a directory."""
        return self._get_dir(path) is not None

    def list_dir(self, path: str = ROOT_PATH) -> list[str]:
        """Return the sorted child names of a directory.

        A missing path or a file yields an empty list rather than an
        error.
        """
        directory = self._get_dir(path)
        if directory is None:
            return []
        return sorted(directory.children)

    # -- creation -----------------------------------------------------------

    def _walk_dirs(self, parts: list[str]) -> Directory:
        """Descend through *parts*, creating missing directories.

        Raises:
            PathIsFileError: If a segment is an existing file.

        """
        directory = self._root
        for part in parts:
            child = directory.children.get(part)
            if child is None:
                child = Directory(name=part)
                directory.children[part] = child
            if not isinstance(child, Directory):
                msg = f"Path segment is a file: {part}"
                raise PathIsFileError(msg)
            directory = child
        return directory

    def mkdir(self, path: str) -> None:
        """Create a directory and any missing parents.

        Calling ``mkdir`` on an existing directory is a no-op.

        Raises:
            PathIsFileError: If any segment of the path, the last one
                included, is a file.

        """
        if self.is_dir(path):
            return
        self._walk_dirs(split_path(path))

    def write_file(self, path: str, content: str) -> None:
        """Create or overwrite a file, creating parent directories.

        Args:
            path: Absolute path of the file.
            content: The full new content.

        Raises:
            InvalidPathError: If *path* names the root.
            PathIsFileError: If a parent segment is a file.
            NotAFileError: If *path* is an existing directory.

        """
        parts = split_path(path)
        if not parts:
            msg = "Invalid path"
            raise InvalidPathError(msg)
        name = parts.pop()
        parent = self._walk_dirs(parts)
        if isinstance(parent.children.get(name), Directory):
            msg = f"Is a directory: {path}"
            raise NotAFileError(msg)
        parent.children[name] = File(name=name, content=content)

    def append_file(self, path: str, content: str) -> None:
        """Append *content* to a file, creating it when missing.

        Raises:
            NotAFileError: If *path* is a directory.

        """
        node = self._get(path)
        if node is None:
            self.write_file(path, content)
            return
        if not isinstance(node, File):
            msg = f"Not a file: {path}"
            raise NotAFileError(msg)
        node.content += content
        node.updated_at = _now()

    def touch(self, path: str) -> None:
        """Create an empty file, or bump the timestamp of an existing node."""
        node = self._get(path)
        if node is None:
            self.write_file(path, "")
            return
        node.updated_at = _now()

    # -- reading ------------------------------------------------------------

    def read_file(self, path: str) -> str:
        """Return the content of a file.

        Raises:
            NoSuchFileError: If the path does not exist.
            NotAFileError: If the path is a directory.

        """
        node = self._get(path)
        if node is None:
            msg = "No such file"
            raise NoSuchFileError(msg)
        if not isinstance(node, File):
            msg = "Not a file"
            raise NotAFileError(msg)
        return node.content

    def stat(self, path: str) -> FsStat:
        """Return metadata for *path*.

        Raises:
            NoSuchPathError: If the path does not exist.

        """
        node = self._get(path)
        if node is None:
            msg = "No such path"
            raise NoSuchPathError(msg)
        parts = split_path(path)
        return FsStat(
            path=path,
            name=parts[-1] if parts else ROOT_PATH,
            node_type=node.node_type,
            size=node.size,
            created_at=node.created_at,
            updated_at=node.updated_at,
        )

    # -- removal ------------------------------------------------------------

    def rm(self, path: str) -> None:
        """Delete a single entry from its parent directory.

        Deleting an entry that does not exist is a silent no-op; the
        root itself is never removed.  A non-empty directory is removed
        together with its contents, so callers check emptiness first
        when that matters (see ``rmdir``).

        Raises:
            NoSuchPathError: If the parent is missing or not a directory.

        """
        parts = split_path(path)
        if not parts:
            return
        name = parts.pop()
        parent = self._get_dir("/" + "/".join(parts))
        if parent is None:
            msg = f"No such path: {path}"
            raise NoSuchPathError(msg)
        parent.children.pop(name, None)

    def rmdir(self, path: str) -> None:
        """Remove an empty directory (a missing path is a no-op).

        Raises:
            NotADirError: If the path is a file.
            DirectoryNotEmptyError: If the directory has children.

        """
        node = self._get(path)
        if node is None:
            return
        if not isinstance(node, Directory):
            msg = "Not a directory"
            raise NotADirError(msg)
        if node.children:
            msg = "Directory not empty"
            raise DirectoryNotEmptyError(msg)
        self.rm(path)

    # -- moving -------------------------------------------------------------

    def copy_file(self, src: str, dest: str) -> None:
        """Duplicate a file's content under *dest*.

        Raises:
            NoSuchFileError: If *src* does not exist.
            NotAFileError: If *src* is a directory.

        """
        node = self._get(src)
        if node is None:
            msg = f"No such file: {src}"
            raise NoSuchFileError(msg)
        if not isinstance(node, File):
            msg = f"Is a directory: {src}"
            raise NotAFileError(msg)
        self.write_file(dest, node.content)

    def rename(self, src: str, dest: str) -> None:
        """Move a file to *dest*, replacing whatever file is there.

        Only files can be renamed; moving directories is unsupported.

        Raises:
            NoSuchPathError: If *src* does not exist.
            UnsupportedOperationError: If *src* is a directory.

        """
        node = self._get(src)
        if node is None:
            msg = f"No such path: {src}"
            raise NoSuchPathError(msg)
        if not isinstance(node, File):
            msg = "rename: directories not supported"
            raise UnsupportedOperationError(msg)
        self.write_file(dest, node.content)
        if split_path(src) != split_path(dest):
            self.rm(src)

    # -- rendering ----------------------------------------------------------

    def tree(self, path: str = ROOT_PATH, depth: int = 2) -> str:
        """Render a directory as an indented tree.

        The first line is the path itself (``/`` or ``<path>/``).  Each
        following line is one child, sorted by name, drawn with
        box-drawing connectors.  *depth* limits how many levels of
        children are shown; ``0`` renders the header only.

        Returns:
            The rendered tree, or ``""`` for a missing or file path.

        """
        directory = self._get_dir(path)
        if directory is None:
            return ""
        lines = [ROOT_PATH if path == ROOT_PATH else path.rstrip("/") + "/"]

        def walk(node: Directory, prefix: str, remaining: int) -> None:
            if remaining <= 0:
                return
            names = sorted(node.children)
            for idx, name in enumerate(names):
                child = node.children[name]
                is_last = idx == len(names) - 1
                connector = "└── " if is_last else "├── "
                suffix = "/" if isinstance(child, Directory) else ""
                lines.append(f"{prefix}{connector}{name}{suffix}")
                if isinstance(child, Directory):
                    walk(child, prefix + ("    " if is_last else "│   "), remaining - 1)

        walk(directory, "", depth)
        return "\n".join(lines)
