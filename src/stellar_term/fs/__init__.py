"""Virtual file system subsystem — nodes, path resolution, and errors.

Re-exports public symbols so callers can write::

    from stellar_term.fs import VirtualFS, resolve
"""

from stellar_term.fs.filesystem import (
    ROOT_PATH,
    SEED_README,
    SEED_TODO,
    Directory,
    DirectoryNotEmptyError,
    File,
    FsError,
    FsNode,
    FsStat,
    InvalidPathError,
    NodeType,
    NoSuchFileError,
    NoSuchPathError,
    NotADirError,
    NotAFileError,
    PathIsFileError,
    UnsupportedOperationError,
    VirtualFS,
    normalize,
    resolve,
    split_path,
)

__all__ = [
    "ROOT_PATH",
    "SEED_README",
    "SEED_TODO",
    "Directory",
    "DirectoryNotEmptyError",
    "File",
    "FsError",
    "FsNode",
    "FsStat",
    "InvalidPathError",
    "NoSuchFileError",
    "NoSuchPathError",
    "NodeType",
    "NotADirError",
    "NotAFileError",
    "PathIsFileError",
    "UnsupportedOperationError",
    "VirtualFS",
    "normalize",
    "resolve",
    "split_path",
]
