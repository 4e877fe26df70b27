"""Tests for the in-memory virtual file system.

The file system is a tree of ``Directory`` and ``File`` nodes rooted at
``/``.  Path resolution is pure string work; every other operation
walks the tree from the root.
"""

import pytest

from stellar_term.fs import (
    SEED_README,
    SEED_TODO,
    DirectoryNotEmptyError,
    FsError,
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

ROOT_PATH = "/"


def _empty() -> VirtualFS:
    """Create a file system with nothing but the root."""
    return VirtualFS(seed=False)


class TestPathResolution:
    """Verify pure path resolution."""

    def test_empty_path_is_cwd(self) -> None:
        """An empty path should resolve to the working directory."""
        assert resolve("/home/guest", "") == "/home/guest"

    def test_dot_is_cwd(self) -> None:
        """A lone dot should resolve to the working directory."""
        assert resolve("/home/guest", ".") == "/home/guest"

    def test_absolute_is_verbatim(self) -> None:
        """Absolute paths should come back unchanged."""
        assert resolve("/home/guest", "/projects/x") == "/projects/x"

    def test_parent_segments(self) -> None:
        """``..`` should pop one segment."""
        assert resolve("/home/guest", "../../projects") == "/projects"

    def test_parent_at_root_is_noop(self) -> None:
        """``..`` at the root should stay at the root."""
        assert resolve("/", "../..") == ROOT_PATH

    def test_dot_segments_dropped(self) -> None:
        """``.`` segments in the middle should be ignored."""
        assert resolve("/home", "./guest/./notes") == "/home/guest/notes"

    def test_backslashes_are_separators(self) -> None:
        """Backslashes should split like forward slashes."""
        assert resolve("/", "home\\guest") == "/home/guest"

    def test_split_path_ignores_trailing_slash(self) -> None:
        """Trailing slashes should not add empty components."""
        assert split_path("/home/guest/") == ["home", "guest"]
        assert split_path("/") == []

    def test_normalize_collapses_segments(self) -> None:
        """normalize should collapse dot segments of an absolute path."""
        assert normalize("/home/guest/../") == "/home"
        assert normalize("/") == ROOT_PATH
        assert normalize("//") == ROOT_PATH


class TestSeed:
    """Verify the seeded fixture."""

    def test_seed_directories(self) -> None:
        """The root should hold home and projects."""
        vfs = VirtualFS()
        assert vfs.list_dir(ROOT_PATH) == ["home", "projects"]

    def test_seed_files(self) -> None:
        """The seed files should carry their fixed content."""
        vfs = VirtualFS()
        assert vfs.read_file("/home/guest/readme.txt") == SEED_README
        assert vfs.read_file("/projects/todo.md") == SEED_TODO

    def test_unseeded_root_is_empty(self) -> None:
        """seed=False should leave an empty root."""
        assert _empty().list_dir(ROOT_PATH) == []


class TestWriteAndRead:
    """Verify file creation and reading."""

    def test_write_creates_parents(self) -> None:
        """Writing a deep file should create every missing directory."""
        vfs = _empty()
        vfs.write_file("/a/b/c.txt", "hi")
        assert vfs.is_dir("/a")
        assert vfs.is_dir("/a/b")
        assert vfs.read_file("/a/b/c.txt") == "hi"

    def test_write_overwrites(self) -> None:
        """Writing twice should keep only the second content."""
        vfs = _empty()
        vfs.write_file("/f", "one")
        vfs.write_file("/f", "two")
        assert vfs.read_file("/f") == "two"

    def test_write_root_is_invalid(self) -> None:
        """The root cannot be written as a file."""
        with pytest.raises(InvalidPathError, match="Invalid path"):
            _empty().write_file(ROOT_PATH, "x")

    def test_write_through_file_segment(self) -> None:
        """A file in the middle of the path should be rejected."""
        vfs = _empty()
        vfs.write_file("/f", "x")
        with pytest.raises(PathIsFileError):
            vfs.write_file("/f/g", "y")

    def test_write_onto_directory(self) -> None:
        """Writing over an existing directory should fail."""
        vfs = _empty()
        vfs.mkdir("/d")
        with pytest.raises(NotAFileError):
            vfs.write_file("/d", "x")
        assert vfs.is_dir("/d")

    def test_read_missing(self) -> None:
        """Reading a missing path should raise NoSuchFileError."""
        with pytest.raises(NoSuchFileError, match="No such file"):
            _empty().read_file("/nope")

    def test_read_directory(self) -> None:
        """Reading a directory should raise NotAFileError."""
        with pytest.raises(NotAFileError, match="Not a file"):
            VirtualFS().read_file("/home")

    def test_errors_are_builtin_os_errors(self) -> None:
        """Errors should also be catchable as the builtin OSError types."""
        with pytest.raises(FileNotFoundError):
            _empty().read_file("/nope")
        with pytest.raises(IsADirectoryError):
            VirtualFS().read_file("/home")

    def test_append_creates_and_extends(self) -> None:
        """append_file should create missing files and extend existing ones."""
        vfs = _empty()
        vfs.append_file("/log", "a")
        vfs.append_file("/log", "b")
        assert vfs.read_file("/log") == "ab"

    def test_touch_creates_empty_file(self) -> None:
        """touch on a missing path should create an empty file."""
        vfs = _empty()
        vfs.touch("/new")
        assert vfs.read_file("/new") == ""

    def test_touch_keeps_content(self) -> None:
        """touch on an existing file should not change its content."""
        vfs = _empty()
        vfs.write_file("/f", "keep")
        vfs.touch("/f")
        assert vfs.read_file("/f") == "keep"


class TestDirectories:
    """Verify directory creation and listing."""

    def test_mkdir_creates_parents(self) -> None:
        """mkdir should create every missing segment."""
        vfs = _empty()
        vfs.mkdir("/a/b/c")
        assert vfs.is_dir("/a/b/c")

    def test_mkdir_existing_is_noop(self) -> None:
        """mkdir on an existing directory should keep its children."""
        vfs = VirtualFS()
        vfs.mkdir("/home/guest")
        assert vfs.list_dir("/home/guest") == ["readme.txt"]

    def test_mkdir_on_file(self) -> None:
        """mkdir on an existing file should raise PathIsFileError."""
        vfs = _empty()
        vfs.write_file("/f", "")
        with pytest.raises(PathIsFileError):
            vfs.mkdir("/f")

    def test_list_is_sorted(self) -> None:
        """list_dir should return names in sorted order."""
        vfs = _empty()
        for name in ("zeta", "alpha", "mid"):
            vfs.write_file(f"/{name}", "")
        assert vfs.list_dir(ROOT_PATH) == ["alpha", "mid", "zeta"]

    def test_list_missing_or_file_is_empty(self) -> None:
        """list_dir should return [] rather than raising."""
        vfs = VirtualFS()
        assert vfs.list_dir("/nope") == []
        assert vfs.list_dir("/projects/todo.md") == []

    def test_exists_and_is_dir(self) -> None:
        """exists/is_dir should distinguish files from directories."""
        vfs = VirtualFS()
        assert vfs.exists("/projects/todo.md")
        assert not vfs.is_dir("/projects/todo.md")
        assert vfs.is_dir("/projects")
        assert not vfs.exists("/projects/none")


class TestRemoval:
    """Verify rm and rmdir."""

    def test_rm_file(self) -> None:
        """rm should delete a file."""
        vfs = VirtualFS()
        vfs.rm("/projects/todo.md")
        assert not vfs.exists("/projects/todo.md")

    def test_rm_missing_is_noop(self) -> None:
        """rm of a missing entry should do nothing."""
        vfs = VirtualFS()
        vfs.rm("/projects/ghost")
        assert vfs.list_dir("/projects") == ["todo.md"]

    def test_rm_root_is_noop(self) -> None:
        """The root can never be removed."""
        vfs = VirtualFS()
        vfs.rm(ROOT_PATH)
        assert vfs.is_dir(ROOT_PATH)

    def test_rm_with_missing_parent(self) -> None:
        """rm under a missing parent should raise NoSuchPathError."""
        with pytest.raises(NoSuchPathError):
            _empty().rm("/nope/child")

    def test_rmdir_empty(self) -> None:
        """rmdir should remove an empty directory."""
        vfs = _empty()
        vfs.mkdir("/d")
        vfs.rmdir("/d")
        assert not vfs.exists("/d")

    def test_rmdir_not_empty(self) -> None:
        """rmdir should refuse a directory with children."""
        vfs = VirtualFS()
        with pytest.raises(DirectoryNotEmptyError, match="Directory not empty"):
            vfs.rmdir("/projects")
        assert vfs.exists("/projects/todo.md")

    def test_rmdir_on_file(self) -> None:
        """rmdir should refuse a file."""
        with pytest.raises(NotADirError, match="Not a directory"):
            VirtualFS().rmdir("/projects/todo.md")

    def test_rmdir_missing_is_noop(self) -> None:
        """rmdir of a missing path should do nothing."""
        _empty().rmdir("/ghost")


class TestCopyAndRename:
    """Verify copy_file and rename."""

    def test_copy_duplicates_content(self) -> None:
        """copy_file should leave both files with the same content."""
        vfs = VirtualFS()
        vfs.copy_file("/projects/todo.md", "/tmp/todo.bak")
        assert vfs.read_file("/tmp/todo.bak") == SEED_TODO
        assert vfs.read_file("/projects/todo.md") == SEED_TODO

    def test_copy_directory_fails(self) -> None:
        """copy_file should reject directories."""
        with pytest.raises(NotAFileError):
            VirtualFS().copy_file("/projects", "/p2")

    def test_copy_missing_fails(self) -> None:
        """copy_file should reject missing sources."""
        with pytest.raises(NoSuchFileError):
            VirtualFS().copy_file("/nope", "/x")

    def test_rename_moves_file(self) -> None:
        """rename should remove the source and create the destination."""
        vfs = VirtualFS()
        vfs.rename("/projects/todo.md", "/home/guest/todo.md")
        assert not vfs.exists("/projects/todo.md")
        assert vfs.read_file("/home/guest/todo.md") == SEED_TODO

    def test_rename_directory_unsupported(self) -> None:
        """Directories cannot be renamed."""
        with pytest.raises(UnsupportedOperationError, match="directories not supported"):
            VirtualFS().rename("/projects", "/work")

    def test_rename_missing(self) -> None:
        """Renaming a missing path should raise NoSuchPathError."""
        with pytest.raises(NoSuchPathError):
            VirtualFS().rename("/nope", "/x")

    def test_rename_onto_directory_keeps_source(self) -> None:
        """A failed rename onto a directory should leave the source intact."""
        vfs = VirtualFS()
        with pytest.raises(NotAFileError):
            vfs.rename("/home/guest/readme.txt", "/projects")
        assert vfs.read_file("/home/guest/readme.txt") == SEED_README

    def test_rename_under_file_keeps_source(self) -> None:
        """A destination whose parent is a file should not destroy the source."""
        vfs = VirtualFS()
        with pytest.raises(PathIsFileError):
            vfs.rename("/home/guest/readme.txt", "/projects/todo.md/x")
        assert vfs.read_file("/home/guest/readme.txt") == SEED_README

    def test_rename_onto_root_keeps_source(self) -> None:
        """Renaming onto / should fail without touching the source."""
        vfs = VirtualFS()
        with pytest.raises(InvalidPathError):
            vfs.rename("/home/guest/readme.txt", "/")
        assert vfs.exists("/home/guest/readme.txt")

    def test_rename_onto_itself(self) -> None:
        """Renaming a file to its own path should keep it."""
        vfs = VirtualFS()
        vfs.rename("/projects/todo.md", "/projects//todo.md/")
        assert vfs.read_file("/projects/todo.md") == SEED_TODO


class TestStat:
    """Verify node metadata."""

    def test_stat_file(self) -> None:
        """A file's stat should report its type and length."""
        st = VirtualFS().stat("/projects/todo.md")
        assert st.node_type is NodeType.FILE
        assert st.size == len(SEED_TODO)
        assert st.name == "todo.md"

    def test_stat_directory(self) -> None:
        """Directories report size zero."""
        st = VirtualFS().stat("/home")
        assert st.node_type is NodeType.DIRECTORY
        assert st.size == 0

    def test_stat_root_name(self) -> None:
        """The root's name is ``/``."""
        assert VirtualFS().stat(ROOT_PATH).name == ROOT_PATH

    def test_stat_missing(self) -> None:
        """stat on a missing path should raise NoSuchPathError."""
        with pytest.raises(NoSuchPathError, match="No such path"):
            VirtualFS().stat("/nope")

    def test_all_errors_share_base(self) -> None:
        """Every VFS error should be an FsError."""
        with pytest.raises(FsError):
            VirtualFS().stat("/nope")


class TestTree:
    """Verify tree rendering."""

    def test_tree_default_depth(self) -> None:
        """Depth 2 from the root should show two levels of children."""
        assert VirtualFS().tree(ROOT_PATH, 2) == "\n".join(
            [
                "/",
                "├── home/",
                "│   └── guest/",
                "└── projects/",
                "    └── todo.md",
            ]
        )

    def test_tree_depth_zero_is_header_only(self) -> None:
        """Depth 0 should render only the header line."""
        assert VirtualFS().tree(ROOT_PATH, 0) == "/"

    def test_tree_subdirectory_header(self) -> None:
        """A subdirectory header should end with a slash."""
        assert VirtualFS().tree("/home", 3) == "\n".join(
            ["/home/", "└── guest/", "    └── readme.txt"]
        )

    def test_tree_missing_is_empty(self) -> None:
        """A missing or file path should render as an empty string."""
        vfs = VirtualFS()
        assert vfs.tree("/nope") == ""
        assert vfs.tree("/projects/todo.md") == ""
