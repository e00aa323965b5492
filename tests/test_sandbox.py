import os

import pytest

from agent_lite.errors import PathEscapeError
from agent_lite.sandbox import ensure_directory, resolve_sandbox_path

# ---------------------------------------------------------------------------
# Confinement
# ---------------------------------------------------------------------------


@pytest.fixture
def root(tmp_path):
    return str(tmp_path / "sandbox")


@pytest.mark.parametrize(
    "user_path",
    [
        "../outside.txt",
        "a/../../outside.txt",
        "../../../../etc/passwd",
        "/etc/passwd",
        "..",
    ],
)
def test_resolve_rejects_escape(root, user_path):
    with pytest.raises(PathEscapeError, match="Path escapes sandbox"):
        resolve_sandbox_path(root, user_path)


def test_resolve_rejects_sibling_with_shared_prefix(root):
    # "<tmp>/sandbox2" starts with the string "<tmp>/sandbox" but is not inside it.
    with pytest.raises(PathEscapeError):
        resolve_sandbox_path(root, "../sandbox2/notes.txt")


def test_resolve_root_itself(root):
    assert resolve_sandbox_path(root, ".") == root
    assert resolve_sandbox_path(root, "a/..") == root


def test_resolve_nested_paths(root):
    assert resolve_sandbox_path(root, "hello.txt") == os.path.join(root, "hello.txt")
    assert resolve_sandbox_path(root, "a/b/../c.txt") == os.path.join(root, "a", "c.txt")
    assert resolve_sandbox_path(root, "./docs/x.md").startswith(root + os.sep)


def test_resolve_absolute_path_inside_root(root):
    inside = os.path.join(root, "deep", "file.txt")
    assert resolve_sandbox_path(root, inside) == inside


def test_resolve_normalises_relative_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resolved = resolve_sandbox_path("sandbox", "x.txt")
    assert resolved == os.path.join(os.getcwd(), "sandbox", "x.txt")


def test_resolve_does_not_touch_filesystem(root):
    resolve_sandbox_path(root, "a/b/c.txt")
    assert not os.path.exists(root)


# ---------------------------------------------------------------------------
# ensure_directory
# ---------------------------------------------------------------------------


def test_ensure_directory_is_idempotent(tmp_path):
    target = tmp_path / "one" / "two" / "sandbox"
    ensure_directory(target)
    ensure_directory(target)
    assert target.is_dir()
