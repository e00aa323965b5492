# sandbox.py
# Path confinement for every file tool.
#
# resolve_sandbox_path() is pure: it never touches the filesystem.
# ensure_directory() is the only function here with a side effect.

import os

from agent_lite.errors import PathEscapeError


def ensure_directory(root: str | os.PathLike) -> None:
    """Create the sandbox root (and parents). Safe to call repeatedly."""
    os.makedirs(root, exist_ok=True)


def resolve_sandbox_path(root: str | os.PathLike, user_path: str) -> str:
    """
    Resolve `user_path` against `root` and return the absolute target.

    `..` segments are collapsed before the containment check. Absolute
    user paths are accepted only if they land under the root. The check is
    separator-aware, so a sibling such as `sandbox2` never matches `sandbox`.

    Raises PathEscapeError when the target is neither the root itself nor
    nested under it.
    """
    base = os.path.abspath(os.fspath(root))
    target = os.path.normpath(os.path.join(base, user_path))

    prefix = base if base.endswith(os.sep) else base + os.sep
    if target != base and not target.startswith(prefix):
        raise PathEscapeError(f"Path escapes sandbox: {user_path}")
    return target
