from __future__ import annotations

import posixpath


def join_module_path(root: str, fragment: str) -> str:
    """Join a module root with a relative fragment, without trailing "/".

    The fragment is always appended under root, even when it starts with
    "/", and the result is normalized ("a/./b/../c" → "a/c").
    """
    joined = posixpath.normpath(f"{root}/{fragment}")
    # normpath keeps a leading "//" (POSIX implementation-defined root)
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined
