"""Slash handling shared by the group resolver and the route extractor."""

from __future__ import annotations

import re
from typing import List, Set, Tuple

_SLASH_RUN = re.compile(r"/{2,}")
_PLACEHOLDER = re.compile(r"\{(\w+)(\?)?\}")


def collapse_slashes(path: str) -> str:
    """Collapse every run of consecutive slashes into one."""
    return _SLASH_RUN.sub("/", path)


def join_prefix(parent: str, child: str) -> str:
    """Compose a group prefix with its parent's prefix."""
    if not parent:
        return collapse_slashes(child)
    return collapse_slashes(f"{parent}/{child}")


def build_path(*segments: str) -> str:
    """Join path segments into an absolute URL path.

    Surrounding slashes are stripped from each segment and empty segments are
    skipped, so ``build_path("api/", "", "/posts")`` gives ``/api/posts`` and
    ``build_path("/")`` gives ``/``.
    """
    parts = [seg.strip("/") for seg in segments if seg]
    return collapse_slashes("/" + "/".join(p for p in parts if p))


def to_openapi_path(path: str) -> Tuple[str, List[str], Set[str]]:
    """Convert Laravel placeholders to OpenAPI ones.

    Returns (path, parameter names in order, names of optional parameters).
    """
    names: List[str] = []
    optional: Set[str] = set()

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        names.append(name)
        if match.group(2):
            optional.add(name)
        return "{" + name + "}"

    return _PLACEHOLDER.sub(_replace, path), names, optional
