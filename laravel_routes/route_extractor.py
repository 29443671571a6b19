"""Route extractor: find Route::<verb>('path') calls and resolve their paths."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from .group_resolver import resolve_line_prefixes
from .models import RouteRecord
from .paths import build_path

logger = logging.getLogger(__name__)

# One call per line; a second call on the same line is not reported.
ROUTE_PATTERN = re.compile(
    r"""Route::(get|post|put|delete|patch|options|any|apiResource|resource)\s*\(\s*['"]([^'"]+)['"]""",
    re.IGNORECASE,
)


def extract_routes(text: str, line_prefixes: Dict[int, str],
                   base_prefix: str = "", source_file: str = "") -> List[RouteRecord]:
    """Return a RouteRecord for every route definition in ``text``, in line order."""
    routes: List[RouteRecord] = []

    for i, line in enumerate(text.split("\n")):
        match = ROUTE_PATTERN.search(line.strip())
        if not match:
            continue

        method = match.group(1).upper()
        raw_path = match.group(2)
        group_prefix = line_prefixes.get(i, "")

        routes.append(RouteRecord(
            line_index=i,
            http_method=method,
            raw_path=raw_path,
            resolved_path=build_path(base_prefix or "", group_prefix, raw_path),
            group_prefix=group_prefix,
            source_file=source_file,
        ))

    return routes


def resolve(text: str, base_prefix: Optional[str] = None,
            source_file: str = "") -> List[RouteRecord]:
    """Resolve the full path of every route in one routes file.

    ``base_prefix`` is prepended to every route, e.g. ``"api"`` for
    ``routes/api.php``.
    """
    line_prefixes = resolve_line_prefixes(text)
    routes = extract_routes(text, line_prefixes, base_prefix or "", source_file)
    logger.debug("Resolved %d route(s)%s", len(routes),
                 f" in {source_file}" if source_file else "")
    return routes
