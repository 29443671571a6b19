"""Group scope resolver: brace-depth scanner for Laravel route-group prefixes.

There is no PHP parser behind this. Scope boundaries are rebuilt from the raw
text by counting ``{`` and ``}`` per line and matching each line against an
ordered list of group-opening patterns. Braces inside strings or comments are
counted too; unbalanced input degrades to a best-effort mapping and never
raises.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence

from .models import PrefixScope
from .paths import join_prefix

logger = logging.getLogger(__name__)

# Tried in order, first match wins. Each captures the literal prefix.
GROUP_PATTERNS: List[Pattern[str]] = [
    # Route::group(['prefix' => 'admin'], function () {
    re.compile(r"""Route::group\s*\(\s*\[\s*['"]prefix['"]\s*=>\s*['"]([^'"]+)['"]"""),
    # ->middleware('auth')->prefix('admin')->group(function () {
    re.compile(r"""->prefix\s*\(\s*['"]([^'"]+)['"]\s*\)\s*->.*group\s*\("""),
    # Route::middleware('auth')->prefix('admin')->group(function () {
    re.compile(r"""Route::\w+\s*\(.*?\)\s*->.*?prefix\s*\(\s*['"]([^'"]+)['"]\s*\).*?->group\s*\("""),
    # Route::controller(OrderController::class)->prefix('orders')->group(function () {
    re.compile(r"""Route::controller\s*\(.*?::class\)\s*->prefix\s*\(\s*['"]([^'"]+)['"]\s*\).*?->group\s*\("""),
    # Route::prefix('admin')->group(function () {
    re.compile(r"""Route::prefix\s*\(\s*['"]([^'"]+)['"]\s*\)\s*->group\s*\("""),
]


class GroupScopeResolver:
    """Map every line of a routes file to the group prefix active on it."""

    def __init__(self, patterns: Optional[Sequence[Pattern[str]]] = None):
        self.patterns = list(patterns) if patterns is not None else list(GROUP_PATTERNS)

    def resolve(self, text: str) -> Dict[int, str]:
        """Return {line_index: effective prefix} for every line of ``text``."""
        line_prefixes: Dict[int, str] = {}
        stack: List[PrefixScope] = [PrefixScope(prefix="", open_depth=0)]
        depth = 0

        for i, line in enumerate(text.split("\n")):
            depth += line.count("{") - line.count("}")

            captured = self.match_group_prefix(line.strip())
            if captured is not None:
                stack.append(PrefixScope(
                    prefix=join_prefix(stack[-1].prefix, captured),
                    open_depth=depth,
                ))

            # The base scope is never popped.
            while len(stack) > 1 and depth < stack[-1].open_depth:
                stack.pop()

            line_prefixes[i] = stack[-1].prefix

        if depth != 0 or len(stack) > 1:
            logger.debug("Unbalanced scan: final depth %d, %d open group(s)",
                         depth, len(stack) - 1)

        return line_prefixes

    def match_group_prefix(self, line: str) -> Optional[str]:
        """Return the prefix literal if ``line`` opens a route group."""
        for pattern in self.patterns:
            match = pattern.search(line)
            if match:
                return match.group(1) or ""
        return None


def resolve_line_prefixes(text: str) -> Dict[int, str]:
    """Map each line index of ``text`` to its effective group prefix."""
    return GroupScopeResolver().resolve(text)
