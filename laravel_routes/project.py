"""Project scanner: resolve every route file under a Laravel project's routes/."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from .detector import base_prefix_for_file, detect_laravel
from .models import ProjectScan, RouteRecord
from .route_extractor import resolve

logger = logging.getLogger(__name__)


class ProjectScanner:
    """Scan a Laravel project (or a single route file) for routes.

    ``base_prefix`` overrides the per-file prefix guessed from the file name.
    """

    def __init__(self, repo_root: str, base_prefix: Optional[str] = None):
        self.repo_root = repo_root
        self.base_prefix = base_prefix

    def scan(self) -> ProjectScan:
        """Scan all route files and return the combined result."""
        if os.path.isfile(self.repo_root):
            root = os.path.dirname(os.path.dirname(os.path.abspath(self.repo_root)))
            result = ProjectScan(root=root)
            result.routes = self.scan_file(self.repo_root, relative_to=root)
            result.files = [os.path.relpath(self.repo_root, root)]
            return result

        is_laravel, version = detect_laravel(self.repo_root)
        result = ProjectScan(root=self.repo_root, is_laravel=is_laravel,
                             laravel_version=version)

        for path in self._route_files():
            rel = os.path.relpath(path, self.repo_root)
            result.files.append(rel)
            result.routes.extend(self.scan_file(path, relative_to=self.repo_root))

        logger.info("Found %d route(s) in %d file(s)", len(result.routes), len(result.files))
        return result

    def scan_file(self, path: str, relative_to: Optional[str] = None) -> List[RouteRecord]:
        """Resolve the routes of one file. Unreadable files yield no routes."""
        rel = os.path.relpath(path, relative_to) if relative_to else path
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return []

        base = self.base_prefix
        if base is None:
            base = base_prefix_for_file(rel.replace(os.sep, "/"))

        logger.debug("Scanning %s (base prefix %r)", rel, base)
        return resolve(text, base_prefix=base, source_file=rel)

    def _route_files(self) -> List[str]:
        routes_dir = os.path.join(self.repo_root, "routes")
        found = []
        for dirpath, dirnames, filenames in os.walk(routes_dir):
            dirnames.sort()
            for name in sorted(filenames):
                if name.endswith(".php"):
                    found.append(os.path.join(dirpath, name))
        return found
