"""Framework detection and route-file conventions.

Laravel is detected from ``composer.lock`` (exact version) or
``composer.json`` (version constraint).
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

FRAMEWORK_PACKAGE = "laravel/framework"

# routes/api_v1.php, routes/api_v2.php ...
_VERSIONED_API_FILE = re.compile(r"^api_(v\d+)\.php$")


def detect_laravel(repo_root: str) -> Tuple[bool, Optional[str]]:
    """Detect if the repo is a Laravel app and extract the framework version.

    Returns (is_laravel, version_string).
    """
    version = _parse_composer_lock(os.path.join(repo_root, "composer.lock"))
    if version:
        return True, version

    return _parse_composer_json(os.path.join(repo_root, "composer.json"))


def _load_json(path: str) -> Optional[dict]:
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError:
        return None
    except ValueError as e:
        logger.warning("Cannot parse %s: %s", path, e)
        return None


def _parse_composer_lock(path: str) -> Optional[str]:
    """Parse composer.lock for the laravel/framework package version."""
    data = _load_json(path)
    if not data:
        return None

    for package in data.get("packages", []):
        if package.get("name") == FRAMEWORK_PACKAGE:
            return str(package.get("version", "")).lstrip("v") or None

    return None


def _parse_composer_json(path: str) -> Tuple[bool, Optional[str]]:
    """Parse composer.json for a laravel/framework requirement."""
    data = _load_json(path)
    if not data:
        return False, None

    require = data.get("require") or {}
    if FRAMEWORK_PACKAGE in require:
        return True, require[FRAMEWORK_PACKAGE] or None

    return False, None


def is_route_file(path: Optional[str]) -> bool:
    """True for ``.php`` files that live under a ``routes`` directory."""
    if not path:
        return False
    parts = path.replace("\\", "/").split("/")
    return path.endswith(".php") and "routes" in parts[:-1]


def base_prefix_for_file(path: Optional[str]) -> str:
    """Guess the prefix Laravel applies to every route in ``path``.

    ``routes/api.php`` is served under ``/api``. Versioned files such as
    ``routes/api_v1.php`` are assumed to be mounted as ``/api/v1``; that is a
    naming convention, not something read from the including router file.
    """
    if not is_route_file(path):
        return ""

    name = os.path.basename(path.replace("\\", "/"))
    if name == "api.php":
        return "api"

    match = _VERSIONED_API_FILE.match(name)
    if match:
        return f"api/{match.group(1)}"

    return ""
