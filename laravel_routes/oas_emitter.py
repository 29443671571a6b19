"""OpenAPI 3.0.3 emitter for resolved Laravel routes."""

from __future__ import annotations

import json
from typing import Dict, List

import yaml

from . import __version__
from .models import RouteRecord
from .paths import to_openapi_path

OPENAPI_VERSION = "3.0.3"

# Route::any registers every verb Laravel's router knows about.
ANY_METHODS = ["get", "post", "put", "patch", "delete", "options"]


def emit_openapi(routes: List[RouteRecord], repo_name: str = "laravel-app",
                 exclude_resources: bool = False) -> dict:
    """Build an OpenAPI document from resolved routes."""
    paths: Dict[str, dict] = {}

    for route in routes:
        if route.is_resource_collection and exclude_resources:
            continue

        oas_path, params, optional = to_openapi_path(route.resolved_path)
        path_item = paths.setdefault(oas_path, {})

        if route.is_resource_collection:
            path_item.setdefault("x-resource-collection", []).append({
                "kind": route.http_method.lower(),
                "x-source-file": route.source_file,
                "x-source-line": route.line_index + 1,
            })
            continue

        methods = ANY_METHODS if route.http_method == "ANY" else [route.http_method.lower()]
        for method in methods:
            if method in path_item:
                continue
            path_item[method] = _build_operation(route, params, optional)

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": f"{repo_name} routes",
            "version": "1.0.0",
            "description": f"Generated by laravel-route-paths {__version__}",
        },
        "paths": dict(sorted(paths.items())),
    }


def _build_operation(route: RouteRecord, params: List[str], optional: set) -> dict:
    operation = {
        "summary": f"{route.http_method} {route.raw_path}",
        "responses": {"200": {"description": "OK"}},
        "x-source-file": route.source_file,
        "x-source-line": route.line_index + 1,
    }
    if params:
        operation["parameters"] = [_path_parameter(name, name in optional)
                                   for name in params]
    return operation


def _path_parameter(name: str, is_optional: bool) -> dict:
    # OpenAPI requires path parameters to be required; optional ones are flagged.
    param = {
        "name": name,
        "in": "path",
        "required": True,
        "schema": {"type": "string"},
    }
    if is_optional:
        param["x-optional"] = True
    return param


def emit_yaml(spec: dict) -> str:
    return yaml.safe_dump(spec, sort_keys=False, allow_unicode=True)


def emit_json(spec: dict) -> str:
    return json.dumps(spec, indent=2)
