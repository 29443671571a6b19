"""Data models for Laravel Route Paths."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "ANY")
RESOURCE_METHODS = ("APIRESOURCE", "RESOURCE")


@dataclass(frozen=True)
class RouteRecord:
    line_index: int  # zero-based
    http_method: str  # GET, POST, ... or APIRESOURCE / RESOURCE
    raw_path: str  # /posts/{id}
    resolved_path: str  # /api/v1/posts/{id}
    group_prefix: str = ""
    source_file: str = ""

    @property
    def is_resource_collection(self) -> bool:
        return self.http_method in RESOURCE_METHODS

    @property
    def method_label(self) -> str:
        if self.is_resource_collection:
            return f"{self.http_method} (Multiple)"
        return self.http_method


@dataclass(frozen=True)
class PrefixScope:
    """An entry on the group scope stack."""

    prefix: str
    open_depth: int


class AnnotationState(enum.Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass
class Document:
    """A text snapshot handed to the annotation layer."""

    doc_id: str
    file_name: Optional[str]
    text: str


@dataclass(frozen=True)
class Annotation:
    line_index: int
    text: str


@dataclass
class ProjectScan:
    root: str
    is_laravel: bool = False
    laravel_version: Optional[str] = None
    routes: list = field(default_factory=list)  # list[RouteRecord]
    files: list = field(default_factory=list)  # relative paths
