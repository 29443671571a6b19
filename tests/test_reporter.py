"""Tests for the console reporter."""

from rich.console import Console

from laravel_routes.models import RouteRecord
from laravel_routes.reporter import print_report


def _console():
    return Console(record=True, width=200)


def test_empty_report():
    console = _console()
    print_report([], console=console)
    assert "No routes discovered." in console.export_text()


def test_table_and_summary():
    routes = [
        RouteRecord(line_index=0, http_method="GET", raw_path="/users", resolved_path="/api/users"),
        RouteRecord(line_index=2, http_method="APIRESOURCE", raw_path="photos",
                    resolved_path="/api/photos"),
    ]
    console = _console()
    print_report(routes, console=console)
    text = console.export_text()
    assert "/api/users" in text
    assert "APIRESOURCE (Multiple)" in text
    assert "Total routes:      2" in text
    assert "Resource collections (not expanded): 1" in text


def test_hide_resources_in_table():
    routes = [
        RouteRecord(line_index=2, http_method="RESOURCE", raw_path="photos",
                    resolved_path="/photos"),
    ]
    console = _console()
    print_report(routes, show_resources=False, console=console)
    assert "RESOURCE (Multiple)" not in console.export_text()


def test_file_column_for_multiple_files():
    routes = [
        RouteRecord(line_index=0, http_method="GET", raw_path="/a", resolved_path="/a",
                    source_file="routes/web.php"),
        RouteRecord(line_index=0, http_method="GET", raw_path="/b", resolved_path="/api/b",
                    source_file="routes/api.php"),
    ]
    console = _console()
    print_report(routes, console=console)
    assert "routes/api.php" in console.export_text()
