"""CLI entry point: resolve and report the routes of a Laravel project."""

from __future__ import annotations

import logging
import os
import sys

import click

from . import __version__


@click.command()
@click.argument("source")
@click.option("--format", "fmt",
              type=click.Choice(["table", "annotate", "yaml", "json"]),
              default="table", help="Output format (default: table)")
@click.option("--output", "-o", default=None,
              help="Write yaml/json output to this file instead of stdout")
@click.option("--base-prefix", default=None,
              help="Prefix applied to every route (overrides the per-file guess)")
@click.option("--exclude-resources", is_flag=True,
              help="Leave resource/apiResource declarations out of the output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--token", envvar="GIT_TOKEN",
              help="Git auth token for private repos")
@click.version_option(version=__version__)
def main(source: str, fmt: str, output: str, base_prefix: str,
         exclude_resources: bool, verbose: bool, token: str) -> None:
    """Resolve the full URL path of every Laravel route.

    SOURCE is a local project path, a git URL, or a single routes/*.php file.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    # Import here to keep CLI snappy for --help
    from .repo import RepoResolver
    from .project import ProjectScanner

    from rich.console import Console
    console = Console(stderr=fmt in ("yaml", "json", "annotate") and not output)

    resolver = RepoResolver(source, token=token)
    try:
        root = resolver.resolve()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    try:
        scan = ProjectScanner(root, base_prefix=base_prefix).scan()
        if scan.is_laravel:
            console.print(f"[green]✓[/green] Laravel detected: "
                          f"{scan.laravel_version or 'unknown'}")
        routes = scan.routes
        console.print(f"[green]✓[/green] Resolved {len(routes)} route(s) "
                      f"in {len(scan.files)} file(s)")

        if fmt == "table":
            from .reporter import print_report
            print_report(routes, show_resources=not exclude_resources,
                         console=console)
        elif fmt == "annotate":
            annotated = [r for r in routes
                         if not (exclude_resources and r.is_resource_collection)]
            _print_annotated(scan.root, scan.files, annotated)
        else:
            from .oas_emitter import emit_openapi, emit_yaml, emit_json
            spec = emit_openapi(routes, repo_name=os.path.basename(scan.root),
                                exclude_resources=exclude_resources)
            content = emit_json(spec) if fmt == "json" else emit_yaml(spec)
            if output:
                with open(output, "w") as f:
                    f.write(content)
                console.print(f"[green]✓[/green] OpenAPI spec written to: {output}")
            else:
                click.echo(content)
    finally:
        resolver.cleanup()


def _print_annotated(root: str, files: list, routes: list) -> None:
    """Echo each route file with its resolved paths appended to route lines."""
    from .annotator import annotate

    for rel in files:
        with open(os.path.join(root, rel), "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
        file_routes = [r for r in routes if r.source_file == rel]
        click.echo(click.style(f"==> {rel} <==", bold=True))
        click.echo(annotate(text, file_routes))


if __name__ == "__main__":
    main()
