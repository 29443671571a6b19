"""GitHub Action entrypoint — resolves Laravel routes and writes outputs."""

from __future__ import annotations

import os
import sys


def _env(name: str, default: str = "") -> str:
    """Read an environment variable (INPUT_* convention)."""
    return os.environ.get(name, default).strip()


def _env_bool(name: str) -> bool:
    return _env(name).lower() in ("true", "1", "yes")


def _write_output(name: str, value: str) -> None:
    """Append a key=value pair to $GITHUB_OUTPUT."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        with open(output_file, "a") as f:
            f.write(f"{name}={value}\n")


def _write_summary(markdown: str) -> None:
    """Append Markdown to $GITHUB_STEP_SUMMARY."""
    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if summary_file:
        with open(summary_file, "a") as f:
            f.write(markdown)


def main() -> int:
    source = _env("INPUT_SOURCE", ".")
    output = _env("INPUT_OUTPUT", "routes-openapi.yaml")
    fmt = _env("INPUT_FORMAT", "yaml")
    # Unset means "guess from the file name"; an empty value turns the guess off.
    base_prefix = os.environ.get("INPUT_BASE_PREFIX")
    if base_prefix is not None:
        base_prefix = base_prefix.strip()
    token = _env("INPUT_TOKEN") or None
    fail_on_empty = _env_bool("INPUT_FAIL_ON_EMPTY")

    from laravel_routes.repo import RepoResolver
    from laravel_routes.project import ProjectScanner
    from laravel_routes.oas_emitter import emit_openapi, emit_yaml, emit_json

    resolver = RepoResolver(source, token=token)
    try:
        root = resolver.resolve()
        print(f"Repo resolved: {root}")
    except ValueError as e:
        print(f"::error::Failed to resolve repo: {e}")
        return 1

    try:
        scan = ProjectScanner(root, base_prefix=base_prefix).scan()
        routes = scan.routes
        resources = sum(1 for r in routes if r.is_resource_collection)
        print(f"Resolved {len(routes)} routes in {len(scan.files)} files")

        spec = emit_openapi(routes, repo_name=os.path.basename(scan.root))
        spec_content = emit_json(spec) if fmt == "json" else emit_yaml(spec)
        with open(output, "w") as f:
            f.write(spec_content)
        print(f"OpenAPI spec written to: {output}")

        _write_output("spec-path", output)
        _write_output("total-routes", str(len(routes)))
        _write_output("resource-count", str(resources))

        if not routes:
            print("::warning::No routes found. Check that routes/*.php exists.")
            _write_summary("## Laravel Routes\n\nNo routes found.\n")
            return 1 if fail_on_empty else 0

        summary_lines = [
            "## Laravel Routes\n\n",
            "| Method | Route Path | Source |\n",
            "|---|---|---|\n",
        ]
        for r in sorted(routes, key=lambda r: (r.source_file, r.line_index)):
            summary_lines.append(
                f"| `{r.method_label}` | `{r.resolved_path}` | "
                f"{r.source_file}:{r.line_index + 1} |\n"
            )
        summary_lines.append(f"\nSpec written to `{output}` ({fmt})\n")
        _write_summary("".join(summary_lines))

        return 0

    finally:
        resolver.cleanup()


if __name__ == "__main__":
    sys.exit(main())
