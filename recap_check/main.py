"""
recap-check — CLI entrypoint.

Usage:
    python -m recap_check.main --help
    python -m recap_check.main templates
    python -m recap_check.main check            # interactive selection
    python -m recap_check.main check --select 2
    python -m recap_check.main check advanced --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from recap_check import __version__
from recap_check.core.observability.logging_config import resolve_level, setup_logging
from recap_check.core.services.platform_info import PLATFORMS


@click.group()
@click.version_option(version=__version__, prog_name="recap-check")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--manifest",
    "-m",
    "manifest_path",
    type=click.Path(exists=False),
    default=None,
    envvar="RECAP_MANIFEST",
    help="Path to manifest.json (default: auto-detect).",
)
@click.option(
    "--manifest-url",
    default=None,
    envvar="RECAP_MANIFEST_URL",
    help="Download the manifest from this URL when no local file is found.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    manifest_path: str | None,
    manifest_url: str | None,
) -> None:
    """RECAP install check — verify the tools a template needs."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["manifest_path"] = Path(manifest_path) if manifest_path else None
    ctx.obj["manifest_url"] = manifest_url

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("RECAP_LOG_LEVEL")),
        log_file=os.environ.get("RECAP_LOG_FILE"),
        log_file_level=os.environ.get("RECAP_LOG_FILE_LEVEL"),
    )


def _load_manifest(ctx: click.Context):
    """Resolve the manifest: explicit path, local search, then URL."""
    from recap_check.core.config.loader import fetch_manifest, find_manifest_file, load_manifest

    path = ctx.obj.get("manifest_path")
    if path is not None:
        return load_manifest(path)

    found = find_manifest_file()
    url = ctx.obj.get("manifest_url")
    if found is None and url:
        return fetch_manifest(url)
    return load_manifest(found)


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def templates(ctx: click.Context, as_json: bool) -> None:
    """List the templates in the manifest."""
    from recap_check.core.config.loader import ConfigError
    from recap_check.core.use_cases.check import available_templates
    from recap_check.ui.cli.report import render_templates

    try:
        names = available_templates(_load_manifest(ctx))
    except ConfigError as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps({"templates": names}, indent=2))
        return
    render_templates(names)


@cli.command()
@click.argument("template", required=False)
@click.option("--select", "-s", "selection", default=None, help="Template number (1-based).")
@click.option(
    "--platform",
    "platform_key",
    type=click.Choice(PLATFORMS),
    default=None,
    help="Install hints for this platform (default: current host).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(
    ctx: click.Context,
    template: str | None,
    selection: str | None,
    platform_key: str | None,
    as_json: bool,
) -> None:
    """Check the dependencies of a template."""
    from recap_check.core.config.loader import ConfigError
    from recap_check.core.use_cases.check import (
        SelectionError,
        available_templates,
        run_check,
        select_template,
    )
    from recap_check.ui.cli.report import render_result, render_templates

    quiet = ctx.obj.get("quiet", False)

    try:
        manifest = _load_manifest(ctx)
        names = available_templates(manifest)

        if template is None:
            if selection is None:
                if as_json:
                    raise SelectionError("--json needs a TEMPLATE argument or --select")
                if not quiet:
                    click.secho("=== RECAP Install Check ===", fg="blue")
                    click.echo()
                render_templates(names)
                selection = click.prompt(
                    f"Select a template (1-{len(names)})",
                    default="", show_default=False,
                )
                click.echo()
            template = select_template(names, selection)

        result = run_check(manifest, template, platform_key=platform_key)
    except (ConfigError, SelectionError) as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    render_result(result)


@cli.command()
@click.argument("template")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, template: str, as_json: bool) -> None:
    """Show a template's flattened dependencies (no probing)."""
    from recap_check.core.config.loader import ConfigError
    from recap_check.core.config.template_resolver import resolve_dependencies, template_chain

    try:
        manifest = _load_manifest(ctx)
        chain = template_chain(manifest, template)
        deps = resolve_dependencies(manifest, template)
    except ConfigError as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps({
            "template": template,
            "chain": chain,
            "dependencies": {
                name: spec.model_dump(exclude_none=True) for name, spec in deps.items()
            },
        }, indent=2))
        return

    click.secho(f"{template}", fg="cyan", bold=True, nl=False)
    click.echo(f"  ({' → '.join(chain)})" if len(chain) > 1 else "")
    for name, spec in deps.items():
        level = "required" if spec.required else "recommended"
        gate = f" >= {spec.min_version}" if spec.min_version else ""
        click.echo(f"  • {name} [{spec.check_type or '?'}] {level}{gate}")


if __name__ == "__main__":
    cli()
