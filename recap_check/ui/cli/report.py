"""
Report rendering — turns check results into terminal output.

Stateless: every function gets what it prints as arguments.
"""

from __future__ import annotations

import click

from recap_check.core.services.detection import VIA_REGISTRY
from recap_check.core.services.evaluator import DependencyReport, Verdict
from recap_check.core.use_cases.check import CheckResult

DOCS_URL = "https://recap-org.github.io/docs/running-templates/"

PACKAGE_MANAGER_URLS = {
    "brew": "https://brew.sh",
    "winget": "https://learn.microsoft.com/windows/package-manager/winget/",
}


def render_templates(names: list[str]) -> None:
    click.echo("Available templates:")
    for i, name in enumerate(names, start=1):
        click.echo(f"  {i}. {name}")
    click.echo()


def _box(lines: list[tuple[str, str | None]]) -> None:
    """Print lines inside a left-ruled notice box."""
    click.secho("╔" + "═" * 68, fg="blue")
    for text, color in lines:
        click.secho("║ ", fg="blue", nl=False)
        click.secho(text, fg=color)
    click.secho("╚" + "═" * 68, fg="blue")
    click.echo()


def render_docker_notice(available: bool) -> None:
    if available:
        _box([
            ("✓ Docker detected", "green"),
            ("RECAP templates can run in an isolated environment with all", None),
            ("dependencies included.", None),
            ("", None),
            (f"Learn more: {DOCS_URL}", None),
        ])
    else:
        _box([
            ("⚠ Docker not found", "yellow"),
            ("You can optionally use Docker to run RECAP templates in an", None),
            ("isolated environment with all dependencies included.", None),
            ("", None),
            (f"Learn more: {DOCS_URL}", None),
        ])


def render_package_manager_notice(name: str | None, available: bool) -> None:
    """Suggest installing the platform package manager when it is missing."""
    url = PACKAGE_MANAGER_URLS.get(name or "")
    if available or not url:
        return
    _box([
        (f"⚠ {name} not found", "yellow"),
        (f"Installing {name} is recommended because it makes it easy to", None),
        ("install and keep research software up to date.", None),
        (f"The installation info below does not use {name}.", None),
        ("", None),
        (f"Learn more and install {name}: {url}", None),
    ])


def _indent(text: str) -> None:
    for line in text.splitlines():
        click.echo(f"  {line}")


def render_dependency(report: DependencyReport) -> None:
    """Print one dependency block."""
    click.echo()
    click.secho(f"■ {report.name}", fg="blue")

    if not report.installed:
        level = "required" if report.verdict is Verdict.MISSING_REQUIRED else "recommended"
        click.secho(f"  ✗ Not installed ({level})", fg="red")
        _indent(report.message)
        if report.install_hint:
            click.echo()
            click.secho("  Installation:", fg="yellow")
            _indent(report.install_hint)
        return

    click.secho("  ✓ Installed", fg="green", nl=False)
    click.echo(f" (version: {report.version})")

    if report.discovered_via == VIA_REGISTRY:
        click.secho(f"  ⚠ Found at {report.install_path} but not on PATH", fg="yellow")
        click.echo("  Add its folder to PATH so other tools can find it")

    if report.verdict is Verdict.VERSION_OK:
        click.secho(f"  ✓ Version meets requirement (>= {report.min_version})", fg="green")
    elif report.verdict is Verdict.VERSION_BELOW_MINIMUM:
        click.secho(
            f"  ⚠ Version mismatch (required >= {report.min_version}, have {report.version})",
            fg="yellow",
        )
        click.echo("  Some features may not work as expected")


def render_result(result: CheckResult) -> None:
    render_docker_notice(result.docker_available)
    click.secho("Checking dependencies for template: ", fg="blue", nl=False)
    click.secho(result.template, fg="green")
    click.echo()
    render_package_manager_notice(result.package_manager, result.package_manager_available)

    for report in result.reports:
        render_dependency(report)

    click.echo()
    missing = result.missing_required
    if missing:
        names = ", ".join(r.name for r in missing)
        click.secho(f"✗ {len(missing)} required missing: {names}", fg="red")
    click.secho("=== Check Complete ===", fg="blue")
