"""
Command-line interface for gh-repo-audit.

Provides a rich, user-friendly CLI using Click with:
- Clear help messages
- Progress indicators
- Colored output
- Multiple output formats
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from repo_audit import __version__
from repo_audit.auth import create_auth_config
from repo_audit.checks import DEFAULT_CHECKS
from repo_audit.config import AuditConfig, load_config
from repo_audit.constants import AUTH_TYPES, REPORT_FORMATS
from repo_audit.core.auditor import audit_repositories
from repo_audit.core.result import AuditReport, CheckResult, NameWithOwner
from repo_audit.exceptions import AuditorError, ConfigurationError, ValidationError
from repo_audit.github.client import GitHubClient
from repo_audit.logging_config import get_logger, setup_logging
from repo_audit.reporters import get_reporter
from repo_audit.utils.file_utils import read_repository_list

logger = get_logger("cli")
console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="gh-repo-audit")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-essential output"
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output"
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Write logs to stderr as JSON lines"
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    json_logs: bool,
) -> None:
    """
    gh-repo-audit - Audit GitHub repositories for settings that live outside Git.

    Flags rulesets, discussions, Git LFS usage, webhooks, Actions variables,
    and Actions, Codespaces and Dependabot secrets.

    Examples:

        # Audit one repository with a token from GITHUB_TOKEN
        gh-repo-audit repo --owner octo-org --repo octo-repo

        # Audit a list of repositories as a GitHub App installation
        gh-repo-audit repos --input-path repos.txt --auth-type installation
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["no_color"] = no_color
    ctx.obj["json_logs"] = json_logs

    log_level = "DEBUG" if verbose else ("WARNING" if quiet else "INFO")
    setup_logging(level=log_level, json_output=json_logs, no_color=no_color)


def audit_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by the ``repo`` and ``repos`` commands."""
    options = [
        click.option(
            "--config", "-c", "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to configuration file",
        ),
        click.option(
            "--auth-type",
            type=click.Choice(AUTH_TYPES),
            default=None,
            help="How to authenticate (default: token)",
        ),
        click.option(
            "--access-token",
            help="Access token (or GITHUB_TOKEN)",
        ),
        click.option(
            "--app-id",
            help="GitHub App ID (or GITHUB_APP_ID)",
        ),
        click.option(
            "--private-key",
            help="GitHub App private key (or GITHUB_APP_PRIVATE_KEY)",
        ),
        click.option(
            "--private-key-file",
            type=click.Path(dir_okay=False, path_type=Path),
            help="File containing the GitHub App private key (or GITHUB_APP_PRIVATE_KEY_FILE)",
        ),
        click.option(
            "--app-installation-id",
            help="GitHub App installation ID (or GITHUB_APP_INSTALLATION_ID)",
        ),
        click.option(
            "--client-id",
            help="GitHub App client ID (or GITHUB_CLIENT_ID)",
        ),
        click.option(
            "--client-secret",
            help="GitHub App client secret (or GITHUB_CLIENT_SECRET)",
        ),
        click.option(
            "--base-url",
            help="GitHub API URL, e.g. https://ghe.example.com/api/v3",
        ),
        click.option(
            "--ghes-version",
            help="GitHub Enterprise Server version; detected automatically if omitted",
        ),
        click.option(
            "--format", "-f", "report_format",
            type=click.Choice(REPORT_FORMATS),
            default=None,
            help="Output format for the report (default: csv)",
        ),
        click.option(
            "--output-path", "-o",
            type=click.Path(path_type=Path),
            help="Output file or directory for the report",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@main.command()
@click.option("--owner", required=True, help="Repository owner (user or organization)")
@click.option("--repo", "repo_name", required=True, help="Repository name")
@audit_options
@click.pass_context
def repo(ctx: click.Context, owner: str, repo_name: str, **options: Any) -> None:
    """
    Audit a single repository.

    Examples:

        gh-repo-audit repo --owner octo-org --repo octo-repo

        gh-repo-audit repo --owner octo-org --repo octo-repo --format markdown
    """
    try:
        repositories = [NameWithOwner(owner=owner, name=repo_name)]
    except ValidationError as e:
        console.print(f"\n[red]Validation Error:[/red] {e}")
        sys.exit(2)
    _run_audit(ctx, repositories, **options)


@main.command()
@click.option(
    "--input-path", "-i",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="File listing repositories, one owner/name per line or a CSV with owner,name columns",
)
@audit_options
@click.pass_context
def repos(ctx: click.Context, input_path: Path, **options: Any) -> None:
    """
    Audit every repository listed in a file.

    Examples:

        gh-repo-audit repos --input-path repos.txt

        gh-repo-audit repos -i repos.csv --format json -o audit.json
    """
    try:
        repositories = read_repository_list(input_path)
    except ValidationError as e:
        console.print(f"\n[red]Validation Error:[/red] {e}")
        sys.exit(2)

    if not repositories:
        console.print("[yellow]No repositories found in input file[/yellow]")
        sys.exit(0)

    _run_audit(ctx, repositories, **options)


@main.command()
def version() -> None:
    """Display version information."""
    console.print(f"gh-repo-audit v{__version__}")


@main.command()
def checks() -> None:
    """List all available checks."""
    table = Table(title="Available Checks")
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")

    for check in DEFAULT_CHECKS:
        table.add_row(check.type, check.name, check.description)

    console.print(table)


def _run_audit(
    ctx: click.Context,
    repositories: list[NameWithOwner],
    *,
    config_path: Optional[Path],
    auth_type: Optional[str],
    access_token: Optional[str],
    app_id: Optional[str],
    private_key: Optional[str],
    private_key_file: Optional[Path],
    app_installation_id: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    base_url: Optional[str],
    ghes_version: Optional[str],
    report_format: Optional[str],
    output_path: Optional[Path],
) -> None:
    """Resolve credentials, audit, write the report, and exit."""
    quiet = ctx.obj.get("quiet", False)

    try:
        config = _load_config(config_path, base_url, ghes_version, report_format, output_path)

        auth_config = create_auth_config(
            auth_type=auth_type,
            access_token=access_token,
            app_id=app_id,
            private_key=private_key,
            private_key_file=private_key_file,
            app_installation_id=app_installation_id,
            client_id=client_id,
            client_secret=client_secret,
        )

        client = GitHubClient.from_auth_config(auth_config, config.github)
        server_version = config.github.server_version
        if server_version is None and not config.github.is_github_com:
            server_version = client.get_server_version()

        report = AuditReport(
            repositories=repositories,
            server_version=server_version,
            tool_version=__version__,
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            disable=quiet,
        ) as progress:
            task = progress.add_task("Starting audit...", total=None)

            def on_check_result(result: CheckResult) -> None:
                report.add_check_result(result)
                progress.update(
                    task,
                    description=f"Audited {result.check_type} for {result.name_with_owner}",
                )

            try:
                report.warnings = audit_repositories(
                    client,
                    repositories,
                    server_version=server_version,
                    on_check_result=on_check_result,
                )
            finally:
                client.close()
            progress.update(task, description="Complete!")

        report.complete()

        reporter = get_reporter(config.report.format)
        written = reporter.write(report, config.report.resolved_output_path())

        if not quiet:
            _display_summary(report)
            console.print(f"\n  {reporter.format_name} report: {written}")

        sys.exit(0)

    except ConfigurationError as e:
        console.print(f"\n[red]Configuration Error:[/red] {e}")
        sys.exit(2)
    except ValidationError as e:
        console.print(f"\n[red]Validation Error:[/red] {e}")
        sys.exit(2)
    except AuditorError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Audit cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error during audit")
        console.print(f"\n[red]Unexpected error:[/red] {e}")
        sys.exit(1)


def _load_config(
    config_path: Optional[Path],
    base_url: Optional[str],
    ghes_version: Optional[str],
    report_format: Optional[str],
    output_path: Optional[Path],
) -> AuditConfig:
    """Load configuration and apply CLI overrides."""
    try:
        return load_config(
            config_path,
            github={"api_url": base_url, "server_version": ghes_version},
            report={"format": report_format, "output_path": output_path},
        )
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        # pydantic.ValidationError is a ValueError
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _display_summary(report: AuditReport) -> None:
    """Display audit summary in the terminal."""
    console.print("\n")

    table = Table(title="Audit Summary", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Warnings", justify="right")

    for check_type, count in report.warning_counts.items():
        table.add_row(check_type, f"[yellow]{count}[/yellow]")

    console.print(table)

    for result in report.failed_checks:
        console.print(
            f"[red]✗ {result.check_type} failed for {result.name_with_owner}[/red]"
        )

    if report.warnings:
        panel = Panel(
            f"[yellow bold]Found {len(report.warnings)} warning(s) across "
            f"{len(report.repositories)} repositor{'y' if len(report.repositories) == 1 else 'ies'}"
            "[/yellow bold]",
            border_style="yellow",
        )
    else:
        panel = Panel(
            "[green bold]✓ No warnings[/green bold]",
            border_style="green",
        )

    console.print(panel)


if __name__ == "__main__":
    main()
