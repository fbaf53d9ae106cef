"""CLI interface for a11y-audit."""

import json
import logging
import sys
from contextlib import nullcontext
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .auditor import score_axe_results
from .checker import AccessibilityChecker
from .config import Settings
from .fixes import FixSuggester, get_provider
from .fixes.providers import PROVIDERS
from .models import AuditFinding, FixSuggestion, Impact, ScanResult
from .report import report_to_dict, suggestion_to_dict
from .scanner import ScanError


console = Console()
logger = logging.getLogger("a11y_audit")


def severity_style(impact: Impact) -> str:
    """Get Rich style for an impact level."""
    return {
        Impact.CRITICAL: "bold red",
        Impact.SERIOUS: "dark_orange",
        Impact.MODERATE: "yellow",
        Impact.MINOR: "blue",
    }.get(impact, "white")


def score_color(score: int) -> str:
    """Get color for a score value."""
    if score >= 90:
        return "green"
    elif score >= 70:
        return "yellow"
    elif score >= 50:
        return "orange1"
    else:
        return "red"


def print_score_bar(score: int, width: int = 20) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    empty = width - filled
    color = score_color(score)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * empty, style="dim")
    bar.append(f" {score}/100", style=f"bold {color}")
    return bar


def print_suggestion(finding: AuditFinding, suggestion: FixSuggestion) -> None:
    label = "AI" if suggestion.ai_generated else "manual"
    if suggestion.from_cache:
        label += ", cached"
    console.print(f"\n  [bold]{finding.rule_id}[/bold] [dim]({label})[/dim]")
    if suggestion.ai_generated and suggestion.after != suggestion.before:
        console.print(f"    [red]- {escape(suggestion.before)}[/red]", highlight=False)
        console.print(f"    [green]+ {escape(suggestion.after)}[/green]", highlight=False)
    for line in suggestion.explanation.splitlines():
        console.print(f"    [cyan]{escape(line)}[/cyan]", highlight=False)


def print_result(result: ScanResult, scan_id: str | None = None, verbose: bool = False) -> None:
    """Print scan result to console."""
    report = result.report

    # Header
    console.print()
    subtitle = f"[dim]Scanned in {result.scan_time_ms}ms[/dim]"
    if scan_id:
        subtitle += f"[dim] • scan {scan_id}[/dim]"
    console.print(Panel(
        f"[bold]{result.final_url}[/bold]\n{subtitle}",
        title="♿ Accessibility Audit",
        border_style="blue"
    ))

    # Overall score
    console.print()
    console.print("  Accessibility Score: ", end="")
    console.print(print_score_bar(report.score, width=25))
    console.print(f"  [bold]{report.grade}[/bold]")
    console.print()

    # Severity table
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Severity")
    table.add_column("Rules", justify="right")
    table.add_column("Elements", justify="right")
    for impact in Impact:
        table.add_row(
            f"[{severity_style(impact)}]{impact.value.capitalize()}[/]",
            str(len(report.violations_by_impact.get(impact, ()))),
            str(report.severity_counts[impact]),
        )
    console.print(table)

    # WCAG level table
    levels = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    levels.add_column("WCAG Level", style="cyan")
    levels.add_column("Passed", justify="right", style="green")
    levels.add_column("Failed", justify="right", style="red")
    for level, tally in report.level_breakdown.items():
        levels.add_row(f"Level {level.value}", str(tally.passed), str(tally.failed))
    console.print(levels)

    # Violations, most severe first
    if result.audit.violations:
        console.print("[bold]Violations:[/bold]\n")
        shown = 0
        for impact in Impact:
            for finding in report.violations_by_impact.get(impact, ()):
                if not verbose and shown >= 10:
                    break
                shown += 1
                style = severity_style(impact)
                console.print(
                    f"  [{style}]✗ {impact.value.upper()}[/] {escape(finding.help or finding.rule_id)} "
                    f"[dim]({finding.affected_node_count} element"
                    f"{'s' if finding.affected_node_count != 1 else ''})[/dim]"
                )
                if verbose:
                    console.print(f"    [dim]{finding.rule_id} • {', '.join(finding.tags)}[/dim]")
                    if finding.help_url:
                        console.print(f"    [cyan]→ {finding.help_url}[/cyan]")
        remaining = report.total_violations - shown
        if remaining > 0:
            console.print(f"\n  [dim]… {remaining} more, use --verbose to list all[/dim]")
    else:
        console.print("[green]✓ No violations found![/green] This page passed all automated accessibility tests.")

    # Footer
    console.print()
    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]a11y-audit v{__version__}[/dim]")
    console.print()


def _status(message: str, quiet: bool = False):
    """Spinner on the console, suppressed for machine-readable output."""
    if quiet:
        return nullcontext()
    return console.status(f"[bold blue]{message}[/bold blue]")


def _load_axe_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read axe results from {path}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} does not contain an axe-core results object")
    return data


def _load_settings() -> Settings:
    """Settings from the environment, with bad values reported as usage errors."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.ClickException(str(e))
    if settings.provider not in PROVIDERS:
        raise click.ClickException(
            f"A11Y_AUDIT_PROVIDER must be one of {', '.join(sorted(PROVIDERS))}, "
            f"got {settings.provider!r}"
        )
    return settings


@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx, debug: bool):
    """a11y-audit - Accessibility score and fixes for any web page.

    \b
    Quick start:
        a11y-audit scan example.com
        a11y-audit score axe-results.json

    \b
    Commands:
        scan      Audit URLs in headless Chromium with axe-core
        score     Score a saved axe-core JSON result
        suggest   Get a fix suggestion for one violation
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("-v", "--verbose", is_flag=True, help="List every violation with tags and links")
@click.option("-t", "--timeout", type=float, default=None, help="Page load timeout in seconds")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--suggest", is_flag=True, help="Request a fix suggestion for each violation")
@click.option("--provider", type=click.Choice(sorted(PROVIDERS)), default=None,
              help="LLM provider for --suggest")
@click.option("--strict-levels", is_flag=True,
              help="Count each rule once per WCAG level even if it carries both 2.0 and 2.1 tags")
@click.pass_context
def scan(ctx, urls: tuple[str, ...], verbose: bool, timeout: float | None, json_output: bool,
         suggest: bool, provider: str | None, strict_levels: bool):
    """Audit one or more URLs for accessibility.

    \b
    Examples:
        a11y-audit scan example.com
        a11y-audit scan example.com --verbose
        a11y-audit scan example.com other.org --json
        a11y-audit scan example.com --suggest
    """
    settings = _load_settings()
    if timeout is not None:
        settings.timeout = timeout
    if provider is not None:
        settings.provider = provider

    checker = AccessibilityChecker(settings=settings, dedupe_levels=strict_levels)
    outputs = []
    failed = False

    for url in urls:
        try:
            with _status(f"Scanning {url}...", quiet=json_output):
                scan_id, result = checker.scan(url)
        except ScanError as e:
            failed = True
            logger.debug("Scan error (%s) for %s", e.kind.value, url)
            if json_output:
                outputs.append({"url": url, "error": e.message, "errorKind": e.kind.value})
            else:
                console.print(f"\n[red]Error:[/red] {url}: {e.message}")
            continue

        suggestions = []
        if suggest:
            with _status("Generating fix suggestions...", quiet=json_output):
                for finding in result.audit.violations:
                    suggestions.append((finding, checker.suggest_fix(scan_id, finding.rule_id)))

        if json_output:
            payload = report_to_dict(result, scan_id)
            if suggest:
                payload["suggestions"] = [suggestion_to_dict(s) for _, s in suggestions]
            outputs.append(payload)
        else:
            print_result(result, scan_id=scan_id, verbose=verbose)
            if suggestions:
                console.print("[bold]🔧 Fix Suggestions:[/bold]")
                for finding, suggestion in suggestions:
                    print_suggestion(finding, suggestion)
                console.print()

    if json_output:
        click.echo(json.dumps(outputs[0] if len(outputs) == 1 else outputs, indent=2))

    if failed:
        ctx.exit(1)


@cli.command()
@click.argument("results_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="List every violation with tags and links")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--strict-levels", is_flag=True,
              help="Count each rule once per WCAG level even if it carries both 2.0 and 2.1 tags")
def score(results_file: Path, verbose: bool, json_output: bool, strict_levels: bool):
    """Score a saved axe-core JSON result without launching a browser.

    \b
    Examples:
        a11y-audit score axe-results.json
        a11y-audit score axe-results.json --json
    """
    result = score_axe_results(_load_axe_json(results_file), dedupe_levels=strict_levels)

    if json_output:
        click.echo(json.dumps(report_to_dict(result), indent=2))
    else:
        print_result(result, verbose=verbose)


@cli.command()
@click.argument("results_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("rule_id")
@click.option("--provider", type=click.Choice(sorted(PROVIDERS)), default=None,
              help="LLM provider (default: A11Y_AUDIT_PROVIDER or google)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def suggest(results_file: Path, rule_id: str, provider: str | None, json_output: bool):
    """Suggest a fix for one violated rule from a saved axe-core result.

    \b
    Examples:
        a11y-audit suggest axe-results.json image-alt
        a11y-audit suggest axe-results.json color-contrast --provider openai
    """
    result = score_axe_results(_load_axe_json(results_file))
    finding = next((v for v in result.audit.violations if v.rule_id == rule_id), None)
    if finding is None:
        raise click.ClickException(f"Rule {rule_id!r} is not among the violations in {results_file}")

    settings = _load_settings()
    try:
        llm = get_provider(provider or settings.provider)
    except ValueError as e:
        raise click.ClickException(str(e))
    suggester = FixSuggester(provider=llm)
    with _status(f"Asking {suggester.provider.name} for a fix...", quiet=json_output):
        suggestion = suggester.suggest(finding)

    if json_output:
        click.echo(json.dumps(suggestion_to_dict(suggestion), indent=2))
    else:
        print_suggestion(finding, suggestion)
        console.print()


def _expand_shortcut(args: list[str]) -> list[str]:
    """Insert ``scan`` before a bare URL, skipping any leading global flags."""
    for i, arg in enumerate(args):
        if arg.startswith('-'):
            continue
        if arg not in cli.commands and ('.' in arg or arg.startswith('localhost')):
            return args[:i] + ['scan'] + args[i:]
        break
    return args


# Convenience: allow `a11y-audit URL` as shortcut for `a11y-audit scan URL`
def main():
    """Entry point that handles both `a11y-audit URL` and `a11y-audit scan URL`."""
    cli(args=_expand_shortcut(sys.argv[1:]))


if __name__ == "__main__":
    main()
