#!/usr/bin/env python3
"""
Thoughtscan CLI - Command-line interface
Click-based entry point for tree-of-thought security reasoning
"""

import sys
import click
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from thoughtscan import __version__
from thoughtscan.config import ConfigManager

# Force UTF-8 encoding for stdout/stderr on Windows to handle emojis
if sys.platform == 'win32':
    import io
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    if isinstance(sys.stderr, io.TextIOWrapper):
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')

console = Console()


def run_analysis(project_root: Path = None) -> int:
    """
    Run one analysis over project_root (default: cwd) and print the report

    Returns:
        Process exit code: 0 without critical paths, 1 otherwise
    """
    from thoughtscan.core.engine import TreeOfThoughtEngine
    from thoughtscan.core.reporter import ThoughtscanReporter

    reporter = ThoughtscanReporter(console)
    reporter.print_header()

    engine = TreeOfThoughtEngine(project_root=project_root, console=console)
    console.print("[blue]🌳 [bold]Building Tree of Thought Security Analysis...[/bold][/blue]")
    for root in engine.config.scan_roots:
        if not (engine.project_root / root).is_dir():
            continue
        console.print(f"[dim]Scanning directory: {escape(root)}[/dim]")

    result = engine.run()
    reporter.report(result)
    return result.exit_code


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.pass_context
def main(ctx, version):
    """
    Thoughtscan - Tree-of-Thought Security Reasoning

    Scans src/, assets/js/ and scripts/ under the current directory for
    risky JS/TS patterns, builds a weighted reasoning tree and fails when
    a critical reasoning path is found.

    Examples:
        thoughtscan              # Analyse the current directory
        thoughtscan config       # Show effective configuration
        thoughtscan init         # Write a default .thoughtscan.yml
    """
    if version:
        click.echo(f"Thoughtscan v{__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        ctx.invoke(analyze)


@main.command()
@click.option('--debug', is_flag=True, help='Show a traceback for unexpected errors')
def analyze(debug):
    """
    Analyse the current directory.

    Exits with code 1 when at least one critical reasoning path is
    found, 0 otherwise. Use --debug to re-raise unexpected errors.
    """
    try:
        exit_code = run_analysis()
    except Exception as e:
        console.print(f"\n[red]❌ Error: {escape(str(e))}[/red]")
        if debug:
            raise
        sys.exit(1)

    sys.exit(exit_code)


@main.command()
def config():
    """
    Show Thoughtscan configuration.

    Displays the effective settings after loading .thoughtscan.yml
    (or the built-in defaults when no file exists).
    """
    config_path = ConfigManager.find_config()
    cfg = ConfigManager.load_config(config_path)

    console.print("\n[cyan]⚙️  Thoughtscan Configuration[/cyan]\n")
    if config_path:
        console.print(f"[bold cyan]Config file:[/bold cyan] {escape(str(config_path))}")
    else:
        console.print("[bold cyan]Config file:[/bold cyan] none (built-in defaults)")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Scan roots", ", ".join(cfg.scan_roots))
    table.add_row("Extensions", ", ".join(cfg.extensions))
    table.add_row("Skipped directories", ", ".join(cfg.skip_dirs) + " (and dot-directories)")
    table.add_row("Max depth", str(cfg.max_depth))
    table.add_row("Max files", str(cfg.max_files))
    table.add_row("Confidence floor", f"{cfg.confidence_floor:.2f}")
    table.add_row("Cascade window", f"{cfg.cascade_window} lines")
    for branch_name, label in cfg.branch_severity.items():
        table.add_row(f"Branch {branch_name}", label)
    table.add_row("Disabled analyzers", ", ".join(cfg.analyzers_disabled) or "none")
    console.print(table)

    console.print(f"\n[bold cyan]Thoughtscan Version:[/bold cyan] v{__version__}")


@main.command()
@click.option('--force', is_flag=True, help='Overwrite existing configuration')
def init(force):
    """
    Write a default .thoughtscan.yml in the current directory.
    """
    config_path = Path.cwd() / ConfigManager.DEFAULT_CONFIG_NAME
    if config_path.exists() and not force:
        console.print(f"[yellow]⚠️  {ConfigManager.DEFAULT_CONFIG_NAME} already exists (use --force to overwrite)[/yellow]")
        sys.exit(1)

    created = ConfigManager.create_default_config(Path.cwd())
    if not created.exists():
        sys.exit(1)
    console.print(f"[green]✅ Created {escape(str(created))}[/green]")


if __name__ == '__main__':
    main()
