#!/usr/bin/env python3
"""
Thoughtscan Report Renderer
Colourised console report of a tree-of-thought analysis run
"""

from typing import List

from rich.console import Console
from rich.markup import escape

from thoughtscan.core.tree import ThoughtNode


class ThoughtscanReporter:
    """Render an AnalysisResult to the console"""

    ICONS = {
        'success': '✅',
        'error': '❌',
        'warning': '⚠️ ',
        'tree': '🌳',
        'branch': '├─',
        'leaf': '└─',
        'thought': '💭',
        'analysis': '🔍',
    }

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def print_header(self):
        self.console.print(f"{self.ICONS['thought']} [bold magenta]Tree of Thought Security Reasoning[/bold magenta]")
        self.console.print("[dim]Analyzing security vectors with hierarchical decision trees...[/dim]")

    def print_summary(self, result):
        icon = self.ICONS['analysis']
        self.console.print("\n[bold cyan]=== TREE OF THOUGHT ANALYSIS RESULTS ===[/bold cyan]")
        self.console.print(f"{icon} Files analyzed: {result.files_analyzed}")
        self.console.print(f"{icon} Analysis time: {result.analysis_time_ms}ms")
        self.console.print(f"{icon} Security vectors found: {result.total_issues}")

        if result.missing_roots:
            self.console.print(f"[dim]Roots not present: {escape(', '.join(result.missing_roots))}[/dim]")

        if result.suppressed_errors:
            self.console.print(
                f"[yellow]{self.ICONS['warning']}Suppressed filesystem errors: {len(result.suppressed_errors)}[/yellow]"
            )
            for error in result.suppressed_errors:
                self.console.print(f"  [dim]{error.operation}: {escape(error.path)} ({escape(error.message)})[/dim]")

        if result.failed_files:
            self.console.print(
                f"[yellow]{self.ICONS['warning']}Files skipped after analysis errors: {len(result.failed_files)}[/yellow]"
            )
            for failed in result.failed_files:
                self.console.print(f"  [dim]{escape(failed.file_path)}: {escape(failed.error_message or '')}[/dim]")

        self.console.print()

    def print_tree(self, root: ThoughtNode):
        self.console.print(f"{self.ICONS['tree']} [bold]Security Reasoning Tree:[/bold]")
        self.console.print(root.render(), highlight=False)

    def print_critical_paths(self, critical_paths: List[List[ThoughtNode]]):
        """Each critical path as an indented branch-to-leaf reasoning chain"""
        self.console.print(
            f"[red]{self.ICONS['error']} CRITICAL: {len(critical_paths)} critical reasoning paths detected![/red]"
        )
        self.console.print("[dim]These paths indicate high-risk collapse vector combinations.[/dim]\n")

        for index, path in enumerate(critical_paths, 1):
            self.console.print(f"[red]Critical Path {index}:[/red]")
            for position, node in enumerate(path):
                prefix = self.ICONS['leaf'] if position == len(path) - 1 else self.ICONS['branch']
                self.console.print(f"  {prefix} {escape(node.type)}: {escape(node.description)}", highlight=False)
                if node.reasoning:
                    self.console.print(f"    [dim]→ {escape(node.reasoning)}[/dim]")
            self.console.print()

    def print_verdict(self, result):
        """Pass verdict for runs without critical paths"""
        if result.total_issues > 0:
            self.console.print(
                f"[yellow]{self.ICONS['warning']}Found {result.total_issues} potential security vectors.[/yellow]"
            )
            self.console.print("[dim]Review the reasoning tree above for detailed analysis.[/dim]")
        else:
            self.console.print(f"[green]{self.ICONS['success']} No critical security vectors detected.[/green]")
            self.console.print("[dim]Tree of thought analysis completed successfully.[/dim]")

    def report(self, result):
        """Summary, full tree, then critical paths or the pass verdict"""
        self.print_summary(result)
        self.print_tree(result.tree.root)

        if result.critical_paths:
            self.print_critical_paths(result.critical_paths)
        else:
            self.print_verdict(result)
