"""Terminal reporters for the final statistics."""
import json
import sys
from typing import Optional, TextIO
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from contrib_stats.application.ordering import ordered_items, sort_projects
from contrib_stats.domain.errors import InputError
from contrib_stats.domain.models import AggregateStats, SortKey
from contrib_stats.domain.reporting_interface import IReporter


REPORT_MODES = ("table", "verbose", "json")

STATE_STYLES = {
    "open": "green",
    "closed": "red",
    "merged": "magenta",
}


class TableReporter(IReporter):
    """One row per project plus a totals row."""

    def __init__(self, console: Console):
        self._console = console

    def build_table(self, stats: AggregateStats, sort_key: SortKey) -> Table:
        table = Table()
        table.add_column("Project", min_width=20, max_width=40, overflow="fold")
        for header in ("Comm", "PR", "Iss", "Total"):
            table.add_column(header, justify="right")

        for name in sort_projects(stats, sort_key):
            project = stats.project_stats[name]
            table.add_row(
                escape(name),
                str(project.commits.count),
                str(len(project.pull_requests)),
                str(len(project.issues)),
                str(project.total)
            )

        table.add_section()
        table.add_row(
            "[blue]Total[/]",
            str(stats.commits_total),
            str(stats.pull_requests_total),
            str(stats.issues_total),
            str(stats.total)
        )
        return table

    def report(self, stats: AggregateStats, sort_key: SortKey) -> None:
        self._console.print(self.build_table(stats, sort_key))


class VerboseReporter(IReporter):
    """Itemized listing of every project's contributions."""

    def __init__(self, console: Console):
        self._console = console

    def report(self, stats: AggregateStats, sort_key: SortKey) -> None:
        for name in sort_projects(stats, sort_key):
            project = stats.project_stats[name]
            self._console.print(f"[bold]{escape(name)}[/] [dim]({project.total} total)[/]")

            if project.commits.count:
                self._console.print(
                    f"  Commits: {project.commits.count}  {escape(project.commits.history_url)}"
                )

            for label, items in (("Pull requests", project.pull_requests), ("Issues", project.issues)):
                if not items:
                    continue
                self._console.print(f"  {label}:")
                for item in ordered_items(items):
                    style = STATE_STYLES.get(item.state.value, "white")
                    self._console.print(
                        f"    [{style}]\\[{item.state.value}][/] {escape(item.title)}"
                    )
                    self._console.print(f"      [dim]{escape(item.url)}[/]")

            self._console.print()

        self._console.print(
            f"[blue]Total[/]: {stats.commits_total} commits, {stats.pull_requests_total} "
            f"pull requests, {stats.issues_total} issues ({stats.total})"
        )


class JsonReporter(IReporter):
    """The full statistics structure as JSON."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def report(self, stats: AggregateStats, sort_key: SortKey) -> None:
        stream = self._stream or sys.stdout
        json.dump(stats.to_dict(), stream, indent=2, ensure_ascii=False)
        stream.write("\n")


def build_reporter(mode: str, console: Console) -> IReporter:
    """Return the reporter for a command line ``--format`` value."""
    if mode == "table":
        return TableReporter(console)
    if mode == "verbose":
        return VerboseReporter(console)
    if mode == "json":
        return JsonReporter(console.file)
    raise InputError(f"Unknown report format {mode!r}, expected one of {', '.join(REPORT_MODES)}.")
