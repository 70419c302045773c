"""
CLI Output Formatting

Rich tables and panels for evaluation results and band reports.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from ..evaluation.evaluator import SectionReport
from ..scoring.band_scorer import ScoreReport

console = Console()


def format_table(data: List[Dict[str, Any]], title: str = "Results", headers: Optional[List[str]] = None) -> Table:
    """
    Format data as a Rich table.

    Args:
        data: List of dictionaries with row data
        title: Table title
        headers: Optional list of column headers (uses keys from first row if not provided)

    Returns:
        Rich Table object
    """
    if not data:
        table = Table(title=title)
        table.add_column("Message", style="dim")
        table.add_row("No data available")
        return table

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold blue")
    for header in headers:
        table.add_column(header, style="white", justify="left")

    for row in data:
        table.add_row(*[str(row.get(header, "N/A")) for header in headers])

    return table


def format_band(band: float) -> str:
    """Band for display; the no-data sentinel is shown as a dash."""
    return f"{band:.1f}" if band > 0 else "-"


def format_section_results(report: SectionReport) -> Table:
    """Per-question verdicts of a section."""
    table = Table(
        title=f"{report.skill_area.value.title()} Results",
        show_header=True,
        header_style="bold blue",
    )
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Answer")
    table.add_column("Accepted")
    table.add_column("Rule")
    table.add_column("Result")

    for result in report.results:
        verdict = "[green]correct[/green]" if result.is_correct else "[red]incorrect[/red]"
        table.add_row(
            str(result.question_id),
            result.question_type,
            escape(result.user_answer) if result.user_answer else "[dim](blank)[/dim]",
            escape(", ".join(result.correct_answers)),
            result.match_type,
            verdict,
        )

    return table


def format_question_types(report: SectionReport) -> Table:
    """Accuracy per question type."""
    return format_table(
        [stats.to_dict() for stats in report.question_type_breakdown],
        title="By Question Type",
        headers=["question_type", "correct", "total", "accuracy"],
    )


def format_score_panel(report: ScoreReport) -> Panel:
    """Accuracy and band summary panel."""
    if not report.is_scoreable:
        body = "[yellow]No questions to score[/yellow]"
    else:
        body = (
            f"Correct: [bold]{report.correct_count}/{report.total_count}[/bold]\n"
            f"Accuracy: [bold]{report.accuracy_percentage:.2f}%[/bold]\n"
            f"Band: [bold cyan]{format_band(report.band)}[/bold cyan]"
        )
    return Panel.fit(body, title=f"{report.skill_area.value.title()} Band", border_style="blue")


def display_error(message: str, error_type: str = "Error") -> None:
    """Display a formatted error message."""
    console.print(Panel(f"[red]{message}[/red]", title=error_type, border_style="red"))
