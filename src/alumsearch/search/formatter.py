"""Rich display formatting for search diagnostics.

Renders the tier 1 scoring breakdown (score, coverage bar, reasons) and
the tier 2 fallback list so ranking behavior can be inspected while
tuning weights.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from alumsearch.models import SearchOutcome


def coverage_bar(coverage: float, width: int = 10) -> str:
    """Share of query words matched, e.g. ``"━━━━━━○○○○ 60%"``."""
    ratio = min(max(coverage, 0.0), 1.0)
    cells = round(ratio * width)
    bar = "━" * cells + "○" * (width - cells)
    return f"{bar} {round(ratio * 100)}%"


def render_score_table(outcome: SearchOutcome, max_reasons: int = 6) -> Table:
    """Build a rich Table of the outcome's primary and secondary results.

    Args:
        outcome: Result of a search.
        max_reasons: Reasons shown per row before eliding.

    Returns:
        A Table; print it with any rich Console.
    """
    title = f'Results for "{outcome.normalized_query}"' if outcome.normalized_query else "Results"
    table = Table(title=title, show_header=True, expand=False)
    table.add_column("#", style="yellow", justify="right", width=4)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Tier", style="green")
    table.add_column("Score", justify="right")
    table.add_column("Coverage")
    table.add_column("Reasons", style="dim")

    for i, result in enumerate(outcome.scored, start=1):
        reasons = result.reasons[:max_reasons]
        if len(result.reasons) > max_reasons:
            reasons.append(f"+{len(result.reasons) - max_reasons} more")
        table.add_row(
            str(i),
            result.record.name or result.record.slug,
            "primary",
            str(result.score),
            coverage_bar(result.coverage),
            "; ".join(reasons),
        )

    offset = len(outcome.scored)
    for i, record in enumerate(outcome.secondary, start=offset + 1):
        table.add_row(str(i), record.name or record.slug, "fallback", "", "", "")

    return table


def display_outcome(outcome: SearchOutcome, console: Console | None = None) -> None:
    """Print the score table, or a dim notice when nothing matched.

    Args:
        outcome: Result of a search.
        console: Optional Console for testing.
    """
    con = console or Console()
    if outcome.is_empty:
        con.print("[dim]No results.[/dim]")
        return
    con.print(render_score_table(outcome))
