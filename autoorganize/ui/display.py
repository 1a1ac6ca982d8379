"""Display functions for organization results and smart matches."""

from datetime import datetime
from typing import Dict, List, Optional

from rich.table import Table

from autoorganize.models.query import QueryResult
from autoorganize.models.result import FileSortingStatus, OrganizationResult
from autoorganize.models.smart_match import SmartMatch
from autoorganize.ui.console import ConsoleUI, Field, console as default_console

STATUS_STYLES: Dict[FileSortingStatus, str] = {
    FileSortingStatus.SUCCESS: "green",
    FileSortingStatus.FAILURE: "red",
    FileSortingStatus.SKIPPED_EXISTING: "yellow",
    FileSortingStatus.NEEDS_CORRECTION: "magenta",
}


def format_status(result: OrganizationResult) -> str:
    """
    Format the status of a result with its color.

    Args:
        result: Result to format.

    Returns:
        Rich markup string, suffixed when the path is being processed.
    """
    style = STATUS_STYLES.get(result.status, "white")
    text = f"[{style}]{result.status.value}[/{style}]"
    if result.is_in_progress:
        text += " [dim](in progress)[/dim]"
    return text


def format_date(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def format_episode_numbers(result: OrganizationResult) -> str:
    """Return SxxEyy (or SxxEyy-Ezz) for episodes, an empty string otherwise."""
    if result.extracted_season is None or result.extracted_episode is None:
        return ""
    text = f"S{result.extracted_season:02d}E{result.extracted_episode:02d}"
    if result.extracted_ending_episode:
        text += f"-E{result.extracted_ending_episode:02d}"
    return text


def build_results_table(page: QueryResult[OrganizationResult]) -> Table:
    """
    Build the table listing a page of results.

    Args:
        page: Page returned by a result query.

    Returns:
        Rich Table with one row per result.
    """
    table = Table(
        title=f"Organization results ({len(page.items)}/{page.total_record_count})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Id", style="dim", no_wrap=True)
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("File")
    table.add_column("Name")
    table.add_column("Message")

    for result in page.items:
        name = result.extracted_name or ""
        numbers = format_episode_numbers(result)
        if numbers:
            name = f"{name} {numbers}"
        table.add_row(
            result.id[:8],
            format_date(result.date),
            result.type.value,
            format_status(result),
            result.original_file_name,
            name,
            result.status_message or "",
        )
    return table


def build_smart_match_table(page: QueryResult[SmartMatch]) -> Table:
    """Build the table listing learned corrections."""
    table = Table(
        title=f"Smart matches ({page.total_record_count})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Id", no_wrap=True)
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Year")
    table.add_column("Match strings")

    for match in page.items:
        table.add_row(
            match.id,
            match.organizer_type.value,
            match.display_name,
            str(match.year) if match.year else "",
            ", ".join(sorted(match.match_strings)),
        )
    return table


def format_result_details(result: OrganizationResult) -> List[Field]:
    """
    Describe every field of a result.

    Args:
        result: Result to describe.

    Returns:
        (label, value) pairs; optional fields are left out when empty.
    """
    fields: List[Field] = [
        ("Id", result.id),
        ("Date", format_date(result.date)),
        ("Type", result.type.value),
        ("Status", format_status(result)),
        ("Source", f"[cyan]{result.original_path}[/cyan]"),
        ("Target", f"[cyan]{result.target_path or '-'}[/cyan]"),
    ]
    if result.status_message:
        fields.append(("Message", result.status_message))
    if result.extracted_name:
        year = f" ({result.extracted_year})" if result.extracted_year else ""
        fields.append(("Extracted", f"{result.extracted_name}{year} {format_episode_numbers(result)}".rstrip()))
    if result.file_size:
        fields.append(("Size", f"{result.file_size / (1024 * 1024):.1f} MB"))
    if result.duplicate_of:
        fields.append(("Duplicate of", result.duplicate_of))
    return fields


def display_result(result: OrganizationResult, ui: Optional[ConsoleUI] = None) -> None:
    ui = ui or default_console
    ui.print_fields(format_result_details(result), title=result.original_file_name,
                    border_style=STATUS_STYLES.get(result.status, "blue"))


def display_results(page: QueryResult[OrganizationResult], ui: Optional[ConsoleUI] = None) -> None:
    ui = ui or default_console
    ui.print_table(build_results_table(page), empty_message="No organization result")


def display_smart_matches(page: QueryResult[SmartMatch], ui: Optional[ConsoleUI] = None) -> None:
    ui = ui or default_console
    ui.print_table(build_smart_match_table(page), empty_message="No smart match learned yet")


def display_scan_summary(results: List[OrganizationResult], ui: Optional[ConsoleUI] = None) -> None:
    """
    Display the number of files per status after a scan.

    Args:
        results: Results of the scan.
        ui: Console to print to.
    """
    ui = ui or default_console
    counts: Dict[FileSortingStatus, int] = {}
    for result in results:
        counts[result.status] = counts.get(result.status, 0) + 1

    ui.print_counts("Scan summary", [
        (f"[{STATUS_STYLES[status]}]{status.value}[/{STATUS_STYLES[status]}]", str(counts.get(status, 0)))
        for status in FileSortingStatus
    ])
