"""User interface components."""

from autoorganize.ui.console import ConsoleUI, console
from autoorganize.ui.display import (
    build_results_table,
    build_smart_match_table,
    display_result,
    display_results,
    display_scan_summary,
    display_smart_matches,
    format_episode_numbers,
    format_result_details,
    format_status,
)

__all__ = [
    "ConsoleUI",
    "console",
    "build_results_table",
    "build_smart_match_table",
    "display_result",
    "display_results",
    "display_scan_summary",
    "display_smart_matches",
    "format_episode_numbers",
    "format_result_details",
    "format_status",
]
