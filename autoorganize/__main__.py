"""Entry point for the autoorganize package.

Run with: python -m autoorganize
"""

import sys
from typing import List, Optional

from loguru import logger

from autoorganize.config.manager import ConfigurationManager
from autoorganize.exceptions import ConfigurationError, ContentionError, OrganizationError
from autoorganize.models import (
    EpisodeCorrectionRequest,
    FileSortingStatus,
    MovieCorrectionRequest,
    OrganizerType,
    ResultQuery,
    SmartMatchQuery,
)
from autoorganize.pipeline import OrganizationEngine
from autoorganize.ui import (
    ConsoleUI,
    display_result,
    display_results,
    display_scan_summary,
    display_smart_matches,
)


def display_configuration(config: ConfigurationManager, ui: ConsoleUI) -> None:
    """
    Display the scan configuration to the user.

    Args:
        config: Configuration manager holding the parsed arguments.
        ui: Console UI instance.
    """
    args = config.cli_args
    mode_parts = []
    if args.copy:
        mode_parts.append("[cyan]COPY[/cyan]")
    if args.overwrite:
        mode_parts.append("[red]OVERWRITE[/red]")
    if args.dry_run:
        mode_parts.append("[yellow]SIMULATION[/yellow]")
    if not mode_parts:
        mode_parts.append("[green]Normal[/green]")

    watched = ", ".join(str(d) for d in args.watch_dirs)
    ui.print_fields(
        [
            ("Watch", f"[cyan]{watched}[/cyan]"),
            ("TV library", f"[cyan]{args.tv_library}[/cyan]"),
            ("Movie library", f"[cyan]{args.movie_library}[/cyan]"),
            ("Minimum size", f"{args.min_size_mb} MB"),
            ("Mode", " ".join(mode_parts)),
        ],
        title="Auto organize configuration",
    )


def run_command(engine: OrganizationEngine, config: ConfigurationManager, ui: ConsoleUI) -> int:
    """
    Run the sub-command selected on the command line.

    Args:
        engine: Assembled organization engine.
        config: Configuration manager holding the parsed arguments.
        ui: Console UI instance.

    Returns:
        Exit code.
    """
    ns = config.namespace
    command = config.cli_args.command

    if command == "scan":
        validation = config.validate_watch_directories()
        if not validation.valid:
            ui.print_error(validation.error_message)
            return 1
        display_configuration(config, ui)
        results = engine.process_new_files(show_progress=True)
        display_scan_summary(results, ui)
        return 0

    if command == "results":
        query = ResultQuery(
            statuses=[FileSortingStatus(s) for s in ns.status],
            type=OrganizerType(ns.type) if ns.type else None,
            path_contains=ns.path,
            start_index=ns.start,
            limit=ns.limit,
        )
        display_results(engine.get_results(query), ui)
        return 0

    if command in ("show", "show-path"):
        if command == "show":
            result = engine.get_result(ns.result_id)
        else:
            result = engine.get_result_by_path(ns.path)
        if result is None:
            ui.print_error("No organization result found")
            return 1
        display_result(result, ui)
        return 0

    if command == "retry":
        display_result(engine.perform_organization(ns.result_id), ui)
        return 0

    if command == "correct-episode":
        request = EpisodeCorrectionRequest(
            source_path=ns.path,
            series_id=ns.series_id,
            series_name=ns.series_name,
            series_year=ns.year,
            season_number=ns.season,
            episode_number=ns.episode,
            ending_episode_number=ns.ending_episode,
            remember_correction=not ns.no_remember,
        )
        display_result(engine.submit_correction(request), ui)
        return 0

    if command == "correct-movie":
        request = MovieCorrectionRequest(
            source_path=ns.path,
            movie_id=ns.movie_id,
            movie_name=ns.movie_name,
            movie_year=ns.year,
            remember_correction=not ns.no_remember,
        )
        display_result(engine.submit_correction(request), ui)
        return 0

    if command == "delete-original":
        engine.delete_original(ns.result_id)
        ui.print_success("Original file deleted")
        return 0

    if command == "clear-log":
        ui.print_success(f"{engine.clear_log()} result(s) deleted")
        return 0

    if command == "clear-completed":
        ui.print_success(f"{engine.clear_completed()} completed result(s) deleted")
        return 0

    if command == "smart-matches":
        query = SmartMatchQuery(organizer_type=OrganizerType(ns.type) if ns.type else None)
        display_smart_matches(engine.get_smart_matches(query), ui)
        return 0

    if command == "delete-smart-match":
        if engine.delete_smart_match_entry(ns.target_id, ns.match_string):
            ui.print_success(f"Match string '{ns.match_string}' forgotten")
            return 0
        ui.print_warning(f"No match string '{ns.match_string}' for {ns.target_id}")
        return 1

    ui.print_error(f"Unknown command: {command}")
    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the auto-organize tool.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    config = ConfigurationManager()
    cli_args = config.parse_args(argv)
    config.setup_logging(cli_args.debug)
    ui = ConsoleUI()

    if cli_args.dry_run:
        ui.print_warning("SIMULATION MODE: no file will be modified")

    api_key = config.load_environment()
    engine = config.build_engine(api_key)
    try:
        return run_command(engine, config, ui)
    except (ConfigurationError, ContentionError, OrganizationError) as e:
        logger.error(f"{cli_args.command} failed: {e}")
        ui.print_error(str(e))
        return 1
    finally:
        engine.close()
        engine.result_store.close()
        engine.smart_match_store.close()


if __name__ == "__main__":
    sys.exit(main())
