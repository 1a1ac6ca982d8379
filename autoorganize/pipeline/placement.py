"""Steps shared by the episode and movie organizers."""

from pathlib import Path
from typing import Optional

from loguru import logger

from autoorganize.config.options import OrganizeOptions
from autoorganize.models.media import ParsedTokens, Target
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.pipeline.collaborators import Collaborators
from autoorganize.storage.smart_match_store import SmartMatchStore


def new_result(
    source_path: str,
    organizer_type: OrganizerType,
    tokens: ParsedTokens
) -> OrganizationResult:
    """
    Create the result of an attempt, carrying the parsed tokens.

    Args:
        source_path: Original file path.
        organizer_type: Organizer handling the file.
        tokens: Parsed filename tokens.

    Returns:
        A Failure result to be completed by the organizer.
    """
    try:
        file_size = Path(source_path).stat().st_size
    except OSError:
        file_size = 0

    return OrganizationResult(
        original_path=source_path,
        type=organizer_type,
        extracted_name=tokens.title,
        extracted_year=tokens.year,
        extracted_season=tokens.season,
        extracted_episode=tokens.episode,
        extracted_ending_episode=tokens.ending_episode,
        file_size=file_size,
    )


def mark(result: OrganizationResult, status: FileSortingStatus, message: str = '') -> OrganizationResult:
    """Set the outcome of a result and log it."""
    result.status = status
    result.status_message = message
    if status == FileSortingStatus.SUCCESS:
        logger.info(f"{result.original_file_name} -> {result.target_path}")
    elif status == FileSortingStatus.FAILURE:
        logger.warning(f"{result.original_file_name}: {message}")
    else:
        logger.info(f"{result.original_file_name}: {message}")
    return result


def resolve_target(
    tokens: ParsedTokens,
    organizer_type: OrganizerType,
    smart_matches: SmartMatchStore,
    collaborators: Collaborators
) -> Optional[Target]:
    """
    Resolve tokens to a target: learned corrections first, then the provider.

    Returns:
        The resolved Target, or None.
    """
    if not tokens.title:
        return None

    match = smart_matches.find_target_for_tokens([tokens.title], organizer_type)
    if match is not None:
        logger.debug(f"Smart match: '{tokens.title}' -> {match.display_name}")
        return Target(
            id=match.id,
            name=match.display_name,
            year=match.year,
            organizer_type=organizer_type,
        )

    return collaborators.resolve_target(tokens, organizer_type)


def place(
    result: OrganizationResult,
    target: Target,
    tokens: ParsedTokens,
    options: OrganizeOptions,
    collaborators: Collaborators
) -> OrganizationResult:
    """
    Compute the destination of a resolved file and put it there.

    An identical file already at the destination ends the attempt as
    SkippedExisting (optionally deleting the source) when duplicates are
    skipped. A different file is only replaced when ``overwrite_existing``
    is set. I/O errors become a Failure carrying the cause.

    Args:
        result: Result being built for the source file.
        target: Resolved series or movie.
        tokens: Parsed filename tokens.
        options: Organizer options.
        collaborators: Naming and filesystem collaborators.

    Returns:
        The completed result.
    """
    file_ops = collaborators.file_ops
    source = Path(result.original_path)
    destination = Path(collaborators.build_destination(target, tokens, options))
    result.target_path = str(destination)

    if source == destination:
        return mark(result, FileSortingStatus.SUCCESS)

    if file_ops.exists(destination):
        if file_ops.compare_content(source, destination):
            if options.skip_duplicates:
                result.duplicate_of = str(destination)
                message = f"File already exists in the library: {destination}"
                if options.delete_duplicate_source and not options.dry_run:
                    try:
                        file_ops.delete(source)
                        message += " (source deleted)"
                    except OSError as e:
                        logger.error(f"Error deleting duplicate source {source}: {e}")
                return mark(result, FileSortingStatus.SKIPPED_EXISTING, message)
        elif not options.overwrite_existing:
            return mark(
                result, FileSortingStatus.SKIPPED_EXISTING,
                f"A different file already exists at {destination}"
            )

    if options.dry_run:
        logger.info(f"SIMULATION - Move: {source.name} -> {destination}")
        return mark(result, FileSortingStatus.SUCCESS)

    try:
        file_ops.move_or_copy(source, destination, copy=options.copy_original_file)
    except OSError as e:
        return mark(result, FileSortingStatus.FAILURE, f"Error organizing {source.name}: {e}")

    return mark(result, FileSortingStatus.SUCCESS)
