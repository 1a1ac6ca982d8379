"""External collaborators consumed by the organizers and the engine."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger

from autoorganize.classification.type_detector import parse_tokens
from autoorganize.config.options import AutoOrganizeOptions, OrganizeOptions
from autoorganize.filesystem.discovery import enumerate_sources
from autoorganize.filesystem.file_ops import FileOps
from autoorganize.filesystem.naming import build_destination
from autoorganize.models.media import ParsedTokens, Target
from autoorganize.models.result import OrganizerType


def no_provider(tokens: ParsedTokens, organizer_type: OrganizerType) -> Optional[Target]:
    """Provider lookup used when no metadata provider is configured."""
    logger.debug(f"No metadata provider configured, cannot resolve '{tokens.title}'")
    return None


def log_library_changed(target_path: str) -> None:
    """Default library notification: a log line."""
    logger.info(f"Library changed: {target_path}")


@dataclass
class Collaborators:
    """
    Narrow interfaces to everything outside the organization core.

    Each field can be replaced independently, which is how tests and host
    applications plug in their own parser, provider, naming or filesystem.
    """

    parse_tokens: Callable[[Path], ParsedTokens] = parse_tokens
    resolve_target: Callable[[ParsedTokens, OrganizerType], Optional[Target]] = no_provider
    build_destination: Callable[[Target, ParsedTokens, OrganizeOptions], Path] = build_destination
    file_ops: FileOps = field(default_factory=FileOps)
    notify_library_changed: Callable[[str], None] = log_library_changed
    enumerate_sources: Callable[[AutoOrganizeOptions], Iterable[Path]] = enumerate_sources
