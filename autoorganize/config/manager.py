"""Gestion de la configuration et assemblage du moteur d'organisation."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

from autoorganize.api import CacheDB, TmdbClient, TmdbResolver
from autoorganize.config.cli import CLIArgs, args_to_cli_args, parse_arguments
from autoorganize.config.options import AutoOrganizeOptions, OrganizeOptions
from autoorganize.config.settings import EXT_VIDEO, LOG_FILENAME
from autoorganize.pipeline import Collaborators, InProgressGuard, OrganizationEngine
from autoorganize.storage import ResultStore, SmartMatchStore


@dataclass
class ValidationResult:
    """Résultat d'une validation de configuration."""

    valid: bool
    error_message: Optional[str] = None


class ConfigurationManager:
    """
    Gère la configuration et l'assemblage de l'application.

    Centralise l'analyse des arguments, la journalisation, la validation
    et la construction du moteur pour garder le point d'entrée mince.
    """

    def __init__(self, env_path: Optional[Path] = None):
        """
        Initialise le gestionnaire de configuration.

        Arguments :
            env_path: Fichier .env à charger (défaut: .env du répertoire courant).
        """
        self._cli_args: Optional[CLIArgs] = None
        self._namespace = None
        self.env_path = env_path

    @property
    def cli_args(self) -> CLIArgs:
        """Retourne les arguments CLI analysés."""
        if self._cli_args is None:
            raise RuntimeError("Configuration not initialized. Call parse_args() first.")
        return self._cli_args

    @property
    def namespace(self):
        """Retourne le Namespace brut (arguments propres à chaque commande)."""
        if self._namespace is None:
            raise RuntimeError("Configuration not initialized. Call parse_args() first.")
        return self._namespace

    def parse_args(self, args: Optional[List[str]] = None) -> CLIArgs:
        """
        Analyse les arguments de ligne de commande.

        Arguments :
            args: Liste optionnelle d'arguments (défaut: sys.argv).

        Retourne :
            Instance CLIArgs analysée.
        """
        self._namespace = parse_arguments(args)
        self._cli_args = args_to_cli_args(self._namespace)
        return self._cli_args

    def setup_logging(self, debug: bool = False) -> None:
        """
        Configure la journalisation avec loguru.

        Arguments :
            debug: Active le niveau debug si True.
        """
        logger.remove()
        logger.add(
            sys.stderr,
            level="DEBUG" if debug else "WARNING",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        )
        logger.add(
            LOG_FILENAME,
            rotation="10 MB",
            retention="7 days",
            level="DEBUG" if debug else "INFO",
        )

    def load_environment(self) -> Optional[str]:
        """
        Charge le fichier .env et retourne la clé TMDB.

        Retourne :
            La valeur de TMDB_API_KEY, ou None si absente.
        """
        if self.env_path is not None:
            load_dotenv(dotenv_path=self.env_path)
        else:
            load_dotenv()
        api_key = os.getenv("TMDB_API_KEY")
        if not api_key:
            logger.warning("TMDB_API_KEY absente : seuls les smart matches seront utilisés")
        return api_key or None

    def validate_watch_directories(self) -> ValidationResult:
        """
        Valide que les répertoires surveillés existent.

        Retourne :
            ValidationResult avec statut et message d'erreur optionnel.
        """
        for directory in self.cli_args.watch_dirs:
            if not directory.exists():
                return ValidationResult(
                    valid=False,
                    error_message=f"Watch directory {directory} does not exist"
                )
        return ValidationResult(valid=True)

    def build_options(self) -> AutoOrganizeOptions:
        """Construit les options du moteur depuis les arguments CLI."""
        args = self.cli_args

        def organize_options(library_dir: Path) -> OrganizeOptions:
            return OrganizeOptions(
                library_dir=library_dir,
                skip_duplicates=args.skip_duplicates,
                delete_duplicate_source=args.delete_duplicates,
                overwrite_existing=args.overwrite,
                copy_original_file=args.copy,
                dry_run=args.dry_run,
            )

        return AutoOrganizeOptions(
            watch_locations=list(args.watch_dirs),
            min_file_size_mb=args.min_size_mb,
            extensions=frozenset(EXT_VIDEO),
            tv=organize_options(args.tv_library),
            movie=organize_options(args.movie_library),
        )

    def build_engine(self, api_key: Optional[str] = None) -> OrganizationEngine:
        """
        Assemble les stores, le garde, le fournisseur et le moteur.

        Arguments :
            api_key: Clé TMDB ; sans clé, aucun fournisseur n'est branché.

        Retourne :
            Le moteur prêt à l'emploi.
        """
        database = self.cli_args.database
        guard = InProgressGuard()
        result_store = ResultStore(database, guard=guard)
        smart_match_store = SmartMatchStore(database)

        collaborators = Collaborators()
        if api_key:
            collaborators.resolve_target = TmdbResolver(TmdbClient(api_key), CacheDB(database))

        logger.debug(f"Moteur initialisé avec la base {database}")
        return OrganizationEngine(
            self.build_options(),
            result_store,
            smart_match_store,
            guard=guard,
            collaborators=collaborators,
        )
