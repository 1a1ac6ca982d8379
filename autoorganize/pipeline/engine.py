"""Orchestration de l'organisation des fichiers."""

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger
from tqdm import tqdm

from autoorganize.classification.type_detector import detect_organizer_type
from autoorganize.config.options import AutoOrganizeOptions
from autoorganize.exceptions import ConfigurationError, ContentionError, OrganizationError
from autoorganize.models.media import EpisodeCorrectionRequest, MovieCorrectionRequest
from autoorganize.models.query import QueryResult, ResultQuery, SmartMatchQuery
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.models.smart_match import SmartMatch
from autoorganize.pipeline.collaborators import Collaborators
from autoorganize.pipeline.episode_organizer import EpisodeOrganizer
from autoorganize.pipeline.guard import InProgressGuard
from autoorganize.pipeline.movie_organizer import MovieOrganizer
from autoorganize.storage.result_store import ResultStore
from autoorganize.storage.smart_match_store import SmartMatchStore

CorrectionRequest = Union[EpisodeCorrectionRequest, MovieCorrectionRequest]


class OrganizationEngine:
    """
    Orchestre chaque opération sur un chemin source.

    Toute opération (scan, relance, correction, suppression) réserve le
    chemin dans le garde pendant toute sa durée : réserver, organiser,
    enregistrer le résultat, libérer. Les notifications à la bibliothèque
    partent sur un thread dédié et ne bloquent jamais l'opération.
    """

    def __init__(
        self,
        options: AutoOrganizeOptions,
        result_store: ResultStore,
        smart_match_store: SmartMatchStore,
        guard: Optional[InProgressGuard] = None,
        collaborators: Optional[Collaborators] = None,
    ):
        """
        Initialise le moteur.

        Arguments :
            options: Options TV et films, emplacements surveillés.
            result_store: Journal des résultats.
            smart_match_store: Corrections apprises.
            guard: Garde partagé ; celui du result_store est utilisé par défaut.
            collaborators: Analyse, fournisseur, nommage et fichiers.
        """
        self.options = options
        self.result_store = result_store
        self.smart_match_store = smart_match_store
        if guard is None:
            guard = result_store.guard if result_store.guard is not None else InProgressGuard()
        self.guard = guard
        result_store.guard = guard
        self.collaborators = collaborators or Collaborators()

        self.organizers: Dict[OrganizerType, Union[EpisodeOrganizer, MovieOrganizer]] = {
            OrganizerType.EPISODE: EpisodeOrganizer(smart_match_store, self.collaborators),
            OrganizerType.MOVIE: MovieOrganizer(smart_match_store, self.collaborators),
        }
        self._notifier = ThreadPoolExecutor(max_workers=1, thread_name_prefix="autoorganize-notify")

    def _organizer_for(self, organizer_type: OrganizerType):
        organizer = self.organizers.get(organizer_type)
        if organizer is None:
            raise ConfigurationError(f"No organizer exists for the type {organizer_type}")
        return organizer

    def process_new_files(
        self,
        cancel_event: Optional[threading.Event] = None,
        show_progress: bool = False,
    ) -> List[OrganizationResult]:
        """
        Organise tous les fichiers candidats des emplacements surveillés.

        Les fichiers déjà organisés (Success, SkippedExisting) sont ignorés.
        Une erreur sur un fichier n'interrompt jamais le scan. L'annulation
        est vérifiée entre deux fichiers, jamais pendant un déplacement.

        Arguments :
            cancel_event: Événement signalant l'annulation du scan.
            show_progress: Affiche une barre de progression.

        Retourne :
            Les résultats des fichiers traités.
        """
        results: List[OrganizationResult] = []
        sources = self.collaborators.enumerate_sources(self.options)

        with tqdm(sources, desc="Organisation des fichiers", unit="fichier",
                  disable=not show_progress) as pbar:
            for path in pbar:
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning("Scan annulé")
                    break

                pbar.set_postfix_str(f"{Path(path).name[:30]}...")
                existing = self.result_store.get_by_original_path(str(path))
                if existing is not None and existing.status.is_completed:
                    logger.debug(f"Déjà organisé, ignoré : {path}")
                    continue

                try:
                    results.append(self.process_one(path))
                except ContentionError:
                    logger.info(f"En cours de traitement ailleurs, ignoré : {path}")
                except Exception as e:
                    logger.error(f"Erreur lors du traitement de {path}: {e}")

        logger.info(f"Scan terminé : {len(results)} fichier(s) traité(s)")
        return results

    def process_one(
        self,
        path: Union[str, Path],
        organizer_type: Optional[OrganizerType] = None,
    ) -> OrganizationResult:
        """
        Organise un fichier : réserver, organiser, enregistrer, libérer.

        Arguments :
            path: Chemin source.
            organizer_type: Organisateur à utiliser, détecté depuis le nom
                de fichier si absent.

        Retourne :
            Le résultat, enregistré sauf en mode simulation.

        Lève :
            ContentionError: Si le chemin est déjà en cours de traitement.
        """
        path = str(path)
        if not self.guard.try_acquire(path):
            raise ContentionError(path)

        try:
            result = self._run_organizer(path, organizer_type)
            if self._is_dry_run(result):
                logger.info(f"SIMULATION - résultat non enregistré : {path}")
                return result
            self.result_store.save(result)
        finally:
            self.guard.release(path)

        if result.is_success():
            self._notify(result)
        return result

    def _is_dry_run(self, result: OrganizationResult) -> bool:
        """Indique si le résultat provient d'une simulation."""
        return self.options.options_for(result.type).dry_run

    def _run_organizer(
        self,
        path: str,
        organizer_type: Optional[OrganizerType],
        correction: Optional[CorrectionRequest] = None,
    ) -> OrganizationResult:
        """Exécute l'organisateur ; toute erreur inattendue devient un résultat Failure."""
        try:
            if organizer_type is None:
                organizer_type = detect_organizer_type(self.collaborators.parse_tokens(Path(path)))
            organizer = self._organizer_for(organizer_type)
            options = self.options.options_for(organizer_type)
            return organizer.organize(path, options, correction)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.exception(f"Erreur inattendue lors de l'organisation de {path}")
            return OrganizationResult(
                original_path=path,
                type=organizer_type or OrganizerType.MOVIE,
                status=FileSortingStatus.FAILURE,
                status_message=f"Unexpected error: {e}",
            )

    def submit_correction(self, request: CorrectionRequest) -> OrganizationResult:
        """
        Organise un fichier avec la cible choisie par l'utilisateur.

        En cas de succès, les jetons du nom de fichier sont appris pour la
        cible avant la libération du chemin.

        Arguments :
            request: Correction épisode ou film.

        Retourne :
            Le résultat enregistré (Success).

        Lève :
            ContentionError: Si le chemin est déjà en cours de traitement.
            OrganizationError: Si l'organisation n'aboutit pas.
        """
        path = str(request.source_path)
        self._organizer_for(request.organizer_type)
        if not self.guard.try_acquire(path):
            raise ContentionError(path)

        try:
            result = self._run_organizer(path, request.organizer_type, request)
            dry_run = self._is_dry_run(result)
            if dry_run:
                logger.info(f"SIMULATION - correction non enregistrée : {path}")
            else:
                self.result_store.save(result)
                if result.is_success() and request.remember_correction:
                    self._learn(request, result)
        finally:
            self.guard.release(path)

        if not result.is_success():
            raise OrganizationError(result.status_message)

        if not dry_run:
            self._notify(result)
        return result

    def _learn(self, request: CorrectionRequest, result: OrganizationResult) -> None:
        """Enregistre la correction dans les smart matches."""
        if not result.extracted_name:
            logger.debug(f"Aucun nom extrait de {result.original_file_name}, rien à apprendre")
            return

        target = request.to_target()
        self.smart_match_store.save(SmartMatch(
            id=target.id,
            organizer_type=request.organizer_type,
            display_name=target.name,
            year=target.year,
            match_strings={result.extracted_name},
        ))

    def perform_organization(self, result_id: str) -> OrganizationResult:
        """
        Relance l'organisation d'un résultat existant.

        Lève :
            ConfigurationError: Résultat inconnu ou sans chemin cible.
            ContentionError: Si le chemin est déjà en cours de traitement.
            OrganizationError: Si l'organisation n'aboutit pas.
        """
        result = self.result_store.get(result_id)
        if result is None:
            raise ConfigurationError(f"No result found for id {result_id}")
        if not result.target_path:
            raise ConfigurationError("No target path available.")

        organize_result = self.process_one(result.original_path, result.type)
        if not organize_result.is_success():
            raise OrganizationError(organize_result.status_message)
        return organize_result

    def delete_original(self, result_id: str) -> None:
        """
        Supprime le fichier source d'un résultat puis le résultat lui-même.

        Une erreur de suppression du fichier est journalisée sans être
        propagée ; celle de la suppression du résultat est propagée.
        """
        result = self.result_store.get(result_id)
        if result is None:
            raise ConfigurationError(f"No result found for id {result_id}")

        logger.info(f"Suppression demandée : {result.original_path}")
        if not self.guard.try_acquire(result):
            raise ContentionError(result.original_path)

        try:
            self.collaborators.file_ops.delete(Path(result.original_path))
        except OSError as e:
            logger.error(f"Erreur lors de la suppression de {result.original_path}: {e}")
        finally:
            self.guard.release(result)

        self.result_store.delete(result_id)

    def get_result(self, result_id: str) -> Optional[OrganizationResult]:
        return self.result_store.get(result_id)

    def get_result_by_path(self, path: str) -> Optional[OrganizationResult]:
        return self.result_store.get_by_original_path(path)

    def get_results(self, query: Optional[ResultQuery] = None) -> QueryResult[OrganizationResult]:
        return self.result_store.query(query)

    def clear_log(self) -> int:
        """Supprime tous les résultats."""
        return self.result_store.delete_all()

    def clear_completed(self) -> int:
        """Supprime les résultats Success et SkippedExisting."""
        return self.result_store.delete_completed()

    def get_smart_matches(self, query: Optional[SmartMatchQuery] = None) -> QueryResult[SmartMatch]:
        return self.smart_match_store.get_all(query)

    def delete_smart_match_entry(self, target_id: str, match_string: str) -> bool:
        return self.smart_match_store.delete_entry(target_id, match_string)

    def _notify(self, result: OrganizationResult) -> None:
        """Notifie la bibliothèque sans attendre."""
        try:
            self._notifier.submit(self._safe_notify, result.target_path)
        except RuntimeError as e:
            logger.warning(f"Notification impossible pour {result.target_path}: {e}")

    def _safe_notify(self, target_path: str) -> None:
        try:
            self.collaborators.notify_library_changed(target_path)
        except Exception as e:
            logger.error(f"Erreur lors de la notification de la bibliothèque : {e}")

    def close(self) -> None:
        """Attend la fin des notifications en cours."""
        self._notifier.shutdown(wait=True)

    def __enter__(self) -> "OrganizationEngine":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
