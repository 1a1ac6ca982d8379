"""Garde de concurrence par chemin source."""

import threading
from pathlib import Path
from typing import Set, Union

from loguru import logger

from autoorganize.models.result import OrganizationResult
from autoorganize.utils.hash import result_id_for_path

PathOrResult = Union[str, Path, OrganizationResult]


class InProgressGuard:
    """
    Exclusion mutuelle non bloquante, indexée par identité de résultat.

    Les clés sont les identités des OrganizationResult (MD5 du chemin
    source) : l'état du garde et celui du ResultStore partagent donc le
    même espace de clés. Un seul détenteur par chemin ; les concurrents
    échouent immédiatement au lieu d'attendre.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._held: Set[str] = set()

    @staticmethod
    def key_for(item: PathOrResult) -> str:
        """
        Retourne la clé du garde pour un chemin ou un résultat.

        Arguments :
            item: Chemin source ou OrganizationResult.

        Retourne :
            Identité du résultat correspondant.
        """
        if isinstance(item, OrganizationResult):
            if not item.id:
                item.id = result_id_for_path(item.original_path)
            return item.id
        return result_id_for_path(item)

    def try_acquire(self, item: PathOrResult) -> bool:
        """
        Tente de réserver le chemin.

        Retourne :
            True si la réservation est obtenue, False si une autre opération
            détient déjà ce chemin.
        """
        key = self.key_for(item)
        with self._lock:
            if key in self._held:
                logger.debug(f"Chemin déjà en cours de traitement : {key}")
                return False
            self._held.add(key)

        if isinstance(item, OrganizationResult):
            item.is_in_progress = True
        return True

    def release(self, item: PathOrResult) -> bool:
        """
        Libère le chemin. Libérer un chemin non réservé retourne False.
        """
        key = self.key_for(item)
        with self._lock:
            try:
                self._held.remove(key)
                released = True
            except KeyError:
                released = False

        if isinstance(item, OrganizationResult):
            item.is_in_progress = False
        return released

    def is_in_progress(self, key: str) -> bool:
        """Indique si l'identité ``key`` est actuellement réservée."""
        with self._lock:
            return key in self._held

    def __contains__(self, item: PathOrResult) -> bool:
        return self.is_in_progress(self.key_for(item))

    def __len__(self) -> int:
        with self._lock:
            return len(self._held)
