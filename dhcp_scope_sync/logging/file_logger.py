"""Implementation concrete du logger (fichier et/ou console)."""

import logging
import os
from typing import Optional

from dhcp_scope_sync.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Nom porte par les handlers crees ici (les autres sont ignores)
HANDLER_NAME = "dhcp_scope_sync"


class FileLogger(Logger):
    """
    Logger qui ecrit dans un fichier, avec sortie console optionnelle.

    Caracteristiques:
    - Logger unique par destination (evite les conflits)
    - Encodage UTF-8 explicite
    - Flush immediat apres chaque log
    - Pas de propagation (evite les logs en double)
    - Sans fichier, seule la sortie console est active
    """

    def __init__(
        self,
        log_file: Optional[str] = None,
        level: str = "INFO",
        log_format: str = DEFAULT_FORMAT,
        console_output: bool = False
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log (None = console seule)
            level: Niveau de log (DEBUG, INFO, WARNING, ERROR)
            log_format: Format des lignes de log
            console_output: Activer la sortie console en plus du fichier
        """
        self.log_file = log_file

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

        log_level = getattr(logging, level.upper(), logging.INFO)

        self.logger = logging.getLogger(
            f"dhcp_scope_sync.{log_file or 'console'}"
        )
        self.logger.setLevel(log_level)
        self.handlers: list[logging.Handler] = []

        # Eviter les handlers dupliques
        owned = [
            h for h in self.logger.handlers if h.get_name() == HANDLER_NAME
        ]
        if not owned:
            formatter = logging.Formatter(log_format)
            if log_file:
                owned.append(
                    logging.FileHandler(log_file, encoding="utf-8")
                )
            if console_output or not log_file:
                owned.append(logging.StreamHandler())
            for handler in owned:
                handler.set_name(HANDLER_NAME)
                handler.setFormatter(formatter)
                self.logger.addHandler(handler)
        for handler in owned:
            handler.setLevel(log_level)
            self.handlers.append(handler)

        self.logger.propagate = False

    def _flush(self) -> None:
        """Force l'ecriture immediate."""
        for handler in self.handlers:
            handler.flush()

    def log_debug(self, message: str) -> None:
        """Log un message de diagnostic."""
        self.logger.debug(message)
        self._flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()

    def close(self) -> None:
        """Ferme et detache les handlers de ce logger."""
        for handler in self.handlers:
            handler.close()
            self.logger.removeHandler(handler)
        self.handlers = []
