"""Interface de journalisation injectee dans les composants.

Le validateur, les gateways et le reconciliateur recoivent un
``Optional[Logger]`` et ne journalisent que s'il est fourni.
"""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Contrat minimal de journalisation d'une execution."""

    @abstractmethod
    def log_debug(self, message: str) -> None:
        """Trace de diagnostic (etat lu sur le serveur, decisions)."""
        pass

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Evenement normal (scope cree, applique, resume)."""
        pass

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Anomalie non bloquante (declaration invalide, bail)."""
        pass

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Echec d'un scope ou erreur fatale."""
        pass
