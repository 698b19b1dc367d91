"""Interfaces abstraites pour la gestion des erreurs."""

import sys
from abc import ABC, abstractmethod


class ErrorHandler(ABC):
    """Interface de base pour les handlers d'erreurs.

    Chaque implementation concrete definit une strategie de
    traitement (affichage console, logging, etc.).
    """

    @abstractmethod
    def handle(self, error: Exception) -> None:
        """Traite une erreur.

        Args:
            error: L'exception a traiter.
        """
        pass


class ErrorHandlerChain:
    """Diffuse les erreurs a tous les handlers enregistres.

    Chaque erreur est transmise a tous les handlers dans l'ordre
    d'ajout (ex: console puis logger).
    """

    def __init__(self) -> None:
        self.handlers: list[ErrorHandler] = []

    def add_handler(self, handler: ErrorHandler) -> "ErrorHandlerChain":
        """Ajoute un handler a la chaine.

        Args:
            handler: Le handler d'erreurs a ajouter.

        Returns:
            La chaine elle-meme, pour chainer les appels.
        """
        self.handlers.append(handler)
        return self

    def handle(self, error: Exception) -> None:
        """Fait passer l'erreur a travers tous les handlers."""
        for handler in self.handlers:
            handler.handle(error)

    def handle_and_exit(self, error: Exception, exit_code: int = 1) -> None:
        """Gere l'erreur puis termine le programme.

        Args:
            error: L'exception a traiter avant la sortie.
            exit_code: Code de sortie du programme (defaut: 1).
        """
        self.handle(error)
        sys.exit(exit_code)
