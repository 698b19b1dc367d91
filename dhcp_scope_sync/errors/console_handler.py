"""
    ConsoleErrorHandler (affichage des erreurs fatales)
"""
import sys
from typing import TextIO

from dhcp_scope_sync.errors.base import ErrorHandler
from dhcp_scope_sync.errors.exceptions import (ApplicationError,
                                               ConfigurationError,
                                               DeclarationSourceError,
                                               ServerError)

DEFAULT_SOLUTIONS: dict[type[Exception], str] = {
    ConfigurationError: "Verifiez votre fichier de configuration "
                        "et les variables DHCP_SCOPE_SYNC_*.",
    DeclarationSourceError: "Verifiez le chemin et le format du "
                            "fichier de declarations (CSV, JSON, TOML).",
    ServerError: "Verifiez l'acces au serveur DHCP et consultez les logs.",
}


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs sur la sortie d'erreur.

    Distingue les erreurs connues (ApplicationError) des erreurs
    inattendues, et affiche une solution adaptee au type d'erreur.
    """

    def __init__(
        self,
        solutions: dict[type[Exception], str] | None = None,
        stream: TextIO | None = None
    ) -> None:
        """Initialise le handler console.

        Args:
            solutions: Dictionnaire {TypeException: "message solution"}.
                       Par defaut DEFAULT_SOLUTIONS.
            stream: Flux de sortie (defaut: sys.stderr).
        """
        self.solutions = (
            DEFAULT_SOLUTIONS if solutions is None else solutions
        )
        self.stream = stream

    def handle(self, error: Exception) -> None:
        """Affiche l'erreur avec un message utilisateur.

        Args:
            error: L'exception a afficher.
        """
        if isinstance(error, ApplicationError):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def _write(self, message: str) -> None:
        print(message, file=self.stream or sys.stderr)

    def _handle_known_error(self, error: ApplicationError) -> None:
        """Affiche le type, le message et la solution associee."""
        self._write(f"\n🛑 {type(error).__name__}: {error}")
        for error_type, solution in self.solutions.items():
            if isinstance(error, error_type):
                self._write(f"\n🔧 Solution : {solution}")
                return
        self._write(
            "\n🔧 Solution : Consultez les logs pour plus de details."
        )

    def _handle_unknown_error(self, error: Exception) -> None:
        """Affiche une erreur inattendue."""
        self._write(f"\n💥 Erreur inattendue: {error}")
        self._write(f"Type: {type(error).__name__}")
        self._write(
            "\n📋 Cela peut etre un bug. Veuillez ouvrir une issue "
            "avec ces informations."
        )
