"""
    LoggerErrorHandler
"""
from dhcp_scope_sync.errors.base import ErrorHandler
from dhcp_scope_sync.errors.exceptions import ApplicationError
from dhcp_scope_sync.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler pour logger les erreurs.

    Enregistre les erreurs via le Logger injecte au constructeur.
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le handler avec un logger.

        Args:
            logger: Instance de Logger pour l'enregistrement des erreurs.
        """
        self.logger = logger

    def handle(self, error: Exception) -> None:
        """Log l'erreur, en distinguant erreurs connues et inattendues.

        Args:
            error: L'exception a logger.
        """
        if isinstance(error, ApplicationError):
            self.logger.log_error(f"{type(error).__name__}: {error}")
        else:
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {error}"
            )
