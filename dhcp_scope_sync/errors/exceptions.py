"""
Exceptions metier de dhcp_scope_sync.

Toutes les exceptions du projet heritent de ApplicationError pour
s'integrer dans la chaine d'error handlers (ConsoleErrorHandler,
LoggerErrorHandler).
"""


class ApplicationError(Exception):
    """Exception de base pour toute l'application."""
    pass


class ConfigurationError(ApplicationError):
    """Configuration invalide (fichier de settings ou environnement)."""
    pass


class DeclarationSourceError(ApplicationError):
    """Impossible d'obtenir la sequence de declarations de scopes.

    Seule condition fatale d'une execution : aucun rapport n'est
    produit.
    """
    pass


class FormatError(ApplicationError, ValueError):
    """Valeur mal formee (adresse IPv4, duree de bail)."""
    pass


class ServerError(ApplicationError):
    """Echec d'un appel au serveur DHCP via la gateway.

    Attributes:
        operation: Nom de l'operation en echec (ex: "createScope").
        message: Message d'erreur brut.
    """

    def __init__(self, operation: str, message: str) -> None:
        """Initialise l'erreur serveur.

        Args:
            operation: Operation de la gateway en echec.
            message: Description de l'erreur.
        """
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message
