"""Module de gestion des erreurs."""

from dhcp_scope_sync.errors.base import ErrorHandler, ErrorHandlerChain
from dhcp_scope_sync.errors.exceptions import (ApplicationError,
                                               ConfigurationError,
                                               DeclarationSourceError,
                                               FormatError,
                                               ServerError)
from dhcp_scope_sync.errors.console_handler import ConsoleErrorHandler
from dhcp_scope_sync.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DeclarationSourceError",
    "FormatError",
    "ServerError",
    "ErrorHandler",
    "ErrorHandlerChain",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
]
