"""
DHCP Scope Sync - Reconciliation declarative de scopes DHCPv4.

Modules disponibles:
- logging: Gestion des logs (Logger, FileLogger)
- errors: Exceptions metier et handlers d'erreurs
- network: Arithmetique IPv4 (parse, network_address, ...)
- config: Chargement des parametres (TOML, JSON, .env)
- scopes: Validation, reconciliation et rapport d'execution
  (ScopeValidator, Reconciler, RunReport, gateways)
"""

__version__ = "1.0.0"

from dhcp_scope_sync.logging import Logger, FileLogger
from dhcp_scope_sync.errors import (
    ApplicationError,
    ConfigurationError,
    DeclarationSourceError,
    FormatError,
    ServerError,
    ErrorHandler,
    ErrorHandlerChain,
    ConsoleErrorHandler,
    LoggerErrorHandler,
)
from dhcp_scope_sync.network import (
    IPv4Address,
    compare,
    network_address,
    parse,
    to_uint32,
)
from dhcp_scope_sync.config import (
    ConfigLoader,
    FileConfigLoader,
    SyncSettings,
    load_settings,
)
from dhcp_scope_sync.scopes import (
    # Modeles
    ScopeDeclaration,
    ValidatedScope,
    ScopeInfo,
    ScopeOutcome,
    ScopeStatus,
    ValidationError,
    # Validation
    ScopeValidator,
    ValidationResult,
    # Gateways
    ScopeGateway,
    InMemoryScopeGateway,
    DnsmasqScopeGateway,
    # Reconciliation et rapports
    Reconciler,
    RunReport,
    ConsoleTableRenderer,
    JsonRenderer,
    CsvRenderer,
    # Sources
    load_declarations,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    # Errors
    "ApplicationError",
    "ConfigurationError",
    "DeclarationSourceError",
    "FormatError",
    "ServerError",
    "ErrorHandler",
    "ErrorHandlerChain",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    # Network
    "IPv4Address",
    "compare",
    "network_address",
    "parse",
    "to_uint32",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "SyncSettings",
    "load_settings",
    # Scopes - Modeles
    "ScopeDeclaration",
    "ValidatedScope",
    "ScopeInfo",
    "ScopeOutcome",
    "ScopeStatus",
    "ValidationError",
    # Scopes - Validation
    "ScopeValidator",
    "ValidationResult",
    # Scopes - Gateways
    "ScopeGateway",
    "InMemoryScopeGateway",
    "DnsmasqScopeGateway",
    # Scopes - Reconciliation et rapports
    "Reconciler",
    "RunReport",
    "ConsoleTableRenderer",
    "JsonRenderer",
    "CsvRenderer",
    # Scopes - Sources
    "load_declarations",
]
