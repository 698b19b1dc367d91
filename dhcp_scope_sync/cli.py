"""Point d'entree en ligne de commande de dhcp-scope-sync.

Exemples::

    dhcp-scope-sync --declarations scopes.csv --dry-run
    dhcp-scope-sync --config sync.toml --format json

Codes de sortie : 0 si tous les scopes sont conformes, appliques
ou simules ; 2 si au moins un scope est invalide ou en erreur ;
1 si l'execution n'a pas pu demarrer.
"""

import argparse
import sys
from typing import List, Optional

from dhcp_scope_sync.config.settings import SyncSettings, load_settings
from dhcp_scope_sync.errors.base import ErrorHandlerChain
from dhcp_scope_sync.errors.console_handler import ConsoleErrorHandler
from dhcp_scope_sync.errors.exceptions import (ApplicationError,
                                               ConfigurationError,
                                               DeclarationSourceError)
from dhcp_scope_sync.errors.logger_handler import LoggerErrorHandler
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.logging.file_logger import FileLogger
from dhcp_scope_sync.scopes.dnsmasq import DnsmasqScopeGateway
from dhcp_scope_sync.scopes.duration import parse_duration
from dhcp_scope_sync.scopes.gateway import InMemoryScopeGateway, ScopeGateway
from dhcp_scope_sync.scopes.models import ScopeDeclaration
from dhcp_scope_sync.scopes.reconciler import Reconciler
from dhcp_scope_sync.scopes.reporter import RENDERERS
from dhcp_scope_sync.scopes.source import (declarations_from_records,
                                           load_declarations)
from dhcp_scope_sync.scopes.validator import ScopeValidator

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1
EXIT_SCOPE_FAILURES = 2


def build_parser() -> argparse.ArgumentParser:
    """Construit le parseur d'arguments."""
    parser = argparse.ArgumentParser(
        prog="dhcp-scope-sync",
        description="Reconcile declared DHCPv4 scopes with a DHCP server",
    )
    parser.add_argument(
        "--config", help="Settings file (.toml or .json)"
    )
    parser.add_argument(
        "--env-file", help=".env file with DHCP_SCOPE_SYNC_* variables"
    )
    parser.add_argument(
        "--declarations", help="Scope declarations (.csv, .json, .toml)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and plan without changing the server",
    )
    parser.add_argument(
        "--dnsmasq-conf", help="dnsmasq configuration file to manage"
    )
    parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="table",
        help="Report format (default: table)",
    )
    parser.add_argument("--log-file", help="Log file path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )
    return parser


def _merge_arguments(
    settings: SyncSettings, args: argparse.Namespace
) -> SyncSettings:
    """Applique les options de ligne de commande aux parametres."""
    logging_updates = {}
    if args.log_file:
        logging_updates["file"] = args.log_file
    if args.verbose:
        logging_updates["level"] = "DEBUG"
    gateway_updates = {}
    if args.dnsmasq_conf:
        gateway_updates = {"kind": "dnsmasq", "conf_path": args.dnsmasq_conf}
    updates = {
        "logging": settings.logging.model_copy(update=logging_updates),
        "gateway": settings.gateway.model_copy(update=gateway_updates),
    }
    if args.dry_run:
        updates["dry_run"] = True
    if args.declarations:
        updates["declarations"] = args.declarations
    return settings.model_copy(update=updates)


def build_logger(settings: SyncSettings) -> FileLogger:
    """Cree le logger decrit par les parametres."""
    return FileLogger(
        log_file=settings.logging.file,
        level=settings.logging.level,
        log_format=settings.logging.format,
        console_output=settings.logging.console,
    )


def build_gateway(
    settings: SyncSettings, logger: Optional[Logger] = None
) -> ScopeGateway:
    """Cree la gateway decrite par les parametres."""
    if settings.gateway.kind == "memory":
        return InMemoryScopeGateway(logger=logger)
    return DnsmasqScopeGateway(settings.gateway.conf_path, logger=logger)


def read_declarations(
    settings: SyncSettings, logger: Optional[Logger] = None
) -> List[ScopeDeclaration]:
    """Obtient la sequence de declarations.

    Raises:
        DeclarationSourceError: Si aucune source n'est definie ou
            si la source est illisible.
    """
    if settings.declarations:
        return load_declarations(settings.declarations, logger=logger)
    if settings.scopes:
        return declarations_from_records(settings.scopes)
    raise DeclarationSourceError(
        "Aucune source de declarations : utilisez --declarations "
        "ou la section scopes des parametres"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Execute une reconciliation complete.

    Args:
        argv: Arguments (defaut: sys.argv[1:]).

    Returns:
        Code de sortie.
    """
    args = build_parser().parse_args(argv)
    errors = ErrorHandlerChain().add_handler(ConsoleErrorHandler())

    try:
        settings = _merge_arguments(
            load_settings(args.config, args.env_file), args
        )
    except ConfigurationError as exc:
        errors.handle(exc)
        return EXIT_STARTUP_FAILURE

    logger = build_logger(settings)
    errors.add_handler(LoggerErrorHandler(logger))
    try:
        return _run(settings, args.format, logger, errors)
    finally:
        logger.close()


def _run(
    settings: SyncSettings,
    output_format: str,
    logger: FileLogger,
    errors: ErrorHandlerChain,
) -> int:
    try:
        declarations = read_declarations(settings, logger)
        gateway = build_gateway(settings, logger)
    except ApplicationError as exc:
        errors.handle(exc)
        return EXIT_STARTUP_FAILURE

    if settings.dry_run:
        logger.log_info("Mode simulation : aucune modification du serveur")

    validator = ScopeValidator(
        default_lease=parse_duration(settings.default_lease_duration),
        logger=logger,
    )
    report = Reconciler(gateway, logger=logger).run(
        declarations, dry_run=settings.dry_run, validator=validator
    )

    print(RENDERERS[output_format]().render(report).rstrip("\n"))
    if not report.has_failures:
        return EXIT_OK
    return EXIT_SCOPE_FAILURES


if __name__ == "__main__":
    sys.exit(main())
