"""Module de reconciliation des scopes DHCP.

Ce module fournit la validation des declarations de scopes, la
reconciliation avec un serveur DHCP via une gateway et le rapport
d'execution.
"""

from dhcp_scope_sync.scopes.dnsmasq import DnsmasqScopeGateway
from dhcp_scope_sync.scopes.duration import (
    DEFAULT_LEASE_DURATION,
    format_duration,
    parse_duration,
)
from dhcp_scope_sync.scopes.gateway import (
    InMemoryScopeGateway,
    ScopeGateway,
)
from dhcp_scope_sync.scopes.models import (
    ScopeDeclaration,
    ScopeInfo,
    ScopeOutcome,
    ScopeStatus,
    ValidatedScope,
    ValidationError,
)
from dhcp_scope_sync.scopes.reconciler import Reconciler
from dhcp_scope_sync.scopes.report import RunReport, RunReportBuilder
from dhcp_scope_sync.scopes.reporter import (
    ConsoleTableRenderer,
    CsvRenderer,
    JsonRenderer,
    ReportRenderer,
)
from dhcp_scope_sync.scopes.source import (
    declarations_from_records,
    load_declarations,
)
from dhcp_scope_sync.scopes.validator import (
    ScopeValidator,
    ValidationResult,
)

__all__ = [
    # Modeles
    "ScopeDeclaration",
    "ValidatedScope",
    "ScopeInfo",
    "ScopeOutcome",
    "ScopeStatus",
    "ValidationError",
    # Durees
    "DEFAULT_LEASE_DURATION",
    "parse_duration",
    "format_duration",
    # Validation
    "ScopeValidator",
    "ValidationResult",
    # Gateways
    "ScopeGateway",
    "InMemoryScopeGateway",
    "DnsmasqScopeGateway",
    # Reconciliation
    "Reconciler",
    # Rapports
    "RunReport",
    "RunReportBuilder",
    "ReportRenderer",
    "ConsoleTableRenderer",
    "JsonRenderer",
    "CsvRenderer",
    # Sources
    "load_declarations",
    "declarations_from_records",
]
