"""Reconciliation des scopes valides avec le serveur DHCP.

Ce module fournit Reconciler, qui decide pour chaque scope valide
entre creation, mise a jour et absence de changement, puis applique
les options routeur et DNS. Le mode simulation (dry_run) est un
parametre explicite de chaque execution : aucun appel modifiant le
serveur n'est emis lorsqu'il est actif.
"""

from typing import Iterable, List, Optional

from dhcp_scope_sync.errors.exceptions import ServerError
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.scopes.duration import format_duration
from dhcp_scope_sync.scopes.gateway import ScopeGateway
from dhcp_scope_sync.scopes.models import (
    ScopeDeclaration,
    ScopeInfo,
    ScopeOutcome,
    ScopeStatus,
    ValidatedScope,
)
from dhcp_scope_sync.scopes.report import RunReport, RunReportBuilder
from dhcp_scope_sync.scopes.validator import ScopeValidator


def _describe_pool(scope: ValidatedScope) -> str:
    return (
        f"{scope.start_range}-{scope.end_range}/{scope.subnet_mask}, "
        f"lease {format_duration(scope.lease_duration)}"
    )


def _describe_options(scope: ValidatedScope) -> str:
    dns = ",".join(str(d) for d in scope.dns_servers)
    return f"router={scope.router} dns={dns}"


def _pool_drift(existing: ScopeInfo, scope: ValidatedScope) -> List[str]:
    """Liste les ecarts de pool non corrigeables par la gateway."""
    warnings = []
    if (existing.start_range, existing.end_range) != (
        scope.start_range, scope.end_range
    ):
        warnings.append(
            f"existing pool {existing.start_range}-{existing.end_range} "
            f"differs from declared {scope.start_range}-"
            f"{scope.end_range}; pool left unchanged"
        )
    if existing.subnet_mask != scope.subnet_mask:
        warnings.append(
            f"existing mask {existing.subnet_mask} differs from "
            f"declared {scope.subnet_mask}; mask left unchanged"
        )
    return warnings


class Reconciler:
    """Applique l'etat desire des scopes sur un serveur DHCP.

    Attributes:
        _gateway: Acces a l'etat du serveur.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        gateway: ScopeGateway,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le reconciliateur.

        Args:
            gateway: Gateway vers le serveur DHCP.
            logger: Logger optionnel.
        """
        self._gateway = gateway
        self._logger = logger

    def apply(
        self, scope: ValidatedScope, dry_run: bool
    ) -> ScopeOutcome:
        """Reconcilie un scope valide avec le serveur.

        Args:
            scope: Scope valide.
            dry_run: Si True, aucun appel modifiant le serveur.

        Returns:
            Resultat du traitement du scope.
        """
        scope_id = str(scope.scope_id)
        warnings: List[str] = []

        try:
            existing = self._gateway.get_scope(scope.scope_id)
        except ServerError as exc:
            if not dry_run:
                return self._error(scope, str(exc))
            warnings.append(f"could not query server: {exc}")
            existing = None
        self._log_debug(
            f"Scope {scope_id} : "
            + ("absent du serveur" if existing is None else repr(existing))
        )

        if dry_run:
            if existing is not None and existing.matches(scope):
                details = (
                    f"scope {scope_id} already matches declaration; "
                    f"no change"
                )
            else:
                if existing is None:
                    action = (
                        f"would create scope {scope_id} "
                        f"({_describe_pool(scope)})"
                    )
                else:
                    warnings.extend(_pool_drift(existing, scope))
                    action = (
                        f"would update lease of scope {scope_id} to "
                        f"{format_duration(scope.lease_duration)}"
                    )
                details = (
                    f"{action}; would set options "
                    f"{_describe_options(scope)}"
                )
            self._log_info(f"[DRY RUN] {scope.name} : {details}")
            return ScopeOutcome(
                name=scope.name,
                scope_id=scope_id,
                status=ScopeStatus.DRY_RUN,
                details=details,
                warnings=tuple(warnings),
            )

        if existing is not None and existing.matches(scope):
            self._log_info(f"Scope {scope_id} ({scope.name}) deja conforme")
            return ScopeOutcome(
                name=scope.name,
                scope_id=scope_id,
                status=ScopeStatus.NO_OP_EXISTS,
                details=f"scope {scope_id} already matches declaration",
            )

        changes: List[str] = []
        if existing is None:
            try:
                self._gateway.create_scope(scope)
            except ServerError as exc:
                return self._error(scope, str(exc))
            changes.append(
                f"created scope {scope_id} ({_describe_pool(scope)})"
            )
        else:
            warnings.extend(_pool_drift(existing, scope))
            try:
                self._gateway.update_lease(
                    scope.scope_id, scope.lease_duration
                )
                changes.append(
                    f"lease set to {format_duration(scope.lease_duration)}"
                )
            except ServerError as exc:
                warnings.append(f"lease update failed: {exc}")
                self._log_warning(
                    f"Echec de mise a jour du bail de {scope_id} : {exc}"
                )

        try:
            self._gateway.set_options(
                scope.scope_id, scope.router, scope.dns_servers
            )
        except ServerError as exc:
            return self._error(scope, str(exc), warnings)
        changes.append(f"options set {_describe_options(scope)}")

        details = "; ".join(changes)
        self._log_info(f"Scope {scope_id} ({scope.name}) applique : {details}")
        return ScopeOutcome(
            name=scope.name,
            scope_id=scope_id,
            status=ScopeStatus.APPLIED,
            details=details,
            warnings=tuple(warnings),
        )

    def run(
        self,
        declarations: Iterable[ScopeDeclaration],
        dry_run: bool,
        validator: Optional[ScopeValidator] = None,
    ) -> RunReport:
        """Traite sequentiellement un lot de declarations.

        L'echec d'un scope n'interrompt jamais le traitement des
        suivants : il est consigne dans son propre resultat.

        Args:
            declarations: Declarations, dans l'ordre d'entree.
            dry_run: Mode simulation pour toute l'execution.
            validator: Validateur (defaut: ScopeValidator()).

        Returns:
            Rapport d'execution, un resultat par declaration.
        """
        validator = validator or ScopeValidator(logger=self._logger)
        builder = RunReportBuilder()
        for decl in declarations:
            name = "" if decl.name is None else str(decl.name).strip()
            result = None
            try:
                result = validator.validate(decl)
                if not result.is_valid:
                    scope_id = result.scope_id
                    builder.add(ScopeOutcome(
                        name=name,
                        scope_id="" if scope_id is None else str(scope_id),
                        status=ScopeStatus.INVALID,
                        details="; ".join(str(e) for e in result.errors),
                    ))
                    continue
                builder.add(self.apply(result.scope, dry_run))
            except Exception as exc:
                self._log_error(
                    f"Erreur inattendue sur le scope {name!r} : "
                    f"{type(exc).__name__}: {exc}"
                )
                scope_id = None if result is None else result.scope_id
                builder.add(ScopeOutcome(
                    name=name,
                    scope_id="" if scope_id is None else str(scope_id),
                    status=ScopeStatus.ERROR,
                    details=f"{type(exc).__name__}: {exc}",
                ))
        report = builder.build()
        self._log_info(f"Execution terminee : {report.summary()}")
        return report

    def _error(
        self,
        scope: ValidatedScope,
        message: str,
        warnings: Iterable[str] = (),
    ) -> ScopeOutcome:
        self._log_error(f"Scope {scope.scope_id} ({scope.name}) : {message}")
        return ScopeOutcome(
            name=scope.name,
            scope_id=str(scope.scope_id),
            status=ScopeStatus.ERROR,
            details=message,
            warnings=tuple(warnings),
        )

    def _log_debug(self, message: str) -> None:
        if self._logger:
            self._logger.log_debug(message)

    def _log_info(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _log_warning(self, message: str) -> None:
        if self._logger:
            self._logger.log_warning(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_error(message)
