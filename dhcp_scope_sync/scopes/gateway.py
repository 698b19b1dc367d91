"""Acces a l'etat d'un serveur DHCP.

Ce module definit l'interface abstraite ScopeGateway consultee
par le Reconciler, ainsi que InMemoryScopeGateway, implementation
en memoire utilisee pour les tests et les simulations.
"""

import dataclasses
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from dhcp_scope_sync.errors.exceptions import ServerError
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.network.ipv4 import IPv4Address
from dhcp_scope_sync.scopes.models import ScopeInfo, ValidatedScope

# Codes d'options DHCP geres par set_options
OPTION_ROUTER = 3
OPTION_DNS_SERVERS = 6


class ScopeGateway(ABC):
    """Interface de lecture/ecriture des scopes d'un serveur DHCP.

    Les implementations levent ServerError pour tout echec
    d'acces au serveur (y compris les depassements de delai).
    """

    @abstractmethod
    def get_scope(
        self, scope_id: IPv4Address
    ) -> Optional[ScopeInfo]:
        """Recherche un scope par identifiant.

        Args:
            scope_id: Adresse reseau du scope.

        Returns:
            L'etat du scope ou None s'il n'existe pas.
        """
        pass

    @abstractmethod
    def create_scope(self, scope: ValidatedScope) -> None:
        """Cree le scope (pool, masque, bail).

        Une creation en double ne doit pas etre fatale.

        Args:
            scope: Scope valide a creer.
        """
        pass

    @abstractmethod
    def update_lease(
        self, scope_id: IPv4Address, duration: timedelta
    ) -> None:
        """Met a jour la duree de bail d'un scope existant.

        Args:
            scope_id: Adresse reseau du scope.
            duration: Nouvelle duree de bail.
        """
        pass

    @abstractmethod
    def set_options(
        self,
        scope_id: IPv4Address,
        router: IPv4Address,
        dns_servers: Sequence[IPv4Address],
    ) -> None:
        """Ecrase les options routeur et DNS du scope.

        Les autres options du scope ne sont pas modifiees.

        Args:
            scope_id: Adresse reseau du scope.
            router: Passerelle (option 3).
            dns_servers: Serveurs DNS (option 6).
        """
        pass


class InMemoryScopeGateway(ScopeGateway):
    """Serveur DHCP simule en memoire.

    Les options sont stockees par code, ce qui permet de verifier
    que set_options ne touche pas aux options non gerees.

    Attributes:
        mutations: Journal des appels modifiant l'etat, sous la
            forme (operation, scope_id).
    """

    def __init__(
        self,
        scopes: Optional[Sequence[ScopeInfo]] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le serveur simule.

        Args:
            scopes: Scopes preexistants.
            logger: Logger optionnel.
        """
        self._scopes: Dict[IPv4Address, ScopeInfo] = {}
        self._options: Dict[IPv4Address, Dict[int, Tuple[str, ...]]] = {}
        self._logger = logger
        self.mutations: List[Tuple[str, str]] = []
        for info in scopes or ():
            self._scopes[info.scope_id] = info
            self._options[info.scope_id] = {}
            if info.router is not None:
                self._options[info.scope_id][OPTION_ROUTER] = (
                    str(info.router),
                )
            if info.dns_servers:
                self._options[info.scope_id][OPTION_DNS_SERVERS] = tuple(
                    str(d) for d in info.dns_servers
                )

    def get_scope(
        self, scope_id: IPv4Address
    ) -> Optional[ScopeInfo]:
        """Retourne l'etat courant du scope ou None."""
        return self._scopes.get(scope_id)

    def create_scope(self, scope: ValidatedScope) -> None:
        """Ajoute le scope, sans effet s'il existe deja."""
        self.mutations.append(("createScope", str(scope.scope_id)))
        if scope.scope_id in self._scopes:
            if self._logger:
                self._logger.log_warning(
                    f"Scope {scope.scope_id} deja present, "
                    f"creation ignoree"
                )
            return
        self._scopes[scope.scope_id] = ScopeInfo(
            scope_id=scope.scope_id,
            name=scope.name,
            start_range=scope.start_range,
            end_range=scope.end_range,
            subnet_mask=scope.subnet_mask,
            lease_duration=scope.lease_duration,
        )
        self._options[scope.scope_id] = {}

    def update_lease(
        self, scope_id: IPv4Address, duration: timedelta
    ) -> None:
        """Remplace la duree de bail du scope."""
        self.mutations.append(("updateLease", str(scope_id)))
        info = self._require(scope_id, "updateLease")
        self._scopes[scope_id] = dataclasses.replace(
            info, lease_duration=duration
        )

    def set_options(
        self,
        scope_id: IPv4Address,
        router: IPv4Address,
        dns_servers: Sequence[IPv4Address],
    ) -> None:
        """Fusionne les options routeur et DNS du scope."""
        self.mutations.append(("setOptions", str(scope_id)))
        info = self._require(scope_id, "setOptions")
        options = self._options.setdefault(scope_id, {})
        options[OPTION_ROUTER] = (str(router),)
        options[OPTION_DNS_SERVERS] = tuple(str(d) for d in dns_servers)
        self._scopes[scope_id] = dataclasses.replace(
            info, router=router, dns_servers=tuple(dns_servers)
        )

    def set_option(
        self, scope_id: IPv4Address, code: int, values: Sequence[str]
    ) -> None:
        """Definit une option arbitraire (hors reconciliation)."""
        self._require(scope_id, "setOption")
        self._options.setdefault(scope_id, {})[code] = tuple(values)

    def get_options(
        self, scope_id: IPv4Address
    ) -> Dict[int, Tuple[str, ...]]:
        """Retourne une copie des options du scope."""
        return dict(self._options.get(scope_id, {}))

    def _require(
        self, scope_id: IPv4Address, operation: str
    ) -> ScopeInfo:
        info = self._scopes.get(scope_id)
        if info is None:
            raise ServerError(
                operation, f"scope {scope_id} introuvable"
            )
        return info
