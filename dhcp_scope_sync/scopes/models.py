"""Modeles de donnees des scopes DHCP.

Ce module definit les dataclasses immuables qui circulent entre
le validateur, le reconciliateur et le rapport d'execution :
ScopeDeclaration (entree), ValidatedScope (scope normalise),
ScopeInfo (vue serveur), ValidationError et ScopeOutcome.
"""

import unicodedata
from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from dhcp_scope_sync.network.ipv4 import (
    IPv4Address,
    network_address,
)

# Cles des enregistrements externes -> champs de ScopeDeclaration
RECORD_FIELDS = {
    "Name": "name",
    "StartRange": "start_range",
    "EndRange": "end_range",
    "SubnetMask": "subnet_mask",
    "Router": "router",
    "DnsServer": "dns_servers",
    "LeaseDuration": "lease_duration",
}

# Caracteres de controle et separateurs de ligne/paragraphe Unicode
_CONTROL_CATEGORIES = ("Cc", "Cf", "Zl", "Zp")


def has_control_characters(text: str) -> bool:
    """Indique si le texte contient un saut de ligne ou un controle."""
    return any(
        unicodedata.category(char) in _CONTROL_CATEGORIES for char in text
    )


@dataclass(frozen=True)
class ScopeDeclaration:
    """Declaration d'un scope telle que fournie par la source.

    Les valeurs sont brutes : leur presence et leur validite sont
    verifiees par le ScopeValidator.

    Attributes:
        name: Nom lisible du scope.
        start_range: Premiere adresse du pool.
        end_range: Derniere adresse du pool.
        subnet_mask: Masque de sous-reseau.
        router: Passerelle annoncee (option 3).
        dns_servers: Serveurs DNS, chaine separee par des
            points-virgules ou sequence de chaines.
        lease_duration: Duree de bail (None = valeur par defaut).
    """

    name: Optional[str] = None
    start_range: Optional[str] = None
    end_range: Optional[str] = None
    subnet_mask: Optional[str] = None
    router: Optional[str] = None
    dns_servers: Union[str, Sequence[str], None] = None
    lease_duration: Union[str, timedelta, None] = None

    @classmethod
    def from_record(
        cls, record: Mapping[str, Any]
    ) -> "ScopeDeclaration":
        """Construit une declaration depuis un enregistrement.

        Accepte les cles externes (``Name``, ``DnsServer``...) et
        les noms de champs Python. Les cles inconnues sont ignorees.

        Args:
            record: Enregistrement CSV, JSON ou TOML.

        Returns:
            Instance de ScopeDeclaration.
        """
        values = {}
        for key, raw in record.items():
            if key is None:
                continue
            name = RECORD_FIELDS.get(key.strip(), key.strip())
            if name in RECORD_FIELDS.values():
                if isinstance(raw, list):
                    raw = tuple(raw)
                values[name] = raw
        return cls(**values)


@dataclass(frozen=True)
class ValidationError:
    """Violation detectee lors de la validation d'une declaration.

    Attributes:
        field: Champ concerne (nom externe, ex: "Router").
        message: Description lisible du probleme.
    """

    field: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidatedScope:
    """Scope normalise, seul type accepte par le Reconciler.

    Construit par le ScopeValidator une fois tous les controles
    passes ; les invariants principaux sont reverifies ici.

    Attributes:
        name: Nom du scope.
        start_range: Premiere adresse du pool.
        end_range: Derniere adresse du pool.
        subnet_mask: Masque de sous-reseau.
        router: Passerelle.
        dns_servers: Serveurs DNS ordonnes, au moins un.
        lease_duration: Duree de bail.
        scope_id: Adresse reseau du pool.
    """

    name: str
    start_range: IPv4Address
    end_range: IPv4Address
    subnet_mask: IPv4Address
    router: IPv4Address
    dns_servers: Tuple[IPv4Address, ...]
    lease_duration: timedelta
    scope_id: IPv4Address

    def __post_init__(self) -> None:
        """Verifie les invariants du scope normalise.

        Raises:
            ValueError: Si un invariant est viole.
        """
        if not self.name:
            raise ValueError("Scope sans nom")
        if not self.dns_servers:
            raise ValueError("Scope sans serveur DNS")
        if self.lease_duration.microseconds:
            raise ValueError(
                f"Bail non entier en secondes : {self.lease_duration}"
            )
        if self.start_range > self.end_range:
            raise ValueError(
                f"Plage inversee : {self.start_range} > "
                f"{self.end_range}"
            )
        expected = network_address(self.start_range, self.subnet_mask)
        if self.scope_id != expected:
            raise ValueError(
                f"Scope id {self.scope_id} different du reseau "
                f"{expected}"
            )
        for addr in (self.end_range, self.router):
            if network_address(addr, self.subnet_mask) != expected:
                raise ValueError(
                    f"{addr} hors du sous-reseau {expected}"
                )


@dataclass(frozen=True)
class ScopeInfo:
    """Etat d'un scope tel que rapporte par le serveur DHCP.

    Attributes:
        scope_id: Adresse reseau du scope.
        name: Nom du scope sur le serveur.
        start_range: Premiere adresse du pool.
        end_range: Derniere adresse du pool.
        subnet_mask: Masque de sous-reseau.
        lease_duration: Duree de bail.
        router: Passerelle configuree, si definie.
        dns_servers: Serveurs DNS configures.
    """

    scope_id: IPv4Address
    name: str
    start_range: IPv4Address
    end_range: IPv4Address
    subnet_mask: IPv4Address
    lease_duration: timedelta
    router: Optional[IPv4Address] = None
    dns_servers: Tuple[IPv4Address, ...] = ()

    def matches(self, scope: ValidatedScope) -> bool:
        """Indique si l'etat serveur correspond exactement au scope."""
        return (
            self.scope_id == scope.scope_id
            and self.start_range == scope.start_range
            and self.end_range == scope.end_range
            and self.subnet_mask == scope.subnet_mask
            and self.router == scope.router
            and tuple(self.dns_servers) == tuple(scope.dns_servers)
            and self.lease_duration == scope.lease_duration
        )


class ScopeStatus(StrEnum):
    """Issue du traitement d'une declaration."""

    INVALID = "Invalid"
    DRY_RUN = "DryRun"
    APPLIED = "Applied"
    NO_OP_EXISTS = "NoOpExists"
    ERROR = "Error"


@dataclass(frozen=True)
class ScopeOutcome:
    """Resultat du traitement d'une declaration.

    Attributes:
        name: Nom du scope (tel que declare).
        scope_id: Identifiant calcule, vide si non derivable.
        status: Issue du traitement.
        details: Erreurs de validation, resume des changements
            ou message d'erreur.
        warnings: Avertissements non bloquants.
    """

    name: str
    scope_id: str
    status: ScopeStatus
    details: str = ""
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Serialise le resultat en dictionnaire."""
        return {
            "name": self.name,
            "scope_id": self.scope_id,
            "status": str(self.status),
            "details": self.details,
            "warnings": list(self.warnings),
        }
