"""Validation des declarations de scopes DHCP.

Ce module fournit ScopeValidator, qui verifie une declaration et
produit soit un ValidatedScope normalise, soit la liste complete
des violations. Tous les controles sont evalues independamment :
une declaration comportant plusieurs defauts les rapporte tous.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Union

from dhcp_scope_sync.errors.exceptions import FormatError
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.network.ipv4 import (
    IPv4Address,
    is_contiguous_mask,
    network_address,
    parse,
)
from dhcp_scope_sync.scopes.duration import (
    DEFAULT_LEASE_DURATION,
    parse_duration,
)
from dhcp_scope_sync.scopes.models import (
    ScopeDeclaration,
    ValidatedScope,
    ValidationError,
    has_control_characters,
)

# Champs IPv4 : nom externe -> attribut de ScopeDeclaration
_ADDRESS_FIELDS = (
    ("StartRange", "start_range"),
    ("EndRange", "end_range"),
    ("SubnetMask", "subnet_mask"),
    ("Router", "router"),
)


@dataclass(frozen=True)
class ValidationResult:
    """Resultat de la validation d'une declaration.

    Exactement l'un des deux champs est renseigne : ``scope`` en
    cas de succes, ``errors`` sinon.

    Attributes:
        declaration: Declaration d'origine.
        scope: Scope normalise si la validation reussit.
        errors: Violations detectees.
    """

    declaration: ScopeDeclaration
    scope: Optional[ValidatedScope] = None
    errors: Tuple[ValidationError, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        """True si la declaration a produit un scope."""
        return self.scope is not None

    @property
    def scope_id(self) -> Optional[IPv4Address]:
        """Identifiant du scope, calculable meme si invalide.

        Disponible des que StartRange et SubnetMask sont valides.
        """
        if self.scope is not None:
            return self.scope.scope_id
        try:
            return network_address(
                parse(self.declaration.start_range),
                parse(self.declaration.subnet_mask),
            )
        except FormatError:
            return None


def normalize_dns_servers(
    value: Union[str, Sequence[str], None]
) -> List[str]:
    """Normalise la liste de serveurs DNS.

    Args:
        value: Chaine separee par des points-virgules ou sequence.

    Returns:
        Entrees nettoyees, sans les entrees vides.
    """
    if value is None:
        return []
    if isinstance(value, str):
        entries = value.split(";")
    else:
        entries = [str(v) for v in value]
    return [e.strip() for e in entries if e and e.strip()]


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class ScopeValidator:
    """Validateur de declarations de scopes.

    Attributes:
        _default_lease: Duree appliquee si la declaration l'omet.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        default_lease: timedelta = DEFAULT_LEASE_DURATION,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le validateur.

        Args:
            default_lease: Duree de bail par defaut.
            logger: Logger optionnel.
        """
        self._default_lease = default_lease
        self._logger = logger

    def validate(
        self, decl: ScopeDeclaration
    ) -> ValidationResult:
        """Valide une declaration.

        Args:
            decl: Declaration a valider.

        Returns:
            ValidationResult contenant le scope normalise ou
            toutes les violations.
        """
        errors: List[ValidationError] = []

        # 1. Presence
        if _is_blank(decl.name):
            errors.append(
                ValidationError("Name", "Name is required")
            )
        elif has_control_characters(str(decl.name).strip()):
            errors.append(ValidationError(
                "Name",
                f"Name {str(decl.name)!r} contains line breaks or "
                f"control characters",
            ))
        for external, attr in _ADDRESS_FIELDS:
            if _is_blank(getattr(decl, attr)):
                errors.append(ValidationError(
                    external, f"{external} is required"
                ))
        dns_missing = _is_blank(decl.dns_servers)
        if dns_missing:
            errors.append(
                ValidationError("DnsServer", "DnsServer is required")
            )

        # 2. Syntaxe IPv4
        addresses: Dict[str, IPv4Address] = {}
        for external, attr in _ADDRESS_FIELDS:
            raw = getattr(decl, attr)
            if _is_blank(raw):
                continue
            try:
                addresses[external] = parse(raw)
            except FormatError:
                errors.append(ValidationError(
                    external,
                    f"{external} '{raw}' is not a valid IPv4 address",
                ))
        mask = addresses.get("SubnetMask")
        if mask is not None and not is_contiguous_mask(mask):
            errors.append(ValidationError(
                "SubnetMask",
                f"SubnetMask '{mask}' is not a contiguous network mask",
            ))

        dns_entries = normalize_dns_servers(decl.dns_servers)
        dns_servers: List[IPv4Address] = []
        for entry in dns_entries:
            try:
                dns_servers.append(parse(entry))
            except FormatError:
                errors.append(ValidationError(
                    "DnsServer",
                    f"DnsServer entry '{entry}' is not a valid "
                    f"IPv4 address",
                ))

        # 3. Duree de bail
        lease: Optional[timedelta] = self._default_lease
        if not _is_blank(decl.lease_duration):
            try:
                lease = parse_duration(decl.lease_duration)
            except FormatError:
                lease = None
                errors.append(ValidationError(
                    "LeaseDuration",
                    f"LeaseDuration '{decl.lease_duration}' is not a "
                    f"valid non-negative duration",
                ))

        # 4. Ordre de la plage
        start = addresses.get("StartRange")
        end = addresses.get("EndRange")
        if start is not None and end is not None and start > end:
            errors.append(ValidationError(
                "StartRange",
                f"StartRange is greater than EndRange "
                f"({start} > {end})",
            ))

        # 5. Appartenance au sous-reseau (DNS exclus)
        if start is not None and mask is not None:
            subnet = network_address(start, mask)
            for external in ("EndRange", "Router"):
                addr = addresses.get(external)
                if addr is None:
                    continue
                if network_address(addr, mask) != subnet:
                    errors.append(ValidationError(
                        external,
                        f"{external} {addr} is not in the scope "
                        f"subnet {subnet}/{mask}",
                    ))

        # 6. Liste DNS non vide apres normalisation
        if not dns_missing and not dns_entries:
            errors.append(ValidationError(
                "DnsServer",
                "DnsServer list is empty after normalization",
            ))

        if errors:
            if self._logger:
                self._logger.log_warning(
                    f"Declaration {decl.name!r} invalide : "
                    f"{len(errors)} erreur(s)"
                )
            return ValidationResult(
                declaration=decl, errors=tuple(errors)
            )

        scope = ValidatedScope(
            name=str(decl.name).strip(),
            start_range=start,
            end_range=end,
            subnet_mask=mask,
            router=addresses["Router"],
            dns_servers=tuple(dns_servers),
            # dnsmasq et le rapport travaillent a la seconde
            lease_duration=lease - timedelta(microseconds=lease.microseconds),
            scope_id=network_address(start, mask),
        )
        return ValidationResult(declaration=decl, scope=scope)
