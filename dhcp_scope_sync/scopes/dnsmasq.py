"""Gateway vers un serveur dnsmasq.

Ce module fournit DnsmasqScopeGateway, qui lit et ecrit les scopes
dans un fichier de configuration dnsmasq dedie (ex:
/etc/dnsmasq.d/scopes.conf). Chaque scope est identifie par un tag
derive de son adresse reseau :

    # scope 192.168.1.0: Dev
    dhcp-range=set:scope-192-168-1-0,192.168.1.100,192.168.1.200,255.255.255.0,691200
    dhcp-option=tag:scope-192-168-1-0,option:router,192.168.1.1
    dhcp-option=tag:scope-192-168-1-0,option:dns-server,192.168.1.10

Les lignes qui ne concernent pas les options routeur et DNS des
scopes geres sont conservees telles quelles.
"""

import os
import re
import tempfile
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dhcp_scope_sync.errors.exceptions import FormatError, ServerError
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.network.ipv4 import IPv4Address, parse
from dhcp_scope_sync.scopes.gateway import ScopeGateway
from dhcp_scope_sync.scopes.models import (
    ScopeInfo,
    ValidatedScope,
    has_control_characters,
)

_RANGE_LINE = re.compile(
    r"^dhcp-range=set:(?P<tag>[^,]+),(?P<start>[^,]+),"
    r"(?P<end>[^,]+),(?P<mask>[^,]+)(?:,(?P<lease>[^,]+))?$"
)
_OPTION_LINE = re.compile(
    r"^dhcp-option=tag:(?P<tag>[^,]+),"
    r"(?P<option>option:router|option:dns-server|3|6),(?P<values>.+)$"
)
_NAME_LINE = re.compile(r"^# scope (?P<scope_id>[0-9.]+): (?P<name>.*)$")
_LEASE = re.compile(r"^(?P<value>[0-9]+)(?P<unit>[smhdw]?)$")
_LEASE_UNITS = {
    "": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800,
}
_ROUTER_OPTIONS = ("option:router", "3")
_DNS_OPTIONS = ("option:dns-server", "6")


def scope_tag(scope_id: IPv4Address) -> str:
    """Retourne le tag dnsmasq associe a un scope."""
    return "scope-" + str(scope_id).replace(".", "-")


def parse_lease(value: Optional[str]) -> timedelta:
    """Analyse une duree de bail dnsmasq (``3600``, ``12h``, ``8d``).

    Raises:
        FormatError: Si la duree est mal formee.
    """
    if value is None:
        # Valeur par defaut de dnsmasq
        return timedelta(hours=1)
    text = value.strip().lower()
    if text == "infinite":
        return timedelta.max
    match = _LEASE.match(text)
    if not match:
        raise FormatError(f"Duree de bail dnsmasq invalide : {value!r}")
    seconds = int(match.group("value")) * _LEASE_UNITS[match.group("unit")]
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise FormatError(
            f"Duree de bail dnsmasq hors plage : {value!r}"
        ) from exc


def format_lease(duration: timedelta) -> str:
    """Formate une duree de bail en secondes pour dnsmasq."""
    if duration == timedelta.max:
        return "infinite"
    return str(int(duration.total_seconds()))


class DnsmasqScopeGateway(ScopeGateway):
    """Gateway de scopes stockes dans un fichier de config dnsmasq.

    Attributes:
        _conf_path: Chemin du fichier de configuration gere.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        conf_path: str,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise la gateway dnsmasq.

        Args:
            conf_path: Chemin du fichier de configuration gere.
            logger: Logger optionnel.
        """
        self._conf_path = Path(conf_path)
        self._logger = logger

    @property
    def conf_path(self) -> Path:
        """Chemin du fichier de configuration gere."""
        return self._conf_path

    def get_scope(
        self, scope_id: IPv4Address
    ) -> Optional[ScopeInfo]:
        """Lit l'etat du scope depuis le fichier de configuration."""
        tag = scope_tag(scope_id)
        lines = self._read_lines("getScope")
        range_match = None
        name = ""
        router: Optional[IPv4Address] = None
        dns_servers: Tuple[IPv4Address, ...] = ()
        try:
            for line in lines:
                stripped = line.strip()
                match = _RANGE_LINE.match(stripped)
                if match and match.group("tag") == tag:
                    range_match = match
                    continue
                match = _NAME_LINE.match(stripped)
                if match and match.group("scope_id") == str(scope_id):
                    name = match.group("name")
                    continue
                match = _OPTION_LINE.match(stripped)
                if match and match.group("tag") == tag:
                    values = [
                        v for v in match.group("values").split(",") if v
                    ]
                    if match.group("option") in _ROUTER_OPTIONS:
                        router = parse(values[0]) if values else None
                    else:
                        dns_servers = tuple(parse(v) for v in values)
            if range_match is None:
                return None
            return ScopeInfo(
                scope_id=scope_id,
                name=name,
                start_range=parse(range_match.group("start")),
                end_range=parse(range_match.group("end")),
                subnet_mask=parse(range_match.group("mask")),
                lease_duration=parse_lease(range_match.group("lease")),
                router=router,
                dns_servers=dns_servers,
            )
        except FormatError as exc:
            raise ServerError(
                "getScope",
                f"entree invalide pour {scope_id} dans "
                f"{self._conf_path} : {exc}",
            ) from exc

    def create_scope(self, scope: ValidatedScope) -> None:
        """Ajoute la plage du scope au fichier de configuration."""
        if has_control_characters(scope.name):
            raise ServerError(
                "createScope",
                f"nom de scope refuse (saut de ligne ou controle) : "
                f"{scope.name!r}",
            )
        tag = scope_tag(scope.scope_id)
        lines = self._read_lines("createScope")
        if self._find_range(lines, tag) is not None:
            if self._logger:
                self._logger.log_warning(
                    f"Scope {scope.scope_id} deja present dans "
                    f"{self._conf_path}, creation ignoree"
                )
            return
        lines.append(f"# scope {scope.scope_id}: {scope.name}")
        lines.append(
            f"dhcp-range=set:{tag},{scope.start_range},"
            f"{scope.end_range},{scope.subnet_mask},"
            f"{format_lease(scope.lease_duration)}"
        )
        self._write_lines(lines, "createScope")

    def update_lease(
        self, scope_id: IPv4Address, duration: timedelta
    ) -> None:
        """Remplace la duree de bail sur la ligne dhcp-range."""
        tag = scope_tag(scope_id)
        lines = self._read_lines("updateLease")
        index = self._find_range(lines, tag)
        if index is None:
            raise ServerError(
                "updateLease", f"scope {scope_id} introuvable"
            )
        match = _RANGE_LINE.match(lines[index].strip())
        lines[index] = (
            f"dhcp-range=set:{tag},{match.group('start')},"
            f"{match.group('end')},{match.group('mask')},"
            f"{format_lease(duration)}"
        )
        self._write_lines(lines, "updateLease")

    def set_options(
        self,
        scope_id: IPv4Address,
        router: IPv4Address,
        dns_servers: Sequence[IPv4Address],
    ) -> None:
        """Remplace les lignes d'options routeur et DNS du scope."""
        tag = scope_tag(scope_id)
        lines = self._read_lines("setOptions")
        if self._find_range(lines, tag) is None:
            raise ServerError(
                "setOptions", f"scope {scope_id} introuvable"
            )
        kept: List[str] = []
        for line in lines:
            match = _OPTION_LINE.match(line.strip())
            if match and match.group("tag") == tag:
                continue
            kept.append(line)
        index = self._find_range(kept, tag)
        new_lines = [
            f"dhcp-option=tag:{tag},option:router,{router}",
            f"dhcp-option=tag:{tag},option:dns-server,"
            + ",".join(str(d) for d in dns_servers),
        ]
        kept[index + 1:index + 1] = new_lines
        self._write_lines(kept, "setOptions")

    @staticmethod
    def _find_range(lines: List[str], tag: str) -> Optional[int]:
        for index, line in enumerate(lines):
            match = _RANGE_LINE.match(line.strip())
            if match and match.group("tag") == tag:
                return index
        return None

    def _read_lines(self, operation: str) -> List[str]:
        """Lit le fichier gere (liste vide s'il n'existe pas)."""
        if not self._conf_path.exists():
            return []
        try:
            content = self._conf_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ServerError(
                operation, f"lecture de {self._conf_path} : {exc}"
            ) from exc
        return content.splitlines()

    def _write_lines(self, lines: List[str], operation: str) -> None:
        """Remplace atomiquement le fichier gere."""
        directory = self._conf_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=directory, prefix=".scopes-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write("\n".join(lines) + "\n")
            os.replace(tmp_path, self._conf_path)
        except OSError as exc:
            raise ServerError(
                operation, f"ecriture de {self._conf_path} : {exc}"
            ) from exc
        if self._logger:
            self._logger.log_info(
                f"{operation} : {self._conf_path} mis a jour"
            )
