"""Parametres d'execution de dhcp-scope-sync.

Ce module definit les modeles Pydantic des parametres et la
fonction load_settings, qui combine fichier de configuration
(TOML/JSON), fichier .env et variables d'environnement
``DHCP_SCOPE_SYNC_*``.

Exemple de fichier TOML::

    dry_run = false
    declarations = "scopes.csv"

    [logging]
    level = "INFO"
    file = "/var/log/dhcp-scope-sync.log"

    [gateway]
    kind = "dnsmasq"
    conf_path = "/etc/dnsmasq.d/scopes.conf"
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from dhcp_scope_sync.config.loader import ConfigLoader, FileConfigLoader
from dhcp_scope_sync.errors.exceptions import ConfigurationError, FormatError
from dhcp_scope_sync.scopes.duration import parse_duration

ENV_PREFIX = "DHCP_SCOPE_SYNC_"

# Variable d'environnement -> chemin dans les parametres
ENV_OVERRIDES = {
    "DRY_RUN": ("dry_run",),
    "DECLARATIONS": ("declarations",),
    "DEFAULT_LEASE_DURATION": ("default_lease_duration",),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
    "GATEWAY": ("gateway", "kind"),
    "DNSMASQ_CONF": ("gateway", "conf_path"),
}


class LoggingSettings(BaseModel):
    """Parametres du logger."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    console: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class GatewaySettings(BaseModel):
    """Parametres d'acces au serveur DHCP."""

    kind: Literal["dnsmasq", "memory"] = "dnsmasq"
    conf_path: str = "/etc/dnsmasq.d/scopes.conf"

    model_config = {"extra": "forbid"}


class SyncSettings(BaseModel):
    """Parametres d'une execution.

    Attributes:
        dry_run: Mode simulation pour toute l'execution.
        declarations: Fichier de declarations (CSV, JSON, TOML).
        scopes: Declarations en ligne, utilisees sans fichier.
        default_lease_duration: Bail applique aux declarations
            qui l'omettent.
        logging: Parametres du logger.
        gateway: Parametres du serveur DHCP.
    """

    dry_run: bool = False
    declarations: Optional[str] = None
    scopes: List[Dict[str, Any]] = Field(default_factory=list)
    default_lease_duration: str = "8.00:00:00"
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)

    model_config = {"extra": "forbid"}

    @field_validator("default_lease_duration")
    @classmethod
    def check_lease(cls, v: str) -> str:
        try:
            parse_duration(v)
        except FormatError as exc:
            raise ValueError(str(exc)) from exc
        return v


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Reporte les variables DHCP_SCOPE_SYNC_* dans les donnees."""
    result = dict(data)
    for suffix, path in ENV_OVERRIDES.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if not value:
            continue
        target = result
        for key in path[:-1]:
            target[key] = dict(target.get(key) or {})
            target = target[key]
        target[path[-1]] = value
    return result


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    loader: Optional[ConfigLoader] = None,
) -> SyncSettings:
    """Charge et valide les parametres d'execution.

    Ordre de priorite : variables d'environnement (y compris
    celles du fichier .env, sans ecraser le shell), puis fichier
    de configuration, puis valeurs par defaut.

    Args:
        config_path: Fichier de configuration TOML ou JSON.
        env_file: Fichier .env optionnel.
        loader: Chargeur de fichiers (defaut: FileConfigLoader).

    Returns:
        Parametres valides.

    Raises:
        ConfigurationError: Si un fichier est absent ou invalide.
    """
    if env_file is not None:
        if not Path(env_file).exists():
            raise ConfigurationError(
                f"Fichier .env introuvable : {env_file}"
            )
        load_dotenv(dotenv_path=env_file, override=False)

    data: Dict[str, Any] = {}
    if config_path is not None:
        loader = loader or FileConfigLoader()
        try:
            data = loader.load(config_path)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Lecture de {config_path} impossible : {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{config_path} doit contenir une table de parametres"
            )

    try:
        return SyncSettings.model_validate(_apply_env_overrides(data))
    except ValidationError as exc:
        raise ConfigurationError(
            f"Parametres invalides : {exc}"
        ) from exc
