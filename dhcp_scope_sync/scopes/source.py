"""Chargement des declarations de scopes.

Ce module lit la sequence ordonnee de declarations depuis un
fichier CSV, JSON ou TOML. Toute impossibilite d'obtenir cette
sequence est fatale pour l'execution (DeclarationSourceError).

Colonnes attendues : Name, StartRange, EndRange, SubnetMask,
Router, DnsServer, LeaseDuration.
"""

import csv
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from dhcp_scope_sync.config.loader import ConfigLoader, FileConfigLoader
from dhcp_scope_sync.errors.exceptions import DeclarationSourceError
from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.scopes.models import ScopeDeclaration


def declarations_from_records(
    records: Iterable[Any],
) -> List[ScopeDeclaration]:
    """Convertit des enregistrements en declarations.

    Args:
        records: Dictionnaires (cles Name, StartRange, ...).

    Returns:
        Declarations dans l'ordre des enregistrements.

    Raises:
        DeclarationSourceError: Si un enregistrement n'est pas
            un dictionnaire.
    """
    declarations = []
    for index, record in enumerate(records, start=1):
        if not isinstance(record, Mapping):
            raise DeclarationSourceError(
                f"Enregistrement {index} invalide : table attendue, "
                f"recu {type(record).__name__}"
            )
        declarations.append(ScopeDeclaration.from_record(record))
    return declarations


def _read_csv(path: Path) -> List[ScopeDeclaration]:
    # utf-8-sig : tolere le BOM des exports Excel/PowerShell
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            return []
        return declarations_from_records(reader)


def load_declarations(
    path: Union[str, Path],
    loader: Optional[ConfigLoader] = None,
    logger: Optional[Logger] = None,
) -> List[ScopeDeclaration]:
    """Charge les declarations depuis un fichier.

    Les fichiers JSON/TOML contiennent soit une liste de tables,
    soit une table avec une cle ``scopes``.

    Args:
        path: Fichier .csv, .json ou .toml.
        loader: Chargeur JSON/TOML (defaut: FileConfigLoader).
        logger: Logger optionnel.

    Returns:
        Declarations dans l'ordre du fichier.

    Raises:
        DeclarationSourceError: Si le fichier est absent, illisible
            ou de forme inattendue.
    """
    path = Path(path)
    if not path.is_file():
        raise DeclarationSourceError(
            f"Fichier de declarations introuvable : {path}"
        )
    try:
        if path.suffix.lower() == ".csv":
            declarations = _read_csv(path)
        else:
            data = (loader or FileConfigLoader()).load(path)
            if isinstance(data, Mapping):
                data = data.get("scopes")
            if not isinstance(data, list):
                raise DeclarationSourceError(
                    f"{path} doit contenir une liste de scopes"
                )
            declarations = declarations_from_records(data)
    except (OSError, ValueError, csv.Error) as exc:
        raise DeclarationSourceError(
            f"Lecture de {path} impossible : {exc}"
        ) from exc
    if logger:
        logger.log_info(
            f"Charge {len(declarations)} declaration(s) depuis {path}"
        )
    return declarations
