"""Lecture des fichiers structures (parametres et declarations).

Le meme chargeur sert pour le fichier de parametres (``sync.toml``)
et pour les declarations de scopes au format JSON ou TOML.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Union

from pydantic import BaseModel


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class ConfigLoader(ABC):
    """Interface de chargement, substituable par un mock en test."""

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Any:
        """
        Charge un fichier structure.

        Args:
            config_path: Chemin du fichier
            schema: Modele Pydantic optionnel

        Returns:
            Donnees brutes (dict ou liste) ou instance du schema

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si le format n'est pas supporte ou le contenu
                mal forme
            TypeError: Si schema n'est pas un BaseModel
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Chargeur TOML/JSON choisi d'apres l'extension du fichier.

    Les erreurs de syntaxe (tomllib.TOMLDecodeError,
    json.JSONDecodeError) sont des ValueError, comme une
    extension non supportee.
    """

    READERS: Dict[str, Callable[[Path], Any]] = {
        ".toml": _read_toml,
        ".json": _read_json,
    }

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Any:
        """Lit le fichier puis le valide si un schema est fourni."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration non trouve: {path}"
            )

        reader = self.READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(
                f"Extension non supportee: {path.suffix}. "
                f"Utilisez {' ou '.join(sorted(self.READERS))}"
            )
        data = reader(path)

        if schema is None:
            return data
        return self._validate_with_schema(data, schema)

    @staticmethod
    def _validate_with_schema(data: Any, schema: type) -> Any:
        """Valide les donnees via un modele Pydantic.

        Raises:
            TypeError: Si schema n'est pas un BaseModel.
            pydantic.ValidationError: Si les donnees sont invalides.
        """
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Le schema doit etre une sous-classe de "
                f"pydantic.BaseModel, recu: {schema}"
            )
        return schema.model_validate(data)
