"""Arithmetique IPv4 sur adresses en notation pointee.

Ce module fournit la valeur immuable IPv4Address et les fonctions
pures de conversion, de comparaison et de calcul de sous-reseau
utilisees par le validateur de scopes.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from dhcp_scope_sync.errors.exceptions import FormatError

_DOTTED_QUAD = re.compile(
    r"^([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})$"
)


@dataclass(frozen=True, order=True)
class IPv4Address:
    """Adresse IPv4 sous forme de quatre octets.

    L'ordre naturel est celui de la representation entiere
    big-endian.

    Attributes:
        octets: Les quatre octets, du plus significatif au moins
            significatif.
    """

    octets: Tuple[int, int, int, int]

    def __post_init__(self) -> None:
        """Verifie le nombre et la plage des octets."""
        if len(self.octets) != 4 or not all(
            isinstance(o, int) and 0 <= o <= 255 for o in self.octets
        ):
            raise FormatError(
                f"Octets IPv4 invalides : {self.octets!r}"
            )

    def __str__(self) -> str:
        return ".".join(str(o) for o in self.octets)


def parse(value: str) -> IPv4Address:
    """Analyse une adresse IPv4 en notation pointee.

    Args:
        value: Chaine de la forme a.b.c.d (espaces autour toleres).

    Returns:
        L'adresse analysee.

    Raises:
        FormatError: Si la chaine n'est pas composee de quatre
            octets decimaux 0-255.
    """
    if not isinstance(value, str):
        raise FormatError(f"Adresse IPv4 invalide : {value!r}")
    match = _DOTTED_QUAD.match(value.strip())
    if not match:
        raise FormatError(f"Adresse IPv4 invalide : {value!r}")
    octets = tuple(int(o) for o in match.groups())
    for octet in octets:
        if octet > 255:
            raise FormatError(
                f"Adresse IPv4 invalide : octet {octet} hors plage "
                f"(0-255) dans {value!r}"
            )
    return IPv4Address(octets)


def to_uint32(addr: IPv4Address) -> int:
    """Convertit une adresse en entier non signe 32 bits (big-endian)."""
    a, b, c, d = addr.octets
    return (a << 24) | (b << 16) | (c << 8) | d


def from_uint32(num: int) -> IPv4Address:
    """Convertit un entier 32 bits en adresse.

    Raises:
        FormatError: Si l'entier sort de la plage 0..2**32-1.
    """
    if not 0 <= num <= 0xFFFFFFFF:
        raise FormatError(f"Entier IPv4 hors plage : {num}")
    return IPv4Address((
        (num >> 24) & 0xFF,
        (num >> 16) & 0xFF,
        (num >> 8) & 0xFF,
        num & 0xFF,
    ))


def network_address(
    addr: IPv4Address, mask: IPv4Address
) -> IPv4Address:
    """Calcule l'adresse reseau (ET binaire octet par octet).

    Args:
        addr: Adresse quelconque du reseau.
        mask: Masque de sous-reseau.

    Returns:
        L'adresse reseau, identifiant du scope.
    """
    return IPv4Address(tuple(
        a & m for a, m in zip(addr.octets, mask.octets)
    ))


def compare(a: IPv4Address, b: IPv4Address) -> int:
    """Compare deux adresses.

    Returns:
        -1 si a < b, 0 si a == b, 1 si a > b.
    """
    left, right = to_uint32(a), to_uint32(b)
    return (left > right) - (left < right)


def is_contiguous_mask(mask: IPv4Address) -> bool:
    """Indique si le masque est une suite de 1 suivie de 0."""
    inverted = ~to_uint32(mask) & 0xFFFFFFFF
    return inverted & (inverted + 1) == 0
