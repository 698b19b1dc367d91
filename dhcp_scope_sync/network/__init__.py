"""Module reseau : arithmetique IPv4 pour le calcul des scopes."""

from dhcp_scope_sync.network.ipv4 import (
    IPv4Address,
    compare,
    from_uint32,
    is_contiguous_mask,
    network_address,
    parse,
    to_uint32,
)

__all__ = [
    "IPv4Address",
    "compare",
    "from_uint32",
    "is_contiguous_mask",
    "network_address",
    "parse",
    "to_uint32",
]
