"""Tests pour l'arithmetique IPv4."""

import pytest

from dhcp_scope_sync.errors import FormatError
from dhcp_scope_sync.network.ipv4 import (
    IPv4Address,
    compare,
    from_uint32,
    is_contiguous_mask,
    network_address,
    parse,
    to_uint32,
)


class TestParse:
    """Tests pour parse()."""

    @pytest.mark.parametrize("text", [
        "0.0.0.0",
        "192.168.1.100",
        "255.255.255.255",
        "10.0.150.11",
    ])
    def test_rendu_identique(self, text: str) -> None:
        """parse puis str() restitue les quatre octets."""
        assert str(parse(text)) == text

    def test_octets(self) -> None:
        """Les octets sont ordonnes du plus significatif."""
        assert parse("192.168.1.2").octets == (192, 168, 1, 2)

    def test_espaces_toleres(self) -> None:
        """Les espaces autour de l'adresse sont ignores."""
        assert parse("  10.0.0.1 ") == parse("10.0.0.1")

    def test_zeros_non_significatifs(self) -> None:
        """Les zeros en tete sont normalises au rendu."""
        assert str(parse("010.001.000.009")) == "10.1.0.9"

    @pytest.mark.parametrize("text", [
        "",
        "192.168.1",
        "192.168.1.1.1",
        "256.0.0.1",
        "a.b.c.d",
        "1.2.3.-4",
        "1.2.3.1000",
        "1..2.3",
    ])
    def test_adresse_invalide(self, text: str) -> None:
        """Les chaines mal formees levent FormatError."""
        with pytest.raises(FormatError):
            parse(text)

    def test_type_invalide(self) -> None:
        """Une valeur non chaine leve FormatError."""
        with pytest.raises(FormatError):
            parse(None)

    def test_format_error_est_valueerror(self) -> None:
        """FormatError reste capturable comme ValueError."""
        with pytest.raises(ValueError, match="IPv4"):
            parse("999.1.1.1")

    def test_message_octet_hors_plage(self) -> None:
        with pytest.raises(FormatError, match="octet 999 hors plage"):
            parse("999.1.1.1")

    def test_octets_hors_plage_constructeur(self) -> None:
        """Le constructeur refuse un octet hors plage."""
        with pytest.raises(FormatError):
            IPv4Address((1, 2, 3, 300))


class TestConversions:
    """Tests pour to_uint32() et from_uint32()."""

    def test_to_uint32(self) -> None:
        """Conversion big-endian."""
        assert to_uint32(parse("192.168.1.100")) == 3232235876

    def test_from_uint32(self) -> None:
        """Conversion inverse."""
        assert str(from_uint32(3232235876)) == "192.168.1.100"

    def test_bornes(self) -> None:
        """0 et 2**32-1 sont les bornes."""
        assert to_uint32(parse("0.0.0.0")) == 0
        assert to_uint32(parse("255.255.255.255")) == 0xFFFFFFFF

    def test_from_uint32_hors_plage(self) -> None:
        """Un entier hors plage leve FormatError."""
        with pytest.raises(FormatError):
            from_uint32(2 ** 32)


class TestNetworkAddress:
    """Tests pour network_address()."""

    def test_masque_24(self) -> None:
        """ET binaire octet par octet."""
        net = network_address(
            parse("192.168.1.100"), parse("255.255.255.0")
        )
        assert str(net) == "192.168.1.0"

    def test_masque_non_aligne(self) -> None:
        """Masque /22."""
        net = network_address(
            parse("10.0.150.11"), parse("255.255.252.0")
        )
        assert str(net) == "10.0.148.0"

    @pytest.mark.parametrize("addr,mask", [
        ("192.168.1.100", "255.255.255.0"),
        ("10.0.150.11", "255.255.252.0"),
        ("172.16.5.4", "255.240.0.0"),
        ("8.8.8.8", "0.0.0.0"),
    ])
    def test_idempotent(self, addr: str, mask: str) -> None:
        """Appliquer deux fois donne le meme resultat qu'une fois."""
        m = parse(mask)
        once = network_address(parse(addr), m)
        assert network_address(once, m) == once


class TestCompare:
    """Tests pour compare() et l'ordre naturel."""

    def test_inferieur(self) -> None:
        assert compare(parse("10.0.0.1"), parse("10.0.0.2")) == -1

    def test_egal(self) -> None:
        assert compare(parse("10.0.0.1"), parse("10.0.0.1")) == 0

    def test_superieur_octet_haut(self) -> None:
        """L'octet de poids fort domine."""
        assert compare(parse("11.0.0.0"), parse("10.255.255.255")) == 1

    def test_ordre_coherent_avec_uint32(self) -> None:
        """L'ordre des dataclasses suit to_uint32."""
        a, b = parse("9.255.255.255"), parse("10.0.0.0")
        assert a < b
        assert (to_uint32(a) < to_uint32(b)) is True


class TestContiguousMask:
    """Tests pour is_contiguous_mask()."""

    @pytest.mark.parametrize("mask", [
        "255.255.255.0",
        "255.255.252.0",
        "255.255.255.255",
        "0.0.0.0",
        "128.0.0.0",
    ])
    def test_masques_valides(self, mask: str) -> None:
        assert is_contiguous_mask(parse(mask))

    @pytest.mark.parametrize("mask", [
        "255.0.255.0",
        "255.255.255.1",
        "0.255.255.255",
    ])
    def test_masques_non_contigus(self, mask: str) -> None:
        assert not is_contiguous_mask(parse(mask))
