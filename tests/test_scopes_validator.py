"""Tests pour le validateur de declarations de scopes."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from dhcp_scope_sync.network.ipv4 import network_address, parse
from dhcp_scope_sync.scopes.models import ScopeDeclaration
from dhcp_scope_sync.scopes.validator import (
    ScopeValidator,
    normalize_dns_servers,
)


def _decl(**overrides) -> ScopeDeclaration:
    """Cree la declaration 'Dev' de reference."""
    values = {
        "name": "Dev",
        "start_range": "192.168.1.100",
        "end_range": "192.168.1.200",
        "subnet_mask": "255.255.255.0",
        "router": "192.168.1.1",
        "dns_servers": "192.168.1.10",
        "lease_duration": "8.00:00:00",
    }
    values.update(overrides)
    return ScopeDeclaration(**values)


def _fields(result) -> list:
    return [e.field for e in result.errors]


class TestDeclarationValide:
    """Tests des declarations valides."""

    def test_scope_normalise(self) -> None:
        """Une declaration correcte produit un ValidatedScope."""
        result = ScopeValidator().validate(_decl())
        assert result.is_valid
        assert result.errors == ()
        scope = result.scope
        assert str(scope.scope_id) == "192.168.1.0"
        assert str(scope.router) == "192.168.1.1"
        assert [str(d) for d in scope.dns_servers] == ["192.168.1.10"]
        assert scope.lease_duration == timedelta(days=8)

    def test_scope_id_par_construction(self) -> None:
        """scope_id == network_address(start_range, subnet_mask)."""
        scope = ScopeValidator().validate(_decl(
            start_range="10.0.150.20",
            end_range="10.0.151.200",
            subnet_mask="255.255.252.0",
            router="10.0.148.1",
        )).scope
        assert scope.scope_id == network_address(
            scope.start_range, scope.subnet_mask
        )
        assert str(scope.scope_id) == "10.0.148.0"

    def test_plage_d_une_adresse(self) -> None:
        """StartRange == EndRange est accepte."""
        result = ScopeValidator().validate(
            _decl(end_range="192.168.1.100")
        )
        assert result.is_valid

    def test_dns_separes_par_point_virgule(self) -> None:
        """La chaine DNS est decoupee et nettoyee."""
        scope = ScopeValidator().validate(
            _decl(dns_servers=" 10.0.150.11 ; 10.0.150.12;")
        ).scope
        assert [str(d) for d in scope.dns_servers] == [
            "10.0.150.11", "10.0.150.12",
        ]

    def test_dns_liste_native(self) -> None:
        """Une liste native de DNS est acceptee."""
        scope = ScopeValidator().validate(
            _decl(dns_servers=["1.1.1.1", "8.8.8.8"])
        ).scope
        assert [str(d) for d in scope.dns_servers] == [
            "1.1.1.1", "8.8.8.8",
        ]

    def test_dns_hors_sous_reseau_accepte(self) -> None:
        """Les DNS externes ne sont pas soumis au sous-reseau."""
        result = ScopeValidator().validate(_decl(dns_servers="8.8.8.8"))
        assert result.is_valid

    def test_bail_omis_valeur_par_defaut(self) -> None:
        """Un bail omis prend la valeur par defaut de 8 jours."""
        result = ScopeValidator().validate(_decl(lease_duration=None))
        assert result.scope.lease_duration == timedelta(days=8)

    def test_bail_vide_valeur_par_defaut(self) -> None:
        """Une cellule CSV vide vaut omission."""
        result = ScopeValidator().validate(_decl(lease_duration=""))
        assert result.scope.lease_duration == timedelta(days=8)

    def test_bail_par_defaut_configurable(self) -> None:
        """Le bail par defaut est injectable."""
        validator = ScopeValidator(default_lease=timedelta(hours=12))
        result = validator.validate(_decl(lease_duration=None))
        assert result.scope.lease_duration == timedelta(hours=12)

    def test_nom_nettoye(self) -> None:
        """Les espaces autour du nom sont retires."""
        result = ScopeValidator().validate(_decl(name="  Dev  "))
        assert result.scope.name == "Dev"

    def test_bail_arrondi_a_la_seconde(self) -> None:
        """Les fractions de seconde du bail sont abandonnees."""
        scope = ScopeValidator().validate(
            _decl(lease_duration="0.01:00:00.5")
        ).scope
        assert scope.lease_duration == timedelta(hours=1)


class TestDeclarationInvalide:
    """Tests des violations."""

    def test_routeur_hors_sous_reseau(self) -> None:
        """Un routeur hors du sous-reseau est signale."""
        result = ScopeValidator().validate(_decl(router="10.0.0.1"))
        assert not result.is_valid
        assert result.scope is None
        assert _fields(result) == ["Router"]
        assert "not in the scope subnet" in result.errors[0].message

    def test_fin_hors_sous_reseau(self) -> None:
        """Une fin de plage hors du sous-reseau est signalee."""
        result = ScopeValidator().validate(_decl(end_range="192.168.2.10"))
        assert _fields(result) == ["EndRange"]

    def test_plage_inversee(self) -> None:
        """StartRange > EndRange est signale."""
        result = ScopeValidator().validate(_decl(
            start_range="192.168.1.200", end_range="192.168.1.100",
        ))
        assert _fields(result) == ["StartRange"]
        assert (
            "StartRange is greater than EndRange"
            in result.errors[0].message
        )

    def test_bail_mal_forme(self) -> None:
        """Un bail mal forme est signale meme si le reste est valide."""
        result = ScopeValidator().validate(
            _decl(lease_duration="notaduration")
        )
        assert _fields(result) == ["LeaseDuration"]
        assert "LeaseDuration" in result.errors[0].message

    def test_bail_negatif(self) -> None:
        result = ScopeValidator().validate(
            _decl(lease_duration="-1.00:00:00")
        )
        assert _fields(result) == ["LeaseDuration"]

    def test_pas_de_court_circuit(self) -> None:
        """Deux defauts independants donnent deux erreurs."""
        result = ScopeValidator().validate(_decl(
            router="192.168.1.x",
            start_range="192.168.1.200",
            end_range="192.168.1.100",
        ))
        assert len(result.errors) >= 2
        assert "Router" in _fields(result)
        assert "StartRange" in _fields(result)

    def test_tous_les_champs_absents(self) -> None:
        """Chaque champ requis absent est signale."""
        result = ScopeValidator().validate(ScopeDeclaration())
        assert _fields(result) == [
            "Name", "StartRange", "EndRange", "SubnetMask",
            "Router", "DnsServer",
        ]

    def test_nom_vide(self) -> None:
        result = ScopeValidator().validate(_decl(name="   "))
        assert _fields(result) == ["Name"]

    @pytest.mark.parametrize("name", [
        "Dev\ndhcp-option=option:router,6.6.6.6",
        "Dev\rLab",
        "Dev\x00",
        "Dev\u2028Lab",
    ])
    def test_nom_avec_caracteres_de_controle(self, name: str) -> None:
        """Un nom multiligne ne peut pas produire de scope."""
        result = ScopeValidator().validate(_decl(name=name))
        assert result.scope is None
        assert _fields(result) == ["Name"]
        assert "control characters" in result.errors[0].message

    def test_bail_hors_plage_et_routeur(self) -> None:
        """Un bail demesure n'empeche pas de signaler le routeur."""
        result = ScopeValidator().validate(_decl(
            lease_duration="9999999999", router="10.0.0.1",
        ))
        assert not result.is_valid
        assert sorted(_fields(result)) == ["LeaseDuration", "Router"]

    @pytest.mark.parametrize("field,attr", [
        ("StartRange", "start_range"),
        ("EndRange", "end_range"),
        ("SubnetMask", "subnet_mask"),
        ("Router", "router"),
    ])
    def test_syntaxe_ipv4(self, field: str, attr: str) -> None:
        """Chaque champ IPv4 est verifie syntaxiquement."""
        result = ScopeValidator().validate(_decl(**{attr: "300.1.1.1"}))
        assert field in _fields(result)
        assert any(
            "is not a valid IPv4 address" in e.message
            for e in result.errors
        )

    def test_dns_invalide(self) -> None:
        """Chaque entree DNS est verifiee."""
        result = ScopeValidator().validate(
            _decl(dns_servers="192.168.1.10;nope")
        )
        assert _fields(result) == ["DnsServer"]
        assert "nope" in result.errors[0].message

    def test_dns_vide_apres_normalisation(self) -> None:
        """Une liste de separateurs seuls est vide."""
        result = ScopeValidator().validate(_decl(dns_servers=" ; ;"))
        assert _fields(result) == ["DnsServer"]
        assert "empty" in result.errors[0].message

    def test_dns_liste_vide(self) -> None:
        result = ScopeValidator().validate(_decl(dns_servers=[]))
        assert _fields(result) == ["DnsServer"]

    def test_masque_non_contigu(self) -> None:
        result = ScopeValidator().validate(
            _decl(subnet_mask="255.0.255.0")
        )
        assert "SubnetMask" in _fields(result)

    def test_scope_id_disponible_si_invalide(self) -> None:
        """L'identifiant reste calculable pour le rapport."""
        result = ScopeValidator().validate(_decl(router="10.0.0.1"))
        assert str(result.scope_id) == "192.168.1.0"

    def test_scope_id_absent_si_non_derivable(self) -> None:
        result = ScopeValidator().validate(_decl(start_range="bad"))
        assert result.scope_id is None

    def test_logger_averti(self) -> None:
        """Une declaration invalide est signalee au logger."""
        logger = MagicMock()
        ScopeValidator(logger=logger).validate(_decl(router="10.0.0.1"))
        logger.log_warning.assert_called_once()


class TestNormalizeDnsServers:
    """Tests pour normalize_dns_servers()."""

    def test_none(self) -> None:
        assert normalize_dns_servers(None) == []

    def test_chaine(self) -> None:
        assert normalize_dns_servers("a; b ;;c") == ["a", "b", "c"]

    def test_sequence(self) -> None:
        assert normalize_dns_servers(("a ", "", " b")) == ["a", "b"]


def test_scope_id_recalcule_apres_parse() -> None:
    """Le scope_id est l'adresse reseau du debut de plage."""
    scope = ScopeValidator().validate(_decl()).scope
    assert scope.scope_id == network_address(
        parse("192.168.1.100"), parse("255.255.255.0")
    )
