# tests/core/version/test_version_upgrade.py
"""
Testes de ordenação de versões e de direção de upgrade.

Os testes asseguram que:
- um upgrade é válido se e somente se o destino é estritamente maior
- no-op e downgrade retornam False (não são erro)
- a ordenação é uma ordem total estrita sobre o conjunto suportado
- decisões são determinísticas entre chamadas
- versões desconhecidas falham com UnknownVersionError, não KeyError
- um literal não-semver na tabela falha com VersionParseError

Invariantes:
    - is_valid_upgrade(a, a) é sempre False
    - compare_versions é antissimétrica e transitiva
"""

import itertools

import pytest

from zookeeper_crd.core.errors import UnknownVersionError, VersionParseError
from zookeeper_crd.core.version import (
    VERSION_TABLE,
    ZooKeeperVersion,
    compare_versions,
    format_version,
    is_valid_upgrade,
    parse_semver,
    semver_triple,
    supported_versions,
)


ALL_VERSIONS = list(ZooKeeperVersion)


def test_upgrade_from_3_4_14_to_3_5_8_is_valid():
    assert is_valid_upgrade(ZooKeeperVersion.V3_4_14, ZooKeeperVersion.V3_5_8) is True


def test_downgrade_is_not_valid():
    assert is_valid_upgrade(ZooKeeperVersion.V3_5_8, ZooKeeperVersion.V3_4_14) is False


def test_same_version_is_not_valid():
    assert is_valid_upgrade(ZooKeeperVersion.V3_4_14, ZooKeeperVersion.V3_4_14) is False


def test_method_form_matches_function():
    assert ZooKeeperVersion.V3_4_14.is_valid_upgrade(ZooKeeperVersion.V3_5_8)
    assert not ZooKeeperVersion.V3_5_8.is_valid_upgrade(ZooKeeperVersion.V3_4_14)


@pytest.mark.parametrize("a,b", list(itertools.product(ALL_VERSIONS, repeat=2)))
def test_upgrade_iff_target_triple_is_greater(a, b):
    assert is_valid_upgrade(a, b) == (semver_triple(b) > semver_triple(a))
    # determinismo
    assert is_valid_upgrade(a, b) == is_valid_upgrade(a, b)


@pytest.mark.parametrize("a", ALL_VERSIONS)
def test_upgrade_to_self_is_never_valid(a):
    assert is_valid_upgrade(a, a) is False
    assert compare_versions(a, a) == 0


@pytest.mark.parametrize("a,b", list(itertools.product(ALL_VERSIONS, repeat=2)))
def test_ordering_is_antisymmetric(a, b):
    assert compare_versions(a, b) == -compare_versions(b, a)
    if a != b:
        assert is_valid_upgrade(a, b) != is_valid_upgrade(b, a)


@pytest.mark.parametrize("a,b,c", list(itertools.product(ALL_VERSIONS, repeat=3)))
def test_ordering_is_transitive(a, b, c):
    if is_valid_upgrade(a, b) and is_valid_upgrade(b, c):
        assert is_valid_upgrade(a, c)


def test_supported_versions_are_sorted_by_precedence():
    ordered = supported_versions()
    assert ordered == (ZooKeeperVersion.V3_4_14, ZooKeeperVersion.V3_5_8)
    for lower, higher in zip(ordered, ordered[1:]):
        assert is_valid_upgrade(lower, higher)


def test_semver_triple_is_numeric_not_lexicographic():
    # "3.4.14" < "3.5.8" só vale comparando numericamente
    assert semver_triple(ZooKeeperVersion.V3_4_14) == (3, 4, 14)
    assert semver_triple(ZooKeeperVersion.V3_5_8) == (3, 5, 8)
    assert parse_semver("3.4.9") < parse_semver("3.4.14")


@pytest.mark.parametrize("literal", ["3.5", "3", "abc", "", "3.5.8-beta", "3.5.8rc1", "v3.5.8", "3.5.8.1"])
def test_parse_semver_rejects_non_triples(literal):
    with pytest.raises(VersionParseError):
        parse_semver(literal)


def test_literals_are_accepted_where_members_are():
    assert is_valid_upgrade("3.4.14", "3.5.8") is True
    assert is_valid_upgrade("3.5.8", ZooKeeperVersion.V3_4_14) is False
    assert semver_triple("3.5.8") == (3, 5, 8)


@pytest.mark.parametrize(
    "call",
    [
        lambda: is_valid_upgrade("3.4.14", "9.9.9"),
        lambda: is_valid_upgrade(ZooKeeperVersion.V3_4_14, "3.5"),
        lambda: is_valid_upgrade(None, ZooKeeperVersion.V3_5_8),
        lambda: compare_versions("9.9.9", ZooKeeperVersion.V3_5_8),
        lambda: semver_triple("v3.5.8"),
        lambda: format_version("9.9.9"),
        lambda: format_version(358),
    ],
)
def test_unknown_versions_raise_typed_error(call):
    with pytest.raises(UnknownVersionError):
        call()


def test_non_semver_table_literal_raises_parse_error(monkeypatch):
    monkeypatch.setitem(VERSION_TABLE, ZooKeeperVersion.V3_5_8, "3.5")

    with pytest.raises(VersionParseError, match="3.5"):
        is_valid_upgrade(ZooKeeperVersion.V3_4_14, ZooKeeperVersion.V3_5_8)
    with pytest.raises(VersionParseError):
        supported_versions()
