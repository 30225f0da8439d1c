"""
Modelo canônico de versões suportadas do ZooKeeper.

Este módulo define o conjunto fechado de versões suportadas, a tabela
explícita enum ↔ literal e as regras de ordenação e de direção de upgrade.

Duas verificações independentes são expostas:
    - "é uma versão real?"        → `parse_version` (string → enum)
    - "é uma transição válida?"   → `is_valid_upgrade` (enum → enum)

Decisões arquiteturais:
    - Versões nunca são construídas dinamicamente, apenas lidas da tabela
    - A ordenação segue precedência semver (major.minor.patch numérico)
    - Downgrade ou no-op é uma chamada válida que retorna False, não erro
    - A completude da tabela é verificada no import do módulo

Invariantes:
    - Cada membro do enum possui exatamente um literal, e vice-versa
    - `format_version(parse_version(s)) == s` para todo literal suportado
    - A mesma entrada sempre produz a mesma decisão

Limites explícitos:
    - Não decide quando reconciliar
    - Não consulta registries de imagem nem releases externas
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from packaging.version import InvalidVersion, Version

from .errors import UnknownVersionError, VersionParseError, VersionTableError


SemverTriple = Tuple[int, int, int]


class ZooKeeperVersion(str, Enum):
    """
    Versões do ZooKeeper suportadas pelo operador.

    Os valores são strings para facilitar serialização no recurso;
    a conversão de/para texto passa sempre por `VERSION_TABLE`.
    """
    V3_4_14 = "3.4.14"
    V3_5_8 = "3.5.8"

    def __str__(self) -> str:
        return format_version(self)

    def is_valid_upgrade(self, to: "ZooKeeperVersion") -> bool:
        return is_valid_upgrade(self, to)


VERSION_TABLE: Dict[ZooKeeperVersion, str] = {
    ZooKeeperVersion.V3_4_14: "3.4.14",
    ZooKeeperVersion.V3_5_8: "3.5.8",
}


def _check_version_table(table: Mapping[ZooKeeperVersion, str]) -> Dict[str, ZooKeeperVersion]:
    """
    Valida a bijeção enum ↔ literal e devolve o índice reverso.

    Raises:
        VersionTableError: membro sem literal, literal duplicado,
            ou chave que não é membro do enum.
    """
    missing = [m.name for m in ZooKeeperVersion if m not in table]
    if missing:
        raise VersionTableError(f"versions without literal: {missing}")

    reverse: Dict[str, ZooKeeperVersion] = {}
    for member, literal in table.items():
        if not isinstance(member, ZooKeeperVersion):
            raise VersionTableError(f"table key is not a ZooKeeperVersion: {member!r}")
        if not isinstance(literal, str) or not literal:
            raise VersionTableError(f"invalid literal for {member.name}: {literal!r}")
        if literal in reverse:
            raise VersionTableError(
                f"literal {literal!r} shared by {reverse[literal].name} and {member.name}"
            )
        reverse[literal] = member
    return reverse


_BY_LITERAL: Dict[str, ZooKeeperVersion] = _check_version_table(VERSION_TABLE)


def supported_literals() -> list:
    return [VERSION_TABLE[m] for m in ZooKeeperVersion]


def parse_version(value: Any) -> ZooKeeperVersion:
    """
    Converte um literal de versão no membro correspondente do enum.

    Apenas correspondência exata é aceita: sem trim, sem prefixo `v`,
    sem normalização semver.

    Raises:
        UnknownVersionError: se o valor não pertence à tabela.
    """
    if isinstance(value, ZooKeeperVersion):
        return value
    if isinstance(value, str) and value in _BY_LITERAL:
        return _BY_LITERAL[value]
    raise UnknownVersionError(value, supported_literals())


def format_version(version: Any) -> str:
    """
    Literal canônico de uma versão.

    Aceita membros do enum ou literais; qualquer outro valor falha na
    fronteira com `UnknownVersionError`.
    """
    return VERSION_TABLE[parse_version(version)]


def parse_semver(literal: str) -> SemverTriple:
    """
    Interpreta um literal como tripla semver (major, minor, patch).

    Usa `packaging.version` e exige um release de exatamente três
    componentes, sem pre/post/dev/local e sem normalização.

    Raises:
        VersionParseError: se o literal não for semver-compatível.
    """
    try:
        parsed = Version(literal)
    except (InvalidVersion, TypeError) as e:
        raise VersionParseError(f"not a semantic version: {literal!r}") from e

    if (
        len(parsed.release) != 3
        or parsed.epoch
        or parsed.is_prerelease
        or parsed.is_postrelease
        or parsed.local is not None
        or str(parsed) != literal
    ):
        raise VersionParseError(f"not a major.minor.patch version: {literal!r}")

    major, minor, patch = parsed.release
    return major, minor, patch


def semver_triple(version: ZooKeeperVersion) -> SemverTriple:
    return parse_semver(format_version(version))


def compare_versions(a: ZooKeeperVersion, b: ZooKeeperVersion) -> int:
    """Retorna -1, 0 ou 1 segundo a precedência semver de `a` frente a `b`."""
    ta, tb = semver_triple(a), semver_triple(b)
    return (ta > tb) - (ta < tb)


def is_valid_upgrade(from_version: ZooKeeperVersion, to_version: ZooKeeperVersion) -> bool:
    """
    Decide se `from_version → to_version` é um upgrade permitido.

    Retorna True apenas se o destino for estritamente maior. Versões
    iguais (no-op) ou menores (downgrade) retornam False.

    Raises:
        UnknownVersionError: se algum argumento não for versão suportada.
        VersionParseError: se algum literal da tabela não for semver.
    """
    return semver_triple(to_version) > semver_triple(from_version)


def supported_versions() -> Tuple[ZooKeeperVersion, ...]:
    """Todas as versões suportadas, em ordem crescente de precedência."""
    return tuple(sorted(ZooKeeperVersion, key=semver_triple))
