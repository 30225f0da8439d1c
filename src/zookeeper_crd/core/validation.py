"""
Contrato com o serviço externo de validação de configuração.

Este módulo define a interface pela qual a saída do projetor é entregue
ao serviço de validação, o formato dos vereditos e o adapter que percorre
uma configuração projetada entrada a entrada.

Contrato (consumido, não implementado aqui):
    validate(versão alvo, tipo de opção, chave, valor) → veredito
    - veredito aceito: valor normalizado
    - veredito rejeitado: falha estruturada (type, message, details)

Decisões arquiteturais:
    - O serviço é uma caixa-preta acessada via `ValidationClient` (Protocol)
    - Rejeições são dados no `ValidationReport`, não exceções
    - Exceções levantadas pelo cliente propagam sem retry
    - Eventos do adapter são registrados de forma estruturada no report

Invariantes:
    - Uma chamada ao cliente por entrada projetada, na ordem da projeção
    - A versão é sempre enviada como literal canônico
    - O report preserva a ordem das entradas

Limites explícitos:
    - Não escreve conditions no recurso (responsabilidade do controller)
    - Não faz I/O de rede
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable

from .cluster import ZooKeeperConfiguration
from .errors import ResourceParseError
from .hashing import compute_config_hash
from .loader import load_document
from .projector import project_config
from .version import ZooKeeperVersion, format_version


class OptionKind(str, Enum):
    """Origem da opção validada pelo serviço externo."""
    CONF = "conf"
    ENV = "env"
    CLI = "cli"


# ---------------------------------------------------------------------------
# Catálogo de tipos de falha (v1)
# ---------------------------------------------------------------------------

UNKNOWN_OPTION = "UNKNOWN_OPTION"
UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
UNSUPPORTED_KIND = "UNSUPPORTED_KIND"
VALUE_REQUIRED = "VALUE_REQUIRED"
INVALID_TYPE = "INVALID_TYPE"
OUT_OF_RANGE = "OUT_OF_RANGE"


@dataclass(frozen=True)
class ValidationFailure:
    """
    Falha estruturada devolvida pelo serviço de validação.

    Campos:
    - type: código estável da falha (não é texto livre)
    - message: mensagem curta e humana
    - details: dados estruturados para diagnóstico
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Verdict:
    """Veredito do serviço para uma única opção."""

    normalized: Optional[str] = None
    error: Optional[ValidationFailure] = None

    @property
    def accepted(self) -> bool:
        return self.error is None

    @classmethod
    def accept(cls, normalized: Optional[str]) -> "Verdict":
        return cls(normalized=normalized)

    @classmethod
    def reject(cls, error: ValidationFailure) -> "Verdict":
        return cls(error=error)


@runtime_checkable
class ValidationClient(Protocol):
    """Interface do serviço externo de validação de configuração."""

    def validate(
        self,
        version: str,
        kind: OptionKind,
        key: str,
        value: Optional[str],
    ) -> Verdict:
        ...


@dataclass(frozen=True)
class ValidationOutcome:
    key: str
    value: str
    verdict: Verdict

    @property
    def accepted(self) -> bool:
        return self.verdict.accepted

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"key": self.key, "value": self.value, "accepted": self.accepted}
        if self.verdict.accepted:
            out["normalized"] = self.verdict.normalized
        else:
            out["error"] = self.verdict.error.to_dict()
        return out


@dataclass
class ValidationReport:
    """
    Resultado da validação de uma configuração projetada.

    Agrega os vereditos por entrada (em ordem de projeção), o hash do
    mapa projetado que foi validado e os eventos estruturados emitidos
    durante a validação.
    """

    version: str
    kind: OptionKind
    config_hash: str = ""
    outcomes: List[ValidationOutcome] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    @property
    def ok(self) -> bool:
        return all(o.accepted for o in self.outcomes)

    @property
    def failures(self) -> List[ValidationOutcome]:
        return [o for o in self.outcomes if not o.accepted]

    def accepted_config(self) -> Dict[str, str]:
        """Mapa das entradas aceitas, com o valor normalizado pelo serviço."""
        out: Dict[str, str] = {}
        for o in self.outcomes:
            if o.accepted:
                out[o.key] = o.value if o.verdict.normalized is None else o.verdict.normalized
        return out

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "level": level,
            "message": message,
            "version": self.version,
            "kind": self.kind.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "kind": self.kind.value,
            "config_hash": self.config_hash,
            "ok": self.ok,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


def validate_config(
    client: ValidationClient,
    version: ZooKeeperVersion,
    config: Optional[ZooKeeperConfiguration],
    *,
    kind: OptionKind = OptionKind.CONF,
) -> ValidationReport:
    """
    Projeta `config` e valida cada entrada via `client`.

    A configuração ausente projeta para `{}` e gera um report vazio
    (e `ok`). Rejeições ficam no report; exceções do cliente propagam.
    """
    literal = format_version(version)
    projected = project_config(config)
    report = ValidationReport(version=literal, kind=kind, config_hash=compute_config_hash(projected))

    report.log(
        level="INFO",
        message="validation started",
        entries=len(projected),
        config_hash=report.config_hash,
    )

    for key, value in projected.items():
        verdict = client.validate(literal, kind, key, value)
        report.outcomes.append(ValidationOutcome(key=key, value=value, verdict=verdict))
        if verdict.accepted:
            report.log(level="INFO", message="option accepted", key=key, normalized=verdict.normalized)
        else:
            report.log(
                level="ERROR",
                message="option rejected",
                key=key,
                error=verdict.error.to_dict(),
            )

    report.log(level="INFO", message="validation finished", ok=report.ok, failures=len(report.failures))
    return report


# ---------------------------------------------------------------------------
# Validador declarativo de referência
# ---------------------------------------------------------------------------

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_ALLOWED_PROPERTY_TYPES = {"integer", "string"}


def _check_property_table(table: Any) -> Dict[str, Dict[str, Any]]:
    if not isinstance(table, dict):
        raise ResourceParseError("property table root must be a mapping/dict")
    for key, spec in table.items():
        if not isinstance(spec, dict):
            raise ResourceParseError(f"property '{key}' must be a mapping")
        ptype = spec.get("type")
        if ptype not in _ALLOWED_PROPERTY_TYPES:
            raise ResourceParseError(
                f"property '{key}'.type must be one of {sorted(_ALLOWED_PROPERTY_TYPES)}"
            )
    return table


def load_property_table(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """
    Carrega a tabela de propriedades (YAML/JSON) do validador declarativo.

    Usa o mesmo loader dos manifestos, portanto arquivo ausente, extensão
    não suportada e raiz inválida falham com os mesmos erros tipados.
    """
    return _check_property_table(load_document(path))


class StaticPropertyValidator:
    """
    Validador de opções guiado por uma tabela declarativa.

    Cada entrada da tabela descreve uma opção:
        {"type": "integer" | "string",
         "min": int, "max": int,            # apenas integer, opcionais
         "versions": ["3.4.14", ...],       # opcional
         "kinds": ["conf", ...]}            # opcional

    Inteiros aceitos são normalizados para base 10 sem sinal/zeros à
    esquerda; strings são devolvidas verbatim.
    """

    def __init__(self, table: Mapping[str, Mapping[str, Any]]) -> None:
        self._table = _check_property_table(dict(table))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StaticPropertyValidator":
        return cls(load_property_table(path))

    def validate(
        self,
        version: str,
        kind: OptionKind,
        key: str,
        value: Optional[str],
    ) -> Verdict:
        spec = self._table.get(key)
        if spec is None:
            return Verdict.reject(
                ValidationFailure(UNKNOWN_OPTION, f"unknown option: {key}", {"key": key})
            )

        versions = spec.get("versions")
        if versions is not None and version not in versions:
            return Verdict.reject(
                ValidationFailure(
                    UNSUPPORTED_VERSION,
                    f"option {key} is not supported in version {version}",
                    {"key": key, "version": version, "supported": list(versions)},
                )
            )

        kinds = spec.get("kinds")
        if kinds is not None and OptionKind(kind).value not in kinds:
            return Verdict.reject(
                ValidationFailure(
                    UNSUPPORTED_KIND,
                    f"option {key} cannot be set as {OptionKind(kind).value}",
                    {"key": key, "kind": OptionKind(kind).value},
                )
            )

        if value is None:
            return Verdict.reject(
                ValidationFailure(VALUE_REQUIRED, f"option {key} requires a value", {"key": key})
            )

        if spec["type"] == "string":
            return Verdict.accept(value)

        if not _INTEGER_RE.fullmatch(value):
            return Verdict.reject(
                ValidationFailure(
                    INVALID_TYPE,
                    f"option {key} must be an integer",
                    {"key": key, "value": value},
                )
            )

        number = int(value)
        low, high = spec.get("min"), spec.get("max")
        if (low is not None and number < low) or (high is not None and number > high):
            return Verdict.reject(
                ValidationFailure(
                    OUT_OF_RANGE,
                    f"option {key} out of range",
                    {"key": key, "value": number, "min": low, "max": high},
                )
            )

        return Verdict.accept(str(number))
