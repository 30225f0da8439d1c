"""
Tipos canônicos do recurso ZooKeeperCluster (spec e status).

Este módulo define as estruturas imutáveis que representam o estado
desejado (`ZooKeeperClusterSpec`) e o estado observado
(`ZooKeeperClusterStatus`) de um ensemble ZooKeeper, além da
serialização explícita de/para a forma wire do recurso.

Componentes principais:
    - ZooKeeperServer        → identidade de um membro do ensemble
    - ZooKeeperConfiguration → parâmetros opcionais de tuning
    - ZooKeeperClusterSpec   → estado desejado
    - Condition              → entrada de status opaca (passthrough)
    - ZooKeeperClusterStatus → estado observado + imagem alvo

Decisões arquiteturais:
    - Serialização é escrita à mão, guiada por `naming.FIELD_NAMES`
    - Campos opcionais ausentes são omitidos, nunca emitidos como null
    - `conditions` é omitido quando vazio
    - Ausência de um campo de configuração nunca vira um default sintético

Invariantes:
    - Instâncias são imutáveis (dataclasses frozen, sequências em tuple)
    - A ordem de `servers` e `conditions` é preservada
    - Versões são sempre membros de `ZooKeeperVersion`

Limites explícitos:
    - Não rejeita node names duplicados (responsabilidade do controller)
    - Não valida conteúdo de conditions
    - Não realiza I/O
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import ResourceValidationError
from .naming import FIELD_NAMES
from .version import ZooKeeperVersion, format_version, parse_version


IMAGE_REPOSITORY = "stackable/zookeeper"

# u32 no CRD (int no lado Java)
_MAX_U32 = 2**32 - 1


def _expect(cond: bool, msg: str, path: str) -> None:
    if not cond:
        raise ResourceValidationError(msg, path=path)


def _expect_mapping(data: Any, path: str) -> Dict[str, Any]:
    _expect(isinstance(data, dict), "must be a mapping", path)
    return data


def _reject_unknown_keys(data: Dict[str, Any], allowed: Iterable[str], path: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    _expect(not unknown, f"unknown fields: {unknown}", path)


def _check_u32(value: Any, where: str) -> None:
    _expect(isinstance(value, int) and not isinstance(value, bool), "must be an integer", where)
    _expect(0 <= value <= _MAX_U32, f"must be between 0 and {_MAX_U32}", where)


def _read_u32(data: Dict[str, Any], wire: str, path: str) -> Optional[int]:
    value = data.get(wire)
    if value is not None:
        _check_u32(value, f"{path}.{wire}")
    return value


@dataclass(frozen=True)
class ZooKeeperServer:
    """Membro do ensemble, identificado pelo node onde é agendado."""

    node_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {FIELD_NAMES["node_name"]: self.node_name}

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "server") -> "ZooKeeperServer":
        data = _expect_mapping(data, path)
        wire = FIELD_NAMES["node_name"]
        _reject_unknown_keys(data, [wire], path)
        node_name = data.get(wire)
        _expect(
            isinstance(node_name, str) and bool(node_name.strip()),
            "is required and must be a non-empty string",
            f"{path}.{wire}",
        )
        return cls(node_name=node_name)


@dataclass(frozen=True)
class ZooKeeperConfiguration:
    """
    Parâmetros opcionais de tuning do ZooKeeper.

    `None` significa "usar o default do próprio ZooKeeper". A resolução
    de defaults pertence ao serviço externo de validação/merge.
    """

    client_port: Optional[int] = None
    data_dir: Optional[str] = None
    init_limit: Optional[int] = None
    sync_limit: Optional[int] = None
    tick_time: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("client_port", "init_limit", "sync_limit", "tick_time"):
            value = getattr(self, name)
            if value is not None:
                _check_u32(value, f"config.{FIELD_NAMES[name]}")
        _expect(
            self.data_dir is None or isinstance(self.data_dir, str),
            "must be a string",
            f"config.{FIELD_NAMES['data_dir']}",
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[FIELD_NAMES[f.name]] = value
        return out

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "config") -> "ZooKeeperConfiguration":
        data = _expect_mapping(data, path)
        _reject_unknown_keys(data, [FIELD_NAMES[f.name] for f in fields(cls)], path)

        data_dir_wire = FIELD_NAMES["data_dir"]
        data_dir = data.get(data_dir_wire)
        _expect(
            data_dir is None or isinstance(data_dir, str),
            "must be a string",
            f"{path}.{data_dir_wire}",
        )

        return cls(
            client_port=_read_u32(data, FIELD_NAMES["client_port"], path),
            data_dir=data_dir,
            init_limit=_read_u32(data, FIELD_NAMES["init_limit"], path),
            sync_limit=_read_u32(data, FIELD_NAMES["sync_limit"], path),
            tick_time=_read_u32(data, FIELD_NAMES["tick_time"], path),
        )


@dataclass(frozen=True)
class ZooKeeperClusterSpec:
    """Estado desejado de um ensemble ZooKeeper."""

    version: ZooKeeperVersion
    servers: Tuple[ZooKeeperServer, ...] = ()
    config: Optional[ZooKeeperConfiguration] = None

    def __post_init__(self) -> None:
        # literais válidos viram membros do enum; desconhecidos falham aqui
        object.__setattr__(self, "version", parse_version(self.version))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "version": format_version(self.version),
            "servers": [s.to_dict() for s in self.servers],
        }
        if self.config is not None:
            out["config"] = self.config.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "spec") -> "ZooKeeperClusterSpec":
        data = _expect_mapping(data, path)
        _reject_unknown_keys(data, ["version", "servers", "config"], path)

        _expect("version" in data, "version is required", path)
        version = parse_version(data["version"])

        servers = data.get("servers")
        _expect(isinstance(servers, list), "servers is required and must be a list", f"{path}.servers")

        config = data.get("config")
        return cls(
            version=version,
            servers=tuple(
                ZooKeeperServer.from_dict(s, path=f"{path}.servers[{i}]")
                for i, s in enumerate(servers)
            ),
            config=None if config is None else ZooKeeperConfiguration.from_dict(config, path=f"{path}.config"),
        )


_CONDITION_FIELDS = (
    "type",
    "status",
    "reason",
    "message",
    "last_transition_time",
    "observed_generation",
)


@dataclass(frozen=True)
class Condition:
    """
    Entrada de status no formato convencional de conditions.

    O conteúdo é opaco para este pacote: valores são carregados como
    vieram, e chaves desconhecidas são preservadas em `extra`.
    Chaves conhecidas enviadas explicitamente como null ficam em
    `explicit_nulls` e voltam como null no `to_dict`.
    """

    type: Any = None
    status: Any = None
    reason: Any = None
    message: Any = None
    last_transition_time: Any = None
    observed_generation: Any = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=True, hash=False)
    explicit_nulls: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name in _CONDITION_FIELDS:
            value = getattr(self, name)
            if value is not None or name in self.explicit_nulls:
                out[FIELD_NAMES[name]] = value
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "condition") -> "Condition":
        data = _expect_mapping(data, path)
        known = {FIELD_NAMES[name]: name for name in _CONDITION_FIELDS}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            if key in known:
                kwargs[known[key]] = value
            else:
                extra[key] = value
        nulls = tuple(name for name in _CONDITION_FIELDS if name in kwargs and kwargs[name] is None)
        return cls(extra=extra, explicit_nulls=nulls, **kwargs)


@dataclass(frozen=True)
class ZooKeeperClusterStatus:
    """Estado observado de um ensemble ZooKeeper."""

    current_version: Optional[ZooKeeperVersion] = None
    target_version: Optional[ZooKeeperVersion] = None
    conditions: Tuple[Condition, ...] = ()

    def __post_init__(self) -> None:
        for name in ("current_version", "target_version"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, parse_version(value))

    def target_image_name(self) -> Optional[str]:
        """
        Referência de imagem para a versão alvo, ou None sem versão alvo.

        Formato: `"<IMAGE_REPOSITORY>:<versão>"`.
        """
        if self.target_version is None:
            return None
        return f"{IMAGE_REPOSITORY}:{format_version(self.target_version)}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.current_version is not None:
            out[FIELD_NAMES["current_version"]] = format_version(self.current_version)
        if self.target_version is not None:
            out[FIELD_NAMES["target_version"]] = format_version(self.target_version)
        if self.conditions:
            out["conditions"] = [c.to_dict() for c in self.conditions]
        return out

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "status") -> "ZooKeeperClusterStatus":
        if data is None:
            return cls()
        data = _expect_mapping(data, path)
        _reject_unknown_keys(
            data,
            [FIELD_NAMES[n] for n in ("current_version", "target_version", "conditions")],
            path,
        )

        current = data.get(FIELD_NAMES["current_version"])
        target = data.get(FIELD_NAMES["target_version"])

        conditions = data.get("conditions")
        if conditions is None:
            conditions = []
        _expect(isinstance(conditions, list), "must be a list", f"{path}.conditions")

        return cls(
            current_version=None if current is None else parse_version(current),
            target_version=None if target is None else parse_version(target),
            conditions=tuple(
                Condition.from_dict(c, path=f"{path}.conditions[{i}]")
                for i, c in enumerate(conditions)
            ),
        )


def node_names(spec: ZooKeeperClusterSpec) -> List[str]:
    return [s.node_name for s in spec.servers]
