"""
Identidade do recurso ZooKeeperCluster e documento CRD empacotado.

Este módulo é a camada de fronteira entre o formato do API server e os
tipos do core:
    - constantes de identidade do recurso (group, kind, shortname, ...)
    - leitura do CRD declarativo empacotado como asset estático
    - validação estrutural do envelope e materialização tipada

Decisões arquiteturais:
    - O CRD é um artefato versionado consumido aqui, nunca gerado
    - A lógica de versões e de projeção não depende do CRD
    - Checagens de nível controller (node names duplicados) são
      expostas como dados, nunca como exceções

Limites explícitos:
    - Não registra o CRD no API server
    - Não implementa validação OpenAPI genérica
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .cluster import (
    ZooKeeperClusterSpec,
    ZooKeeperClusterStatus,
    ZooKeeperConfiguration,
    node_names,
)
from .errors import CrdDefinitionError, ResourceValidationError
from .naming import FIELD_NAMES
from .version import supported_literals


GROUP = "zookeeper.stackable.tech"
API_VERSION = "v1"
KIND = "ZooKeeperCluster"
PLURAL = "zookeeperclusters"
SHORT_NAME = "zk"
NAMESPACED = True
RESOURCE_NAME = f"{PLURAL}.{GROUP}"
GROUP_VERSION = f"{GROUP}/{API_VERSION}"

CRD_DEFINITION_PATH = Path(__file__).resolve().parent.parent / "data" / "zookeepercluster.crd.yaml"


@dataclass(frozen=True)
class ZooKeeperCluster:
    """Envelope completo do recurso: apiVersion, kind, metadata, spec, status."""

    metadata: Dict[str, Any]
    spec: ZooKeeperClusterSpec
    status: Optional[ZooKeeperClusterStatus] = None
    api_version: str = GROUP_VERSION
    kind: str = KIND

    @property
    def name(self) -> str:
        return self.metadata["name"]

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.get("namespace")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": dict(self.metadata),
            "spec": self.spec.to_dict(),
        }
        if self.status is not None:
            out["status"] = self.status.to_dict()
        return out


def validate_resource(data: Any) -> ZooKeeperCluster:
    """
    Valida estruturalmente o envelope e materializa um `ZooKeeperCluster`.

    Raises:
        ResourceValidationError: envelope ou campos inválidos.
        UnknownVersionError: versão fora do conjunto suportado.
    """
    if not isinstance(data, dict):
        raise ResourceValidationError("resource must be a mapping")

    api_version = data.get("apiVersion")
    if api_version != GROUP_VERSION:
        raise ResourceValidationError(
            f"expected {GROUP_VERSION!r}, got {api_version!r}", path="apiVersion"
        )

    kind = data.get("kind")
    if kind != KIND:
        raise ResourceValidationError(f"expected {KIND!r}, got {kind!r}", path="kind")

    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        raise ResourceValidationError("must be a mapping", path="metadata")
    name = metadata.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ResourceValidationError("is required", path="metadata.name")

    if "spec" not in data:
        raise ResourceValidationError("is required", path="spec")

    spec = ZooKeeperClusterSpec.from_dict(data["spec"])
    status = None
    if data.get("status") is not None:
        status = ZooKeeperClusterStatus.from_dict(data["status"])

    return ZooKeeperCluster(metadata=dict(metadata), spec=spec, status=status)


def duplicate_node_names(spec: ZooKeeperClusterSpec) -> List[str]:
    """
    Node names que aparecem mais de uma vez em `spec.servers`.

    Retorna em ordem de primeira ocorrência. Lista vazia significa
    ausência de duplicidade; a rejeição é decisão do controller.
    """
    counts = Counter(node_names(spec))
    seen: List[str] = []
    for n in node_names(spec):
        if counts[n] > 1 and n not in seen:
            seen.append(n)
    return seen


# ---------------------------------------------------------------------------
# Documento CRD
# ---------------------------------------------------------------------------

def load_crd_definition(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Carrega o documento CRD (YAML) empacotado com o pacote.

    Raises:
        CrdDefinitionError: se o arquivo não existir, não for YAML
            válido, ou não descrever o recurso `RESOURCE_NAME`.
    """
    p = Path(path) if path is not None else CRD_DEFINITION_PATH
    if not p.exists():
        raise CrdDefinitionError(f"CRD definition not found: {p}")

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CrdDefinitionError(f"invalid CRD definition: {e}") from e

    if not isinstance(data, dict):
        raise CrdDefinitionError("CRD definition root must be a mapping")

    crd_name = (data.get("metadata") or {}).get("name")
    if crd_name != RESOURCE_NAME:
        raise CrdDefinitionError(f"expected CRD {RESOURCE_NAME!r}, got {crd_name!r}")

    return data


def _served_version(crd: Dict[str, Any]) -> Dict[str, Any]:
    for v in (crd.get("spec") or {}).get("versions") or []:
        if v.get("name") == API_VERSION:
            return v
    raise CrdDefinitionError(f"CRD does not serve version {API_VERSION!r}")


def _root_properties(crd: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return _served_version(crd)["schema"]["openAPIV3Schema"]["properties"]
    except (KeyError, TypeError) as e:
        raise CrdDefinitionError("CRD is missing openAPIV3Schema.properties") from e


def crd_spec_schema(crd: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    props = _root_properties(crd if crd is not None else load_crd_definition())
    if "spec" not in props:
        raise CrdDefinitionError("CRD schema has no 'spec' property")
    return props["spec"]


def crd_status_schema(crd: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    props = _root_properties(crd if crd is not None else load_crd_definition())
    if "status" not in props:
        raise CrdDefinitionError("CRD schema has no 'status' property")
    return props["status"]


def crd_version_literals(crd: Optional[Dict[str, Any]] = None) -> List[str]:
    """Literais de versão declarados em `spec.version.enum` no CRD."""
    spec_schema = crd_spec_schema(crd)
    try:
        return list(spec_schema["properties"]["version"]["enum"])
    except (KeyError, TypeError) as e:
        raise CrdDefinitionError("CRD has no spec.version enum") from e


@dataclass
class CrdConsistencyReport:
    """Divergências entre o CRD empacotado e os tipos do core."""

    missing_in_crd: List[str] = field(default_factory=list)
    unknown_in_crd: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing_in_crd and not self.unknown_in_crd


def check_crd_consistency(crd: Optional[Dict[str, Any]] = None) -> CrdConsistencyReport:
    """
    Compara o CRD com a tabela de versões e os campos de configuração.

    Entradas comparadas:
        - `spec.version.enum`            ↔ `supported_literals()`
        - `spec.config.properties` keys  ↔ nomes wire de `ZooKeeperConfiguration`
    """
    crd = crd if crd is not None else load_crd_definition()
    spec_schema = crd_spec_schema(crd)

    expected = [f"version:{v}" for v in supported_literals()]
    expected += [f"config:{FIELD_NAMES[f.name]}" for f in fields(ZooKeeperConfiguration)]

    config_props = ((spec_schema.get("properties") or {}).get("config") or {}).get("properties") or {}
    declared = [f"version:{v}" for v in crd_version_literals(crd)]
    declared += [f"config:{k}" for k in config_props]

    return CrdConsistencyReport(
        missing_in_crd=[e for e in expected if e not in declared],
        unknown_in_crd=[d for d in declared if d not in expected],
    )
