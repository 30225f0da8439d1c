"""Loader canônico do recurso ZooKeeperCluster (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo.
- O formato é inferido pela extensão do arquivo.
- Após o parsing, o documento passa pela validação estrutural de `schema`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .cluster import ZooKeeperClusterSpec
from .errors import (
    ResourceFileNotFoundError,
    ResourceParseError,
    UnsupportedResourceFormatError,
)
from .schema import ZooKeeperCluster, validate_resource


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Carrega um documento YAML/JSON cuja raiz deve ser um mapping.

    Raises:
        ResourceFileNotFoundError: se arquivo não existir.
        UnsupportedResourceFormatError: se extensão não suportada.
        ResourceParseError: se parsing falhar ou a raiz não for mapping.
    """
    p = Path(path)
    if not p.exists():
        raise ResourceFileNotFoundError(f"resource file not found: {p}")

    suffix = p.suffix.lower()
    if suffix not in {".yml", ".yaml", ".json"}:
        raise UnsupportedResourceFormatError(f"unsupported resource format: {suffix}")

    raw = p.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResourceParseError(str(e) or "failed to parse resource") from e

    if data is None:
        # YAML vazio -> None
        raise ResourceParseError("resource file is empty")

    if not isinstance(data, dict):
        raise ResourceParseError("resource root must be a mapping/dict")

    return data


def load_cluster_resource(path: Union[str, Path]) -> ZooKeeperCluster:
    """Carrega e valida um manifesto completo de `ZooKeeperCluster`."""
    return validate_resource(load_document(path))


def load_cluster_spec(path: Union[str, Path]) -> ZooKeeperClusterSpec:
    """Carrega um documento contendo apenas o `spec` do cluster."""
    return ZooKeeperClusterSpec.from_dict(load_document(path))
