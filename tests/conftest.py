"""
Fixtures compartilhados para testes do ZooKeeper CRD.

Este módulo define fixtures reutilizáveis que fornecem:
- manifestos mínimos do recurso ZooKeeperCluster (YAML como string e dict)
- tabela de propriedades para o validador declarativo de referência
- um cliente de validação que registra as chamadas recebidas

Decisões arquiteturais:
    - Manifestos são fornecidos como texto; testes de loader escrevem em `tmp_path`
    - Dados retornados são determinísticos e isolados por teste
    - O cliente de gravação usa duck typing em vez de herança

Invariantes:
    - Nenhuma fixture realiza I/O de rede
    - Nenhuma fixture depende de variáveis de ambiente
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest


@pytest.fixture
def cluster_manifest_yaml() -> str:
    """Manifesto completo com spec, config parcial e status com uma condition."""
    return """\
apiVersion: zookeeper.stackable.tech/v1
kind: ZooKeeperCluster
metadata:
  name: simple
  namespace: default
spec:
  version: "3.4.14"
  servers:
    - nodeName: node-1
    - nodeName: node-2
  config:
    tickTime: 2000
    dataDir: /var/lib/zookeeper
status:
  currentVersion: "3.4.14"
  targetVersion: "3.5.8"
  conditions:
    - type: Upgrading
      status: "True"
      reason: VersionChange
      message: upgrading to 3.5.8
      lastTransitionTime: "2021-05-03T10:00:00Z"
"""


@pytest.fixture
def cluster_manifest_dict() -> Dict[str, Any]:
    return {
        "apiVersion": "zookeeper.stackable.tech/v1",
        "kind": "ZooKeeperCluster",
        "metadata": {"name": "simple"},
        "spec": {
            "version": "3.5.8",
            "servers": [{"nodeName": "node-1"}],
        },
    }


@pytest.fixture
def zookeeper_property_table() -> Dict[str, Dict[str, Any]]:
    return {
        "clientPort": {"type": "integer", "min": 1, "max": 65535},
        "dataDir": {"type": "string"},
        "initLimit": {"type": "integer", "min": 1},
        "syncLimit": {"type": "integer", "min": 1},
        "tickTime": {"type": "integer", "min": 1, "kinds": ["conf"]},
    }


class RecordingClient:
    """Cliente de validação que aceita tudo e registra os argumentos."""

    def __init__(self, reject: Optional[set] = None) -> None:
        self.calls: List[Tuple[str, Any, str, Optional[str]]] = []
        self._reject = reject or set()

    def validate(self, version, kind, key, value):
        from zookeeper_crd.core.validation import ValidationFailure, Verdict

        self.calls.append((version, kind, key, value))
        if key in self._reject:
            return Verdict.reject(ValidationFailure("REJECTED", f"{key} rejected", {"key": key}))
        return Verdict.accept(value)


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def make_recording_client():
    return RecordingClient
