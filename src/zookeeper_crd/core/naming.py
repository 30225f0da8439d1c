"""Tabela explícita de nomes de campo: interno (snake_case) → wire (lowerCamelCase).

O recurso no API server usa lowerCamelCase; os tipos Python usam snake_case.
A tabela é a fonte única desse mapeamento e é verificada como bijeção no import.
"""

from __future__ import annotations

from typing import Dict


FIELD_NAMES: Dict[str, str] = {
    # ZooKeeperClusterSpec
    "version": "version",
    "servers": "servers",
    "config": "config",
    # ZooKeeperServer
    "node_name": "nodeName",
    # ZooKeeperConfiguration
    "client_port": "clientPort",
    "data_dir": "dataDir",
    "init_limit": "initLimit",
    "sync_limit": "syncLimit",
    "tick_time": "tickTime",
    # ZooKeeperClusterStatus
    "current_version": "currentVersion",
    "target_version": "targetVersion",
    "conditions": "conditions",
    # Condition
    "type": "type",
    "status": "status",
    "reason": "reason",
    "message": "message",
    "last_transition_time": "lastTransitionTime",
    "observed_generation": "observedGeneration",
}

WIRE_NAMES: Dict[str, str] = {wire: internal for internal, wire in FIELD_NAMES.items()}

if len(WIRE_NAMES) != len(FIELD_NAMES):  # pragma: no cover
    raise RuntimeError("FIELD_NAMES must be a bijection")


def to_wire_name(field_name: str) -> str:
    try:
        return FIELD_NAMES[field_name]
    except KeyError:
        raise KeyError(f"no wire name for field: {field_name}") from None


def from_wire_name(wire_name: str) -> str:
    try:
        return WIRE_NAMES[wire_name]
    except KeyError:
        raise KeyError(f"unknown wire field: {wire_name}") from None
