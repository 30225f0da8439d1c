"""
Projeção de configuração tipada → mapa plano chave/valor.

Este módulo converte `ZooKeeperConfiguration` no formato plano
`{nome da opção: valor em texto}` consumido pelo serviço externo de
validação de configuração.

Política de projeção (v1):
    - Um campo presente gera exatamente uma entrada
    - A chave é o nome canônico externo da opção (ex.: `tickTime`)
    - Inteiros são renderizados em base 10, paths são copiados verbatim
    - Campos ausentes não geram entrada (nenhum default é sintetizado)

Invariantes:
    - O conjunto de chaves é exatamente o conjunto de campos presentes
    - Entradas iguais produzem saídas iguais, na mesma ordem
    - Nenhuma mutação ocorre sobre o input

Limites explícitos:
    - Não valida valores (responsabilidade do serviço externo)
    - Não aplica defaults
    - Não escreve arquivos nem configmaps
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .cluster import ZooKeeperConfiguration
from .errors import ProjectionError
from .naming import FIELD_NAMES


def _render(value: Any, *, key: str) -> str:
    # bool antes de int: bool é subclasse de int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise ProjectionError(
        f"cannot project field '{key}' of type {type(value).__name__} to a flat value"
    )


def to_hash_map(obj: Any) -> Dict[str, str]:
    """
    Projeta qualquer dataclass de campos escalares em um mapa plano.

    Campos `None` são omitidos. Estruturas aninhadas (mappings,
    sequências, dataclasses) e floats não são achatados.

    Raises:
        ProjectionError: se `obj` não for dataclass, se um campo não
            tiver nome wire, ou se um valor não for escalar suportado.
    """
    if not is_dataclass(obj) or isinstance(obj, type):
        raise ProjectionError(f"expected a dataclass instance, got {type(obj).__name__}")

    out: Dict[str, str] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        key = FIELD_NAMES.get(f.name)
        if key is None:
            raise ProjectionError(f"no wire name for field '{f.name}'")
        out[key] = _render(value, key=key)
    return out


def project_config(config: Optional[ZooKeeperConfiguration]) -> Dict[str, str]:
    """
    Projeta a configuração do cluster no formato do serviço de validação.

    Um `config` ausente (`None`) é equivalente a uma configuração com
    todos os campos ausentes e projeta para `{}`.

    Exemplo:
        >>> project_config(ZooKeeperConfiguration(tick_time=123))
        {'tickTime': '123'}
    """
    if config is None:
        return {}
    if not isinstance(config, ZooKeeperConfiguration):
        raise ProjectionError(
            f"expected ZooKeeperConfiguration, got {type(config).__name__}"
        )
    return to_hash_map(config)
