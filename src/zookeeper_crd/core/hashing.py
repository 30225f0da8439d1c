"""Fingerprint de uma configuração projetada.

O `ValidationReport` carrega o hash do mapa que foi efetivamente validado,
permitindo ao controller comparar reconciliações sem guardar o mapa inteiro.

Política (v1): JSON canônico (chaves ordenadas, separadores compactos,
UTF-8) → SHA-256 hexadecimal. Só mapas planos `str → str` são aceitos,
ou seja, a saída de `project_config`.
"""

from __future__ import annotations

import hashlib
import json
from typing import Mapping

from .errors import ProjectionError


def compute_config_hash(projected: Mapping[str, str]) -> str:
    """
    Hash determinístico de um mapa projetado `{opção: valor}`.

    Mapas iguais produzem o mesmo hash independentemente da ordem das
    chaves; o mapa vazio também possui hash estável.

    Raises:
        TypeError: se `projected` não for um mapping.
        ProjectionError: se alguma chave ou valor não for string.
    """
    if not isinstance(projected, Mapping):
        raise TypeError(f"projected config must be a mapping, got {type(projected).__name__}")

    for key, value in projected.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ProjectionError(
                f"projected config must map str to str, got {key!r}: {type(value).__name__}"
            )

    payload = json.dumps(dict(projected), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
