"""
Exceções canônicas do modelo de recurso ZooKeeperCluster.

Este módulo define a hierarquia oficial de exceções levantadas durante
o parsing de versões, a materialização tipada do recurso e a projeção
de configuração.

As exceções aqui definidas representam **violações explícitas de
contrato**, e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de entrada do usuário e violações de invariante são distintos
    - Nenhuma falha é resolvida silenciosamente

Invariantes:
    - Todas as exceções herdam de `ZooKeeperCrdError`
    - Duplicidade de servidores e rejeições do serviço de validação
      não são exceções (são retornadas como dados)

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra logs
"""

from __future__ import annotations

from typing import Any, Optional


class ZooKeeperCrdError(Exception):
    """Exceção base de todo o pacote."""


# ---------------------------------------------------------------------------
# Versões
# ---------------------------------------------------------------------------

class VersionError(ZooKeeperCrdError):
    """Erro base do domínio de versões."""


class UnknownVersionError(VersionError, ValueError):
    """
    String de versão não corresponde a nenhuma versão suportada.

    Este é o check de fronteira usado quando o usuário informa uma versão.
    O controller deve rejeitar a atualização do recurso inteira, sem
    aplicação parcial.
    """

    def __init__(self, value: Any, supported: Optional[list] = None) -> None:
        self.value = value
        self.supported = list(supported or [])
        msg = f"unknown ZooKeeper version: {value!r}"
        if self.supported:
            msg += f" (supported: {', '.join(self.supported)})"
        super().__init__(msg)


class VersionParseError(VersionError):
    """
    Literal de versão não é compatível com semantic versioning.

    Indica inconsistência entre o enum e a tabela de literais, ou seja,
    uma violação de invariante de programação e não um erro do usuário.
    """


class VersionTableError(VersionError):
    """Tabela enum ↔ literal incompleta ou ambígua."""


# ---------------------------------------------------------------------------
# Recurso
# ---------------------------------------------------------------------------

class ResourceError(ZooKeeperCrdError):
    """Erro base do carregamento e validação do recurso."""


class ResourceFileNotFoundError(ResourceError):
    """Arquivo do recurso não existe no caminho informado."""


class UnsupportedResourceFormatError(ResourceError):
    """Formato de arquivo não suportado (YAML/JSON)."""


class ResourceParseError(ResourceError):
    """Falha ao parsear YAML/JSON ou raiz que não é um mapping."""


class ResourceValidationError(ResourceError, ValueError):
    """Recurso não é estruturalmente válido segundo o schema."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class CrdDefinitionError(ResourceError):
    """Documento CRD empacotado ausente ou inválido."""


# ---------------------------------------------------------------------------
# Projeção
# ---------------------------------------------------------------------------

class ProjectionError(ZooKeeperCrdError):
    """Valor não pode ser projetado para a forma chave/valor plana."""
