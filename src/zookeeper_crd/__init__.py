"""
ZooKeeper CRD — modelo declarativo do recurso ZooKeeperCluster.

Este pacote define o modelo tipado consumido por um controller de ciclo
de vida de ensembles ZooKeeper: estado desejado e observado do cluster,
regras de upgrade de versão e a projeção da configuração tipada para o
formato plano do serviço externo de validação.

Arquitetura em alto nível:
    - core.version    → versões suportadas, ordenação e upgrade
    - core.cluster    → spec, status, servers, configuration, conditions
    - core.projector  → configuração tipada → mapa chave/valor
    - core.validation → contrato com o serviço de validação
    - core.schema     → identidade do recurso e CRD empacotado
    - core.loader     → leitura de manifestos YAML/JSON

Limites explícitos:
    - Não executa o loop de reconciliação
    - Não registra o CRD no API server
    - Não gera pod specs nem configmaps
"""
from .core import (
    ZooKeeperCluster,
    ZooKeeperClusterSpec,
    ZooKeeperClusterStatus,
    ZooKeeperConfiguration,
    ZooKeeperServer,
    ZooKeeperVersion,
    is_valid_upgrade,
    parse_version,
    project_config,
)

__all__ = [
    "ZooKeeperCluster",
    "ZooKeeperClusterSpec",
    "ZooKeeperClusterStatus",
    "ZooKeeperConfiguration",
    "ZooKeeperServer",
    "ZooKeeperVersion",
    "is_valid_upgrade",
    "parse_version",
    "project_config",
]
