"""ZooKeeper CRD — core.

Componentes canônicos do recurso ZooKeeperCluster:
 - versões suportadas e regras de upgrade
 - tipos de spec/status e serialização wire
 - projeção de configuração e contrato de validação
 - CRD empacotado e loader de manifestos

O core é puro: sem I/O de rede, sem estado global mutável.
"""

from .errors import (  # noqa: F401
    ZooKeeperCrdError,
    VersionError,
    UnknownVersionError,
    VersionParseError,
    VersionTableError,
    ResourceError,
    ResourceFileNotFoundError,
    UnsupportedResourceFormatError,
    ResourceParseError,
    ResourceValidationError,
    CrdDefinitionError,
    ProjectionError,
)

from .version import (  # noqa: F401
    ZooKeeperVersion,
    VERSION_TABLE,
    compare_versions,
    format_version,
    is_valid_upgrade,
    parse_semver,
    parse_version,
    semver_triple,
    supported_literals,
    supported_versions,
)
from .cluster import (  # noqa: F401
    IMAGE_REPOSITORY,
    Condition,
    ZooKeeperClusterSpec,
    ZooKeeperClusterStatus,
    ZooKeeperConfiguration,
    ZooKeeperServer,
)
from .hashing import compute_config_hash  # noqa: F401
from .projector import project_config, to_hash_map  # noqa: F401
from .schema import (  # noqa: F401
    RESOURCE_NAME,
    ZooKeeperCluster,
    check_crd_consistency,
    duplicate_node_names,
    load_crd_definition,
    validate_resource,
)
from .loader import load_cluster_resource, load_cluster_spec  # noqa: F401
from .validation import (  # noqa: F401
    OptionKind,
    StaticPropertyValidator,
    ValidationClient,
    ValidationFailure,
    ValidationReport,
    Verdict,
    validate_config,
)
