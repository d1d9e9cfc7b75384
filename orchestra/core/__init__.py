"""Core domain models, enums, and exceptions."""

from orchestra.core.enums import (
    ProviderKind,
    ConsensusMode,
    OrchestraEvent,
)
from orchestra.core.exceptions import (
    OrchestraError,
    ConfigurationError,
    ProviderNotFoundError,
    NoProvidersError,
    ProviderCallError,
    ProviderAPIError,
    OrchestraTimeoutError,
)
from orchestra.core.models import (
    TokenUsage,
    Response,
    QueryOptions,
    ConsensusOptions,
    DebateOptions,
    ConsensusMetadata,
    ConsensusResult,
    DebateRound,
    DebateResult,
)

__all__ = [
    "ProviderKind",
    "ConsensusMode",
    "OrchestraEvent",
    "OrchestraError",
    "ConfigurationError",
    "ProviderNotFoundError",
    "NoProvidersError",
    "ProviderCallError",
    "ProviderAPIError",
    "OrchestraTimeoutError",
    "TokenUsage",
    "Response",
    "QueryOptions",
    "ConsensusOptions",
    "DebateOptions",
    "ConsensusMetadata",
    "ConsensusResult",
    "DebateRound",
    "DebateResult",
]
