"""
Orchestra - Multi-provider LLM orchestration

Query several text-generation providers at once and combine their answers
by majority consensus or by multi-round debate.
"""

__version__ = "0.1.0"

from orchestra.analysis.orchestrator import Orchestra
from orchestra.config import OrchestraSettings, ProviderConfig
from orchestra.core.enums import ConsensusMode, OrchestraEvent, ProviderKind
from orchestra.providers.base import Provider

__all__ = [
    "__version__",
    "Orchestra",
    "OrchestraSettings",
    "ProviderConfig",
    "ConsensusMode",
    "OrchestraEvent",
    "ProviderKind",
    "Provider",
]
