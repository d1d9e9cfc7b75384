"""Core enumerations for Orchestra."""

from enum import Enum


class ProviderKind(str, Enum):
    """Adapter used to build a provider from its configuration."""

    ANTHROPIC = "anthropic"
    SIMULATED = "simulated"

    def __str__(self) -> str:
        return self.value


class ConsensusMode(str, Enum):
    """
    Requested consensus mode.

    Only lexical majority grouping is implemented; WEIGHTED and HIERARCHICAL
    are accepted so callers can pass them through, and behave as DEMOCRATIC.
    """

    DEMOCRATIC = "democratic"
    WEIGHTED = "weighted"
    HIERARCHICAL = "hierarchical"

    def __str__(self) -> str:
        return self.value


class OrchestraEvent(str, Enum):
    """Lifecycle events emitted by the Orchestra facade."""

    INITIALIZED = "initialized"
    CONSENSUS_START = "consensus:start"
    CONSENSUS_COMPLETE = "consensus:complete"
    DEBATE_START = "debate:start"
    DEBATE_ROUND = "debate:round"
    DEBATE_COMPLETE = "debate:complete"
    PROVIDER_ADDED = "provider:added"
    PROVIDER_REMOVED = "provider:removed"

    def __str__(self) -> str:
        return self.value
