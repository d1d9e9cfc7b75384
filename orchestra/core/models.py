"""Core domain models for Orchestra."""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from orchestra.core.enums import ConsensusMode


class TokenUsage(BaseModel):
    """Token accounting reported by a provider."""

    model_config = ConfigDict(frozen=True)

    input: int = Field(default=0, ge=0)
    output: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class Response(BaseModel):
    """A single provider completion. Immutable once returned."""

    model_config = ConfigDict(frozen=True)

    content: str
    provider: str
    model: str | None = None
    tokens: TokenUsage | None = None
    cost: float | None = Field(default=None, ge=0)
    latency_ms: float | None = Field(default=None, ge=0)


class QueryOptions(BaseModel):
    """Per-call options passed through to a provider."""

    provider: str | None = None
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0, le=2)
    stream: bool = False


class ConsensusOptions(BaseModel):
    """Options for a single consensus round."""

    providers: list[str] | None = None
    mode: ConsensusMode = ConsensusMode.DEMOCRATIC
    weights: dict[str, float] | None = None
    threshold: float | None = Field(default=None, ge=0, le=1)
    max_rounds: int | None = Field(default=None, ge=1)
    show_debate: bool = False


class DebateOptions(BaseModel):
    """Options for a multi-round debate."""

    providers: list[str] | None = None
    max_rounds: int | None = None
    threshold: float | None = Field(default=None, ge=0, le=1)
    stream: bool = False


class ConsensusMetadata(BaseModel):
    """Bookkeeping for a consensus call."""

    rounds: int = 1
    total_time_ms: float = 0.0
    total_cost: float = 0.0


class ConsensusResult(BaseModel):
    """Aggregated majority answer from one parallel round."""

    result: str
    confidence: float = Field(ge=0, le=1)
    agreement: float = Field(ge=0, le=1)
    providers: list[str]
    reasoning: str
    dissenting: list[Response] | None = None
    metadata: ConsensusMetadata = Field(default_factory=ConsensusMetadata)

    @computed_field
    @property
    def dissent_count(self) -> int:
        """Number of responses outside the majority group."""
        return len(self.dissenting) if self.dissenting else 0


class DebateRound(BaseModel):
    """One round of a debate."""

    round: int = Field(ge=1)
    arguments: list[Response]
    agreement: float = Field(ge=0, le=1)
    synthesis: str | None = None


class DebateResult(BaseModel):
    """Outcome of a multi-round debate."""

    decision: str
    rounds: list[DebateRound]
    agreement: float = Field(ge=0, le=1)
    participants: list[str]
    confidence: float = Field(ge=0, le=1)

    @computed_field
    @property
    def round_count(self) -> int:
        """Number of rounds actually run."""
        return len(self.rounds)
