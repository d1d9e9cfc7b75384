"""Majority-group consensus over parallel provider responses."""

import logging
import math
import time

from orchestra.analysis.fanout import gather_responses
from orchestra.analysis.similarity import SIMILARITY_THRESHOLD, are_similar
from orchestra.core.exceptions import NoProvidersError
from orchestra.core.models import (
    ConsensusMetadata,
    ConsensusOptions,
    ConsensusResult,
    Response,
)
from orchestra.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

UNANIMITY_BOOST = 1.2


def group_similar_responses(
    responses: list[Response],
    threshold: float = SIMILARITY_THRESHOLD,
) -> list[list[Response]]:
    """
    Partition responses into groups of similar content.

    Single greedy pass: each still-ungrouped response seeds a new group and
    absorbs every later ungrouped response similar to the seed. Membership
    is decided against the seed only, so two members of one group need not
    be similar to each other. Deterministic for a fixed input order.
    """
    groups: list[list[Response]] = []
    used: set[int] = set()

    for i, seed in enumerate(responses):
        if i in used:
            continue

        group = [seed]
        used.add(i)

        for j in range(i + 1, len(responses)):
            if j in used:
                continue
            if are_similar(seed.content, responses[j].content, threshold):
                group.append(responses[j])
                used.add(j)

        groups.append(group)

    return groups


def find_majority_group(groups: list[list[Response]]) -> list[Response]:
    """Largest group; ties go to the group formed first."""
    majority = groups[0]
    for group in groups[1:]:
        if len(group) > len(majority):
            majority = group
    return majority


def calculate_confidence(
    majority_group: list[Response],
    all_responses: list[Response],
) -> float:
    """Agreement ratio, boosted by 20% (capped at 1.0) when unanimous."""
    confidence = len(majority_group) / len(all_responses)

    if len(majority_group) == len(all_responses):
        confidence = min(1.0, confidence * UNANIMITY_BOOST)

    return confidence


class ConsensusEngine:
    """
    Builds a single answer from one parallel round of provider responses.

    The algorithm:
    1. Resolves the provider set (explicit list or every registered name)
    2. Queries all providers concurrently (all-or-nothing)
    3. Groups responses by lexical similarity
    4. Picks the largest group as the majority
    5. Scores agreement and confidence
    6. Returns the first majority response as the answer, plus dissent
    """

    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry = registry

    def resolve_providers(self, providers: list[str] | None) -> list[str]:
        """Explicit provider list, else every registered provider."""
        names = list(providers) if providers is not None else self._registry.list()
        if not names:
            raise NoProvidersError()
        return names

    async def build_consensus(
        self,
        prompt: str,
        options: ConsensusOptions | None = None,
    ) -> ConsensusResult:
        """
        Build consensus from multiple provider responses.

        Args:
            prompt: Prompt sent unchanged to every provider
            options: Provider selection; mode and weights are accepted but
                do not change the grouping

        Returns:
            ConsensusResult with majority answer, scores, and dissent
        """
        started = time.perf_counter()
        options = options or ConsensusOptions()

        provider_names = self.resolve_providers(options.providers)
        responses = await gather_responses(self._registry, provider_names, prompt)

        result = self.calculate_consensus(responses)

        total_time_ms = (time.perf_counter() - started) * 1000
        total_cost = sum(r.cost or 0.0 for r in responses)

        logger.info(
            "Consensus across %d providers: agreement %.2f, confidence %.2f",
            len(responses),
            result.agreement,
            result.confidence,
        )

        return result.model_copy(
            update={
                "providers": provider_names,
                "metadata": ConsensusMetadata(
                    rounds=1,
                    total_time_ms=total_time_ms,
                    total_cost=total_cost,
                ),
            }
        )

    def calculate_consensus(self, responses: list[Response]) -> ConsensusResult:
        """Score an already-collected response set. No I/O."""
        if not responses:
            raise NoProvidersError("No responses to calculate consensus")

        groups = group_similar_responses(responses)
        majority = find_majority_group(groups)

        agreement = len(majority) / len(responses)
        confidence = calculate_confidence(majority, responses)

        majority_ids = {id(r) for r in majority}
        dissenting = [r for r in responses if id(r) not in majority_ids]

        return ConsensusResult(
            result=self._synthesize_response(majority),
            confidence=confidence,
            agreement=agreement,
            providers=[r.provider for r in responses],
            reasoning=self._generate_reasoning(majority, dissenting),
            dissenting=dissenting or None,
        )

    def _synthesize_response(self, group: list[Response]) -> str:
        """Extractive synthesis: the first response of the group."""
        return group[0].content

    def _generate_reasoning(
        self,
        majority: list[Response],
        dissenting: list[Response],
    ) -> str:
        """Generate human-readable consensus reasoning."""
        total = len(majority) + len(dissenting)
        agreement_percent = math.floor(len(majority) / total * 100 + 0.5)

        reasoning = f"{agreement_percent}% of models agreed on this response."

        if dissenting:
            reasoning += (
                f" {len(dissenting)} model(s) provided alternative perspectives."
            )

        return reasoning
