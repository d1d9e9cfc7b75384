"""Multi-round debate between providers until agreement or budget exhaustion."""

import logging
from typing import Callable

from orchestra.analysis.fanout import gather_responses
from orchestra.analysis.similarity import average_pairwise_similarity
from orchestra.config import OrchestraSettings
from orchestra.core.exceptions import ConfigurationError, NoProvidersError
from orchestra.core.models import DebateOptions, DebateResult, DebateRound, Response
from orchestra.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.7
DEFAULT_MAX_ROUNDS = 3
PREVIEW_LENGTH = 200


def build_debate_prompt(original_prompt: str, rounds: list[DebateRound]) -> str:
    """Restate the question with a preview of every answer from the last round."""
    last_round = rounds[-1]
    perspectives = "\n".join(
        f"{arg.provider}: {arg.content[:PREVIEW_LENGTH]}..."
        for arg in last_round.arguments
    )

    return (
        f"\nOriginal question: {original_prompt}\n"
        f"\nPrevious perspectives:\n{perspectives}\n"
        "\nPlease reconsider your response taking into account these other viewpoints.\n"
        "Aim for consensus while maintaining your analytical rigor."
    )


def calculate_agreement(responses: list[Response]) -> float:
    """Average pairwise similarity of a round's answers."""
    return average_pairwise_similarity([r.content for r in responses])


class DebateCoordinator:
    """
    Runs sequential consensus rounds, feeding prior answers back in.

    Each round queries every participant concurrently with the current
    prompt. While agreement stays below the threshold and rounds remain,
    the next prompt is rebuilt from the original question plus a preview of
    each provider's last answer. Reaching the threshold and running out of
    rounds are both normal endings.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        settings: OrchestraSettings | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or OrchestraSettings()

    def _resolve_threshold(self, options: DebateOptions) -> float:
        if options.threshold is not None:
            return options.threshold
        if self._settings.consensus_threshold is not None:
            return self._settings.consensus_threshold
        return DEFAULT_THRESHOLD

    def _resolve_max_rounds(self, options: DebateOptions) -> int:
        max_rounds = options.max_rounds
        if max_rounds is None:
            max_rounds = self._settings.max_debate_rounds or DEFAULT_MAX_ROUNDS
        if max_rounds < 1:
            raise ConfigurationError(
                "max_rounds must be a positive integer",
                details={"max_rounds": max_rounds},
            )
        return max_rounds

    def resolve_participants(self, providers: list[str] | None) -> list[str]:
        names = list(providers) if providers is not None else self._registry.list()
        if not names:
            raise NoProvidersError("No providers available for debate")
        return names

    async def debate(
        self,
        prompt: str,
        options: DebateOptions | None = None,
        on_round: Callable[[DebateRound], None] | None = None,
    ) -> DebateResult:
        """
        Run a structured debate.

        Args:
            prompt: The question under debate
            options: Participants, threshold, and round budget overrides
            on_round: Called after each round is recorded

        Returns:
            DebateResult with every round and the final decision
        """
        options = options or DebateOptions()
        threshold = self._resolve_threshold(options)
        max_rounds = self._resolve_max_rounds(options)
        participants = self.resolve_participants(options.providers)

        rounds: list[DebateRound] = []
        agreement = 0.0
        round_number = 0
        current_prompt = prompt

        # The first round always runs, even for a threshold of 0.
        while round_number == 0 or (
            agreement < threshold and round_number < max_rounds
        ):
            round_number += 1

            responses = await gather_responses(
                self._registry, participants, current_prompt
            )
            agreement = calculate_agreement(responses)

            debate_round = DebateRound(
                round=round_number,
                arguments=responses,
                agreement=agreement,
            )
            rounds.append(debate_round)

            logger.debug("Debate round %d agreement %.2f", round_number, agreement)
            if on_round:
                on_round(debate_round)

            if agreement < threshold and round_number < max_rounds:
                current_prompt = build_debate_prompt(prompt, rounds)

        logger.info(
            "Debate finished after %d round(s): agreement %.2f (threshold %.2f)",
            round_number,
            agreement,
            threshold,
        )

        return DebateResult(
            decision=self._synthesize_decision(rounds),
            rounds=rounds,
            agreement=agreement,
            participants=participants,
            confidence=agreement,
        )

    def _synthesize_decision(self, rounds: list[DebateRound]) -> str:
        """First answer of the final round."""
        return rounds[-1].arguments[0].content
