"""
Quiz Scoring Engine
===================

Turns quiz answers into taste vector adjustments.

Answer types:
    - A / B:   winner-minus-loser delta on tested dimensions, negatives damped
    - both:    two independent winner passes (A then B), no loser subtraction
    - neither: lowers the genres either option belongs to
    - skip:    zero delta

Deltas accumulate with cap-aware scaling: as a dimension nears its bound,
further pushes in that direction shrink in proportion to the remaining
headroom. The working vector is clamped once, after the last answer, so
the order of questions does not change the result through clamping.
"""

import logging
import time
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from .catalog import QuizPair, QuizPhase, pairs_by_id
from .config import (
    ALL_DIMENSIONS,
    GENRE_DIMENSIONS,
    QuizScoringConfig,
    DEFAULT_QUIZ_SCORING,
)
from .vector import (
    TasteVector,
    ConfidenceVector,
    clamp_vector,
    create_empty_confidence,
    create_empty_vector,
    genre_key_to_name,
    get_top_genres,
    is_genre_dimension,
)

logger = logging.getLogger(__name__)

_GENRE_MASK = np.array([dim in GENRE_DIMENSIONS for dim in ALL_DIMENSIONS])


class AnswerChoice(str, Enum):
    A = "A"
    B = "B"
    BOTH = "both"
    NEITHER = "neither"
    SKIP = "skip"


@dataclass(frozen=True)
class QuizAnswer:
    """A single recorded quiz answer."""
    pair_id: str
    chosen_option: AnswerChoice
    phase: QuizPhase
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, "chosen_option", AnswerChoice(self.chosen_option))
        object.__setattr__(self, "phase", QuizPhase(self.phase))

    def to_dict(self) -> Dict:
        return {
            "pair_id": self.pair_id,
            "chosen_option": self.chosen_option.value,
            "phase": self.phase.value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "QuizAnswer":
        return cls(
            pair_id=data["pair_id"],
            chosen_option=data["chosen_option"],
            phase=data.get("phase", QuizPhase.FIXED.value),
            timestamp=float(data.get("timestamp", 0.0)),
        )


def _non_zero(vector: TasteVector) -> Dict[str, float]:
    return {d: round(v, 3) for d, v in vector.items() if v != 0}


class QuizScoringEngine:
    """
    Scores quiz answers against a taste vector.

    Stateless apart from its configuration; every call works on its own
    copy of the vector.
    """

    def __init__(self, config: QuizScoringConfig = DEFAULT_QUIZ_SCORING):
        self.config = config

    def compute_answer_delta(
        self,
        pair: QuizPair,
        choice: Union[AnswerChoice, str],
    ) -> TasteVector:
        """
        Raw (unclamped, unweighted) delta for one answer.

        Dimensions outside pair.dimensions_tested always get 0. Genre values
        in the delta may be negative.

        Args:
            pair: The quiz pair that was shown
            choice: Which option the user picked

        Returns:
            Delta vector
        """
        choice = AnswerChoice(choice)
        delta = create_empty_vector()
        tested = set(pair.dimensions_tested)
        pos_a = pair.option_a.vector_position
        pos_b = pair.option_b.vector_position
        scale = self.config.delta_scale

        if choice == AnswerChoice.SKIP:
            return delta

        if choice == AnswerChoice.BOTH:
            for dim in tested:
                delta[dim] = pos_a.get(dim, 0.0) * scale + pos_b.get(dim, 0.0) * scale

        elif choice == AnswerChoice.NEITHER:
            # Meta axes carry no direction when both options are rejected
            for dim in tested:
                if not is_genre_dimension(dim):
                    continue
                penalty = 0.0
                if pos_a.get(dim, 0.0) > 0:
                    penalty -= self.config.neither_penalty
                if pos_b.get(dim, 0.0) > 0:
                    penalty -= self.config.neither_penalty
                delta[dim] = penalty

        else:
            chosen, unchosen = (pos_a, pos_b) if choice == AnswerChoice.A else (pos_b, pos_a)
            for dim in tested:
                raw = (chosen.get(dim, 0.0) - unchosen.get(dim, 0.0)) * scale
                if raw < 0:
                    raw *= self.config.negative_damping
                delta[dim] = raw

        logger.debug("Delta for %s (%s): %s", pair.id, choice.value, _non_zero(delta))
        return delta

    def compute_quiz_vector(
        self,
        base_vector: TasteVector,
        answers: Iterable[QuizAnswer],
        pairs: Optional[List[QuizPair]] = None,
    ) -> TasteVector:
        """
        Apply quiz answers, in order, on top of a seed vector.

        Args:
            base_vector: Seed vector (cluster or genre based)
            answers: Answers in the order the pairs were presented
            pairs: Pair catalog to resolve answer pair ids (defaults to all pools)

        Returns:
            Final clamped vector
        """
        lookup = pairs_by_id(pairs)
        working = base_vector.values.astype(float).copy()
        threshold = np.where(
            _GENRE_MASK, self.config.genre_cap_threshold, self.config.meta_cap_threshold
        )
        count = 0

        for answer in answers:
            pair = lookup.get(answer.pair_id)
            if pair is None:
                logger.debug("Skipping answer for unknown pair %r", answer.pair_id)
                continue

            delta = self.compute_answer_delta(pair, answer.chosen_option)
            weight = self.config.phase_weights.get(answer.phase.value, 1.0)
            weighted = delta.values * weight

            rising = weighted > 0
            headroom = np.where(
                _GENRE_MASK,
                np.where(rising, 1.0 - working, working),
                np.where(rising, 1.0 - working, working + 1.0),
            )
            magnitude = np.abs(weighted)
            ratio = np.divide(headroom, magnitude, out=np.ones_like(headroom), where=magnitude > 0)
            scale = np.maximum(0.0, np.minimum(1.0, np.minimum(headroom / threshold, ratio)))

            damped = (magnitude > 0) & (scale < 1.0)
            if damped.any():
                logger.debug(
                    "Cap-aware scaling on %s: %s",
                    pair.id,
                    {ALL_DIMENSIONS[i]: round(float(scale[i]), 3) for i in np.flatnonzero(damped)},
                )

            working += weighted * scale
            count += 1

        final = clamp_vector(TasteVector(working))
        logger.debug("Quiz vector after %d answers: %s", count, _non_zero(final))
        return final

    def compute_quiz_confidence(
        self,
        answers: Iterable[QuizAnswer],
        pairs: Optional[List[QuizPair]] = None,
    ) -> ConfidenceVector:
        """Per-dimension confidence: each answer raises its pair's tested dimensions."""
        lookup = pairs_by_id(pairs)
        confidence = create_empty_confidence()

        for answer in answers:
            pair = lookup.get(answer.pair_id)
            if pair is None:
                continue
            gain = self.config.confidence_gains.get(answer.chosen_option.value, 0.0)
            if gain == 0:
                continue
            for dim in pair.dimensions_tested:
                confidence.raise_to(dim, gain)

        return confidence


# =============================================================================
# INSPECTION HELPERS
# =============================================================================

def ambiguity(vector: TasteVector, dim: str) -> float:
    """
    How undecided a dimension is, 1.0 being fully undecided.

    Genre dims peak at the 0.5 midpoint, meta dims at neutral 0.
    """
    value = vector[dim]
    if is_genre_dimension(dim):
        return 1.0 - abs(value - 0.5) * 2
    return 1.0 - abs(value)


def rank_by_ambiguity(vector: TasteVector) -> List[str]:
    """All dimensions, most ambiguous first (ties keep canonical order)."""
    return sorted(ALL_DIMENSIONS, key=lambda d: -ambiguity(vector, d))


def get_most_ambiguous_dimensions(vector: TasteVector, count: int = 5) -> List[str]:
    return rank_by_ambiguity(vector)[:count]


def get_top_genre_names(vector: TasteVector, count: int = 3) -> List[str]:
    """Display names of the strongest genres, e.g. for 'You love: ...'."""
    return [genre_key_to_name(key) for key in get_top_genres(vector, count)]


# Convenience wrappers around a default engine
_DEFAULT_ENGINE = QuizScoringEngine()


def compute_answer_delta(pair: QuizPair, choice: Union[AnswerChoice, str]) -> TasteVector:
    return _DEFAULT_ENGINE.compute_answer_delta(pair, choice)


def compute_quiz_vector(
    base_vector: TasteVector,
    answers: Iterable[QuizAnswer],
    pairs: Optional[List[QuizPair]] = None,
) -> TasteVector:
    return _DEFAULT_ENGINE.compute_quiz_vector(base_vector, answers, pairs)


def compute_quiz_confidence(
    answers: Iterable[QuizAnswer],
    pairs: Optional[List[QuizPair]] = None,
) -> ConfidenceVector:
    return _DEFAULT_ENGINE.compute_quiz_confidence(answers, pairs)
