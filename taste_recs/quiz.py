"""
Quiz Session
============

Walks a user through the three quiz phases:

1. Fixed pairs, the same for everyone
2. Genre-responsive pairs, picked from the user's genres and clusters
3. Adaptive pairs, picked once the first two phases have produced an
   interim vector

The session only tracks which pair comes next and what was answered; all
vector math is delegated to QuizScoringEngine.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from .catalog import QuizPair
from .clusters import compute_cluster_seed_vector, get_top_genre_keys_from_clusters
from .errors import QuizStateError
from .scoring import AnswerChoice, QuizAnswer, QuizScoringEngine, get_top_genre_names
from .selector import PairSelector
from .vector import ConfidenceVector, TasteVector, create_empty_vector, vector_to_dict

logger = logging.getLogger(__name__)


@dataclass
class QuizResult:
    """Outcome of a completed quiz."""
    vector: TasteVector
    confidence: ConfidenceVector
    answers: List[QuizAnswer]
    top_genres: List[str]
    seed_vector: TasteVector

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "vector": {d: round(v, 4) for d, v in vector_to_dict(self.vector).items()},
            "confidence": self.confidence.to_dict(),
            "answers": [a.to_dict() for a in self.answers],
            "top_genres": list(self.top_genres),
            "seed_vector": {d: round(v, 4) for d, v in vector_to_dict(self.seed_vector).items()},
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class QuizSession:
    """
    Stateful driver for one run of the taste quiz.

    Usage:
        session = QuizSession.from_clusters(["dark-thrillers", "history-war"])
        while not session.is_complete:
            pair = session.current_pair()
            session.answer("A")
        result = session.result()
    """

    def __init__(
        self,
        seed_vector: Optional[TasteVector] = None,
        user_genre_keys: Iterable[str] = (),
        selected_cluster_ids: Iterable[str] = (),
        selector: Optional[PairSelector] = None,
        scorer: Optional[QuizScoringEngine] = None,
    ):
        self.seed_vector = seed_vector.copy() if seed_vector is not None else create_empty_vector()
        self.user_genre_keys = list(user_genre_keys)
        self.selected_cluster_ids = list(selected_cluster_ids)
        self.selector = selector or PairSelector()
        self.scorer = scorer or QuizScoringEngine()

        self.answers: List[QuizAnswer] = []
        self._pairs: List[QuizPair] = self.selector.get_fixed_pairs()
        self._genre_phase_added = False
        self._adaptive_phase_added = False

    @classmethod
    def from_clusters(cls, cluster_ids: Iterable[str], **kwargs) -> "QuizSession":
        """Session seeded from onboarding clusters, using their top genres for selection."""
        cluster_ids = list(cluster_ids)
        return cls(
            seed_vector=compute_cluster_seed_vector(cluster_ids),
            user_genre_keys=get_top_genre_keys_from_clusters(cluster_ids),
            selected_cluster_ids=cluster_ids,
            **kwargs,
        )

    @property
    def pairs(self) -> List[QuizPair]:
        """Pairs scheduled so far (later phases appear as earlier ones finish)."""
        return list(self._pairs)

    @property
    def expected_total(self) -> int:
        cfg = self.selector.config
        return len(self.selector.fixed_pairs) + cfg.genre_responsive_count + cfg.adaptive_count

    def _schedule_next_phase(self) -> None:
        if len(self.answers) < len(self._pairs):
            return

        if not self._genre_phase_added:
            self._genre_phase_added = True
            fixed_ids = [p.id for p in self._pairs]
            self._pairs.extend(
                self.selector.select_genre_responsive_pairs(
                    self.user_genre_keys, fixed_ids, self.selected_cluster_ids
                )
            )
            if len(self.answers) < len(self._pairs):
                return

        if not self._adaptive_phase_added:
            self._adaptive_phase_added = True
            interim = self.interim_vector()
            used = [p.id for p in self._pairs]
            self._pairs.extend(self.selector.select_adaptive_pairs(interim, used))

    def interim_vector(self) -> TasteVector:
        """Vector implied by the answers given so far."""
        return self.scorer.compute_quiz_vector(self.seed_vector, self.answers, self._pairs)

    def current_pair(self) -> Optional[QuizPair]:
        """The pair to show next, or None once the quiz is complete."""
        self._schedule_next_phase()
        index = len(self.answers)
        return self._pairs[index] if index < len(self._pairs) else None

    @property
    def is_complete(self) -> bool:
        return self.current_pair() is None

    def answer(
        self,
        choice: Union[AnswerChoice, str],
        timestamp: Optional[float] = None,
    ) -> QuizAnswer:
        """
        Record the user's answer to the current pair and advance.

        Raises:
            QuizStateError: The quiz is already complete
        """
        pair = self.current_pair()
        if pair is None:
            raise QuizStateError("Quiz is already complete")

        recorded = QuizAnswer(
            pair_id=pair.id,
            chosen_option=AnswerChoice(choice),
            phase=pair.phase,
            timestamp=time.time() if timestamp is None else timestamp,
        )
        self.answers.append(recorded)
        logger.debug("Answered %s with %s", pair.id, recorded.chosen_option.value)
        return recorded

    def result(self) -> QuizResult:
        """
        Final vector and confidence.

        Raises:
            QuizStateError: There are still unanswered pairs
        """
        if not self.is_complete:
            raise QuizStateError(
                f"Quiz not finished: {len(self.answers)} of {len(self._pairs)} answered"
            )
        vector = self.scorer.compute_quiz_vector(self.seed_vector, self.answers, self._pairs)
        confidence = self.scorer.compute_quiz_confidence(self.answers, self._pairs)
        return QuizResult(
            vector=vector,
            confidence=confidence,
            answers=list(self.answers),
            top_genres=get_top_genre_names(vector),
            seed_vector=self.seed_vector.copy(),
        )
