"""
Quiz Pair Selection
===================

Picks which comparisons the user sees in each quiz phase:

1. Fixed: the same pairs for everyone, in order
2. Genre-responsive: pairs triggered by the user's genres and clusters
3. Adaptive: pairs that test the interim vector's most ambiguous dimensions

Selection is total. When the preferred constraints cannot be met, they are
relaxed in order (match requirement first, then title overlap) so that the
requested number of pairs always comes back when the pool is big enough.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .catalog import (
    QuizPair,
    FIXED_PAIRS,
    FIXED_PAIR_GENRES,
    GENRE_RESPONSIVE_POOL,
    ADAPTIVE_POOL,
)
from .config import SelectionConfig, DEFAULT_SELECTION
from .scoring import ambiguity, rank_by_ambiguity
from .vector import TasteVector, genre_name_to_key

logger = logging.getLogger(__name__)

ScoredPair = Tuple[QuizPair, float]


def _greedy_select(
    ranked: Sequence[ScoredPair],
    count: int,
    blocked_ids: Set[int],
) -> List[QuizPair]:
    """
    Take up to `count` pairs from a ranked list in three passes:

    1. positive score, no content id shared with blocked ids or each other
    2. any score, still no shared content ids
    3. any remaining pair, overlap allowed
    """
    selected: List[QuizPair] = []
    chosen_ids: Set[str] = set()
    taken = set(blocked_ids)

    passes = ((True, True), (False, True), (False, False))
    for require_match, avoid_overlap in passes:
        for pair, score in ranked:
            if len(selected) >= count:
                return selected
            if pair.id in chosen_ids:
                continue
            if require_match and score <= 0:
                continue
            if avoid_overlap and taken.intersection(pair.content_ids):
                continue
            selected.append(pair)
            chosen_ids.add(pair.id)
            taken.update(pair.content_ids)
    return selected


class PairSelector:
    """
    Chooses quiz pairs for each phase.

    Pools default to the built-in catalog; tests can inject their own.
    """

    def __init__(
        self,
        fixed_pairs: Optional[List[QuizPair]] = None,
        genre_pool: Optional[List[QuizPair]] = None,
        adaptive_pool: Optional[List[QuizPair]] = None,
        covered_genres: Optional[Iterable[str]] = None,
        config: SelectionConfig = DEFAULT_SELECTION,
    ):
        self.fixed_pairs = list(FIXED_PAIRS if fixed_pairs is None else fixed_pairs)
        self.genre_pool = list(GENRE_RESPONSIVE_POOL if genre_pool is None else genre_pool)
        self.adaptive_pool = list(ADAPTIVE_POOL if adaptive_pool is None else adaptive_pool)
        self.covered_genres = frozenset(FIXED_PAIR_GENRES if covered_genres is None else covered_genres)
        self.config = config

    @property
    def all_pairs(self) -> List[QuizPair]:
        return self.fixed_pairs + self.genre_pool + self.adaptive_pool

    def get_fixed_pairs(self) -> List[QuizPair]:
        return list(self.fixed_pairs)

    def _content_ids_of(self, pair_ids: Iterable[str], pool: Iterable[QuizPair]) -> Set[int]:
        wanted = set(pair_ids)
        used: Set[int] = set()
        for pair in pool:
            if pair.id in wanted:
                used.update(pair.content_ids)
        return used

    def select_genre_responsive_pairs(
        self,
        user_genre_keys: Iterable[str],
        fixed_pair_ids: Iterable[str],
        selected_cluster_ids: Iterable[str] = (),
    ) -> List[QuizPair]:
        """
        Pick genre-responsive pairs for the user's genres and clusters.

        Args:
            user_genre_keys: Genre keys or display names the user picked
            fixed_pair_ids: Fixed pairs already shown (their titles are not repeated)
            selected_cluster_ids: Clusters chosen at onboarding

        Returns:
            Exactly `genre_responsive_count` pairs (fewer only if the pool is smaller)
        """
        cfg = self.config
        user_keys = [genre_name_to_key(g) for g in user_genre_keys]
        uncovered = {g for g in user_keys if g not in self.covered_genres}
        clusters = set(selected_cluster_ids)

        scored: List[ScoredPair] = []
        for pair in self.genre_pool:
            score = 0.0
            for trigger in pair.trigger_genres:
                if trigger in uncovered:
                    score += cfg.uncovered_genre_score
                elif trigger in user_keys:
                    score += cfg.covered_genre_score
            for trigger in pair.trigger_clusters:
                if trigger in clusters:
                    score += cfg.cluster_trigger_score
            scored.append((pair, score))

        # Stable: ties keep pool order
        scored.sort(key=lambda item: -item[1])

        blocked = self._content_ids_of(fixed_pair_ids, self.fixed_pairs)
        selected = _greedy_select(scored, cfg.genre_responsive_count, blocked)

        logger.debug(
            "Genre-responsive pairs for genres=%s clusters=%s: %s",
            user_keys, sorted(clusters), [p.id for p in selected],
        )
        return selected

    def ambiguous_dimensions(self, vector: TasteVector) -> List[str]:
        """The most ambiguous dims, extended with any above the high-ambiguity threshold."""
        cfg = self.config
        ranked = rank_by_ambiguity(vector)
        dims = ranked[:cfg.min_ambiguous_dims]
        for dim in ranked[cfg.min_ambiguous_dims:]:
            if len(dims) >= cfg.max_ambiguous_dims:
                break
            if ambiguity(vector, dim) > cfg.high_ambiguity_threshold:
                dims.append(dim)
        return dims

    def score_adaptive_pair(self, pair: QuizPair, ambiguous: Set[str]) -> float:
        cfg = self.config
        score = len(pair.dimensions_tested) * cfg.dims_tested_bonus
        for dim in pair.dimensions_tested:
            if dim not in ambiguous:
                continue
            score += cfg.ambiguous_dim_score
            a = pair.option_a.vector_position.get(dim)
            b = pair.option_b.vector_position.get(dim)
            if a is not None and b is not None:
                score += abs(a - b) * cfg.spread_bonus
        return score

    def select_adaptive_pairs(
        self,
        interim_vector: TasteVector,
        used_pair_ids: Iterable[str],
        count: Optional[int] = None,
    ) -> List[QuizPair]:
        """
        Pick adaptive pairs that probe the interim vector's uncertain dimensions.

        Args:
            interim_vector: Vector after the fixed and genre-responsive answers
            used_pair_ids: Pairs already shown, from any pool
            count: How many to pick (defaults to config.adaptive_count)

        Returns:
            `count` pairs, or every unused pair when fewer remain
        """
        count = self.config.adaptive_count if count is None else count
        used = set(used_pair_ids)
        ambiguous = set(self.ambiguous_dimensions(interim_vector))

        scored = [
            (pair, self.score_adaptive_pair(pair, ambiguous))
            for pair in self.adaptive_pool
            if pair.id not in used
        ]
        scored.sort(key=lambda item: -item[1])

        blocked = self._content_ids_of(used, self.all_pairs)
        selected = _greedy_select(scored, count, blocked)

        logger.debug(
            "Adaptive pairs for ambiguous dims %s: %s",
            sorted(ambiguous), [p.id for p in selected],
        )
        return selected


_DEFAULT_SELECTOR = PairSelector()


def get_fixed_pairs() -> List[QuizPair]:
    return _DEFAULT_SELECTOR.get_fixed_pairs()


def select_genre_responsive_pairs(
    user_genre_keys: Iterable[str],
    fixed_pair_ids: Iterable[str],
    selected_cluster_ids: Iterable[str] = (),
) -> List[QuizPair]:
    return _DEFAULT_SELECTOR.select_genre_responsive_pairs(
        user_genre_keys, fixed_pair_ids, selected_cluster_ids
    )


def select_adaptive_pairs(
    interim_vector: TasteVector,
    used_pair_ids: Iterable[str],
    count: int = 5,
) -> List[QuizPair]:
    return _DEFAULT_SELECTOR.select_adaptive_pairs(interim_vector, used_pair_ids, count)
