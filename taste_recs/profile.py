"""
Taste Profile
=============

The persisted aggregate behind a user's recommendations: the current
vector, quiz answers and confidence, and a capped log of post-onboarding
interactions (thumbs up/down, bookmarks, watches, removals).

Every operation here is pure: it takes a profile and returns a new one.
Persistence lives in store.py.
"""

import logging
import time
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .clusters import compute_cluster_seed_vector, create_default_vector
from .config import (
    GENRE_DIMENSIONS,
    TMDB_GENRE_TO_DIM,
    InteractionConfig,
    DEFAULT_INTERACTION,
)
from .content import ContentMetadata, content_to_vector
from .scoring import QuizAnswer
from .vector import (
    DIMENSION_INDEX,
    TasteVector,
    ConfidenceVector,
    array_to_vector,
    blend_vector,
    blend_vector_away,
    clamp_vector,
    create_empty_vector,
    vector_to_array,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

Timestamp = Union[float, int, str]


class InteractionAction(str, Enum):
    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"
    BOOKMARK = "bookmark"
    WATCHED = "watched"
    REMOVED = "removed"

    @classmethod
    def parse(cls, value: Union[str, "InteractionAction"]) -> "InteractionAction":
        if value == "watchlist_add":  # stored by older clients
            return cls.BOOKMARK
        return cls(value)

    @property
    def is_negative(self) -> bool:
        return self in NEGATIVE_ACTIONS


NEGATIVE_ACTIONS = frozenset({InteractionAction.THUMBS_DOWN, InteractionAction.REMOVED})


def parse_timestamp(value: Timestamp) -> float:
    """Epoch seconds from a number or an ISO-8601 string."""
    if isinstance(value, (int, float)):
        return float(value)
    return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()


def _vector_from_payload(value) -> TasteVector:
    """Positional array (any supported layout) or a name -> value map."""
    if isinstance(value, Mapping):
        known = {k: float(v) for k, v in value.items() if k in DIMENSION_INDEX}
        return TasteVector.from_partial(known)
    return array_to_vector(value)


@dataclass(frozen=True)
class Interaction:
    """One logged interaction with a catalog item."""
    content_id: int
    content_type: str
    action: InteractionAction
    timestamp: float
    content_vector: TasteVector

    def to_dict(self) -> Dict:
        return {
            "content_id": self.content_id,
            "content_type": self.content_type,
            "action": self.action.value,
            "timestamp": self.timestamp,
            "content_vector": vector_to_array(self.content_vector),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Interaction":
        return cls(
            content_id=int(data["content_id"]),
            content_type=data.get("content_type", "movie"),
            action=InteractionAction.parse(data["action"]),
            timestamp=parse_timestamp(data["timestamp"]),
            content_vector=_vector_from_payload(data["content_vector"]),
        )


@dataclass
class TasteProfile:
    """Current vector plus everything needed to rebuild it."""
    vector: TasteVector = field(default_factory=create_empty_vector)
    quiz_completed: bool = False
    quiz_answers: List[QuizAnswer] = field(default_factory=list)
    interaction_log: List[Interaction] = field(default_factory=list)
    last_updated: float = field(default_factory=time.time)
    version: int = SCHEMA_VERSION
    confidence: Optional[ConfidenceVector] = None
    selected_clusters: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": SCHEMA_VERSION,
            "vector": vector_to_array(self.vector),
            "quiz_completed": self.quiz_completed,
            "quiz_answers": [a.to_dict() for a in self.quiz_answers],
            "interaction_log": [i.to_dict() for i in self.interaction_log],
            "last_updated": self.last_updated,
            "confidence": (
                [float(v) for v in self.confidence.values] if self.confidence is not None else None
            ),
            "selected_clusters": list(self.selected_clusters),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "TasteProfile":
        """
        Rebuild a profile from its stored form.

        Version 1 payloads (camelCase keys, vector stored as a map, ISO
        timestamps) are upgraded on read.
        """
        version = int(data.get("version", 1))
        if version > SCHEMA_VERSION:
            raise ValueError(f"Unsupported taste profile version: {version}")
        if version < 2:
            data = _upgrade_v1(data)

        confidence = data.get("confidence")
        return cls(
            vector=clamp_vector(_vector_from_payload(data["vector"])),
            quiz_completed=bool(data.get("quiz_completed", False)),
            quiz_answers=[QuizAnswer.from_dict(a) for a in data.get("quiz_answers", [])],
            interaction_log=[Interaction.from_dict(i) for i in data.get("interaction_log", [])],
            last_updated=parse_timestamp(data.get("last_updated", time.time())),
            version=SCHEMA_VERSION,
            confidence=ConfidenceVector(confidence) if confidence is not None else None,
            selected_clusters=list(data.get("selected_clusters", [])),
        )


def _upgrade_v1(data: Mapping) -> Dict:
    logger.debug("Upgrading version 1 taste profile payload")
    answers = [
        {
            "pair_id": a["pairId"],
            "chosen_option": a["chosenOption"],
            "phase": a.get("phase", "fixed"),
            "timestamp": parse_timestamp(a["timestamp"]) if "timestamp" in a else 0.0,
        }
        for a in data.get("quizAnswers", [])
    ]
    interactions = [
        {
            "content_id": i["contentId"],
            "content_type": i.get("contentType", "movie"),
            "action": i["action"],
            "timestamp": i["timestamp"],
            "content_vector": i["contentVector"],
        }
        for i in data.get("interactionLog", [])
    ]
    return {
        "vector": data["vector"],
        "quiz_completed": data.get("quizCompleted", False),
        "quiz_answers": answers,
        "interaction_log": interactions,
        "last_updated": data.get("lastUpdated", time.time()),
    }


# =============================================================================
# WEIGHTING
# =============================================================================

def recency_weight(
    timestamp: float,
    now: Optional[float] = None,
    config: InteractionConfig = DEFAULT_INTERACTION,
) -> float:
    """Older interactions count less: 1.0 within a week down to 0.3 past 90 days."""
    now = time.time() if now is None else now
    age_days = (now - timestamp) / 86400.0
    for max_days, weight in config.recency_buckets:
        if age_days <= max_days:
            return weight
    return config.recency_fallback


def _apply(
    vector: TasteVector,
    interaction: Interaction,
    weight: float,
    config: InteractionConfig,
) -> TasteVector:
    if interaction.action.is_negative:
        return blend_vector_away(vector, interaction.content_vector, weight, config.learning_rate)
    return blend_vector(vector, interaction.content_vector, weight, config.learning_rate)


def _replay(
    vector: TasteVector,
    log: Iterable[Interaction],
    now: Optional[float],
    config: InteractionConfig,
) -> TasteVector:
    for interaction in log:
        weight = config.action_weights[interaction.action.value]
        weight *= recency_weight(interaction.timestamp, now, config)
        vector = _apply(vector, interaction, weight, config)
    return clamp_vector(vector)


# =============================================================================
# PROFILE OPERATIONS
# =============================================================================

def initialize_from_clusters(cluster_ids: Iterable[str], now: Optional[float] = None) -> TasteProfile:
    """New profile seeded from onboarding cluster picks."""
    cluster_ids = list(cluster_ids)
    return TasteProfile(
        vector=compute_cluster_seed_vector(cluster_ids),
        last_updated=time.time() if now is None else now,
        selected_clusters=cluster_ids,
    )


def initialize_from_genres(genres: Iterable[str], now: Optional[float] = None) -> TasteProfile:
    """New profile seeded from a plain genre pick."""
    return TasteProfile(
        vector=create_default_vector(genres),
        last_updated=time.time() if now is None else now,
    )


def save_quiz_results(
    profile: Optional[TasteProfile],
    answers: Iterable[QuizAnswer],
    quiz_vector: TasteVector,
    confidence: Optional[ConfidenceVector] = None,
    now: Optional[float] = None,
) -> TasteProfile:
    """Replace the vector with the quiz result, keeping any interaction log."""
    base = profile if profile is not None else TasteProfile()
    return replace(
        base,
        vector=clamp_vector(quiz_vector),
        quiz_completed=True,
        quiz_answers=list(answers),
        interaction_log=list(base.interaction_log),
        confidence=confidence,
        last_updated=time.time() if now is None else now,
        version=SCHEMA_VERSION,
    )


def record_interaction(
    profile: TasteProfile,
    content_id: int,
    content_type: str,
    meta: ContentMetadata,
    action: Union[str, InteractionAction],
    now: Optional[float] = None,
    config: InteractionConfig = DEFAULT_INTERACTION,
) -> TasteProfile:
    """
    Log an interaction and nudge the vector toward (or away from) the item.

    Args:
        profile: Current profile
        content_id: Catalog id of the item
        content_type: "movie" or "tv"
        meta: Catalog metadata used to build the item's content vector
        action: What the user did
        now: Timestamp override (epoch seconds)
        config: Learning configuration

    Returns:
        Updated profile; the log keeps the newest max_interactions entries
    """
    now = time.time() if now is None else now
    action = InteractionAction.parse(action)
    interaction = Interaction(
        content_id=content_id,
        content_type=content_type,
        action=action,
        timestamp=now,
        content_vector=content_to_vector(meta),
    )
    vector = _apply(profile.vector, interaction, config.action_weights[action.value], config)

    log = list(profile.interaction_log) + [interaction]
    if len(log) > config.max_interactions:
        log = log[-config.max_interactions:]

    logger.debug("Recorded %s on %s %s", action.value, content_type, content_id)
    return replace(profile, vector=vector, interaction_log=log, last_updated=now)


def recompute_vector(
    profile: TasteProfile,
    now: Optional[float] = None,
    config: InteractionConfig = DEFAULT_INTERACTION,
) -> TasteProfile:
    """
    Rebuild the vector by replaying the interaction log with recency weights.

    Starts from the stored vector when the quiz was completed, otherwise
    from a flat 0.2 on every genre the profile already shows interest in.
    """
    if not profile.interaction_log:
        return profile

    if profile.quiz_completed and profile.quiz_answers:
        start = profile.vector.copy()
    else:
        start = create_empty_vector()
        for dim in GENRE_DIMENSIONS:
            if profile.vector[dim] > 0:
                start[dim] = 0.2

    vector = _replay(start, profile.interaction_log, now, config)
    return replace(profile, vector=vector, last_updated=time.time() if now is None else now)


def needs_recomputation(
    profile: TasteProfile,
    now: Optional[float] = None,
    config: InteractionConfig = DEFAULT_INTERACTION,
) -> bool:
    """True when there are interactions and the last update is older than the stale window."""
    if not profile.interaction_log:
        return False
    now = time.time() if now is None else now
    return now - profile.last_updated > config.stale_after_hours * 3600


def retake_quiz(
    profile: Optional[TasteProfile],
    answers: Iterable[QuizAnswer],
    quiz_vector: TasteVector,
    confidence: Optional[ConfidenceVector] = None,
    now: Optional[float] = None,
    config: InteractionConfig = DEFAULT_INTERACTION,
) -> TasteProfile:
    """Swap in a new quiz result and replay the existing interaction log on top of it."""
    if profile is None:
        return save_quiz_results(None, answers, quiz_vector, confidence, now)

    vector = _replay(quiz_vector.copy(), profile.interaction_log, now, config)
    return replace(
        profile,
        vector=vector,
        quiz_completed=True,
        quiz_answers=list(answers),
        confidence=confidence,
        last_updated=time.time() if now is None else now,
        version=SCHEMA_VERSION,
    )


def update_clusters(
    profile: TasteProfile,
    cluster_ids: Iterable[str],
    now: Optional[float] = None,
) -> TasteProfile:
    """Record new cluster picks; a profile without quiz results is re-seeded from them."""
    cluster_ids = list(cluster_ids)
    updated = replace(
        profile,
        selected_clusters=cluster_ids,
        last_updated=time.time() if now is None else now,
    )
    if not profile.quiz_completed:
        updated.vector = compute_cluster_seed_vector(cluster_ids)
    return updated


def migrate_from_legacy_preferences(
    home_genre_ids: Iterable[int],
    now: Optional[float] = None,
) -> TasteProfile:
    """Profile for users who onboarded before taste vectors, from their home-page genres."""
    keys = [TMDB_GENRE_TO_DIM[gid] for gid in home_genre_ids if gid in TMDB_GENRE_TO_DIM]
    return initialize_from_genres(keys, now)
