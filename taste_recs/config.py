"""
Configuration and constants for the Taste Recs personalization engine.
"""
import os
from dataclasses import dataclass, field
from typing import Dict


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


# =============================================================================
# RUNTIME SETTINGS
# =============================================================================
PROFILE_PATH = os.environ.get(
    "TASTE_RECS_PROFILE_PATH",
    os.path.join(os.path.expanduser("~"), ".taste_recs", "profile.json"),
)
LOG_LEVEL = os.environ.get("TASTE_RECS_LOG_LEVEL", "WARNING")

# =============================================================================
# VECTOR DIMENSIONS
# =============================================================================
GENRE_DIMENSIONS = (
    "action",
    "adventure",
    "animation",
    "comedy",
    "crime",
    "documentary",
    "drama",
    "family",
    "fantasy",
    "history",
    "horror",
    "musical",
    "mystery",
    "reality",
    "romance",
    "scifi",
    "thriller",
    "war",
    "western",
)

# Cross-genre axes, all centred on 0.0
META_DIMENSIONS = (
    "tone",        # -1 dark/gritty        -> +1 light/uplifting
    "pacing",      # -1 slow burn          -> +1 fast/high-energy
    "era",         # -1 classic/period     -> +1 modern/contemporary
    "popularity",  # -1 indie/arthouse     -> +1 mainstream/blockbuster
    "intensity",   # -1 cerebral/understated -> +1 visceral/high-stakes
)

ALL_DIMENSIONS = GENRE_DIMENSIONS + META_DIMENSIONS

GENRE_RANGE = (0.0, 1.0)
META_RANGE = (-1.0, 1.0)

# =============================================================================
# SIMILARITY WEIGHTS (weighted cosine)
# =============================================================================
DIMENSION_WEIGHTS: Dict[str, float] = {dim: 1.0 for dim in GENRE_DIMENSIONS}
DIMENSION_WEIGHTS.update({
    "tone": 0.8,
    "pacing": 0.6,
    "era": 0.4,
    "popularity": 0.5,
    "intensity": 0.7,
})

# =============================================================================
# GENRE TAXONOMY
# =============================================================================
GENRE_KEY_TO_NAME = {
    "action": "Action",
    "adventure": "Adventure",
    "animation": "Animation",
    "comedy": "Comedy",
    "crime": "Crime",
    "documentary": "Documentary",
    "drama": "Drama",
    "family": "Family",
    "fantasy": "Fantasy",
    "history": "History",
    "horror": "Horror",
    "musical": "Musical",
    "mystery": "Mystery",
    "reality": "Reality",
    "romance": "Romance",
    "scifi": "Sci-Fi",
    "thriller": "Thriller",
    "war": "War",
    "western": "Western",
}

# Flatten for quick lookup
GENRE_NAME_TO_KEY = {name: key for key, name in GENRE_KEY_TO_NAME.items()}
GENRE_NAME_TO_KEY["Music"] = "musical"  # legacy onboarding label

# Catalog (TMDb) genre id -> vector dimension
TMDB_GENRE_TO_DIM = {
    28: "action",
    12: "adventure",
    16: "animation",
    35: "comedy",
    80: "crime",
    99: "documentary",
    18: "drama",
    10751: "family",
    14: "fantasy",
    36: "history",
    27: "horror",
    10402: "musical",
    9648: "mystery",
    10749: "romance",
    878: "scifi",
    53: "thriller",
    10752: "war",
    37: "western",
    # TV-only tags that map onto an existing dimension
    10759: "action",   # Action & Adventure
    10764: "reality",
    10768: "war",      # War & Politics
}

# Compound TV tags credit a second dimension the primary lookup misses
TMDB_COMPOUND_GENRES = {
    10765: "fantasy",    # Sci-Fi & Fantasy
    10759: "adventure",  # Action & Adventure
}

GENRE_KEY_TO_TMDB = {
    "action": 28,
    "adventure": 12,
    "animation": 16,
    "comedy": 35,
    "crime": 80,
    "documentary": 99,
    "drama": 18,
    "family": 10751,
    "fantasy": 14,
    "history": 36,
    "horror": 27,
    "musical": 10402,
    "mystery": 9648,
    "reality": 10764,
    "romance": 10749,
    "scifi": 878,
    "thriller": 53,
    "war": 10752,
    "western": 37,
}

TMDB_GENRE_NAMES = {tmdb_id: GENRE_KEY_TO_NAME[key] for key, tmdb_id in GENRE_KEY_TO_TMDB.items()}
TMDB_GENRE_NAMES.update({
    10759: "Action & Adventure",
    10765: "Sci-Fi & Fantasy",
    10768: "War & Politics",
})

# =============================================================================
# QUIZ SCORING CONFIGURATION
# =============================================================================
@dataclass
class QuizScoringConfig:
    """Tunables for turning quiz answers into vector deltas."""
    # Winner-minus-loser delta scale
    delta_scale: float = 0.3

    # Choosing A over B is weaker evidence against B than for A
    negative_damping: float = 0.6

    # Per-option genre penalty on a "neither" answer
    neither_penalty: float = 0.15

    # Adaptive answers refine an already formed vector
    phase_weights: Dict[str, float] = field(default_factory=lambda: {
        "fixed": 1.0,
        "genre-responsive": 1.0,
        "adaptive": 0.7,
    })

    # Headroom under which deltas are scaled down (genre range is half as wide)
    genre_cap_threshold: float = 0.25
    meta_cap_threshold: float = 0.5

    confidence_gains: Dict[str, float] = field(default_factory=lambda: {
        "A": 0.20,
        "B": 0.20,
        "both": 0.10,
        "neither": 0.05,
        "skip": 0.0,
    })

    def to_dict(self) -> Dict[str, object]:
        return {
            "delta_scale": self.delta_scale,
            "negative_damping": self.negative_damping,
            "neither_penalty": self.neither_penalty,
            "phase_weights": dict(self.phase_weights),
            "genre_cap_threshold": self.genre_cap_threshold,
            "meta_cap_threshold": self.meta_cap_threshold,
            "confidence_gains": dict(self.confidence_gains),
        }

DEFAULT_QUIZ_SCORING = QuizScoringConfig()

# =============================================================================
# QUIZ SELECTION CONFIGURATION
# =============================================================================
@dataclass
class SelectionConfig:
    """Scoring weights and sizes for quiz pair selection."""
    genre_responsive_count: int = 2
    adaptive_count: int = 5

    # Genre-responsive scoring
    uncovered_genre_score: float = 2.0
    covered_genre_score: float = 1.0
    cluster_trigger_score: float = 3.0

    # Adaptive scoring
    ambiguous_dim_score: float = 2.0
    dims_tested_bonus: float = 0.1
    spread_bonus: float = 0.5
    min_ambiguous_dims: int = 3
    max_ambiguous_dims: int = 6
    high_ambiguity_threshold: float = 0.7

DEFAULT_SELECTION = SelectionConfig()

# =============================================================================
# RANKING CONFIGURATION
# =============================================================================
@dataclass
class RankingConfig:
    """Tie-breaker weights for ranking catalog items."""
    popularity_bonus: float = 0.1
    popularity_scale: float = 100.0
    rating_threshold: float = 7.0
    rating_bonus: float = 0.03
    window_size: int = 5

DEFAULT_RANKING = RankingConfig()

HOME_GENRE_THRESHOLD = 0.3
MAX_HOME_GENRES = 8
GENRE_MIN_THRESHOLD = 0.1

# =============================================================================
# INTERACTION LEARNING CONFIGURATION
# =============================================================================
@dataclass
class InteractionConfig:
    """How post-onboarding interactions nudge the taste vector."""
    learning_rate: float = field(default_factory=lambda: _env_float("TASTE_RECS_LEARNING_RATE", 0.1))
    action_weights: Dict[str, float] = field(default_factory=lambda: {
        "thumbs_up": 1.0,
        "thumbs_down": 0.8,
        "bookmark": 0.4,
        "watched": 0.3,
        "removed": 0.2,
    })
    max_interactions: int = 500
    stale_after_hours: float = 24.0

    # (max age in days, weight); anything older gets the fallback
    recency_buckets: tuple = ((7, 1.0), (30, 0.8), (90, 0.5))
    recency_fallback: float = 0.3

DEFAULT_INTERACTION = InteractionConfig()
