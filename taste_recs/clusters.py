"""
Taste Clusters
==============

14 taste archetypes used for onboarding instead of raw genre picks.
Each cluster carries a partial vector: genre affinities plus meta axes.

Users pick 3-5 clusters. Their partial vectors are averaged into a seed
vector that feeds the quiz and the recommendation engine.

Only dimensions with meaningful signal are listed on a cluster. An absent
dimension means "no opinion" and is excluded from averaging, whereas an
explicit 0.0 would drag the average toward zero.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import numpy as np

from .config import (
    ALL_DIMENSIONS,
    GENRE_DIMENSIONS,
    GENRE_KEY_TO_TMDB,
    HOME_GENRE_THRESHOLD,
    MAX_HOME_GENRES,
)
from .vector import (
    TasteVector,
    clamp_vector,
    create_empty_vector,
    genre_name_to_key,
    validate_partial,
)

logger = logging.getLogger(__name__)

MIN_CLUSTERS = 3
MAX_CLUSTERS = 5


@dataclass(frozen=True)
class TasteCluster:
    """A named taste archetype with a partial preference vector."""
    id: str
    name: str
    description: str
    emoji: str
    vector: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "vector", validate_partial(self.vector))


# Ordered for display, most universally appealing first
TASTE_CLUSTERS: List[TasteCluster] = [
    TasteCluster(
        "feel-good-funny", "Feel-Good & Funny",
        "Light comedies, sitcoms, and uplifting stories", "😍",
        {"comedy": 0.9, "drama": 0.2, "tone": 0.8, "intensity": -0.4, "pacing": 0.3},
    ),
    TasteCluster(
        "action-adrenaline", "Action & Adrenaline",
        "Explosions, fights, and high-stakes chases", "🚀",
        {"action": 0.9, "adventure": 0.5, "thriller": 0.3,
         "intensity": 0.75, "pacing": 0.9, "tone": -0.2},
    ),
    TasteCluster(
        "dark-thrillers", "Dark Thrillers",
        "Tense, gritty crime and suspense", "🔪",
        {"thriller": 0.9, "crime": 0.6, "mystery": 0.3,
         "tone": -0.8, "intensity": 0.7, "pacing": 0.7},
    ),
    TasteCluster(
        "rom-coms-love-stories", "Rom-Coms & Love Stories",
        "Romantic comedies and sweeping romances", "💕",
        {"romance": 0.9, "comedy": 0.6, "drama": 0.3, "tone": 0.7, "intensity": -0.3},
    ),
    TasteCluster(
        "epic-scifi-fantasy", "Epic Sci-Fi & Fantasy",
        "Grand worlds, speculative stories, and mythic adventures", "🔮",
        {"scifi": 0.8, "fantasy": 0.8, "adventure": 0.5,
         "intensity": 0.2, "pacing": -0.2, "era": -0.2},
    ),
    TasteCluster(
        "horror-supernatural", "Horror & Supernatural",
        "Scary, creepy, and unsettling", "👻",
        {"horror": 0.9, "thriller": 0.4, "mystery": 0.2,
         "tone": -0.9, "intensity": 0.75, "pacing": 0.2},
    ),
    TasteCluster(
        "mind-bending-mysteries", "Mind-Bending Mysteries",
        "Psychological puzzles and twist-driven stories", "🧠",
        {"mystery": 0.9, "thriller": 0.5, "scifi": 0.2,
         "tone": -0.5, "intensity": 0.5, "pacing": -0.3},
    ),
    TasteCluster(
        "heartfelt-drama", "Heartfelt Drama",
        "Character-driven emotional stories", "💚",
        {"drama": 0.9, "romance": 0.2, "tone": 0.3, "intensity": 0.2, "pacing": -0.4},
    ),
    TasteCluster(
        "true-crime-real-stories", "True Crime & Real Stories",
        "Documentaries, docuseries, and based-on-true-events", "📰",
        {"documentary": 0.9, "crime": 0.5, "history": 0.3,
         "tone": -0.5, "intensity": 0.5, "pacing": -0.2},
    ),
    TasteCluster(
        "anime-animation", "Anime & Animation",
        "Anime, animated series, and animated films", "🍥",
        {"animation": 0.9, "action": 0.3, "fantasy": 0.3, "intensity": 0.3, "pacing": 0.2},
    ),
    TasteCluster(
        "prestige-award-winners", "Prestige & Award-Winners",
        "Critically acclaimed, Oscar- and BAFTA-calibre", "🏆",
        {"drama": 0.7, "history": 0.2, "documentary": 0.2, "tone": -0.3,
         "intensity": 0.5, "pacing": -0.4, "popularity": -0.4},
    ),
    TasteCluster(
        "history-war", "History & War",
        "Period pieces, historical epics, and war stories", "⚔️",
        {"history": 0.9, "war": 0.7, "drama": 0.6, "tone": -0.3,
         "intensity": 0.5, "pacing": -0.5, "era": 0.7},
    ),
    TasteCluster(
        "reality-entertainment", "Reality & Entertainment",
        "Competition shows, reality TV, and entertainment", "📺",
        {"reality": 0.9, "comedy": 0.2, "tone": 0.5, "pacing": 0.6,
         "popularity": 0.6, "intensity": -0.2},
    ),
    TasteCluster(
        "cult-indie", "Cult & Indie",
        "Off-beat, niche, and under-the-radar gems", "🎬",
        {"drama": 0.3, "comedy": 0.2, "tone": -0.2, "popularity": -0.8, "intensity": 0.2},
    ),
]

_CLUSTERS_BY_ID = {c.id: c for c in TASTE_CLUSTERS}


def get_cluster(cluster_id: str) -> Optional[TasteCluster]:
    return _CLUSTERS_BY_ID.get(cluster_id)


def _resolve(cluster_ids: Iterable[str]) -> List[TasteCluster]:
    clusters = []
    for cid in cluster_ids:
        cluster = _CLUSTERS_BY_ID.get(cid)
        if cluster is None:
            logger.debug("Ignoring unknown cluster id %r", cid)
            continue
        clusters.append(cluster)
    return clusters


def compute_cluster_seed_vector(cluster_ids: Iterable[str]) -> TasteVector:
    """
    Average the partial vectors of the selected clusters.

    Each dimension is the mean of the clusters that define it; dimensions
    no selected cluster defines stay at 0. Unknown ids are ignored.

    Args:
        cluster_ids: Selected cluster ids (order does not matter)

    Returns:
        Clamped seed vector
    """
    clusters = _resolve(cluster_ids)
    vector = create_empty_vector()

    for dim in ALL_DIMENSIONS:
        values = [c.vector[dim] for c in clusters if dim in c.vector]
        if values:
            vector[dim] = float(np.mean(values))

    seed = clamp_vector(vector)
    logger.debug(
        "Seed vector from %s: %s",
        [c.id for c in clusters],
        {d: round(v, 3) for d, v in seed.items() if v != 0},
    )
    return seed


def derive_home_genres(cluster_ids: Iterable[str]) -> List[int]:
    """
    Catalog genre ids for home-page sections.

    Genre dimensions with seed value >= 0.3, strongest first, at most 8.
    An empty list means the caller should use its own defaults.
    """
    seed = compute_cluster_seed_vector(cluster_ids)
    strong = [d for d in GENRE_DIMENSIONS if seed[d] >= HOME_GENRE_THRESHOLD]
    strong.sort(key=lambda d: -seed[d])
    return [GENRE_KEY_TO_TMDB[d] for d in strong[:MAX_HOME_GENRES] if GENRE_KEY_TO_TMDB.get(d)]


def get_top_genre_keys_from_clusters(cluster_ids: Iterable[str], top_n: int = 3) -> List[str]:
    """Strongest positive genre keys of the cluster seed, used for pair selection."""
    seed = compute_cluster_seed_vector(cluster_ids)
    positive = [d for d in GENRE_DIMENSIONS if seed[d] > 0]
    positive.sort(key=lambda d: -seed[d])
    return positive[:top_n]


def create_default_vector(selected_genres: Iterable[str]) -> TasteVector:
    """
    Seed vector from a plain genre pick (pre-cluster onboarding).

    Selected genres start at 0.5, the rest at 0.25, meta axes neutral.
    Accepts display names ("Sci-Fi") or keys ("scifi").
    """
    selected = {genre_name_to_key(g) for g in selected_genres}
    vector = create_empty_vector()
    for dim in GENRE_DIMENSIONS:
        vector[dim] = 0.5 if dim in selected else 0.25
    return vector
