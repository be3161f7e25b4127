"""
Content Vector Mapping
======================

Maps catalog (TMDb) item metadata to a TasteVector so items can be compared
against user preferences.

Content vectors use binary genre values (1.0 or 0.0). Meta dimensions are
derived from genre combinations plus release year, runtime, popularity and
vote count.
"""

from functools import lru_cache
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .config import TMDB_GENRE_TO_DIM, TMDB_COMPOUND_GENRES
from .vector import TasteVector, clamp_vector, create_empty_vector

CONTENT_CACHE_SIZE = 512

# Genre id -> contribution; each present genre counts as one signal
TONE_SIGNALS = {
    27: -0.8,     # Horror
    53: -0.5,     # Thriller
    80: -0.4,     # Crime
    10752: -0.5,  # War
    18: -0.2,     # Drama
    35: 0.6,      # Comedy
    10751: 0.7,   # Family
    16: 0.3,      # Animation
    10402: 0.4,   # Music
    10749: 0.3,   # Romance
}
TONE_COMBOS = (
    ((28, 35), 0.3),   # action comedy
    ((27, 53), -0.3),  # horror thriller
    ((18, 35), 0.2),   # dramedy
)

PACING_SIGNALS = {
    28: 0.7,      # Action
    53: 0.5,      # Thriller
    27: 0.3,      # Horror
    10759: 0.6,   # Action & Adventure
    18: -0.4,     # Drama
    99: -0.5,     # Documentary
    36: -0.4,     # History
    10749: -0.2,  # Romance
}

INTENSITY_SIGNALS = {
    27: 0.8,      # Horror
    53: 0.6,      # Thriller
    28: 0.5,      # Action
    10752: 0.6,   # War
    35: -0.4,     # Comedy
    10749: -0.3,  # Romance
    10751: -0.5,  # Family
    99: -0.2,     # Documentary
}
INTENSITY_COMBOS = (
    ((27, 53), 0.3),
    ((10749, 35), -0.2),  # romcom
)

# (exclusive upper year, era value)
ERA_BUCKETS = ((1980, -0.8), (1990, -0.5), (2000, -0.3), (2010, 0.0), (2015, 0.3), (2020, 0.6))
ERA_LATEST = 0.8
ERA_PERIOD_SHIFT = {36: -0.3, 10752: -0.2}

# (exclusive lower popularity, value); anything lower is niche
POPULARITY_BUCKETS = ((100, 0.9), (50, 0.6), (20, 0.3), (10, 0.0), (5, -0.3))
POPULARITY_FLOOR = -0.6


@dataclass(frozen=True)
class ContentMetadata:
    """Catalog fields needed to place an item in taste space."""
    genre_ids: Tuple[int, ...] = ()
    popularity: Optional[float] = None
    vote_count: Optional[int] = None
    release_year: Optional[int] = None
    runtime: Optional[int] = None

    def __post_init__(self):
        # Sorted so equal tag sets share a cache entry
        object.__setattr__(self, "genre_ids", tuple(sorted(set(self.genre_ids))))


def _clip(value: float) -> float:
    return float(max(-1.0, min(1.0, value)))


def _averaged(genres: frozenset, signals: Dict[int, float], combos=(), extra=()) -> float:
    """Mean contribution over matched signals; combos shift the total without counting."""
    values = [weight for gid, weight in signals.items() if gid in genres]
    values.extend(extra)
    if not values:
        return 0.0
    total = sum(values)
    for (first, second), shift in combos:
        if first in genres and second in genres:
            total += shift
    return _clip(total / len(values))


def derive_tone(genres: frozenset) -> float:
    return _averaged(genres, TONE_SIGNALS, TONE_COMBOS)


def derive_pacing(genres: frozenset, runtime: Optional[int] = None) -> float:
    extra = []
    if runtime:
        if runtime > 150:
            extra.append(-0.2)
        elif runtime < 90:
            extra.append(0.2)
    return _averaged(genres, PACING_SIGNALS, extra=extra)


def derive_intensity(genres: frozenset) -> float:
    return _averaged(genres, INTENSITY_SIGNALS, INTENSITY_COMBOS)


def derive_era(genres: frozenset, release_year: Optional[int] = None) -> float:
    era = 0.0
    if release_year:
        era = ERA_LATEST
        for upper, value in ERA_BUCKETS:
            if release_year < upper:
                era = value
                break
    for gid, shift in ERA_PERIOD_SHIFT.items():
        if gid in genres:
            era += shift
    return _clip(era)


def derive_popularity(popularity: Optional[float] = None, vote_count: Optional[int] = None) -> float:
    pop = 0.0
    if popularity is not None:
        pop = POPULARITY_FLOOR
        for lower, value in POPULARITY_BUCKETS:
            if popularity > lower:
                pop = value
                break
    if vote_count is not None:
        if vote_count < 100:
            pop -= 0.3
        elif vote_count < 500:
            pop -= 0.1
        elif vote_count > 5000:
            pop += 0.2
    return _clip(pop)


def genre_dimensions_for(genre_ids: Iterable[int]) -> Tuple[str, ...]:
    """Distinct dimensions implied by catalog tags, compound tags included."""
    dims = []
    ids = list(genre_ids)
    for gid in ids:
        dim = TMDB_GENRE_TO_DIM.get(gid)
        if dim and dim not in dims:
            dims.append(dim)
    for gid in ids:
        dim = TMDB_COMPOUND_GENRES.get(gid)
        if dim and dim not in dims:
            dims.append(dim)
    return tuple(dims)


@lru_cache(maxsize=CONTENT_CACHE_SIZE)
def _content_values(meta: ContentMetadata) -> Tuple[float, ...]:
    vector = create_empty_vector()
    genres = frozenset(meta.genre_ids)

    for dim in genre_dimensions_for(meta.genre_ids):
        vector[dim] = 1.0

    vector["tone"] = derive_tone(genres)
    vector["pacing"] = derive_pacing(genres, meta.runtime)
    vector["era"] = derive_era(genres, meta.release_year)
    vector["popularity"] = derive_popularity(meta.popularity, meta.vote_count)
    vector["intensity"] = derive_intensity(genres)

    return tuple(clamp_vector(vector).values.tolist())


def content_to_vector(meta: ContentMetadata) -> TasteVector:
    """
    Map catalog metadata to a TasteVector.

    Results are memoised per metadata value; each call returns a fresh copy.
    """
    return TasteVector(np.array(_content_values(meta)))


def clear_content_vector_cache() -> None:
    _content_values.cache_clear()
