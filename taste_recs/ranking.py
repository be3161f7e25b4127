"""
Content Ranking
===============

Scores and orders catalog items against a taste vector:

1. match_score: fast genre dot product (unnormalised)
2. hybrid_score: match score plus small popularity/rating tie-breakers
3. reorder_within_windows: local re-sort that keeps the upstream order
4. rank_by_similarity: weighted cosine over full content vectors
5. DiversityFilter: caps per primary genre and per media type
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .config import GENRE_KEY_TO_TMDB, RankingConfig, DEFAULT_RANKING
from .content import ContentMetadata, content_to_vector, genre_dimensions_for
from .vector import TasteVector, cosine_similarity, get_genres_from_vector

T = TypeVar("T")


def _year_from(data: Mapping) -> Optional[int]:
    if data.get("release_year"):
        return int(data["release_year"])
    date = data.get("release_date") or data.get("first_air_date") or ""
    try:
        return int(date[:4]) if date else None
    except ValueError:
        return None


@dataclass
class CatalogItem:
    """A catalog title to be ranked."""
    id: int
    title: str
    media_type: str = "movie"
    genre_ids: List[int] = field(default_factory=list)
    popularity: float = 0.0
    vote_average: float = 0.0
    vote_count: Optional[int] = None
    release_year: Optional[int] = None
    runtime: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "CatalogItem":
        """Build from our own dict form or a raw TMDb result."""
        media_type = data.get("media_type")
        if not media_type:
            media_type = "tv" if "first_air_date" in data or "title" not in data else "movie"
        return cls(
            id=int(data["id"]),
            title=data.get("title") or data.get("name") or "",
            media_type=media_type,
            genre_ids=[int(g) for g in data.get("genre_ids", [])],
            popularity=float(data.get("popularity") or 0.0),
            vote_average=float(data.get("vote_average") or data.get("rating") or 0.0),
            vote_count=data.get("vote_count"),
            release_year=_year_from(data),
            runtime=data.get("runtime"),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "media_type": self.media_type,
            "genre_ids": list(self.genre_ids),
            "popularity": self.popularity,
            "vote_average": self.vote_average,
            "vote_count": self.vote_count,
            "release_year": self.release_year,
            "runtime": self.runtime,
        }

    def metadata(self) -> ContentMetadata:
        return ContentMetadata(
            genre_ids=tuple(self.genre_ids),
            popularity=self.popularity,
            vote_count=self.vote_count,
            release_year=self.release_year,
            runtime=self.runtime,
        )


def match_score(genre_ids: Sequence[int], vector: TasteVector) -> float:
    """
    Sum of the user's values over the distinct dimensions an item's tags imply.

    Not normalised: multi-genre titles score higher than single-genre ones.
    Two tags mapping to the same dimension count it once.
    """
    if not genre_ids:
        return 0.0
    return float(sum(vector[dim] for dim in genre_dimensions_for(genre_ids)))


def hybrid_score(
    item: CatalogItem,
    vector: TasteVector,
    config: RankingConfig = DEFAULT_RANKING,
) -> float:
    """Match score with popularity and rating bonuses that only break near-ties."""
    score = match_score(item.genre_ids, vector)
    score += min(item.popularity / config.popularity_scale, 1.0) * config.popularity_bonus
    if item.vote_average >= config.rating_threshold:
        score += (item.vote_average - config.rating_threshold) * config.rating_bonus
    return score


def _default_genre_ids(item) -> Sequence[int]:
    return item.genre_ids


def reorder_within_windows(
    items: Sequence[T],
    vector: TasteVector,
    get_genre_ids: Callable[[T], Sequence[int]] = _default_genre_ids,
    window_size: int = DEFAULT_RANKING.window_size,
) -> List[T]:
    """
    Re-sort by match score inside contiguous windows of an ordered list.

    Items never cross a window boundary and ties keep their upstream order,
    so the macro ordering supplied by the catalog query survives.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    result: List[T] = []
    for start in range(0, len(items), window_size):
        window = list(items[start:start + window_size])
        window.sort(key=lambda it: -match_score(get_genre_ids(it), vector))
        result.extend(window)
    return result


def rank_by_similarity(
    items: Sequence[CatalogItem],
    vector: TasteVector,
    weights: Optional[Mapping[str, float]] = None,
    limit: Optional[int] = None,
) -> List[Tuple[CatalogItem, int]]:
    """
    Rank items by weighted cosine similarity (0-100) of their content vectors.

    Args:
        items: Candidate items
        vector: User taste vector
        weights: Per-dimension weights (defaults to DIMENSION_WEIGHTS)
        limit: Keep only the top N

    Returns:
        List of (item, similarity) tuples, best first
    """
    scored = [
        (item, cosine_similarity(vector, content_to_vector(item.metadata()), weights))
        for item in items
    ]
    scored.sort(key=lambda pair: -pair[1])
    return scored[:limit] if limit is not None else scored


class DiversityFilter:
    """
    Keeps a ranked list varied.

    Prevents:
    - Too many items sharing a primary genre near the top of the list
    - One media type (movie/tv) taking over the list
    - Duplicate items
    """

    def __init__(
        self,
        max_per_genre: int = 3,
        max_type_share: float = 0.7,
        head_size: int = 10,
    ):
        self.max_per_genre = max_per_genre
        self.max_type_share = max_type_share
        self.head_size = head_size

    def filter(
        self,
        ranked_items: Sequence[Tuple[CatalogItem, float]],
        target_count: int = 20,
    ) -> List[Tuple[CatalogItem, float]]:
        """
        Apply diversity limits to an already ranked list.

        Args:
            ranked_items: (item, score) tuples, best first
            target_count: Number of items to keep

        Returns:
            Filtered list in the original order
        """
        selected = []
        seen = set()
        genre_counts: Dict[int, int] = defaultdict(int)
        type_counts: Dict[str, int] = defaultdict(int)
        max_per_type = math.ceil(target_count * self.max_type_share)

        for item, score in ranked_items:
            if len(selected) >= target_count:
                break

            key = (item.media_type, item.id)
            if key in seen:
                continue

            # Genre cap only applies to the head of the list
            primary = item.genre_ids[0] if item.genre_ids else None
            if primary is not None and len(selected) < self.head_size:
                if genre_counts[primary] >= self.max_per_genre:
                    continue

            if type_counts[item.media_type] >= max_per_type:
                continue

            selected.append((item, score))
            seen.add(key)
            type_counts[item.media_type] += 1
            if primary is not None:
                genre_counts[primary] += 1

        return selected


def generate_genre_combinations(
    top_genres: Sequence[Tuple[int, float]],
    min_score: float = 0.3,
) -> List[Tuple[int, int]]:
    """
    Pairwise genre id combinations for AND-style catalog queries.

    Args:
        top_genres: (genre_id, score) tuples, strongest first
        min_score: Genres below this are ignored

    Returns:
        Every pair among the first five eligible genres
    """
    eligible = [gid for gid, score in top_genres if score >= min_score][:5]
    return [
        (eligible[i], eligible[j])
        for i in range(len(eligible))
        for j in range(i + 1, len(eligible))
    ]


def genre_combinations_for_vector(vector: TasteVector, min_score: float = 0.3) -> List[Tuple[int, int]]:
    """generate_genre_combinations fed from a taste vector's strongest genres."""
    top = [(GENRE_KEY_TO_TMDB[dim], vector[dim]) for dim in get_genres_from_vector(vector, 0.0)]
    return generate_genre_combinations(top, min_score)
