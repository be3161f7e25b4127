"""
Taste Vector Model
==================

24-dimensional preference vector:
    - 19 genre dimensions (0.0 to 1.0): how much the user likes each genre
    - 5 meta dimensions (-1.0 to +1.0): cross-genre preference axes

User vectors hold continuous values; content vectors hold binary genre
values (1.0/0.0). Weighted cosine similarity handles the asymmetry.

Every library operation that produces a vector clamps it before returning.
Intermediate arithmetic (e.g. quiz delta accumulation) may exceed the
bounds and is clamped once by the caller.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as _sk_cosine

from .config import (
    ALL_DIMENSIONS,
    GENRE_DIMENSIONS,
    META_DIMENSIONS,
    GENRE_RANGE,
    META_RANGE,
    DIMENSION_WEIGHTS,
    DEFAULT_INTERACTION,
    GENRE_KEY_TO_NAME,
    GENRE_NAME_TO_KEY,
    GENRE_MIN_THRESHOLD,
)


class Dimension(str, Enum):
    """The 24 taste dimensions, in canonical storage order."""
    ACTION = "action"
    ADVENTURE = "adventure"
    ANIMATION = "animation"
    COMEDY = "comedy"
    CRIME = "crime"
    DOCUMENTARY = "documentary"
    DRAMA = "drama"
    FAMILY = "family"
    FANTASY = "fantasy"
    HISTORY = "history"
    HORROR = "horror"
    MUSICAL = "musical"
    MYSTERY = "mystery"
    REALITY = "reality"
    ROMANCE = "romance"
    SCIFI = "scifi"
    THRILLER = "thriller"
    WAR = "war"
    WESTERN = "western"
    TONE = "tone"
    PACING = "pacing"
    ERA = "era"
    POPULARITY = "popularity"
    INTENSITY = "intensity"

    @property
    def is_genre(self) -> bool:
        return self.value in GENRE_DIMENSION_SET


DimensionKey = Union[str, Dimension]

NUM_DIMENSIONS = len(ALL_DIMENSIONS)
DIMENSION_INDEX: Dict[str, int] = {dim: i for i, dim in enumerate(ALL_DIMENSIONS)}
GENRE_DIMENSION_SET = frozenset(GENRE_DIMENSIONS)
META_DIMENSION_SET = frozenset(META_DIMENSIONS)

if [d.value for d in Dimension] != list(ALL_DIMENSIONS):
    raise ValueError("Dimension enum is out of sync with ALL_DIMENSIONS")

_LOWER = np.array([GENRE_RANGE[0]] * len(GENRE_DIMENSIONS) + [META_RANGE[0]] * len(META_DIMENSIONS))
_UPPER = np.array([GENRE_RANGE[1]] * len(GENRE_DIMENSIONS) + [META_RANGE[1]] * len(META_DIMENSIONS))

GENRE_SLICE = slice(0, len(GENRE_DIMENSIONS))


def dim_index(dim: DimensionKey) -> int:
    """Index of a dimension in the canonical order. Raises KeyError on typos."""
    key = dim.value if isinstance(dim, Dimension) else dim
    try:
        return DIMENSION_INDEX[key]
    except KeyError:
        raise KeyError(f"Unknown taste dimension: {dim!r}") from None


def is_genre_dimension(dim: DimensionKey) -> bool:
    return dim_index(dim) < len(GENRE_DIMENSIONS)


def validate_partial(mapping: Mapping[str, float]) -> Dict[str, float]:
    """Check a partial dimension map; keys absent from it mean 'no opinion'."""
    for key in mapping:
        dim_index(key)
    return {key: float(value) for key, value in mapping.items()}


def _weight_array(weights: Optional[Mapping[str, float]]) -> np.ndarray:
    weights = weights if weights is not None else DIMENSION_WEIGHTS
    return np.array([weights[d] for d in ALL_DIMENSIONS], dtype=float)


@dataclass(eq=False)
class TasteVector:
    """Fixed-size taste vector with name-based access."""
    values: np.ndarray = field(default_factory=lambda: np.zeros(NUM_DIMENSIONS))

    def __post_init__(self):
        arr = np.array(self.values, dtype=float)
        if arr.shape != (NUM_DIMENSIONS,):
            raise ValueError(
                f"TasteVector needs {NUM_DIMENSIONS} values, got shape {arr.shape}"
            )
        self.values = arr

    @classmethod
    def from_partial(cls, mapping: Mapping[str, float]) -> "TasteVector":
        """Build a vector from a partial map; missing dimensions are 0."""
        vec = cls()
        for key, value in validate_partial(mapping).items():
            vec[key] = value
        return vec

    def __getitem__(self, dim: DimensionKey) -> float:
        return float(self.values[dim_index(dim)])

    def __setitem__(self, dim: DimensionKey, value: float) -> None:
        self.values[dim_index(dim)] = value

    def __iter__(self) -> Iterator[str]:
        return iter(ALL_DIMENSIONS)

    def __len__(self) -> int:
        return NUM_DIMENSIONS

    def __eq__(self, other) -> bool:
        if not isinstance(other, TasteVector):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __repr__(self) -> str:
        non_zero = ", ".join(f"{d}={v:.3f}" for d, v in self.items() if v != 0)
        return f"TasteVector({non_zero})"

    def items(self) -> Iterator[Tuple[str, float]]:
        for dim, value in zip(ALL_DIMENSIONS, self.values):
            yield dim, float(value)

    def copy(self) -> "TasteVector":
        return TasteVector(self.values.copy())

    def is_within_bounds(self) -> bool:
        return bool(
            np.all(np.isfinite(self.values))
            and np.all(self.values >= _LOWER)
            and np.all(self.values <= _UPPER)
        )


@dataclass(eq=False)
class ConfidenceVector:
    """
    Per-dimension certainty in [0, 1].

    Says how much signal a dimension has received, not which way it points.
    Values only ever go up; use reset() to start over.
    """
    values: np.ndarray = field(default_factory=lambda: np.zeros(NUM_DIMENSIONS))

    def __post_init__(self):
        arr = np.clip(np.array(self.values, dtype=float), 0.0, 1.0)
        if arr.shape != (NUM_DIMENSIONS,):
            raise ValueError(
                f"ConfidenceVector needs {NUM_DIMENSIONS} values, got shape {arr.shape}"
            )
        self.values = arr

    def __getitem__(self, dim: DimensionKey) -> float:
        return float(self.values[dim_index(dim)])

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConfidenceVector):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def raise_to(self, dim: DimensionKey, gain: float) -> float:
        """Add a non-negative gain to one dimension, capped at 1.0."""
        if gain < 0:
            raise ValueError("Confidence gains must be non-negative")
        idx = dim_index(dim)
        self.values[idx] = min(1.0, self.values[idx] + gain)
        return float(self.values[idx])

    def reset(self) -> None:
        self.values = np.zeros(NUM_DIMENSIONS)

    def items(self) -> Iterator[Tuple[str, float]]:
        for dim, value in zip(ALL_DIMENSIONS, self.values):
            yield dim, float(value)

    def least_certain(self, count: int = 5) -> List[str]:
        """Dimensions that most need probing, lowest confidence first."""
        order = sorted(range(NUM_DIMENSIONS), key=lambda i: self.values[i])
        return [ALL_DIMENSIONS[i] for i in order[:count]]

    def to_dict(self) -> Dict[str, float]:
        return {dim: round(value, 4) for dim, value in self.items()}


# =============================================================================
# FACTORY / CLAMPING
# =============================================================================

def create_empty_vector() -> TasteVector:
    """Zero vector: every dimension at 0."""
    return TasteVector()


def create_empty_confidence() -> ConfidenceVector:
    return ConfidenceVector()


def clamp_vector(v: TasteVector) -> TasteVector:
    """Clamp to valid ranges: genres [0, 1], meta [-1, 1]. Non-finite values become 0."""
    arr = np.nan_to_num(v.values, nan=0.0, posinf=1.0, neginf=-1.0)
    return TasteVector(np.clip(arr, _LOWER, _UPPER))


# =============================================================================
# VECTOR MATH
# =============================================================================

def cosine_similarity(
    a: TasteVector,
    b: TasteVector,
    weights: Optional[Mapping[str, float]] = None,
) -> int:
    """
    Weighted cosine similarity on a 0-100 scale.

    Each dimension is scaled by its weight before the cosine is taken; the
    raw [-1, 1] result is remapped linearly to [0, 100]. Returns 0 when
    either weighted vector has zero magnitude.
    """
    w = _weight_array(weights)
    wa = (a.values * w).reshape(1, -1)
    wb = (b.values * w).reshape(1, -1)

    if not np.any(wa) or not np.any(wb):
        return 0

    raw = float(_sk_cosine(wa, wb)[0, 0])
    return int(np.floor((raw + 1) / 2 * 100 + 0.5))


def blend_vector(
    current: TasteVector,
    target: TasteVector,
    weight: float,
    learning_rate: float = DEFAULT_INTERACTION.learning_rate,
) -> TasteVector:
    """
    Exponential-moving-average step toward a target.

    current[d] += weight * learning_rate * (target[d] - current[d])
    """
    out = current.values + weight * learning_rate * (target.values - current.values)
    return clamp_vector(TasteVector(out))


def blend_vector_away(
    current: TasteVector,
    target: TasteVector,
    weight: float,
    learning_rate: float = DEFAULT_INTERACTION.learning_rate,
) -> TasteVector:
    """
    Push away from a target (negative signals like thumbs-down).

    current[d] += weight * learning_rate * (current[d] - target[d])
    """
    out = current.values + weight * learning_rate * (current.values - target.values)
    return clamp_vector(TasteVector(out))


def add_scaled_delta(base: TasteVector, delta: TasteVector, weight: float) -> TasteVector:
    """base + delta * weight, clamped."""
    return clamp_vector(TasteVector(base.values + delta.values * weight))


def get_top_genres(vector: TasteVector, count: int = 3) -> List[str]:
    """Top N genre dimensions by value (ties keep canonical order)."""
    return sorted(GENRE_DIMENSIONS, key=lambda d: -vector[d])[:count]


def get_genres_from_vector(
    vector: TasteVector,
    min_threshold: float = GENRE_MIN_THRESHOLD,
) -> List[str]:
    """All genre dimensions above threshold, strongest first."""
    eligible = [d for d in GENRE_DIMENSIONS if vector[d] > min_threshold]
    return sorted(eligible, key=lambda d: -vector[d])


def is_non_zero(vector: TasteVector) -> bool:
    return bool(np.any(vector.values != 0))


# =============================================================================
# GENRE NAME <-> KEY
# =============================================================================

def genre_name_to_key(name: str) -> str:
    """'Sci-Fi' -> 'scifi'. Unknown names fall back to lower case."""
    return GENRE_NAME_TO_KEY.get(name, name.lower())


def genre_key_to_name(key: str) -> str:
    return GENRE_KEY_TO_NAME.get(key, key)


# =============================================================================
# SERIALISATION
# =============================================================================

# Frozen positional orders of earlier stored formats
LEGACY_25D_DIMENSIONS = (
    "action", "adventure", "animation", "anime", "comedy", "crime",
    "documentary", "drama", "family", "fantasy", "history", "horror",
    "musical", "mystery", "reality", "romance", "scifi", "thriller",
    "war", "western", "tone", "pacing", "era", "popularity", "intensity",
)
LEGACY_22D_DIMENSIONS = (
    "action", "adventure", "animation", "comedy", "crime",
    "documentary", "drama", "fantasy", "history", "horror",
    "musical", "mystery", "reality", "romance", "scifi", "thriller",
    "war", "tone", "pacing", "era", "popularity", "intensity",
)


def vector_to_array(vector: TasteVector) -> List[float]:
    """Positional list in canonical dimension order."""
    return [float(v) for v in vector.values]


def array_to_vector(arr: Iterable[float]) -> TasteVector:
    """
    Read a positional array, migrating legacy layouts.

    25 values: old layout with the retired 'anime' dimension (dropped).
    22 values: interim layout without family/western (left at 0).
    24 values: current layout.
    """
    values = [float(x) for x in arr]

    if len(values) == NUM_DIMENSIONS:
        return TasteVector(values)

    if len(values) == len(LEGACY_25D_DIMENSIONS):
        order = LEGACY_25D_DIMENSIONS
    elif len(values) == len(LEGACY_22D_DIMENSIONS):
        order = LEGACY_22D_DIMENSIONS
    else:
        raise ValueError(f"Unsupported stored vector length: {len(values)}")

    vector = create_empty_vector()
    for dim, value in zip(order, values):
        if dim in DIMENSION_INDEX:
            vector[dim] = value
    return vector


def vector_to_dict(vector: TasteVector) -> Dict[str, float]:
    return dict(vector.items())


def vector_from_dict(data: Mapping[str, float]) -> TasteVector:
    """Inverse of vector_to_dict; the key set must match all 24 dimensions."""
    keys = set(data)
    expected = set(ALL_DIMENSIONS)
    if keys != expected:
        missing = sorted(expected - keys)
        extra = sorted(keys - expected)
        raise ValueError(f"Vector keys mismatch (missing={missing}, unexpected={extra})")
    return TasteVector([float(data[d]) for d in ALL_DIMENSIONS])
