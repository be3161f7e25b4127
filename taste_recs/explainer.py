"""
Explanation Generator
=====================

Human-readable reasons for ranked items and quiz summaries:
- "Great match for your taste in Thriller" for very close items
- "Matches your Drama preferences" for good matches
- "Because you like Comedy" when only a genre overlaps
- A short taste summary for the quiz completion screen
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .config import TMDB_GENRE_NAMES, TMDB_GENRE_TO_DIM
from .content import content_to_vector
from .quiz import QuizResult
from .ranking import CatalogItem
from .vector import TasteVector, cosine_similarity

GREAT_MATCH_THRESHOLD = 80
GOOD_MATCH_THRESHOLD = 60
AXIS_LEAN_THRESHOLD = 0.3


@dataclass
class ItemExplanation:
    """Why an item was recommended."""
    item_id: int
    title: str
    similarity: int
    reason: str
    genres: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "item_id": self.item_id,
            "title": self.title,
            "similarity": self.similarity,
            "reason": self.reason,
            "genres": list(self.genres),
        }


class ExplanationGenerator:
    """
    Generates explanations from a taste vector.

    Focuses on:
    - Clarity: plain sentences, no scores
    - Specificity: names the genre that drove the match
    """

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        self.weights = weights
        self.axis_descriptors = {
            "tone": {
                "high": "light, uplifting stories",
                "low": "dark, gritty stories",
                "match": "a mix of light and dark",
            },
            "pacing": {
                "high": "with fast pacing",
                "low": "with a slow-burn pace",
                "match": "at a steady pace",
            },
        }

    def describe_axis(self, vector: TasteVector, axis: str) -> str:
        value = vector[axis]
        descriptors = self.axis_descriptors[axis]
        if value >= AXIS_LEAN_THRESHOLD:
            return descriptors["high"]
        if value <= -AXIS_LEAN_THRESHOLD:
            return descriptors["low"]
        return descriptors["match"]

    def explain_item(self, item: CatalogItem, vector: TasteVector) -> ItemExplanation:
        """
        Explain one ranked item.

        Args:
            item: The recommended catalog item
            vector: User taste vector

        Returns:
            ItemExplanation with the similarity and a one-line reason
        """
        content = content_to_vector(item.metadata())
        similarity = cosine_similarity(vector, content, self.weights)
        names = [TMDB_GENRE_NAMES[g] for g in item.genre_ids if g in TMDB_GENRE_NAMES]

        return ItemExplanation(
            item_id=item.id,
            title=item.title,
            similarity=similarity,
            reason=self._reason(item, vector, similarity, names),
            genres=names,
        )

    def _reason(
        self,
        item: CatalogItem,
        vector: TasteVector,
        similarity: int,
        names: List[str],
    ) -> str:
        if similarity >= GREAT_MATCH_THRESHOLD:
            return f"Great match for your taste in {names[0]}" if names else "Great match for your taste"
        if similarity >= GOOD_MATCH_THRESHOLD:
            return f"Matches your {names[0]} preferences" if names else "Matches your preferences"

        # Fall back to the item's tag the user likes most
        best_name, best_score = None, 0.0
        for gid in item.genre_ids:
            dim = TMDB_GENRE_TO_DIM.get(gid)
            if dim is None or gid not in TMDB_GENRE_NAMES:
                continue
            if vector[dim] > best_score:
                best_name, best_score = TMDB_GENRE_NAMES[gid], vector[dim]

        if best_name:
            return f"Because you like {best_name}"
        return "Popular right now"

    def summarize_quiz(self, result: QuizResult) -> str:
        """One or two sentences for the quiz completion screen."""
        parts = []
        if result.top_genres:
            parts.append(f"You love: {', '.join(result.top_genres)}.")
        tone = self.describe_axis(result.vector, "tone")
        pacing = self.describe_axis(result.vector, "pacing")
        parts.append(f"You lean toward {tone} {pacing}.")
        return " ".join(parts)


def explain_item(item: CatalogItem, vector: TasteVector) -> str:
    """
    Convenience function for a one-line reason.

    Args:
        item: Recommended item
        vector: User taste vector

    Returns:
        Reason string
    """
    return ExplanationGenerator().explain_item(item, vector).reason
