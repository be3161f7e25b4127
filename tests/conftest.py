import itertools

import pytest

from taste_recs.catalog import QuizOption, QuizPair, QuizPhase
from taste_recs.content import clear_content_vector_cache
from taste_recs.ranking import CatalogItem
from taste_recs.scoring import QuizAnswer
from taste_recs.store import ProfileStore

NOW = 1_700_000_000.0
DAY = 86400.0

_ids = itertools.count(500_000, 2)


def make_pair(pair_id, dims, a_pos, b_pos, ids=None, phase="fixed", genres=(), clusters=()):
    """Build a quiz pair with throwaway titles."""
    if ids is None:
        first = next(_ids)
        ids = (first, first + 1)
    a_id, b_id = ids
    return QuizPair(
        id=pair_id,
        phase=QuizPhase(phase),
        option_a=QuizOption(a_id, "movie", f"{pair_id} A", 2000, "option a", a_pos),
        option_b=QuizOption(b_id, "movie", f"{pair_id} B", 2000, "option b", b_pos),
        dimensions_tested=tuple(dims),
        trigger_genres=tuple(genres),
        trigger_clusters=tuple(clusters),
    )


def make_answer(pair_id, choice, phase="fixed", timestamp=NOW):
    return QuizAnswer(pair_id=pair_id, chosen_option=choice, phase=phase, timestamp=timestamp)


@pytest.fixture(autouse=True)
def _fresh_content_cache():
    clear_content_vector_cache()
    yield
    clear_content_vector_cache()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tone_action_pair():
    """A pair where A is a dark actioner and B is a light crowd-pleaser."""
    return make_pair(
        "custom-tone-action",
        ["tone", "action"],
        {"action": 0.8, "tone": -0.8, "drama": 1.0},
        {"tone": 0.9},
        ids=(9001, 9002),
    )


@pytest.fixture
def store(tmp_path):
    return ProfileStore(str(tmp_path / "profile.json"))


@pytest.fixture
def catalog_items():
    return [
        CatalogItem(id=1, title="Fast Cars", genre_ids=[28], popularity=50.0, release_year=2015),
        CatalogItem(id=2, title="Quiet Love", genre_ids=[10749, 18], popularity=12.0),
        CatalogItem(id=3, title="Laugh Track", media_type="tv", genre_ids=[35], popularity=80.0),
        CatalogItem(id=4, title="Night Shift", genre_ids=[27, 53], popularity=30.0, vote_average=7.5),
    ]
