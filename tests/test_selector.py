from conftest import make_pair
from taste_recs.catalog import (
    ADAPTIVE_POOL,
    FIXED_PAIRS,
    GENRE_RESPONSIVE_POOL,
    all_pairs,
    get_pair,
)
from taste_recs.config import SelectionConfig
from taste_recs.selector import (
    PairSelector,
    get_fixed_pairs,
    select_adaptive_pairs,
    select_genre_responsive_pairs,
)
from taste_recs.vector import TasteVector, create_empty_vector

FIXED_IDS = [p.id for p in FIXED_PAIRS]


def _content_ids(pairs):
    ids = []
    for pair in pairs:
        ids.extend(pair.content_ids)
    return ids


def test_pool_sizes():
    assert len(FIXED_PAIRS) == 3
    assert len(GENRE_RESPONSIVE_POOL) == 12
    assert len(ADAPTIVE_POOL) == 25
    assert len({p.id for p in all_pairs()}) == 40
    assert get_pair("adaptive-1").option_a.title == "Breaking Bad"


def test_fixed_pairs_in_order():
    assert [p.id for p in get_fixed_pairs()] == ["fixed-1", "fixed-2", "fixed-3"]


def test_uncovered_genre_ranked_first():
    picked = select_genre_responsive_pairs(["documentary"], FIXED_IDS)
    assert [p.id for p in picked] == ["genre-documentary", "genre-animation"]


def test_display_names_accepted():
    picked = select_genre_responsive_pairs(["Documentary"], FIXED_IDS)
    assert picked[0].id == "genre-documentary"


def test_uncovered_beats_covered():
    picked = select_genre_responsive_pairs(["drama", "western"], FIXED_IDS)
    assert [p.id for p in picked] == ["genre-western", "genre-comedy-drama"]


def test_cluster_trigger_outweighs_genre():
    picked = select_genre_responsive_pairs(["western"], FIXED_IDS, ["history-war"])
    assert [p.id for p in picked] == ["genre-war-history", "genre-western"]


def test_always_two_genre_pairs():
    for genres in ([], ["reality"], ["action", "scifi", "thriller"], ["nothing-real"]):
        picked = select_genre_responsive_pairs(genres, FIXED_IDS)
        assert len(picked) == 2
        assert len({p.id for p in picked}) == 2


def test_genre_selection_prefers_no_overlap_over_match():
    fixed = make_pair("f", ["tone"], {"tone": 1.0}, {"tone": -1.0}, ids=(10, 11))
    overlapping = make_pair("g-match", ["comedy"], {"comedy": 1.0}, {}, ids=(10, 20), genres=["comedy"])
    plain_1 = make_pair("g-plain-1", ["tone"], {"tone": 1.0}, {}, ids=(30, 31))
    plain_2 = make_pair("g-plain-2", ["tone"], {"tone": 1.0}, {}, ids=(40, 41))

    selector = PairSelector(
        fixed_pairs=[fixed],
        genre_pool=[overlapping, plain_1, plain_2],
        adaptive_pool=[],
        covered_genres=(),
    )
    picked = selector.select_genre_responsive_pairs(["comedy"], ["f"])
    assert [p.id for p in picked] == ["g-plain-1", "g-plain-2"]


def test_genre_selection_total_when_everything_overlaps():
    fixed = make_pair("f", ["tone"], {"tone": 1.0}, {"tone": -1.0}, ids=(10, 11))
    g1 = make_pair("g1", ["comedy"], {"comedy": 1.0}, {}, ids=(10, 20))
    g2 = make_pair("g2", ["comedy"], {"comedy": 1.0}, {}, ids=(11, 20))

    selector = PairSelector(fixed_pairs=[fixed], genre_pool=[g1, g2], adaptive_pool=[])
    picked = selector.select_genre_responsive_pairs([], ["f"])
    assert [p.id for p in picked] == ["g1", "g2"]


def test_small_pool_returns_whole_pool():
    only = make_pair("g-only", ["comedy"], {"comedy": 1.0}, {})
    selector = PairSelector(fixed_pairs=[], genre_pool=[only], adaptive_pool=[])
    assert [p.id for p in selector.select_genre_responsive_pairs(["comedy"], [])] == ["g-only"]


def test_adaptive_selection_default_catalog():
    genre_ids = [p.id for p in select_genre_responsive_pairs(["documentary"], FIXED_IDS)]
    used = FIXED_IDS + genre_ids

    picked = select_adaptive_pairs(create_empty_vector(), used)
    assert len(picked) == 5
    assert not {p.id for p in picked} & set(used)

    used_titles = set(_content_ids(get_pair(pid) for pid in used))
    picked_titles = _content_ids(picked)
    assert len(set(picked_titles)) == len(picked_titles)
    assert not used_titles & set(picked_titles)


def test_adaptive_targets_ambiguous_dimensions():
    # Everything decided except romance (0.5) and era/tone (neutral)
    vector = TasteVector.from_partial({dim: 1.0 for dim in (
        "action", "adventure", "animation", "comedy", "crime", "documentary",
        "drama", "family", "fantasy", "history", "horror", "musical", "mystery",
        "reality", "scifi", "thriller", "war", "western",
    )})
    vector["romance"] = 0.5
    vector["pacing"] = 1.0
    vector["popularity"] = -1.0
    vector["intensity"] = 1.0

    selector = PairSelector()
    assert set(selector.ambiguous_dimensions(vector)) == {"romance", "tone", "era"}

    picked = selector.select_adaptive_pairs(vector, [], count=1)
    assert picked[0].id == "adaptive-12"


def test_ambiguous_set_capped():
    selector = PairSelector(config=SelectionConfig(max_ambiguous_dims=4))
    dims = selector.ambiguous_dimensions(create_empty_vector())
    assert dims == ["tone", "pacing", "era", "popularity"]


def test_adaptive_returns_remaining_when_pool_small():
    a1 = make_pair("a1", ["tone"], {"tone": 1.0}, {"tone": -1.0}, phase="adaptive")
    a2 = make_pair("a2", ["era"], {"era": 1.0}, {"era": -1.0}, phase="adaptive")
    selector = PairSelector(fixed_pairs=[], genre_pool=[], adaptive_pool=[a1, a2])

    assert {p.id for p in selector.select_adaptive_pairs(create_empty_vector(), [])} == {"a1", "a2"}
    assert [p.id for p in selector.select_adaptive_pairs(create_empty_vector(), ["a1"])] == ["a2"]


def test_adaptive_avoids_titles_already_shown():
    shown = make_pair("shown", ["tone"], {"tone": 1.0}, {"tone": -1.0}, ids=(1, 2))
    repeat = make_pair("repeat", ["tone", "era"], {"tone": 1.0, "era": 1.0}, {"tone": -1.0, "era": -1.0},
                       ids=(2, 3), phase="adaptive")
    fresh = make_pair("fresh", ["pacing"], {"pacing": 0.2}, {"pacing": 0.1}, ids=(4, 5), phase="adaptive")
    selector = PairSelector(fixed_pairs=[shown], genre_pool=[], adaptive_pool=[repeat, fresh])

    picked = selector.select_adaptive_pairs(create_empty_vector(), ["shown"], count=1)
    assert [p.id for p in picked] == ["fresh"]

    both = selector.select_adaptive_pairs(create_empty_vector(), ["shown"], count=2)
    assert [p.id for p in both] == ["fresh", "repeat"]
