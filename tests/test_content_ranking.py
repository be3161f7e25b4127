import pytest

from taste_recs.content import (
    ContentMetadata,
    content_to_vector,
    derive_era,
    derive_popularity,
    genre_dimensions_for,
)
from taste_recs.ranking import (
    CatalogItem,
    DiversityFilter,
    generate_genre_combinations,
    genre_combinations_for_vector,
    hybrid_score,
    match_score,
    rank_by_similarity,
    reorder_within_windows,
)
from taste_recs.vector import TasteVector


# =============================================================================
# CONTENT VECTORS
# =============================================================================

def test_single_genre_content_vector():
    v = content_to_vector(ContentMetadata(genre_ids=(28,)))
    assert v["action"] == 1.0
    assert v["comedy"] == 0.0
    assert v["pacing"] == pytest.approx(0.7)
    assert v["intensity"] == pytest.approx(0.5)
    assert v["tone"] == 0.0
    assert v["era"] == 0.0
    assert v["popularity"] == 0.0


def test_genre_combo_shifts_meta_axes():
    v = content_to_vector(ContentMetadata(genre_ids=(27, 53)))
    assert v["tone"] == pytest.approx((-0.8 - 0.5 - 0.3) / 2)
    assert v["intensity"] == pytest.approx((0.8 + 0.6 + 0.3) / 2)


def test_content_vector_is_binary_and_bounded():
    v = content_to_vector(ContentMetadata(genre_ids=(27, 53, 35, 10751, 16), popularity=500, vote_count=9000))
    assert v.is_within_bounds()
    for dim in ("horror", "thriller", "comedy", "family", "animation"):
        assert v[dim] == 1.0


def test_compound_tv_tags():
    assert genre_dimensions_for([10759]) == ("action", "adventure")
    assert genre_dimensions_for([10765]) == ("fantasy",)
    assert genre_dimensions_for([28, 10759, 12]) == ("action", "adventure")
    assert genre_dimensions_for([99999]) == ()


def test_era_and_popularity_buckets():
    assert derive_era(frozenset(), 1975) == pytest.approx(-0.8)
    assert derive_era(frozenset(), 2023) == pytest.approx(0.8)
    assert derive_era(frozenset({36}), 2012) == pytest.approx(0.0)
    assert derive_popularity(150) == pytest.approx(0.9)
    assert derive_popularity(150, vote_count=50) == pytest.approx(0.6)
    assert derive_popularity(1) == pytest.approx(-0.6)
    assert derive_popularity(None, None) == 0.0


def test_cached_vectors_are_independent_copies():
    meta = ContentMetadata(genre_ids=(35, 18))
    first = content_to_vector(meta)
    first["comedy"] = 0.0
    assert content_to_vector(ContentMetadata(genre_ids=(18, 35)))["comedy"] == 1.0


# =============================================================================
# MATCH SCORE / HYBRID
# =============================================================================

def test_match_score_counts_each_dimension_once():
    v = TasteVector.from_partial({"action": 0.6})
    assert match_score([28, 10759], v) == pytest.approx(0.6)
    assert match_score([28, 28], v) == pytest.approx(0.6)


def test_match_score_unnormalised_and_empty():
    v = TasteVector.from_partial({"comedy": 0.7, "romance": 0.5})
    assert match_score([35, 10749], v) == pytest.approx(1.2)
    assert match_score([], v) == 0.0
    assert match_score([99999], v) == 0.0


def test_hybrid_score_tie_breakers():
    v = TasteVector.from_partial({"action": 0.5})
    item = CatalogItem(id=1, title="x", genre_ids=[28], popularity=250.0, vote_average=8.0)
    assert hybrid_score(item, v) == pytest.approx(0.5 + 0.1 + 0.03)

    low = CatalogItem(id=2, title="y", genre_ids=[28], popularity=50.0, vote_average=6.9)
    assert hybrid_score(low, v) == pytest.approx(0.5 + 0.05)


# =============================================================================
# WINDOWED REORDER
# =============================================================================

def test_reorder_stays_inside_windows():
    v = TasteVector.from_partial({"action": 0.8, "comedy": 0.2})
    items = [
        CatalogItem(id=1, title="c1", genre_ids=[35]),
        CatalogItem(id=2, title="a1", genre_ids=[28]),
        CatalogItem(id=3, title="a2", genre_ids=[28]),
        CatalogItem(id=4, title="d1", genre_ids=[18]),
        CatalogItem(id=5, title="a3", genre_ids=[28]),
        CatalogItem(id=6, title="d2", genre_ids=[18]),
    ]
    ordered = reorder_within_windows(items, v, window_size=3)
    assert [it.id for it in ordered] == [2, 3, 1, 5, 4, 6]


def test_reorder_with_custom_accessor():
    v = TasteVector.from_partial({"horror": 1.0})
    rows = [{"id": 1, "tags": [35]}, {"id": 2, "tags": [27]}]
    ordered = reorder_within_windows(rows, v, get_genre_ids=lambda r: r["tags"])
    assert [r["id"] for r in ordered] == [2, 1]


def test_reorder_window_size_one_is_identity(catalog_items):
    v = TasteVector.from_partial({"horror": 1.0})
    assert reorder_within_windows(catalog_items, v, window_size=1) == catalog_items


def test_reorder_rejects_bad_window(catalog_items):
    with pytest.raises(ValueError):
        reorder_within_windows(catalog_items, TasteVector(), window_size=0)


# =============================================================================
# SIMILARITY / DIVERSITY
# =============================================================================

def test_rank_by_similarity(catalog_items):
    v = content_to_vector(catalog_items[3].metadata())
    ranked = rank_by_similarity(catalog_items, v, limit=2)
    assert len(ranked) == 2
    assert ranked[0][0].id == 4
    assert ranked[0][1] == 100
    assert ranked[0][1] >= ranked[1][1]


def test_diversity_caps_primary_genre():
    ranked = [(CatalogItem(id=i, title=str(i), genre_ids=[28]), 1.0 - i / 10) for i in range(5)]
    kept = DiversityFilter(max_per_genre=3).filter(ranked, target_count=5)
    assert [it.id for it, _ in kept] == [0, 1, 2]


def test_diversity_caps_media_type_and_dedupes():
    ranked = [
        (CatalogItem(id=1, title="m1", genre_ids=[28]), 0.9),
        (CatalogItem(id=1, title="m1", genre_ids=[28]), 0.9),
        (CatalogItem(id=2, title="m2", genre_ids=[35]), 0.8),
        (CatalogItem(id=3, title="m3", genre_ids=[18]), 0.7),
        (CatalogItem(id=4, title="t1", media_type="tv", genre_ids=[99]), 0.6),
        (CatalogItem(id=5, title="t2", media_type="tv", genre_ids=[80]), 0.5),
    ]
    kept = DiversityFilter(max_type_share=0.5).filter(ranked, target_count=4)
    assert [(it.media_type, it.id) for it, _ in kept] == [("movie", 1), ("movie", 2), ("tv", 4), ("tv", 5)]


def test_genre_combinations():
    combos = generate_genre_combinations([(28, 0.9), (35, 0.5), (18, 0.2)])
    assert combos == [(28, 35)]
    assert generate_genre_combinations([]) == []

    many = generate_genre_combinations([(g, 0.9) for g in (28, 35, 18, 27, 53, 99)])
    assert len(many) == 10


def test_genre_combinations_for_vector():
    v = TasteVector.from_partial({"horror": 0.9, "thriller": 0.6, "comedy": 0.2})
    assert genre_combinations_for_vector(v) == [(27, 53)]


def test_catalog_item_from_tmdb_payload():
    movie = CatalogItem.from_dict({
        "id": 27205, "title": "Inception", "genre_ids": [28, 878],
        "release_date": "2010-07-15", "popularity": 88.1, "vote_average": 8.4, "vote_count": 35000,
    })
    assert movie.media_type == "movie"
    assert movie.release_year == 2010
    assert movie.metadata().vote_count == 35000

    show = CatalogItem.from_dict({"id": 1396, "name": "Breaking Bad", "first_air_date": "2008-01-20"})
    assert show.media_type == "tv"
    assert show.title == "Breaking Bad"
    assert show.release_year == 2008
    assert CatalogItem.from_dict(show.to_dict()) == show
