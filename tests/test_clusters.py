import pytest

from taste_recs.clusters import (
    TASTE_CLUSTERS,
    compute_cluster_seed_vector,
    create_default_vector,
    derive_home_genres,
    get_cluster,
    get_top_genre_keys_from_clusters,
)
from taste_recs.config import GENRE_DIMENSIONS
from taste_recs.vector import TasteVector, create_empty_vector


def test_catalog_shape():
    assert len(TASTE_CLUSTERS) == 14
    assert len({c.id for c in TASTE_CLUSTERS}) == 14
    assert get_cluster("anime-animation").vector["animation"] == pytest.approx(0.9)
    assert get_cluster("missing") is None


def test_every_cluster_is_in_range():
    for cluster in TASTE_CLUSTERS:
        seed = compute_cluster_seed_vector([cluster.id])
        assert seed.is_within_bounds(), cluster.id


def test_single_cluster_seed():
    seed = compute_cluster_seed_vector(["action-adrenaline"])
    assert seed["action"] == pytest.approx(0.9)
    assert seed["tone"] == pytest.approx(-0.2)
    assert seed["pacing"] == pytest.approx(0.9)

    defined = set(get_cluster("action-adrenaline").vector)
    for dim, value in seed.items():
        if dim not in defined:
            assert value == 0.0, dim


def test_absent_dimensions_do_not_dilute_average():
    seed = compute_cluster_seed_vector(["feel-good-funny", "dark-thrillers"])
    # Only feel-good-funny defines comedy
    assert seed["comedy"] == pytest.approx(0.9)
    assert seed["thriller"] == pytest.approx(0.9)
    assert seed["tone"] == pytest.approx(0.0)
    assert seed["pacing"] == pytest.approx(0.5)


def test_unknown_ids_ignored_and_order_irrelevant():
    a = compute_cluster_seed_vector(["history-war", "cult-indie", "nope"])
    b = compute_cluster_seed_vector(["cult-indie", "history-war"])
    assert a.values.tolist() == pytest.approx(b.values.tolist())


def test_empty_selection_is_zero_vector():
    assert compute_cluster_seed_vector([]) == create_empty_vector()


def test_home_genres():
    assert derive_home_genres(["action-adrenaline"]) == [28, 12, 53]
    assert derive_home_genres([]) == []


def test_home_genres_capped_at_eight():
    ids = [c.id for c in TASTE_CLUSTERS]
    assert len(derive_home_genres(ids)) <= 8


def test_top_genre_keys():
    assert get_top_genre_keys_from_clusters(["action-adrenaline"]) == ["action", "adventure", "thriller"]
    assert get_top_genre_keys_from_clusters(["cult-indie"], top_n=5) == ["drama", "comedy"]


def test_default_vector_from_genre_names():
    v = create_default_vector(["Sci-Fi", "comedy"])
    assert isinstance(v, TasteVector)
    assert v["scifi"] == 0.5
    assert v["comedy"] == 0.5
    assert v["drama"] == 0.25
    assert v["tone"] == 0.0
    assert all(v[d] in (0.25, 0.5) for d in GENRE_DIMENSIONS)
