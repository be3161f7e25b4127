import json

import pytest

from conftest import DAY, NOW, make_answer
from taste_recs.clusters import compute_cluster_seed_vector
from taste_recs.config import InteractionConfig
from taste_recs.content import ContentMetadata
from taste_recs.errors import ProfileStoreError
from taste_recs.profile import (
    SCHEMA_VERSION,
    InteractionAction,
    TasteProfile,
    initialize_from_clusters,
    initialize_from_genres,
    migrate_from_legacy_preferences,
    needs_recomputation,
    recency_weight,
    record_interaction,
    recompute_vector,
    retake_quiz,
    save_quiz_results,
    update_clusters,
)
from taste_recs.vector import ConfidenceVector, TasteVector

ACTION = ContentMetadata(genre_ids=(28,))


# =============================================================================
# PROFILE OPERATIONS
# =============================================================================

def test_initialize_from_clusters(now):
    profile = initialize_from_clusters(["dark-thrillers", "history-war"], now=now)
    assert profile.vector == compute_cluster_seed_vector(["dark-thrillers", "history-war"])
    assert profile.selected_clusters == ["dark-thrillers", "history-war"]
    assert not profile.quiz_completed
    assert profile.last_updated == now
    assert profile.version == SCHEMA_VERSION


def test_initialize_from_genres():
    profile = initialize_from_genres(["Horror"])
    assert profile.vector["horror"] == 0.5
    assert profile.vector["comedy"] == 0.25


def test_thumbs_up_pulls_toward_item(now):
    profile = TasteProfile()
    updated = record_interaction(profile, 155, "movie", ACTION, "thumbs_up", now=now)

    assert updated.vector["action"] == pytest.approx(0.1)
    assert updated.vector["pacing"] == pytest.approx(0.07)
    assert len(updated.interaction_log) == 1
    assert updated.interaction_log[0].action is InteractionAction.THUMBS_UP
    # Original profile untouched
    assert profile.vector["action"] == 0.0
    assert profile.interaction_log == []


def test_thumbs_down_pushes_away(now):
    profile = TasteProfile(vector=TasteVector.from_partial({"action": 0.5}))
    updated = record_interaction(profile, 155, "movie", ACTION, InteractionAction.THUMBS_DOWN, now=now)
    assert updated.vector["action"] == pytest.approx(0.5 + 0.8 * 0.1 * (0.5 - 1.0))
    assert updated.vector.is_within_bounds()


def test_legacy_watchlist_action():
    assert InteractionAction.parse("watchlist_add") is InteractionAction.BOOKMARK
    assert InteractionAction.REMOVED.is_negative
    assert not InteractionAction.WATCHED.is_negative
    with pytest.raises(ValueError):
        InteractionAction.parse("shared")


def test_interaction_log_is_capped(now):
    config = InteractionConfig(max_interactions=3)
    profile = TasteProfile()
    for content_id in range(5):
        profile = record_interaction(profile, content_id, "movie", ACTION, "watched", now=now, config=config)
    assert [i.content_id for i in profile.interaction_log] == [2, 3, 4]


@pytest.mark.parametrize("age_days, weight", [(1, 1.0), (7, 1.0), (20, 0.8), (60, 0.5), (120, 0.3)])
def test_recency_weight(age_days, weight):
    assert recency_weight(NOW - age_days * DAY, now=NOW) == weight


def test_needs_recomputation(now):
    profile = TasteProfile(last_updated=now - 25 * 3600)
    assert not needs_recomputation(profile, now=now)

    profile = record_interaction(profile, 1, "movie", ACTION, "thumbs_up", now=now - 25 * 3600)
    assert needs_recomputation(profile, now=now)
    assert not needs_recomputation(profile, now=now - 24 * 3600)


def test_recompute_without_quiz_starts_from_flat_genres(now):
    profile = TasteProfile(vector=TasteVector.from_partial({"action": 0.7, "comedy": 0.4}))
    profile = record_interaction(profile, 1, "movie", ACTION, "thumbs_up", now=now - DAY)

    rebuilt = recompute_vector(profile, now=now)
    assert rebuilt.vector["action"] == pytest.approx(0.2 + 0.1 * (1.0 - 0.2))
    assert rebuilt.vector["comedy"] == pytest.approx(0.2 - 0.1 * 0.2)
    assert rebuilt.vector["drama"] == 0.0
    assert rebuilt.last_updated == now


def test_recompute_with_quiz_starts_from_stored_vector(now):
    quiz_vector = TasteVector.from_partial({"action": 0.5})
    profile = save_quiz_results(None, [make_answer("fixed-1", "A")], quiz_vector, now=now)
    profile = record_interaction(profile, 1, "movie", ACTION, "thumbs_up", now=now - 40 * DAY)

    rebuilt = recompute_vector(profile, now=now)
    # Stored vector already includes the first nudge; replay applies it again at 0.5 weight
    start = profile.vector["action"]
    assert rebuilt.vector["action"] == pytest.approx(start + 0.5 * 0.1 * (1.0 - start))


def test_recompute_without_log_is_noop():
    profile = TasteProfile()
    assert recompute_vector(profile) is profile


def test_save_quiz_results_keeps_log(now):
    profile = record_interaction(TasteProfile(), 1, "movie", ACTION, "bookmark", now=now)
    confidence = ConfidenceVector()
    confidence.raise_to("tone", 0.4)
    saved = save_quiz_results(profile, [make_answer("fixed-1", "B")], TasteVector.from_partial({"tone": 0.3}),
                              confidence, now=now)

    assert saved.quiz_completed
    assert saved.vector["tone"] == pytest.approx(0.3)
    assert saved.confidence["tone"] == pytest.approx(0.4)
    assert len(saved.interaction_log) == 1
    assert len(saved.quiz_answers) == 1


def test_retake_quiz_replays_log(now):
    profile = record_interaction(TasteProfile(), 1, "movie", ACTION, "thumbs_up", now=now)
    new_quiz = TasteVector.from_partial({"action": 0.3, "tone": -0.2})
    retaken = retake_quiz(profile, [make_answer("fixed-1", "A")], new_quiz, now=now)

    assert retaken.quiz_completed
    assert retaken.vector["action"] == pytest.approx(0.3 + 0.1 * (1.0 - 0.3))
    assert len(retaken.interaction_log) == 1

    fresh = retake_quiz(None, [], new_quiz, now=now)
    assert fresh.vector == new_quiz
    assert fresh.quiz_completed


def test_update_clusters(now):
    unquizzed = initialize_from_clusters(["feel-good-funny"], now=now)
    moved = update_clusters(unquizzed, ["horror-supernatural"], now=now)
    assert moved.vector == compute_cluster_seed_vector(["horror-supernatural"])
    assert moved.selected_clusters == ["horror-supernatural"]

    quizzed = save_quiz_results(unquizzed, [], TasteVector.from_partial({"comedy": 0.8}), now=now)
    kept = update_clusters(quizzed, ["horror-supernatural"], now=now)
    assert kept.vector["comedy"] == pytest.approx(0.8)
    assert kept.vector["horror"] == 0.0


def test_migrate_from_legacy_preferences():
    profile = migrate_from_legacy_preferences([28, 35, 10759, 424242])
    assert profile.vector["action"] == 0.5
    assert profile.vector["comedy"] == 0.5
    assert profile.vector["drama"] == 0.25
    assert not profile.quiz_completed


# =============================================================================
# SERIALISATION
# =============================================================================

def test_profile_dict_round_trip(now):
    profile = initialize_from_clusters(["cult-indie"], now=now)
    profile = record_interaction(profile, 7, "tv", ContentMetadata(genre_ids=(35,), popularity=12.0), "removed",
                                 now=now)
    confidence = ConfidenceVector()
    confidence.raise_to("drama", 0.2)
    profile = retake_quiz(profile, [make_answer("fixed-3", "neither")], profile.vector, confidence, now=now)

    data = json.loads(json.dumps(profile.to_dict()))
    assert data["version"] == SCHEMA_VERSION
    assert len(data["vector"]) == 24

    restored = TasteProfile.from_dict(data)
    assert restored == profile


def test_version_one_payload_is_upgraded():
    legacy_vector = [0.0] * 25
    legacy_vector[0] = 1.0
    payload = {
        "vector": {"action": 0.7, "anime": 0.9, "tone": -0.3},
        "quizCompleted": True,
        "quizAnswers": [{"pairId": "fixed-1", "chosenOption": "A", "timestamp": "2024-01-01T00:00:00Z"}],
        "interactionLog": [{
            "contentId": 1,
            "contentType": "movie",
            "action": "watchlist_add",
            "timestamp": "2024-01-02T00:00:00Z",
            "contentVector": legacy_vector,
        }],
        "lastUpdated": "2024-01-03T00:00:00Z",
    }
    profile = TasteProfile.from_dict(payload)

    assert profile.version == SCHEMA_VERSION
    assert profile.quiz_completed
    assert profile.vector["action"] == pytest.approx(0.7)
    assert profile.vector["tone"] == pytest.approx(-0.3)
    assert profile.quiz_answers[0].timestamp == 1704067200.0
    assert profile.interaction_log[0].action is InteractionAction.BOOKMARK
    assert profile.interaction_log[0].content_vector["action"] == 1.0
    assert profile.last_updated == 1704240000.0


def test_newer_version_rejected():
    with pytest.raises(ValueError):
        TasteProfile.from_dict({"version": SCHEMA_VERSION + 1, "vector": [0.0] * 24})


def test_stored_vector_is_clamped():
    profile = TasteProfile.from_dict({"version": 2, "vector": [2.0] * 24})
    assert profile.vector.is_within_bounds()


# =============================================================================
# STORE
# =============================================================================

def test_store_load_missing(store):
    assert store.load() is None


def test_store_save_and_load(store, now):
    profile = initialize_from_clusters(["history-war"], now=now)
    store.save(profile)

    assert store.load() == profile
    # Temp files are moved into place
    assert [p.name for p in store.path.parent.iterdir()] == ["profile.json"]


def test_store_creates_parent_directory(tmp_path, now):
    from taste_recs.store import ProfileStore

    nested = ProfileStore(str(tmp_path / "a" / "b" / "profile.json"))
    nested.save(initialize_from_genres(["Drama"], now=now))
    assert nested.path.exists()


def test_store_corrupt_file(store):
    store.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ProfileStoreError):
        store.load()


def test_store_unsupported_version(store):
    store.path.write_text(json.dumps({"version": 99, "vector": [0.0] * 24}), encoding="utf-8")
    with pytest.raises(ProfileStoreError):
        store.load()


def test_store_update_read_modify_write(store, now):
    store.save(initialize_from_clusters(["feel-good-funny"], now=now))

    updated = store.update(lambda p: record_interaction(p, 1, "movie", ACTION, "thumbs_up", now=now))
    assert len(updated.interaction_log) == 1
    assert len(store.load().interaction_log) == 1


def test_store_update_returning_none_writes_nothing(store):
    assert store.update(lambda p: None) is None
    assert not store.path.exists()


def test_store_subscribers(store, now):
    seen = []
    unsubscribe = store.subscribe(seen.append)

    profile = initialize_from_genres(["Comedy"], now=now)
    store.save(profile)
    assert seen == [profile]

    assert store.clear() is True
    assert seen == [profile, None]
    assert store.clear() is False

    unsubscribe()
    store.save(profile)
    assert len(seen) == 2


def test_failing_subscriber_does_not_block_others(store, now, caplog):
    seen = []

    def broken(profile):
        raise RuntimeError("cache offline")

    store.subscribe(broken)
    store.subscribe(seen.append)

    profile = initialize_from_clusters(["cult-indie"], now=now)
    store.save(profile)
    assert seen == [profile]
    assert store.load() == profile
    assert "Profile subscriber failed" in caplog.text

    updated = store.update(lambda p: record_interaction(p, 1, "movie", ACTION, "thumbs_up", now=now))
    assert seen == [profile, updated]

    assert store.clear() is True
    assert seen == [profile, updated, None]
