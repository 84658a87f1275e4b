"""Tests for the in-memory result store and its per-user index."""

import pytest
from conftest import make_result, raw_image, raw_result

from vision_tagger.models import DetectionResult, Image, Label


def test_save_and_get_by_image_id(store):
    result = make_result("user_anna")
    store.save(result)
    assert store.get_by_image_id(result.image.id) is result
    assert store.exists(result.image.id)
    assert len(store) == 1


def test_get_missing_image_returns_none(store):
    assert store.get_by_image_id("no-such-image") is None
    assert not store.exists("no-such-image")


def test_lookups_trim_whitespace(store):
    result = make_result("user_anna")
    store.save(result)
    assert store.get_by_image_id(f"  {result.image.id} ") is result
    assert store.exists(f" {result.image.id}")
    assert store.get_by_user_id(" user_anna ") == [result]
    assert store.count("user_anna  ") == 1


@pytest.mark.parametrize("key", [None, "", "   "])
def test_blank_keys_raise(store, key):
    with pytest.raises(ValueError):
        store.get_by_image_id(key)
    with pytest.raises(ValueError):
        store.get_by_user_id(key)
    with pytest.raises(ValueError):
        store.exists(key)
    with pytest.raises(ValueError):
        store.delete(key)
    with pytest.raises(ValueError):
        store.count(key)


def test_save_rejects_invalid_results(store):
    with pytest.raises(ValueError):
        store.save(None)
    with pytest.raises(ValueError):
        store.save(raw_result(None))
    with pytest.raises(ValueError):
        store.save(raw_result(raw_image(id="")))
    with pytest.raises(ValueError):
        store.save(raw_result(raw_image(id=None)))
    with pytest.raises(ValueError):
        store.save(raw_result(raw_image(uploader_id="   ")))


def test_failed_save_leaves_store_untouched(store):
    kept = make_result("user_anna")
    store.save(kept)
    with pytest.raises(ValueError):
        store.save(raw_result(raw_image(id=kept.image.id, uploader_id="")))
    assert store.get_by_image_id(kept.image.id) is kept
    assert store.count("user_anna") == 1
    assert len(store) == 1


def test_get_by_user_id_in_insertion_order(store):
    results = [make_result("user_anna", path=f"{i}.jpg") for i in range(3)]
    for result in results:
        store.save(result)
    store.save(make_result("user_bob"))

    assert store.get_by_user_id("user_anna") == results
    assert store.count("user_anna") == 3
    assert store.count("user_bob") == 1
    assert store.user_ids() == ["user_anna", "user_bob"]


def test_unknown_user_has_no_results(store):
    store.save(make_result("user_anna"))
    assert store.get_by_user_id("user_nobody") == []
    assert store.count("user_nobody") == 0


def test_save_overwrites_same_image(store):
    original = make_result("user_anna", labels=[("Cat", 95.0)])
    store.save(original)
    replacement = DetectionResult(original.image)
    replacement.add_label(Label("Dog", 60.0))
    store.save(replacement)

    assert store.get_by_image_id(original.image.id) is replacement
    assert store.get_by_user_id("user_anna") == [replacement]
    # Same owner: the index must not hold the id twice
    assert store.count("user_anna") == 1
    assert len(store) == 1


def test_save_moves_image_to_new_owner(store):
    original = make_result("user_anna")
    other = make_result("user_anna", path="dog.jpg")
    store.save(original)
    store.save(other)

    moved = DetectionResult(original.image.reassigned_to("user_bob"))
    store.save(moved)

    assert store.get_by_user_id("user_anna") == [other]
    assert store.count("user_anna") == 1
    assert store.get_by_user_id("user_bob") == [moved]
    assert store.count("user_bob") == 1
    assert store.get_by_image_id(original.image.id) is moved


def test_moving_last_image_drops_old_owner(store):
    original = make_result("user_anna")
    store.save(original)
    store.save(DetectionResult(original.image.reassigned_to("user_bob")))
    assert store.get_by_user_id("user_anna") == []
    assert store.count("user_anna") == 0
    assert "user_anna" not in store.user_ids()


def test_delete_updates_both_lookups(store):
    results = [make_result("user_anna", path=f"{i}.jpg") for i in range(3)]
    for result in results:
        store.save(result)

    assert store.delete(results[1].image.id) is True
    assert store.get_by_user_id("user_anna") == [results[0], results[2]]
    assert store.count("user_anna") == 2
    assert not store.exists(results[1].image.id)
    assert store.delete(results[1].image.id) is False


def test_delete_last_result_prunes_index(store):
    result = make_result("user_anna")
    store.save(result)
    assert store.delete(f" {result.image.id} ")
    assert store.get_by_user_id("user_anna") == []
    assert store.count("user_anna") == 0
    assert "user_anna" not in store.user_ids()


def test_delete_missing_returns_false(store):
    assert store.delete("no-such-image") is False


def test_clear(store):
    store.save(make_result("user_anna"))
    store.save(make_result("user_bob"))
    store.clear()
    assert len(store) == 0
    assert store.results() == []
    assert store.count("user_anna") == 0
    assert store.get_by_user_id("user_bob") == []
    assert store.user_ids() == []


def test_results_in_insertion_order(store):
    first = make_result("user_anna")
    second = make_result("user_bob")
    store.save(first)
    store.save(second)
    assert store.results() == [first, second]


def test_store_keeps_reference(store):
    result = make_result("user_anna")
    store.save(result)
    result.add_label(Label("Late", 10.0))
    # No defensive copy is taken on save
    assert store.get_by_image_id(result.image.id).labels[-1].name == "Late"


def test_anna_scenario(store, anna):
    image = Image(anna.id, "cat.jpg")
    result = DetectionResult(image)
    result.add_label(Label("Cat", 95.0))
    store.save(result)

    saved = store.get_by_user_id(anna.id)
    assert len(saved) == 1
    assert saved[0].top_label == Label("Cat", 95.0)


def test_multiple_users_workflow(store):
    anna_results = [make_result("user_anna", path=f"a{i}.jpg") for i in range(2)]
    bob_results = [make_result("user_bob", path=f"b{i}.jpg") for i in range(3)]
    for result in anna_results + bob_results:
        store.save(result)

    store.delete(bob_results[0].image.id)
    store.save(DetectionResult(anna_results[0].image.reassigned_to("user_bob")))

    assert store.count("user_anna") == 1
    assert store.count("user_bob") == 3
    assert len(store.get_by_user_id("user_bob")) == 3
    assert len(store) == 4
