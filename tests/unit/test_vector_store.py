"""Unit tests for the in-memory vector store."""

from __future__ import annotations

import threading

import pytest

from doc_assistant.errors import DimensionMismatchError
from doc_assistant.retrieval.base import cosine_to_score
from doc_assistant.retrieval.memory_store import InMemoryVectorStore
from doc_assistant.retrieval.models import IndexEntry, Segment


def _entry(vector: list[float], text: str = "text", position: int = 0) -> IndexEntry:
    return IndexEntry(
        embedding=vector,
        segment=Segment(text=text, source_id="doc", position=position),
    )


@pytest.fixture()
def populated_store() -> InMemoryVectorStore:
    store = InMemoryVectorStore()
    store.insert(_entry([1.0, 0.0], "east", 0))
    store.insert(_entry([0.0, 1.0], "north", 1))
    store.insert(_entry([-1.0, 0.0], "west", 2))
    store.insert(_entry([0.7, 0.7], "north-east", 3))
    return store


class TestCosineToScore:
    def test_maps_range_onto_unit_interval(self) -> None:
        assert cosine_to_score(1.0) == 1.0
        assert cosine_to_score(0.0) == 0.5
        assert cosine_to_score(-1.0) == 0.0

    def test_clips_float_noise(self) -> None:
        assert cosine_to_score(1.0000001) == 1.0
        assert cosine_to_score(-1.0000001) == 0.0


class TestInsertAndSize:
    def test_new_store_is_empty(self, memory_store: InMemoryVectorStore) -> None:
        assert memory_store.size() == 0
        assert memory_store.dimension is None

    def test_insert_appends_without_dedup(self, memory_store: InMemoryVectorStore) -> None:
        entry = _entry([0.1, 0.2, 0.3])
        memory_store.insert(entry)
        memory_store.insert(entry)
        assert memory_store.size() == 2
        assert memory_store.dimension == 3

    def test_mismatched_insert_raises(self) -> None:
        store = InMemoryVectorStore()
        store.insert(_entry([0.0] * 7 + [1.0]))
        with pytest.raises(DimensionMismatchError) as excinfo:
            store.insert(_entry([1.0] * 5))
        assert excinfo.value.expected == 8
        assert excinfo.value.actual == 5
        assert store.size() == 1

    def test_empty_vector_rejected(self, memory_store: InMemoryVectorStore) -> None:
        with pytest.raises(DimensionMismatchError):
            memory_store.insert(_entry([]))

    def test_concurrent_inserts_are_all_kept(self, memory_store: InMemoryVectorStore) -> None:
        def worker(offset: int) -> None:
            for i in range(50):
                memory_store.insert(_entry([1.0, float(offset), float(i)], position=i))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert memory_store.size() == 200
        assert len(memory_store.query([1.0, 0.0, 0.0], 500, 0.0)) == 200

    def test_growth_keeps_earlier_rows(self, memory_store: InMemoryVectorStore) -> None:
        """Inserting past the initial capacity must not disturb stored vectors."""
        for i in range(150):
            memory_store.insert(_entry([1.0, float(i)], f"seg-{i}", i))
        for i in (0, 63, 64, 149):
            (hit,) = memory_store.query([1.0, float(i)], 1, 0.0)
            assert hit.segment.text == f"seg-{i}"
            assert hit.score == 1.0

    def test_clear_query_and_insert_race_safely(self, memory_store: InMemoryVectorStore) -> None:
        errors: list[BaseException] = []
        observed: list[int] = []
        done = threading.Event()

        def writer() -> None:
            try:
                for i in range(300):
                    memory_store.insert(_entry([1.0, float(i % 7), 0.5], position=i))
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        def clearer() -> None:
            try:
                while not done.is_set():
                    memory_store.clear()
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        def reader() -> None:
            try:
                while not done.is_set():
                    results = memory_store.query([1.0, 1.0, 0.5], 1000, 0.0)
                    scores = [r.score for r in results]
                    assert scores == sorted(scores, reverse=True)
                    assert 0 <= len(results) <= 600
                    observed.append(len(results))
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        writers = [threading.Thread(target=writer) for _ in range(2)]
        others = [threading.Thread(target=clearer), threading.Thread(target=reader)]
        for t in writers + others:
            t.start()
        for t in writers:
            t.join()
        done.set()
        for t in others:
            t.join()

        assert errors == []
        assert observed
        remaining = memory_store.size()
        assert 0 <= remaining <= 600
        assert len(memory_store.query([1.0, 1.0, 0.5], 1000, 0.0)) == remaining


class TestQuery:
    def test_empty_store_returns_empty(self, memory_store: InMemoryVectorStore) -> None:
        assert memory_store.query([0.3, 0.4], 3, 0.7) == []

    def test_identical_vector_scores_one(self, memory_store: InMemoryVectorStore) -> None:
        vector = [0.12, -0.5, 0.33, 0.9]
        memory_store.insert(_entry(vector, "match"))
        results = memory_store.query(vector, 3, 1.0)
        assert len(results) == 1
        assert results[0].score == 1.0
        assert results[0].segment.text == "match"

    def test_results_sorted_and_bounded(self, populated_store: InMemoryVectorStore) -> None:
        for k in range(1, 6):
            results = populated_store.query([1.0, 0.2], k, 0.0)
            assert len(results) == min(k, populated_store.size())
            scores = [r.score for r in results]
            assert scores == sorted(scores, reverse=True)

    def test_ranking_by_cosine(self, populated_store: InMemoryVectorStore) -> None:
        results = populated_store.query([1.0, 0.0], 4, 0.0)
        assert [r.segment.text for r in results] == ["east", "north-east", "north", "west"]
        assert results[-1].score == 0.0
        assert results[2].score == pytest.approx(0.5)

    def test_threshold_excludes_low_scores(self, populated_store: InMemoryVectorStore) -> None:
        results = populated_store.query([1.0, 0.0], 10, 0.7)
        assert [r.segment.text for r in results] == ["east", "north-east"]
        assert all(r.score >= 0.7 for r in results)

    def test_ties_keep_insertion_order(self, memory_store: InMemoryVectorStore) -> None:
        for i, name in enumerate(["first", "second", "third"]):
            memory_store.insert(_entry([2.0, 2.0], name, i))
        results = memory_store.query([1.0, 1.0], 2, 0.0)
        assert [r.segment.text for r in results] == ["first", "second"]

    def test_non_positive_top_k_returns_empty(self, populated_store: InMemoryVectorStore) -> None:
        assert populated_store.query([1.0, 0.0], 0, 0.0) == []

    def test_zero_vector_scores_half(self, memory_store: InMemoryVectorStore) -> None:
        memory_store.insert(_entry([0.0, 0.0], "zero"))
        results = memory_store.query([1.0, 0.0], 1, 0.0)
        assert results[0].score == 0.5

    def test_mismatched_query_raises(self, populated_store: InMemoryVectorStore) -> None:
        with pytest.raises(DimensionMismatchError):
            populated_store.query([1.0, 0.0, 0.0], 3, 0.0)

    def test_round_trip_returns_every_entry_once(self, memory_store: InMemoryVectorStore) -> None:
        n = 25
        for i in range(n):
            memory_store.insert(_entry([float(i + 1), float(n - i)], f"seg-{i}", i))
        results = memory_store.query([1.0, 1.0], n, 0.0)
        assert sorted(r.segment.text for r in results) == sorted(f"seg-{i}" for i in range(n))

    def test_query_sees_inserts_after_previous_query(self, memory_store: InMemoryVectorStore) -> None:
        memory_store.insert(_entry([1.0, 0.0], "a"))
        assert len(memory_store.query([1.0, 0.0], 5, 0.0)) == 1
        memory_store.insert(_entry([0.0, 1.0], "b"))
        assert len(memory_store.query([1.0, 0.0], 5, 0.0)) == 2


class TestClear:
    def test_clear_empties_store(self, populated_store: InMemoryVectorStore) -> None:
        populated_store.clear()
        assert populated_store.size() == 0
        assert populated_store.query([1.0, 0.0], 3, 0.0) == []

    def test_clear_is_idempotent(self, populated_store: InMemoryVectorStore) -> None:
        populated_store.clear()
        populated_store.clear()
        assert populated_store.size() == 0

    def test_clear_resets_dimension(self, populated_store: InMemoryVectorStore) -> None:
        populated_store.clear()
        populated_store.insert(_entry([1.0, 0.0, 0.0, 0.0, 0.0]))
        assert populated_store.dimension == 5
        assert populated_store.size() == 1
