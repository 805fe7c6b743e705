from collections import Counter

from src.comments import CommentStore


def test_sample_empty_store_returns_empty_list(store):
    assert store.sample(5) == []


def test_sample_never_exceeds_k_or_batch(store, make_comment):
    batch = [make_comment(i) for i in range(3)]
    store.replace(batch)
    for k in range(0, 6):
        picked = store.sample(k)
        assert len(picked) == min(k, len(batch))
        assert all(c in batch for c in picked)
        assert len({c.id for c in picked}) == len(picked)


def test_small_batch_returns_permutation_of_everything(store, make_comment):
    batch = [make_comment(i) for i in range(4)]
    store.replace(batch)
    for _ in range(50):
        picked = store.sample(5)
        assert sorted(c.id for c in picked) == sorted(c.id for c in batch)


def test_sample_does_not_mutate_batch(store, make_comment):
    batch = [make_comment(i) for i in range(10)]
    store.replace(batch)
    for _ in range(20):
        store.sample(5)
    assert list(store.snapshot()) == batch


def test_sample_is_roughly_uniform(store, make_comment):
    batch = [make_comment(i) for i in range(10)]
    store.replace(batch)
    counts = Counter()
    draws = 1000
    for _ in range(draws):
        picked = store.sample(5)
        assert len(picked) == 5
        counts.update(c.id for c in picked)
    # 기대 빈도 k/n = 0.5
    for c in batch:
        assert abs(counts[c.id] / draws - 0.5) < 0.08


def test_order_varies_between_calls(store, make_comment):
    store.replace([make_comment(i) for i in range(6)])
    orders = {tuple(c.id for c in store.sample(6)) for _ in range(50)}
    assert len(orders) > 1


def test_replace_swaps_whole_batch(store, make_comment):
    store.replace([make_comment(1), make_comment(2)])
    before = store.snapshot()
    store.replace([make_comment(3)])
    assert [c.id for c in store.snapshot()] == ["c3"]
    # 이전 스냅샷은 그대로
    assert [c.id for c in before] == ["c1", "c2"]
    assert store.updated_at is not None


def test_store_initial_contents(make_comment):
    s = CommentStore([make_comment(1)])
    assert len(s) == 1
    assert s.updated_at is None
