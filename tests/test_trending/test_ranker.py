from setlist_trending.trending.ranker import TOP_N, assign_ranks


def test_dense_top_n():
    scored = [(f"item{i}", float(i)) for i in range(35)]
    ranked = assign_ranks(scored)

    ranks = [rank for _, _, rank in ranked if rank is not None]
    assert sorted(ranks) == list(range(1, TOP_N + 1))
    assert sum(1 for _, _, rank in ranked if rank is None) == 15


def test_fewer_than_top_n():
    ranked = assign_ranks([("a", 1.0), ("b", 3.0), ("c", 2.0)])
    assert [(item, rank) for item, _, rank in ranked] == [("b", 1), ("c", 2), ("a", 3)]


def test_ties_keep_input_order():
    ranked = assign_ranks([("first", 5.0), ("second", 5.0), ("third", 5.0)])
    assert [item for item, _, _ in ranked] == ["first", "second", "third"]
    assert [rank for _, _, rank in ranked] == [1, 2, 3]


def test_better_rank_never_has_lower_score():
    scored = [(i, float((i * 37) % 11)) for i in range(25)]
    ranked = [r for r in assign_ranks(scored) if r[2] is not None]
    for (_, s1, r1), (_, s2, r2) in zip(ranked, ranked[1:]):
        assert r1 < r2
        assert s1 >= s2


def test_empty():
    assert assign_ranks([]) == []
