import pytest

from netinfer import partition


@pytest.mark.parametrize("total,nthreads", [(0, 1), (10, 3), (7, 7), (3, 5), (100, 8), (1, 2)])
def test_ranges_cover_everything_in_order(total, nthreads):
    parts = partition.split_ranges(total, nthreads)
    assert len(parts) == nthreads
    assert [i for r in parts for i in r] == list(range(total))


@pytest.mark.parametrize("total,nthreads", [(10, 3), (3, 5), (100, 8), (17, 4)])
def test_sizes_balanced_and_larger_first(total, nthreads):
    sizes = [len(r) for r in partition.split_ranges(total, nthreads)]
    assert max(sizes) - min(sizes) <= 1
    assert sizes == sorted(sizes, reverse=True)


def test_ten_items_three_workers():
    assert [len(r) for r in partition.split_ranges(10, 3)] == [4, 3, 3]


def test_start_end_consistent_with_get_start():
    for i in range(4):
        start, end = partition.get_start_end(23, i, 4)
        assert start == partition.get_start(23, 4, i)
        assert end == partition.get_start(23, 4, i + 1)


def test_start_never_exceeds_total():
    assert partition.get_start(5, 3, 10) == 5
    assert partition.get_start(5, 3, 0) == 0


def test_zero_workers_rejected():
    with pytest.raises(ValueError):
        partition.get_start(10, 0, 0)


def test_negative_total_rejected():
    with pytest.raises(ValueError):
        partition.split_ranges(-1, 2)