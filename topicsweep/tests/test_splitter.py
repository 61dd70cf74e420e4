import pytest

from topicsweep.core.splitting.config import SplitConfig
from topicsweep.core.splitting.splitter import CorpusSplitter
from topicsweep.utils.exceptions import InvalidSplitError

DOCS = [f"doc{i:02d}" for i in range(20)]


def test_same_seed_gives_same_partition():
    first = CorpusSplitter(SplitConfig(test_fraction=0.2, seed=42)).split(DOCS)
    second = CorpusSplitter(SplitConfig(test_fraction=0.2, seed=42)).split(DOCS)
    assert first == second


def test_input_order_does_not_matter():
    splitter = CorpusSplitter(SplitConfig(test_fraction=0.2, seed=42))
    assert splitter.split(DOCS) == splitter.split(list(reversed(DOCS)))


def test_partition_is_disjoint_and_complete():
    split = CorpusSplitter().split(DOCS)
    assert set(split.train).isdisjoint(split.test)
    assert set(split.train) | set(split.test) == set(DOCS)
    assert split.test_fraction == 0.2
    assert split.seed == 42


@pytest.mark.parametrize(
    "n, fraction, expected",
    [(20, 0.2, 4), (11, 0.2, 3), (10, 0.3, 3), (5, 0.2, 1), (2, 0.5, 1)],
)
def test_test_size_is_ceiling_of_fraction(n, fraction, expected):
    split = CorpusSplitter(SplitConfig(test_fraction=fraction)).split(DOCS[:n])
    assert len(split.test) == expected
    assert len(split.train) == n - expected


def test_duplicate_ids_are_counted_once():
    split = CorpusSplitter().split(DOCS[:5] + DOCS[:5])
    assert len(split.train) + len(split.test) == 5


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.1, 1.5])
def test_fraction_out_of_range_raises(fraction):
    with pytest.raises(InvalidSplitError) as exc:
        CorpusSplitter(SplitConfig(test_fraction=fraction)).split(DOCS)
    assert exc.value.test_fraction == fraction
    assert exc.value.n_documents == 20


def test_too_few_documents_raise():
    with pytest.raises(InvalidSplitError) as exc:
        CorpusSplitter().split(["only"])
    assert exc.value.n_documents == 1


def test_fraction_that_empties_train_raises():
    with pytest.raises(InvalidSplitError):
        CorpusSplitter(SplitConfig(test_fraction=0.9)).split(DOCS[:2])
