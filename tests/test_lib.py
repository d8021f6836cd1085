import pytest

from netinfer import lib, rng
from netinfer.logger import default_logger, set_level


@pytest.fixture(autouse=True)
def _restore_level():
    yield
    set_level(0)


def test_version_string():
    assert lib.version() == "1.0.8"


def test_version_parts_match_string():
    assert lib.version() == f"{lib.version_major()}.{lib.version_minor()}.{lib.version_patch()}"


def test_name():
    assert lib.name() == "netinfer"


def test_init_sets_log_level():
    lib.init(5, 1)
    assert default_logger().level == 5


def test_init_seed_reproducible():
    assert lib.init(0, 42) == 42
    first = [rng.uniform() for _ in range(5)]
    lib.init(0, 42)
    second = [rng.uniform() for _ in range(5)]
    assert first == second


def test_init_zero_seed_uses_time():
    assert lib.init(0, 0) > 0


def test_init_thread_count_kept():
    lib.init(0, 1, 3)
    assert lib.max_threads() == 3
    lib.init(0, 1, 0)
    assert lib.max_threads() == 3


def test_init_negative_threads():
    with pytest.raises(ValueError):
        lib.init(0, 1, -2)