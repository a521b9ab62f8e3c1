import io

import pytest

from delivery_lab.config import DEFAULT_BENCH_SEED, Settings, configure_logging
from delivery_lab.core.errors import ConfigError
from delivery_lab.planner import plan_deliveries
from delivery_lab.problems.grid import Grid


def test_defaults_without_environment():
    s = Settings.from_env({})
    assert s == Settings()
    assert (s.strategy, s.log_level, s.ids_max_depth, s.bench_seed) == ("BF", "WARNING", None, DEFAULT_BENCH_SEED)


def test_values_from_environment():
    s = Settings.from_env({
        "DELIVERY_STRATEGY": "AS2",
        "DELIVERY_LOG_LEVEL": "debug",
        "DELIVERY_IDS_MAX_DEPTH": "12",
        "BENCH_SEED": "99",
    })
    assert s == Settings("AS2", "DEBUG", 12, 99)


def test_blank_depth_means_unbounded():
    assert Settings.from_env({"DELIVERY_IDS_MAX_DEPTH": " "}).ids_max_depth is None


def test_bad_integer_names_the_variable():
    with pytest.raises(ValueError, match="BENCH_SEED"):
        Settings.from_env({"BENCH_SEED": "seven"})


def test_configure_logging_filters_by_level():
    sink = io.StringIO()
    configure_logging("warning", sink=sink)
    g = Grid.uniform(2, 2, stores=[(0, 0)], destinations=[(1, 1)],
                     blocked_roads=[((1, 1), (1, 0)), ((1, 1), (0, 1))])
    plan_deliveries(g, "BF")
    text = sink.getvalue()
    assert "Destination (1,1) is not reachable from any store" in text
    assert "Planning" not in text

    sink = io.StringIO()
    configure_logging("DEBUG", sink=sink)
    plan_deliveries(g, "BF")
    assert "Planning 1 destinations from 1 stores with Breadth-first" in sink.getvalue()


def test_bad_integer_is_a_config_error():
    with pytest.raises(ConfigError, match="DELIVERY_IDS_MAX_DEPTH"):
        Settings.from_env({"DELIVERY_IDS_MAX_DEPTH": "deep"})
