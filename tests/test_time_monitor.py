import pytest

from ndtslam.time_monitor import (
    FunctionStatistics,
    TimeMonitor,
    TimeMonitorManager,
    Timestamp,
    compute_mean,
    compute_median,
    compute_standard_deviation,
    compute_sum,
    monitor_time,
    to_timestamp,
)


def test_to_timestamp_splits_seconds_and_nanoseconds():
    assert to_timestamp(3_000_000_042) == Timestamp(3, 42)


def test_to_timestamp_round_trip():
    for value in (0, 1, 999_999_999, 1_700_000_000_123_456_789, -2_500_000_000):
        ts = to_timestamp(value)
        assert ts.sec * 1_000_000_000 + ts.nsec == value
        assert abs(ts.nsec) < 1_000_000_000


def test_compute_sum_matches_builtin_total():
    times = [5, 10, 20]
    assert compute_sum(times) == sum(times)


def test_compute_mean_of_empty_is_zero():
    assert compute_mean([]) == 0


def test_compute_mean_of_constant_list():
    assert compute_mean([7, 7, 7]) == 7


def test_compute_mean_truncates():
    assert compute_mean([1, 2]) == 1


def test_compute_median_takes_upper_middle():
    assert compute_median([40, 10, 30, 20]) == 30
    assert compute_median([5, 1, 3]) == 3


def test_compute_median_of_empty_raises():
    with pytest.raises(ValueError):
        compute_median([])


def test_standard_deviation_of_short_lists_is_zero():
    assert compute_standard_deviation([]) == 0
    assert compute_standard_deviation([123]) == 0


def test_standard_deviation_of_constant_list_is_zero():
    assert compute_standard_deviation([9, 9, 9, 9]) == 0


def test_standard_deviation_is_bounded_by_range():
    times = [100, 250, 400, 1000]
    std = compute_standard_deviation(times)
    assert 0 < std <= max(times) - min(times)


def test_manager_statistics_summarise_registered_calls():
    manager = TimeMonitorManager()
    manager.register("f", Timestamp(), 300)
    manager.register("f", Timestamp(), 100)
    manager.register("f", Timestamp(), 200)
    [stats] = manager.statistics()
    assert stats == FunctionStatistics(
        function_name="f",
        calls=3,
        min_ns=100,
        max_ns=300,
        mean_ns=200,
        median_ns=200,
        std_ns=compute_standard_deviation([100, 200, 300]),
        total_ns=600,
    )


def test_manager_sorts_by_total_descending():
    manager = TimeMonitorManager()
    manager.register("small", Timestamp(), 10)
    manager.register("big", Timestamp(), 1000)
    manager.register("medium", Timestamp(), 100)
    names = [s.function_name for s in manager.statistics()]
    assert names == ["big", "medium", "small"]


def test_report_contains_header_and_entries():
    manager = TimeMonitorManager()
    manager.register("file/func", Timestamp(), 2_000_000)
    manager.register("file/func", Timestamp(), 2_000_000)
    report = manager.report()
    assert report.startswith("============== Function Time Statistics ==============\n")
    assert "file/func\n" in report
    assert "# Calls   : 2\n" in report
    assert "Time Total: 4.000000 [ms]\n" in report


def test_empty_manager_report_has_only_header():
    report = TimeMonitorManager().report()
    assert report.count("\n") == 2


def test_time_monitor_registers_block():
    manager = TimeMonitorManager()
    with TimeMonitor("mod.py", "work", manager) as monitor:
        assert monitor.name == "mod.py/work"
    [stats] = manager.statistics()
    assert stats.function_name == "mod.py/work"
    assert stats.calls == 1
    assert stats.min_ns >= 0


def test_time_monitor_registers_even_when_block_raises():
    manager = TimeMonitorManager()
    with pytest.raises(RuntimeError):
        with TimeMonitor("mod.py", "fail", manager):
            raise RuntimeError("boom")
    assert [s.calls for s in manager.statistics()] == [1]


def test_instance_is_shared():
    TimeMonitorManager.instance().register("shared/instance_marker", Timestamp(), 5)
    matching = [
        s
        for s in TimeMonitorManager.instance().statistics()
        if s.function_name == "shared/instance_marker"
    ]
    assert len(matching) == 1
    assert matching[0].total_ns >= 5


def test_monitor_time_decorator_records_calls():
    @monitor_time(True)
    def decorated_sample_function(value):
        return value * 2

    assert decorated_sample_function(4) == 8
    assert decorated_sample_function(5) == 10
    matching = [
        s
        for s in TimeMonitorManager.instance().statistics()
        if s.function_name.endswith("/decorated_sample_function")
    ]
    assert len(matching) == 1
    assert matching[0].calls == 2


def test_monitor_time_inactive_returns_function_unchanged():
    def plain(value):
        return value + 1

    assert monitor_time(False)(plain) is plain