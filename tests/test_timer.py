from cetatenie.timer import TimeReport, Timer, format_duration


def test_zero_duration():
    assert format_duration(0) == "0 secunde"


def test_dot_is_escaped():
    assert format_duration(1.5) == "1\\.50 secunde"


def test_negative_sign_is_escaped():
    assert format_duration(-1.0).startswith("\\-")


def test_timer_measures_between_start_and_stop():
    ticks = iter([10.0, 12.5])
    timer = Timer(clock=lambda: next(ticks))
    timer.start()
    timer.stop()
    assert timer.duration() == 2.5


def test_timer_unstarted_is_zero():
    assert Timer().duration() == 0


def test_time_report_defaults_to_zero():
    report = TimeReport()
    assert (report.fetch_time, report.parse_time) == (0.0, 0.0)