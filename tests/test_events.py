from tanabe_zhang.events import EventDetector


def test_levels_without_hysteresis():
    det = EventDetector()
    assert det.levels(0.0) == (False, True)
    assert det.levels(1.0) == (True, False)
    assert det.levels(0.5) == (False, False)


def test_first_update_only_initialises():
    det = EventDetector()
    assert det.update(1.0, t=0.0) == (False, False)
    assert det.flags == (True, False)
    assert det.history == []


def test_rising_edges():
    det = EventDetector()
    det.update(0.0, t=0.0)
    assert det.update(0.2, t=1.0) == (False, False)
    assert det.update(0.9, t=2.0) == (True, False)
    assert det.flags == (True, False)
    assert det.update(1.0, t=3.0) == (False, False)
    assert det.update(0.1, t=4.0) == (False, True)
    assert det.history == [(2.0, "load_applied"), (4.0, "load_removed")]


def test_crossing_event_function():
    det = EventDetector()
    event = det.crossing(lambda t: 1.0 if t >= 10 else 0.0)
    assert event.terminal
    assert event(5.0, None) == -0.5
    assert event(10.0, None) == 0.5
