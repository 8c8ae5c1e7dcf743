from piste.services.bout import Clock


def _inline(fn, *args):
    fn(*args)


def test_manual_ticks_count_down_and_finish_once():
    ticks, finished = [], []
    clock = Clock(0.3, interval=0.1, on_tick=ticks.append, on_finish=lambda: finished.append(True))
    clock.start()
    assert clock.running

    clock.tick()
    clock.tick()
    clock.tick()
    clock.tick()

    assert ticks == [0.2, 0.1]
    assert finished == [True]
    assert clock.current_time == 0.0
    assert not clock.running


def test_repeated_ticks_do_not_drift():
    clock = Clock(180.0, interval=0.1)
    for _ in range(100):
        clock.tick()
    assert clock.current_time == 170.0


def test_stop_before_start_is_a_noop():
    clock = Clock(10.0)
    clock.stop()
    assert not clock.running
    assert clock.current_time == 10.0


def test_toggle_flips_running():
    clock = Clock(10.0)
    clock.toggle()
    assert clock.running
    clock.toggle()
    assert not clock.running


def test_start_at_zero_does_nothing():
    clock = Clock(5.0)
    clock.current_time = 0
    clock.start()
    assert not clock.running


def test_current_time_is_writable_and_clamped():
    clock = Clock(60.0)
    clock.current_time = 12.5
    assert clock.current_time == 12.5
    clock.current_time = -4
    assert clock.current_time == 0.0


def test_background_loop_runs_until_expiry():
    ticks, finished, sleeps = [], [], []
    clock = Clock(
        0.3, interval=0.1,
        on_tick=ticks.append,
        on_finish=lambda: finished.append(True),
        spawn=_inline,
        sleep=sleeps.append,
    )
    clock.start()
    assert ticks == [0.2, 0.1]
    assert finished == [True]
    assert sleeps == [0.1, 0.1, 0.1]


def test_background_loop_exits_when_stopped():
    clock = None
    ticks = []

    def stop_after_two(_interval):
        if len(ticks) == 2:
            clock.stop()

    clock = Clock(5.0, interval=0.5, on_tick=ticks.append, spawn=_inline, sleep=stop_after_two)
    clock.start()
    assert ticks == [4.5, 4.0]
    assert clock.current_time == 4.0
    assert not clock.running


def test_restart_spawns_one_loop_per_start():
    spawned = []
    clock = Clock(5.0, spawn=lambda fn, gen: spawned.append(gen))
    clock.start()
    clock.start()
    clock.stop()
    clock.start()
    assert spawned == [1, 2]
