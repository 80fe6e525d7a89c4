"""Playback driver: interval handling and end-of-sequence behaviour."""

import pytest

from algoglass.app.playback import PlaybackDriver
from algoglass.core.config import SimConfig
from algoglass.core.controller import SimulationController


@pytest.fixture
def ctl():
    ctl = SimulationController(SimConfig(rows=1, cols=3, start=(0, 0), target=(0, 2)))
    ctl.run_simulation()
    return ctl


class TestPlaybackDriver:
    def test_idle_when_paused(self, ctl):
        ctl.set_playing(False)
        driver = PlaybackDriver(ctl)
        assert not driver.tick(0.0)
        assert not driver.tick(10.0)
        assert ctl.state.cursor == 0

    def test_waits_one_interval(self, ctl):
        driver = PlaybackDriver(ctl)  # normal = 200 ms
        assert driver.interval == pytest.approx(0.2)
        assert not driver.tick(0.0)
        assert not driver.tick(0.1)
        assert driver.tick(0.2)
        assert ctl.state.cursor == 1
        assert not driver.tick(0.3)
        assert driver.tick(0.45)
        assert ctl.state.cursor == 2

    @pytest.mark.parametrize("speed,ms", [("slow", 500), ("normal", 200), ("fast", 50), ("instant", 0)])
    def test_interval_follows_speed(self, ctl, speed, ms):
        ctl.set_speed(speed)
        assert PlaybackDriver(ctl).interval == pytest.approx(ms / 1000.0)

    def test_instant_advances_every_tick(self, ctl):
        ctl.set_speed("instant")
        driver = PlaybackDriver(ctl)
        driver.tick(0.0)
        assert driver.tick(0.0)
        assert driver.tick(0.0)
        assert ctl.state.cursor == 2

    def test_plays_to_the_end(self, ctl):
        ctl.set_speed("instant")
        driver = PlaybackDriver(ctl)
        for _ in range(len(ctl.state.snapshots) + 2):
            driver.tick(0.0)
        assert ctl.state.cursor == len(ctl.state.snapshots) - 1
        assert ctl.state.is_finished
        assert not ctl.state.is_playing

    def test_pause_rearms(self, ctl):
        driver = PlaybackDriver(ctl)
        driver.tick(0.0)
        ctl.set_playing(False)
        driver.tick(1.0)
        ctl.set_playing(True)
        assert not driver.tick(5.0)
        assert driver.tick(5.2)
