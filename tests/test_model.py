"""
Unit Tests for the Simulation Model
===================================
Tests notifications, the environment, sampling, scoring, the trajectory
collection, rapid fire, the data probe, the fixed-step clock and the
screen models.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest
from scipy import stats

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.clock import EventTimer
from projectile_motion.collection import TrajectoryCollection
from projectile_motion.constants import SENSING_RADIUS
from projectile_motion.data_point import DataPoint
from projectile_motion.environment import Environment
from projectile_motion.events import Emitter
from projectile_motion.model import ModelConfig, ProjectileMotionModel, StatsModel, TimeSpeed
from projectile_motion.object_types import CANNONBALL, PIANO, TANK_SHELL
from projectile_motion.probe import DataProbe, is_readable, query
from projectile_motion.projectile import LaunchConditions, Projectile
from projectile_motion.sampler import NormalSampler
from projectile_motion.scheduler import RapidFireScheduler, SchedulerState
from projectile_motion.target import Target, score
from projectile_motion.validation import closed_form_reference

DT = 0.012


def fly_all(collection, dt=DT):
    while collection.moving:
        collection.step(dt)


def make_collection(max_trajectories=10, **kwargs):
    environment = Environment(gravity=9.8)
    return TrajectoryCollection(environment, max_trajectories, NormalSampler(seed=0), **kwargs)


CANNON = Projectile.from_object_type(CANNONBALL)


class TestEmitter:

    def test_listeners_called_in_order(self):
        calls = []
        emitter = Emitter()
        emitter.add_listener(lambda v: calls.append(('a', v)))
        emitter.add_listener(lambda v: calls.append(('b', v)))
        emitter.emit(3)
        assert calls == [('a', 3), ('b', 3)]

    def test_duplicate_listener_ignored(self):
        calls = []
        emitter = Emitter()
        emitter.add_listener(calls.append)
        emitter.add_listener(calls.append)
        emitter.emit(1)
        assert calls == [1]
        assert emitter.listener_count == 1

    def test_listener_may_remove_itself(self):
        emitter = Emitter()
        calls = []

        def once(value):
            calls.append(value)
            emitter.remove_listener(once)

        emitter.add_listener(once)
        emitter.emit(1)
        emitter.emit(2)
        assert calls == [1]
        assert not emitter.has_listener(once)

    def test_dispose(self):
        emitter = Emitter()
        emitter.add_listener(print)
        emitter.dispose()
        assert emitter.listener_count == 0


class TestEnvironment:

    def test_invalid_gravity(self):
        with pytest.raises(ValueError):
            Environment(gravity=0.0)
        environment = Environment()
        with pytest.raises(ValueError):
            environment.gravity = -1.0

    def test_air_density_derived(self):
        environment = Environment()
        assert environment.air_density == 0.0
        environment.air_resistance_on = True
        sea_level = environment.air_density
        assert sea_level == pytest.approx(1.2266, abs=1e-3)
        environment.altitude = 3000.0
        assert environment.air_density < sea_level

    def test_changed_emitted_only_on_change(self):
        environment = Environment()
        events = []
        environment.changed.add_listener(events.append)
        environment.gravity = 9.8
        assert events == []
        environment.gravity = 1.6
        environment.air_resistance_on = True
        assert len(events) == 2

    def test_moving_count(self):
        environment = Environment()
        counts = []
        environment.moving_count_changed.add_listener(counts.append)
        environment.increment_moving()
        environment.increment_moving()
        environment.decrement_moving()
        assert environment.moving_count == 1
        assert counts == [1, 2, 1]
        environment.reset_moving()
        assert environment.moving_count == 0

    def test_decrement_below_zero(self):
        with pytest.raises(AssertionError):
            Environment().decrement_moving()

    def test_reset(self):
        environment = Environment(gravity=9.8)
        environment.gravity = 3.7
        environment.air_resistance_on = True
        environment.altitude = 2000.0
        environment.reset()
        assert environment.gravity == 9.8
        assert environment.altitude == 0.0
        assert environment.air_density == 0.0


class TestSampler:
    """Box–Muller sampling of launch parameters."""

    def test_zero_std_returns_mean_exactly(self):
        sampler = NormalSampler(seed=1)
        for mean in (0.0, 15.0, -3.25, 1e-9, 60.000000001):
            assert sampler.sample(mean, 0.0) == mean

    def test_negative_std_rejected(self):
        with pytest.raises(ValueError):
            NormalSampler(seed=1).sample(15.0, -0.5)

    def test_seeded_reproducible(self):
        a = NormalSampler(seed=7).sample_many(15.0, 1.0, 50)
        b = NormalSampler(seed=7).sample_many(15.0, 1.0, 50)
        np.testing.assert_array_equal(a, b)

    def test_distribution(self):
        samples = NormalSampler(seed=42).sample_many(15.0, 2.0, 5000)
        assert np.all(np.isfinite(samples))
        assert abs(np.mean(samples) - 15.0) < 0.15
        assert abs(np.std(samples) - 2.0) < 0.15
        assert stats.kstest(samples, 'norm', args=(15.0, 2.0)).pvalue > 0.001


class TestTargetScore:

    @pytest.mark.parametrize("landing_x,stars", [
        (15.0, 3),
        (15.5, 3),      # w/6 boundary
        (14.5, 3),
        (16.0, 2),      # w/3 boundary
        (16.5, 1),      # w/2 boundary
        (13.5, 1),
        (16.5 + 1e-9, 0),
        (30.0, 0),
    ])
    def test_zones(self, landing_x, stars):
        assert score(landing_x, 15.0, 3.0) == stars

    def test_scored_emitted_on_hit(self):
        target = Target(x=15.0)
        stars = []
        target.scored.add_listener(stars.append)
        assert target.check_if_hit_target(15.9)
        assert not target.check_if_hit_target(20.0)
        assert stars == [2]

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            Target(width=0.0)


class TestCollection:
    """Firing, rank, capacity and mid-air flags."""

    def test_fire_updates_moving_count(self):
        collection = make_collection()
        collection.fire(3, CANNON, LaunchConditions(10.0, 45.0))
        assert collection.environment.moving_count == 3
        fly_all(collection)
        assert collection.environment.moving_count == 0

    def test_rank_counts_later_shots(self):
        collection = make_collection()
        for _ in range(3):
            collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))
        assert [t.rank for t in collection] == [2, 1, 0]
        updates = []
        collection.rank_updated.add_listener(lambda: updates.append(1))
        collection.fire(2, CANNON, LaunchConditions(10.0, 45.0))
        assert [t.rank for t in collection] == [4, 3, 2, 1, 0]
        assert len(updates) == 2

    def test_steady_state_evicts_oldest_landed(self):
        collection = make_collection(max_trajectories=5)
        disposed = []
        collection.trajectory_disposed.add_listener(disposed.append)
        conditions = LaunchConditions(10.0, 45.0)

        for _ in range(5):
            collection.fire(1, CANNON, conditions)
        fly_all(collection)

        for _ in range(3):
            oldest = collection[0]
            collection.fire(1, CANNON, conditions)
            assert len(collection) == 5
            assert disposed[-1] is oldest
            fly_all(collection)
        assert len(disposed) == 3

    def test_in_flight_never_evicted(self):
        collection = make_collection(max_trajectories=2)
        conditions = LaunchConditions(10.0, 45.0)
        collection.fire(3, CANNON, conditions)
        assert len(collection) == 3

        fly_all(collection)
        newest = collection.fire(1, CANNON, conditions)[0]
        assert len(collection) == 2
        assert collection[-1] is newest
        assert not newest.reached_ground

    def test_erase_all(self):
        collection = make_collection()
        disposed = []
        collection.trajectory_disposed.add_listener(disposed.append)
        collection.fire(2, CANNON, LaunchConditions(10.0, 45.0))
        for _ in range(5):
            collection.step(DT)
        collection.erase_all()
        assert len(collection) == 0
        assert len(disposed) == 2
        assert collection.environment.moving_count == 0

    def test_changed_in_mid_air(self):
        collection = make_collection()
        landed = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))[0]
        fly_all(collection)
        flying = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))[0]
        for _ in range(5):
            collection.step(DT)

        recorded = len(flying.data_points)
        first_accel = flying.data_points[1].acceleration.copy()
        collection.environment.gravity = 5.0
        assert flying.changed_in_mid_air
        assert not landed.changed_in_mid_air

        collection.step(DT)
        np.testing.assert_allclose(flying.data_points[-1].acceleration, [0.0, -5.0])
        np.testing.assert_array_equal(flying.data_points[1].acceleration, first_accel)
        assert len(flying.data_points) == recorded + 1

    def test_data_points_relayed(self):
        collection = make_collection()
        relayed = []
        collection.data_point_added.add_listener(lambda t, p: relayed.append((t, p)))
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))[0]
        collection.step(DT)
        assert relayed[-1] == (trajectory, trajectory.data_points[-1])

    def test_muzzle_point_relayed_on_fire(self):
        collection = make_collection()
        relayed = []
        collection.data_point_added.add_listener(lambda t, p: relayed.append(p))
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0, height=3.0))[0]
        assert relayed == trajectory.data_points
        assert relayed[0].time == 0.0

        collection.step(DT)
        assert relayed == trajectory.data_points

    def test_landing_statistics(self):
        landing = closed_form_reference(10.0, 45.0).range
        target = Target(x=landing)
        collection = make_collection(check_if_hit_target=target.check_if_hit_target)
        assert collection.landing_statistics() is None

        collection.fire(3, CANNON, LaunchConditions(10.0, 45.0))
        fly_all(collection)
        summary = collection.landing_statistics()
        assert summary.count == 3
        assert summary.hits == 3
        assert summary.mean == pytest.approx(landing)
        assert summary.std == pytest.approx(0.0, abs=1e-12)
        assert summary.hit_fraction == 1.0

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            make_collection(max_trajectories=0)


class TestRapidFireScheduler:

    def make(self, can_fire=lambda: True, cadence=0.2):
        shots = []
        scheduler = RapidFireScheduler(lambda: shots.append(1), can_fire, cadence)
        return scheduler, shots

    def test_idle_never_fires(self):
        scheduler, shots = self.make()
        for _ in range(10):
            scheduler.step(0.1)
        assert shots == []
        assert scheduler.state is SchedulerState.IDLE

    def test_fires_at_cadence(self):
        scheduler, shots = self.make()
        scheduler.arm()
        fired = [scheduler.step(0.1) for _ in range(6)]
        assert fired == [False, True, False, True, False, True]
        assert scheduler.time_since_last_shot == 0.0

    def test_slow_motion_scales_cadence(self):
        scheduler, shots = self.make()
        scheduler.arm()
        fired = [scheduler.step(0.2, speed_scale=0.33) for _ in range(4)]
        assert fired == [False, False, False, True]

    def test_paused_does_not_accumulate(self):
        scheduler, shots = self.make()
        scheduler.arm()
        for _ in range(5):
            scheduler.step(0.1, playing=False)
        assert shots == []
        assert scheduler.time_since_last_shot == 0.0

    def test_disarm_stops_firing(self):
        scheduler, shots = self.make()
        scheduler.arm()
        scheduler.step(0.2)
        scheduler.disarm()
        scheduler.step(0.2)
        assert shots == [1]

    def test_deferred_at_cap(self):
        allowed = [False]
        scheduler, shots = self.make(can_fire=lambda: allowed[0])
        scheduler.arm()
        assert not scheduler.step(0.2)
        assert not scheduler.step(0.05)
        allowed[0] = True
        assert scheduler.step(0.01)
        assert shots == [1]

    def test_invalid_cadence(self):
        with pytest.raises(ValueError):
            RapidFireScheduler(lambda: None, lambda: True, 0.0)


def probe_point(time, position, apex=False):
    return DataPoint(time, position, 0.0, (1.0, 1.0), (0.0, -9.8), (0.0, 0.0), -9.8, apex=apex)


class TestDataProbe:
    """Readable samples, newest-first search and zoom-scaled tolerance."""

    def test_readable_samples(self):
        assert is_readable(probe_point(0.3, (1.0, 1.0)))
        assert is_readable(probe_point(1.0, (1.0, 1.0)))
        assert not is_readable(probe_point(0.312, (1.0, 1.0)))
        assert is_readable(probe_point(0.312, (1.0, 1.0), apex=True))
        assert is_readable(probe_point(0.317, (1.0, 0.0)))
        assert not is_readable(None)

    def test_newest_trajectory_wins(self):
        collection = make_collection()
        older = collection.fire(1, CANNON, LaunchConditions(10.0, 80.0))[0]
        newer = collection.fire(1, CANNON, LaunchConditions(5.0, 0.0, height=2.0))[0]
        fly_all(collection)
        assert newer.apex_point is None

        landing = newer.data_points[-1]
        # the older apex is also within this generous tolerance
        assert older.apex_point.distance_to(landing.x, 0.0) < 50.0
        assert query(collection.trajectories, (landing.x, 0.0), 50.0) is landing
        assert query([newer, older], (landing.x, 0.0), 50.0) is older.apex_point

    def test_apex_preferred_within_trajectory(self):
        collection = make_collection()
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))[0]
        fly_all(collection)
        assert query(collection.trajectories, (0.0, 0.0), 100.0) is trajectory.apex_point

    def test_nothing_in_range(self):
        collection = make_collection()
        collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))
        fly_all(collection)
        assert query(collection.trajectories, (100.0, 100.0), 0.2) is None

    def test_tolerance_shrinks_with_zoom(self):
        collection = make_collection()
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 80.0))[0]
        fly_all(collection)
        apex = trajectory.apex_point

        probe = DataProbe(collection)
        assert probe.tolerance == pytest.approx(SENSING_RADIUS)
        assert probe.move_to(apex.x, apex.y + 0.15) is apex
        probe.zoom = 2.0
        assert probe.tolerance == pytest.approx(SENSING_RADIUS / 2)
        assert probe.move_to(apex.x, apex.y + 0.15) is None

    def test_invalid_zoom(self):
        probe = DataProbe(make_collection())
        with pytest.raises(ValueError):
            probe.zoom = 0.0

    def test_live_update_during_flight(self):
        collection = make_collection()
        landing_x = 5.0 * math.sqrt(2 * 2.0 / 9.8)
        probe = DataProbe(collection, x=landing_x, y=0.0)
        trajectory = collection.fire(1, CANNON, LaunchConditions(5.0, 0.0, height=2.0))[0]
        fly_all(collection)
        assert probe.data_point is trajectory.data_points[-1]

    def test_picks_up_muzzle_point(self):
        collection = make_collection()
        probe = DataProbe(collection, x=0.0, y=3.0)
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0, height=3.0))[0]
        assert probe.data_point is trajectory.data_points[0]

    def test_refresh_on_disposal(self):
        collection = make_collection()
        trajectory = collection.fire(1, CANNON, LaunchConditions(10.0, 45.0))[0]
        fly_all(collection)
        probe = DataProbe(collection)
        probe.is_active = True
        apex = trajectory.apex_point
        assert probe.move_to(apex.x, apex.y) is apex
        collection.erase_all()
        assert probe.data_point is None


class TestEventTimer:

    def test_carries_remainder(self):
        ticks = []
        timer = EventTimer(ticks.append, 0.012)
        assert timer.step(0.03) == 2
        assert timer.step(0.007) == 1
        assert ticks == [0.012, 0.012, 0.012]

    def test_short_frames_accumulate(self):
        timer = EventTimer(lambda dt: None, 0.012)
        assert timer.step(0.005) == 0
        assert timer.step(0.01) == 1

    def test_reset(self):
        timer = EventTimer(lambda dt: None, 0.012)
        timer.step(0.01)
        timer.reset()
        assert timer.step(0.01) == 0

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            EventTimer(lambda dt: None, 0.0)


class TestProjectileMotionModel:

    def test_fire_enabled_until_cap(self):
        model = ProjectileMotionModel()
        for _ in range(model.max_projectiles):
            assert model.fire_enabled
            assert len(model.fire()) == 1
        assert not model.fire_enabled
        assert model.fire() == []
        assert model.moving_count == model.max_projectiles

    def test_paused_model_does_not_advance(self):
        model = ProjectileMotionModel()
        trajectory = model.fire()[0]
        model.is_playing = False
        model.step(1.0)
        assert len(trajectory.data_points) == 1

    def test_single_step(self):
        model = ProjectileMotionModel()
        trajectory = model.fire()[0]
        model.is_playing = False
        model.step_model_elements(DT)
        assert trajectory.flight_time == pytest.approx(DT)

    def test_slow_motion(self):
        normal = ProjectileMotionModel()
        slow = ProjectileMotionModel()
        slow.time_speed = TimeSpeed.SLOW
        a = normal.fire()[0]
        b = slow.fire()[0]
        normal.step(0.5)
        slow.step(0.5)
        assert abs(a.flight_time - 0.5) <= DT + 1e-9
        assert abs(b.flight_time - 0.5 * 0.33) <= DT + 1e-9

    def test_object_type_selection(self):
        model = ProjectileMotionModel(object_types=(CANNONBALL, TANK_SHELL))
        model.selected_object_type = TANK_SHELL
        assert model.projectile.mass == TANK_SHELL.mass
        with pytest.raises(ValueError):
            model.selected_object_type = PIANO

    def test_zoom_range(self):
        model = ProjectileMotionModel()
        model.zoom = 0.5
        assert model.probe.tolerance == pytest.approx(SENSING_RADIUS / 0.5)
        with pytest.raises(ValueError):
            model.zoom = 3.0

    def test_reset(self):
        model = ProjectileMotionModel()
        model.fire()
        model.environment.gravity = 1.6
        model.time_speed = TimeSpeed.SLOW
        model.reset()
        assert len(model.trajectories) == 0
        assert model.moving_count == 0
        assert model.environment.gravity == 9.8
        assert model.time_speed is TimeSpeed.NORMAL


class TestStatsModel:

    def test_defaults(self):
        model = StatsModel()
        assert model.max_projectiles == 20
        assert model.target.x == 20.0
        assert (model.launch.speed, model.launch.angle_deg, model.launch.height) == (15.0, 60.0, 2.0)
        assert (model.launch.speed_std_dev, model.launch.angle_std_dev) == (1.0, 2.0)
        assert model.group_size == 10

    def test_group_fire(self):
        model = StatsModel(ModelConfig.stats(seed=3))
        assert len(model.fire_multiple()) == 10
        assert len(model.fire_multiple()) == 10
        assert model.moving_count == 20
        assert not model.fire_multiple_enabled
        assert model.fire_multiple() == []

    def test_group_shots_vary(self):
        model = StatsModel(ModelConfig.stats(seed=3))
        speeds = {t.initial_speed for t in model.fire_multiple()}
        assert len(speeds) == 10

    def test_seeded_sessions_match(self):
        a = StatsModel(ModelConfig.stats(seed=11)).fire_multiple()
        b = StatsModel(ModelConfig.stats(seed=11)).fire_multiple()
        assert [t.initial_angle for t in a] == [t.initial_angle for t in b]

    def test_group_size_range(self):
        model = StatsModel()
        model.group_size = 20
        with pytest.raises(ValueError):
            model.group_size = 0
        with pytest.raises(ValueError):
            model.group_size = 21

    def test_rapid_fire(self):
        model = StatsModel(ModelConfig.stats(seed=5))
        model.set_rapid_fire_mode(True)
        assert not model.fire_enabled
        assert not model.fire_multiple_enabled
        for _ in range(10):
            model.step(0.1)
        assert len(model.trajectories) == 5

        model.set_rapid_fire_mode(False)
        for _ in range(10):
            model.step(0.1)
        assert len(model.trajectories) == 5

    def test_reset_disarms(self):
        model = StatsModel()
        model.set_rapid_fire_mode(True)
        model.group_size = 4
        model.reset()
        assert not model.scheduler.armed
        assert not model.rapid_fire_mode
        assert model.group_size == 10


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
