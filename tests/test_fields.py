"""Tests for the built-in field formulas, evaluated against ten minutes of steady riding."""
import pytest

from ridemetrics.calculation_manager import CalculationManager
from ridemetrics.domain import LapData, UserSettings, WorkoutState
from ridemetrics.fields import create_default_registry
from conftest import NOW_MS


@pytest.fixture
def manager(measurements, active_workout, settings, connections):
    return CalculationManager(
        create_default_registry(),
        measurements=measurements,
        workout_state=active_workout,
        settings=settings,
        connections=connections,
        clock=lambda: NOW_MS,
    )


def _value(manager, field_id):
    return manager.calculate_field(field_id)


class TestPowerFields:
    """200 W steady at FTP 200."""

    @pytest.mark.parametrize("field_id,expected", [
        ("power-current", 200),
        ("power-3s", 200),
        ("power-30s", 200),
        ("power-avg", 200),
        ("power-lap-avg", 200),
        ("power-max", 200),
        ("power-zone", 4),
        ("power-percent-ftp", 100),
        ("power-normalized", 200),
        ("power-if", 1.0),
    ])
    def test_values(self, manager, field_id, expected):
        assert _value(manager, field_id) == pytest.approx(expected)

    def test_tss(self, manager):
        """10 minutes at IF 1.0 -> 600 * 200 * 1.0 / (200 * 3600) * 100."""
        assert _value(manager, "power-tss") == pytest.approx(16.667, abs=1e-3)

    def test_kilojoules(self, manager):
        """599 one-second intervals at 200 W."""
        assert _value(manager, "power-kilojoules") == pytest.approx(119.8)

    def test_watts_per_kg(self, manager):
        assert _value(manager, "power-wkg") == pytest.approx(200 / 70)

    def test_zone_formatter(self, manager, settings):
        definition = manager.registry.get("power-zone")
        assert definition.format(4, settings) == "Z4"
        assert definition.format(None, settings) == "--"

    def test_colorizer(self, manager, settings):
        color = manager.registry.get("power-current").colorizer(200, settings)
        assert color.zone == 4
        assert color.zone_name == "Threshold"

    def test_without_ftp(self, manager, settings):
        manager.update_settings(settings.with_changes(ftp=None))
        assert _value(manager, "power-zone") is None
        assert _value(manager, "power-if") is None
        assert _value(manager, "power-current") == 200


class TestHeartRateFields:
    """140 bpm steady, max HR 190, resting 50."""

    def test_current(self, manager):
        assert _value(manager, "hr-current") == 140

    def test_zone(self, manager, settings):
        """140 / 190 = 73.7% -> Z3 Tempo."""
        assert _value(manager, "hr-zone") == 3
        assert manager.registry.get("hr-zone").format(3, settings) == "Z3 Tempo"

    def test_percent_max(self, manager):
        assert _value(manager, "hr-percent-max") == pytest.approx(140 / 190 * 100)

    def test_percent_reserve(self, manager):
        assert _value(manager, "hr-percent-reserve") == pytest.approx(90 / 140 * 100)

    def test_time_in_zone(self, manager):
        assert _value(manager, "hr-time-in-zone") == 3

    def test_calories(self, manager):
        assert _value(manager, "hr-calories") > 0


class TestCadenceFields:

    def test_current_and_zone(self, manager, settings):
        assert _value(manager, "cadence-current") == 90
        assert _value(manager, "cadence-zone") == 3
        assert manager.registry.get("cadence-zone").format(3, settings) == "Optimal"

    def test_average_ignores_coasting(self, measurements, manager):
        for i in range(1, 4):
            measurements.append("cadence", NOW_MS + i, 0)
        assert _value(manager, "cadence-avg") == pytest.approx(90)

    def test_pedaling_time(self, manager):
        assert _value(manager, "cadence-pedaling-time") == pytest.approx(100)


class TestSpeedAndDistanceFields:
    """10 m/s steady, 10 m per second cumulative distance."""

    def test_speed_metric(self, manager):
        assert _value(manager, "speed-current") == pytest.approx(36)
        assert _value(manager, "speed-avg") == pytest.approx(36)

    def test_speed_imperial(self, manager, settings):
        manager.update_settings(settings.with_changes(unit_system="imperial"))
        assert _value(manager, "speed-current") == pytest.approx(22.3694)
        assert manager.registry.get("speed-current").unit_for(manager.settings) == "mph"

    def test_pace(self, manager, settings):
        assert _value(manager, "speed-pace") == pytest.approx(60 / 36)
        assert manager.registry.get("speed-pace").format(1.5, settings) == "1:30"

    def test_moving_time(self, manager):
        assert _value(manager, "speed-moving-time") == pytest.approx(599000)
        assert _value(manager, "speed-stopped-time") == 0

    def test_distance(self, manager):
        assert _value(manager, "distance-total") == pytest.approx(5.99)

    def test_lap_distance(self, manager):
        """Lap started 60 s ago: samples 5390 m .. 5990 m."""
        assert _value(manager, "distance-lap") == pytest.approx(0.6)

    def test_efficiency(self, manager):
        assert _value(manager, "speed-efficiency") == pytest.approx(36 / 200)


class TestElevationFields:
    """Altitude rising 0.5 m per second."""

    def test_noise_filtered_gain(self, manager):
        """0.5 m steps are below the 2 m noise threshold."""
        assert _value(manager, "elevation-gain") == 0

    def test_grade(self, manager):
        """2 m rise over 40 m of distance."""
        assert _value(manager, "elevation-grade") == pytest.approx(5.0)

    def test_extremes(self, manager):
        assert _value(manager, "elevation-max") == pytest.approx(399.5)
        assert _value(manager, "elevation-min") == pytest.approx(100)


class TestTimeFields:

    def test_elapsed(self, manager):
        assert _value(manager, "time-elapsed") == 600000

    def test_lap_time(self, manager):
        assert _value(manager, "time-lap") == 60000

    def test_last_lap(self, manager, active_workout):
        assert _value(manager, "time-last-lap") is None
        laps = [LapData(1, NOW_MS - 600_000, NOW_MS - 60_000)]
        manager.update_workout_state(WorkoutState(
            is_active=True,
            start_time=active_workout.start_time,
            elapsed_time=600_000,
            lap_start_time=NOW_MS - 60_000,
            laps=laps,
        ))
        assert _value(manager, "time-last-lap") == 540000

    def test_formatter(self, manager, settings):
        assert manager.registry.get("time-elapsed").format(600000, settings) == "10:00"


class TestEnergyFields:

    def test_total_from_power(self, manager):
        assert _value(manager, "calories_total") == pytest.approx(119.8)

    def test_rate_from_power(self, manager):
        assert _value(manager, "calories_hour") == pytest.approx(720)

    def test_total_falls_back_to_heart_rate(self, measurements, active_workout, connections):
        measurements.power.clear()
        manager = CalculationManager(
            create_default_registry(),
            measurements=measurements,
            workout_state=active_workout,
            settings=UserSettings(weight=70, age=35),
            connections=connections,
            clock=lambda: NOW_MS,
        )
        assert _value(manager, "calories_total") > 0


class TestAvailability:
    """Fields report None when their requirements are not met."""

    def test_sensor_disconnected(self, manager, connections):
        connections.set_connected("power", False)
        assert _value(manager, "power-current") is None
        assert _value(manager, "hr-current") == 140

    def test_gps_lost(self, manager, connections):
        connections.set_connected("gps", False)
        assert _value(manager, "speed-current") is None
        assert _value(manager, "distance-total") is None

    def test_workout_inactive(self, manager):
        manager.update_workout_state(WorkoutState(is_active=False))
        assert _value(manager, "power-avg") is None
        assert _value(manager, "power-3s") == pytest.approx(200)

    def test_stale_sensor_value(self, manager):
        """Latest sample older than five seconds is not shown."""
        assert manager.calculate_field("power-current", now=NOW_MS + 10_000) is None
