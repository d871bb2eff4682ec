"""Unit tests for the power, heart rate, speed, elevation and cadence formulas."""
import pytest

from ridemetrics.calculations.cadence import (
    cadence_zone,
    calculate_pedaling_percent,
    calculate_total_revolutions,
)
from ridemetrics.calculations.elevation import (
    calculate_elevation_gain,
    calculate_elevation_loss,
    calculate_grade,
    elevation_in_user_unit,
    grade_band,
)
from ridemetrics.calculations.heartrate import (
    calculate_hr_calories,
    calculate_hr_reserve_percent,
    calories_per_minute,
)
from ridemetrics.calculations.power import (
    calculate_intensity_factor,
    calculate_kilojoules,
    calculate_normalized_power,
    calculate_tss,
    calculate_watts_per_kg,
)
from ridemetrics.calculations.speed import (
    calculate_distance,
    calculate_efficiency_factor,
    calculate_moving_time,
    calculate_stopped_time,
    calculate_vertical_speed,
    distance_in_user_unit,
    pace_in_user_unit,
    speed_in_user_unit,
)
from conftest import make_stream


class TestNormalizedPower:
    """Tests for calculate_normalized_power."""

    def test_constant_power(self):
        """NP should equal avg power for constant power."""
        stream = make_stream([200] * 120)
        assert calculate_normalized_power(stream) == pytest.approx(200)

    def test_variable_power_above_average(self):
        """NP should be >= avg power for variable power."""
        stream = make_stream([100] * 60 + [300] * 60 + [100] * 60 + [300] * 60)
        np_val = calculate_normalized_power(stream)
        assert np_val > 200

    def test_too_few_samples(self):
        """Should return None below the minimum sample count."""
        assert calculate_normalized_power(make_stream([250] * 10)) is None

    def test_empty(self):
        assert calculate_normalized_power([]) is None


class TestPowerMetrics:
    """Tests for IF, TSS, kJ and W/kg."""

    def test_intensity_factor(self):
        assert calculate_intensity_factor(180, 200) == pytest.approx(0.9)

    def test_intensity_factor_without_ftp(self):
        assert calculate_intensity_factor(180, None) is None
        assert calculate_intensity_factor(180, 0) is None

    def test_tss_one_hour_at_ftp(self):
        """One hour at FTP is 100 TSS."""
        assert calculate_tss(200, 200, 3600) == pytest.approx(100)

    def test_tss_half_hour(self):
        # IF 0.9 for 30 min -> 0.5 * 0.81 * 100
        assert calculate_tss(180, 200, 1800) == pytest.approx(40.5)

    def test_tss_missing_np(self):
        assert calculate_tss(None, 200, 3600) is None

    def test_kilojoules(self):
        """200 W for 9 seconds (10 samples, 9 intervals) = 1.8 kJ."""
        stream = make_stream([200] * 10)
        assert calculate_kilojoules(stream) == pytest.approx(1.8)

    def test_kilojoules_uses_pair_mean(self):
        stream = [(0, 100.0), (2000, 300.0)]
        assert calculate_kilojoules(stream) == pytest.approx(0.4)

    def test_kilojoules_single_sample(self):
        assert calculate_kilojoules([(0, 200.0)]) is None

    def test_watts_per_kg(self):
        assert calculate_watts_per_kg(280, 70) == pytest.approx(4.0)
        assert calculate_watts_per_kg(280, None) is None


class TestHeartRate:
    """Tests for heart rate reserve and calorie estimation."""

    def test_hr_reserve(self):
        assert calculate_hr_reserve_percent(140, 190, 50) == pytest.approx(64.2857, abs=1e-3)

    def test_hr_reserve_missing_resting(self):
        assert calculate_hr_reserve_percent(140, 190, None) is None

    def test_hr_reserve_invalid(self):
        assert calculate_hr_reserve_percent(140, 50, 50) is None

    def test_calories_per_minute(self):
        """Keytel (male): (35*0.2017 + 70*0.1988 + 140*0.6309 - 55.0969) / 4.184."""
        expected = (35 * 0.2017 + 70 * 0.1988 + 140 * 0.6309 - 55.0969) / 4.184
        assert calories_per_minute(140, 70, 35) == pytest.approx(expected)

    def test_calories_per_minute_default_age(self):
        assert calories_per_minute(140, 70) == pytest.approx(calories_per_minute(140, 70, 30))

    def test_calories_never_negative(self):
        assert calories_per_minute(30, 40, 20) == 0.0

    def test_hr_calories_one_minute(self):
        stream = make_stream([140] * 61)
        assert calculate_hr_calories(stream, 70, 35) == pytest.approx(calories_per_minute(140, 70, 35))

    def test_hr_calories_without_weight(self):
        assert calculate_hr_calories(make_stream([140] * 10), None) is None


class TestSpeed:
    """Tests for speed, pace, distance and moving time."""

    def test_unit_conversion(self):
        assert speed_in_user_unit(10) == pytest.approx(36)
        assert speed_in_user_unit(10, imperial=True) == pytest.approx(22.3694)
        assert speed_in_user_unit(None) is None

    def test_pace(self):
        """36 km/h -> 1:40 min/km."""
        assert pace_in_user_unit(10) == pytest.approx(60 / 36)
        assert pace_in_user_unit(0) is None

    def test_distance_units(self):
        assert distance_in_user_unit(5000) == pytest.approx(5.0)
        assert distance_in_user_unit(1609.344, imperial=True) == pytest.approx(1.0)

    def test_moving_and_stopped_time(self):
        stream = [(0, 0.0), (1000, 0.0), (2000, 5.0), (3000, 5.0)]
        # pair means: 0, 2.5, 5.0 (threshold 0.5)
        assert calculate_moving_time(stream) == pytest.approx(2000)
        assert calculate_stopped_time(stream) == pytest.approx(1000)

    def test_moving_time_empty(self):
        assert calculate_moving_time([]) is None

    def test_vertical_speed(self):
        """10 m climbed in 30 s = 1200 m/h."""
        stream = [(0, 100.0), (15000, 105.0), (30000, 110.0)]
        assert calculate_vertical_speed(stream, 30000) == pytest.approx(1200)

    def test_vertical_speed_descent_is_zero(self):
        stream = [(0, 110.0), (30000, 100.0)]
        assert calculate_vertical_speed(stream, 30000) == 0.0

    def test_distance_total_and_lap(self):
        stream = make_stream([0, 100, 250, 400])
        assert calculate_distance(stream) == pytest.approx(400)
        assert calculate_distance(stream, since=1000) == pytest.approx(300)
        assert calculate_distance([]) is None

    def test_efficiency_factor(self):
        speed = make_stream([10.0] * 5)
        power = make_stream([200] * 5)
        assert calculate_efficiency_factor(speed, power) == pytest.approx(0.18)


class TestElevation:
    """Tests for elevation gain/loss and grade."""

    def test_gain_and_loss_with_noise_filter(self):
        """Changes at or below 2 m are treated as noise."""
        stream = make_stream([100, 103, 104, 108, 105, 100])
        assert calculate_elevation_gain(stream) == pytest.approx(7)
        assert calculate_elevation_loss(stream) == pytest.approx(8)

    def test_gain_empty(self):
        assert calculate_elevation_gain([]) == 0.0

    def test_imperial(self):
        assert elevation_in_user_unit(100, imperial=True) == pytest.approx(328.084)

    def test_grade(self):
        """5 m up over 100 m of distance = 5%."""
        altitude = make_stream([100, 101, 102, 103, 105])
        distance = make_stream([0, 25, 50, 75, 100])
        assert calculate_grade(altitude, distance) == pytest.approx(5.0)

    def test_grade_too_little_distance(self):
        altitude = make_stream([100, 101, 102, 103, 105])
        distance = make_stream([0, 1, 2, 3, 4])
        assert calculate_grade(altitude, distance) is None

    def test_grade_too_few_samples(self):
        assert calculate_grade(make_stream([100, 101]), make_stream([0, 50])) is None

    @pytest.mark.parametrize("grade,zone", [
        (-8, 1), (-5, 1), (-3, 2), (0, 3), (4, 4), (8, 5), (12, 6),
    ])
    def test_grade_band(self, grade, zone):
        assert grade_band(grade)[0] == zone


class TestCadence:
    """Tests for cadence bands and revolutions."""

    @pytest.mark.parametrize("rpm,zone", [(59, 1), (60, 2), (90, 3), (100, 4), (110, 5)])
    def test_cadence_zone(self, rpm, zone):
        assert cadence_zone(rpm) == zone

    def test_cadence_zone_missing(self):
        assert cadence_zone(None) is None

    def test_total_revolutions(self):
        """90 rpm for one minute = 90 revolutions."""
        stream = make_stream([90] * 61)
        assert calculate_total_revolutions(stream) == 90

    def test_pedaling_percent(self):
        stream = [(0, 0.0), (1000, 0.0), (2000, 90.0), (3000, 90.0)]
        assert calculate_pedaling_percent(stream) == pytest.approx(200 / 3)
