"""Tests for the scoring module."""

import random
from dataclasses import replace

import pytest

from flood_alert.errors import InvalidInputError
from flood_alert.models import DayForecast, HourlyObservation
from flood_alert.scoring import (
    count_heavy_hours,
    day_confidence,
    is_thunder_band,
    precip_variation,
    score_forecast_day,
)


def _hours(*values: float) -> tuple[HourlyObservation, ...]:
    return tuple(HourlyObservation(precip_mm=v) for v in values)


def _random_day(rng: random.Random) -> DayForecast:
    hours = _hours(*(rng.uniform(0, 40) for _ in range(rng.choice([0, 1, 24, 48]))))
    return DayForecast(
        date="2026-10-19",
        total_precip_mm=rng.uniform(0, 300),
        avg_humidity=rng.uniform(0, 100),
        cloud=rng.uniform(0, 100),
        max_wind_kph=rng.uniform(0, 120),
        uv=rng.uniform(0, 12),
        condition_code=rng.choice([None, 200, 250, 299, 300, 1000, 1195]),
        daily_chance_of_rain=rng.uniform(0, 100),
        hours=hours,
    )


class TestScoreForecastDay:
    def test_base_high(self, sample_day):
        assert score_forecast_day(sample_day, sample_day.hours, "High") == 50

    @pytest.mark.parametrize("tier", ["Low", "Medium"])
    def test_base_low_and_medium_share_20(self, sample_day, tier):
        assert score_forecast_day(sample_day, sample_day.hours, tier) == 20

    @pytest.mark.parametrize(
        ("rain", "points"),
        [(30.0, 0), (30.1, 10), (50.0, 10), (50.1, 20), (80.0, 20), (80.1, 30), (500.0, 30)],
    )
    def test_rainfall_tiers_are_exclusive(self, sample_day, rain, points):
        day = replace(sample_day, total_precip_mm=rain)
        assert score_forecast_day(day, sample_day.hours, "Low") == 20 + points

    def test_heavy_hours_two_points_each(self, sample_day):
        hours = _hours(5.0, 5.1, 6, 12, 0, 0)
        assert score_forecast_day(sample_day, hours, "Low") == 20 + 3 * 2

    def test_each_condition_flag(self, sample_day):
        cases = [
            (replace(sample_day, avg_humidity=81), 5),
            (replace(sample_day, cloud=71), 3),
            (replace(sample_day, max_wind_kph=51), 5),
            (replace(sample_day, condition_code=200), 10),
            (replace(sample_day, uv=1.9), 5),
        ]
        for day, bonus in cases:
            assert score_forecast_day(day, day.hours, "Low") == 20 + bonus

    def test_flags_at_threshold_do_not_fire(self, sample_day):
        day = replace(
            sample_day, avg_humidity=80, cloud=70, max_wind_kph=50, condition_code=300, uv=2
        )
        assert score_forecast_day(day, day.hours, "Low") == 20

    def test_missing_condition_code_earns_nothing(self, sample_day):
        day = replace(sample_day, condition_code=None)
        assert score_forecast_day(day, day.hours, "Low") == 20

    def test_clamped_at_100(self, sample_day):
        day = replace(
            sample_day,
            total_precip_mm=120,
            avg_humidity=95,
            cloud=95,
            max_wind_kph=80,
            condition_code=250,
            uv=0,
        )
        hours = _hours(*([10.0] * 24))
        # 50 + 30 + 48 + 5 + 3 + 5 + 10 + 5 = 156
        assert score_forecast_day(day, hours, "High") == 100

    def test_empty_hours(self, sample_day):
        assert score_forecast_day(sample_day, (), "High") == 50

    def test_negative_total_raises(self, sample_day):
        day = replace(sample_day, total_precip_mm=-1.0)
        with pytest.raises(InvalidInputError):
            score_forecast_day(day, day.hours, "Low")

    def test_randomized_scores_within_bounds(self):
        rng = random.Random(1234)
        for _ in range(500):
            day = _random_day(rng)
            tier = rng.choice(["Low", "Medium", "High"])
            score = score_forecast_day(day, day.hours, tier)
            assert (50 if tier == "High" else 20) <= score <= 100

    def test_monotonic_in_total_precipitation(self):
        rng = random.Random(99)
        for _ in range(100):
            day = _random_day(rng)
            tier = rng.choice(["Low", "Medium", "High"])
            previous = -1
            for rain in [0, 10, 30, 30.5, 50, 50.5, 80, 80.5, 200]:
                score = score_forecast_day(replace(day, total_precip_mm=rain), day.hours, tier)
                assert score >= previous
                previous = score


class TestDayConfidence:
    def test_base_with_variable_rain(self, sample_day):
        hours = _hours(0, 3)
        assert day_confidence(sample_day, hours) == 60

    def test_steady_rain_bonus(self, sample_day):
        assert day_confidence(sample_day, _hours(1.0, 1.5, 2.9)) == 70

    def test_variation_of_exactly_two_earns_nothing(self, sample_day):
        assert day_confidence(sample_day, _hours(0, 2)) == 60

    def test_empty_hours_skip_steady_bonus(self, sample_day):
        assert day_confidence(sample_day, ()) == 60

    def test_single_hour_is_steady(self, sample_day):
        assert day_confidence(sample_day, _hours(30)) == 70

    def test_chance_of_rain_and_thunder(self, sample_day):
        day = replace(sample_day, daily_chance_of_rain=81, condition_code=299)
        assert day_confidence(day, _hours(0, 5)) == 75

    def test_maximum_is_85(self, sample_day):
        day = replace(sample_day, daily_chance_of_rain=100, condition_code=200)
        assert day_confidence(day, day.hours) == 85

    def test_randomized_confidence_within_bounds(self):
        rng = random.Random(4321)
        for _ in range(500):
            day = _random_day(rng)
            assert 60 <= day_confidence(day, day.hours) <= 100


class TestHelpers:
    def test_count_heavy_hours_strictly_above_five(self):
        assert count_heavy_hours(_hours(5, 5.01, 0, 9)) == 2

    def test_count_heavy_hours_empty(self):
        assert count_heavy_hours(()) == 0

    def test_precip_variation(self):
        assert precip_variation(_hours(0, 3, 6, 1)) == 6
        assert precip_variation(()) is None

    @pytest.mark.parametrize(
        ("code", "expected"),
        [(199, False), (200, True), (299, True), (300, False), (None, False)],
    )
    def test_thunder_band(self, code, expected):
        assert is_thunder_band(code) is expected
