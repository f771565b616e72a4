"""Tests for the logistic map engine."""
from __future__ import annotations

import math

import numpy as np
import pytest

from chaos_lab.errors import InvalidParameter
from chaos_lab.simulation.logistic_map import LogisticMapEngine, LogisticRegime, classify
from chaos_lab.types.params import LogisticParams


def _make_engine(**kwargs) -> LogisticMapEngine:
    return LogisticMapEngine(LogisticParams(**kwargs))


class TestTimeSeries:
    def test_first_iterate(self):
        series = _make_engine().time_series(r=3.0, x0=0.5, steps=1)
        # x_1 = 3.0 * 0.5 * 0.5
        assert series[0] == pytest.approx(0.75)

    def test_length(self):
        assert len(_make_engine().time_series(r=3.7, x0=0.2, steps=37)) == 37

    def test_defaults_from_params(self):
        engine = _make_engine(r=3.2, x0=0.3, iterations=15)
        np.testing.assert_array_equal(
            engine.time_series(), engine.time_series(r=3.2, x0=0.3, steps=15)
        )

    def test_converges_to_fixed_point(self):
        series = _make_engine().time_series(r=2.5, x0=0.5, steps=200)
        assert series[-1] == pytest.approx(0.6, abs=1e-6)
        assert LogisticMapEngine.fixed_point(2.5) == pytest.approx(0.6)

    def test_period_two(self):
        series = _make_engine().time_series(r=3.2, x0=0.5, steps=1000)
        assert series[-1] == pytest.approx(series[-3], abs=1e-9)
        assert abs(series[-1] - series[-2]) > 0.1

    def test_extinction(self):
        series = _make_engine().time_series(r=0.5, x0=0.5, steps=100)
        assert series[-1] < 1e-20

    def test_bounded_in_unit_interval(self):
        series = _make_engine().time_series(r=3.9, x0=0.1, steps=2000)
        assert np.all((series >= 0) & (series <= 1))

    def test_diverging_r_terminates(self):
        series = _make_engine().time_series(r=10.0, x0=0.5, steps=50)
        assert len(series) == 50
        assert not np.isfinite(series[-1])

    def test_zero_steps(self):
        assert len(_make_engine().time_series(steps=0)) == 0

    def test_negative_steps(self):
        with pytest.raises(InvalidParameter):
            _make_engine().time_series(steps=-1)


class TestBifurcationRaster:
    def test_shape_and_columns(self):
        raster = _make_engine().bifurcation_raster(2.5, 4.0, columns=40, transient=100, plotted=20)
        assert raster.r_values.shape == (40,)
        assert raster.x_values.shape == (40, 20)
        assert raster.r_values[0] == pytest.approx(2.5)
        assert raster.r_values[1] == pytest.approx(2.5 + 1.5 / 40)

    def test_column_matches_time_series(self):
        engine = _make_engine()
        raster = engine.bifurcation_raster(3.0, 4.0, columns=10, transient=50, plotted=30, x0=0.4)
        for i, r in enumerate(raster.r_values):
            series = engine.time_series(r=r, x0=0.4, steps=80)
            np.testing.assert_allclose(raster.x_values[i], series[50:], rtol=0, atol=1e-12)

    def test_stable_columns_collapse(self):
        raster = _make_engine().bifurcation_raster(2.0, 2.9, columns=10)
        spread = raster.x_values.max(axis=1) - raster.x_values.min(axis=1)
        assert np.all(spread < 1e-6)

    def test_chaotic_columns_spread(self):
        raster = _make_engine().bifurcation_raster(3.9, 4.0, columns=5)
        spread = raster.x_values.max(axis=1) - raster.x_values.min(axis=1)
        assert np.all(spread > 0.3)

    def test_points_flatten(self):
        raster = _make_engine().bifurcation_raster(3.0, 3.5, columns=4, plotted=3)
        r, x = raster.points()
        assert r.shape == x.shape == (12,)
        assert r[0] == r[2] == raster.r_values[0]

    def test_defaults_from_params(self):
        raster = _make_engine(r_min=3.1, r_max=3.3).bifurcation_raster(columns=5)
        assert raster.r_values[0] == pytest.approx(3.1)

    def test_x0_from_params(self):
        raster = _make_engine(x0=0.0).bifurcation_raster(3.0, 3.2, columns=2, transient=10, plotted=2)
        np.testing.assert_array_equal(raster.x_values, np.zeros((2, 2)))

    def test_explicit_x0_overrides_params(self):
        engine = _make_engine(x0=0.0)
        raster = engine.bifurcation_raster(3.0, 3.2, columns=2, transient=10, plotted=2, x0=0.5)
        assert np.all(raster.x_values > 0)

    def test_invalid_columns(self):
        with pytest.raises(InvalidParameter):
            _make_engine().bifurcation_raster(columns=0)


class TestClassify:
    @pytest.mark.parametrize(
        "r, regime",
        [
            (0.5, LogisticRegime.EXTINCT),
            (1.0, LogisticRegime.STABLE),
            (2.9, LogisticRegime.STABLE),
            (3.0, LogisticRegime.OSCILLATING),
            (3.3, LogisticRegime.OSCILLATING),
            (1 + math.sqrt(6), LogisticRegime.PERIODIC),
            (3.5, LogisticRegime.PERIODIC),
            (3.57, LogisticRegime.CHAOTIC),
            (3.9, LogisticRegime.CHAOTIC),
        ],
    )
    def test_thresholds(self, r, regime):
        assert classify(r) == regime

    def test_regime_values(self):
        assert classify(0.5).value == "extinct"
        assert classify(3.9).value == "chaotic"

    def test_engine_classify_uses_current_r(self):
        engine = _make_engine(r=3.8)
        assert engine.classify() == LogisticRegime.CHAOTIC
        engine.apply_preset("stable")
        assert engine.classify() == LogisticRegime.STABLE
        assert not engine.apply_preset("unknown")
        assert engine.params.r == 2.5
