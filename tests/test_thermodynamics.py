#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Thermodynamics Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 4, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from statesofmatter.config import ModelConfig, ThermostatConfig
from statesofmatter.dataset import MoleculeDataSet
from statesofmatter.model import MultipleParticleModel, ThermostatType
from statesofmatter.substances import SubstanceType, get_substance_descriptor
from statesofmatter.thermodynamics import (
    SOLID_TEMPERATURE,
    AndersenThermostat,
    IsokineticThermostat,
    MovingAverage,
    Phase,
    convert_to_kelvin,
    map_temperature_to_phase,
)

NEON = get_substance_descriptor(SubstanceType.NEON)


def make_data(substance=SubstanceType.NEON, n=200, speed=0.0, seed=0):
    data = MoleculeDataSet(get_substance_descriptor(substance), n)
    if speed:
        rng = np.random.default_rng(seed)
        data.velocities[:] = rng.standard_normal((n, 2)) * speed
        data.rotation_rates[:] = rng.standard_normal(n) * speed
    return data


def temperature_of(data):
    return IsokineticThermostat(data, 0.0).measure_temperature()


class TestPhaseMapping:
    """Set point to phase."""

    @pytest.mark.parametrize("temperature, phase", [
        (0.0, Phase.SOLID),
        (0.2, Phase.SOLID),
        (0.3, Phase.LIQUID),
        (0.6, Phase.LIQUID),
        (1.0, Phase.GAS),
        (5.0, Phase.GAS),
    ])
    def test_midpoints(self, temperature, phase):
        """Boundaries sit halfway between the phase presets."""
        assert map_temperature_to_phase(temperature) is phase


class TestKelvinConversion:
    """Model temperature to Kelvin."""

    def test_absolute_zero(self):
        """At or below the minimum model temperature reads 0 K."""
        assert convert_to_kelvin(NEON.min_model_temperature, NEON) == 0.0

    def test_anchors(self):
        """Triple and critical points map onto the substance's values."""
        assert convert_to_kelvin(0.26, NEON) == pytest.approx(24.5)
        assert convert_to_kelvin(0.8, NEON) == pytest.approx(45.0)
        assert convert_to_kelvin(1.6, NEON) == pytest.approx(90.0)

    def test_floor_above_zero(self):
        """Just above absolute zero never reads below half a Kelvin."""
        assert convert_to_kelvin(NEON.min_model_temperature * 1.01, NEON) == pytest.approx(0.5, rel=0.02)
        assert convert_to_kelvin(NEON.min_model_temperature * 1.01, NEON) >= 0.5

    def test_monotonic(self):
        """Higher model temperature never reads colder."""
        temperatures = np.linspace(0.0, 3.0, 301)
        kelvin = [convert_to_kelvin(t, NEON) for t in temperatures]
        assert all(b >= a for a, b in zip(kelvin, kelvin[1:]))


class TestMovingAverage:
    """Fixed-size circular buffer average."""

    def test_average_of_recent_values(self):
        """Old values drop out as new ones arrive."""
        average = MovingAverage(3)
        for value in (3.0, 6.0, 9.0):
            average.add_value(value)
        assert average.average == pytest.approx(6.0)
        assert average.add_value(12.0) == pytest.approx(9.0)

    def test_initial_value(self):
        """The buffer starts full of the initial value."""
        average = MovingAverage(4, initial_value=2.0)
        assert average.average == 2.0
        assert average.add_value(6.0) == pytest.approx(3.0)

    def test_reset(self):
        """Reset restores the initial state."""
        average = MovingAverage(2)
        average.add_value(10.0)
        average.reset()
        assert average.average == 0.0

    def test_size_validated(self):
        """A buffer needs at least one slot."""
        with pytest.raises(ValueError):
            MovingAverage(0)


class TestAndersenThermostat:
    """Stochastic thermostat."""

    def test_converges_to_target(self):
        """Measured temperature settles within 10% of the target."""
        data = make_data(n=200)
        thermostat = AndersenThermostat(data, NEON.min_model_temperature, np.random.default_rng(42),
                                        ThermostatConfig(gamma_x=0.99, gamma_y=0.99))
        thermostat.set_target_temperature(0.5)

        samples = []
        for step in range(2000):
            thermostat.step()
            if step >= 1500:
                samples.append(temperature_of(data))
        assert np.mean(samples) == pytest.approx(0.5, rel=0.10)

    def test_converges_for_molecules(self):
        """Rotation rates are thermalized too."""
        descriptor = get_substance_descriptor(SubstanceType.DIATOMIC_OXYGEN)
        data = make_data(SubstanceType.DIATOMIC_OXYGEN, n=150)
        thermostat = AndersenThermostat(data, descriptor.min_model_temperature, np.random.default_rng(3),
                                        ThermostatConfig(gamma_x=0.99, gamma_y=0.99))
        thermostat.set_target_temperature(0.3)
        for _ in range(2000):
            thermostat.step()
        assert np.all(data.rotation_rates != 0.0)
        assert temperature_of(data) == pytest.approx(0.3, rel=0.25)

    def test_no_sideways_drift(self):
        """Drift compensation keeps the mean x velocity near zero."""
        data = make_data(n=200)
        thermostat = AndersenThermostat(data, NEON.min_model_temperature, np.random.default_rng(7),
                                        ThermostatConfig(gamma_x=0.99, gamma_y=0.99))
        thermostat.set_target_temperature(1.0)
        for _ in range(1000):
            thermostat.step()
        assert abs(np.mean(data.velocities[:, 0])) < 0.05

    def test_near_zero_regime(self):
        """At the minimum temperature the stronger damping takes over and no noise is added."""
        data = make_data(n=50, speed=0.5)
        thermostat = AndersenThermostat(data, NEON.min_model_temperature, np.random.default_rng(1))
        thermostat.set_target_temperature(NEON.min_model_temperature)
        assert thermostat.damping_factors() == (0.992, 0.999, 0.0)

        before = temperature_of(data)
        for _ in range(1000):
            thermostat.step()
        assert temperature_of(data) < 0.5 * before
        assert np.all(np.isfinite(data.velocities))

    def test_near_zero_constants_are_tunable(self):
        """The near-zero damping comes from the configuration."""
        config = ThermostatConfig(near_zero_gamma_x=0.9, near_zero_gamma_y=0.95)
        thermostat = AndersenThermostat(make_data(n=2), 0.01, np.random.default_rng(0), config)
        thermostat.set_target_temperature(0.0)
        assert thermostat.damping_factors() == (0.9, 0.95, 0.0)

    def test_seeded_reproducibility(self):
        """Same seed, same trajectory."""
        results = []
        for _ in range(2):
            data = make_data(n=20, speed=0.3)
            thermostat = AndersenThermostat(data, NEON.min_model_temperature, np.random.default_rng(99))
            thermostat.set_target_temperature(0.4)
            for _ in range(50):
                thermostat.step()
            results.append(data.velocities.copy())
        np.testing.assert_array_equal(results[0], results[1])


class TestIsokineticThermostat:
    """Deterministic rescaling thermostat."""

    def test_hits_target_exactly(self):
        """One step sets the measured temperature to the target."""
        data = make_data(n=30, speed=1.0)
        thermostat = IsokineticThermostat(data, NEON.min_model_temperature)
        thermostat.set_target_temperature(0.25)
        thermostat.step()
        assert thermostat.measure_temperature() == pytest.approx(0.25)

    def test_molecules_include_rotation(self):
        """Rotation is rescaled with translation."""
        descriptor = get_substance_descriptor(SubstanceType.WATER)
        data = make_data(SubstanceType.WATER, n=10, speed=1.0)
        thermostat = IsokineticThermostat(data, descriptor.min_model_temperature)
        thermostat.set_target_temperature(0.4)
        thermostat.step()
        assert thermostat.measure_temperature() == pytest.approx(0.4)

    def test_zero_at_minimum(self):
        """At the minimum temperature all motion stops."""
        data = make_data(n=10, speed=1.0)
        thermostat = IsokineticThermostat(data, NEON.min_model_temperature)
        thermostat.set_target_temperature(NEON.min_model_temperature)
        thermostat.step()
        assert np.all(data.velocities == 0.0)

    def test_motionless_is_untouched(self):
        """Nothing moving means nothing to rescale, and no NaN."""
        data = make_data(n=10)
        thermostat = IsokineticThermostat(data, NEON.min_model_temperature)
        thermostat.set_target_temperature(0.5)
        thermostat.step()
        assert np.all(data.velocities == 0.0)


class TestModelThermostatConvergence:
    """Thermostat behaviour inside the full model with default settings."""

    def test_moving_average_settles_near_set_point(self):
        """Hot initial velocities are pulled into the band around the set point."""
        config = ModelConfig(seed=7)
        model = MultipleParticleModel(config)
        model.data.velocities *= 3.0

        average = MovingAverage(50)
        used = set()
        for _ in range(900):
            model.step(1.0 / 60.0)
            used.add(model.current_thermostat)
            average.add_value(model.isokinetic.measure_temperature())

        assert ThermostatType.ANDERSEN in used
        tolerance = config.thermostat.temperature_closeness_range
        assert abs(average.average - SOLID_TEMPERATURE) <= tolerance


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
