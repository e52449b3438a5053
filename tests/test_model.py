#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Many-Particle Model Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 6, 2026
License:        MIT License
================================================================================
"""

import logging
import math

import numpy as np
import pytest
from statesofmatter.config import ModelConfig
from statesofmatter.model import MultipleParticleModel, ThermostatType
from statesofmatter.substances import MAX_ADJUSTABLE_EPSILON, SubstanceType
from statesofmatter.thermodynamics import (
    GAS_TEMPERATURE,
    LIQUID_TEMPERATURE,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    SOLID_TEMPERATURE,
    Phase,
)

FRAME_DT = 1.0 / 60.0


def make_model(substance=SubstanceType.NEON, n=None, seed=1):
    return MultipleParticleModel(ModelConfig(seed=seed), substance, n)


def run(model, steps):
    for _ in range(steps):
        model.step(FRAME_DT)


def min_pair_distance(positions):
    deltas = positions[:, None, :] - positions[None, :, :]
    distances = np.sqrt(np.sum(deltas ** 2, axis=-1))
    return distances[np.triu_indices(len(positions), k=1)].min()


class TestConstruction:
    """Initial state of the orchestrator."""

    def test_defaults(self):
        """Neon, default count, solid set point."""
        model = make_model()
        assert model.substance is SubstanceType.NEON
        assert model.number_of_molecules == 100
        assert model.temperature_set_point == SOLID_TEMPERATURE
        assert model.current_phase() is Phase.SOLID
        assert model.container_height() == 10000.0

    def test_too_many_molecules(self):
        """An impossible initial placement is reported at construction."""
        with pytest.raises(ValueError):
            make_model(n=5000)


class TestStepPreconditions:
    """Clock tick validation."""

    @pytest.mark.parametrize("dt", [-FRAME_DT, math.nan, math.inf])
    def test_invalid_dt(self, dt):
        """Negative or non-finite ticks fail fast."""
        with pytest.raises(ValueError):
            make_model(n=10).step(dt)

    def test_zero_dt(self):
        """A zero tick leaves the state alone."""
        model = make_model(n=10)
        before = model.atom_positions()
        assert model.step(0.0) is None
        np.testing.assert_array_equal(model.atom_positions(), before)


class TestSubstances:
    """Switching substances."""

    @pytest.mark.parametrize("substance, atoms", [
        (SubstanceType.ARGON, 1),
        (SubstanceType.DIATOMIC_OXYGEN, 2),
        (SubstanceType.WATER, 3),
        (SubstanceType.ADJUSTABLE_ATOM, 1),
    ])
    def test_rebuilds_data_set(self, substance, atoms):
        """The data set and metadata follow the substance."""
        model = make_model()
        model.resize_container(6000.0)
        run(model, 5)
        assert model.set_substance(substance)
        assert model.substance is substance
        assert model.number_of_atoms == model.number_of_molecules * atoms
        assert len(model.atom_properties()) == atoms
        assert model.container_height() == 10000.0

    def test_explicit_count(self):
        """An explicit molecule count overrides the default."""
        model = make_model()
        model.set_substance(SubstanceType.ARGON, 30)
        assert model.number_of_molecules == 30

    def test_failed_switch_keeps_previous(self):
        """A substance that cannot be placed leaves the model as it was."""
        model = make_model(n=20)
        result = model.set_substance(SubstanceType.ARGON, 5000)
        assert not result
        assert model.substance is SubstanceType.NEON
        assert model.number_of_molecules == 20

    @pytest.mark.parametrize("substance", list(SubstanceType))
    def test_steps_stay_finite(self, substance):
        """Every substance integrates without NaN."""
        model = make_model(substance)
        run(model, 30)
        assert np.all(np.isfinite(model.atom_positions()))
        assert np.isfinite(model.measured_temperature())


class TestPhases:
    """Phase presets through the orchestrator."""

    @pytest.mark.parametrize("substance", list(SubstanceType))
    def test_count_conserved(self, substance):
        """Molecule count is unchanged by every phase change."""
        model = make_model(substance)
        count = model.number_of_molecules
        for phase in (Phase.GAS, Phase.LIQUID, Phase.SOLID, Phase.GAS):
            assert model.set_phase(phase)
            assert model.number_of_molecules == count
            assert len(model.molecule_positions()) == count
            assert model.current_phase() is phase

    def test_scenario_b(self):
        """Fifty neon atoms placed as a solid keep their spacing."""
        model = make_model(n=50, seed=4)
        assert model.set_phase(Phase.SOLID)
        assert model.number_of_molecules == 50
        assert min_pair_distance(model.molecule_positions()) >= 1.2 - 1e-9

    def test_failed_phase_restores_temperature(self):
        """If the molecules cannot be placed, nothing changes."""
        model = make_model()
        model.container.height = model.container.minimum_height
        before = model.molecule_positions()

        result = model.set_phase(Phase.GAS)

        assert not result
        assert model.temperature_set_point == SOLID_TEMPERATURE
        np.testing.assert_array_equal(model.molecule_positions(), before)

    def test_unknown_phase(self):
        """Only Phase values are accepted."""
        with pytest.raises(ValueError):
            make_model(n=10).set_phase("gas")

    def test_kelvin_readout(self):
        """Phase presets read sensibly in Kelvin."""
        model = make_model()
        model.set_phase(Phase.LIQUID)
        assert 24.5 < model.temperature_in_kelvin() < 45.0


class TestContainer:
    """Lid motion and pressure through the orchestrator."""

    def test_scenario_c(self):
        """The lid falls monotonically to half height without overshoot."""
        model = make_model()
        start = model.container_height()
        target = model.resize_container(start / 2.0)
        assert target == start / 2.0

        heights = [start]
        for _ in range(300):
            model.step(FRAME_DT)
            heights.append(model.container_height())

        assert all(b <= a for a, b in zip(heights, heights[1:]))
        assert min(heights) >= target - 1e-9
        assert heights[-1] == pytest.approx(target)
        assert np.all(np.isfinite(model.atom_positions()))

    def test_gas_exerts_pressure(self):
        """A hot gas pushes on the lid."""
        model = make_model()
        model.set_phase(Phase.GAS)
        run(model, 120)
        assert model.measured_pressure() > 0
        assert model.pressure_in_atmospheres() == pytest.approx(5 * model.measured_pressure())

    def test_resize_clamped(self):
        """Targets outside the allowed range are clamped."""
        model = make_model()
        assert model.resize_container(50000.0) == 10000.0
        assert model.resize_container(0.0) == pytest.approx(model.container.minimum_height)


class TestTemperatureControl:
    """Set point, heating and thermostat selection."""

    def test_set_point_clamped(self):
        """Targets are clamped to the model range."""
        model = make_model(n=10)
        assert model.set_target_temperature(1000.0) == MAX_TEMPERATURE
        assert model.set_target_temperature(-1.0) == MIN_TEMPERATURE
        with pytest.raises(ValueError):
            model.set_target_temperature(math.nan)

    def test_heating_raises_set_point(self):
        """Full heating adds 0.07 per unit time."""
        model = make_model()
        assert model.set_heating_cooling_amount(5.0) == 1.0
        run(model, 60)
        assert model.temperature_set_point == pytest.approx(SOLID_TEMPERATURE + 0.07)

    def test_cooling_slows_near_zero(self):
        """Cooling from a low set point is slower than the full rate."""
        model = make_model()
        model.set_target_temperature(0.05)
        model.set_heating_cooling_amount(-1.0)
        run(model, 60)
        assert MIN_TEMPERATURE <= model.temperature_set_point < 0.05
        assert model.temperature_set_point > 0.05 - 0.07

    def test_cooling_bottoms_out(self):
        """Long cooling ends at the minimum temperature."""
        model = make_model(n=20)
        model.set_target_temperature(0.01)
        model.set_heating_cooling_amount(-1.0)
        run(model, 600)
        assert model.temperature_set_point == MIN_TEMPERATURE
        assert model.temperature_in_kelvin() == 0.0

    def test_isokinetic_above_liquid(self):
        """Hot set points use the isokinetic thermostat and hit the target."""
        model = make_model()
        model.set_phase(Phase.GAS)
        model.step(FRAME_DT)
        assert model.current_thermostat is ThermostatType.ISOKINETIC
        assert model.isokinetic.measure_temperature() == pytest.approx(GAS_TEMPERATURE)

    def test_andersen_near_set_point(self):
        """A solid near its set point is held by the Andersen thermostat."""
        model = make_model()
        model.step(FRAME_DT)
        assert model.current_thermostat is ThermostatType.ANDERSEN
        assert model.temperature_set_point < LIQUID_TEMPERATURE

    def test_seeded_reproducibility(self):
        """Same seed, same trajectory."""
        a = make_model(seed=12)
        b = make_model(seed=12)
        run(a, 40)
        run(b, 40)
        np.testing.assert_array_equal(a.atom_positions(), b.atom_positions())


class TestAdjustableEpsilon:
    """Interaction strength of the adjustable substance."""

    def test_applies_to_adjustable(self):
        """The adjustable substance accepts a clamped epsilon."""
        model = make_model(SubstanceType.ADJUSTABLE_ATOM)
        assert model.set_epsilon(1000.0) == MAX_ADJUSTABLE_EPSILON
        assert model.data.scaled_epsilon == pytest.approx(MAX_ADJUSTABLE_EPSILON / 225.0)

    def test_survives_substance_reset(self):
        """Re-selecting the adjustable substance keeps the chosen epsilon."""
        model = make_model(SubstanceType.ADJUSTABLE_ATOM)
        model.set_epsilon(100.0)
        model.set_substance(SubstanceType.ADJUSTABLE_ATOM)
        assert model.data.scaled_epsilon == pytest.approx(100.0 / 225.0)

    def test_ignored_for_other_substances(self, caplog):
        """Other substances log a warning and keep unit strength."""
        model = make_model(n=10)
        with caplog.at_level(logging.WARNING, logger="statesofmatter"):
            assert model.set_epsilon(100.0) is None
        assert model.data.scaled_epsilon == 1.0
        assert "Epsilon can only be adjusted" in caplog.text


class TestReadOnlyViews:
    """Accessors return copies."""

    def test_positions_are_copies(self):
        """Mutating a snapshot does not move molecules."""
        model = make_model(n=10)
        snapshot = model.atom_positions()
        snapshot[:] = -1.0
        assert np.all(model.atom_positions() >= 0.0)

    def test_picometer_positions(self):
        """Picometer positions scale by the particle diameter."""
        model = make_model(n=10)
        np.testing.assert_allclose(model.atom_positions_in_picometers(),
                                   model.atom_positions() * model.substance_descriptor.particle_diameter)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
