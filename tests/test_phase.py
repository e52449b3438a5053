#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Phase State Changer Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 5, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from statesofmatter.dataset import MoleculeDataSet
from statesofmatter.phase import MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE, PhaseStateChanger
from statesofmatter.substances import SubstanceType, get_substance_descriptor
from statesofmatter.thermodynamics import IsokineticThermostat, Phase

CONTAINER_PM = 10000.0


def container_size(descriptor):
    side = CONTAINER_PM / descriptor.particle_diameter
    return side, side


def make_data(substance, n=None, temperature=0.15):
    descriptor = get_substance_descriptor(substance)
    data = MoleculeDataSet(descriptor, n or descriptor.default_molecule_count)
    data.temperature_set_point = temperature
    return data


def min_pair_distance(positions):
    deltas = positions[:, None, :] - positions[None, :, :]
    distances = np.sqrt(np.sum(deltas ** 2, axis=-1))
    return distances[np.triu_indices(len(positions), k=1)].min()


class TestPlacement:
    """Solid, liquid and gas arrangements."""

    @pytest.mark.parametrize("substance", list(SubstanceType))
    @pytest.mark.parametrize("phase", list(Phase))
    def test_count_and_spacing(self, substance, phase):
        """Every phase keeps the molecule count and the minimum separation."""
        data = make_data(substance)
        width, height = container_size(data.descriptor)
        changer = PhaseStateChanger(np.random.default_rng(5))

        result = changer.set_phase(data, phase, width, height)

        assert result.success
        assert result.placed == data.number_of_molecules
        assert len(data.center_of_mass_positions) == data.number_of_molecules
        assert min_pair_distance(data.center_of_mass_positions) >= data.descriptor.minimum_separation - 1e-6

    @pytest.mark.parametrize("phase", list(Phase))
    def test_inside_walls(self, phase):
        """Molecules start clear of the walls."""
        data = make_data(SubstanceType.ARGON)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(2)).set_phase(data, phase, width, height)

        positions = data.center_of_mass_positions
        # Liquid jitter may nudge a ring site slightly toward a wall
        slack = 0.1 + 1e-9
        assert np.all(positions >= MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE - slack)
        assert np.all(positions[:, 0] <= width - MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE + slack)
        assert np.all(positions[:, 1] <= height - MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE + slack)

    def test_gas_non_overlap(self):
        """Gas placement keeps monatomic centers 1.2 diameters apart."""
        data = make_data(SubstanceType.NEON, n=150, temperature=1.0)
        width, height = container_size(data.descriptor)
        assert PhaseStateChanger(np.random.default_rng(11)).set_phase(data, Phase.GAS, width, height)
        assert min_pair_distance(data.center_of_mass_positions) >= 1.2

    def test_solid_sits_on_floor(self):
        """The crystal starts at the bottom of the container."""
        data = make_data(SubstanceType.NEON)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(0)).set_phase(data, Phase.SOLID, width, height)
        assert data.center_of_mass_positions[:, 1].min() < MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE + 0.05
        assert data.center_of_mass_positions[:, 1].max() < height / 2

    def test_atoms_follow_molecules(self):
        """Atom positions are rebuilt after placement."""
        data = make_data(SubstanceType.WATER)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(0)).set_phase(data, Phase.LIQUID, width, height)
        atoms = data.atom_positions.reshape(-1, 3, 2)
        assert np.all(np.linalg.norm(atoms[:, 0] - data.center_of_mass_positions, axis=1) < 0.2)


class TestOrientationAndVelocity:
    """Angles and thermal velocities after placement."""

    def test_diatomic_solid_lies_flat(self):
        """Diatomic crystals start with all molecules horizontal."""
        data = make_data(SubstanceType.DIATOMIC_OXYGEN)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(0)).set_phase(data, Phase.SOLID, width, height)
        assert np.all(data.rotation_angles == 0.0)

    def test_gas_orientations_random(self):
        """Gas molecules point every which way."""
        data = make_data(SubstanceType.WATER, temperature=1.0)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(0)).set_phase(data, Phase.GAS, width, height)
        assert np.std(data.rotation_angles) > 0.5

    def test_velocities_match_set_point(self):
        """Velocities are drawn for the current temperature."""
        data = make_data(SubstanceType.ARGON, n=200, temperature=0.5)
        width, height = container_size(data.descriptor)
        PhaseStateChanger(np.random.default_rng(8)).set_phase(data, Phase.GAS, width, height)
        measured = IsokineticThermostat(data, 0.0).measure_temperature()
        assert measured == pytest.approx(0.5, rel=0.3)

    def test_seeded_reproducibility(self):
        """The same seed gives the same arrangement."""
        runs = []
        for _ in range(2):
            data = make_data(SubstanceType.NEON, temperature=1.0)
            width, height = container_size(data.descriptor)
            PhaseStateChanger(np.random.default_rng(17)).set_phase(data, Phase.GAS, width, height)
            runs.append(data.center_of_mass_positions.copy())
        np.testing.assert_array_equal(runs[0], runs[1])


class TestPlacementFailure:
    """Over-full containers report failure instead of crashing."""

    @pytest.mark.parametrize("phase", list(Phase))
    def test_failure_leaves_data_untouched(self, phase):
        """Positions, angles and velocities survive a failed placement."""
        data = make_data(SubstanceType.NEON, n=60)
        data.center_of_mass_positions[:] = 1.0
        data.velocities[:] = 0.25
        before = (data.center_of_mass_positions.copy(), data.velocities.copy())

        result = PhaseStateChanger(np.random.default_rng(0)).set_phase(data, phase, 6.0, 6.0)

        assert not result
        assert result.placed < 60
        assert "reduce the molecule count" in result.message
        np.testing.assert_array_equal(data.center_of_mass_positions, before[0])
        np.testing.assert_array_equal(data.velocities, before[1])

    def test_unknown_phase(self):
        """Only Phase values are accepted."""
        data = make_data(SubstanceType.NEON, n=4)
        with pytest.raises(ValueError):
            PhaseStateChanger(np.random.default_rng(0)).set_phase(data, "solid", 20.0, 20.0)


class TestFindOpenLocation:
    """Exhaustive grid scan."""

    def test_empty_container(self):
        """The first cell is the lower-left corner inside the margin."""
        changer = PhaseStateChanger(np.random.default_rng(0))
        location = changer.find_open_location(np.empty((0, 2)), 10.0, 10.0, 1.2)
        np.testing.assert_allclose(location, [1.5, 1.5])

    def test_skips_occupied_cells(self):
        """Occupied cells are passed over."""
        changer = PhaseStateChanger(np.random.default_rng(0))
        placed = np.array([[1.5, 1.5]])
        location = changer.find_open_location(placed, 10.0, 10.0, 1.2)
        assert np.linalg.norm(location - placed[0]) >= 1.2

    def test_full_container(self):
        """No open cell means None."""
        changer = PhaseStateChanger(np.random.default_rng(0))
        xs = np.arange(1.5, 3.6, 0.5)
        placed = np.array([[x, y] for x in xs for y in xs])
        assert changer.find_open_location(placed, 5.0, 5.0, 1.2) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
