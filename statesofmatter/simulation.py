#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Force and Motion Calculator
================================================================================

Project:        States of Matter Engine
Module:         simulation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Advances a MoleculeDataSet by one time step using Velocity Verlet
integration for both translation and rotation. Forces come from the
compiled kernels in physics.py: container walls, gravity and the
pairwise interaction appropriate to the substance's topology.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import ModelConfig
from .dataset import MoleculeDataSet
from .physics import (
    LennardJonesParameters,
    accumulate_wall_forces,
    accumulate_monatomic_forces,
    accumulate_diatomic_forces,
    accumulate_water_forces,
    calculate_kinetic_energy,
    calculate_temperature,
)

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Quantities measured during one integration step."""
    temperature: float = 0.0
    potential_energy: float = 0.0
    kinetic_energy: float = 0.0
    pressure_zone_wall_force: float = 0.0

    @property
    def total_energy(self) -> float:
        return self.kinetic_energy + self.potential_energy


class ForceAndMotionCalculator:
    """
    Velocity Verlet integrator for rigid molecules in a closed container.

    The Velocity Verlet algorithm used here is:
    1. x(t + dt) = x(t) + dt * v(t) + (dt²/2) * F(t)/m
       θ(t + dt) = θ(t) + dt * ω(t) + (dt²/2) * τ(t)/I
    2. Rebuild atom positions from x and θ
    3. Compute F(t + dt), τ(t + dt) from walls, gravity and pair forces
    4. v(t + dt) = v(t) + (dt/2) * (F(t) + F(t + dt))/m
       ω(t + dt) = ω(t) + (dt/2) * (τ(t) + τ(t + dt))/I
    """

    def __init__(
        self,
        config: Optional[ModelConfig] = None,
        lj_params: Optional[LennardJonesParameters] = None
    ):
        self.config = config or ModelConfig()
        self.lj_params = lj_params or LennardJonesParameters()
        self.last_result = StepResult()

    def gravitational_acceleration(self, temperature_set_point: float) -> float:
        """
        Downward acceleration applied to every molecule.

        Gravity is boosted at very low set points so that a cooling
        substance settles onto the floor of the container.
        """
        g = self.config.gravitational_acceleration
        threshold = self.config.low_temperature_gravity_threshold
        if temperature_set_point < threshold:
            g *= (threshold - temperature_set_point) * self.config.low_temperature_gravity_increase_rate + 1.0
        return g

    def compute_forces(
        self,
        data: MoleculeDataSet,
        container_width: float,
        container_height: float
    ) -> StepResult:
        """
        Fill data.next_forces and data.next_torques for the current positions.

        Returns:
            StepResult with the potential energy and pressure zone force filled in
        """
        n = data.number_of_molecules
        lj = self.lj_params
        data.next_forces[:] = 0.0
        data.next_torques[:] = 0.0

        pressure_zone_force, wall_potential = accumulate_wall_forces(
            data.center_of_mass_positions, n, container_width, container_height, data.next_forces
        )

        data.next_forces[:, 1] -= self.gravitational_acceleration(data.temperature_set_point)

        if data.atoms_per_molecule == 1:
            pair_potential = accumulate_monatomic_forces(
                data.center_of_mass_positions, n, data.scaled_epsilon,
                lj.cutoff_squared, lj.min_distance_squared, data.next_forces
            )
        elif data.atoms_per_molecule == 2:
            pair_potential = accumulate_diatomic_forces(
                data.center_of_mass_positions, data.atom_positions, n,
                lj.cutoff_squared, lj.min_distance_squared,
                data.next_forces, data.next_torques
            )
        else:
            pair_potential = accumulate_water_forces(
                data.center_of_mass_positions, data.atom_positions, n,
                data.temperature_set_point, lj.cutoff_squared, lj.min_distance_squared,
                data.next_forces, data.next_torques
            )

        return StepResult(
            potential_energy=wall_potential + pair_potential,
            pressure_zone_wall_force=pressure_zone_force,
        )

    def initialize_forces(
        self,
        data: MoleculeDataSet,
        container_width: float,
        container_height: float
    ) -> None:
        """Compute forces for freshly placed molecules without moving them."""
        data.update_atom_positions()
        self.compute_forces(data, container_width, container_height)
        data.forces[:] = data.next_forces
        data.torques[:] = data.next_torques

    def step(
        self,
        data: MoleculeDataSet,
        container_width: float,
        container_height: float,
        time_step: float
    ) -> StepResult:
        """
        Perform one Velocity Verlet integration step.

        Args:
            data: Molecule data set, updated in place
            container_width: Normalized container width
            container_height: Normalized container height
            time_step: Integration time step

        Returns:
            Measured temperature, energies and pressure zone force
        """
        n = data.number_of_molecules
        dt = time_step
        dt_half = dt / 2.0
        dt_sqr_half = dt * dt / 2.0
        mass_inverse = 1.0 / data.molecule_mass
        inertia_inverse = 1.0 / data.rotational_inertia
        rotating = data.atoms_per_molecule > 1

        # Step 1: Positions and angles
        data.center_of_mass_positions += dt * data.velocities + dt_sqr_half * data.forces * mass_inverse
        if rotating:
            data.rotation_angles += dt * data.rotation_rates + dt_sqr_half * data.torques * inertia_inverse

        # Step 2: Atom positions follow the rigid bodies
        data.update_atom_positions()

        # Step 3: New forces
        result = self.compute_forces(data, container_width, container_height)

        # Step 4: Velocities and rotation rates
        data.velocities += dt_half * (data.forces + data.next_forces) * mass_inverse
        if rotating:
            data.rotation_rates += dt_half * (data.torques + data.next_torques) * inertia_inverse

        data.forces[:] = data.next_forces
        data.torques[:] = data.next_torques

        translational, rotational = calculate_kinetic_energy(
            data.velocities, data.rotation_rates, n, data.molecule_mass, data.rotational_inertia
        )
        if not rotating:
            rotational = 0.0

        result.kinetic_energy = translational + rotational
        result.temperature = calculate_temperature(translational, rotational, n, data.atoms_per_molecule)
        data.measured_temperature = result.temperature

        self.last_result = result
        return result

    def run(
        self,
        data: MoleculeDataSet,
        container_width: float,
        container_height: float,
        time_step: float,
        n_steps: int
    ) -> StepResult:
        """Run n_steps integration steps."""
        result = self.last_result
        for _ in range(n_steps):
            result = self.step(data, container_width, container_height, time_step)
        return result
