#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Lennard-Jones Physics Engine
================================================================================

Project:        States of Matter Engine
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Force kernels for the many-particle engine, plus the plain Lennard-Jones
helpers used by the two-particle model.

The potential is:
    V(r) = 4ε [(σ/r)¹² - (σ/r)⁶]

and the radial force is:
    F(r) = -dV/dr = 24ε/σ [2(σ/r)¹³ - (σ/r)⁷]

Inside the container everything is normalized so that σ = 1 and ε = 1
(optionally scaled for the adjustable atom). For a separation vector
(dx, dy) with r² = dx² + dy², the force on the first particle is then

    48 · r⁻² · r⁻⁶ · (r⁻⁶ - 0.5) · (dx, dy)

Pairs beyond the cutoff contribute nothing and the separation is clamped
from below so that the force stays finite. The kernels are compiled with
Numba and loop over every unordered pair; molecule counts are small
enough that no spatial partitioning is needed.
"""

import numpy as np
from numba import jit
from typing import Tuple
from dataclasses import dataclass


# Distance at which the wall potential reaches its minimum (2^(1/6))
WALL_DISTANCE_THRESHOLD = 1.122462048309373017

# Shift that makes the truncated pair potential zero at the cutoff
POTENTIAL_ENERGY_OFFSET = 0.016316891136

# Water model: charge strength and repulsion scaling blend between these
WATER_FULLY_FROZEN_TEMPERATURE = 0.22
WATER_FULLY_MELTED_TEMPERATURE = 0.30
WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE = 4.0
WATER_FULLY_MELTED_ELECTROSTATIC_FORCE = 1.0
MAX_REPULSIVE_SCALING_FACTOR_FOR_WATER = 3.0


@dataclass
class LennardJonesParameters:
    """
    Parameters for the normalized Lennard-Jones interaction.

    Default values are in reduced units where:
    - σ = 1 (one particle diameter)
    - ε = 1 (energy unit)
    - m = 1 (mass of a single atom)
    """
    epsilon: float = 1.0          # Potential well depth
    sigma: float = 1.0            # Zero-crossing distance
    cutoff: float = 2.5           # Cutoff distance (in units of sigma)
    min_distance: float = 0.85    # Separation clamp (in units of sigma)

    @property
    def cutoff_distance(self) -> float:
        """Actual cutoff distance in length units."""
        return self.cutoff * self.sigma

    @property
    def cutoff_squared(self) -> float:
        return self.cutoff_distance ** 2

    @property
    def min_distance_squared(self) -> float:
        return (self.min_distance * self.sigma) ** 2


@jit(nopython=True, cache=True)
def lennard_jones_potential(r: float, epsilon: float, sigma: float) -> float:
    """
    Calculate the Lennard-Jones potential energy.

    V(r) = 4ε [(σ/r)¹² - (σ/r)⁶]

    Args:
        r: Distance between particles
        epsilon: Potential well depth
        sigma: Zero-crossing distance

    Returns:
        Potential energy
    """
    if r < 1e-10:
        return 1e10  # Avoid division by zero

    sr6 = (sigma / r) ** 6
    sr12 = sr6 * sr6
    return 4.0 * epsilon * (sr12 - sr6)


@jit(nopython=True, cache=True)
def lennard_jones_repulsive_force(r: float, epsilon: float, sigma: float) -> float:
    """Repulsive part of the LJ force: 48εσ¹²/r¹³."""
    return 48.0 * epsilon * sigma ** 12 / r ** 13


@jit(nopython=True, cache=True)
def lennard_jones_attractive_force(r: float, epsilon: float, sigma: float) -> float:
    """Attractive part of the LJ force (as a positive magnitude): 24εσ⁶/r⁷."""
    return 24.0 * epsilon * sigma ** 6 / r ** 7


@jit(nopython=True, cache=True)
def calculate_wall_force(
    x: float,
    y: float,
    width: float,
    height: float
) -> Tuple[float, float, float]:
    """
    Soft repulsion exerted by the container walls on one particle.

    Each wall acts like a Lennard-Jones surface that only pushes: it is felt
    inside WALL_DISTANCE_THRESHOLD and the distance is clamped at 80% of
    that threshold.

    Returns:
        (fx, fy, potential_energy)
    """
    min_distance = WALL_DISTANCE_THRESHOLD * 0.8
    fx = 0.0
    fy = 0.0
    potential = 0.0

    if x < WALL_DISTANCE_THRESHOLD:
        d = max(x, min_distance)
        fx = 48.0 / d ** 13 - 24.0 / d ** 7
        potential += 4.0 / d ** 12 - 4.0 / d ** 6 + 1.0
    elif width - x < WALL_DISTANCE_THRESHOLD:
        d = max(width - x, min_distance)
        fx = -48.0 / d ** 13 + 24.0 / d ** 7
        potential += 4.0 / d ** 12 - 4.0 / d ** 6 + 1.0

    if y < WALL_DISTANCE_THRESHOLD:
        d = max(y, min_distance)
        fy = 48.0 / d ** 13 - 24.0 / d ** 7
        potential += 4.0 / d ** 12 - 4.0 / d ** 6 + 1.0
    elif height - y < WALL_DISTANCE_THRESHOLD:
        d = max(height - y, min_distance)
        fy = -48.0 / d ** 13 + 24.0 / d ** 7
        potential += 4.0 / d ** 12 - 4.0 / d ** 6 + 1.0

    return fx, fy, potential


@jit(nopython=True, cache=True)
def accumulate_wall_forces(
    positions: np.ndarray,
    n: int,
    width: float,
    height: float,
    forces: np.ndarray
) -> Tuple[float, float]:
    """
    Add wall forces into `forces` and measure the push on the pressure zone.

    The pressure zone is the lid plus the upper half of the side walls.

    Returns:
        (pressure_zone_wall_force, potential_energy)
    """
    pressure_zone_force = 0.0
    potential = 0.0
    half_height = height / 2.0

    for i in range(n):
        fx, fy, pe = calculate_wall_force(positions[i, 0], positions[i, 1], width, height)
        forces[i, 0] += fx
        forces[i, 1] += fy
        potential += pe

        if fy < 0.0:
            pressure_zone_force += -fy
        elif positions[i, 1] > half_height:
            pressure_zone_force += abs(fx)

    return pressure_zone_force, potential


@jit(nopython=True, cache=True)
def accumulate_monatomic_forces(
    positions: np.ndarray,
    n: int,
    epsilon_scale: float,
    cutoff_squared: float,
    min_distance_squared: float,
    forces: np.ndarray
) -> float:
    """
    Pairwise LJ forces between single atoms.

    Coincident centers are treated as sitting one unit apart along each
    axis rather than producing an undefined direction.

    Returns:
        Total (shifted) pair potential energy
    """
    potential = 0.0
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance_squared = dx * dx + dy * dy

            if distance_squared == 0.0:
                dx = 1.0
                dy = 1.0
                distance_squared = 2.0

            if distance_squared < cutoff_squared:
                if distance_squared < min_distance_squared:
                    distance_squared = min_distance_squared

                r2inv = 1.0 / distance_squared
                r6inv = r2inv * r2inv * r2inv
                force_scalar = 48.0 * r2inv * r6inv * (r6inv - 0.5) * epsilon_scale

                fx = dx * force_scalar
                fy = dy * force_scalar
                forces[i, 0] += fx
                forces[i, 1] += fy
                forces[j, 0] -= fx
                forces[j, 1] -= fy

                potential += 4.0 * r6inv * (r6inv - 1.0) + POTENTIAL_ENERGY_OFFSET

    return potential


@jit(nopython=True, cache=True)
def accumulate_diatomic_forces(
    com_positions: np.ndarray,
    atom_positions: np.ndarray,
    n: int,
    cutoff_squared: float,
    min_distance_squared: float,
    forces: np.ndarray,
    torques: np.ndarray
) -> float:
    """
    Atom-to-atom LJ forces between two-atom molecules, with torques.

    Every atom of molecule i interacts with every atom of molecule j. The
    torque is the cross product of the atom's offset from its center of
    mass with the force applied at that atom.
    """
    potential = 0.0
    for i in range(n):
        for j in range(i + 1, n):
            for ii in range(2):
                a = 2 * i + ii
                for jj in range(2):
                    b = 2 * j + jj
                    dx = atom_positions[a, 0] - atom_positions[b, 0]
                    dy = atom_positions[a, 1] - atom_positions[b, 1]
                    distance_squared = dx * dx + dy * dy

                    if distance_squared < cutoff_squared:
                        if distance_squared < min_distance_squared:
                            distance_squared = min_distance_squared

                        r2inv = 1.0 / distance_squared
                        r6inv = r2inv * r2inv * r2inv
                        force_scalar = 48.0 * r2inv * r6inv * (r6inv - 0.5)

                        fx = dx * force_scalar
                        fy = dy * force_scalar
                        forces[i, 0] += fx
                        forces[i, 1] += fy
                        forces[j, 0] -= fx
                        forces[j, 1] -= fy

                        torques[i] += ((atom_positions[a, 0] - com_positions[i, 0]) * fy
                                       - (atom_positions[a, 1] - com_positions[i, 1]) * fx)
                        torques[j] -= ((atom_positions[b, 0] - com_positions[j, 0]) * fy
                                       - (atom_positions[b, 1] - com_positions[j, 1]) * fx)

                        potential += 4.0 * r6inv * (r6inv - 1.0) + POTENTIAL_ENERGY_OFFSET

    return potential


@jit(nopython=True, cache=True)
def water_interaction_strengths(temperature_set_point: float) -> Tuple[float, float]:
    """
    Charge strength q0 and repulsive scaling for the water model.

    Both are held at their "frozen" values below the frozen temperature,
    at their "melted" values above the melted temperature, and blended
    linearly in between.
    """
    if temperature_set_point < WATER_FULLY_FROZEN_TEMPERATURE:
        return WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE, MAX_REPULSIVE_SCALING_FACTOR_FOR_WATER
    if temperature_set_point > WATER_FULLY_MELTED_TEMPERATURE:
        return WATER_FULLY_MELTED_ELECTROSTATIC_FORCE, 1.0

    factor = ((temperature_set_point - WATER_FULLY_FROZEN_TEMPERATURE)
              / (WATER_FULLY_MELTED_TEMPERATURE - WATER_FULLY_FROZEN_TEMPERATURE))
    q0 = (WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE
          - factor * (WATER_FULLY_FROZEN_ELECTROSTATIC_FORCE - WATER_FULLY_MELTED_ELECTROSTATIC_FORCE))
    scaling = MAX_REPULSIVE_SCALING_FACTOR_FOR_WATER - factor * (MAX_REPULSIVE_SCALING_FACTOR_FOR_WATER - 1.0)
    return q0, scaling


@jit(nopython=True, cache=True)
def accumulate_water_forces(
    com_positions: np.ndarray,
    atom_positions: np.ndarray,
    n: int,
    temperature_set_point: float,
    cutoff_squared: float,
    min_distance_squared: float,
    forces: np.ndarray,
    torques: np.ndarray
) -> float:
    """
    Forces between three-atom (water) molecules.

    Two contributions for each pair of molecules within the cutoff:
    1. A center-to-center LJ force whose repulsive term is scaled up at low
       temperature, which opens up the ice lattice.
    2. Coulomb-like forces between the atom sites. Even molecules carry
       charges [-2q0, q0, q0] and odd ones [-2q0, 1.67q0, 0.33q0]; the
       second hydrogen of every other molecule is left out so that the
       solid forms a regular crystal.
    """
    q0, repulsive_scaling = water_interaction_strengths(temperature_set_point)
    normal_charges = np.array([-2.0 * q0, q0, q0])
    altered_charges = np.array([-2.0 * q0, 1.67 * q0, 0.33 * q0])

    potential = 0.0
    for i in range(n):
        charges_a = normal_charges if i % 2 == 0 else altered_charges
        for j in range(i + 1, n):
            charges_b = normal_charges if j % 2 == 0 else altered_charges

            dx = com_positions[i, 0] - com_positions[j, 0]
            dy = com_positions[i, 1] - com_positions[j, 1]
            distance_squared = dx * dx + dy * dy
            if distance_squared >= cutoff_squared:
                continue
            if distance_squared < min_distance_squared:
                distance_squared = min_distance_squared

            r2inv = 1.0 / distance_squared
            r6inv = r2inv * r2inv * r2inv
            force_scalar = 48.0 * r2inv * r6inv * ((r6inv * repulsive_scaling) - 0.5)
            forces[i, 0] += dx * force_scalar
            forces[i, 1] += dy * force_scalar
            forces[j, 0] -= dx * force_scalar
            forces[j, 1] -= dy * force_scalar
            potential += 4.0 * r6inv * (r6inv - 1.0) + POTENTIAL_ENERGY_OFFSET

            for ii in range(3):
                a = 3 * i + ii
                if (a + 1) % 6 == 0:
                    continue
                for jj in range(3):
                    b = 3 * j + jj
                    if (b + 1) % 6 == 0:
                        continue

                    sx = atom_positions[a, 0] - atom_positions[b, 0]
                    sy = atom_positions[a, 1] - atom_positions[b, 1]
                    site_distance_squared = sx * sx + sy * sy
                    if site_distance_squared < min_distance_squared:
                        site_distance_squared = min_distance_squared

                    s2inv = 1.0 / site_distance_squared
                    charge_scalar = charges_a[ii] * charges_b[jj] * s2inv * s2inv
                    fx = sx * charge_scalar
                    fy = sy * charge_scalar
                    forces[i, 0] += fx
                    forces[i, 1] += fy
                    forces[j, 0] -= fx
                    forces[j, 1] -= fy

                    torques[i] += ((atom_positions[a, 0] - com_positions[i, 0]) * fy
                                   - (atom_positions[a, 1] - com_positions[i, 1]) * fx)
                    torques[j] -= ((atom_positions[b, 0] - com_positions[j, 0]) * fy
                                   - (atom_positions[b, 1] - com_positions[j, 1]) * fx)

    return potential


@jit(nopython=True, cache=True)
def calculate_kinetic_energy(
    velocities: np.ndarray,
    rotation_rates: np.ndarray,
    n: int,
    mass: float,
    rotational_inertia: float
) -> Tuple[float, float]:
    """
    Calculate translational and rotational kinetic energy.

    KE_trans = Σ ½ m v²,  KE_rot = Σ ½ I ω²

    Returns:
        (translational, rotational)
    """
    translational = 0.0
    rotational = 0.0
    for i in range(n):
        translational += 0.5 * mass * (velocities[i, 0] ** 2 + velocities[i, 1] ** 2)
        rotational += 0.5 * rotational_inertia * rotation_rates[i] ** 2
    return translational, rotational


def calculate_temperature(
    translational_energy: float,
    rotational_energy: float,
    n: int,
    atoms_per_molecule: int
) -> float:
    """
    Instantaneous temperature from the kinetic energy.

    Single atoms have two translational degrees of freedom, so
    T = KE / N. Rigid molecules add a rotational one, giving
    T = (KE_trans + KE_rot) / N / 1.5.
    """
    if n == 0:
        return 0.0
    if atoms_per_molecule == 1:
        return translational_energy / n
    return (translational_energy + rotational_energy) / n / 1.5
