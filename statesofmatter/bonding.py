#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Two-Particle Interaction Model and Bonding State Machine
================================================================================

Project:        States of Matter Engine
Module:         bonding.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 5, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Two atoms interacting through a Lennard-Jones potential: an anchor atom
(optionally pinned in place at the origin) and a free atom the user can
drag around. The model works in real units: distances in picometers,
time in seconds, masses in kilograms and epsilon in Joules (the tabulated
epsilon/k_B times Boltzmann's constant).

The pair moves through a bonding cycle:

    UNBONDED -> BONDING -> BONDED -> ALLOWING_ESCAPE -> UNBONDED

- UNBONDED -> BONDING: the atoms are inside the attraction-dominant band
  (between the potential minimum and the capture cutoff) and too slow to
  escape the well.
- BONDING -> BONDED: the separation has stayed near the potential minimum
  with almost no kinetic energy for a number of consecutive steps. Motion
  is damped while a bond forms.
- BONDING -> UNBONDED: the forming bond is abandoned by release_bond(), or
  the atoms have drifted out past the capture cutoff.
- BONDED -> ALLOWING_ESCAPE: only through release_bond(), which is also
  issued implicitly when the free atom is repositioned or the pair is
  reset or reconfigured.
- ALLOWING_ESCAPE -> UNBONDED: the atoms have moved beyond the escape
  distance, or the escape cooldown has run out.

While bonded the free atom is not integrated; it alternates between two
points of equal potential on either side of the minimum.
"""

import logging
import math
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .config import BondingConfig
from .physics import (
    lennard_jones_potential,
    lennard_jones_repulsive_force,
    lennard_jones_attractive_force,
)
from .substances import (
    ATOM_PROPERTIES,
    ATOMIC_MASS_UNIT,
    ADJUSTABLE_DEFAULT_EPSILON,
    ADJUSTABLE_DEFAULT_SIGMA,
    K_BOLTZMANN,
    MAX_EPSILON,
    MAX_SIGMA,
    MIN_EPSILON,
    MIN_SIGMA,
    AtomType,
    epsilon as table_epsilon,
    sigma as table_sigma,
)

logger = logging.getLogger(__name__)


MAX_APPROXIMATION_ITERATIONS = 100


class BondState(Enum):
    """Bonding state of the two-atom pair."""
    UNBONDED = "unbonded"
    BONDING = "bonding"
    BONDED = "bonded"
    ALLOWING_ESCAPE = "allowing_escape"


class AtomPair(Enum):
    """Anchor/free atom combinations offered in two-particle mode."""
    NEON_NEON = (AtomType.NEON, AtomType.NEON)
    ARGON_ARGON = (AtomType.ARGON, AtomType.ARGON)
    OXYGEN_OXYGEN = (AtomType.OXYGEN, AtomType.OXYGEN)
    NEON_ARGON = (AtomType.NEON, AtomType.ARGON)
    NEON_OXYGEN = (AtomType.NEON, AtomType.OXYGEN)
    ARGON_OXYGEN = (AtomType.ARGON, AtomType.OXYGEN)
    ADJUSTABLE = (AtomType.ADJUSTABLE, AtomType.ADJUSTABLE)

    @property
    def fixed_atom_type(self) -> AtomType:
        return self.value[0]

    @property
    def movable_atom_type(self) -> AtomType:
        return self.value[1]


class LjPotentialCalculator:
    """
    Lennard-Jones potential and forces in real units.

    Args:
        sigma: Interaction distance (pm)
        epsilon: Interaction strength as epsilon/k_B (K)
    """

    def __init__(self, sigma: float, epsilon: float):
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        self.sigma = sigma
        self.epsilon = epsilon

    @property
    def epsilon_for_calcs(self) -> float:
        """Epsilon multiplied by Boltzmann's constant."""
        return self.epsilon * K_BOLTZMANN

    def potential(self, distance: float) -> float:
        return lennard_jones_potential(distance, self.epsilon_for_calcs, self.sigma)

    def repulsive_force(self, distance: float) -> float:
        return lennard_jones_repulsive_force(distance, self.epsilon_for_calcs, self.sigma)

    def attractive_force(self, distance: float) -> float:
        return lennard_jones_attractive_force(distance, self.epsilon_for_calcs, self.sigma)

    def minimum_force_distance(self) -> float:
        """Separation at the bottom of the well: σ · 2^(1/6)."""
        return self.sigma * 2.0 ** (1.0 / 6.0)


class MotionAtom:
    """An atom with a type, a 2D position and a 2D velocity."""

    def __init__(self, atom_type: AtomType, x: float = 0.0, y: float = 0.0):
        self.atom_type = atom_type
        self.radius = ATOM_PROPERTIES[atom_type].radius
        self.position = np.array([x, y], dtype=float)
        self.velocity = np.zeros(2)

    @property
    def mass(self) -> float:
        """Mass in kilograms."""
        return ATOM_PROPERTIES[self.atom_type].mass * ATOMIC_MASS_UNIT

    def set_type(self, atom_type: AtomType) -> None:
        self.atom_type = atom_type
        self.radius = ATOM_PROPERTIES[atom_type].radius


class DualAtomModel:
    """
    Anchor atom plus free atom, with a bonding state machine.

    The orchestrating clock calls step(dt) once per frame; commands
    (pin_atom, release_bond, set_movable_atom_position, set_atom_pair) are
    applied between steps.
    """

    def __init__(
        self,
        atom_pair: AtomPair = AtomPair.NEON_NEON,
        config: Optional[BondingConfig] = None,
        pinned: bool = True
    ):
        self.config = config or BondingConfig()
        self.atom_pair = atom_pair
        self.pinned = pinned

        self.fixed_atom = MotionAtom(atom_pair.fixed_atom_type)
        self.movable_atom = MotionAtom(atom_pair.movable_atom_type)
        self.adjustable_epsilon = ADJUSTABLE_DEFAULT_EPSILON
        self.adjustable_sigma = ADJUSTABLE_DEFAULT_SIGMA
        self.lj = LjPotentialCalculator(MIN_SIGMA, MIN_EPSILON)

        self.bond_state = BondState.UNBONDED
        self.attractive_force = 0.0
        self.repulsive_force = 0.0
        self.time = 0.0

        self._residual_time = 0.0
        self._settle_count = 0
        self._escape_countdown = 0.0
        self._oscillation_countdown = 0.0
        self._bonded_inner_distance = 0.0
        self._bonded_outer_distance = 0.0

        self.set_atom_pair(atom_pair)

    # ------------------------------------------------------------------
    # Configuration commands
    # ------------------------------------------------------------------

    def set_atom_pair(self, atom_pair: AtomPair) -> None:
        """Select the atoms and reset the free atom to the potential minimum."""
        if not isinstance(atom_pair, AtomPair):
            raise TypeError(f"Expected an AtomPair, got {atom_pair!r}")
        self.atom_pair = atom_pair
        self.fixed_atom.set_type(atom_pair.fixed_atom_type)
        self.movable_atom.set_type(atom_pair.movable_atom_type)
        self._apply_interaction_parameters()
        self.reset_movable_atom_position()

    def _apply_interaction_parameters(self) -> None:
        a, b = self.atom_pair.fixed_atom_type, self.atom_pair.movable_atom_type
        self.lj.sigma = table_sigma(a, b, adjustable_sigma=self.adjustable_sigma)
        self.lj.epsilon = table_epsilon(a, b, adjustable_epsilon=self.adjustable_epsilon)
        if self.atom_pair is AtomPair.ADJUSTABLE:
            self.fixed_atom.radius = self.adjustable_sigma / 2.0
            self.movable_atom.radius = self.adjustable_sigma / 2.0

    def set_adjustable_epsilon(self, epsilon: float) -> float:
        """Set the adjustable pair's epsilon (K), clamped to the valid range."""
        self.adjustable_epsilon = float(min(max(epsilon, MIN_EPSILON), MAX_EPSILON))
        if self.atom_pair is AtomPair.ADJUSTABLE:
            self._apply_interaction_parameters()
        return self.adjustable_epsilon

    def set_adjustable_sigma(self, sigma: float) -> float:
        """Set the adjustable pair's sigma (pm), clamped, and move the free atom to the new minimum."""
        self.adjustable_sigma = float(min(max(sigma, MIN_SIGMA), MAX_SIGMA))
        if self.atom_pair is AtomPair.ADJUSTABLE:
            self._apply_interaction_parameters()
            self.reset_movable_atom_position()
        return self.adjustable_sigma

    def pin_atom(self, pinned: bool = True) -> None:
        """Pin (or free) the anchor atom."""
        self.pinned = pinned
        if pinned:
            self.fixed_atom.velocity[:] = 0.0

    def reset_movable_atom_position(self) -> None:
        """
        Put the anchor at the origin and the free atom at the potential minimum, at rest.

        Any bond is released first, so a bonded pair passes through
        ALLOWING_ESCAPE on its way back to UNBONDED.
        """
        self.release_bond()
        self.fixed_atom.position[:] = 0.0
        self.fixed_atom.velocity[:] = 0.0
        self.movable_atom.position[:] = (self.lj.minimum_force_distance(), 0.0)
        self.movable_atom.velocity[:] = 0.0
        self._transition(BondState.UNBONDED)
        self._residual_time = 0.0
        self._update_forces()

    def reset(self) -> None:
        self.pinned = True
        self.adjustable_epsilon = ADJUSTABLE_DEFAULT_EPSILON
        self.adjustable_sigma = ADJUSTABLE_DEFAULT_SIGMA
        self.time = 0.0
        self.set_atom_pair(AtomPair.NEON_NEON)

    # ------------------------------------------------------------------
    # User commands
    # ------------------------------------------------------------------

    def release_bond(self) -> None:
        """
        Release the bond, if there is one.

        A formed bond moves to ALLOWING_ESCAPE; a bond that is still forming
        is abandoned and the pair returns to UNBONDED.
        """
        if self.bond_state is BondState.BONDED:
            self._escape_countdown = self.config.escape_cooldown
            self._transition(BondState.ALLOWING_ESCAPE)
        elif self.bond_state is BondState.BONDING:
            self._transition(BondState.UNBONDED)

    def set_movable_atom_position(self, x: float, y: float) -> None:
        """
        Move the free atom, as when the user drags it.

        Repositioning releases any bond first: a formed bond moves to
        ALLOWING_ESCAPE and a forming one is abandoned. The free atom comes
        to rest at the new position.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Position must be finite, got ({x}, {y})")
        self.release_bond()
        self.movable_atom.position[:] = (x, y)
        self.movable_atom.velocity[:] = 0.0
        self._update_forces()

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """
        Advance the model by one clock tick.

        The tick is scaled by the time multiplier and split into substeps
        no longer than max_time_step; leftover time carries over.
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"Time step must be finite and non-negative, got {dt}")
        if dt == 0:
            return

        adjusted = dt * self.config.time_multiplier
        max_step = self.config.max_time_step
        iterations = 1
        if adjusted > max_step:
            iterations = int(adjusted // max_step)
            self._residual_time += adjusted - iterations * max_step
        if self._residual_time > max_step:
            iterations += 1
            self._residual_time -= max_step
        substep = min(adjusted, max_step)

        for _ in range(iterations):
            self._update_forces()
            if self.bond_state is not BondState.BONDED:
                self._update_atom_motion(substep)
            self._check_capture()

        self._update_forces()
        self._update_bonding_progress(adjusted)
        self._step_bonded_oscillation(adjusted)
        self.time += adjusted

    def _update_forces(self) -> None:
        distance = max(self.separation(), self._min_interaction_distance())
        self.attractive_force = self.lj.attractive_force(distance)
        self.repulsive_force = self.lj.repulsive_force(distance)

    def _min_interaction_distance(self) -> float:
        return (self.fixed_atom.radius + self.movable_atom.radius) / 8.0

    def _unit_vector(self) -> np.ndarray:
        """Direction from the anchor to the free atom."""
        delta = self.movable_atom.position - self.fixed_atom.position
        distance = float(np.hypot(delta[0], delta[1]))
        if distance == 0.0:
            return np.array([1.0, 0.0])
        return delta / distance

    def _update_atom_motion(self, dt: float) -> None:
        """Semi-implicit Euler update of the free (and unpinned anchor) atom."""
        force = (self.repulsive_force - self.attractive_force) * self._unit_vector()
        damping = math.exp(-self.config.bonding_damping_rate * dt) if self.bond_state is BondState.BONDING else 1.0

        atoms = [(self.movable_atom, force)]
        if not self.pinned:
            atoms.append((self.fixed_atom, -force))

        for atom, atom_force in atoms:
            atom.velocity += atom_force / atom.mass * dt
            atom.velocity *= damping
            speed = float(np.hypot(atom.velocity[0], atom.velocity[1]))
            if speed > self.config.max_atom_velocity:
                atom.velocity *= self.config.max_atom_velocity / speed
            atom.position += atom.velocity * dt

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _transition(self, new_state: BondState) -> None:
        if new_state is not self.bond_state:
            logger.debug("Bond state %s -> %s", self.bond_state.value, new_state.value)
        self.bond_state = new_state
        self._settle_count = 0

    def _check_capture(self) -> None:
        """UNBONDED -> BONDING when the atoms are inside the band and bound."""
        if self.bond_state is not BondState.UNBONDED:
            return
        distance = self.separation()
        r_min = self.lj.minimum_force_distance()
        in_band = r_min < distance < self.config.capture_cutoff * self.lj.sigma
        if in_band and self.relative_kinetic_energy() < -self.lj.potential(distance):
            self._transition(BondState.BONDING)

    def _update_bonding_progress(self, dt: float) -> None:
        """Per-tick transitions: BONDING -> BONDED and ALLOWING_ESCAPE -> UNBONDED."""
        if self.bond_state is BondState.BONDING:
            if self.separation() >= self.config.capture_cutoff * self.lj.sigma:
                self._transition(BondState.UNBONDED)
                return
            r_min = self.lj.minimum_force_distance()
            near_minimum = abs(self.separation() - r_min) <= self.config.settle_distance_tolerance * r_min
            calm = self.relative_kinetic_energy() <= self.config.settle_energy_tolerance * self.lj.epsilon_for_calcs
            if near_minimum and calm:
                self._settle_count += 1
                if self._settle_count >= self.config.settle_step_count:
                    self._form_bond()
            else:
                self._settle_count = 0

        elif self.bond_state is BondState.ALLOWING_ESCAPE:
            self._escape_countdown -= dt
            escaped = self.separation() > self.config.escape_distance * self.lj.sigma
            if escaped or self._escape_countdown <= 0:
                self._transition(BondState.UNBONDED)

    def _form_bond(self) -> None:
        self.movable_atom.velocity[:] = 0.0
        self.fixed_atom.velocity[:] = 0.0
        r_min = self.lj.minimum_force_distance()
        self._bonded_outer_distance = r_min + self.config.bonded_oscillation_proportion * self.movable_atom.radius
        self._bonded_inner_distance = self.approximate_equivalent_potential_distance(self._bonded_outer_distance)
        self._oscillation_countdown = 0.0
        self._transition(BondState.BONDED)

    def _step_bonded_oscillation(self, dt: float) -> None:
        """Jump the bonded atom between the two equal-potential points."""
        if self.bond_state is not BondState.BONDED:
            return
        self._oscillation_countdown -= dt
        if self._oscillation_countdown > 0:
            return

        r_min = self.lj.minimum_force_distance()
        target = self._bonded_inner_distance if self.separation() > r_min else self._bonded_outer_distance
        direction = self._unit_vector()
        self.movable_atom.position[:] = self.fixed_atom.position + target * direction
        self._oscillation_countdown = self.config.bonded_oscillation_period
        self._update_forces()

    def approximate_equivalent_potential_distance(self, distance: float) -> float:
        """
        Distance on the other side of the well with the same potential.

        Uses bisection; the iteration count is capped.
        """
        r_min = self.lj.minimum_force_distance()
        target = self.lj.potential(distance)
        if distance > r_min:
            low, high = 0.8 * self.lj.sigma, r_min
            decreasing = True
        else:
            low, high = r_min, self.config.capture_cutoff * self.lj.sigma
            decreasing = False

        estimate = (low + high) / 2.0
        for _ in range(MAX_APPROXIMATION_ITERATIONS):
            estimate = (low + high) / 2.0
            value = self.lj.potential(estimate)
            if value == target:
                break
            # Inner wall: potential falls as distance grows; outer wall: it rises
            if (value > target) == decreasing:
                low = estimate
            else:
                high = estimate
        return estimate

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def separation(self) -> float:
        delta = self.movable_atom.position - self.fixed_atom.position
        return float(np.hypot(delta[0], delta[1]))

    def relative_kinetic_energy(self) -> float:
        """Kinetic energy of the relative motion (reduced mass when both atoms move)."""
        if self.pinned:
            return 0.5 * self.movable_atom.mass * float(np.sum(self.movable_atom.velocity ** 2))
        m1, m2 = self.fixed_atom.mass, self.movable_atom.mass
        reduced_mass = m1 * m2 / (m1 + m2)
        relative_velocity = self.movable_atom.velocity - self.fixed_atom.velocity
        return 0.5 * reduced_mass * float(np.sum(relative_velocity ** 2))

    def potential_energy(self) -> float:
        return self.lj.potential(max(self.separation(), self._min_interaction_distance()))

    @property
    def net_force(self) -> float:
        """Radial net force on the free atom; positive is repulsive."""
        return self.repulsive_force - self.attractive_force

    def forces(self) -> Tuple[float, float, float]:
        """(attractive, repulsive, net) force magnitudes for display."""
        return self.attractive_force, self.repulsive_force, self.net_force

    def movable_atom_position(self) -> np.ndarray:
        return self.movable_atom.position.copy()

    def fixed_atom_position(self) -> np.ndarray:
        return self.fixed_atom.position.copy()
