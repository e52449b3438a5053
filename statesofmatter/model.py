#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Many-Particle Model Orchestrator
================================================================================

Project:        States of Matter Engine
Module:         model.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 5, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

The MultipleParticleModel owns the molecule data set, the container, the
integrator, the phase state changer and both thermostats. It exposes one
mutating entry point, step(dt), driven by an external clock, plus commands
that are applied between steps and read-only views that return copies.

Each step:
1. Move the container lid toward its target height
2. Heat or cool the temperature set point
3. Advance the molecules in substeps, feeding wall forces to the container
4. Close out the pressure sample
5. Run the thermostat chosen for the current conditions
"""

import logging
import math
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .config import ModelConfig
from .container import Container
from .dataset import MoleculeDataSet
from .phase import PhaseStateChanger, PlacementResult
from .simulation import ForceAndMotionCalculator, StepResult
from .substances import (
    AtomProperties,
    SubstanceDescriptor,
    SubstanceType,
    clamp_adjustable_epsilon,
    get_substance_descriptor,
    scaled_epsilon_for,
)
from .thermodynamics import (
    LIQUID_TEMPERATURE,
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    PHASE_TEMPERATURES,
    SOLID_TEMPERATURE,
    AndersenThermostat,
    IsokineticThermostat,
    MovingAverage,
    Phase,
    convert_to_kelvin,
    map_temperature_to_phase,
)

logger = logging.getLogger(__name__)


# Molecules closer than this to the lid are pushed by it
LID_INTERACTION_DISTANCE = 2.5

# Cooling slows down below this fraction of the solid temperature
LOW_TEMPERATURE_COOLING_FRACTION = 0.85
LOW_TEMPERATURE_COOLING_EXPONENT = 1.35

UPWARD_MOTION_DAMPING = 0.9

TEMPERATURE_DIFFERENCE_SAMPLES = 10


class ThermostatType(Enum):
    """Thermostat that ran during the most recent step."""
    NONE = "none"
    ISOKINETIC = "isokinetic"
    ANDERSEN = "andersen"


class MultipleParticleModel:
    """
    Many-molecule simulation of a single substance in a resizable container.

    Args:
        config: Model configuration; defaults are used when omitted
        substance: Initial substance
        number_of_molecules: Molecule count, or None for the substance default

    Raises:
        ValueError: If the initial molecules cannot be placed in the container
    """

    def __init__(
        self,
        config: Optional[ModelConfig] = None,
        substance: SubstanceType = SubstanceType.NEON,
        number_of_molecules: Optional[int] = None
    ):
        self.config = config or ModelConfig()
        self.rng = np.random.default_rng(self.config.seed)

        self.container = Container(self.config.container)
        self.calculator = ForceAndMotionCalculator(self.config)
        self.phase_changer = PhaseStateChanger(self.rng)

        self.data: Optional[MoleculeDataSet] = None
        self.andersen: Optional[AndersenThermostat] = None
        self.isokinetic: Optional[IsokineticThermostat] = None
        self.current_thermostat = ThermostatType.NONE

        self.temperature_set_point = SOLID_TEMPERATURE
        self.heating_cooling_amount = 0.0
        self.adjustable_epsilon: Optional[float] = None
        self.time = 0.0

        self._residual_time = 0.0
        self._average_temperature_difference = MovingAverage(TEMPERATURE_DIFFERENCE_SAMPLES)

        result = self.set_substance(substance, number_of_molecules)
        if not result:
            raise ValueError(result.message)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_substance(
        self,
        substance: SubstanceType,
        number_of_molecules: Optional[int] = None
    ) -> PlacementResult:
        """
        Rebuild the data set for a substance and start it as a solid.

        On a placement failure the previous substance is kept and the
        failure is returned.
        """
        descriptor = get_substance_descriptor(substance)
        if number_of_molecules is None:
            number_of_molecules = descriptor.default_molecule_count

        data = MoleculeDataSet(descriptor, number_of_molecules)
        data.temperature_set_point = SOLID_TEMPERATURE
        if substance is SubstanceType.ADJUSTABLE_ATOM:
            data.scaled_epsilon = scaled_epsilon_for(self.adjustable_epsilon)

        width = self.container.width / descriptor.particle_diameter
        height = self.container.initial_height / descriptor.particle_diameter
        result = self.phase_changer.set_phase(data, Phase.SOLID, width, height)
        if not result:
            logger.warning("Keeping previous substance; %s", result.message)
            return result

        self.data = data
        self.container.reset(descriptor.particle_diameter, data.number_of_molecules)
        self.andersen = AndersenThermostat(data, descriptor.min_model_temperature, self.rng,
                                           self.config.thermostat)
        self.isokinetic = IsokineticThermostat(data, descriptor.min_model_temperature)
        self.current_thermostat = ThermostatType.NONE
        self._residual_time = 0.0
        self._average_temperature_difference.reset()
        self.heating_cooling_amount = 0.0
        self._set_temperature(SOLID_TEMPERATURE)

        self.calculator.initialize_forces(data, self.container.normalized_width,
                                          self.container.normalized_height)
        logger.info("Substance set to %s with %d molecules", substance.value, data.number_of_molecules)
        return result

    def set_phase(self, phase: Phase) -> PlacementResult:
        """
        Jump to a phase: set its preset temperature and rearrange the molecules.

        If the molecules cannot be placed, the previous temperature and
        positions are kept and the failure is returned.
        """
        if not isinstance(phase, Phase):
            raise ValueError(f"Unknown phase: {phase!r}")

        previous_temperature = self.temperature_set_point
        self._set_temperature(PHASE_TEMPERATURES[phase])
        result = self.phase_changer.set_phase(self.data, phase, self.container.normalized_width,
                                              self.container.normalized_height)
        if not result:
            self._set_temperature(previous_temperature)
            return result

        self.calculator.initialize_forces(self.data, self.container.normalized_width,
                                          self.container.normalized_height)
        return result

    def set_target_temperature(self, temperature: float) -> float:
        """Set the temperature set point, clamped to the model range."""
        if not math.isfinite(temperature):
            raise ValueError(f"Temperature must be finite, got {temperature}")
        clamped = min(max(temperature, MIN_TEMPERATURE), MAX_TEMPERATURE)
        self._set_temperature(clamped)
        return clamped

    def _set_temperature(self, temperature: float) -> None:
        self.temperature_set_point = temperature
        self.data.temperature_set_point = temperature
        self.andersen.set_target_temperature(temperature)
        self.isokinetic.set_target_temperature(temperature)

    def set_heating_cooling_amount(self, amount: float) -> float:
        """Heat (positive) or cool (negative); clamped to [-1, 1]."""
        if not math.isfinite(amount):
            raise ValueError(f"Heating/cooling amount must be finite, got {amount}")
        self.heating_cooling_amount = float(min(max(amount, -1.0), 1.0))
        return self.heating_cooling_amount

    def resize_container(self, target_height: float) -> float:
        """Request a new container height in picometers; returns the clamped target."""
        return self.container.resize_to(target_height)

    def set_epsilon(self, epsilon: float) -> Optional[float]:
        """
        Set the interaction strength (K) of the adjustable substance.

        Ignored, with a warning, for every other substance.
        """
        if self.substance is not SubstanceType.ADJUSTABLE_ATOM:
            logger.warning("Epsilon can only be adjusted for %s", SubstanceType.ADJUSTABLE_ATOM.value)
            return None
        self.adjustable_epsilon = clamp_adjustable_epsilon(epsilon)
        self.data.scaled_epsilon = scaled_epsilon_for(self.adjustable_epsilon)
        return self.adjustable_epsilon

    def reset(self) -> PlacementResult:
        """Return to neon in its default configuration."""
        self.adjustable_epsilon = None
        self.time = 0.0
        return self.set_substance(SubstanceType.NEON)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, dt: float) -> Optional[StepResult]:
        """
        Advance the simulation by one clock tick.

        Raises:
            ValueError: If dt is negative or not finite
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"Time step must be finite and non-negative, got {dt}")
        if dt == 0:
            return None

        self.container.step(dt)

        if self.heating_cooling_amount != 0:
            self._update_set_point(dt)

        result = self._move_particles(dt)
        self.data.measured_pressure = self.container.record_pressure_sample()
        self._run_thermostat()

        self.time += dt
        return result

    def _update_set_point(self, dt: float) -> None:
        """Move the set point by the heating/cooling amount."""
        current = self.temperature_set_point
        change = self.heating_cooling_amount * self.config.temperature_change_rate * dt

        cooling_threshold = LOW_TEMPERATURE_COOLING_FRACTION * SOLID_TEMPERATURE
        if self.heating_cooling_amount < 0 and current < cooling_threshold:
            change *= (current / cooling_threshold) ** LOW_TEMPERATURE_COOLING_EXPONENT

        new_temperature = min(max(current + change, MIN_TEMPERATURE), MAX_TEMPERATURE)
        if (self.heating_cooling_amount < 0 and new_temperature > MIN_TEMPERATURE
                and self.temperature_in_kelvin() == 0):
            new_temperature = MIN_TEMPERATURE
        self._set_temperature(new_temperature)

        if self.heating_cooling_amount > 0 and current < LIQUID_TEMPERATURE:
            self._damp_upward_motion(dt)

    def _damp_upward_motion(self, dt: float) -> None:
        vy = self.data.velocities[:, 1]
        vy[vy > 0] *= 1.0 - UPWARD_MOTION_DAMPING * dt

    def _move_particles(self, dt: float) -> StepResult:
        """Integrate in substeps no longer than the maximum motion time step."""
        advancement = dt * self.config.particle_speed_up_factor
        max_step = self.config.max_particle_motion_time_step

        iterations = 1
        if advancement > max_step:
            iterations = int(advancement // max_step)
            self._residual_time += advancement - iterations * max_step
        if self._residual_time > max_step:
            iterations += 1
            self._residual_time -= max_step
        substep = min(advancement, max_step)

        width = self.container.normalized_width
        height = self.container.normalized_height
        result = self.calculator.last_result
        for _ in range(iterations):
            result = self.calculator.step(self.data, width, height, substep)
            self.container.on_wall_impact(result.pressure_zone_wall_force)
        return result

    def _lid_is_interacting(self) -> bool:
        top = self.container.normalized_height - LID_INTERACTION_DISTANCE
        return bool(np.any(self.data.center_of_mass_positions[:, 1] > top))

    def _run_thermostat(self) -> None:
        """
        Choose and run a thermostat.

        While the lid is pushing molecules, no thermostat runs and the set
        point follows the measured temperature instead. Far from the set
        point, or outside the liquid/solid band, the isokinetic thermostat
        pulls the temperature in directly; otherwise the Andersen thermostat
        keeps it there with realistic fluctuations.
        """
        measured = self.data.measured_temperature
        set_point = self.temperature_set_point
        height_change = self.container.height_change_this_step
        amount = self.heating_cooling_amount

        if height_change != 0 and self._lid_is_interacting():
            if (height_change > 0 and measured < set_point) or (height_change < 0 and measured > set_point):
                new_temperature = measured + self._average_temperature_difference.average
                self._set_temperature(min(max(new_temperature, MIN_TEMPERATURE), MAX_TEMPERATURE))
            self.current_thermostat = ThermostatType.NONE
            return

        adjustment_needed = (
            abs(measured - set_point) > self.config.thermostat.temperature_closeness_range
            or (amount > 0 and measured < set_point)
            or (amount < 0 and measured > set_point)
        )

        if adjustment_needed or set_point > LIQUID_TEMPERATURE or set_point < SOLID_TEMPERATURE / 5:
            self.isokinetic.step(measured)
            self.current_thermostat = ThermostatType.ISOKINETIC
        else:
            if self.current_thermostat is not ThermostatType.ANDERSEN:
                self.andersen.clear_accumulated_bias()
            self.andersen.step()
            self.current_thermostat = ThermostatType.ANDERSEN

        if not adjustment_needed:
            self._average_temperature_difference.add_value(set_point - measured)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def substance(self) -> SubstanceType:
        return self.data.descriptor.substance

    @property
    def substance_descriptor(self) -> SubstanceDescriptor:
        return self.data.descriptor

    @property
    def number_of_molecules(self) -> int:
        return self.data.number_of_molecules

    @property
    def number_of_atoms(self) -> int:
        return self.data.number_of_atoms

    def atom_positions(self) -> np.ndarray:
        """Copy of the atom positions in normalized units."""
        return self.data.atom_positions_snapshot()

    def atom_positions_in_picometers(self) -> np.ndarray:
        return self.data.atom_positions_snapshot() * self.data.descriptor.particle_diameter

    def molecule_positions(self) -> np.ndarray:
        return self.data.molecule_positions_snapshot()

    def atom_properties(self) -> Tuple[AtomProperties, ...]:
        """Radius, mass and color for each atom within one molecule."""
        return self.data.descriptor.atom_properties()

    def measured_temperature(self) -> float:
        return self.data.measured_temperature

    def measured_pressure(self) -> float:
        return self.container.measured_pressure()

    def pressure_in_atmospheres(self) -> float:
        return self.container.pressure_in_atmospheres()

    def temperature_in_kelvin(self) -> float:
        return convert_to_kelvin(self.temperature_set_point, self.data.descriptor)

    def current_phase(self) -> Phase:
        return map_temperature_to_phase(self.temperature_set_point)

    def container_height(self) -> float:
        """Current container height in picometers."""
        return self.container.current_height()

    def normalized_container_dimensions(self) -> Tuple[float, float]:
        return self.container.normalized_width, self.container.normalized_height

    def total_energy(self) -> float:
        """Kinetic plus potential energy from the last integration step."""
        return self.calculator.last_result.total_energy

    def __repr__(self) -> str:
        return (f"MultipleParticleModel(substance={self.substance.value}, "
                f"molecules={self.number_of_molecules}, set_point={self.temperature_set_point:.4f})")
