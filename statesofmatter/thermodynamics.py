#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Thermodynamics: Thermostats, Phases and Unit Conversion
================================================================================

Project:        States of Matter Engine
Module:         thermodynamics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

This module handles temperature control and the thermodynamic bookkeeping
of the many-particle model, including:
- Phase presets and mapping a set point back to a phase
- The stochastic Andersen thermostat and the isokinetic thermostat
- A fixed-size moving average used to smooth noisy measurements
- Conversion of model temperature and pressure to real-world units
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np

from .config import ThermostatConfig
from .dataset import MoleculeDataSet
from .substances import SubstanceDescriptor

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Phases of matter the container can be set to."""
    SOLID = "solid"
    LIQUID = "liquid"
    GAS = "gas"


# Temperature presets in model units
SOLID_TEMPERATURE = 0.15
LIQUID_TEMPERATURE = 0.34
GAS_TEMPERATURE = 1.0
INITIAL_TEMPERATURE = SOLID_TEMPERATURE

MIN_TEMPERATURE = 0.00001
MAX_TEMPERATURE = 50.0

PHASE_TEMPERATURES = {
    Phase.SOLID: SOLID_TEMPERATURE,
    Phase.LIQUID: LIQUID_TEMPERATURE,
    Phase.GAS: GAS_TEMPERATURE,
}


def map_temperature_to_phase(temperature: float) -> Phase:
    """Phase whose preset is closest to the given set point."""
    if temperature < SOLID_TEMPERATURE + (LIQUID_TEMPERATURE - SOLID_TEMPERATURE) / 2:
        return Phase.SOLID
    if temperature < LIQUID_TEMPERATURE + (GAS_TEMPERATURE - LIQUID_TEMPERATURE) / 2:
        return Phase.LIQUID
    return Phase.GAS


def convert_to_kelvin(temperature: float, descriptor: SubstanceDescriptor) -> float:
    """
    Convert a model temperature to Kelvin for the given substance.

    The mapping is piecewise linear, anchored on the substance's triple
    and critical points. Anything at or below the minimum model
    temperature reads as absolute zero; above it the value never reads
    below 0.5 K.
    """
    triple_k = descriptor.triple_point_kelvin
    critical_k = descriptor.critical_point_kelvin
    triple_model = descriptor.triple_point_model
    critical_model = descriptor.critical_point_model

    if temperature <= descriptor.min_model_temperature:
        return 0.0
    if temperature < triple_model:
        return max(temperature * triple_k / triple_model, 0.5)
    if temperature < critical_model:
        slope = (critical_k - triple_k) / (critical_model - triple_model)
        offset = triple_k - slope * triple_model
        return temperature * slope + offset
    return temperature * critical_k / critical_model


class MovingAverage:
    """
    Average of the most recent `size` values, kept in a circular buffer.

    The buffer starts filled with `initial_value`, so the average is
    defined from the first sample on.
    """

    def __init__(self, size: int, initial_value: float = 0.0):
        if size < 1:
            raise ValueError(f"Moving average size must be at least 1, got {size}")
        self.size = size
        self.initial_value = initial_value
        self._buffer = np.empty(size)
        self.reset()

    def add_value(self, value: float) -> float:
        replaced = self._buffer[self._index]
        self._buffer[self._index] = value
        self._index = (self._index + 1) % self.size
        self._total += value - replaced
        self.average = self._total / self.size
        return self.average

    def reset(self) -> None:
        self._buffer.fill(self.initial_value)
        self._total = self.initial_value * self.size
        self.average = self.initial_value
        self._index = 0


class AndersenThermostat:
    """
    Stochastic thermostat that nudges velocities toward a target temperature.

    Each step every velocity component is damped by γ and receives a
    Gaussian kick of standard deviation sqrt(T/m · (1 - γ²)); rotation
    rates are treated the same way with the rotational inertia. Once the
    target falls to the minimum model temperature the target is treated
    as zero and the stronger, axis-asymmetric near-zero damping is used,
    so the molecules settle without being clamped to rest.

    A proportional/integral correction on the x component keeps the
    ensemble from drifting sideways.
    """

    def __init__(
        self,
        data: MoleculeDataSet,
        min_model_temperature: float,
        rng: np.random.Generator,
        config: Optional[ThermostatConfig] = None
    ):
        self.data = data
        self.min_model_temperature = min_model_temperature
        self.rng = rng
        self.config = config or ThermostatConfig()
        self.target_temperature = INITIAL_TEMPERATURE

        self._previous_total_velocity_change = np.zeros(2)
        self._accumulated_average_velocity_change = np.zeros(2)

    def set_target_temperature(self, temperature: float) -> None:
        self.target_temperature = temperature

    def clear_accumulated_bias(self) -> None:
        self._previous_total_velocity_change[:] = 0.0
        self._accumulated_average_velocity_change[:] = 0.0

    def damping_factors(self):
        """Return (gamma_x, gamma_y, temperature) for the current target."""
        cfg = self.config
        if self.target_temperature > self.min_model_temperature:
            return cfg.gamma_x, cfg.gamma_y, self.target_temperature
        return cfg.near_zero_gamma_x, cfg.near_zero_gamma_y, 0.0

    def step(self) -> None:
        """Apply one thermostat adjustment to every molecule."""
        data = self.data
        n = data.number_of_molecules
        gamma_x, gamma_y, temperature = self.damping_factors()

        mass_inverse = 1.0 / data.molecule_mass
        sigma_x = np.sqrt(temperature * mass_inverse * (1.0 - gamma_x ** 2))
        sigma_y = np.sqrt(temperature * mass_inverse * (1.0 - gamma_y ** 2))

        x_compensation = (-self._previous_total_velocity_change[0] / n * self.config.proportional_compensation
                          - self._accumulated_average_velocity_change[0] * self.config.integral_compensation)

        velocities = data.velocities
        previous = velocities.copy()
        noise = self.rng.standard_normal((n, 2))
        velocities[:, 0] = velocities[:, 0] * gamma_x + noise[:, 0] * sigma_x + x_compensation
        velocities[:, 1] = velocities[:, 1] * gamma_y + noise[:, 1] * sigma_y

        if data.atoms_per_molecule > 1:
            sigma_rotation = np.sqrt(temperature / data.rotational_inertia * (1.0 - gamma_x ** 2))
            data.rotation_rates[:] = (gamma_x * data.rotation_rates
                                      + self.rng.standard_normal(n) * sigma_rotation)

        total_change = np.sum(velocities - previous, axis=0)
        self._accumulated_average_velocity_change += total_change / n
        self._previous_total_velocity_change[:] = total_change


class IsokineticThermostat:
    """
    Deterministic thermostat that rescales all motion to hit the target.

    Velocities and rotation rates are multiplied by sqrt(T_target / T_measured),
    or by zero once the target is at or below the minimum model temperature.
    """

    def __init__(self, data: MoleculeDataSet, min_model_temperature: float):
        self.data = data
        self.min_model_temperature = min_model_temperature
        self.target_temperature = INITIAL_TEMPERATURE

    def set_target_temperature(self, temperature: float) -> None:
        self.target_temperature = temperature

    def measure_temperature(self) -> float:
        data = self.data
        n = data.number_of_molecules
        translational = 0.5 * data.molecule_mass * float(np.sum(data.velocities ** 2))
        if data.atoms_per_molecule == 1:
            return translational / n
        rotational = 0.5 * data.rotational_inertia * float(np.sum(data.rotation_rates ** 2))
        return (translational + rotational) / n / 1.5

    def step(self, measured_temperature: Optional[float] = None) -> None:
        """Rescale the motion, measuring the temperature if none is given."""
        if measured_temperature is None:
            measured_temperature = self.measure_temperature()

        if self.target_temperature <= self.min_model_temperature:
            scale = 0.0
        elif measured_temperature <= 0.0:
            # Nothing is moving, so there is nothing to rescale
            return
        else:
            scale = np.sqrt(self.target_temperature / measured_temperature)

        self.data.velocities *= scale
        self.data.rotation_rates *= scale
