#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Engine Configuration
================================================================================

Project:        States of Matter Engine
Module:         config.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Configuration objects owned by the orchestrators and handed down to the
collaborators that need them. Nothing in here is global; every model builds
its own copy.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ThermostatConfig:
    """
    Damping constants for the stochastic (Andersen) thermostat.

    The near-zero values are empirically tuned and only used once the
    target temperature drops to the substance's minimum model temperature.
    """
    gamma_x: float = 0.9999
    gamma_y: float = 0.9999
    near_zero_gamma_x: float = 0.992
    near_zero_gamma_y: float = 0.999

    # Drift compensation applied to the x velocity component
    proportional_compensation: float = 0.25
    integral_compensation: float = 0.5

    # Measured/set-point gap above which the isokinetic thermostat takes over
    temperature_closeness_range: float = 0.15

    def __post_init__(self):
        for name in ("gamma_x", "gamma_y", "near_zero_gamma_x", "near_zero_gamma_y"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must lie in (0, 1], got {value}")
        if self.temperature_closeness_range <= 0:
            raise ValueError("temperature_closeness_range must be positive")


@dataclass
class ContainerConfig:
    """Container geometry (picometers) and pressure smoothing."""
    width: float = 10000.0
    initial_height: float = 10000.0

    # Height change allowed per unit of model time, in picometers
    max_height_change_rate: float = 1500.0

    # Length of the circular buffer used to smooth wall impacts
    pressure_sample_count: int = 50
    pressure_to_atmospheres: float = 5.0

    def __post_init__(self):
        if self.width <= 0 or self.initial_height <= 0:
            raise ValueError("Container dimensions must be positive")
        if self.max_height_change_rate <= 0:
            raise ValueError("max_height_change_rate must be positive")
        if self.pressure_sample_count < 1:
            raise ValueError("pressure_sample_count must be at least 1")


@dataclass
class ModelConfig:
    """Configuration for the many-particle model."""
    # Seed shared by the thermostat and the phase placement
    seed: Optional[int] = None

    # Gravity (normalized units), boosted at low temperatures
    gravitational_acceleration: float = 0.045
    low_temperature_gravity_threshold: float = 0.10
    low_temperature_gravity_increase_rate: float = 50.0

    # Time integration
    particle_speed_up_factor: float = 4.0
    max_particle_motion_time_step: float = 0.025

    # Heating and cooling
    temperature_change_rate: float = 0.07

    thermostat: ThermostatConfig = field(default_factory=ThermostatConfig)
    container: ContainerConfig = field(default_factory=ContainerConfig)

    def __post_init__(self):
        if self.particle_speed_up_factor <= 0:
            raise ValueError("particle_speed_up_factor must be positive")
        if self.max_particle_motion_time_step <= 0:
            raise ValueError("max_particle_motion_time_step must be positive")


@dataclass
class BondingConfig:
    """
    Configuration for the two-particle model.

    Distances are in picometers, times in seconds and energies in the
    units produced by epsilon (Kelvin) times Boltzmann's constant.
    """
    time_multiplier: float = 2.0
    max_time_step: float = 0.005

    # Capture band upper edge, in multiples of sigma
    capture_cutoff: float = 2.5

    # Velocity damping applied while a bond forms, per second
    bonding_damping_rate: float = 1.5

    # Settling criteria for BONDING -> BONDED
    settle_distance_tolerance: float = 0.02
    settle_energy_tolerance: float = 0.01
    settle_step_count: int = 20

    # ALLOWING_ESCAPE ends beyond this separation (multiples of sigma)
    # or once the cooldown runs out
    escape_distance: float = 3.0
    escape_cooldown: float = 1.0

    bonded_oscillation_proportion: float = 0.06
    bonded_oscillation_period: float = 4.0 / 60.0
    max_atom_velocity: float = 10000.0

    def __post_init__(self):
        if self.max_time_step <= 0 or self.time_multiplier <= 0:
            raise ValueError("Time step settings must be positive")
        if self.settle_step_count < 1:
            raise ValueError("settle_step_count must be at least 1")
        if self.escape_distance <= self.capture_cutoff:
            raise ValueError("escape_distance must exceed capture_cutoff")
