#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Container Controller
================================================================================

Project:        States of Matter Engine
Module:         container.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 3, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

The container holding the molecules. Dimensions are stored in picometers
and exposed in normalized units (particle diameters) for the engine.

Height changes are rate limited: a resize request only sets a target and
the height moves toward it a bounded amount per step, which keeps the
integrator stable. Wall impacts collected during a step are turned into a
pressure sample and smoothed with a moving average.
"""

import logging
import math
from typing import Optional

from .config import ContainerConfig
from .thermodynamics import MovingAverage

logger = logging.getLogger(__name__)


class Container:
    """Resizable, pressure-measuring particle container."""

    def __init__(self, config: Optional[ContainerConfig] = None, particle_diameter: float = 1.0):
        self.config = config or ContainerConfig()
        self.width = self.config.width
        self.initial_height = self.config.initial_height
        self.height = self.initial_height
        self.target_height = self.initial_height
        self.minimum_height = 0.0
        self.particle_diameter = particle_diameter
        self.height_change_this_step = 0.0

        self._pressure_average = MovingAverage(self.config.pressure_sample_count)
        self._impulse_total = 0.0
        self._impulse_count = 0

    @property
    def normalized_width(self) -> float:
        return self.width / self.particle_diameter

    @property
    def normalized_height(self) -> float:
        return self.height / self.particle_diameter

    @property
    def normalized_perimeter(self) -> float:
        return 2.0 * (self.normalized_width + self.normalized_height)

    def reset(self, particle_diameter: Optional[float] = None, number_of_molecules: int = 0) -> None:
        """Restore the initial height and clear the pressure history."""
        if particle_diameter is not None:
            self.particle_diameter = particle_diameter
        self.height = self.initial_height
        self.target_height = self.initial_height
        self.height_change_this_step = 0.0
        self.minimum_height = self.minimum_allowable_height(number_of_molecules)
        self._pressure_average.reset()
        self._impulse_total = 0.0
        self._impulse_count = 0

    def minimum_allowable_height(self, number_of_molecules: int) -> float:
        """Lowest height that still leaves one row of space per molecule layer."""
        return number_of_molecules / self.normalized_width * self.particle_diameter

    def resize_to(self, target_height: float) -> float:
        """
        Request a new height (picometers).

        The target is clamped to [minimum_height, initial_height]; the
        actual height follows over subsequent calls to step().

        Returns:
            The clamped target height
        """
        if not math.isfinite(target_height):
            raise ValueError(f"Container height must be finite, got {target_height}")
        clamped = min(max(target_height, self.minimum_height), self.initial_height)
        if clamped != target_height:
            logger.debug("Container target %.1f pm clamped to %.1f pm", target_height, clamped)
        self.target_height = clamped
        return clamped

    def current_height(self) -> float:
        return self.height

    def step(self, dt: float) -> float:
        """
        Move the height toward the target by at most rate * dt.

        Returns:
            Height change applied this step (picometers)
        """
        difference = self.target_height - self.height
        max_change = self.config.max_height_change_rate * dt
        if abs(difference) <= max_change:
            change = difference
        else:
            change = math.copysign(max_change, difference)

        self.height += change
        self.height_change_this_step = change
        return change

    def on_wall_impact(self, impulse: float) -> None:
        """Accumulate the force exerted on the pressure-sensing walls."""
        self._impulse_total += impulse
        self._impulse_count += 1

    def record_pressure_sample(self) -> float:
        """
        Close out a step's wall impacts as one pressure sample.

        The mean impact is normalized by the container perimeter before
        being added to the moving average.
        """
        if self._impulse_count > 0:
            sample = self._impulse_total / self._impulse_count / self.normalized_perimeter
            self._pressure_average.add_value(sample)
        self._impulse_total = 0.0
        self._impulse_count = 0
        return self._pressure_average.average

    def measured_pressure(self) -> float:
        """Smoothed pressure in model units."""
        return self._pressure_average.average

    def pressure_in_atmospheres(self) -> float:
        return self.config.pressure_to_atmospheres * self.measured_pressure()
