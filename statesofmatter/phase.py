#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Phase State Changer
================================================================================

Project:        States of Matter Engine
Module:         phase.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 4, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Discrete placement of molecules into a solid, liquid or gas arrangement.
Nothing is evolved through the transition: positions are rebuilt from
scratch and velocities are redrawn to match the current set point.

- SOLID:  a lattice resting on the container floor, with a small jitter
- LIQUID: concentric rings around a point in the lower part of the
          container, with a larger jitter
- GAS:    random candidates accepted only when far enough from every
          placed molecule, falling back to a grid scan of the container

Every arrangement keeps molecule centers at least the substance's minimum
separation apart (1.2 particle diameters for single atoms, 1.5 otherwise).
Placement is computed into scratch arrays and only committed on success;
a failed placement leaves the data set untouched and is reported to the
caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .dataset import MoleculeDataSet
from .thermodynamics import Phase

logger = logging.getLogger(__name__)


MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE = 1.5
MAX_PLACEMENT_ATTEMPTS = 500

# Maximum displacement of a molecule from its ideal site
SOLID_JITTER = 0.02
LIQUID_JITTER = 0.1


@dataclass
class PlacementResult:
    """Outcome of a phase change."""
    success: bool
    placed: int
    message: str = ""

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class Lattice:
    """Row-based lattice: sites `spacing` apart, odd rows shifted by `row_offset`."""
    spacing: float
    row_height: float
    row_offset: float


def _hexagonal(spacing: float) -> Lattice:
    return Lattice(spacing=spacing, row_height=spacing * np.sqrt(3.0) / 2.0, row_offset=spacing / 2.0)


# Keyed by atoms per molecule
SOLID_LATTICES = {
    1: _hexagonal(1.2 + 2 * SOLID_JITTER),
    2: Lattice(spacing=2.0, row_height=1.6, row_offset=1.0),
    3: _hexagonal(1.6 + 2 * SOLID_JITTER),
}


class PhaseStateChanger:
    """
    Places the molecules of a data set according to a phase.

    Args:
        rng: Random source for jitter, gas candidates, orientations and velocities
        wall_distance: Clearance kept between molecule centers and the walls
    """

    def __init__(self, rng: np.random.Generator, wall_distance: float = MIN_INITIAL_PARTICLE_TO_WALL_DISTANCE):
        self.rng = rng
        self.wall_distance = wall_distance

    def set_phase(
        self,
        data: MoleculeDataSet,
        phase: Phase,
        container_width: float,
        container_height: float
    ) -> PlacementResult:
        """
        Rearrange the molecules of `data` into the given phase.

        Args:
            data: Data set to rearrange
            phase: Target phase
            container_width: Normalized container width
            container_height: Normalized container height

        Returns:
            PlacementResult; on failure the data set is left unchanged
        """
        if not isinstance(phase, Phase):
            raise ValueError(f"Unknown phase: {phase!r}")

        n = data.number_of_molecules
        min_separation = data.descriptor.minimum_separation

        if phase is Phase.SOLID:
            lattice = SOLID_LATTICES[data.atoms_per_molecule]
            positions, placed = self._place_on_lattice(n, container_width, container_height, lattice)
        elif phase is Phase.LIQUID:
            positions, placed = self._place_in_rings(n, container_width, container_height, min_separation)
        else:
            positions, placed = self._place_randomly(n, container_width, container_height, min_separation)

        if positions is None:
            message = (f"Could only place {placed} of {n} molecules for {phase.value}; "
                       f"reduce the molecule count or enlarge the container")
            logger.warning(message)
            return PlacementResult(success=False, placed=placed, message=message)

        data.center_of_mass_positions[:] = positions
        data.rotation_angles[:] = self._orientations(data, phase)
        self._initialize_velocities(data)
        data.clear_forces()
        data.update_atom_positions()

        logger.info("Placed %d %s molecules as %s", n, data.descriptor.substance.value, phase.value)
        return PlacementResult(success=True, placed=n)

    def _jitter(self, count: int, max_displacement: float) -> np.ndarray:
        """Random offsets strictly shorter than max_displacement."""
        radius = max_displacement * np.sqrt(self.rng.random(count))
        angle = self.rng.uniform(0.0, 2.0 * np.pi, count)
        return np.column_stack((radius * np.cos(angle), radius * np.sin(angle)))

    def _place_on_lattice(
        self,
        n: int,
        width: float,
        height: float,
        lattice: Lattice
    ) -> Tuple[Optional[np.ndarray], int]:
        """Roughly square crystal centered horizontally on the floor."""
        margin = self.wall_distance
        usable_width = width - 2.0 * margin - lattice.row_offset
        if usable_width < 0:
            return None, 0

        max_columns = int(np.floor(usable_width / lattice.spacing)) + 1
        columns = max(1, min(max_columns, int(np.ceil(np.sqrt(n)))))
        rows = int(np.ceil(n / columns))

        rows_that_fit = int(np.floor((height - 2.0 * margin) / lattice.row_height)) + 1
        if height - 2.0 * margin < 0 or rows > rows_that_fit:
            return None, min(n, max(rows_that_fit, 0) * columns)

        crystal_width = (columns - 1) * lattice.spacing + lattice.row_offset
        x0 = (width - crystal_width) / 2.0
        y0 = margin

        index = np.arange(n)
        row = index // columns
        column = index % columns
        positions = np.empty((n, 2))
        positions[:, 0] = x0 + column * lattice.spacing + np.where(row % 2 == 1, lattice.row_offset, 0.0)
        positions[:, 1] = y0 + row * lattice.row_height
        positions += self._jitter(n, SOLID_JITTER)
        return positions, n

    def _inside(self, point: np.ndarray, width: float, height: float) -> bool:
        margin = self.wall_distance
        return (margin <= point[0] <= width - margin) and (margin <= point[1] <= height - margin)

    def _place_in_rings(
        self,
        n: int,
        width: float,
        height: float,
        min_separation: float
    ) -> Tuple[Optional[np.ndarray], int]:
        """
        Concentric rings around (W/2, H/4).

        Ring k has radius k * s, where s is the minimum separation plus twice
        the jitter, and holds as many sites as fit with chords of at least s.
        Sites outside the walls are skipped; if the rings run out, the rest
        is filled by grid scan.
        """
        margin = self.wall_distance
        spacing = min_separation + 2.0 * LIQUID_JITTER
        center = np.array([width / 2.0, max(height / 4.0, margin)])
        max_radius = np.hypot(width, height)

        sites = []
        if self._inside(center, width, height):
            sites.append(center)

        ring = 1
        while len(sites) < n and ring * spacing <= max_radius:
            radius = ring * spacing
            count = int(np.floor(np.pi / np.arcsin(min(1.0, spacing / (2.0 * radius))) + 1e-9))
            start = self.rng.uniform(0.0, 2.0 * np.pi)
            for m in range(count):
                angle = start + 2.0 * np.pi * m / count
                site = center + radius * np.array([np.cos(angle), np.sin(angle)])
                if self._inside(site, width, height):
                    sites.append(site)
                    if len(sites) == n:
                        break
            ring += 1

        positions = np.empty((n, 2))
        placed = len(sites)
        if placed:
            positions[:placed] = np.array(sites) + self._jitter(placed, LIQUID_JITTER)

        for i in range(placed, n):
            location = self.find_open_location(positions[:i], width, height, min_separation)
            if location is None:
                return None, i
            positions[i] = location
        return positions, n

    def _is_open(self, placed: np.ndarray, candidate: np.ndarray, min_separation: float) -> bool:
        if len(placed) == 0:
            return True
        distances_squared = np.sum((placed - candidate) ** 2, axis=1)
        return bool(np.min(distances_squared) >= min_separation ** 2)

    def _place_randomly(
        self,
        n: int,
        width: float,
        height: float,
        min_separation: float
    ) -> Tuple[Optional[np.ndarray], int]:
        """Random candidates, MAX_PLACEMENT_ATTEMPTS per molecule, then a grid scan."""
        margin = self.wall_distance
        if width - 2.0 * margin < 0 or height - 2.0 * margin < 0:
            return None, 0

        low = np.array([margin, margin])
        high = np.array([width - margin, height - margin])
        positions = np.empty((n, 2))

        for i in range(n):
            placed = positions[:i]
            for _ in range(MAX_PLACEMENT_ATTEMPTS):
                candidate = self.rng.uniform(low, high)
                if self._is_open(placed, candidate, min_separation):
                    positions[i] = candidate
                    break
            else:
                location = self.find_open_location(placed, width, height, min_separation)
                if location is None:
                    return None, i
                logger.debug("Random placement exhausted for molecule %d, used grid scan", i)
                positions[i] = location
        return positions, n

    def find_open_location(
        self,
        placed: np.ndarray,
        width: float,
        height: float,
        min_separation: float
    ) -> Optional[np.ndarray]:
        """
        Scan the container on a grid with min_separation spacing.

        Returns:
            The first grid point far enough from all placed molecules, or None
        """
        margin = self.wall_distance
        xs = np.arange(margin, width - margin + 1e-9, min_separation)
        ys = np.arange(margin, height - margin + 1e-9, min_separation)
        if len(xs) == 0 or len(ys) == 0:
            return None

        grid_x, grid_y = np.meshgrid(xs, ys)
        grid = np.column_stack((grid_x.ravel(), grid_y.ravel()))
        if len(placed) == 0:
            return grid[0].copy()

        distances_squared = np.sum((grid[:, np.newaxis, :] - placed[np.newaxis, :, :]) ** 2, axis=2)
        open_cells = np.nonzero(np.min(distances_squared, axis=1) >= min_separation ** 2)[0]
        if len(open_cells) == 0:
            return None
        return grid[open_cells[0]].copy()

    def _orientations(self, data: MoleculeDataSet, phase: Phase) -> np.ndarray:
        n = data.number_of_molecules
        if data.atoms_per_molecule == 1:
            return np.zeros(n)
        if data.atoms_per_molecule == 2 and phase is Phase.SOLID:
            # Diatomic lattice is laid out for molecules lying flat
            return np.zeros(n)
        return self.rng.uniform(0.0, 2.0 * np.pi, n)

    def _initialize_velocities(self, data: MoleculeDataSet) -> None:
        """Gaussian velocities (and rotation rates) for the current set point."""
        n = data.number_of_molecules
        temperature = max(data.temperature_set_point, 0.0)
        data.velocities[:] = self.rng.standard_normal((n, 2)) * np.sqrt(temperature / data.molecule_mass)
        if data.atoms_per_molecule > 1:
            data.rotation_rates[:] = self.rng.standard_normal(n) * np.sqrt(temperature / data.rotational_inertia)
        else:
            data.rotation_rates[:] = 0.0
