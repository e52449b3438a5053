#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Molecule Data Set
================================================================================

Project:        States of Matter Engine
Module:         dataset.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Canonical state of the many-particle simulation, stored as parallel numpy
arrays indexed by molecule. Atom positions are derived from the molecule
state by the position updater chosen when the data set is built.

The data set is rebuilt whenever the substance or molecule count changes
and is otherwise mutated in place every step.
"""

import numpy as np

from .geometry import resolve_position_updater
from .substances import SubstanceDescriptor


class MoleculeDataSet:
    """
    Per-molecule state arrays for one substance.

    All positions are in normalized units (particle diameters).
    """

    def __init__(self, descriptor: SubstanceDescriptor, number_of_molecules: int):
        if number_of_molecules < 1:
            raise ValueError(f"A data set needs at least one molecule, got {number_of_molecules}")

        self.descriptor = descriptor
        self.atoms_per_molecule = descriptor.atoms_per_molecule
        self.number_of_molecules = int(number_of_molecules)
        self.molecule_mass = descriptor.molecule_mass
        self.rotational_inertia = descriptor.rotational_inertia

        n = self.number_of_molecules
        self.center_of_mass_positions = np.zeros((n, 2))
        self.velocities = np.zeros((n, 2))
        self.forces = np.zeros((n, 2))
        self.next_forces = np.zeros((n, 2))
        self.rotation_angles = np.zeros(n)
        self.rotation_rates = np.zeros(n)
        self.torques = np.zeros(n)
        self.next_torques = np.zeros(n)
        self.atom_positions = np.zeros((n * self.atoms_per_molecule, 2))

        self.temperature_set_point = 0.0
        self.measured_temperature = 0.0
        self.measured_pressure = 0.0
        self.scaled_epsilon = 1.0

        self._position_updater = resolve_position_updater(self.atoms_per_molecule)

    @property
    def number_of_atoms(self) -> int:
        return self.number_of_molecules * self.atoms_per_molecule

    def update_atom_positions(self) -> None:
        """Recompute the atom positions from the molecule positions and angles."""
        self._position_updater(self)

    def clear_forces(self) -> None:
        self.forces[:] = 0.0
        self.next_forces[:] = 0.0
        self.torques[:] = 0.0
        self.next_torques[:] = 0.0

    def atom_positions_snapshot(self) -> np.ndarray:
        return self.atom_positions.copy()

    def molecule_positions_snapshot(self) -> np.ndarray:
        return self.center_of_mass_positions.copy()

    def __repr__(self) -> str:
        return (f"MoleculeDataSet(substance={self.descriptor.substance.value}, "
                f"molecules={self.number_of_molecules}, atoms_per_molecule={self.atoms_per_molecule})")
