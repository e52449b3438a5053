#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Rigid Molecule Geometry and Atom Position Updaters
================================================================================

Project:        States of Matter Engine
Module:         geometry.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Molecules are treated as rigid bodies. Each supported topology has a fixed
set of atom offsets measured from the molecule's center of mass at a
rotation angle of zero:

    - Monatomic: a single atom sitting on the center of mass
    - Diatomic:  two atoms at +/- half a bond length along the molecule axis
    - Water:     one oxygen and two hydrogens at 120 degrees, shifted so the
                 mass-weighted centroid sits at the origin

All quantities are in normalized units (particle diameters). The tables are
built once at import time and never mutated.

Atom positions are always derived from molecule state through one of the
position updaters below; they are never integrated on their own.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple


# Diatomic bond length in particle diameters
DIATOMIC_BOND_LENGTH = 0.9

# Water structure: oxygen-hydrogen distance and H-O-H angle
WATER_OXYGEN_HYDROGEN_DISTANCE = 1.0 / 3.12
WATER_BOND_ANGLE = np.deg2rad(120.0)
WATER_HYDROGEN_MASS_FRACTION = 0.25


@dataclass(frozen=True)
class RigidGeometry:
    """
    Fixed atom layout of a molecule relative to its center of mass.

    Attributes:
        atoms_per_molecule: 1, 2 or 3
        offsets: (atoms_per_molecule, 2) read-only array of atom offsets
        atom_masses: relative mass of each atom (normalized units)
        bond_length: distance between bonded atoms, None for single atoms
    """
    atoms_per_molecule: int
    offsets: np.ndarray
    atom_masses: Tuple[float, ...]
    bond_length: Optional[float] = None

    @property
    def mass(self) -> float:
        """Total molecule mass."""
        return float(sum(self.atom_masses))

    @property
    def rotational_inertia(self) -> float:
        """Moment of inertia about the center of mass."""
        if self.atoms_per_molecule == 1:
            # Single atoms never rotate; a unit value keeps divisions finite
            return 1.0
        r2 = np.sum(self.offsets ** 2, axis=1)
        return float(np.dot(np.asarray(self.atom_masses), r2))


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.ascontiguousarray(array, dtype=np.float64)
    array.setflags(write=False)
    return array


def _build_water_offsets() -> np.ndarray:
    """Oxygen at the origin, hydrogens at 0 and 120 degrees, then recentered."""
    d = WATER_OXYGEN_HYDROGEN_DISTANCE
    raw = np.array([
        [0.0, 0.0],
        [d, 0.0],
        [d * np.cos(WATER_BOND_ANGLE), d * np.sin(WATER_BOND_ANGLE)],
    ])
    weights = np.array([1.0, WATER_HYDROGEN_MASS_FRACTION, WATER_HYDROGEN_MASS_FRACTION])
    center_of_mass = weights @ raw / weights.sum()
    return raw - center_of_mass


MONATOMIC_GEOMETRY = RigidGeometry(
    atoms_per_molecule=1,
    offsets=_frozen(np.zeros((1, 2))),
    atom_masses=(1.0,),
)

DIATOMIC_GEOMETRY = RigidGeometry(
    atoms_per_molecule=2,
    offsets=_frozen(np.array([
        [DIATOMIC_BOND_LENGTH / 2.0, 0.0],
        [-DIATOMIC_BOND_LENGTH / 2.0, 0.0],
    ])),
    atom_masses=(1.0, 1.0),
    bond_length=DIATOMIC_BOND_LENGTH,
)

WATER_GEOMETRY = RigidGeometry(
    atoms_per_molecule=3,
    offsets=_frozen(_build_water_offsets()),
    atom_masses=(1.0, WATER_HYDROGEN_MASS_FRACTION, WATER_HYDROGEN_MASS_FRACTION),
    bond_length=WATER_OXYGEN_HYDROGEN_DISTANCE,
)

GEOMETRIES: Dict[int, RigidGeometry] = {
    1: MONATOMIC_GEOMETRY,
    2: DIATOMIC_GEOMETRY,
    3: WATER_GEOMETRY,
}


def _check_atoms_per_molecule(data_set, expected: int) -> None:
    if data_set.atoms_per_molecule != expected:
        raise ValueError(
            f"Position updater for {expected} atom(s) per molecule invoked on a data set "
            f"with {data_set.atoms_per_molecule}"
        )


def update_monatomic_atom_positions(data_set) -> None:
    """Atom positions are the molecule centers."""
    _check_atoms_per_molecule(data_set, 1)
    n = data_set.number_of_molecules
    data_set.atom_positions[:n] = data_set.center_of_mass_positions[:n]


def update_diatomic_atom_positions(data_set) -> None:
    """Place both atoms at +/- half a bond length along the rotation angle."""
    _check_atoms_per_molecule(data_set, 2)
    n = data_set.number_of_molecules
    half_bond = DIATOMIC_BOND_LENGTH / 2.0
    angles = data_set.rotation_angles[:n]
    com = data_set.center_of_mass_positions[:n]

    dx = np.cos(angles) * half_bond
    dy = np.sin(angles) * half_bond

    atoms = data_set.atom_positions
    atoms[0:2 * n:2, 0] = com[:, 0] + dx
    atoms[0:2 * n:2, 1] = com[:, 1] + dy
    atoms[1:2 * n:2, 0] = com[:, 0] - dx
    atoms[1:2 * n:2, 1] = com[:, 1] - dy


def update_water_atom_positions(data_set) -> None:
    """Rotate the fixed water offsets by each molecule's angle and translate."""
    _check_atoms_per_molecule(data_set, 3)
    n = data_set.number_of_molecules
    offsets = WATER_GEOMETRY.offsets
    angles = data_set.rotation_angles[:n]
    com = data_set.center_of_mass_positions[:n]

    cos_a = np.cos(angles)[:, np.newaxis]
    sin_a = np.sin(angles)[:, np.newaxis]

    # (n, 3) components of the rotated offsets
    rx = offsets[:, 0] * cos_a - offsets[:, 1] * sin_a
    ry = offsets[:, 0] * sin_a + offsets[:, 1] * cos_a

    atoms = data_set.atom_positions[:3 * n].reshape(n, 3, 2)
    atoms[:, :, 0] = com[:, 0:1] + rx
    atoms[:, :, 1] = com[:, 1:2] + ry


PositionUpdater = Callable[[object], None]

_POSITION_UPDATERS: Dict[int, PositionUpdater] = {
    1: update_monatomic_atom_positions,
    2: update_diatomic_atom_positions,
    3: update_water_atom_positions,
}


def resolve_position_updater(atoms_per_molecule: int) -> PositionUpdater:
    """
    Select the position updater for a topology.

    Called once when a data set is built so that stepping never has to
    dispatch on the atom count.
    """
    try:
        return _POSITION_UPDATERS[atoms_per_molecule]
    except KeyError:
        raise ValueError(f"Unsupported number of atoms per molecule: {atoms_per_molecule}") from None
