#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Substance Parameter Table
================================================================================

Project:        States of Matter Engine
Module:         substances.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Static Lennard-Jones parameters for the supported atoms and substances.

Interaction strength (epsilon) is expressed as epsilon / k_B, in Kelvin.
Interaction distance (sigma) is expressed in picometers. Both lookups are
symmetric in their arguments. Pairs that have no tabulated value fall back
to the midpoint of the valid range; that fallback is logged but never
raises.

Every substance is described by one immutable SubstanceDescriptor. The
descriptor table is built once at import time and shared read-only by all
molecules of that substance.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

import numpy as np

from .geometry import DIATOMIC_GEOMETRY, MONATOMIC_GEOMETRY, WATER_GEOMETRY, RigidGeometry

logger = logging.getLogger(__name__)


K_BOLTZMANN = 1.38e-23          # J / K
ATOMIC_MASS_UNIT = 1.6605402e-27  # kg

# Valid parameter ranges
MIN_EPSILON = 20.0    # K
MAX_EPSILON = 450.0   # K
MIN_SIGMA = 75.0      # pm
MAX_SIGMA = 500.0     # pm

EPSILON_FALLBACK = (MIN_EPSILON + MAX_EPSILON) / 2.0
SIGMA_FALLBACK = (MIN_SIGMA + MAX_SIGMA) / 2.0

# Adjustable atom defaults and the range the user may choose from
ADJUSTABLE_DEFAULT_RADIUS = 175.0           # pm
ADJUSTABLE_DEFAULT_EPSILON = MAX_EPSILON / 2.0
ADJUSTABLE_DEFAULT_SIGMA = ADJUSTABLE_DEFAULT_RADIUS * 2.0
MIN_ADJUSTABLE_EPSILON = 1.5 * 32.8
MAX_ADJUSTABLE_EPSILON = 200.0 * 1.7

# Model temperatures at the triple and critical points, per topology
TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE = 0.26
CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE = 0.8
TRIPLE_POINT_DIATOMIC_MODEL_TEMPERATURE = 0.3
CRITICAL_POINT_DIATOMIC_MODEL_TEMPERATURE = 1.5
TRIPLE_POINT_WATER_MODEL_TEMPERATURE = 0.28
CRITICAL_POINT_WATER_MODEL_TEMPERATURE = 2.0


class AtomType(Enum):
    """Atoms the engine knows how to draw and interact."""
    NEON = "neon"
    ARGON = "argon"
    OXYGEN = "oxygen"
    HYDROGEN = "hydrogen"
    ADJUSTABLE = "adjustable"


class SubstanceType(Enum):
    """Substances available in the many-particle container."""
    NEON = "neon"
    ARGON = "argon"
    DIATOMIC_OXYGEN = "diatomic_oxygen"
    WATER = "water"
    ADJUSTABLE_ATOM = "adjustable_atom"


@dataclass(frozen=True)
class AtomProperties:
    """Display and mass metadata for one atom type."""
    radius: float   # pm
    mass: float     # amu
    color: str


ATOM_PROPERTIES: Dict[AtomType, AtomProperties] = {
    AtomType.NEON: AtomProperties(radius=154.0, mass=20.1797, color="#1AFFFB"),
    AtomType.ARGON: AtomProperties(radius=181.0, mass=39.948, color="#FF8A75"),
    AtomType.OXYGEN: AtomProperties(radius=162.0, mass=15.9994, color="#DA1300"),
    AtomType.HYDROGEN: AtomProperties(radius=120.0, mass=1.00794, color="#FFFFFF"),
    AtomType.ADJUSTABLE: AtomProperties(radius=ADJUSTABLE_DEFAULT_RADIUS, mass=25.0, color="#CC66CC"),
}


def _pair(a: AtomType, b: AtomType) -> FrozenSet[AtomType]:
    return frozenset((a, b))


# epsilon / k_B in Kelvin
_EPSILON_TABLE: Dict[FrozenSet[AtomType], float] = {
    _pair(AtomType.NEON, AtomType.NEON): 35.8,
    _pair(AtomType.ARGON, AtomType.ARGON): 111.84,
    _pair(AtomType.OXYGEN, AtomType.OXYGEN): 423.3,
    _pair(AtomType.NEON, AtomType.ARGON): 59.5,
    _pair(AtomType.NEON, AtomType.OXYGEN): 51.0,
    _pair(AtomType.ARGON, AtomType.OXYGEN): 85.0,
}

# sigma in picometers
_SIGMA_TABLE: Dict[FrozenSet[AtomType], float] = {
    _pair(AtomType.NEON, AtomType.NEON): 308.0,
    _pair(AtomType.ARGON, AtomType.ARGON): 376.0,
    _pair(AtomType.OXYGEN, AtomType.OXYGEN): 110.0,
    _pair(AtomType.NEON, AtomType.ARGON): 343.0,
    _pair(AtomType.NEON, AtomType.OXYGEN): ATOM_PROPERTIES[AtomType.NEON].radius + ATOM_PROPERTIES[AtomType.OXYGEN].radius,
    _pair(AtomType.ARGON, AtomType.OXYGEN): ATOM_PROPERTIES[AtomType.ARGON].radius + ATOM_PROPERTIES[AtomType.OXYGEN].radius,
}


def _check_atom_types(a, b) -> None:
    if not isinstance(a, AtomType) or not isinstance(b, AtomType):
        raise TypeError(f"Expected AtomType values, got {a!r} and {b!r}")


def epsilon(
    atom_a: AtomType,
    atom_b: AtomType,
    adjustable_epsilon: float = ADJUSTABLE_DEFAULT_EPSILON
) -> float:
    """
    Interaction strength (epsilon / k_B, Kelvin) between two atom types.

    Args:
        atom_a: First atom type
        atom_b: Second atom type
        adjustable_epsilon: Value returned for an adjustable-adjustable pair

    Returns:
        Tabulated value, or the midpoint of [MIN_EPSILON, MAX_EPSILON] for
        pairs that involve the adjustable atom or are not tabulated
    """
    _check_atom_types(atom_a, atom_b)
    if atom_a is AtomType.ADJUSTABLE and atom_b is AtomType.ADJUSTABLE:
        return float(adjustable_epsilon)

    value = _EPSILON_TABLE.get(_pair(atom_a, atom_b))
    if value is None:
        if AtomType.ADJUSTABLE not in (atom_a, atom_b):
            logger.warning("No epsilon for %s-%s, using %.1f K", atom_a.value, atom_b.value, EPSILON_FALLBACK)
        return EPSILON_FALLBACK
    return value


def sigma(
    atom_a: AtomType,
    atom_b: AtomType,
    adjustable_sigma: float = ADJUSTABLE_DEFAULT_SIGMA
) -> float:
    """
    Interaction distance (sigma, picometers) between two atom types.

    Follows the same fallback rules as epsilon().
    """
    _check_atom_types(atom_a, atom_b)
    if atom_a is AtomType.ADJUSTABLE and atom_b is AtomType.ADJUSTABLE:
        return float(adjustable_sigma)

    value = _SIGMA_TABLE.get(_pair(atom_a, atom_b))
    if value is None:
        if AtomType.ADJUSTABLE not in (atom_a, atom_b):
            logger.warning("No sigma for %s-%s, using %.1f pm", atom_a.value, atom_b.value, SIGMA_FALLBACK)
        return SIGMA_FALLBACK
    return value


@dataclass(frozen=True)
class SubstanceDescriptor:
    """
    Immutable description of one substance.

    Attributes:
        substance: Substance identifier
        atom_types: Type of each atom in a molecule, in offset order
        epsilon: Interaction strength (K)
        sigma: Interaction distance (pm)
        particle_diameter: Length used to normalize container dimensions (pm)
        geometry: Rigid atom layout relative to the center of mass
        triple_point_kelvin / critical_point_kelvin: Real-world anchors
        triple_point_model / critical_point_model: Matching model temperatures
        default_molecule_count: Molecules created when no count is requested
    """
    substance: SubstanceType
    atom_types: Tuple[AtomType, ...]
    epsilon: float
    sigma: float
    particle_diameter: float
    geometry: RigidGeometry
    triple_point_kelvin: float
    critical_point_kelvin: float
    triple_point_model: float
    critical_point_model: float
    default_molecule_count: int

    @property
    def atoms_per_molecule(self) -> int:
        return self.geometry.atoms_per_molecule

    @property
    def molecule_mass(self) -> float:
        return self.geometry.mass

    @property
    def rotational_inertia(self) -> float:
        return self.geometry.rotational_inertia

    @property
    def offsets(self) -> np.ndarray:
        return self.geometry.offsets

    @property
    def is_monatomic(self) -> bool:
        return self.geometry.atoms_per_molecule == 1

    @property
    def min_model_temperature(self) -> float:
        """Model temperature treated as absolute zero for this substance."""
        return 0.5 * self.triple_point_model / self.triple_point_kelvin

    @property
    def minimum_separation(self) -> float:
        """Minimum center distance used when placing molecules."""
        return 1.2 if self.is_monatomic else 1.5

    def atom_properties(self) -> Tuple[AtomProperties, ...]:
        """Radius/color metadata for each atom of a molecule."""
        return tuple(ATOM_PROPERTIES[atom] for atom in self.atom_types)


def _monatomic_molecule_count(particle_diameter: float, container_width: float) -> int:
    across = round(container_width / (particle_diameter * 1.05 * 3))
    return int(across ** 2)


def _diatomic_molecule_count(container_width: float) -> int:
    number_of_atoms = int(round(container_width / (ATOM_PROPERTIES[AtomType.OXYGEN].radius * 2.1 * 3)) ** 2)
    if number_of_atoms % 2 != 0:
        number_of_atoms -= 1
    return number_of_atoms // 2


def _water_molecule_count(container_width: float) -> int:
    across_bottom = round(container_width / (ATOM_PROPERTIES[AtomType.OXYGEN].radius * 2.1 * 1.2))
    return int(round((across_bottom / 3) ** 2))


def _build_descriptors(container_width: float = 10000.0) -> Dict[SubstanceType, SubstanceDescriptor]:
    neon_diameter = ATOM_PROPERTIES[AtomType.NEON].radius * 2
    argon_diameter = ATOM_PROPERTIES[AtomType.ARGON].radius * 2
    adjustable_diameter = ADJUSTABLE_DEFAULT_RADIUS * 2

    return {
        SubstanceType.NEON: SubstanceDescriptor(
            substance=SubstanceType.NEON,
            atom_types=(AtomType.NEON,),
            epsilon=epsilon(AtomType.NEON, AtomType.NEON),
            sigma=sigma(AtomType.NEON, AtomType.NEON),
            particle_diameter=neon_diameter,
            geometry=MONATOMIC_GEOMETRY,
            triple_point_kelvin=24.5,
            critical_point_kelvin=45.0,
            triple_point_model=TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE,
            critical_point_model=CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE,
            default_molecule_count=_monatomic_molecule_count(neon_diameter, container_width),
        ),
        SubstanceType.ARGON: SubstanceDescriptor(
            substance=SubstanceType.ARGON,
            atom_types=(AtomType.ARGON,),
            epsilon=epsilon(AtomType.ARGON, AtomType.ARGON),
            sigma=sigma(AtomType.ARGON, AtomType.ARGON),
            particle_diameter=argon_diameter,
            geometry=MONATOMIC_GEOMETRY,
            triple_point_kelvin=75.0,
            critical_point_kelvin=151.0,
            triple_point_model=TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE,
            critical_point_model=CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE,
            default_molecule_count=_monatomic_molecule_count(argon_diameter, container_width),
        ),
        SubstanceType.DIATOMIC_OXYGEN: SubstanceDescriptor(
            substance=SubstanceType.DIATOMIC_OXYGEN,
            atom_types=(AtomType.OXYGEN, AtomType.OXYGEN),
            epsilon=113.0,
            sigma=365.0,
            particle_diameter=ATOM_PROPERTIES[AtomType.OXYGEN].radius * 2,
            geometry=DIATOMIC_GEOMETRY,
            triple_point_kelvin=54.0,
            critical_point_kelvin=155.0,
            triple_point_model=TRIPLE_POINT_DIATOMIC_MODEL_TEMPERATURE,
            critical_point_model=CRITICAL_POINT_DIATOMIC_MODEL_TEMPERATURE,
            default_molecule_count=_diatomic_molecule_count(container_width),
        ),
        SubstanceType.WATER: SubstanceDescriptor(
            substance=SubstanceType.WATER,
            atom_types=(AtomType.OXYGEN, AtomType.HYDROGEN, AtomType.HYDROGEN),
            epsilon=200.0,
            sigma=444.0,
            # Artificially large so the ice lattice reads as spaced out
            particle_diameter=ATOM_PROPERTIES[AtomType.OXYGEN].radius * 2.9,
            geometry=WATER_GEOMETRY,
            triple_point_kelvin=273.0,
            critical_point_kelvin=647.0,
            triple_point_model=TRIPLE_POINT_WATER_MODEL_TEMPERATURE,
            critical_point_model=CRITICAL_POINT_WATER_MODEL_TEMPERATURE,
            default_molecule_count=_water_molecule_count(container_width),
        ),
        SubstanceType.ADJUSTABLE_ATOM: SubstanceDescriptor(
            substance=SubstanceType.ADJUSTABLE_ATOM,
            atom_types=(AtomType.ADJUSTABLE,),
            epsilon=epsilon(AtomType.ADJUSTABLE, AtomType.ADJUSTABLE),
            sigma=sigma(AtomType.ADJUSTABLE, AtomType.ADJUSTABLE),
            particle_diameter=adjustable_diameter,
            geometry=MONATOMIC_GEOMETRY,
            triple_point_kelvin=75.0,
            critical_point_kelvin=140.0,
            triple_point_model=TRIPLE_POINT_MONATOMIC_MODEL_TEMPERATURE,
            critical_point_model=CRITICAL_POINT_MONATOMIC_MODEL_TEMPERATURE,
            default_molecule_count=_monatomic_molecule_count(adjustable_diameter, container_width),
        ),
    }


SUBSTANCES: Dict[SubstanceType, SubstanceDescriptor] = _build_descriptors()


def get_substance_descriptor(substance: SubstanceType) -> SubstanceDescriptor:
    """Look up the shared descriptor for a substance."""
    if not isinstance(substance, SubstanceType):
        raise TypeError(f"Expected a SubstanceType, got {substance!r}")
    return SUBSTANCES[substance]


def clamp_adjustable_epsilon(value: float) -> float:
    """Clamp a requested adjustable-atom epsilon to the allowed range."""
    return float(min(max(value, MIN_ADJUSTABLE_EPSILON), MAX_ADJUSTABLE_EPSILON))


def scaled_epsilon_for(value: Optional[float]) -> float:
    """
    Interaction multiplier used by the monatomic force kernel.

    The adjustable atom's epsilon is expressed relative to half the
    maximum epsilon; every other substance interacts at unit strength.
    """
    if value is None:
        return 1.0
    return clamp_adjustable_epsilon(value) / (MAX_EPSILON / 2.0)
