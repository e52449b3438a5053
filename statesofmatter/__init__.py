#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
States of Matter Engine
================================================================================

Project:        States of Matter Engine
Description:    2D Lennard-Jones molecular dynamics of simple substances in a
                resizable container, plus a two-atom bonding model

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 2, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

This package implements a headless molecular dynamics engine featuring:
- Lennard-Jones interactions between monatomic, diatomic and water molecules
- Numba-compiled force kernels with velocity Verlet integration
- Andersen and isokinetic thermostats with heating and cooling
- Solid, liquid and gas placement without overlap
- A pressure-measuring container with a moving lid
- A two-atom model with an explicit bonding state machine

Modules:
    - substances: Lennard-Jones parameter table and substance descriptors
    - geometry: Rigid molecule geometry and atom position updaters
    - physics: Force kernels and energy helpers
    - dataset: Per-molecule state arrays
    - simulation: Velocity Verlet integrator
    - thermodynamics: Thermostats, phases and unit conversion
    - container: Container lid and pressure measurement
    - phase: Phase state changer
    - bonding: Two-atom model and bonding state machine
    - model: Many-particle orchestrator
    - visualization: Matplotlib rendering
"""

__version__ = "1.0.0"
__author__ = "Ryan Kamp"

from .bonding import AtomPair, BondState, DualAtomModel
from .config import BondingConfig, ContainerConfig, ModelConfig, ThermostatConfig
from .model import MultipleParticleModel
from .phase import PlacementResult
from .substances import AtomType, SubstanceType
from .thermodynamics import Phase

__all__ = [
    "AtomPair",
    "AtomType",
    "BondState",
    "BondingConfig",
    "ContainerConfig",
    "DualAtomModel",
    "ModelConfig",
    "MultipleParticleModel",
    "Phase",
    "PlacementResult",
    "SubstanceType",
    "ThermostatConfig",
]
