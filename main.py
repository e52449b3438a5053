#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
States of Matter Engine - Command Line Interface
================================================================================

Project:        States of Matter Engine
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 6, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Command line interface for running the engine headless: the bonding,
solid placement and container resize scenarios, a tour of the three
phases, a heating run and an animation.
"""

import argparse
import logging
import time

import numpy as np
import matplotlib.pyplot as plt

from statesofmatter.bonding import AtomPair, BondState, DualAtomModel
from statesofmatter.config import ModelConfig
from statesofmatter.logging_config import setup_logging
from statesofmatter.model import MultipleParticleModel
from statesofmatter.substances import SubstanceType
from statesofmatter.thermodynamics import Phase
from statesofmatter.visualization import (
    VisualizationConfig, capture_frame, create_animation, render_dual_atom_model,
    render_history_plot, render_model
)

FRAME_DT = 1.0 / 60.0


def _pairwise_distances(positions: np.ndarray) -> np.ndarray:
    deltas = positions[:, None, :] - positions[None, :, :]
    distances = np.sqrt(np.sum(deltas ** 2, axis=-1))
    return distances[np.triu_indices(len(positions), k=1)]


def run_scenario_a(n_steps: int = 1000, plot: bool = False):
    """
    Two argon atoms: anchor pinned at the origin, free atom released at rest
    two sigma away. The pair should end up bonded near the potential minimum.
    """
    print("=" * 60)
    print("States of Matter - Two-Atom Bonding (argon)")
    print("=" * 60)

    model = DualAtomModel(AtomPair.ARGON_ARGON)
    sigma = model.lj.sigma
    model.set_movable_atom_position(2.0 * sigma, 0.0)

    separations = []
    previous_state = model.bond_state
    for step in range(n_steps):
        model.step(FRAME_DT)
        separations.append(model.separation())
        if model.bond_state is not previous_state:
            print(f"  Step {step:5d}: {previous_state.value} -> {model.bond_state.value}")
            previous_state = model.bond_state

    r_min = model.lj.minimum_force_distance()
    error = abs(model.separation() - r_min) / r_min
    attractive, repulsive, net = model.forces()
    print(f"\nFinal state:      {model.bond_state.value}")
    print(f"  Separation:     {model.separation():.2f} pm (minimum {r_min:.2f} pm, {error * 100:.2f}% off)")
    print(f"  Attractive:     {attractive:.3e}")
    print(f"  Repulsive:      {repulsive:.3e}")
    print(f"  Net:            {net:.3e}")

    if model.bond_state is BondState.BONDED and error <= 0.05:
        print("  ✓ Bond formed at the potential minimum")
    else:
        print("  ⚠ Bond did not settle")

    if plot:
        render_dual_atom_model(model, separations)
        plt.tight_layout()
        plt.savefig('scenario_a.png', dpi=150)
        print("\nPlot saved to scenario_a.png")
        plt.show()


def run_scenario_b(n_molecules: int = 50, seed=None, plot: bool = False):
    """Place neon as a solid and check spacing and molecule count."""
    print("=" * 60)
    print("States of Matter - Solid Placement (neon)")
    print("=" * 60)

    model = MultipleParticleModel(ModelConfig(seed=seed), SubstanceType.NEON, n_molecules)
    result = model.set_phase(Phase.SOLID)
    distances = _pairwise_distances(model.molecule_positions())
    minimum = model.substance_descriptor.minimum_separation

    print(f"\nPlacement:          {'ok' if result else result.message}")
    print(f"  Molecules:        {model.number_of_molecules}")
    print(f"  Closest pair:     {distances.min():.4f} (required {minimum:.2f})")

    if model.number_of_molecules == n_molecules and distances.min() >= minimum:
        print("  ✓ No overlaps")
    else:
        print("  ⚠ Placement violated the minimum separation")

    if plot:
        render_model(model)
        plt.savefig('scenario_b.png', dpi=150)
        print("\nPlot saved to scenario_b.png")
        plt.show()


def run_scenario_c(n_steps: int = 600, seed=None):
    """Halve the container height and follow the lid."""
    print("=" * 60)
    print("States of Matter - Container Resize")
    print("=" * 60)

    model = MultipleParticleModel(ModelConfig(seed=seed))
    start = model.container_height()
    target = model.resize_container(start / 2.0)

    heights = [start]
    for step in range(n_steps):
        model.step(FRAME_DT)
        heights.append(model.container_height())
        if step % 100 == 0:
            print(f"  Step {step:5d}: height = {heights[-1]:.1f} pm, "
                  f"P = {model.pressure_in_atmospheres():.3f} atm")

    monotone = all(b <= a for a, b in zip(heights, heights[1:]))
    print(f"\nFinal height:       {heights[-1]:.1f} pm (target {target:.1f} pm)")
    print(f"  Monotone:         {monotone}")


def run_phase_tour(substance: SubstanceType, n_steps: int = 600, seed=None):
    """Jump through solid, liquid and gas and report temperature and pressure."""
    print("=" * 60)
    print(f"States of Matter - Phase Tour ({substance.value})")
    print("=" * 60)

    model = MultipleParticleModel(ModelConfig(seed=seed), substance)
    for phase in (Phase.SOLID, Phase.LIQUID, Phase.GAS):
        result = model.set_phase(phase)
        if not result:
            print(f"  {phase.value}: {result.message}")
            continue
        for _ in range(n_steps):
            model.step(FRAME_DT)
        print(f"  {phase.value:6s}: T = {model.measured_temperature():.4f} "
              f"({model.temperature_in_kelvin():.1f} K), "
              f"P = {model.pressure_in_atmospheres():.3f} atm")


def run_heating(substance: SubstanceType, n_steps: int = 3000, seed=None, plot: bool = False):
    """Heat a solid at the full heating rate and record the traces."""
    print("=" * 60)
    print(f"States of Matter - Heating ({substance.value})")
    print("=" * 60)

    model = MultipleParticleModel(ModelConfig(seed=seed), substance)
    model.set_heating_cooling_amount(1.0)

    times, temperatures, set_points, pressures = [], [], [], []
    t_start = time.time()
    for step in range(n_steps):
        model.step(FRAME_DT)
        times.append(model.time)
        temperatures.append(model.measured_temperature())
        set_points.append(model.temperature_set_point)
        pressures.append(model.pressure_in_atmospheres())
        if step % 500 == 0:
            print(f"  Step {step:5d}: set point = {model.temperature_set_point:.3f}, "
                  f"phase = {model.current_phase().value}")
    t_end = time.time()

    print(f"\nSimulation completed in {t_end - t_start:.2f} seconds")
    print(f"Steps per second: {n_steps / (t_end - t_start):.1f}")

    if plot:
        fig = plt.figure(figsize=(14, 6))
        history_axes = (fig.add_subplot(2, 2, 1), fig.add_subplot(2, 2, 3))
        render_history_plot(times, temperatures, set_points, pressures, axes=history_axes)
        render_model(model, VisualizationConfig(color_by="speed"), ax=fig.add_subplot(1, 2, 2))
        plt.tight_layout()
        plt.savefig('heating.png', dpi=150)
        print("\nPlot saved to heating.png")
        plt.show()


def run_animation(substance: SubstanceType, n_frames: int = 200, steps_per_frame: int = 2, seed=None):
    """Melt a solid and save the animation as a GIF."""
    print("=" * 60)
    print(f"States of Matter - Animation ({substance.value})")
    print("=" * 60)

    model = MultipleParticleModel(ModelConfig(seed=seed), substance)
    model.set_heating_cooling_amount(1.0)

    frames = []
    for _ in range(n_frames):
        for _ in range(steps_per_frame):
            model.step(FRAME_DT)
        frames.append(capture_frame(model))

    print(f"Creating animation with {n_frames} frames...")
    ani = create_animation(model, frames, fps=20)
    ani.save('states_of_matter.gif', writer='pillow', fps=20)
    print("Animation saved to states_of_matter.gif")


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="States of Matter Engine - 2D Lennard-Jones Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --scenario-a --plot     Bond two argon atoms
  python main.py --scenario-b            Place 50 neon atoms as a solid
  python main.py --scenario-c            Halve the container height
  python main.py --phases -m water       Visit solid, liquid and gas
  python main.py --heat --plot           Heat a solid
  python main.py --animate               Save a melting animation
        """
    )

    parser.add_argument('--scenario-a', action='store_true',
                        help='Run the two-atom bonding scenario')
    parser.add_argument('--scenario-b', action='store_true',
                        help='Run the solid placement scenario')
    parser.add_argument('--scenario-c', action='store_true',
                        help='Run the container resize scenario')
    parser.add_argument('--phases', action='store_true',
                        help='Visit the solid, liquid and gas phases')
    parser.add_argument('--heat', action='store_true',
                        help='Heat a solid and record temperature and pressure')
    parser.add_argument('--animate', action='store_true',
                        help='Create an animation')
    parser.add_argument('--substance', '-m', type=str, default=SubstanceType.NEON.value,
                        choices=[s.value for s in SubstanceType],
                        help='Substance for the many-particle runs (default: neon)')
    parser.add_argument('--molecules', '-n', type=int, default=50,
                        help='Molecule count for scenario B (default: 50)')
    parser.add_argument('--steps', '-s', type=int, default=None,
                        help='Number of clock ticks (default depends on the run)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible runs')
    parser.add_argument('--plot', action='store_true',
                        help='Plot the results with matplotlib')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Optional file to write logs to')

    args = parser.parse_args()
    setup_logging(getattr(logging, args.log_level), args.log_file)
    substance = SubstanceType(args.substance)
    steps = {} if args.steps is None else {'n_steps': args.steps}

    if args.scenario_a:
        run_scenario_a(plot=args.plot, **steps)
    elif args.scenario_b:
        run_scenario_b(n_molecules=args.molecules, seed=args.seed, plot=args.plot)
    elif args.scenario_c:
        run_scenario_c(seed=args.seed, **steps)
    elif args.phases:
        run_phase_tour(substance, seed=args.seed, **steps)
    elif args.heat:
        run_heating(substance, seed=args.seed, plot=args.plot, **steps)
    elif args.animate:
        run_animation(substance, seed=args.seed)
    else:
        parser.print_help()
        print("\nNo action specified. Run with --scenario-a, --scenario-b, --scenario-c, "
              "--phases, --heat or --animate")


if __name__ == "__main__":
    main()
