#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Visualization Module
================================================================================

Project:        States of Matter Engine
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 6, 2026
Last Updated:   February 9, 2026

License:        MIT License
================================================================================

Matplotlib rendering for headless runs of the engine:
- Atom snapshots of the many-particle container, colored by substance or speed
- Temperature and pressure traces
- The two-atom bonding model with its force decomposition
- Frame-by-frame animations
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.colors import LinearSegmentedColormap, to_rgba

from .bonding import BondState, DualAtomModel
from .model import MultipleParticleModel


def create_speed_colormap():
    """
    Colormap for molecule speed.

    Blue (slow) -> Cyan -> Green -> Yellow -> Red (fast)
    """
    colors = [
        (0.0, 0.0, 0.5),
        (0.0, 0.5, 1.0),
        (0.0, 1.0, 1.0),
        (0.0, 1.0, 0.0),
        (1.0, 1.0, 0.0),
        (1.0, 0.5, 0.0),
        (1.0, 0.0, 0.0),
    ]
    return LinearSegmentedColormap.from_list("speed", colors, N=256)


SPEED_CMAP = create_speed_colormap()

BOND_STATE_COLORS = {
    BondState.UNBONDED: "#888888",
    BondState.BONDING: "#F2C94C",
    BondState.BONDED: "#27AE60",
    BondState.ALLOWING_ESCAPE: "#EB5757",
}


@dataclass
class VisualizationConfig:
    """Configuration for visualization."""
    color_by: str = "substance"  # "substance" or "speed"
    max_speed: float = 1.5
    background_color: str = "#1a1a2e"
    container_color: str = "white"
    figsize: Tuple[int, int] = (8, 8)


@dataclass
class Frame:
    """Snapshot of the model used to render one animation frame."""
    atom_positions: np.ndarray
    molecule_velocities: np.ndarray
    container_size: Tuple[float, float]
    temperature: float


def capture_frame(model: MultipleParticleModel) -> Frame:
    return Frame(
        atom_positions=model.atom_positions(),
        molecule_velocities=model.data.velocities.copy(),
        container_size=model.normalized_container_dimensions(),
        temperature=model.measured_temperature(),
    )


def calculate_atom_colors(
    model: MultipleParticleModel,
    config: VisualizationConfig,
    molecule_velocities: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    RGBA color per atom.

    Substance coloring uses each atom's own color; speed coloring gives
    every atom of a molecule the color of the molecule's speed.
    """
    apm = model.data.atoms_per_molecule
    if config.color_by == "speed":
        velocities = model.data.velocities if molecule_velocities is None else molecule_velocities
        speeds = np.sqrt(np.sum(velocities ** 2, axis=1))
        molecule_colors = SPEED_CMAP(np.clip(speeds / config.max_speed, 0, 1))
        return np.repeat(molecule_colors, apm, axis=0)

    per_molecule = np.array([to_rgba(p.color) for p in model.atom_properties()])
    return np.tile(per_molecule, (model.number_of_molecules, 1))


def _marker_sizes(radii: np.ndarray, extent: float, figsize: Tuple[int, int]) -> np.ndarray:
    """Scatter marker areas (points²) for radii given in normalized units."""
    points_per_unit = min(figsize) * 72.0 / extent
    return (2.0 * radii * points_per_unit) ** 2


def render_atoms_matplotlib(
    atom_positions: np.ndarray,
    colors: np.ndarray,
    radii: np.ndarray,
    container_size: Tuple[float, float],
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render atoms inside the container.

    Args:
        atom_positions: Mx2 atom positions (normalized units)
        colors: Mx4 RGBA colors
        radii: M atom radii (normalized units)
        container_size: (width, height) of the container
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    width, height = container_size
    if ax is None:
        fig = plt.figure(figsize=config.figsize)
        ax = fig.add_axes([0, 0, 1, 1])
    else:
        fig = ax.figure

    ax.clear()
    ax.set_facecolor(config.background_color)
    fig.patch.set_facecolor(config.background_color)

    extent = max(width, height)
    ax.scatter(
        atom_positions[:, 0], atom_positions[:, 1],
        s=_marker_sizes(radii, extent, config.figsize),
        c=colors,
        edgecolors='white',
        linewidths=0.2,
        alpha=0.9
    )

    margin = extent * 0.02
    ax.set_xlim(-margin, width + margin)
    ax.set_ylim(-margin, extent + margin)
    ax.set_aspect('equal')

    # Open-topped container with the lid drawn separately
    ax.plot([0, 0, width, width], [height, 0, 0, height],
            color=config.container_color, linewidth=1.5, alpha=0.6)
    ax.plot([0, width], [height, height],
            color=config.container_color, linewidth=2.5, alpha=0.9)

    ax.set_xticks([])
    ax.set_yticks([])
    ax.axis('off')

    return fig


def render_model(
    model: MultipleParticleModel,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None,
    frame: Optional[Frame] = None
) -> plt.Figure:
    """Render the model's current state, or a captured frame of it."""
    if config is None:
        config = VisualizationConfig()
    if frame is None:
        frame = capture_frame(model)

    diameter = model.substance_descriptor.particle_diameter
    per_molecule_radii = np.array([p.radius for p in model.atom_properties()]) / diameter
    radii = np.tile(per_molecule_radii, model.number_of_molecules)
    colors = calculate_atom_colors(model, config, frame.molecule_velocities)
    return render_atoms_matplotlib(frame.atom_positions, colors, radii, frame.container_size, config, ax=ax)


def render_history_plot(
    times: Sequence[float],
    temperatures: Sequence[float],
    set_points: Sequence[float],
    pressures: Sequence[float],
    axes: Optional[Tuple[plt.Axes, plt.Axes]] = None
) -> plt.Figure:
    """
    Render temperature and pressure traces.

    Args:
        times: Simulation times
        temperatures: Measured temperatures (model units)
        set_points: Temperature set points (model units)
        pressures: Pressures (atm)
        axes: Optional pair of existing axes

    Returns:
        Matplotlib figure
    """
    if axes is None:
        fig, axes = plt.subplots(2, 1, figsize=(10, 6), sharex=True)
    else:
        fig = axes[0].figure
    temperature_ax, pressure_ax = axes

    temperature_ax.clear()
    temperature_ax.plot(times, temperatures, 'r-', label='Measured', linewidth=1.2)
    temperature_ax.plot(times, set_points, 'k--', label='Set point', linewidth=1.5)
    temperature_ax.set_ylabel('Temperature')
    temperature_ax.set_title('Temperature and Pressure vs Time')
    temperature_ax.legend(loc='best')
    temperature_ax.grid(True, alpha=0.3)

    pressure_ax.clear()
    pressure_ax.plot(times, pressures, 'b-', linewidth=1.2)
    pressure_ax.set_xlabel('Time')
    pressure_ax.set_ylabel('Pressure (atm)')
    pressure_ax.grid(True, alpha=0.3)

    return fig


def render_dual_atom_model(
    model: DualAtomModel,
    separations: Optional[List[float]] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Draw the two atoms with the net force arrow, plus an optional separation trace.

    When separations are given, a second panel plots them against the
    potential minimum.
    """
    if ax is None:
        ncols = 2 if separations else 1
        fig, axes = plt.subplots(1, ncols, figsize=(6 * ncols, 5))
        axes = np.atleast_1d(axes)
        ax = axes[0]
        trace_ax = axes[1] if separations else None
    else:
        fig = ax.figure
        trace_ax = None

    fixed = model.fixed_atom_position()
    movable = model.movable_atom_position()
    color = BOND_STATE_COLORS[model.bond_state]

    ax.clear()
    for position, atom in ((fixed, model.fixed_atom), (movable, model.movable_atom)):
        fill = '#444444' if atom is model.fixed_atom and model.pinned else color
        ax.add_patch(plt.Circle(tuple(position), atom.radius, color=fill, alpha=0.8))

    direction = movable - fixed
    length = np.hypot(direction[0], direction[1])
    if length > 0 and model.net_force != 0:
        arrow = direction / length * np.sign(model.net_force) * model.movable_atom.radius
        ax.arrow(movable[0], movable[1], arrow[0], arrow[1], width=8, color='black')

    reach = max(length, model.lj.sigma) + 2 * model.movable_atom.radius
    ax.set_xlim(-reach, reach)
    ax.set_ylim(-reach, reach)
    ax.set_aspect('equal')
    ax.set_xlabel('x (pm)')
    ax.set_ylabel('y (pm)')
    ax.set_title(f'{model.atom_pair.name}: {model.bond_state.value}')

    if trace_ax is not None:
        trace_ax.plot(separations, 'b-', linewidth=1.2)
        trace_ax.axhline(model.lj.minimum_force_distance(), color='green', linestyle='--', label='Potential minimum')
        trace_ax.set_xlabel('Step')
        trace_ax.set_ylabel('Separation (pm)')
        trace_ax.legend(loc='best')
        trace_ax.grid(True, alpha=0.3)

    return fig


def create_animation(
    model: MultipleParticleModel,
    frames: List[Frame],
    config: Optional[VisualizationConfig] = None,
    fps: int = 30
) -> animation.FuncAnimation:
    """
    Create an animation from captured frames.

    Args:
        model: Model the frames were captured from
        frames: Captured frames
        config: Visualization configuration
        fps: Frames per second

    Returns:
        Matplotlib animation
    """
    if config is None:
        config = VisualizationConfig()

    fig, ax = plt.subplots(1, 1, figsize=config.figsize)

    def update(index):
        frame = frames[index]
        render_model(model, config, ax=ax, frame=frame)
        ax.set_title(f'T = {frame.temperature:.3f}', color='white')
        return ax,

    return animation.FuncAnimation(fig, update, frames=len(frames), interval=1000 / fps, blit=False)
