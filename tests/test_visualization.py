#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Visualization Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        February 8, 2026
License:        MIT License
================================================================================
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.animation as animation
import matplotlib.pyplot as plt
import numpy as np
import pytest
from statesofmatter.bonding import AtomPair, DualAtomModel
from statesofmatter.config import ModelConfig
from statesofmatter.model import MultipleParticleModel
from statesofmatter.substances import SubstanceType
from statesofmatter.visualization import (
    VisualizationConfig,
    calculate_atom_colors,
    capture_frame,
    create_animation,
    render_dual_atom_model,
    render_history_plot,
    render_model,
)


@pytest.fixture
def water_model():
    return MultipleParticleModel(ModelConfig(seed=2), SubstanceType.WATER, 20)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestColors:
    """Per-atom color assignment."""

    def test_substance_colors(self, water_model):
        """Each atom of a molecule keeps its own color."""
        colors = calculate_atom_colors(water_model, VisualizationConfig())
        assert colors.shape == (water_model.number_of_atoms, 4)
        np.testing.assert_array_equal(colors[0], colors[3])
        assert not np.array_equal(colors[0], colors[1])

    def test_speed_colors(self, water_model):
        """Atoms of one molecule share the molecule's speed color."""
        colors = calculate_atom_colors(water_model, VisualizationConfig(color_by="speed"))
        assert colors.shape == (water_model.number_of_atoms, 4)
        np.testing.assert_array_equal(colors[0], colors[1])
        np.testing.assert_array_equal(colors[0], colors[2])


class TestRendering:
    """Figures build without errors."""

    def test_render_model(self, water_model):
        """The container and its atoms are drawn."""
        fig = render_model(water_model)
        ax = fig.axes[0]
        assert len(ax.collections) == 1
        assert len(ax.collections[0].get_offsets()) == water_model.number_of_atoms

    def test_render_captured_frame(self, water_model):
        """A captured frame renders after the model has moved on."""
        frame = capture_frame(water_model)
        water_model.step(1.0 / 60.0)
        fig = render_model(water_model, frame=frame)
        np.testing.assert_allclose(fig.axes[0].collections[0].get_offsets(), frame.atom_positions)

    def test_history_plot(self):
        """Temperature and pressure traces share the time axis."""
        times = np.linspace(0, 1, 10)
        fig = render_history_plot(times, np.ones(10), np.ones(10), np.zeros(10))
        assert len(fig.axes) == 2

    def test_dual_atom_plot(self):
        """The two-atom view shows the atoms and an optional trace."""
        model = DualAtomModel(AtomPair.ARGON_ARGON)
        model.set_movable_atom_position(800.0, 0.0)
        fig = render_dual_atom_model(model, separations=[800.0, 750.0, 700.0])
        assert len(fig.axes) == 2
        assert len(fig.axes[0].patches) >= 2

    def test_animation(self, water_model):
        """An animation is built from captured frames."""
        frames = []
        for _ in range(3):
            water_model.step(1.0 / 60.0)
            frames.append(capture_frame(water_model))
        anim = create_animation(water_model, frames, fps=10)
        assert isinstance(anim, animation.FuncAnimation)
        assert len(plt.get_fignums()) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
