"""
Visualization
=============
Static plots built from recorded data points:
  1. Trajectories (older shots fade with rank, apex and dots marked)
  2. Landing distribution against the target zones
  3. Air density vs altitude
  4. Closed-form validation errors
"""

import os
from typing import Optional, Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .atmosphere import density_profile
from .constants import (
    ALTITUDE_RANGE, MAX_NUMBER_OF_TRAJECTORIES, TIME_PER_MAJOR_DOT_MS, TIME_PER_MINOR_DOT_MS,
)
from .target import Target
from .trajectory import Trajectory


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'air_on_color': '#fc28fc',
    'air_off_color': '#00d4ff',
    'apex_color': '#ffeb3b',
    'target_colors': ['#ff5252', '#ffffff', '#ff5252'],
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _save(fig, save_path: Optional[str]):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


def rank_opacity(rank: int, max_rank: int = MAX_NUMBER_OF_TRAJECTORIES) -> float:
    """Opacity of a path given how many shots were fired after it."""
    return max(1.0 - rank / (max_rank + 1), 0.1)


def _draw_target(ax, target: Target):
    # widest zone first so the tighter ones sit on top
    for fraction, color in zip((1 / 2, 1 / 3, 1 / 6), STYLE['target_colors']):
        half = target.width * fraction
        ax.axvspan(target.x - half, target.x + half, ymax=0.03, color=color, alpha=0.8)


# ══════════════════════════════════════════════════════════════════════════
#  1. Trajectories
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectories(trajectories: Sequence[Trajectory], target: Optional[Target] = None,
                      save_path: str = None) -> plt.Figure:
    """Height vs distance for every trajectory, newest drawn most opaque."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    for trajectory in trajectories:
        arrays = trajectory.to_arrays()
        alpha = rank_opacity(trajectory.rank)
        color = STYLE['air_on_color'] if arrays['air_density'][0] > 0 else STYLE['air_off_color']
        ax.plot(arrays['x'], arrays['y'], color=color, linewidth=2, alpha=alpha)

        ms = np.rint(arrays['time'] * 1000)
        minor = (ms % TIME_PER_MINOR_DOT_MS == 0) & (ms % TIME_PER_MAJOR_DOT_MS != 0)
        major = ms % TIME_PER_MAJOR_DOT_MS == 0
        ax.plot(arrays['x'][minor], arrays['y'][minor], '.', color='#000000',
                markersize=3, alpha=alpha, markeredgecolor=color)
        ax.plot(arrays['x'][major], arrays['y'][major], 'o', color=color,
                markersize=5, alpha=alpha)

        if trajectory.apex_point is not None:
            ax.plot(trajectory.apex_point.x, trajectory.apex_point.y, 'o',
                    color=STYLE['apex_color'], markersize=6, alpha=alpha, zorder=5)

    if target is not None:
        _draw_target(ax, target)

    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'Trajectories ({len(trajectories)} shots)', fontsize=13, fontweight='bold')
    ax.set_ylim(bottom=0)

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Landing Distribution
# ══════════════════════════════════════════════════════════════════════════

def plot_landing_distribution(trajectories: Sequence[Trajectory], target: Target,
                              bins: int = 20, save_path: str = None) -> plt.Figure:
    """Histogram of landing distance for landed shots."""
    landings = np.array([t.landing_x for t in trajectories if t.reached_ground])

    fig, ax = plt.subplots(figsize=(11, 5))
    _apply_dark_style(fig, ax)

    if landings.size:
        ax.hist(landings, bins=bins, color=STYLE['air_off_color'], alpha=0.8,
                edgecolor=STYLE['bg_color'])
        ax.axvline(np.mean(landings), color=STYLE['apex_color'], linestyle='--',
                   label=f'Mean {np.mean(landings):.2f} m (σ = {np.std(landings):.2f} m)')
        ax.legend(facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])
    _draw_target(ax, target)

    ax.set_xlabel('Landing distance (m)', fontsize=12)
    ax.set_ylabel('Shots', fontsize=12)
    ax.set_title('Landing Distribution', fontsize=13, fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Air Density
# ══════════════════════════════════════════════════════════════════════════

def plot_air_density(save_path: str = None) -> plt.Figure:
    """Air density over the altitude range offered by the controls."""
    altitudes = np.linspace(ALTITUDE_RANGE[0], ALTITUDE_RANGE[1], 200)
    profile = density_profile(altitudes)

    fig, ax = plt.subplots(figsize=(7, 6))
    _apply_dark_style(fig, ax)
    ax.plot(profile['density'], altitudes, color='#00e676', linewidth=2)
    ax.fill_betweenx(altitudes, 0, profile['density'], alpha=0.1, color='#00e676')
    ax.set_xlabel('Density (kg/m³)', fontsize=12)
    ax.set_ylabel('Altitude (m)', fontsize=12)
    ax.set_title('Air Density vs Altitude', fontsize=13, fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Validation
# ══════════════════════════════════════════════════════════════════════════

def plot_validation(validation_results, save_path: str = None) -> plt.Figure:
    """Bar chart of percentage errors against closed-form motion."""
    labels = [f"{r.conditions.speed:.0f} m/s\n{r.conditions.angle_deg:.0f}°"
              for r in validation_results]
    idx = np.arange(len(labels))
    width = 0.27

    fig, ax = plt.subplots(figsize=(11, 5))
    _apply_dark_style(fig, ax)
    ax.bar(idx - width, [r.apex_error_pct for r in validation_results], width,
           label='Apex', color='#ffeb3b')
    ax.bar(idx, [r.flight_time_error_pct for r in validation_results], width,
           label='Flight time', color='#00d4ff')
    ax.bar(idx + width, [r.range_error_pct for r in validation_results], width,
           label='Range', color='#ff6b35')
    ax.set_xticks(idx)
    ax.set_xticklabels(labels)
    ax.set_ylabel('Error (%)', fontsize=12)
    ax.set_title('Drag-Free Validation Errors', fontsize=13, fontweight='bold')
    ax.legend(facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])

    plt.tight_layout()
    _save(fig, save_path)
    return fig
