#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE MOTION — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes a full demonstration session:
    1. Air density table and profile plot
    2. Drag-free validation against closed-form motion
    3. Air resistance on vs off for each benchmark object
    4. Group-statistics session (group fire + rapid fire)
    5. Data probe readback

  All figures saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip the rapid-fire session (faster)
    python main.py --debug      # Also write projectile_motion.log
═══════════════════════════════════════════════════════════════════════════════
"""

import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from projectile_motion.atmosphere import air_density, pressure, temperature
from projectile_motion.environment import Environment
from projectile_motion.logger import enable_file_logging, disable_file_logging
from projectile_motion.model import StatsModel
from projectile_motion.object_types import STATS_OBJECT_TYPES
from projectile_motion.projectile import LaunchConditions, Projectile
from projectile_motion.validation import simulate_shot, validate_against_closed_form
from projectile_motion.visualization import (
    ensure_output_dir, plot_air_density, plot_landing_distribution,
    plot_trajectories, plot_validation,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

FRAME_DT = 1 / 60  # s, wall-clock frame length fed to the model


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def run_frames(model, seconds: float):
    for _ in range(int(seconds / FRAME_DT)):
        model.step(FRAME_DT)


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    if '--debug' in sys.argv:
        enable_file_logging("projectile_motion.log")

    out = ensure_output_dir('outputs')

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Air Density")
    print(f"  {'Alt (m)':>8} {'T (°C)':>8} {'P (kPa)':>9} {'ρ (kg/m³)':>11}")
    for h in [0, 1000, 2000, 3000, 4000, 5000]:
        print(f"  {h:>8} {temperature(h):>8.2f} {pressure(h):>9.3f} {air_density(h):>11.5f}")

    fig = plot_air_density(save_path=f'{out}/01_air_density.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/01_air_density.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Drag-Free Validation")
    results = validate_against_closed_form(verbose=True)
    fig = plot_validation(results, save_path=f'{out}/02_validation.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/02_validation.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Air Resistance per Object
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Air Resistance On vs Off (20 m/s, 45°)")
    conditions = LaunchConditions(speed=20.0, angle_deg=45.0)
    print(f"  {'Object':<12} {'Range off':>10} {'Range on':>10} {'Loss %':>8}")
    for object_type in STATS_OBJECT_TYPES:
        projectile = Projectile.from_object_type(object_type)
        off = simulate_shot(projectile, conditions, Environment(air_resistance_on=False))
        on = simulate_shot(projectile, conditions, Environment(air_resistance_on=True))
        loss = 100.0 * (off.horizontal_displacement - on.horizontal_displacement) / off.horizontal_displacement
        print(f"  {object_type.name:<12} {off.horizontal_displacement:>10.2f} "
              f"{on.horizontal_displacement:>10.2f} {loss:>8.1f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Group Statistics
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Group Statistics")
    model = StatsModel()
    model.fire_multiple()
    run_frames(model, 5.0)

    if not quick:
        model.set_rapid_fire_mode(True)
        run_frames(model, 10.0)
        model.set_rapid_fire_mode(False)
        run_frames(model, 5.0)

    stats = model.collection.landing_statistics()
    if stats is not None:
        print(f"  Landed shots : {stats.count}")
        print(f"  Mean landing : {stats.mean:.2f} m  (σ = {stats.std:.2f} m)")
        print(f"  Spread       : {stats.min:.2f} .. {stats.max:.2f} m")
        print(f"  Target hits  : {stats.hits} ({100 * stats.hit_fraction:.0f}%)")

    fig = plot_trajectories(model.trajectories, model.target,
                            save_path=f'{out}/03_trajectories.png')
    plt.close(fig)
    fig = plot_landing_distribution(model.trajectories, model.target,
                                    save_path=f'{out}/04_landings.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/03_trajectories.png, {out}/04_landings.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Data Probe
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Data Probe")
    newest = model.trajectories[-1]
    probe = model.probe
    probe.is_active = True
    for label, point in (("apex", newest.apex_point), ("landing", newest.data_points[-1])):
        if point is None:
            continue
        found = probe.move_to(point.x, point.y)
        if found is not None:
            print(f"  {label:<8} t={found.time:.3f} s  x={found.x:.2f} m  y={found.y:.2f} m  "
                  f"|v|={found.speed:.2f} m/s")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"\n  All outputs saved to: {os.path.abspath(out)}/")
    print(f"  Total runtime: {elapsed:.1f} seconds\n")
    disable_file_logging()


if __name__ == "__main__":
    main()
