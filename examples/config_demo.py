"""
Configuration Demonstration

Shows how to:
- Load the 1903 Flyer configuration from YAML
- Build the dynamics engine and driver from it
- Vary a parameter (headwind) and compare flights
- Save a modified configuration
"""

import copy
import os
import sys
import tempfile

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wright_flyer.io.config import FlyerConfig, load_flyer_config, save_flyer_config, create_default_config
from wright_flyer.analysis.trim import trim_angle_of_attack, trim_throttle, stall_speed


def main():
    """Run configuration demonstration."""
    print("=" * 70)
    print("Configuration System Demonstration")
    print("=" * 70)
    print()

    # 1. Load configuration
    print("1. Loading flyer configuration from YAML...")
    config_path = os.path.join(os.path.dirname(__file__), '..', 'config', 'wright_flyer_1903.yaml')

    try:
        config = load_flyer_config(config_path)
    except FileNotFoundError:
        print("   Warning: Config file not found, using defaults...")
        config = FlyerConfig(create_default_config())

    print(f"   Loaded: {config.name}")
    print(f"   Mass: {config.specs.total_mass:.1f} kg")
    print(f"   Wing area: {config.specs.wing_area:.1f} m^2")
    print(f"   Headwind: {config.environment.headwind_speed:.1f} m/s")
    print()

    # 2. Performance
    print("2. Level-flight performance at sea level...")
    print(f"   Stall speed: {stall_speed(config.specs):.2f} m/s")
    for airspeed in (11.0, 13.0, 15.0):
        alpha = trim_angle_of_attack(airspeed, config.specs)
        throttle = trim_throttle(airspeed, config.specs)
        print(f"   {airspeed:4.1f} m/s: alpha = {np.degrees(alpha):5.2f} deg, throttle = {throttle:.3f}")
    print()

    # 3. Canonical flight with different headwinds
    print("3. Canonical flight vs headwind...")
    for headwind in (10.0, 12.0, 14.0):
        raw = copy.deepcopy(config.raw_config)
        raw.setdefault('aircraft', {}).setdefault('environment', {})['headwind_speed'] = headwind
        driver = FlyerConfig(raw).create_driver()
        driver.start_canonical()
        summary = driver.run()
        print(f"   {headwind:4.1f} m/s: {summary.distance:5.1f} m, peak {summary.max_altitude:4.2f} m, "
              f"{summary.outcome.value}")
    print()

    # 4. Save a modified configuration
    print("4. Saving configuration...")
    with tempfile.TemporaryDirectory() as tmp:
        out_path = os.path.join(tmp, 'flyer.yaml')
        save_flyer_config(config, out_path)
        reloaded = load_flyer_config(out_path)
        print(f"   Round trip OK: {reloaded.specs == config.specs}")


if __name__ == "__main__":
    main()
