"""
First Flight Demonstration

Re-flies Orville Wright's first flight of December 17, 1903 with the
canonical control schedule and compares the result with the record.
Saves the flight profile and telemetry charts next to this script.
"""

import logging
import os
import sys

import matplotlib.pyplot as plt

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wright_flyer.core.dynamics import FlightDynamics
from wright_flyer.simulation.driver import SimulationDriver
from wright_flyer.visualization.plotting import plot_flight_profile, plot_flight_telemetry


def main():
    """Run the canonical flight."""
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    print("=" * 70)
    print("Wright Flyer: December 17, 1903, 10:35 am")
    print("=" * 70)
    print()

    driver = SimulationDriver(FlightDynamics())

    positions = []
    driver.subscribe(lambda frame: positions.append(frame.state.position.copy()))

    driver.start_canonical()
    summary = driver.run()

    print()
    print(summary)
    print()
    print(driver.state)
    print()

    df = driver.recorder.to_dataframe()
    print(f"Recorded {len(df)} chart samples over {len(positions)} ticks")
    print(df[['time', 'altitude', 'airspeed', 'lift', 'thrust']].iloc[::10].to_string(index=False))

    output_dir = os.path.dirname(os.path.abspath(__file__))
    plot_flight_profile(df, save_path=os.path.join(output_dir, 'first_flight_profile.png'))
    plot_flight_telemetry(df, save_path=os.path.join(output_dir, 'first_flight_telemetry.png'))
    plt.close('all')

    print()
    print("Charts saved to first_flight_profile.png and first_flight_telemetry.png")


if __name__ == "__main__":
    main()
