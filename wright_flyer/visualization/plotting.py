"""
Standard Plotting Functions

Provides visualization of recorded Wright Flyer flights: the flight
profile against the 1903 record, the telemetry chart panels, and the
lift curve and drag polar of the wing.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Tuple

from ..core.aerodynamics import AerodynamicsEngine
from ..core.constants import AirframeSpecs, HistoricalFlight, WRIGHT_FLYER_SPECS, FIRST_FLIGHT


def plot_flight_profile(
    df: pd.DataFrame,
    reference: Optional[HistoricalFlight] = FIRST_FLIGHT,
    title: str = "Flight Profile",
    figsize: Tuple[float, float] = (10, 4),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot altitude against ground track.

    Parameters
    ----------
    df : pd.DataFrame
        Recorder frame with 'distance' and 'altitude' columns
    reference : HistoricalFlight, optional
        Record whose distance and peak altitude are drawn as guides
    title : str, optional
        Plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(df['distance'], df['altitude'], 'b-', linewidth=2, label='Simulated')
    ax.fill_between(df['distance'], 0, df['altitude'], color='b', alpha=0.1)

    if reference is not None:
        ax.axvline(reference.distance, color='r', linestyle='--', linewidth=1,
                   label=f'1903 distance ({reference.distance:.1f} m)')
        ax.axhline(reference.max_altitude, color='g', linestyle=':', linewidth=1,
                   label=f'1903 altitude ({reference.max_altitude:.1f} m)')

    ax.set_xlabel('Distance (m)', fontsize=11)
    ax.set_ylabel('Altitude (m)', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.set_ylim(bottom=0)
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


# Chart panels: (title, [(column, label, style)], left axis label, right axis label)
TELEMETRY_PANELS = (
    ('Lift & Drag', [('lift', 'Lift', 'b-'), ('drag', 'Drag', 'r-')], 'Force (N)', None),
    ('Thrust & Torque', [('thrust', 'Thrust', 'g-'), ('torque', 'Torque', 'm-')], 'Thrust (N)', 'Torque (N·m)'),
    ('Airspeed & Altitude', [('airspeed', 'Airspeed', 'c-'), ('altitude', 'Altitude', 'k-')],
     'Airspeed (m/s)', 'Altitude (m)'),
    ('Engine', [('engine_power', 'Power', 'r-'), ('engine_rpm', 'RPM', 'b-')], 'Power (W)', 'RPM'),
    ('Control Surfaces', [('elevator_deflection', 'Elevator', 'b-'),
                          ('rudder_deflection', 'Rudder', 'g-'),
                          ('wing_warp_deflection', 'Wing warp', 'r-')], 'Deflection (deg)', None),
)


def plot_flight_telemetry(
    df: pd.DataFrame,
    title: str = "Flight Telemetry",
    figsize: Tuple[float, float] = (12, 12),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot the recorder's chart series vs time.

    Two-series panels with a right axis label put the second series on a
    twin axis since the units differ.

    Parameters
    ----------
    df : pd.DataFrame
        Output of FlightRecorder.to_dataframe()

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, axes = plt.subplots(len(TELEMETRY_PANELS), 1, figsize=figsize, sharex=True)
    time = df['time']

    for ax, (panel_title, series, left_label, right_label) in zip(axes, TELEMETRY_PANELS):
        if right_label is None:
            for column, label, style in series:
                ax.plot(time, df[column], style, label=label, linewidth=1.5)
            ax.legend(loc='best', ncol=len(series))
        else:
            (c1, l1, s1), (c2, l2, s2) = series
            line1, = ax.plot(time, df[c1], s1, label=l1, linewidth=1.5)
            twin = ax.twinx()
            line2, = twin.plot(time, df[c2], s2, label=l2, linewidth=1.5)
            twin.set_ylabel(right_label, fontsize=10)
            ax.legend([line1, line2], [l1, l2], loc='best', ncol=2)

        ax.set_ylabel(left_label, fontsize=10)
        ax.set_title(panel_title, fontsize=11, fontweight='bold')
        ax.grid(True, alpha=0.3)

    axes[-1].set_xlabel('Time (s)', fontsize=11)

    fig.suptitle(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_lift_curve(
    specs: AirframeSpecs = WRIGHT_FLYER_SPECS,
    alpha_range: Tuple[float, float] = (-10.0, 30.0),
    n_points: int = 201,
    figsize: Tuple[float, float] = (12, 5),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot CL vs angle of attack and the drag polar.

    Parameters
    ----------
    specs : AirframeSpecs, optional
        Airframe whose wing is plotted
    alpha_range : Tuple[float, float], optional
        Angle of attack range (deg)
    n_points : int, optional
        Number of samples

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    aero = AerodynamicsEngine(specs)
    alpha_deg = np.linspace(alpha_range[0], alpha_range[1], n_points)
    cl = np.array([aero.lift_coefficient(np.radians(a)) for a in alpha_deg])
    cd = np.array([aero.drag_coefficient(c) for c in cl])

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    ax1.plot(alpha_deg, cl, 'b-', linewidth=2)
    ax1.axvline(np.degrees(specs.stall_angle), color='r', linestyle='--', linewidth=1, label='Stall')
    ax1.axhline(specs.max_lift_coefficient, color='gray', linestyle=':', linewidth=1, label='CLmax')
    ax1.set_xlabel('Angle of Attack (deg)', fontsize=11)
    ax1.set_ylabel('CL', fontsize=11)
    ax1.set_title('Lift Curve', fontsize=11, fontweight='bold')
    ax1.legend(loc='best')
    ax1.grid(True, alpha=0.3)

    ax2.plot(cd, cl, 'g-', linewidth=2)
    ax2.set_xlabel('CD', fontsize=11)
    ax2.set_ylabel('CL', fontsize=11)
    ax2.set_title('Drag Polar', fontsize=11, fontweight='bold')
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
