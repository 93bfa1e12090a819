"""
Flyer Configuration System

Provides YAML-based configuration for the airframe, the launch site
environment, the integrator tuning, the simulation driver and the
initial aircraft state.
"""

import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

from ..core.constants import (
    AirframeSpecs, EnvironmentSettings, DynamicsTuning, SimulationSettings,
)
from ..core.dynamics import FlightDynamics
from ..core.quaternion import Quaternion
from ..core.state import AircraftState, initial_aircraft_state
from ..simulation.driver import SimulationDriver

logger = logging.getLogger(__name__)


SECTIONS = {
    'airframe': AirframeSpecs,
    'environment': EnvironmentSettings,
    'dynamics': DynamicsTuning,
    'simulation': SimulationSettings,
}

INITIAL_STATE_KEYS = ('from_rest', 'position', 'velocity', 'pitch', 'engine_rpm')


def _build_section(name: str, cls, values: Optional[Dict[str, Any]]):
    """Instantiate a settings dataclass, rejecting unknown or non-numeric keys."""
    if values is None:
        return cls()
    if not isinstance(values, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(values).__name__}")

    known = {f.name: f for f in fields(cls)}
    unknown = set(values) - set(known)
    if unknown:
        raise ValueError(f"Unknown parameter(s) in '{name}': {sorted(unknown)}")

    kwargs = {}
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Parameter '{name}.{key}' must be a number, got {value!r}")
        kwargs[key] = int(value) if known[key].type in (int, 'int') else float(value)
    return cls(**kwargs)


def _vector(name: str, value) -> np.ndarray:
    vec = np.asarray(value, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"'initial_state.{name}' must have 3 components, got {value!r}")
    return vec


class FlyerConfig:
    """
    Flyer configuration loaded from a YAML file.

    Attributes
    ----------
    name : str
        Aircraft name
    specs : AirframeSpecs
    environment : EnvironmentSettings
    tuning : DynamicsTuning
    simulation : SimulationSettings
    initial_state_config : dict
        Overrides for the initial state (from_rest, position, velocity,
        pitch, engine_rpm)
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Initialize configuration from dictionary.

        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)

        Raises
        ------
        ValueError
            For unknown sections or parameters and malformed values
        """
        self.raw_config = config_dict or {}
        self._parse_config()

    def _parse_config(self):
        aircraft = self.raw_config.get('aircraft', {})
        if not isinstance(aircraft, dict):
            raise ValueError("Top-level 'aircraft' entry must be a mapping")

        unknown = set(aircraft) - set(SECTIONS) - {'name', 'initial_state'}
        if unknown:
            raise ValueError(f"Unknown configuration section(s): {sorted(unknown)}")

        self.name = aircraft.get('name', '1903 Wright Flyer')
        self.specs = _build_section('airframe', AirframeSpecs, aircraft.get('airframe'))
        self.environment = _build_section('environment', EnvironmentSettings, aircraft.get('environment'))
        self.tuning = _build_section('dynamics', DynamicsTuning, aircraft.get('dynamics'))
        self.simulation = _build_section('simulation', SimulationSettings, aircraft.get('simulation'))

        self.initial_state_config = aircraft.get('initial_state') or {}
        unknown = set(self.initial_state_config) - set(INITIAL_STATE_KEYS)
        if unknown:
            raise ValueError(f"Unknown parameter(s) in 'initial_state': {sorted(unknown)}")

    def create_dynamics(self) -> FlightDynamics:
        """Flight dynamics engine built from the configured parameters."""
        return FlightDynamics(self.specs, self.environment, self.tuning)

    def initial_state(self, from_rest: Optional[bool] = None) -> AircraftState:
        """
        Initial aircraft state with the configured overrides applied.

        Parameters
        ----------
        from_rest : bool, optional
            Overrides the configured 'from_rest' flag
        """
        cfg = self.initial_state_config
        if from_rest is None:
            from_rest = bool(cfg.get('from_rest', False))

        state = initial_aircraft_state(self.simulation, self.environment, from_rest=from_rest)

        changes = {}
        if 'position' in cfg:
            changes['position'] = _vector('position', cfg['position'])
        if 'velocity' in cfg and not from_rest:
            changes['velocity'] = _vector('velocity', cfg['velocity'])
        if 'pitch' in cfg:
            changes['orientation'] = Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]),
                                                                float(cfg['pitch']))
        if 'engine_rpm' in cfg:
            changes['engine_rpm'] = float(cfg['engine_rpm'])
        return state.replace(**changes) if changes else state

    def create_driver(self) -> SimulationDriver:
        """Simulation driver resting on the configured initial state."""
        return SimulationDriver(self.create_dynamics(), self.simulation,
                                initial_state=self.initial_state(from_rest=True))

    def to_dict(self) -> Dict[str, Any]:
        """Configuration as a plain dictionary (YAML-serializable)."""
        return {
            'aircraft': {
                'name': self.name,
                'airframe': asdict(self.specs),
                'environment': asdict(self.environment),
                'dynamics': asdict(self.tuning),
                'simulation': asdict(self.simulation),
                'initial_state': dict(self.initial_state_config),
            }
        }

    def __repr__(self):
        return (f"FlyerConfig(name='{self.name}', "
                f"mass={self.specs.total_mass}, "
                f"S={self.specs.wing_area}, "
                f"headwind={self.environment.headwind_speed})")


def load_flyer_config(yaml_file: Union[str, Path]) -> FlyerConfig:
    """
    Load flyer configuration from YAML file.

    Parameters
    ----------
    yaml_file : str or Path
        Path to YAML configuration file

    Returns
    -------
    FlyerConfig
        Loaded configuration

    Examples
    --------
    >>> config = load_flyer_config('config/wright_flyer_1903.yaml')
    >>> driver = config.create_driver()
    >>> driver.start_canonical()
    """
    path = Path(yaml_file)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    config = FlyerConfig(config_dict)
    logger.info("Loaded configuration '%s' from %s", config.name, path)
    return config


def save_flyer_config(config: FlyerConfig, yaml_file: Union[str, Path]):
    """
    Save flyer configuration to YAML file.

    Parameters
    ----------
    config : FlyerConfig
        Configuration to save
    yaml_file : str or Path
        Output YAML file path
    """
    with open(yaml_file, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info("Configuration saved to: %s", yaml_file)


def create_default_config() -> Dict[str, Any]:
    """
    Default configuration dictionary for the 1903 Flyer at Kill Devil Hills.

    Returns
    -------
    dict
        Configuration with every parameter at its default
    """
    return {
        'aircraft': {
            'name': '1903 Wright Flyer',
            'airframe': asdict(AirframeSpecs()),
            'environment': asdict(EnvironmentSettings()),
            'dynamics': asdict(DynamicsTuning()),
            'simulation': asdict(SimulationSettings()),
            'initial_state': {'from_rest': False},
        }
    }
