"""
Configuration loading and saving.
"""

from .config import FlyerConfig, load_flyer_config, save_flyer_config, create_default_config

__all__ = ['FlyerConfig', 'load_flyer_config', 'save_flyer_config', 'create_default_config']
