"""
I/O: YAML build configuration and tabular views for plotting.
"""

from .config_loader import BuildConfig, load_config, build_from_config
from .export import sites_frame, bonds_frame, bond_segments

__all__ = [
    'BuildConfig',
    'load_config',
    'build_from_config',
    'sites_frame',
    'bonds_frame',
    'bond_segments',
]
