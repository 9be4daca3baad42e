"""
YAML build configuration.

A configuration names a preset unitcell and, optionally, the block of cells a
lattice should be built over:

    unitcell:
      name: honeycomb
      version: 1
      site_label_type: int
      bond_label_type: str

    lattice:
      extent: [4, 4]
      periodic: [true, false]

    logging:
      level: DEBUG
"""

import logging
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.exceptions import ConfigError
from ..core.labels import LABEL_TYPE_NAMES
from ..core.lattice import build_lattice
from ..core.unitcell import create_unitcell
from ..utils.logging import LEVEL_MAP, setup_logging


logger = logging.getLogger(__name__)


@dataclass
class BuildConfig:
    """
    Parsed build configuration.

    Attributes
    ----------
    name : str
        Registered unitcell name
    version : int
        Unitcell version
    site_label_type, bond_label_type : type
        Label types passed to create_unitcell
    extent : List[int], optional
        Cells per Bravais direction. None means: build only the unitcell.
    periodic : bool or List[bool]
        Boundary conditions for the lattice
    log_level : str, optional
        If set, setup_logging is called with this level before building
    metadata : Dict
        Free-form 'project' section, kept as-is
    """
    name: str
    version: int = 1
    site_label_type: type = int
    bond_label_type: type = int
    extent: Optional[List[int]] = None
    periodic: Union[bool, List[bool]] = True
    log_level: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BuildConfig':
        """
        Create a configuration from a parsed YAML mapping.

        Raises
        ------
        ConfigError
            If the mapping has no unitcell name, a section is not a mapping,
            or a value has the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        unitcell = data.get('unitcell')
        if not isinstance(unitcell, dict) or 'name' not in unitcell:
            raise ConfigError("Configuration needs a 'unitcell' section with a 'name'")

        lattice = _section(data, 'lattice')
        extent = lattice.get('extent')
        if lattice and extent is None:
            raise ConfigError("'lattice' section needs an 'extent'")

        try:
            version = int(unitcell.get('version', 1))
            extent = [int(L) for L in extent] if extent is not None else None
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid number in configuration: {exc}") from exc

        periodic = lattice.get('periodic', True)
        if not isinstance(periodic, bool) and not (
                isinstance(periodic, list) and all(isinstance(p, bool) for p in periodic)):
            raise ConfigError(
                f"'periodic' must be true, false or a list of booleans, got {periodic!r}"
            )

        log_level = _section(data, 'logging').get('level')
        if log_level is not None and (not isinstance(log_level, str)
                                      or log_level.upper() not in LEVEL_MAP):
            available = ', '.join(LEVEL_MAP)
            raise ConfigError(
                f"Unknown log level {log_level!r}. Available levels: {available}"
            )

        return cls(
            name=str(unitcell['name']),
            version=version,
            site_label_type=_label_type(unitcell.get('site_label_type', 'int')),
            bond_label_type=_label_type(unitcell.get('bond_label_type', 'int')),
            extent=extent,
            periodic=periodic,
            log_level=log_level,
            metadata=_section(data, 'project'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Inverse of from_dict, with label types written by name."""
        data: Dict[str, Any] = {
            'unitcell': {
                'name': self.name,
                'version': self.version,
                'site_label_type': self.site_label_type.__name__,
                'bond_label_type': self.bond_label_type.__name__,
            }
        }
        if self.extent is not None:
            data['lattice'] = {'extent': list(self.extent), 'periodic': self.periodic}
        if self.log_level is not None:
            data['logging'] = {'level': self.log_level}
        if self.metadata:
            data['project'] = dict(self.metadata)
        return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping, got {type(section).__name__}")
    return section


def _label_type(name: str) -> type:
    if not isinstance(name, str) or name not in LABEL_TYPE_NAMES:
        available = ', '.join(LABEL_TYPE_NAMES)
        raise ConfigError(f"Unknown label type '{name}'. Available types: {available}")
    return LABEL_TYPE_NAMES[name]


def load_config(config_path: Union[str, Path]) -> BuildConfig:
    """
    Load a build configuration from a YAML file.

    Parameters
    ----------
    config_path : str or Path
        Path to YAML configuration file

    Returns
    -------
    config : BuildConfig

    Raises
    ------
    ConfigError
        If the file is not valid YAML or misses required entries
    """
    path = Path(config_path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    config = BuildConfig.from_dict(data)
    logger.info("Loaded configuration for unitcell '%s' (version %d) from %s",
                config.name, config.version, path)
    return config


def build_from_config(config: Union[BuildConfig, str, Path]):
    """
    Build the unitcell or lattice described by a configuration.

    Parameters
    ----------
    config : BuildConfig, str or Path
        A configuration or the path of a YAML file

    Returns
    -------
    result : Unitcell or Lattice
        The lattice if the configuration has a 'lattice' section, otherwise
        the unitcell
    """
    if not isinstance(config, BuildConfig):
        config = load_config(config)

    if config.log_level is not None:
        setup_logging(config.log_level)

    unitcell = create_unitcell(
        config.name,
        version=config.version,
        site_label_type=config.site_label_type,
        bond_label_type=config.bond_label_type,
    )
    if config.extent is None:
        return unitcell
    return build_lattice(unitcell, config.extent, periodic=config.periodic)
