from ase import Atoms
from ase.build import bulk

from error_control.domain_models.config import DFTConfig
from error_control.exceptions import ConfigurationError


def build_structure(config: DFTConfig) -> Atoms:
    """Build the bulk crystal described by ``config`` (silicon by default)."""
    try:
        return bulk(config.element, config.crystal_structure, a=config.lattice_constant)
    except (ValueError, KeyError) as e:
        msg = (
            f"Cannot build {config.crystal_structure} {config.element} "
            f"with a={config.lattice_constant}: {e}"
        )
        raise ConfigurationError(msg) from e
