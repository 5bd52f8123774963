import logging
from collections.abc import Mapping
from types import MappingProxyType

from pulsetrain.model import CamSpec, CrankWheel, CylinderCount, EngineConfig, Level

log = logging.getLogger(__name__)


class Registry(Mapping):
    """Read-only lookup of named engine configurations.

    Built once and passed to whatever needs it; entries are validated when
    the registry is created and never change afterwards.
    """

    def __init__(self, configs):
        configs = dict(configs)
        for name, config in configs.items():
            if not isinstance(name, str):
                raise TypeError(f"Configuration names must be strings, got {name!r}")
            if not isinstance(config, EngineConfig):
                raise TypeError(f"{name}: expected EngineConfig, got {type(config).__name__}")
        self._configs = MappingProxyType(configs)
        log.debug("registry populated with %s", list(configs))

    def __getitem__(self, name):
        return self._configs[name]

    def __iter__(self):
        return iter(self._configs)

    def __len__(self):
        return len(self._configs)

    def by_index(self, index):
        return self._configs[list(self._configs)[index]]


def default_registry():
    return Registry(
        {
            "v6-60-2": EngineConfig(
                cam=CamSpec(
                    first_level=Level.HIGH,
                    edges=(
                        289, 389, 1189, 1289, 1489, 1589, 2089, 2189, 2689, 2789,
                        3889, 3989, 5089, 5189, 5689, 5789, 6289, 6389, 6589, 6689,
                    ),
                ),
                crank=CrankWheel.preset("60-2-inv"),
                ref_to_tdc0=658,
                cylinders=CylinderCount.CYL6,
            ),
            "i4-60-2": EngineConfig(
                cam=CamSpec(first_level=Level.LOW, edges=(450, 3150)),
                crank=CrankWheel.preset("60-2"),
                ref_to_tdc0=900,
                cylinders=CylinderCount.CYL4,
            ),
        }
    )
