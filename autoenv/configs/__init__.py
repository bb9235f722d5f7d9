from .schemas import (
    DEFAULT_CONFIG_NAME,
    AutoEnvConfig,
    dump_config,
    load_config,
    resolve_config,
    sample_config,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "AutoEnvConfig",
    "dump_config",
    "load_config",
    "resolve_config",
    "sample_config",
]
