"""Utility functions for type checking and configuration handling."""

import logging
from typing import Any, Optional, TypeVar, cast

from omegaconf import DictConfig, ListConfig, OmegaConf

from statring.core.types import RingConfig

logger = logging.getLogger(__name__)

# Define T as TypeVar that allows None to handle Optional values properly
T = TypeVar("T", bound=Optional[object])


def get_config_value(
    config: "DictConfig | RingConfig | dict[str, object] | None", key: str, default: Optional[T] = None
) -> Optional[T]:
    """Get a value from config object regardless of its actual type.

    Tries attribute access first (for DictConfig and dataclasses), then falls
    back to dictionary access.

    Args:
        config: The configuration object
        key: The key to access
        default: Default value to return if key is not found

    Returns:
        The value at the given key or the default
    """
    if config is None:
        return default

    try:
        value = getattr(config, key)
    except AttributeError:
        try:
            value = config[key]  # type: ignore[index]
        except (KeyError, TypeError):
            return default

    # DictConfig yields None for missing attribute keys instead of raising
    if value is None:
        return default
    return cast(Optional[T], value)


def to_ring_config(config: "DictConfig | RingConfig | dict[str, Any] | None") -> RingConfig:
    """Normalise any supported config source into a frozen `RingConfig`.

    Missing keys take the `RingConfig` defaults.  Omegaconf list nodes (e.g. a
    YAML ``shape: [3]``) are converted to plain tuples.
    """
    if isinstance(config, RingConfig):
        return config

    base = RingConfig()
    shape = get_config_value(config, "shape", base.shape)
    if isinstance(shape, ListConfig):
        shape = OmegaConf.to_container(shape)
    index_dtype = get_config_value(config, "index_dtype", base.index_dtype)

    out = RingConfig(
        capacity=int(get_config_value(config, "capacity", base.capacity)),
        dtype=str(get_config_value(config, "dtype", base.dtype)),
        shape=tuple(int(n) for n in shape),
        index_dtype=None if index_dtype is None else str(index_dtype),
        strict=bool(get_config_value(config, "strict", base.strict)),
    )
    logger.debug("Resolved ring config: %s", out)
    return out
