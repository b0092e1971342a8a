"""JSON config file loading utilities."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from handpuppet.core.config import PuppetConfig, config_from_dict, get_variant

logger = logging.getLogger(__name__)


def load_json(path: Path) -> Any:
    """Load and return parsed JSON from a file."""
    with open(path) as f:
        return json.load(f)


def load_puppet_config(path: Optional[Path], variant: str = "organ") -> PuppetConfig:
    """Load a variant preset, overridden by the JSON object at ``path``.

    The file may name its own base with a ``"variant"`` key.
    """
    if path is None:
        return get_variant(variant)

    data = load_json(Path(path))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")

    base_name = data.pop("variant", variant)
    try:
        return config_from_dict(data, get_variant(base_name))
    except ValueError as e:
        logger.warning("Invalid config %s: %s", path, e)
        raise
