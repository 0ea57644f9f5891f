"""
lpgraph Graph Configuration
===========================
Typed configuration for the graph preparation pipeline.

Module: lpgraph/config/settings.py

Purpose:
    Resolve raw configuration (string key/value pairs, YAML files) into the
    typed values the pipeline takes, and reject missing or out-of-range
    parameters before any graph is touched:
    - ParameterSpec table with types, defaults and ranges
    - String -> bool/int/float resolution
    - Cross-parameter validation (e.g. Gaussian weights need a sigma)
    - Persistence to YAML

Components:
    - ParameterType: Enum for parameter types
    - ParameterSpec: Single parameter specification
    - GraphConfig: Typed pipeline configuration

Dependencies:
    - yaml: Configuration file I/O

Input:
    - Dict[str, Any] with keys such as "is_directed", "beta", "train_fract"
    - YAML files with the same keys (top level or under "graph:")

Output:
    - Validated GraphConfig objects

Called by:
    - lpgraph/pipeline/loader.py

Version: 1.0.0
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from lpgraph.core.exceptions import ConfigurationError
from lpgraph.graph.builder import GraphBuilderConfig

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


# =============================================================================
# Parameter Specification
# =============================================================================
class ParameterType(str, Enum):
    """Parameter value types"""
    FLOAT = "float"
    INT = "int"
    BOOL = "bool"


@dataclass
class ParameterSpec:
    """
    Single configuration parameter

    ``name`` is the key accepted in raw configuration; ``field_name`` is the
    GraphConfig attribute it populates.
    """
    name: str
    field_name: str
    param_type: ParameterType
    description: str
    default: Any = None

    # Constraints
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    exclusive: bool = False  # bounds are open when True

    def parse(self, raw: Any) -> Any:
        """Convert a raw (usually string) value to the parameter's type"""
        if raw is None:
            return None
        try:
            if self.param_type == ParameterType.BOOL:
                if isinstance(raw, bool):
                    return raw
                text = str(raw).strip().lower()
                if text in _TRUE_STRINGS:
                    return True
                if text in _FALSE_STRINGS:
                    return False
                raise ValueError(raw)
            if self.param_type == ParameterType.INT:
                if isinstance(raw, bool):
                    raise ValueError(raw)
                if isinstance(raw, float) and not raw.is_integer():
                    raise ValueError(raw)
                return int(str(raw).strip()) if isinstance(raw, str) else int(raw)
            return float(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid {self.param_type.value} for {self.name}: {raw!r}",
                parameter=self.field_name,
            ) from None

    def validate(self, value: Any) -> bool:
        """Validate a value against constraints (None always passes)"""
        if value is None or self.param_type == ParameterType.BOOL:
            return True
        if self.min_value is not None:
            if value < self.min_value or (self.exclusive and value == self.min_value):
                return False
        if self.max_value is not None:
            if value > self.max_value or (self.exclusive and value == self.max_value):
                return False
        return True


# =============================================================================
# Graph Configuration
# =============================================================================
@dataclass
class GraphConfig:
    """
    Pipeline configuration

    Optional steps are disabled when their parameter is None.
    """
    # Assembly
    directed: bool = False

    # Seed injection (None = no cap)
    max_seeds_per_class: Optional[int] = None

    # Degree pruning
    prune_threshold: Optional[int] = None

    # Random walk
    beta: float = 2.0

    # Gaussian kernel reweighting
    set_gaussian_weights: bool = False
    sigma_factor: Optional[float] = None

    # kNN retention
    top_k: Optional[int] = None

    # Random train/test split
    train_fraction: Optional[float] = None
    split_seed: Optional[int] = None

    @classmethod
    def get_specs(cls) -> List[ParameterSpec]:
        """Get parameter specifications"""
        return [
            ParameterSpec(
                name="is_directed",
                field_name="directed",
                param_type=ParameterType.BOOL,
                description="Treat edges as directed (no reverse adjacency entry)",
                default=False,
            ),
            ParameterSpec(
                name="max_seeds_per_class",
                field_name="max_seeds_per_class",
                param_type=ParameterType.INT,
                description="Maximum number of vertices injected per label",
                min_value=0,
            ),
            ParameterSpec(
                name="prune_threshold",
                field_name="prune_threshold",
                param_type=ParameterType.INT,
                description="Drop outgoing edges of vertices with fewer neighbors",
                min_value=0,
            ),
            ParameterSpec(
                name="beta",
                field_name="beta",
                param_type=ParameterType.FLOAT,
                description="Random-walk regularization constant",
                default=2.0,
                min_value=0,
                exclusive=True,
            ),
            ParameterSpec(
                name="set_gaussian_kernel_weights",
                field_name="set_gaussian_weights",
                param_type=ParameterType.BOOL,
                description="Convert squared-distance weights with a Gaussian kernel",
                default=False,
            ),
            ParameterSpec(
                name="gauss_sigma_factor",
                field_name="sigma_factor",
                param_type=ParameterType.FLOAT,
                description="Gaussian kernel bandwidth",
                min_value=0,
                exclusive=True,
            ),
            ParameterSpec(
                name="top_k_neighbors",
                field_name="top_k",
                param_type=ParameterType.INT,
                description="Keep only the K heaviest neighbors per vertex",
                min_value=1,
            ),
            ParameterSpec(
                name="train_fract",
                field_name="train_fraction",
                param_type=ParameterType.FLOAT,
                description="Fraction of gold-labeled vertices used as seeds in a random split",
                min_value=0,
                max_value=1,
                exclusive=True,
            ),
            ParameterSpec(
                name="split_seed",
                field_name="split_seed",
                param_type=ParameterType.INT,
                description="Random seed for the train/test split",
            ),
        ]

    @classmethod
    def _spec_index(cls) -> Dict[str, ParameterSpec]:
        index: Dict[str, ParameterSpec] = {}
        for spec in cls.get_specs():
            index[spec.name] = spec
            index[spec.field_name] = spec
        return index

    # =========================================================================
    # Construction
    # =========================================================================
    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GraphConfig":
        """
        Resolve a raw key/value mapping into a validated GraphConfig

        Keys may be the raw names ("is_directed", "train_fract", ...) or the
        attribute names. Unknown keys are ignored.

        Raises:
            ConfigurationError: Unparseable, out-of-range or missing values
        """
        index = cls._spec_index()
        values: Dict[str, Any] = {}

        for key, value in raw.items():
            spec = index.get(key)
            if spec is None:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            values[spec.field_name] = spec.parse(value)

        # An explicit null keeps the default for non-optional fields
        if values.get("beta") is None:
            values.pop("beta", None)
        for flag in ("directed", "set_gaussian_weights"):
            if values.get(flag) is None:
                values.pop(flag, None)

        config = cls(**values)
        config.validate()
        return config

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GraphConfig":
        """Load configuration from YAML file"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        if isinstance(data.get("graph"), dict):
            data = data["graph"]

        config = cls.from_dict(data)
        logger.info(f"Configuration loaded from {path}")
        return config

    # =========================================================================
    # Validation
    # =========================================================================
    def validate(self) -> None:
        """
        Check every parameter and the parameters each enabled step needs

        Raises:
            ConfigurationError: First problem found
        """
        index = self._spec_index()

        for f in fields(self):
            spec = index[f.name]
            value = getattr(self, f.name)
            if not spec.validate(value):
                raise ConfigurationError(
                    f"Invalid value for {spec.name}: {value}", parameter=f.name
                )

        if self.beta is None:
            raise ConfigurationError("beta is required", parameter="beta")

        if self.set_gaussian_weights and self.sigma_factor is None:
            raise ConfigurationError(
                "gauss_sigma_factor is required when set_gaussian_kernel_weights is enabled",
                parameter="sigma_factor",
            )

    # =========================================================================
    # Conversion / Persistence
    # =========================================================================
    def to_dict(self) -> Dict[str, Any]:
        """Raw-key dict, accepted back by from_dict"""
        index = {spec.field_name: spec.name for spec in self.get_specs()}
        return {index[k]: v for k, v in asdict(self).items()}

    def to_builder_config(self) -> GraphBuilderConfig:
        """Convert to GraphBuilderConfig"""
        return GraphBuilderConfig(
            directed=self.directed,
            max_seeds_per_class=self.max_seeds_per_class,
            prune_threshold=self.prune_threshold,
            beta=self.beta,
        )

    def save_to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump({"graph": self.to_dict()}, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {path}")


__all__ = [
    "ParameterType",
    "ParameterSpec",
    "GraphConfig",
]
