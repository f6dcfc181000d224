"""Configuration model for the FAT folder sorter."""

from pathlib import Path
import json
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError
from .entry import OrderingPolicy


@dataclass
class SortingConfig:
    """Configuration for the order entries are written in."""
    order: str = "first"  # "first", "last", or "mixed"
    case_sensitive: bool = False
    recurse: bool = True

    @property
    def policy(self) -> OrderingPolicy:
        return OrderingPolicy.from_name(self.order)


@dataclass
class ThrottleConfig:
    """Delays in milliseconds before each kind of filesystem operation.

    Slow media and anti-virus scanners can lag behind folder creation and
    deletion. Zero disables a delay.
    """
    create_ms: int = 20
    delete_ms: int = 50
    move_ms: int = 10
    rename_ms: int = 200


@dataclass
class Config:
    """Main configuration model."""
    sorting: SortingConfig = field(default_factory=SortingConfig)
    throttle: ThrottleConfig = field(default_factory=ThrottleConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create a default configuration."""
        return cls()

    def validate(self) -> None:
        """Raise ConfigurationError if any value has the wrong type or is out of range."""
        if not isinstance(self.sorting.order, str):
            raise ConfigurationError(f"sorting.order must be a string, got {self.sorting.order!r}")
        # Raises for unknown order names
        self.sorting.policy
        for name in ("case_sensitive", "recurse"):
            value = getattr(self.sorting, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"sorting.{name} must be true or false, got {value!r}")
        for name in ("create_ms", "delete_ms", "move_ms", "rename_ms"):
            value = getattr(self.throttle, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"throttle.{name} must be a non-negative integer, got {value!r}")


def _dataclass_to_dict(obj):
    """Convert dataclass to dict recursively."""
    from dataclasses import is_dataclass, asdict
    if is_dataclass(obj):
        result = {}
        for key, value in asdict(obj).items():
            result[key] = _dataclass_to_dict(value)
        return result
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    else:
        return obj


def _dict_to_dataclass(data, dataclass_type):
    """Convert dict to dataclass recursively."""
    from dataclasses import is_dataclass, fields
    if not is_dataclass(dataclass_type):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected an object for {dataclass_type.__name__}, got {data!r}")

    kwargs = {}
    for f in fields(dataclass_type):
        if f.name in data:
            if is_dataclass(f.default_factory):
                kwargs[f.name] = _dict_to_dataclass(data[f.name], f.default_factory)
            else:
                kwargs[f.name] = data[f.name]

    return dataclass_type(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from a JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Can't read configuration file {config_path}: {e}")

    config = _dict_to_dataclass(config_data, Config)
    config.validate()
    return config


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _dataclass_to_dict(config)

    with open(config_path, 'w') as f:
        json.dump(config_dict, f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(Config.default(), config_path)
