"""
Configuration module

Namespace prefixes and name overrides for one generation run.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
import json

from .errors import ConfigError


@dataclass(frozen=True)
class Config:
    """Read-only naming context threaded through every resolution call"""
    prefixes: Mapping[str, str] = field(default_factory=dict)
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'prefixes', MappingProxyType(dict(self.prefixes)))
        object.__setattr__(self, 'names', MappingProxyType(dict(self.names)))

    @classmethod
    def load(cls, json_path: str) -> 'Config':
        """Load configuration from a JSON file"""
        with open(json_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f'{json_path}: {e}') from e
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Create configuration from a dictionary"""
        if not isinstance(data, dict):
            raise ConfigError('configuration root must be an object')
        prefixes = _string_table(data, 'prefixes')
        names = _string_table(data, 'names')
        return cls(prefixes=prefixes, names=names)

    def merged(self, other: 'Config') -> 'Config':
        """Overlay another configuration on top of this one"""
        return Config(prefixes={**self.prefixes, **other.prefixes},
                      names={**self.names, **other.names})


def _string_table(data: dict, key: str) -> dict[str, str]:
    table = data.get(key, {})
    if not isinstance(table, dict):
        raise ConfigError(f'"{key}" must be an object')
    for k, v in table.items():
        if not isinstance(v, str):
            raise ConfigError(f'"{key}.{k}" must be a string, got {v!r}')
    return dict(table)
