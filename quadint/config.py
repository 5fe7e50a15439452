import sys

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

if sys.version_info >= (3, 11):
    import tomllib as toml
else:
    import tomli as toml

DEFAULT_PRIME_PI = 720
DEFAULT_SURD_PART_SEARCH_THRESHOLD = 4800
DEFAULT_CACHE_CAPACITY = 32
# Largest |discriminant| the class number sums run over
DEFAULT_CLASS_NUMBER_LIMIT = 100_000
MINIMUM_CACHE_CAPACITY = 4


# TODO: Once Py3.9 support has been dropped, add slots=True
@dataclass(frozen=True)
class FormatOptions:
    """Presentation choices for ring and ideal strings. Arithmetic never looks at these."""
    prefer_blackboard_bold: bool = False


DEFAULT_FORMAT = FormatOptions()


@dataclass(frozen=True)
class Settings:
    """
    Tunables for prime classification and the results cache.

    Attributes:
        prime_pi: Rational primes up to and including this bound get classified.
        surd_part_search_threshold: Exclusive upper bound on the surd multiplier tried by the factor search.
        class_number_limit: Class numbers of rings whose discriminant exceeds this in absolute value are not computed.
        cache_capacity: Number of rings the results cache keeps.
        format: Presentation options.
    """
    prime_pi: int = DEFAULT_PRIME_PI
    surd_part_search_threshold: int = DEFAULT_SURD_PART_SEARCH_THRESHOLD
    class_number_limit: int = DEFAULT_CLASS_NUMBER_LIMIT
    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    format: FormatOptions = field(default_factory=FormatOptions)

    def __post_init__(self) -> None:
        if self.prime_pi < 0:
            raise ValueError(f"prime_pi must be >= 0, got {self.prime_pi}")
        if self.surd_part_search_threshold < 1:
            raise ValueError(f"surd_part_search_threshold must be >= 1, got {self.surd_part_search_threshold}")
        if self.class_number_limit < 0:
            raise ValueError(f"class_number_limit must be >= 0, got {self.class_number_limit}")
        if self.cache_capacity < MINIMUM_CACHE_CAPACITY:
            raise ValueError(f"cache_capacity must be >= {MINIMUM_CACHE_CAPACITY}, got {self.cache_capacity}")


# table -> key -> (Settings field, expected type)
_SCHEMA: dict[str, dict[str, tuple[str, type]]] = {
    "grouping": {
        "prime_pi": ("prime_pi", int),
        "surd_part_search_threshold": ("surd_part_search_threshold", int),
        "class_number_limit": ("class_number_limit", int),
    },
    "cache": {
        "capacity": ("cache_capacity", int),
    },
    "format": {
        "prefer_blackboard_bold": ("prefer_blackboard_bold", bool),
    },
}


def settings_from_dict(data: dict[str, Any], source: str = "<dict>") -> Settings:
    """
    Build Settings from parsed TOML tables.

    Args:
        data: Mapping of table name to a mapping of keys. Every table is optional.
        source: Where the data came from, used in error messages.

    Raises:
        ValueError: On unknown tables or keys, wrongly typed values, or out of range values.

    Returns:
        Settings: The validated settings.
    """
    values: dict[str, Any] = {}
    for table, entries in data.items():
        if table not in _SCHEMA:
            raise ValueError(f"{source}: unknown table [{table}]")
        if not isinstance(entries, dict):
            raise ValueError(f"{source}: [{table}] must be a table")

        for key, value in entries.items():
            if key not in _SCHEMA[table]:
                raise ValueError(f"{source}: unknown key {table}.{key}")

            name, kind = _SCHEMA[table][key]
            # bool is a subclass of int
            if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
                raise ValueError(f"{source}: {table}.{key} must be of type {kind.__name__}, got {value!r}")
            values[name] = value

    fmt = FormatOptions(prefer_blackboard_bold=values.pop("prefer_blackboard_bold", False))
    try:
        return Settings(format=fmt, **values)
    except ValueError as e:
        raise ValueError(f"{source}: {e}") from e


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Read Settings from a TOML file.

    Example file:
        [grouping]
        prime_pi = 1000
        surd_part_search_threshold = 10000
        class_number_limit = 1000000

        [cache]
        capacity = 16

        [format]
        prefer_blackboard_bold = true

    Raises:
        ValueError: If the file is not valid TOML or holds invalid settings.

    Returns:
        Settings: The loaded settings.
    """
    path = Path(path)
    with path.open("rb") as f:
        try:
            data = toml.load(f)
        except toml.TOMLDecodeError as e:
            raise ValueError(f"{path}: {e}") from e

    return settings_from_dict(data, source=str(path))
