"""
Definitions handling

The core preprocessor takes any mapping of names to values. This module fixes
how those values are read as true or false, and provides the helpers the
command line uses to build a mapping from -D flags and YAML files.

Truthiness rule (definition_isTruthy):
    absent / None        -> False
    bool                 -> itself
    int, float           -> False for zero and NaN, True otherwise
    str                  -> False for "", True otherwise ("0" is True)
    anything else        -> bool(value)

String spellings such as "false" or "off" are only interpreted by
define_parse(), i.e. on the command line.
"""

import math
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

from .errors import DefinitionsError


VARIABLE_PATTERN = re.compile(r'[A-Za-z0-9_-]+')

FALSE_SPELLINGS = {"", "0", "false", "no", "off"}


def definition_isTruthy(value: Any) -> bool:
    """
    Classify a definitions-mapping value as true or false

    Args:
        value: Value looked up in the definitions mapping (None if absent)

    Returns:
        True if the value enables ifdef blocks guarded by its name

    Example:
        >>> definition_isTruthy(0), definition_isTruthy("0"), definition_isTruthy([])
        (False, True, False)
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    if isinstance(value, str):
        return value != ""
    return bool(value)


def definition_lookup(defined: Mapping[str, Any], name: str) -> bool:
    """Truthiness of `name` in `defined`; unknown names are false"""
    return definition_isTruthy(defined.get(name))


def name_validate(name: Any) -> str:
    """Return name if it is a valid directive variable, else raise DefinitionsError"""
    if not isinstance(name, str) or not VARIABLE_PATTERN.fullmatch(name):
        raise DefinitionsError(
            f"Invalid definition name {name!r}: expected letters, digits, '-' or '_'"
        )
    return name


def define_parse(text: str) -> Tuple[str, bool]:
    """
    Parse a command line definition

    Args:
        text: "NAME" or "NAME=VALUE"

    Returns:
        (name, flag). NAME alone is true. VALUE is false when it is one of
        "", "0", "false", "no", "off" (any case), true otherwise.

    Raises:
        DefinitionsError: If NAME is not a valid variable name

    Example:
        >>> define_parse("DEBUG")
        ('DEBUG', True)
        >>> define_parse("DEBUG=off")
        ('DEBUG', False)
    """
    name, sep, value = text.partition('=')
    name = name_validate(name.strip())
    if not sep:
        return name, True
    return name, value.strip().lower() not in FALSE_SPELLINGS


def definitions_load(path: Union[str, Path]) -> Dict[str, bool]:
    """
    Load definitions from a YAML mapping file

    The file must contain a single top-level mapping of names to values.
    Values are normalised with definition_isTruthy().

    Args:
        path: Path to the YAML file

    Returns:
        Dict mapping names to booleans (empty for an empty file)

    Raises:
        DefinitionsError: If the file cannot be read or parsed, is not a
                          mapping, or contains invalid names
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DefinitionsError(f"Failed to parse definitions file {path}: {e}") from e
    except OSError as e:
        raise DefinitionsError(f"Failed to read definitions file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DefinitionsError(
            f"Definitions file {path} must contain a mapping, got {type(data).__name__}"
        )

    return {name_validate(name): definition_isTruthy(value) for name, value in data.items()}
