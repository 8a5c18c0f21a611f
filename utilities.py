"""
Utilities module for the environment core
Contains common helper functions to reduce code duplication
"""

from typing import Any, List, Optional

from values import Symbol, is_value_dict
from error_handling import ArityError, UnboundSymbolError


# ==================== VALUE EXTRACTION UTILITIES ====================

def extract_from_wrapper(
  data: Any,
  wrapper_type: Optional[str] = None,
  default: Any = None
) -> Any:
  """
  Generic extraction from tuple/dict wrappers

  Args:
    data: Input data (can be str, tuple, dict, or raw value)
    wrapper_type: Expected wrapper type (e.g., "Symbol")
    default: Default value if extraction fails

  Returns:
    Extracted value or default

  Examples:
    extract_from_wrapper("foo") -> "foo"
    extract_from_wrapper(("Symbol", "foo"), "Symbol") -> "foo"
    extract_from_wrapper({"type": "Symbol", "value": "foo"}, "Symbol") -> "foo"
  """
  if isinstance(data, str):
    return data
  elif isinstance(data, tuple) and len(data) >= 2:
    if wrapper_type is None or data[0] == wrapper_type:
      return data[1]
  elif is_value_dict(data):
    if wrapper_type is None or data['type'] == wrapper_type:
      return data['value']
  return default


def as_symbol(key: Any) -> Symbol:
  """
  Coerce a binding key to a Symbol

  Accepts a Symbol, a plain string, or a wrapped symbol value

  Raises:
    TypeError if key cannot name a binding
  """
  if isinstance(key, Symbol):
    return key
  extracted = extract_from_wrapper(key, "Symbol")
  if isinstance(extracted, Symbol):
    return extracted
  if isinstance(extracted, str):
    return Symbol(extracted)
  raise TypeError(f"Cannot use {key!r} as a binding key")


def as_sequence(data: Any) -> List[Any]:
  """
  Coerce binds or argument values to a plain Python list

  Accepts a list/vector value or any non-dict Python iterable

  Raises:
    TypeError for any other value dict, mapping or non-iterable
  """
  if is_value_dict(data):
    if data['type'] in ("List", "Vector"):
      return list(data['value'])
    raise TypeError(f"Expected a list or vector, got {data['type']}")
  if isinstance(data, (dict, str)):
    raise TypeError(f"Expected a sequence, got {type(data).__name__}")
  return list(data)


# ==================== ERROR MESSAGE BUILDERS ====================

def unbound_symbol_error(symbol_text: str, env_snapshot: Optional[dict] = None) -> UnboundSymbolError:
  """
  Generate unbound symbol error

  Args:
    symbol_text: Printed form of the symbol
    env_snapshot: Visible bindings at the point of failure

  Returns:
    UnboundSymbolError with formatted message
  """
  return UnboundSymbolError(symbol_text, env_snapshot)


def arity_error(func_name: str, expected: str, got: int) -> ArityError:
  """
  Generate arity mismatch error

  Args:
    func_name: Function name
    expected: Printed arity, e.g. "exactly 2" or "at least 1"
    got: Actual number of arguments

  Returns:
    ArityError with formatted message
  """
  return ArityError(func_name, expected, got)
