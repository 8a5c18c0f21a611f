"""
Parameter lists with an explicit rest entry

A parameter list is a list of tagged dictionaries:
  {'kind': 'positional', 'name': Symbol}
  {'kind': 'rest', 'name': Symbol}
The textual `&` marker is only recognised while parsing a raw symbol list;
once parsed, frames are built from the tags alone.
"""

from typing import Any, Dict, List, Optional, Sequence

from values import Symbol
from utilities import as_symbol, as_sequence, arity_error
from error_handling import ParameterListError


VARIADIC_MARKER = Symbol("&")


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_param(name: Any) -> Dict:
  """Create an ordinary positional parameter"""
  return {
      'kind': 'positional',
      'name': as_symbol(name)
  }


def make_rest_param(name: Any) -> Dict:
  """Create a rest parameter collecting the remaining arguments"""
  return {
      'kind': 'rest',
      'name': as_symbol(name)
  }


def make_arity(minimum: int, maximum: Optional[int]) -> Dict:
  """Arity bounds; maximum None means unbounded"""
  return {
      'min': minimum,
      'max': maximum
  }


def is_param_entry(entry: Any) -> bool:
  return isinstance(entry, dict) and entry.get('kind') in ('positional', 'rest') and 'name' in entry


def is_parsed_parameter_list(binds: Sequence[Any]) -> bool:
  return all(is_param_entry(entry) for entry in binds)


# ============================================================================
# PARSING
# ============================================================================

def parse_parameter_list(symbols: Sequence[Any]) -> List[Dict]:
  """
  Turn a raw symbol sequence such as (a b & rest) into tagged entries

  Raises:
    ParameterListError if `&` appears more than once, has no name after it,
    or is not the penultimate entry
  """
  names = [as_symbol(symbol) for symbol in symbols]
  marker_count = sum(1 for name in names if name == VARIADIC_MARKER)

  if marker_count == 0:
    return [make_param(name) for name in names]

  if marker_count > 1:
    raise ParameterListError(f"Too many '&' markers in parameter list: {marker_count}")

  if len(names) < 2:
    raise ParameterListError("'&' must be followed by a parameter name")

  if names[-2] != VARIADIC_MARKER:
    raise ParameterListError("'&' must be the penultimate entry of a parameter list")

  positional = [make_param(name) for name in names[:-2]]
  return positional + [make_rest_param(names[-1])]


def validate_parameter_list(params: Sequence[Dict]) -> List[Dict]:
  """
  Check already tagged entries

  Raises:
    ParameterListError if there is more than one rest entry or the rest
    entry is not last
  """
  params = list(params)
  rest_count = sum(1 for param in params if param['kind'] == 'rest')
  if rest_count > 1:
    raise ParameterListError(f"Too many rest entries in parameter list: {rest_count}")
  if rest_count == 1 and params[-1]['kind'] != 'rest':
    raise ParameterListError("The rest entry must be the last entry of a parameter list")
  return params


def ensure_parameter_list(binds: Any) -> List[Dict]:
  """Accept tagged entries, a raw symbol sequence, or a list/vector value"""
  binds = as_sequence(binds)
  if is_parsed_parameter_list(binds):
    return validate_parameter_list(binds)
  return parse_parameter_list(binds)


# ============================================================================
# ARITY
# ============================================================================

def parameter_arity(params: Sequence[Dict]) -> Dict:
  """Compute how many arguments a parameter list accepts"""
  positional = sum(1 for param in params if param['kind'] == 'positional')
  if any(param['kind'] == 'rest' for param in params):
    return make_arity(positional, None)
  return make_arity(positional, positional)


def format_arity(arity: Dict) -> str:
  if arity['max'] is None:
    return f"at least {arity['min']}"
  if arity['min'] == arity['max']:
    return f"exactly {arity['min']}"
  return f"from {arity['min']} to {arity['max']}"


def arity_accepts(arity: Dict, got: int) -> bool:
  if got < arity['min']:
    return False
  return arity['max'] is None or got <= arity['max']


def validate_arity(arity: Dict, got: int, name: str = "closure") -> None:
  """
  Raises:
    ArityError if got arguments do not fit the arity
  """
  if not arity_accepts(arity, got):
    raise arity_error(name, format_arity(arity), got)


def format_parameters(params: Sequence[Dict]) -> str:
  """Print a parameter list back in `a b & rest` form"""
  parts = []
  for param in params:
    if param['kind'] == 'rest':
      parts.append(VARIADIC_MARKER.name)
    parts.append(param['name'].name)
  return " ".join(parts)
