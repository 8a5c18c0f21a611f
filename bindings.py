"""
Binding maps: the per-frame Symbol -> value store

Lookups report presence explicitly so a symbol bound to nil (or to Python
None) is never mistaken for an unbound one.
"""

from typing import Any, Dict, Iterator, Optional, Tuple

from values import Symbol
from utilities import as_symbol


def make_bindings(initial: Optional[Dict[Any, Any]] = None) -> Dict[Symbol, Any]:
  """Create an empty binding map, optionally seeded from another mapping"""
  bindings = {}
  for key, value in (initial or {}).items():
    bindings_put(bindings, as_symbol(key), value)
  return bindings


def bindings_put(bindings: Dict[Symbol, Any], key: Symbol, value: Any) -> Dict[Symbol, Any]:
  """Bind key to value in place, replacing any previous value; returns the map"""
  bindings[key] = value
  return bindings


def bindings_contains(bindings: Dict[Symbol, Any], key: Symbol) -> bool:
  return key in bindings


def bindings_lookup(bindings: Dict[Symbol, Any], key: Symbol) -> Tuple[bool, Any]:
  """Return (True, value) when key is bound here, (False, None) otherwise"""
  if key in bindings:
    return True, bindings[key]
  return False, None


def bindings_items(bindings: Dict[Symbol, Any]) -> Iterator[Tuple[Symbol, Any]]:
  return iter(list(bindings.items()))
