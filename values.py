"""
Value model for the environment core
Symbols are frozen dataclasses so they can key a binding map;
every other runtime value is an immutable value dictionary
"""

from typing import Any, Dict, Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Symbol:
  """A symbolic name, compared by value"""
  name: str

  def __str__(self) -> str:
    return self.name


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_value(value: Any, type_name: str = "Unknown") -> Dict:
  """Create an immutable runtime value"""
  return {
      'value': value,
      'type': type_name
  }


NIL = make_value(None, "Nil")
TRUE = make_value(True, "Bool")
FALSE = make_value(False, "Bool")


def make_list(elements: Iterable[Any]) -> Dict:
  """Create a list value holding the given elements in order"""
  return make_value(list(elements), "List")


def make_vector(elements: Iterable[Any]) -> Dict:
  return make_value(list(elements), "Vector")


def make_string(payload: str) -> Dict:
  return make_value(payload, "String")


def make_keyword(name: str) -> Dict:
  return make_value(name, "Keyword")


def make_map(entries: Dict) -> Dict:
  return make_value(dict(entries), "Map")


# ============================================================================
# PREDICATES
# ============================================================================

def is_value_dict(val: Any) -> bool:
  """True if val is a dict with 'type' and 'value' keys"""
  return isinstance(val, dict) and 'type' in val and 'value' in val
