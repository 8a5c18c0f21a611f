"""
Lexical environments - Pure Functional Style
Frames are dictionaries holding a shared parent reference and a private
binding map. Only env_new and env_set write to a binding map.
"""

from typing import Any, Dict, Optional, Sequence

from values import make_list
from bindings import make_bindings, bindings_put, bindings_contains, bindings_lookup, bindings_items
from parameters import ensure_parameter_list, parameter_arity, validate_arity
from utilities import as_symbol, as_sequence, unbound_symbol_error
from printer import pr_str


# ============================================================================
# DATA STRUCTURES
# ============================================================================

def make_frame(parent: Optional[Dict] = None, bindings: Optional[Dict] = None) -> Dict:
  """Create a frame; its parent link is fixed from here on"""
  return {
      'parent': parent,
      'bindings': make_bindings(bindings)
  }


# ============================================================================
# FRAME CONSTRUCTION
# ============================================================================

def env_new(outer: Optional[Dict], binds: Sequence[Any], exprs: Sequence[Any],
            debug: bool = False, name: str = "closure") -> Dict:
  """
  Build a frame under `outer` binding parameters to argument values.

  A rest parameter takes the remaining arguments as one list value and
  ends processing. Raises ArityError before any frame exists when the
  argument count does not fit.
  """
  params = ensure_parameter_list(binds)
  exprs = as_sequence(exprs)
  validate_arity(parameter_arity(params), len(exprs), name)

  env = make_frame(outer)
  for position, param in enumerate(params):
    if param['kind'] == 'rest':
      bindings_put(env['bindings'], param['name'], make_list(exprs[position:]))
      break
    bindings_put(env['bindings'], param['name'], exprs[position])

  if debug:
    print(f"New frame with {len(env['bindings'])} bindings at depth {env_depth(env)}")

  return env


def create_root_env(primitives: Optional[Dict[Any, Any]] = None) -> Dict:
  """Create the global frame and bind the caller's primitive table into it"""
  env = make_frame()
  for key, value in (primitives or {}).items():
    env_set(env, key, value)
  return env


# ============================================================================
# ACCESSORS
# ============================================================================

def env_outer(env: Dict) -> Optional[Dict]:
  return env['parent']


def env_data(env: Dict) -> Dict:
  return env['bindings']


# ============================================================================
# LOOKUP AND MUTATION
# ============================================================================

def env_find(env: Optional[Dict], key: Any, debug: bool = False) -> Optional[Dict]:
  """Return the nearest frame, starting at env, whose own bindings hold key"""
  symbol = as_symbol(key)
  frame = env
  visited = 0
  while frame is not None:
    visited += 1
    if bindings_contains(frame['bindings'], symbol):
      if debug:
        print(f"Found {symbol} after visiting {visited} frame(s)")
      return frame
    frame = frame['parent']

  if debug:
    print(f"{symbol} unbound after visiting {visited} frame(s)")
  return None


def env_get(env: Optional[Dict], key: Any, debug: bool = False) -> Any:
  """
  Resolve key to its value in the nearest frame that defines it.

  Raises:
    UnboundSymbolError if no frame in the chain binds key
  """
  symbol = as_symbol(key)
  frame = env_find(env, symbol, debug)
  if frame is None:
    snapshot = env_snapshot(env) if debug else None
    raise unbound_symbol_error(pr_str(symbol), snapshot)

  _, value = bindings_lookup(frame['bindings'], symbol)
  return value


def env_set(env: Dict, key: Any, val: Any, debug: bool = False) -> Any:
  """Bind key to val in env's own frame and return val"""
  symbol = as_symbol(key)
  bindings_put(env['bindings'], symbol, val)
  if debug:
    print(f"Set {symbol} = {pr_str(val)}")
  return val


# ============================================================================
# INTROSPECTION
# ============================================================================

def env_depth(env: Optional[Dict]) -> int:
  """Number of frames from env up to and including the root"""
  depth = 0
  frame = env
  while frame is not None:
    depth += 1
    frame = frame['parent']
  return depth


def env_snapshot(env: Optional[Dict]) -> Dict[str, Any]:
  """Visible bindings by name, inner frames shadowing outer ones"""
  chain = []
  frame = env
  while frame is not None:
    chain.append(frame)
    frame = frame['parent']

  snapshot = {}
  for frame in reversed(chain):
    for symbol, value in bindings_items(frame['bindings']):
      snapshot[symbol.name] = value
  return snapshot
