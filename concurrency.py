"""
Shared frames for concurrent evaluation (Using Pykka)

env_set mutates a frame in place, so a frame reachable from several
threads is handed to a FrameActor: every read and write of that frame's
bindings then happens on the actor's thread, one message at a time.
"""

from typing import Any, Dict, Optional
import uuid
import pykka

from environment import env_find, env_get, env_set, env_snapshot
from bindings import bindings_lookup
from utilities import as_symbol, unbound_symbol_error
from printer import pr_str


# ============================================================================
# ACTOR SYSTEM
# ============================================================================

class FrameActorRegistry:
  """Registry for managing frame actors"""

  def __init__(self):
    self.actors: Dict[str, pykka.ActorRef] = {}
    self.frames: Dict[str, Dict] = {}

  def register(self, actor_id: str, actor_ref: pykka.ActorRef, env: Dict):
    self.actors[actor_id] = actor_ref
    self.frames[actor_id] = env

  def get_frame(self, actor_id: str) -> Optional[Dict]:
    return self.frames.get(actor_id)

  def get_actor(self, actor_id: str) -> Optional[pykka.ActorRef]:
    return self.actors.get(actor_id)

  def unregister(self, actor_id: str) -> Optional[pykka.ActorRef]:
    self.frames.pop(actor_id, None)
    return self.actors.pop(actor_id, None)

  def terminate_all(self):
    """Stop every registered actor"""
    for actor_ref in list(self.actors.values()):
      if actor_ref.is_alive():
        actor_ref.stop()
    self.actors.clear()
    self.frames.clear()


_frame_registry = FrameActorRegistry()


class FrameActor(pykka.ThreadingActor):
  """Actor that owns one frame and serialises access to it"""

  def __init__(self, actor_id: str, env: Dict, debug: bool = False):
    super().__init__()
    self.actor_id = actor_id
    self.env = env
    self.debug = debug

  def on_receive(self, message: Dict) -> Any:
    """Apply one lookup or mutation; errors propagate to the asker"""
    op = message['op']
    if self.debug:
      print(f"Frame actor {self.actor_id} handling {op}")

    if op == 'set':
      return env_set(self.env, message['key'], message['value'])
    elif op == 'get':
      return env_get(self.env, message['key'])
    elif op == 'find':
      return env_find(self.env, message['key']) is not None
    elif op == 'snapshot':
      return env_snapshot(self.env)
    raise ValueError(f"Unknown frame operation: {op}")


def _require_actor(actor_id: str) -> pykka.ActorRef:
  actor_ref = _frame_registry.get_actor(actor_id)
  if actor_ref is None:
    raise RuntimeError(f"Frame actor not found: {actor_id}")
  return actor_ref


# ============================================================================
# PUBLIC OPERATIONS
# ============================================================================

def spawn_frame_actor(env: Dict, debug: bool = False) -> str:
  """Hand env to a new actor and return the actor's id"""
  actor_id = str(uuid.uuid4())
  actor_ref = FrameActor.start(actor_id, env, debug)
  _frame_registry.register(actor_id, actor_ref, env)
  return actor_id


def shared_env_set(actor_id: str, key: Any, val: Any, timeout: Optional[float] = None) -> Any:
  return _require_actor(actor_id).ask({'op': 'set', 'key': key, 'value': val}, timeout=timeout)


def shared_env_get(actor_id: str, key: Any, timeout: Optional[float] = None) -> Any:
  """Resolve key through the actor; UnboundSymbolError is re-raised here"""
  return _require_actor(actor_id).ask({'op': 'get', 'key': key}, timeout=timeout)


def shared_child_get(actor_id: str, env: Dict, key: Any, timeout: Optional[float] = None) -> Any:
  """
  Resolve key from a frame nested under an actor-owned frame.

  Frames below the shared one are private to the caller and read directly;
  once the walk reaches the shared frame the rest of the lookup is asked
  of its actor.

  Raises:
    UnboundSymbolError if env's chain never binds key
  """
  _require_actor(actor_id)
  shared = _frame_registry.get_frame(actor_id)
  symbol = as_symbol(key)
  frame = env
  while frame is not None:
    if frame is shared:
      return shared_env_get(actor_id, symbol, timeout)
    found, value = bindings_lookup(frame['bindings'], symbol)
    if found:
      return value
    frame = frame['parent']
  raise unbound_symbol_error(pr_str(symbol))


def shared_env_has(actor_id: str, key: Any, timeout: Optional[float] = None) -> bool:
  return _require_actor(actor_id).ask({'op': 'find', 'key': key}, timeout=timeout)


def shared_env_snapshot(actor_id: str, timeout: Optional[float] = None) -> Dict[str, Any]:
  return _require_actor(actor_id).ask({'op': 'snapshot'}, timeout=timeout)


def stop_frame_actor(actor_id: str) -> None:
  actor_ref = _frame_registry.unregister(actor_id)
  if actor_ref is not None and actor_ref.is_alive():
    actor_ref.stop()


def stop_frame_actors() -> None:
  _frame_registry.terminate_all()
