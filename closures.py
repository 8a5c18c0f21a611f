"""
Closure values and the frames they are applied in
"""

from typing import Any, Dict, Optional, Sequence

from values import make_value, is_value_dict
from parameters import ensure_parameter_list, format_parameters
from environment import env_new


def make_closure(params: Sequence[Any], body: Any, closure_env: Dict, name: Optional[str] = None) -> Dict:
  """Create a function value capturing its definition-site frame"""
  parsed = ensure_parameter_list(params)
  return make_value({
      'name': name or 'closure',
      'params': parsed,
      'params_text': format_parameters(parsed),
      'body': body,
      'closure_env': closure_env
  }, "Closure")


def is_closure(val: Any) -> bool:
  return is_value_dict(val) and val['type'] == "Closure"


def closure_env(closure: Dict, args: Sequence[Any], debug: bool = False) -> Dict:
  """
  Frame a call to closure runs in.

  The parent is the captured frame, not the caller's, so free names
  resolve where the closure was written.
  """
  if not is_closure(closure):
    raise TypeError(f"Cannot apply non-closure value: {closure!r}")

  func = closure['value']
  if debug:
    print(f"Call {func['name']} ({func['params_text']}) with {len(args)} argument(s)")
  return env_new(func['closure_env'], func['params'], args, debug, func['name'])


def closure_body(closure: Dict) -> Any:
  return closure['value']['body']
