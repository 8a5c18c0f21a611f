"""
Printer collaborator: renders runtime values back to text
"""

from typing import Any, Dict

from values import Symbol, is_value_dict


def print_as_string(payload: str, print_readably: bool = True) -> str:
  """Render a string payload, escaping quotes, backslashes and newlines"""
  if not print_readably:
    return payload
  escaped = payload.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
  return f'"{escaped}"'


def print_map_contents(entries: Dict, print_readably: bool = True) -> str:
  parts = []
  for key, value in entries.items():
    parts.append(pr_str(key, print_readably))
    parts.append(pr_str(value, print_readably))
  return " ".join(parts)


def pr_str(value: Any, print_readably: bool = True) -> str:
  """Convert a value to its textual representation"""
  if isinstance(value, Symbol):
    return value.name

  if not is_value_dict(value):
    # Raw Python payloads stand in for themselves
    if value is None:
      return "nil"
    if isinstance(value, bool):
      return "true" if value else "false"
    if isinstance(value, str):
      return print_as_string(value, print_readably)
    if isinstance(value, (list, tuple)):
      return f"({' '.join(pr_str(elem, print_readably) for elem in value)})"
    return str(value)

  value_type = value['type']
  payload = value['value']

  if value_type == "Nil":
    return "nil"
  elif value_type == "Bool":
    return "true" if payload else "false"
  elif value_type == "Num":
    return str(payload)
  elif value_type == "Symbol":
    return payload.name if isinstance(payload, Symbol) else str(payload)
  elif value_type == "String":
    return print_as_string(payload, print_readably)
  elif value_type == "Keyword":
    return f":{payload}"
  elif value_type == "List":
    return f"({' '.join(pr_str(elem, print_readably) for elem in payload)})"
  elif value_type == "Vector":
    return f"[{' '.join(pr_str(elem, print_readably) for elem in payload)}]"
  elif value_type == "Map":
    return f"{{{print_map_contents(payload, print_readably)}}}"
  elif value_type == "Closure":
    return f"#<function ({payload['params_text']})>"
  else:
    return f"<{value_type}>"
