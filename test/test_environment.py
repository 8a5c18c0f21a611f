"""
Tests for frame construction, lookup and mutation
"""

import pytest
from environment import (
  make_frame, env_new, env_outer, env_data, env_find, env_get, env_set,
  create_root_env, env_depth, env_snapshot
)
from parameters import make_param, make_rest_param
from values import Symbol, NIL, make_list, make_vector, make_value
from error_handling import UnboundSymbolError, ArityError, ParameterListError


class TestLookup:
  """Test nested name resolution"""

  def test_shadowing(self, root, child):
    """Inner binding wins, outer frame keeps its own"""
    assert env_get(child, "x") == 2
    assert env_get(root, "x") == 1

  def test_outward_fallback(self, child):
    assert env_get(child, "y") == 5

  def test_unbound_symbol(self):
    """Root frame without a binding reports the symbol"""
    env = make_frame()
    with pytest.raises(UnboundSymbolError) as excinfo:
      env_get(env, "z")
    assert excinfo.value.symbol == "z"
    assert str(excinfo.value) == "'z' not found"

  def test_find_returns_defining_frame(self, root, child):
    assert env_find(child, "x") is child
    assert env_find(child, "y") is root
    assert env_find(child, "nope") is None

  def test_find_on_missing_env(self):
    assert env_find(None, "x") is None

  def test_nil_binding_is_not_unbound(self):
    """A symbol bound to nil or None is still bound"""
    env = make_frame()
    env_set(env, "n", NIL)
    env_set(env, "p", None)
    assert env_get(env, "n") == NIL
    assert env_get(env, "p") is None
    assert env_find(env, "p") is env

  def test_repeated_lookup_is_stable(self, root):
    value = make_list([1, 2])
    env_set(root, "lst", value)
    assert env_get(root, "lst") is env_get(root, "lst")
    assert env_get(root, "lst") is value

  def test_symbol_and_string_keys_agree(self, root):
    assert env_get(root, Symbol("y")) == env_get(root, "y")
    assert env_get(root, {'type': 'Symbol', 'value': Symbol("y")}) == 5

  def test_deep_chain_terminates(self):
    """Lookup through a long chain neither loops nor hits the recursion limit"""
    env = create_root_env({"base": 0})
    for i in range(5000):
      env = env_new(env, [f"v{i}"], [i])
    assert env_depth(env) == 5001
    assert env_get(env, "base") == 0
    assert env_get(env, "v4999") == 4999
    with pytest.raises(UnboundSymbolError):
      env_get(env, "missing")


class TestFrameConstruction:
  """Test env_new binding rules"""

  def test_positional(self):
    env = env_new(None, ["a", "b", "c"], [10, 20, 30])
    assert env_get(env, "a") == 10
    assert env_get(env, "b") == 20
    assert env_get(env, "c") == 30
    assert env_outer(env) is None

  def test_variadic_capture(self):
    """Rest takes the remaining arguments as one list value"""
    env = env_new(None, ["a", "&", "rest"], [1, 2, 3, 4])
    assert env_get(env, "a") == 1
    assert env_get(env, "rest") == make_list([2, 3, 4])
    assert len(env_data(env)) == 2

  def test_variadic_with_no_extra_arguments(self):
    env = env_new(None, ["a", "&", "rest"], [1])
    assert env_get(env, "rest") == make_list([])

  def test_tagged_parameters(self):
    params = [make_param("first"), make_rest_param("others")]
    env = env_new(None, params, ["x", "y", "z"])
    assert env_get(env, "first") == "x"
    assert env_get(env, "others") == make_list(["y", "z"])

  def test_literal_marker_pair(self):
    """The reader's (Symbol, "&") pair marks the rest parameter"""
    env = env_new(None, ["a", ("Symbol", "&"), "rest"], [1, 2, 3, 4])
    assert env_get(env, "a") == 1
    assert env_get(env, "rest") == make_list([2, 3, 4])

  def test_rest_entry_must_be_last(self):
    with pytest.raises(ParameterListError):
      env_new(None, [make_rest_param("r"), make_param("a")], [1, 2])

  def test_single_rest_entry(self):
    with pytest.raises(ParameterListError):
      env_new(None, [make_rest_param("r"), make_rest_param("s")], [1])

  def test_list_values_as_binds_and_exprs(self):
    """Sequence values are unpacked, not iterated as dicts"""
    env = env_new(None, make_list([Symbol("a"), Symbol("b")]), make_vector([1, 2]))
    assert env_get(env, "a") == 1
    assert env_get(env, "b") == 2
    assert len(env_data(env)) == 2

  def test_non_sequence_values_rejected(self):
    with pytest.raises(TypeError):
      env_new(None, ["a"], make_value(1, "Num"))
    with pytest.raises(TypeError):
      env_new(None, {"a": 1}, [1])

  def test_duplicate_names_keep_last(self):
    env = env_new(None, ["a", "a"], [1, 2])
    assert env_get(env, "a") == 2

  def test_too_few_arguments(self):
    with pytest.raises(ArityError) as excinfo:
      env_new(None, ["a", "b", "c"], [1, 2])
    assert excinfo.value.expected == "exactly 3"
    assert excinfo.value.got == 2

  def test_too_many_arguments(self):
    with pytest.raises(ArityError):
      env_new(None, ["a"], [1, 2])

  def test_variadic_needs_positional_arguments(self):
    with pytest.raises(ArityError) as excinfo:
      env_new(None, ["a", "b", "&", "rest"], [1])
    assert excinfo.value.expected == "at least 2"

  def test_outer_is_not_mutated(self, root):
    before = dict(env_data(root))
    child = env_new(root, ["x", "q"], [100, 200])
    assert env_outer(child) is root
    assert env_data(root) == before

  def test_failed_construction_leaves_outer_alone(self, root):
    before = dict(env_data(root))
    with pytest.raises(ArityError):
      env_new(root, ["x"], [])
    assert env_data(root) == before


class TestMutation:
  """Test env_set locality"""

  def test_set_returns_value(self, root):
    assert env_set(root, "z", 42) == 42

  def test_set_is_local(self, root):
    """Setting in a child does not touch the parent's binding"""
    child = env_new(root, [], [])
    env_set(child, "x", 99)
    assert env_get(child, "x") == 99
    assert env_get(root, "x") == 1

  def test_set_overwrites(self, root):
    env_set(root, "x", 7)
    assert env_get(root, "x") == 7
    assert len(env_data(root)) == 2

  def test_parent_mutation_visible_to_children(self, root):
    child = env_new(root, [], [])
    env_set(root, "late", "defined after child")
    assert env_get(child, "late") == "defined after child"

  def test_sibling_frames_are_isolated(self, root):
    left = env_new(root, [], [])
    right = env_new(root, [], [])
    env_set(left, "only_left", 1)
    with pytest.raises(UnboundSymbolError):
      env_get(right, "only_left")


class TestRootAndIntrospection:
  """Test the global frame and debugging helpers"""

  def test_root_holds_primitives(self):
    add = lambda a, b: a + b
    env = create_root_env({"+": add, Symbol("nil"): NIL})
    assert env_get(env, "+") is add
    assert env_get(env, "nil") == NIL
    assert env_outer(env) is None

  def test_empty_root(self):
    env = create_root_env()
    assert env_data(env) == {}
    assert env_depth(env) == 1

  def test_seeded_frame_uses_symbol_keys(self):
    env = make_frame(None, {"x": 1, Symbol("y"): 2})
    assert env_get(env, "x") == 1
    assert env_find(env, Symbol("x")) is env
    assert env_snapshot(env) == {"x": 1, "y": 2}

  def test_snapshot_shadows(self, child):
    assert env_snapshot(child) == {"x": 2, "y": 5}

  def test_debug_unbound_carries_snapshot(self, child, capsys):
    with pytest.raises(UnboundSymbolError) as excinfo:
      env_get(child, "zz", debug=True)
    assert excinfo.value.env_snapshot == {"x": 2, "y": 5}
    assert "unbound after visiting 2 frame(s)" in capsys.readouterr().out
