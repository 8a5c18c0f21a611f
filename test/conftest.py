"""
Test configuration for environment core tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from environment import make_frame, env_set, env_new
from values import Symbol


@pytest.fixture
def root():
  """A fresh global frame binding x -> 1 and y -> 5"""
  env = make_frame()
  env_set(env, "x", 1)
  env_set(env, "y", 5)
  return env


@pytest.fixture
def child(root):
  """A frame under root binding only x -> 2"""
  return env_new(root, [Symbol("x")], [2])
