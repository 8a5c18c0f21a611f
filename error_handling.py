"""
Error handling for the environment core with detailed error messages
Errors are built as plain dictionaries and raised through thin exception classes
"""

from typing import Any, Dict, List, Optional


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_runtime_error(
    kind: str,
    message: str,
    symbol: Optional[str] = None,
    expected: Optional[str] = None,
    got: Optional[int] = None,
    env_snapshot: Optional[Dict[str, Any]] = None
) -> Dict:
    """Create an immutable runtime error structure"""
    return {
        'kind': kind,
        'message': message,
        'symbol': symbol,
        'expected': expected,
        'got': got,
        'env_snapshot': env_snapshot or {}
    }


def format_runtime_error(error: Dict, max_bindings: int = 10) -> str:
    """Format runtime error as a multi-line report"""
    error_msg = f"{error['kind']}: {error['message']}\n"

    if error['symbol'] is not None:
        error_msg += f"  Symbol: {error['symbol']}\n"

    if error['expected'] is not None:
        error_msg += f"  Expected: {error['expected']} arguments\n"
        error_msg += f"  Got: {error['got']}\n"

    if error['env_snapshot']:
        error_msg += "  Environment at error:\n"
        names = sorted(error['env_snapshot'])
        for name in names[:max_bindings]:
            val_str = str(error['env_snapshot'][name]).replace('\n', ' ')[:60]
            error_msg += f"    {name} = {val_str}\n"
        if len(names) > max_bindings:
            error_msg += f"    ... and {len(names) - max_bindings} more bindings\n"

    return error_msg


def suggest_names(symbol: str, candidates: List[str], limit: int = 3) -> List[str]:
    """Suggest visible names sharing a prefix with an unbound symbol"""
    if not symbol:
        return []
    prefix = symbol[:2]
    return sorted(name for name in candidates if name.startswith(prefix))[:limit]


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class EnvironmentModelError(Exception):
    """Base class for errors raised by the environment core"""
    kind = "Environment error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict:
        return make_runtime_error(self.kind, self.message)


class UnboundSymbolError(EnvironmentModelError):
    """No frame in the chain binds the symbol"""
    kind = "Unbound symbol"

    def __init__(self, symbol: str, env_snapshot: Optional[Dict[str, Any]] = None):
        self.symbol = symbol
        self.env_snapshot = env_snapshot
        super().__init__(f"'{symbol}' not found")

    def to_dict(self) -> Dict:
        return make_runtime_error(
            self.kind, self.message, symbol=self.symbol, env_snapshot=self.env_snapshot
        )


class ArityError(EnvironmentModelError):
    """Argument count does not fit a parameter list"""
    kind = "Arity error"

    def __init__(self, name: str, expected: str, got: int):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"When evaluating {name} expected {expected} arguments, but received {got} arguments"
        )

    def to_dict(self) -> Dict:
        return make_runtime_error(
            self.kind, self.message, expected=self.expected, got=self.got
        )


class ParameterListError(EnvironmentModelError):
    """Malformed parameter list"""
    kind = "Parameter list error"


def format_error_report(error: EnvironmentModelError) -> str:
    """Render any environment error, including its snapshot if it carries one"""
    report = format_runtime_error(error.to_dict())
    if isinstance(error, UnboundSymbolError) and error.env_snapshot:
        suggestions = suggest_names(error.symbol, list(error.env_snapshot))
        if suggestions:
            report += "  Suggestions:\n"
            for suggestion in suggestions:
                report += f"    - did you mean '{suggestion}'?\n"
    return report
