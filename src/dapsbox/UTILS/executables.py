"""
Utilities for checking that required host executables are installed.
"""
import shutil
from typing import Callable, Iterable, List, Optional
from ..exceptions import MissingDependencyError


def find_missing(names: Iterable[str],
                 which: Callable[[str], Optional[str]] = shutil.which) -> List[str]:
    """
    Returns the names that cannot be resolved on the search path, in order.
    """
    return [name for name in names if not which(name)]


def require_executables(names: Iterable[str],
                        which: Callable[[str], Optional[str]] = shutil.which):
    """
    Raises MissingDependencyError naming every executable that is absent.
    """
    missing = find_missing(names, which)
    if missing:
        raise MissingDependencyError(missing)
