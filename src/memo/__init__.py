"""
Memo: lazy evaluation and memoization cells

- Memo: owns its parameter
- MemoExt: parameter passed on every access
- MemoOnce: borrows its parameter for a short scope
"""

from .borrow import Borrow, BorrowError, Shared
from .cell import CellState, MemoCell
from .config import MemoConfig, configure_logging, get_config, load_config, set_config
from .memo import Memo, MemoExt, MemoOnce
from .memoize import Memoize, resolve_computation
from .observability import MemoStats

__all__ = [
    'Memo', 'MemoExt', 'MemoOnce', 'MemoCell', 'CellState',
    'Memoize', 'resolve_computation',
    'Shared', 'Borrow', 'BorrowError',
    'MemoConfig', 'load_config', 'get_config', 'set_config', 'configure_logging',
    'MemoStats',
]
