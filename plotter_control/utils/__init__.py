"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic I/O and YAML loading (fs)
    - Unified logging (logging_config)
    - Plot job validation (validators)

No module in utils/ may import from upper layers (path_ir, replay, etc.).

Convenience imports:
    from plotter_control.utils import fs, validators
    from plotter_control.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, pop_context, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'validators',
    'setup_logging',
    'get_logger',
    'push_context',
    'pop_context',
]
