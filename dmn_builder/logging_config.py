from __future__ import annotations

"""Central logging configuration for the DMN builder.

Import and call :func:`setup_logging` at application start-up.
"""

import copy
import logging
import os
import logging.config
from dmn_builder.config import ConfigManager

__all__ = ["setup_logging"]

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application using configuration from YAML files.

    ``verbose`` lowers the console handler to DEBUG for this run.
    """
    log_dir = os.environ.get("DMN_BUILDER_LOG_DIR", "logs")
    log_file = os.path.join(log_dir, "dmn_builder.log")

    logging_config = copy.deepcopy(ConfigManager().get_logging_config())

    if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
        handlers = logging_config.get("handlers", {})
        if "file" in handlers:
            os.makedirs(log_dir, exist_ok=True)
            handlers["file"]["filename"] = log_file
        if verbose and "console" in handlers:
            handlers["console"]["level"] = "DEBUG"
            logging_config.setdefault("loggers", {}).setdefault("dmn_builder", {})["level"] = "DEBUG"
        try:
            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).debug("===== Logging initialised from config files =====")
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            # dictConfig reports bad schemas through these
            _setup_minimal_logging(verbose)
            logging.getLogger(__name__).error("Invalid logging config, using fallback: %s", exc)
    else:
        _setup_minimal_logging(verbose)
        logging.getLogger(__name__).warning("===== Logging initialised with minimal fallback (no config) =====")

    _apply_debug_overrides()


def _setup_minimal_logging(verbose: bool = False) -> None:
    """Set up minimal console-only logging when config is unavailable."""
    level = 'DEBUG' if verbose else 'WARNING'
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': level,
            },
        },
        'root': {
            'level': level,
            'handlers': ['console'],
        },
    }

    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - DMN_BUILDER_DEBUG=true  -> DEBUG for the whole ``dmn_builder`` package
    - DMN_BUILDER_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    debug_all = os.environ.get('DMN_BUILDER_DEBUG', '').strip().lower() in _TRUE_VALUES
    extra_modules = os.environ.get('DMN_BUILDER_DEBUG_MODULES', '').strip()
    targets = []
    if debug_all:
        targets.append('dmn_builder')
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])
    if not targets:
        return
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(h.level <= logging.DEBUG for h in logger.handlers)
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            fmt = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            h.setFormatter(fmt)
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
