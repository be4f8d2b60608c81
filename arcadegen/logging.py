"""
Arcadegen Logging

Two channels, both keyed by module name ('synthesizer', 'behaviors',
'session', ...):

Console messages:
    log = get_logger('synthesizer')
    log.debug("Sampling spawn at attempt %d", attempt)
    log.warning("Spawn search exhausted")

    Lines go to stderr as ``[module] LEVEL: message``. Messages below the
    module's level are dropped before formatting.

Structured records:
    emit_record('session', {'type': 'game_over', 'score': 120})

    Records are routed to the sink registered for the module. With no
    sink registered the record is dropped and emit_record returns False,
    so the core can emit unconditionally.

Environment:
    ARCADEGEN_LOG_LEVEL=DEBUG            default console level
    ARCADEGEN_LOG_BEHAVIORS=WARNING      level for one module
    ARCADEGEN_LOG_DIR=/tmp/arcadegen     where JSONL record files go
    ARCADEGEN_RECORD_SESSION=true        create_sink('session') writes JSONL
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


class LogLevel(IntEnum):
    """Console levels, numerically compatible with the stdlib logging module."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_ALIASES = {'WARN': LogLevel.WARNING, 'CRIT': LogLevel.CRITICAL}


def parse_level(name: str, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Parse a level name ('debug', 'WARN', ...); unknown names give default."""
    key = name.strip().upper()
    if key in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[key]
    try:
        return LogLevel[key]
    except KeyError:
        return default


# Console levels and record settings, filled from the environment on import
_settings: Dict[str, Any] = {
    'level': LogLevel.INFO,
    'module_levels': {},    # module -> LogLevel
    'record_modules': set(),  # modules whose create_sink() writes JSONL
    'log_dir': None,
}


def _module_key(module: str) -> str:
    return module.lower().replace('.', '_').replace('/', '_')


def _read_environment() -> None:
    level_prefix = 'ARCADEGEN_LOG_'
    record_prefix = 'ARCADEGEN_RECORD_'

    for key, value in os.environ.items():
        if key == 'ARCADEGEN_LOG_LEVEL':
            _settings['level'] = parse_level(value)
        elif key == 'ARCADEGEN_LOG_DIR':
            _settings['log_dir'] = value
        elif key.startswith(level_prefix):
            module = key[len(level_prefix):].lower()
            _settings['module_levels'][module] = parse_level(value)
        elif key.startswith(record_prefix):
            if value.lower() in ('1', 'true', 'yes', 'on'):
                _settings['record_modules'].add(key[len(record_prefix):].lower())


_read_environment()


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
    record: Optional[list] = None,
) -> None:
    """
    Configure logging programmatically (overrides the environment).

    Args:
        level: Default console level
        modules: module -> level overrides, e.g. {'behaviors': 'DEBUG'}
        log_dir: Directory for JSONL record files
        record: Modules whose create_sink() should write JSONL
    """
    _settings['level'] = parse_level(level)
    for module, module_level in (modules or {}).items():
        _settings['module_levels'][_module_key(module)] = parse_level(module_level)
    if log_dir:
        _settings['log_dir'] = log_dir
    for module in record or ():
        _settings['record_modules'].add(_module_key(module))


def get_log_dir() -> Path:
    """Configured log directory, else $XDG_DATA_HOME/arcadegen/logs."""
    if _settings['log_dir']:
        return Path(_settings['log_dir']).expanduser()
    data_home = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(data_home) / 'arcadegen' / 'logs'


# =============================================================================
# Console logger
# =============================================================================

class ArcadeLogger:
    """Console logger for one module."""

    def __init__(self, module: str):
        self.module = module
        self._key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        return _settings['module_levels'].get(self._key, _settings['level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _write(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def debug(self, msg: str, *args) -> None:
        self._write(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._write(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._write(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._write(LogLevel.ERROR, 'ERROR', msg, args)

    def critical(self, msg: str, *args) -> None:
        self._write(LogLevel.CRITICAL, 'CRIT', msg, args)

    def exception(self, msg: str, *args) -> None:
        """Log an error followed by the traceback being handled, if any."""
        self._write(LogLevel.ERROR, 'ERROR', msg, args)
        tb = traceback.format_exc().strip()
        if tb and tb != 'NoneType: None':
            for line in tb.splitlines():
                self._write(LogLevel.ERROR, 'TRACE', line, ())


@lru_cache(maxsize=64)
def get_logger(module: str) -> ArcadeLogger:
    """Get the (cached) logger for a module."""
    return ArcadeLogger(module)


# =============================================================================
# Structured record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record emitted by a module."""

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Appends records to ``<log_dir>/<run_name>_<module>.jsonl``.

    A file opens with a ``run_start`` line on the first record for its
    module and gets a ``run_end`` line on close, so one file holds
    exactly one run. Records without a ``wall_time`` are stamped.

    Args:
        log_dir: Output directory (default: get_log_dir())
        run_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, run_name: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else get_log_dir()
        self.run_name = run_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def path_for(self, module: str) -> Path:
        return self.log_dir / f"{self.run_name}_{module}.jsonl"

    def _open(self, module: str) -> TextIO:
        handle = self._files.get(module)
        if handle is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handle = open(self.path_for(module), 'a')
            self._files[module] = handle
            self._write(handle, {'type': 'run_start', 'module': module, 'run': self.run_name})
        return handle

    @staticmethod
    def _write(handle: TextIO, record: Dict[str, Any]) -> None:
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        handle.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(self._open(module), record)

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        for module, handle in self._files.items():
            self._write(handle, {'type': 'run_end', 'module': module})
            handle.close()
        self._files.clear()

    @property
    def open_modules(self) -> list:
        return sorted(self._files)


class NullSink(LogSink):
    """Accepts and drops every record."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Sink for modules that have none registered (None to clear)."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module, _default_sink)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Route a record to the module's sink.

    Returns:
        True if a sink took the record, False if it was dropped
    """
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def create_sink(module: str, run_name: Optional[str] = None) -> LogSink:
    """FileSink if recording is enabled for the module, else NullSink."""
    if _module_key(module) in _settings['record_modules']:
        return FileSink(run_name=run_name)
    return NullSink()


def close_all_sinks() -> None:
    """Close every registered sink and the default sink, then forget them."""
    global _default_sink
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
    if _default_sink is not None:
        _default_sink.close()
        _default_sink = None
