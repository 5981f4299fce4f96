"""Logger with composable output sinks, backed by logfire."""

from __future__ import annotations

import contextlib
import os
import sys
from abc import abstractmethod
from pathlib import Path
from typing import Any

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from pydantic import Field, PrivateAttr

from buildtrend.core.base import BaseConfig

_current_logger: Logger | None = None


class _LoggerProxy:
    """Forwards attribute access to the configured Logger.

    Before setup_logger() has run every method is a no-op returning
    an empty context manager, so library code can log and open spans
    unconditionally.
    """

    def __getattr__(self, name):
        if _current_logger is None:
            def _noop(*args, **kwargs):  # noqa: ARG001
                return contextlib.nullcontext()
            return _noop
        return getattr(_current_logger, name)

    def __enter__(self):
        if _current_logger is None:
            return self
        return _current_logger.__enter__()

    def __exit__(self, *args):
        if _current_logger is None:
            return False
        return _current_logger.__exit__(*args)


# Imported everywhere as `from buildtrend.core.log import logger`
logger = _LoggerProxy()

# Span attributes that are instrumentation internals, not user kwargs
_SKIP_KEYS = frozenset({
    'code.filepath', 'code.lineno', 'code.function',
    'logfire.msg', 'logfire.level_num', 'logfire.span_type',
    'logfire.msg_template', 'logfire.json_schema',
})
_SKIP_PREFIXES = ('otel.', 'telemetry.', 'service.', 'process.')


# Level names mapped to OpenTelemetry severity numbers
LEVELS = {
    'spew': logs_pb2.SEVERITY_NUMBER_TRACE,    # 1
    'trace': logs_pb2.SEVERITY_NUMBER_TRACE3,  # 3
    'debug': logs_pb2.SEVERITY_NUMBER_DEBUG,   # 5
    'info': logs_pb2.SEVERITY_NUMBER_INFO,     # 9
    'warn': logs_pb2.SEVERITY_NUMBER_WARN,     # 13
    'error': logs_pb2.SEVERITY_NUMBER_ERROR,   # 17
    'fatal': logs_pb2.SEVERITY_NUMBER_FATAL,   # 21
}


def level_name(level_num: int) -> str:
    """Return the most severe level name at or below level_num."""
    for name in ('fatal', 'error', 'warn', 'info', 'debug', 'trace',
                 'spew'):
        if level_num >= LEVELS[name]:
            return name
    return 'unknown'


class LevelFilteringExporter(SpanExporter):
    """Span exporter that drops spans below a minimum level."""

    def __init__(self, exporter: SpanExporter, min_level: str):
        self._exporter = exporter
        self._min_severity = LEVELS.get(
            min_level.lower(), logs_pb2.SEVERITY_NUMBER_INFO
        )

    def export(self, spans: list[ReadableSpan]) -> SpanExportResult:
        kept = [
            span for span in spans
            if (span.attributes or {}).get(
                'logfire.level_num', logs_pb2.SEVERITY_NUMBER_INFO
            ) >= self._min_severity
        ]
        if kept:
            return self._exporter.export(kept)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


class Sink(BaseConfig):
    """Base class for log output sinks.

    Sinks are closed through the BaseCloseable cascade, which shuts
    down their span processor.
    """

    enabled: bool = Field(default=True, description="Enable this sink")
    level: str | None = Field(
        default=None,
        description=(
            "Log level for this sink. If None, inherits from Logger.level. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    escape_special_characters: bool = Field(
        default=False,
        description="Escape newlines/tabs in output"
    )
    format_template: str | None = Field(
        default=None,
        description=(
            "Format template for text output. Fields: timestamp, level, "
            "message, location, function. None writes JSON spans."
        )
    )

    _processor: Any = PrivateAttr(default=None)

    @staticmethod
    def _escape_special_chars(text: str) -> str:
        return (text
            .replace('\\', '\\\\')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
        )

    @staticmethod
    def _extract_span_data(span) -> dict:
        """Pull the template fields out of a logfire span."""
        from datetime import UTC, datetime

        attrs = span.attributes or {}
        filepath = attrs.get("code.filepath", "")
        lineno = attrs.get("code.lineno", "")
        return {
            'timestamp': datetime.fromtimestamp(
                span.start_time / 1e9, tz=UTC
            ),
            'level': level_name(attrs.get(
                "logfire.level_num", logs_pb2.SEVERITY_NUMBER_INFO
            )),
            'message': attrs.get("logfire.msg", span.name),
            'location': f"{filepath}:{lineno}" if filepath else "",
            'function': attrs.get("code.function", ""),
        }

    def _format_span(self, span) -> str:
        if not self.format_template:
            return span.to_json() + os.linesep

        data = self._extract_span_data(span)
        if self.escape_special_characters:
            data['message'] = self._escape_special_chars(data['message'])

        try:
            formatted = self.format_template.format(**data)
        except KeyError as e:
            return f"ERROR: Invalid template field {e}\n"

        # Keyword arguments passed to logger calls trail the message
        extra = {
            key: value
            for key, value in (span.attributes or {}).items()
            if key not in _SKIP_KEYS
            and not key.startswith(_SKIP_PREFIXES)
        }
        if extra:
            pairs = ' '.join(
                f"{k}={v!r}" for k, v in sorted(extra.items())
            )
            formatted = f"{formatted} │ {pairs}"

        return formatted + '\n'

    @abstractmethod
    def create_processor(self, log_root: Path, job_name: str):
        """Return a span processor for this sink, or None."""

    def close(self):
        if self._processor:
            with contextlib.suppress(Exception):
                self._processor.shutdown()


class ConsoleSink(Sink):
    """Console output, rendered by logfire itself."""

    verbose: bool = Field(
        default=False,
        description="Show full span details"
    )
    colors: str = Field(
        default="auto",
        description="Color mode: auto, always, never"
    )

    def create_processor(self, log_root: Path, job_name: str):
        return None


class FileSink(Sink):
    """Append log output to a file."""

    enabled: bool = Field(
        default=False,
        description="Enable file logging"
    )
    path: str = Field(
        default="{log_root}/{job_name}/buildtrend.log",
        description="Log file path template"
    )

    _file: Any = PrivateAttr(default=None)

    def create_processor(self, log_root: Path, job_name: str):
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        log_path = Path(
            self.path.format(log_root=log_root, job_name=job_name)
        )
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Line buffered; stays open until close()
        self._file = open(log_path, "a", buffering=1, encoding="utf-8")  # noqa: SIM115

        exporter = ConsoleSpanExporter(
            out=self._file,
            formatter=self._format_span,
        )
        return BatchSpanProcessor(
            LevelFilteringExporter(exporter, self.level or "info")
        )

    def close(self):
        """Flush the processor before closing the file under it."""
        super().close()

        if self._file and not self._file.closed:
            with contextlib.suppress(OSError):
                self._file.flush()
                self._file.close()


class Logger(BaseConfig):
    """Logger with console and file sinks.

    Closing the logger closes its sinks through BaseCloseable.
    """

    level: str = Field(
        default="info",
        description=(
            "Default log level for all sinks. Individual sinks can override. "
            "Valid: spew, trace, debug, info, warn, error, fatal"
        )
    )
    console: ConsoleSink = Field(
        default_factory=ConsoleSink,
        description="Console output configuration"
    )
    file: FileSink = Field(
        default_factory=FileSink,
        description="File logging configuration"
    )

    def setup(self, log_root: Path, job_name: str):
        """Create processors for enabled sinks and configure logfire."""
        import logfire
        from logfire import ConsoleOptions

        for sink in (self.console, self.file):
            if sink.level is None:
                sink.level = self.level
            if sink.enabled:
                sink._processor = sink.create_processor(log_root, job_name)

        processors = [
            sink._processor
            for sink in (self.console, self.file)
            if sink.enabled and sink._processor
        ]

        console_config = False
        if self.console.enabled:
            # logfire has no level below trace
            min_level = self.console.level
            if min_level == 'spew':
                min_level = 'trace'
            console_config = ConsoleOptions(
                min_log_level=min_level,
                verbose=self.console.verbose,
                colors=self.console.colors,
                include_timestamps=True,
                # stdout carries command output only
                output=sys.stderr,
            )

        logfire.configure(
            service_name=f"buildtrend-{job_name}",
            send_to_logfire=False,
            console=console_config,
            additional_span_processors=processors or None,
        )

    def info(self, msg: str, **kwargs):
        import logfire
        logfire.info(msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        import logfire
        logfire.debug(msg, **kwargs)

    def trace(self, msg: str, **kwargs):
        import logfire
        logfire.log(
            level=LEVELS['trace'],
            msg_template=msg,
            attributes=kwargs or None,
        )

    def spew(self, msg: str, **kwargs):
        """Log below trace, for per-step noise."""
        import logfire
        logfire.log(
            level=LEVELS['spew'],
            msg_template=msg,
            attributes=kwargs or None,
        )

    def warn(self, msg: str, **kwargs):
        import logfire
        logfire.warn(msg, **kwargs)

    warning = warn

    def error(self, msg: str, **kwargs):
        import logfire
        logfire.error(msg, **kwargs)

    def span(self, msg: str, **kwargs):
        """Return a logfire span context manager."""
        import logfire
        return logfire.span(msg, **kwargs)

    def log(self, level: str, msg: str, **kwargs):
        import logfire
        logfire.log(
            level=LEVELS.get(level.lower(), LEVELS['info']),
            msg_template=msg,
            attributes=kwargs or None,
        )


def setup_logger(
    log_root: Path,
    job_name: str,
    level: str = "info",
    console: ConsoleSink | None = None,
    file: FileSink | None = None,
) -> Logger:
    """Initialize the global logger singleton.

    Called by Config once settings are loaded; tests call it directly.

    Args:
        log_root: Root directory for log files
        job_name: Job whose builds are being classified
        level: Default level for sinks that don't set one
        console: Console sink config (or None for defaults)
        file: File sink config (or None for defaults)

    Returns:
        Logger: The initialized global logger instance
    """
    global _current_logger

    _current_logger = Logger(
        level=level,
        console=console or ConsoleSink(),
        file=file or FileSink(),
    )
    _current_logger.setup(log_root, job_name)

    return _current_logger
