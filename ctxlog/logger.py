"""Context-aware leveled logging on top of structlog."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import IO, Any, Callable

import structlog

from .config import LoggerConfig
from .context import extract_fields
from .fields import Field, merge_fields
from .formatters import processors_for
from .levels import filter_threshold
from .normalize import normalize_args

Context = Mapping[Any, Any] | None

FATAL_EXIT_CODE = 1

# structlog keeps the message under "event"; a field with that name is renamed.
MESSAGE_KEY = "event"
CLASH_PREFIX = "fields."


class ContextLogger:
    """Leveled logger that enriches every entry with registered context values.

    Plain calls (``info``) log the message unchanged with optional explicit
    fields. Formatted calls (``infof``) normalize their arguments and let
    structlog apply ``%`` formatting. Calls below the configured level are
    dropped by structlog's filtering logger.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        file: IO[str] | None = None,
        exit_func: Callable[[int], Any] = sys.exit,
    ):
        self.config = config or LoggerConfig()
        self._exit = exit_func
        self._printer = structlog.PrintLogger(file=file if file is not None else sys.stderr)
        self._processors = processors_for(self.config.formatter)
        self._wrapper_class = structlog.make_filtering_bound_logger(filter_threshold(self.config.level))

    def _bound(self, fields: dict[str, Any]) -> Any:
        # bind(**fields) rejects keys such as "self"; the context is passed whole.
        if MESSAGE_KEY in fields:
            fields[CLASH_PREFIX + MESSAGE_KEY] = fields.pop(MESSAGE_KEY)
        return self._wrapper_class(self._printer, processors=self._processors, context=fields)

    def with_context(self, ctx: Context) -> Any:
        """Return the structlog bound logger carrying the context fields of ``ctx``."""
        return self._bound(extract_fields(ctx, self.config.context_keys))

    def _entry(self, ctx: Context, fields: tuple[Field, ...]) -> Any:
        return self._bound(merge_fields(extract_fields(ctx, self.config.context_keys), fields))

    def _log(self, method: str, ctx: Context, message: Any, fields: tuple[Field, ...]) -> None:
        getattr(self._entry(ctx, fields), method)(message)

    def _logf(self, method: str, ctx: Context, fmt: str, args: tuple[Any, ...]) -> None:
        getattr(self.with_context(ctx), method)(fmt, *normalize_args(args))

    def debug(self, ctx: Context, message: Any, *fields: Field) -> None:
        self._log("debug", ctx, message, fields)

    def debugf(self, ctx: Context, fmt: str, *args: Any) -> None:
        self._logf("debug", ctx, fmt, args)

    def info(self, ctx: Context, message: Any, *fields: Field) -> None:
        self._log("info", ctx, message, fields)

    def infof(self, ctx: Context, fmt: str, *args: Any) -> None:
        self._logf("info", ctx, fmt, args)

    def warn(self, ctx: Context, message: Any, *fields: Field) -> None:
        self._log("warning", ctx, message, fields)

    def warnf(self, ctx: Context, fmt: str, *args: Any) -> None:
        self._logf("warning", ctx, fmt, args)

    warning = warn
    warningf = warnf

    def error(self, ctx: Context, message: Any, *fields: Field) -> None:
        self._log("error", ctx, message, fields)

    def errorf(self, ctx: Context, fmt: str, *args: Any) -> None:
        self._logf("error", ctx, fmt, args)

    def fatal(self, ctx: Context, err: Any) -> None:
        """Log ``err`` at the fatal level, then exit the process with status 1."""
        message = str(err) if isinstance(err, BaseException) else err
        self._log("critical", ctx, message, ())
        self._exit(FATAL_EXIT_CODE)

    def fatalf(self, ctx: Context, fmt: str, *args: Any) -> None:
        """Formatted :meth:`fatal`."""
        self._logf("critical", ctx, fmt, args)
        self._exit(FATAL_EXIT_CODE)
