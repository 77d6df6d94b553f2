"""
Structured logging with key=value and JSON output support.

Wraps the standard library ``logging`` module so that resolution events are
emitted as an event name followed by key=value pairs (default) or as one
JSON object per line.

Values containing spaces, equals signs, or quotes are escaped and wrapped in
double quotes. Long values (decoded metadata, storage dumps) are truncated
to a configurable maximum length.

``StructuredFormatter`` reads the ``structured_kv`` extra attached by
``Logger`` and appends it to the message, so records from ``Logger`` and
from plain ``logging.getLogger("tzmeta...")`` calls share one layout.

Examples:
    ```python
    from tzmeta.core.logger import Logger

    logger = Logger("tzmeta.resolver")
    logger.info("resolve_started", address="KT1...", key=None)
    # Output: resolve_started address=KT1... key=None

    hop = logger.bind(address="KT1...")
    hop.debug("shape_selected", shape="generic_store")
    # Output: shape_selected address=KT1... shape=generic_store
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, Final


DEFAULT_MAX_VALUE_LENGTH: Final[int] = 1000

_QUOTE_TRIGGERS: Final = frozenset(" =\"'")


def _clip(text: str, limit: int | None) -> str:
    overflow = len(text) - limit if limit else 0
    if overflow > 0:
        return f"{text[:limit]}...<truncated {overflow} chars>"
    return text


def _render(value: Any, limit: int | None) -> str:
    text = _clip(str(value), limit)
    if text and _QUOTE_TRIGGERS.isdisjoint(text):
        return text
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = DEFAULT_MAX_VALUE_LENGTH,
    prefix: str = " ",
) -> str:
    """Render *kwargs* as ``key=value`` pairs separated by spaces.

    Values that are empty or contain a space, ``=`` or a quote are wrapped
    in double quotes with backslashes and double quotes escaped. Values
    longer than *max_value_length* are clipped; ``None`` disables clipping.

    Returns:
        *prefix* followed by the pairs, e.g. ``' address=KT1... key="a b"'``,
        or ``""`` when *kwargs* is empty.
    """
    if not kwargs:
        return ""
    return prefix + " ".join(f"{k}={_render(v, max_value_length)}" for k, v in kwargs.items())


class StructuredFormatter(logging.Formatter):
    """Renders records as ``<level> <logger> <event> key=value...``.

    Install it on a handler to get one line per resolution event, e.g.
    ``debug tzmeta.resolver shape_selected address=KT1... shape=generic_store``.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        return line + format_kv_pairs(getattr(record, "structured_kv", {}))


class Logger:
    """Event logger that carries keyword fields alongside each message.

    Thin layer over ``logging.getLogger(name)``: the message is an event
    name and keyword arguments travel as the ``structured_kv`` record extra
    (or inside the JSON line when *json_output* is set). Fields given to
    [bind][tzmeta.core.logger.Logger.bind] are attached to every record.

    Args:
        name: Standard logger name, e.g. ``"tzmeta.resolver"``.
        json_output: Emit one JSON object per record instead of extras.
        max_value_length: Per-value character limit before clipping.
        context: Fields attached to every record.
    """

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )
        self._context: dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context: Any) -> Logger:
        """Return a child logger whose records also carry *context*."""
        return Logger(
            self.name,
            json_output=self._json_output,
            max_value_length=self._max_value_length,
            context={**self._context, **context},
        )

    def _json_line(self, event: str, level: int, fields: dict[str, Any]) -> str:
        return json.dumps(
            {
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                "level": logging.getLevelName(level).lower(),
                "logger": self.name,
                "message": event,
                **fields,
            },
            default=str,
        )

    def _log(
        self, level: int, event: str, fields: dict[str, Any], *, exc_info: bool = False
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        fields = {**self._context, **fields}
        if self._json_output:
            self._logger.log(level, self._json_line(event, level, fields), exc_info=exc_info)
            return
        extra = (
            {"structured_kv": {k: _clip(str(v), self._max_value_length) for k, v in fields.items()}}
            if fields
            else {}
        )
        self._logger.log(level, event, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
