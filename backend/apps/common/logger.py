import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

_SCALARS = (str, int, float, bool, Decimal)


class AppLogger:
    """Context-binding wrapper over a stdlib logger; records read ``message | key=value ...``."""

    __slots__ = ("_logger", "_context")

    def __init__(
        self,
        target: Union[str, logging.Logger],
        context: Optional[Mapping[str, Any]] = None,
    ):
        self._logger = target if isinstance(target, logging.Logger) else logging.getLogger(target)
        self._context = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **extra: Any) -> "AppLogger":
        return AppLogger(self._logger, {**self._context, **extra})

    def debug(self, message: str, **context: Any) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, context)

    def exception(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, context, exc_info=True)

    def _log(self, level: int, message: str, context: Mapping[str, Any], exc_info: bool = False) -> None:
        # Skip rendering for filtered-out levels.
        if not self._logger.isEnabledFor(level):
            return
        # stacklevel 3 attributes the record to the caller of debug()/info()/...
        self._logger.log(
            level,
            self.render(message, {**self._context, **context}),
            exc_info=exc_info,
            stacklevel=3,
        )

    @classmethod
    def render(cls, message: str, context: Mapping[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={cls._stringify(value)}" for key, value in context.items())
        return f"{message} | {pairs}"

    @staticmethod
    def _stringify(value: Any) -> str:
        if value is None or isinstance(value, _SCALARS):
            return str(value)
        return repr(value)


def get_logger(name: str) -> AppLogger:
    return AppLogger(name)
