"""
Per-client logger driven by the `logger` client option.
"""
import logging
import threading
from typing import Union

from keyauth.enums.EventType import EventType
from keyauth.pojos.ClientOptions import LoggerOptions

LEVELS = {
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
    'dev': logging.DEBUG,
}

LEVEL_NAMES = {
    logging.ERROR: 'error',
    logging.WARNING: 'warning',
    logging.INFO: 'info',
    logging.DEBUG: 'debug',
}


class _TagFormatter(logging.Formatter):

    def __init__(self):
        super().__init__("%(asctime)s [%(clientName)s] [%(tag)s|%(levelTag)s]: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.clientName = getattr(record, 'clientName', '-')
        record.tag = getattr(record, 'tag', '-')
        record.levelTag = LEVEL_NAMES.get(record.levelno, record.levelname.lower())
        return super().format(record)


_sharedLogger = logging.getLogger("keyauth.client")
_sharedLogger.setLevel(logging.DEBUG)
_handlerLock = threading.Lock()


def _ensureHandler() -> None:
    with _handlerLock:
        if not any(getattr(h, '_keyauthHandler', False) for h in _sharedLogger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(_TagFormatter())
            handler._keyauthHandler = True
            _sharedLogger.addHandler(handler)


class ClientLogger:
    """
    Tagged logger for one client instance.
    Silent unless `active` is set; level defaults to error.

    All clients write through the "keyauth.client" logger. The active flag and
    threshold belong to the instance, so clients never change each other's output.
    """

    def __init__(self, options: LoggerOptions):
        self.name = options.name
        self.active = bool(options.active)
        self.level = LEVELS.get(options.level, logging.ERROR)
        self._logger = _sharedLogger

        if self.active:
            _ensureHandler()

    def isEnabledFor(self, level: int) -> bool:
        return self.active and level >= self.level

    def _log(self, level: int, tag: Union[EventType, str], message: str) -> None:
        if not self.isEnabledFor(level):
            return
        tagValue = tag.value if isinstance(tag, EventType) else str(tag)
        self._logger.log(level, message, extra={'tag': tagValue, 'clientName': self.name})

    def error(self, tag: Union[EventType, str], message: str) -> None:
        self._log(logging.ERROR, tag, message)

    def warning(self, tag: Union[EventType, str], message: str) -> None:
        self._log(logging.WARNING, tag, message)

    def info(self, tag: Union[EventType, str], message: str) -> None:
        self._log(logging.INFO, tag, message)

    def debug(self, tag: Union[EventType, str], message: str) -> None:
        self._log(logging.DEBUG, tag, message)
