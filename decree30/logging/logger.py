import logging
import sys


class Log:
    """Process-wide logger for the correction assistant."""

    _logger: logging.Logger = logging.getLogger("decree30")
    _handler: logging.Handler | None = None

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler.

        Safe to call more than once: Streamlit re-runs the UI script on every
        interaction, so our handler is only added the first time. Handlers
        attached by others do not count.
        """
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if cls._handler is None:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._handler = handler
        if cls._handler not in cls._logger.handlers:
            cls._logger.addHandler(cls._handler)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error together with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)
