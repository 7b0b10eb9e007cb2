import logging
import sys


def format_context(message: str, context: dict[str, object]) -> str:
    """Append ``(key=value, ...)`` to the message when context is given."""
    if not context:
        return message
    pairs = ", ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} ({pairs})"


class Log:
    """Centralized service logging; keyword arguments are rendered as context."""

    _logger: logging.Logger = logging.getLogger("doc_translator")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(format_context(message, context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(format_context(message, context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(format_context(message, context))

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log an error together with the traceback of the exception being handled."""
        cls._logger.exception(format_context(message, context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(format_context(message, context))
