import json
import os
from logging import (
    basicConfig,
    getLogger,
    DEBUG,
    INFO,
    WARNING,
    CRITICAL,
    StreamHandler,
    Formatter,
    LogRecord,
)
from typing import ClassVar, Optional, Dict, Mapping

from attrs import define, field

from fixarm.types import Json

getLogger("fixarm").setLevel(INFO)
# azure-core is chatty on INFO: it logs every request and response
getLogger("azure").setLevel(WARNING)


@define
class LoggingConfig:
    kind: ClassVar[str] = "logging"
    verbose: Optional[bool] = field(default=False, metadata={"description": "Verbose logging"})
    quiet: Optional[bool] = field(default=False, metadata={"description": "Only log errors"})


class JsonFormatter(Formatter):
    """
    Simple json log formatter.
    """

    def __init__(
        self,
        fmt_dict: Mapping[str, str],
        time_format: str = "%Y-%m-%dT%H:%M:%S",
        static_values: Optional[Dict[str, str]] = None,
    ):
        super().__init__()
        self.fmt_dict = fmt_dict
        self.time_format = time_format
        self.static_values = static_values or {}
        self.__use_time = "asctime" in self.fmt_dict.values()

    def usesTime(self) -> bool:  # noqa: N802
        return self.__use_time

    def format_json_message(self, record: LogRecord) -> Json:
        record.message = record.getMessage()
        if self.__use_time:
            record.asctime = self.formatTime(record, self.time_format)

        message_dict: Json = {key: record.__dict__[value] for key, value in self.fmt_dict.items()}
        message_dict.update(self.static_values)

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message_dict["exception"] = record.exc_text
        if record.stack_info:
            message_dict["stack_info"] = self.formatStack(record.stack_info)
        return message_dict

    def format(self, record: LogRecord) -> str:
        return json.dumps(self.format_json_message(record), default=str)


def setup_logger(
    proc: str,
    *,
    force: bool = True,
    verbose: bool = False,
    quiet: bool = False,
    level: Optional[str] = None,
    json_format: bool = True,
) -> None:
    # override log output via env var
    plain_text = os.environ.get("FIXARM_LOG_TEXT", "false").lower() == "true"
    if json_format and not plain_text:
        handler = StreamHandler()
        formatter = JsonFormatter(
            {
                "timestamp": "asctime",
                "level": "levelname",
                "message": "message",
                "pid": "process",
                "thread": "threadName",
            },
            static_values={"process": proc},
        )
        handler.setFormatter(formatter)
        basicConfig(handlers=[handler], force=force)
    else:
        log_format = f"%(asctime)s|{proc}|%(levelname)5s|%(process)d|%(threadName)10s  %(message)s"
        basicConfig(format=log_format, datefmt="%y-%m-%d %H:%M:%S", force=force)
    if level:
        getLogger("fixarm").setLevel(level)
    elif verbose or os.environ.get("FIXARM_VERBOSE", "false").lower() == "true":
        getLogger("fixarm").setLevel(DEBUG)
    elif quiet or os.environ.get("FIXARM_QUIET", "false").lower() == "true":
        getLogger().setLevel(WARNING)
        getLogger("fixarm").setLevel(CRITICAL)


def setup_logger_from_config(proc: str, config: LoggingConfig, *, force: bool = True) -> None:
    setup_logger(proc, force=force, verbose=bool(config.verbose), quiet=bool(config.quiet))


log = getLogger("fixarm")
