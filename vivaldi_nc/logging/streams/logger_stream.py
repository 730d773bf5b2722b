import datetime
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Callable,
    Dict,
    TypeVar,
)

import msgspec

from vivaldi_nc.logging.config.logging_config import LoggingConfig
from vivaldi_nc.logging.config.stream_type import StreamType
from vivaldi_nc.logging.models import Entry, Log


T = TypeVar('T', bound=Entry)


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._files: Dict[str, io.BufferedWriter] = {}
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._write_lock = threading.Lock()

        self._config = LoggingConfig()
        self._closed = False

    @property
    def name(self):
        return self._name

    @property
    def closed(self):
        return self._closed

    def log(
        self,
        entry: T,
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None=None,
    ):
        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory or self._config.directory

        if filename or directory:
            self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
                filter=filter,
            )

        else:
            self._log(
                entry,
                template=template,
                filter=filter,
            )

    def _log(
        self,
        entry: T,
        template: str | None = None,
        filter: Callable[[T], bool] | None=None,
    ):
        if self._closed or self._config.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"

        log_file, line_number, function_name = self._find_caller()

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        try:
            with self._write_lock:
                stream.write(
                    entry.to_template(
                        template,
                        context={
                            "filename": log_file,
                            "function_name": function_name,
                            "line_number": line_number,
                            "thread_id": threading.get_native_id(),
                            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                        },
                    )
                    + "\n"
                )
                stream.flush()

        except Exception as err:
            error_template = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"

            sys.stderr.write(
                entry.to_template(
                    error_template,
                    context={
                        "filename": log_file,
                        "function_name": function_name,
                        "line_number": line_number,
                        "error": str(err),
                        "thread_id": threading.get_native_id(),
                        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                    },
                )
                + "\n"
            )

    def _log_to_file(
        self,
        entry: T,
        filename: str | None = None,
        directory: str | None = None,
        filter: Callable[[T], bool] | None=None,
    ):
        if self._closed or self._config.enabled(entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if filename is None:
            filename = "logs.json"

        if directory is None:
            directory = os.path.join(os.getcwd(), "logs")

        logfile_path = self._to_logfile_path(filename, directory)

        log_file, line_number, function_name = self._find_caller()
        log = Log(
            entry=entry,
            logger=self._name,
            filename=log_file,
            function_name=function_name,
            line_number=line_number,
        )

        with self._file_locks[logfile_path]:
            if (logfile := self._files.get(logfile_path)) is None or logfile.closed:
                self._files[logfile_path] = self._open_file(logfile_path)

            self._write_to_file(log, logfile_path)

    def _open_file(self, logfile_path: str):
        pathlib.Path(logfile_path).parent.mkdir(parents=True, exist_ok=True)
        return open(logfile_path, "ab+")

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        logfile = self._files[logfile_path]
        logfile.write(msgspec.json.encode(log) + b"\n")
        logfile.flush()

    def _to_logfile_path(
        self,
        filename: str,
        directory: str,
    ):
        filename_path = pathlib.Path(filename)

        if filename_path.suffix != ".json":
            filename = f"{filename_path.stem}.json"

        return os.path.join(directory, filename)

    def read(
        self,
        path: str,
        entry_type: type[T] = Entry,
    ) -> list[Log[T]]:
        decoder = msgspec.json.Decoder(Log[entry_type])

        with open(path, "rb") as logfile:
            return [
                decoder.decode(line)
                for line in logfile
                if line.strip()
            ]

    def close(self):
        self._closed = True

        for logfile_path, logfile in list(self._files.items()):
            with self._file_locks[logfile_path]:
                if logfile.closed is False:
                    logfile.close()

        self._files.clear()

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(3)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
