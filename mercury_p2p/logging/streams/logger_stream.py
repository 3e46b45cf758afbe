import asyncio
import io
import pathlib
import sys

import msgspec

from mercury_p2p.logging.config import LoggingConfig
from mercury_p2p.logging.models import Log


DEFAULT_TEMPLATE = (
    "{timestamp} - {level} - {thread_id} - "
    "{filename}:{function_name}.{line_number} - {message}"
)


class LoggerStream:
    """
    Output for one named logger. Entries go to stdout or stderr as
    template lines unless a path or logs directory is set, in which case
    they are appended as JSON lines to a .json file. File IO runs in the
    default executor.
    """

    def __init__(
        self,
        name: str,
        template: str | None = None,
    ) -> None:
        self.name = name
        self.template = template or DEFAULT_TEMPLATE

        self._config = LoggingConfig()
        self._files: dict[pathlib.Path, io.BufferedWriter] = {}
        self._write_lock = asyncio.Lock()

    async def log(
        self,
        log: Log,
        template: str | None = None,
        path: str | None = None,
    ):
        if not self._config.enabled(log.entry.level):
            return

        logfile_path = self._logfile_path(path)

        if logfile_path is None:
            self._write_line(log.to_line(template or self.template))
            return

        loop = asyncio.get_running_loop()

        async with self._write_lock:
            await loop.run_in_executor(
                None,
                self._append,
                logfile_path,
                msgspec.json.encode(log) + b"\n",
            )

    async def close(self):
        loop = asyncio.get_running_loop()

        async with self._write_lock:
            files = list(self._files.values())
            self._files.clear()

            for logfile in files:
                await loop.run_in_executor(None, logfile.close)

    def _logfile_path(self, path: str | None) -> pathlib.Path | None:
        if path is None and self._config.directory is None:
            return None

        logfile_path = pathlib.Path(path or self._config.directory).absolute()

        if logfile_path.suffix == "":
            logfile_path = logfile_path / f"{self.name}.json"

        if logfile_path.suffix != ".json":
            raise ValueError(
                f"Err. - logfile {logfile_path} must be a .json file"
            )

        return logfile_path

    def _write_line(self, line: str):
        stream = sys.stdout if self._config.output == "stdout" else sys.stderr
        stream.write(line + "\n")
        stream.flush()

    def _append(self, logfile_path: pathlib.Path, data: bytes):
        logfile = self._files.get(logfile_path)

        if logfile is None:
            logfile_path.parent.mkdir(parents=True, exist_ok=True)
            logfile = self._files[logfile_path] = open(logfile_path, "ab")

        logfile.write(data)
        logfile.flush()
