"""Logging of remote calls and of HTTP requests served by a WSGI app."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

_STATUS_NAMES = (
    "OK",
    "Canceled",
    "Unknown",
    "InvalidArgument",
    "DeadlineExceeded",
    "NotFound",
    "AlreadyExists",
    "PermissionDenied",
    "ResourceExhausted",
    "FailedPrecondition",
    "Aborted",
    "OutOfRange",
    "Unimplemented",
    "Internal",
    "Unavailable",
    "DataLoss",
    "Unauthenticated",
)
_UNKNOWN = 2


def _status_text(code: int) -> str:
    if 0 <= code < len(_STATUS_NAMES):
        return _STATUS_NAMES[code]
    return f"Code({code})"


def log_unary_call(handler: Callable[[Any], Any], method: str, request: Any) -> Any:
    """Run ``handler(request)``, log its outcome and duration, and pass it on."""
    start = time.perf_counter()
    error: Optional[BaseException] = None
    try:
        return handler(request)
    except Exception as exc:
        error = exc
        raise
    finally:
        duration = time.perf_counter() - start
        if error is None:
            code = 0
        else:
            code = getattr(error, "code", _UNKNOWN)
            if not isinstance(code, int):
                code = _UNKNOWN
        extra = {
            "protocol": "grpc",
            "method": method,
            "status_code": code,
            "status_text": _status_text(code),
            "duration": duration,
        }
        if error is None:
            logger.info("received a gRPC request", extra=extra)
        else:
            extra["error"] = str(error)
            logger.error("received a gRPC request", extra=extra)


@dataclass
class _Recorder:
    status_code: int = 200
    body: bytes = b""


class HttpLogger:
    """WSGI middleware that logs every request once its response is sent."""

    def __init__(self, app: Callable[..., Iterable[bytes]]) -> None:
        self.app = app

    def __call__(self, environ: dict, start_response: Callable[..., Any]) -> Iterator[bytes]:
        start = time.perf_counter()
        recorder = _Recorder()

        def recording_start(status: str, headers: list, exc_info: Any = None) -> Callable:
            recorder.status_code = int(status.split(None, 1)[0])
            write = start_response(status, headers, exc_info)

            def recording_write(data: bytes) -> None:
                recorder.body = data
                write(data)

            return recording_write

        result = self.app(environ, recording_start)
        return self._stream(result, recorder, environ, start)

    def _stream(
        self, result: Iterable[bytes], recorder: _Recorder, environ: dict, start: float
    ) -> Iterator[bytes]:
        try:
            for chunk in result:
                recorder.body = chunk
                yield chunk
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()
            self._log(recorder, environ, time.perf_counter() - start)

    @staticmethod
    def _log(recorder: _Recorder, environ: dict, duration: float) -> None:
        try:
            status_text = HTTPStatus(recorder.status_code).phrase
        except ValueError:
            status_text = ""
        extra = {
            "protocol": "http",
            "method": environ.get("REQUEST_METHOD", ""),
            "path": environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", ""),
            "status_code": recorder.status_code,
            "status_text": status_text,
            "duration": duration,
        }
        if recorder.status_code == 200:
            logger.info("received an HTTP request", extra=extra)
        else:
            extra["body"] = recorder.body
            logger.error("received an HTTP request", extra=extra)