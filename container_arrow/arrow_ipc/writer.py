"""Запись record batch в потоковый формат Arrow IPC.

Поток состоит из схемы, кадров record batch и маркера конца потока.
Приёмник (файл, сокет, pipe) никогда не закрывается этим модулем.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence

import pyarrow as pa

from container_arrow.arrow_ipc.schema import containers_to_batch, summary_schema
from container_arrow.docker_api.models import ContainerSummary
from container_arrow.exceptions import DecodingError, EncodingError, EncodingInitError

DEFAULT_BUFFER_SIZE = 64 * 1024

# pyarrow возвращает исключения Python-приёмника без обёртки
_WRITE_ERRORS = (pa.ArrowException, OSError, ValueError)

LOGGER = logging.getLogger(__name__)


class WriterState(str, Enum):
    """Состояния IpcStreamWriter."""

    OPENED = "opened"
    BATCH_WRITTEN = "batch_written"
    FINISHED = "finished"
    RELEASED = "released"
    ABORTED = "aborted"


_TERMINAL_STATES = (WriterState.FINISHED, WriterState.RELEASED, WriterState.ABORTED)


class _UnclosableSink:
    """Обёртка приёмника для PythonFile: close() не доходит до исходного объекта.

    pyarrow закрывает PythonFile при сборке мусора буферизованного потока.
    """

    def __init__(self, sink: Any) -> None:
        self._sink = sink
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or bool(getattr(self._sink, "closed", False))

    def write(self, data: Any) -> Any:
        return self._sink.write(data)

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if callable(flush):
            flush()

    def close(self) -> None:
        self._closed = True


def _as_output_stream(sink: Any) -> pa.NativeFile:
    if isinstance(sink, pa.NativeFile):
        return sink
    if not callable(getattr(sink, "write", None)):
        raise EncodingInitError(f"sink {type(sink).__name__} has no write() method")
    return pa.PythonFile(_UnclosableSink(sink), mode="w")


class IpcStreamWriter:
    """Буферизованный writer потока Arrow IPC с явными состояниями.

    OPENED -> BATCH_WRITTEN* -> FINISHED -> RELEASED, после ошибки ABORTED.
    Несколько batch формат допускает, но экспорт пишет ровно один.
    """

    def __init__(
        self,
        sink: Any,
        schema: pa.Schema,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if getattr(sink, "closed", False):
            raise EncodingInitError("sink is closed")
        self._schema = schema
        self._rows_written = 0
        self._batches_written = 0
        raw = _as_output_stream(sink)
        try:
            self._buffered = pa.BufferedOutputStream(raw, buffer_size)
        except _WRITE_ERRORS as exc:
            raise EncodingInitError(str(exc)) from exc
        try:
            self._writer = pa.ipc.new_stream(self._buffered, schema)
            self._buffered.flush()
        except _WRITE_ERRORS as exc:
            self._discard_buffer()
            raise EncodingInitError(str(exc)) from exc
        self._state = WriterState.OPENED

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def schema(self) -> pa.Schema:
        return self._schema

    @property
    def rows_written(self) -> int:
        """Всего строк записано."""

        return self._rows_written

    @property
    def batches_written(self) -> int:
        """Всего кадров record batch записано."""

        return self._batches_written

    def write_batch(self, batch: pa.RecordBatch) -> None:
        """Записывает один кадр record batch в буфер."""

        if self._state not in (WriterState.OPENED, WriterState.BATCH_WRITTEN):
            raise EncodingError(f"cannot write a batch in state '{self._state.value}'")
        if not batch.schema.equals(self._schema):
            raise EncodingError("batch schema does not match the stream schema")
        try:
            self._writer.write_batch(batch)
        except _WRITE_ERRORS as exc:
            raise EncodingError(str(exc)) from exc
        self._state = WriterState.BATCH_WRITTEN
        self._batches_written += 1
        self._rows_written += batch.num_rows

    def flush(self) -> None:
        """Сбрасывает буфер в приёмник."""

        if self._state in _TERMINAL_STATES:
            raise EncodingError(f"cannot flush in state '{self._state.value}'")
        try:
            self._buffered.flush()
        except _WRITE_ERRORS as exc:
            raise EncodingError(str(exc)) from exc

    def finish(self) -> None:
        """Пишет маркер конца потока; приёмник остаётся открытым."""

        if self._state in _TERMINAL_STATES:
            raise EncodingError(f"cannot finish in state '{self._state.value}'")
        try:
            self._writer.close()
        except _WRITE_ERRORS as exc:
            raise EncodingError(str(exc)) from exc
        self._state = WriterState.FINISHED

    def release(self) -> None:
        """Сбрасывает остаток буфера и отсоединяет его от приёмника без закрытия."""

        if self._state is not WriterState.FINISHED:
            raise EncodingError(f"cannot release in state '{self._state.value}'")
        try:
            self._buffered.detach()
        except _WRITE_ERRORS as exc:
            raise EncodingError(str(exc)) from exc
        self._state = WriterState.RELEASED

    def abort(self) -> None:
        """Бросает поток без маркера конца после ошибки; приёмник остаётся открытым."""

        if self._state in (WriterState.RELEASED, WriterState.ABORTED):
            return
        self._discard_buffer()
        self._state = WriterState.ABORTED

    def _discard_buffer(self) -> None:
        # только на пути ошибки: сбой detach не заменяет исходное исключение
        try:
            self._buffered.detach()
        except _WRITE_ERRORS as exc:
            LOGGER.warning("Could not detach IPC buffer from sink: %s", exc)

    def __repr__(self) -> str:
        return (
            f"IpcStreamWriter(state={self._state.value!r}, "
            f"batches={self._batches_written}, rows={self._rows_written})"
        )


def _flush_sink(sink: Any) -> None:
    flush = getattr(sink, "flush", None)
    if not callable(flush):
        return
    try:
        flush()
    except _WRITE_ERRORS as exc:
        raise EncodingError(str(exc)) from exc


def write_batch_to_sink(
    batch: pa.RecordBatch,
    sink: Any,
    schema: Optional[pa.Schema] = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Пишет один batch и полностью завершает поток.

    Порядок важен: flush буфера, маркер конца потока, освобождение
    буфера и только потом flush самого приёмника. Иначе хвост потока
    может потеряться, если приёмник закроют сразу после возврата.
    """

    writer = IpcStreamWriter(
        sink, schema if schema is not None else batch.schema, buffer_size=buffer_size
    )
    try:
        writer.write_batch(batch)
        writer.flush()
        writer.finish()
        writer.release()
    except EncodingError:
        writer.abort()
        raise
    _flush_sink(sink)
    LOGGER.debug("Wrote IPC stream: %r", writer)


def containers_to_sink(
    containers: Sequence[ContainerSummary],
    sink: Any,
    schema: Optional[pa.Schema] = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Преобразует контейнеры в batch и пишет его в приёмник; возвращает число строк."""

    schema = schema if schema is not None else summary_schema()
    batch = containers_to_batch(containers, schema)
    write_batch_to_sink(batch, sink, schema, buffer_size=buffer_size)
    return batch.num_rows


def read_stream(source: Any) -> pa.Table:
    """Читает поток Arrow IPC целиком (путь, bytes, buffer или file-like)."""

    try:
        if isinstance(source, (str, Path)):
            with pa.OSFile(str(source), mode="rb") as handle:
                return pa.ipc.open_stream(handle).read_all()
        return pa.ipc.open_stream(source).read_all()
    except (pa.ArrowException, OSError) as exc:
        raise DecodingError(str(exc)) from exc
