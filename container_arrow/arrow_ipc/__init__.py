"""Схема Arrow и запись потока IPC."""

from .schema import SUMMARY_SCHEMA, containers_to_batch, summary_schema
from .writer import IpcStreamWriter, containers_to_sink, read_stream, write_batch_to_sink

__all__ = [
    "SUMMARY_SCHEMA",
    "containers_to_batch",
    "summary_schema",
    "IpcStreamWriter",
    "containers_to_sink",
    "read_stream",
    "write_batch_to_sink",
]
