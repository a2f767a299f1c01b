"""Схема Arrow для сводок контейнеров и сборка record batch.

Порядок, имена, типы и nullability колонок входят в формат потока:
читатель на другой стороне ожидает ровно эти 9 колонок.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import pyarrow as pa

from container_arrow.docker_api.models import ContainerSummary
from container_arrow.exceptions import SchemaMismatchError

LOGGER = logging.getLogger(__name__)

SUMMARY_SCHEMA: pa.Schema = pa.schema(
    [
        pa.field("id", pa.string(), nullable=True),
        pa.field("image", pa.string(), nullable=True),
        pa.field("image_id", pa.string(), nullable=True),
        pa.field("command", pa.string(), nullable=True),
        pa.field("state", pa.string(), nullable=True),
        pa.field("status", pa.string(), nullable=True),
        pa.field("created", pa.int64(), nullable=True),
        pa.field("size_rw", pa.int64(), nullable=True),
        pa.field("size_root_fs", pa.int64(), nullable=True),
    ]
)

COLUMN_NAMES = tuple(SUMMARY_SCHEMA.names)


def summary_schema() -> pa.Schema:
    """Возвращает общую (не копируемую) схему сводок контейнеров."""

    return SUMMARY_SCHEMA


def containers_to_batch(
    containers: Sequence[ContainerSummary], schema: Optional[pa.Schema] = None
) -> pa.RecordBatch:
    """Собирает один RecordBatch: строка i соответствует containers[i].

    Отсутствующее поле становится null, а не пустой строкой или нулём.
    """

    schema = schema if schema is not None else SUMMARY_SCHEMA
    if tuple(schema.names) != COLUMN_NAMES:
        raise SchemaMismatchError(
            f"expected columns {list(COLUMN_NAMES)}, got {list(schema.names)}"
        )

    builders: Dict[str, List[object]] = {name: [] for name in COLUMN_NAMES}
    for container in containers:
        for name in COLUMN_NAMES:
            builders[name].append(getattr(container, name))

    try:
        arrays = [
            pa.array(builders[field.name], type=field.type) for field in schema
        ]
        batch = pa.RecordBatch.from_arrays(arrays, schema=schema)
        batch.validate(full=True)
    except (pa.ArrowException, TypeError, ValueError, OverflowError) as exc:
        raise SchemaMismatchError(str(exc)) from exc

    if batch.num_rows != len(containers):
        raise SchemaMismatchError(
            f"batch has {batch.num_rows} rows for {len(containers)} containers"
        )
    LOGGER.debug("Built record batch with %d rows", batch.num_rows)
    return batch


def batch_to_summaries(batch: pa.RecordBatch) -> List[ContainerSummary]:
    """Обратное преобразование batch -> ContainerSummary (null -> None)."""

    columns = batch.to_pydict()
    return [
        ContainerSummary(**{name: columns[name][row] for name in COLUMN_NAMES})
        for row in range(batch.num_rows)
    ]
