"""Schema-validated decoding of loosely typed JSON mappings into records.

Every record type declares a ``FIELDS`` table of :class:`Field` entries.
:func:`decode_record` walks the table once:

- a *required* field that is absent or of the wrong type voids the whole
  record (``None`` is returned, never a partially filled instance);
- an *optional* field that is absent or of the wrong type becomes ``None``
  for that attribute only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from .utils import parse_date

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# A converter returns the typed value or None when the raw value does not fit.
Converter = Callable[[Any], Optional[Any]]


class MissingFieldError(ValueError):
    """Internal signal: a required field was absent or mismatched."""

    def __init__(self, key: str) -> None:
        super().__init__(f"required field {key!r} missing or invalid")
        self.key = key


class LatLng(NamedTuple):
    lat: float
    lng: float


# --- Converters ------------------------------------------------------------
def as_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


def as_float(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    return None


def as_bool(raw: Any) -> Optional[bool]:
    return raw if isinstance(raw, bool) else None


def as_str(raw: Any) -> Optional[str]:
    return raw if isinstance(raw, str) else None


def as_dict(raw: Any) -> Optional[Dict[str, Any]]:
    return dict(raw) if isinstance(raw, Mapping) else None


def as_dict_list(raw: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(raw, list):
        return None
    if not all(isinstance(item, Mapping) for item in raw):
        return None
    return [dict(item) for item in raw]


def as_latlng(raw: Any) -> Optional[LatLng]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None
    lat, lng = as_float(raw[0]), as_float(raw[1])
    if lat is None or lng is None:
        return None
    return LatLng(lat, lng)


def as_datetime(raw: Any) -> Optional[datetime]:
    return parse_date(raw) if isinstance(raw, str) else None


def as_record(cls: Type[T]) -> Converter:
    """Converter decoding a nested mapping into ``cls``."""

    def convert(raw: Any) -> Optional[T]:
        if not isinstance(raw, Mapping):
            return None
        return decode_record(cls, raw)

    return convert


def as_record_list(cls: Type[T]) -> Converter:
    """Converter decoding a list of mappings, dropping invalid entries."""

    def convert(raw: Any) -> Optional[List[T]]:
        items = as_dict_list(raw)
        if items is None:
            return None
        return decode_records(cls, items)

    return convert


# --- Reader ----------------------------------------------------------------
class JSONReader:
    """Typed lookups against one untyped mapping."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    @classmethod
    def wrap(cls, data: Any) -> Optional["JSONReader"]:
        if not isinstance(data, Mapping):
            return None
        return cls(data)

    def value(self, key: str, converter: Converter, required: bool = True) -> Any:
        """Return ``data[key]`` converted, or ``None`` for a missing optional.

        Raises:
            MissingFieldError: ``required`` and the value is absent or mismatched.
        """

        raw = self._data.get(key)
        converted = converter(raw) if raw is not None else None
        if converted is None and required:
            raise MissingFieldError(key)
        return converted


@dataclass(frozen=True)
class Field:
    """One entry of a record's field table."""

    key: str
    attr: str
    converter: Converter
    required: bool = True


def optional(key: str, attr: str, converter: Converter) -> Field:
    return Field(key, attr, converter, required=False)


def decode_record(cls: Type[T], data: Any) -> Optional[T]:
    """Build ``cls`` from ``data`` using ``cls.FIELDS``; ``None`` when invalid."""

    reader = JSONReader.wrap(data)
    if reader is None:
        LOGGER.debug("Rejecting %s: payload is %s", cls.__name__, type(data).__name__)
        return None
    fields: Sequence[Field] = getattr(cls, "FIELDS")
    values: Dict[str, Any] = {}
    try:
        for field in fields:
            values[field.attr] = reader.value(
                field.key, field.converter, required=field.required
            )
    except MissingFieldError as exc:
        LOGGER.debug("Rejecting %s: %s", cls.__name__, exc)
        return None
    return cls(**values)


def decode_records(cls: Type[T], items: Iterable[Any]) -> List[T]:
    """Decode each mapping in ``items``; invalid entries are dropped."""

    records: List[T] = []
    for item in items:
        record = decode_record(cls, item)
        if record is not None:
            records.append(record)
    return records


__all__ = [
    "Field",
    "JSONReader",
    "LatLng",
    "MissingFieldError",
    "as_bool",
    "as_datetime",
    "as_dict",
    "as_dict_list",
    "as_float",
    "as_int",
    "as_latlng",
    "as_record",
    "as_record_list",
    "as_str",
    "decode_record",
    "decode_records",
    "optional",
]
