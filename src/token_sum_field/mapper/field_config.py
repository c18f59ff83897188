"""Generic field configuration shared by every field type.

A field type parser consumes the keys it understands from the raw
configuration mapping and hands the rest to :func:`parse_field`, which handles
storage flags, doc values, boost and ``copy_to``. The resulting
:class:`FieldConfig` is embedded by value inside the concrete mapper.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, replace
from typing import Any

from token_sum_field.errors import MapperParsingError, MergeError


@dataclass(frozen=True)
class FieldConfig:
    """Flags and defaults common to all fields.

    Args:
        name: Field name, unique within its mappings
        index: Produce an indexed point (default: True)
        store: Keep a stored copy of the value (default: False)
        doc_values: Produce doc values for sorting/aggregations (default: True)
        boost: Query-time boost (default: 1.0)
        copy_to: Other fields that receive a copy of the raw value
        null_value: Value substituted when a document has no value
    """

    name: str
    index: bool = True
    store: bool = False
    doc_values: bool = True
    boost: float = 1.0
    copy_to: tuple[str, ...] = ()
    null_value: int | None = None

    def to_dict(self, content_type: str, *, include_defaults: bool = False) -> dict[str, Any]:
        """Serialize to configuration form, emitting only non-default flags unless asked."""
        defaults = FieldConfig(name=self.name)
        data: dict[str, Any] = {"type": content_type}
        if include_defaults or self.boost != defaults.boost:
            data["boost"] = self.boost
        if include_defaults or self.index != defaults.index:
            data["index"] = self.index
        if include_defaults or self.doc_values != defaults.doc_values:
            data["doc_values"] = self.doc_values
        if include_defaults or self.store != defaults.store:
            data["store"] = self.store
        if self.null_value is not None:
            data["null_value"] = self.null_value
        if self.copy_to:
            data["copy_to"] = list(self.copy_to)
        return data


def node_boolean_value(field_name: str, key: str, value: object) -> bool:
    """Accept real booleans and the strings ``"true"``/``"false"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    msg = f"Failed to parse value [{value}] as only [true] or [false] are allowed for [{key}] of field [{field_name}]"
    raise MapperParsingError(msg)


def _node_float_value(field_name: str, key: str, value: object) -> float:
    msg = f"Failed to parse value [{value}] as a number for [{key}] of field [{field_name}]"
    if isinstance(value, bool):
        raise MapperParsingError(msg)
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise MapperParsingError(msg) from exc


def _node_copy_to(field_name: str, value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise MapperParsingError(f"[copy_to] for field [{field_name}] must be a string or a list of strings")


def parse_field(name: str, node: MutableMapping[str, Any], *, null_value: int | None = None) -> FieldConfig:
    """Consume the generic keys from ``node`` and build a :class:`FieldConfig`.

    Keys this function does not recognise are left in ``node`` so the caller
    can report them as unsupported.
    """
    config: dict[str, Any] = {"name": name, "null_value": null_value}
    for key in list(node):
        value = node[key]
        if key == "type":
            pass
        elif key == "index":
            config["index"] = node_boolean_value(name, key, value)
        elif key == "store":
            config["store"] = node_boolean_value(name, key, value)
        elif key == "doc_values":
            config["doc_values"] = node_boolean_value(name, key, value)
        elif key == "boost":
            config["boost"] = _node_float_value(name, key, value)
        elif key == "copy_to":
            config["copy_to"] = _node_copy_to(name, value)
        else:
            continue
        del node[key]
    return FieldConfig(**config)


def merge_field_config(
    current: FieldConfig,
    update: FieldConfig,
    *,
    current_type: str,
    update_type: str,
) -> FieldConfig:
    """Check that ``update`` may replace ``current`` and return the merged config.

    Storage flags must match; boost, copy_to and null_value follow ``update``.

    Raises:
        MergeError: listing every incompatibility found.
    """
    if current_type != update_type:
        raise MergeError(
            [f"mapper [{current.name}] of different type, current_type [{current_type}], merged_type [{update_type}]"]
        )
    conflicts: list[str] = []
    if current.name != update.name:
        conflicts.append(f"mapper [{current.name}] cannot be merged with mapper [{update.name}]")
    for flag in ("index", "store", "doc_values"):
        if getattr(current, flag) != getattr(update, flag):
            conflicts.append(f"mapper [{current.name}] has different [{flag}] values")
    if conflicts:
        raise MergeError(conflicts)
    return replace(current, boost=update.boost, copy_to=update.copy_to, null_value=update.null_value)
