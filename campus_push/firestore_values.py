"""
Decoding of Firestore REST typed values.

Background Firestore triggers deliver the created document as
``{"fields": {"name": {"stringValue": "Alice"}, ...}}``. These helpers turn
that representation into plain Python values.
"""
from typing import Any, Dict


def decode_value(value: Dict[str, Any]) -> Any:
    if not isinstance(value, dict) or len(value) != 1:
        raise ValueError(f"Malformed Firestore value: {value!r}")

    kind, raw = next(iter(value.items()))

    if kind == 'nullValue':
        return None
    if kind in ('stringValue', 'booleanValue', 'timestampValue', 'referenceValue', 'bytesValue'):
        return raw
    if kind == 'integerValue':
        # int64 values travel as strings
        return int(raw)
    if kind == 'doubleValue':
        return float(raw)
    if kind == 'geoPointValue':
        return {'latitude': raw.get('latitude', 0.0), 'longitude': raw.get('longitude', 0.0)}
    if kind == 'arrayValue':
        return [decode_value(v) for v in (raw or {}).get('values', [])]
    if kind == 'mapValue':
        return decode_fields((raw or {}).get('fields', {}))

    raise ValueError(f"Unsupported Firestore value type: {kind}")


def decode_fields(fields: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {name: decode_value(value) for name, value in (fields or {}).items()}
