"""
Album API — Record Mapper and Field Coercion
=============================================

What:  Translates between the backend's generic field map and the Album model.
Why:   Airtable returns untyped JSON values per field; the API exposes a fixed
       shape with text fields and a decimal price.
How:   Two total coercion functions (never raise) plus the two mapping
       directions built on top of them.

Field value union (what json decoding of an Airtable record can yield):
    str | int | float | bool | None | list | dict
    None stands for "field absent": Airtable omits empty fields entirely.
"""

import json
import math
from typing import Any, Dict, List, Mapping, Optional, Union

from albumapi.schemas.album import Album

FieldValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]

# The four field names this service reads and writes
FIELD_ID = "id"
FIELD_TITLE = "title"
FIELD_ARTIST = "artist"
FIELD_PRICE = "price"


def to_text(value: FieldValue) -> str:
    """
    Render any field value as text.

    Absent values become the empty string rather than a placeholder such as
    "<nil>" or "None", so a missing field reads the same as an empty one in
    the API response. Booleans use JSON spelling
    (true/false), integral floats drop the fractional part (3.0 → "3"), and
    containers (linked records, attachments) are rendered as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int/float: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def to_price(value: FieldValue) -> float:
    """
    Coerce a field value to a price.

    Floats, integers and numeric text yield their value. Anything else
    (absent, boolean, container, non-numeric text, or a number too large
    for a float) yields 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return 0.0
    except (ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def album_from_fields(fields: Optional[Mapping[str, FieldValue]]) -> Album:
    """Build an Album from a backend field map; missing keys take zero values."""
    fields = fields or {}
    return Album(
        id=to_text(fields.get(FIELD_ID)),
        title=to_text(fields.get(FIELD_TITLE)),
        artist=to_text(fields.get(FIELD_ARTIST)),
        price=to_price(fields.get(FIELD_PRICE)),
    )


def fields_from_album(album: Album) -> Dict[str, FieldValue]:
    """Build the backend field map sent on record creation."""
    return {
        FIELD_ID: album.id,
        FIELD_TITLE: album.title,
        FIELD_ARTIST: album.artist,
        FIELD_PRICE: album.price,
    }
