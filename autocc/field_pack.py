"""
Packs composite metadata fields into one flat batch of translatable strings.

Each field is split on a reserved separator; the pieces of all fields are
concatenated in field order and the per-field piece counts are kept so a
translated batch can be sliced back apart. Joining does not reinsert the
separator. Keeping the separator out of real metadata content is the
caller's responsibility.
"""

import logging
from typing import List, Sequence

from .models import FieldBatch
from .exceptions import BatchSizeMismatchError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ";"

def split(composite: str, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    if not separator:
        raise ValueError("Field separator cannot be empty.")
    return composite.split(separator)

def join(parts: Sequence[str]) -> str:
    return "".join(parts)

def pack_fields(fields: Sequence[str], separator: str = DEFAULT_SEPARATOR) -> FieldBatch:
    """
    Flattens fields into a single batch.

    Args:
        fields: Composite fields in order, e.g. [title, description].
        separator: Reserved character marking atomic pieces inside a field.

    Returns:
        A FieldBatch whose boundaries hold the number of pieces per field.
    """
    texts: List[str] = []
    boundaries: List[int] = []
    for value in fields:
        parts = split(value, separator)
        texts.extend(parts)
        boundaries.append(len(parts))
    logger.debug(f"Packed {len(boundaries)} fields into {len(texts)} strings.")
    return FieldBatch(texts=texts, boundaries=boundaries)

def unpack_fields(boundaries: Sequence[int], translated: Sequence[str]) -> List[str]:
    """
    Slices a translated flat list back into fields and joins each one.

    Args:
        boundaries: Piece counts per field, as produced by pack_fields.
        translated: The translated flat list.

    Returns:
        One string per field, in field order.

    Raises:
        BatchSizeMismatchError: If the translated list is not exactly as long
                                as the packed one.
    """
    expected = sum(boundaries)
    if len(translated) != expected:
        raise BatchSizeMismatchError(
            f"Translated batch has {len(translated)} strings, expected {expected}."
        )

    fields = []
    offset = 0
    for count in boundaries:
        fields.append(join(translated[offset:offset + count]))
        offset += count
    return fields
