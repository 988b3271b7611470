"""
JSON stream parsing for seed files.

Seed files are edited by hand, so comments and trailing commas are
accepted; the elements are then validated as models.
"""

from typing import BinaryIO, List, Optional, Type, TypeVar

import json5
from pydantic import BaseModel, TypeAdapter

M = TypeVar("M", bound=BaseModel)


def parse_json_list(stream: Optional[BinaryIO], model: Type[M]) -> List[M]:
    """
    Parse a JSON array from a binary stream into validated models.

    Args:
        stream: Readable stream holding a JSON array (UTF-8, optional BOM)
        model: Model each array element is validated into

    Returns:
        The parsed models, possibly empty

    Raises:
        ValueError: If the stream is None, the document is malformed or it is JSON null
        pydantic.ValidationError: If the document is not an array or an element is invalid
    """
    if stream is None:
        raise ValueError("stream cannot be null")

    document = json5.loads(stream.read().decode("utf-8-sig"))

    items = TypeAdapter(Optional[List[model]]).validate_python(document)
    if items is None:
        raise ValueError("Deserialized list was null.")
    return items
