"""
Blob Storage Models

Value objects exchanged with the storage facade: stored blob descriptions,
download results, upload sources and the metadata conventions stamped on
every blob.

Author: PainterQueue Team
Date: 2026-10-18
"""

import io
import re
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Stand-in for a missing or unparseable insertedOn value
ZERO_TIMESTAMP = datetime(1, 1, 1, tzinfo=timezone.utc)


class BlobMetadataKeys:
    """Reserved metadata names written on every uploaded blob."""

    FILENAME = "filename"
    IS_SUCCESS = "isSuccess"
    INSERTED_ON = "insertedOn"


class PublicAccessLevel(str, Enum):
    """Container public access levels."""
    PRIVATE = "private"
    BLOB = "blob"
    CONTAINER = "container"


class ContainerNameValidator:
    """
    Validates Azure Blob Storage container names.

    Rules:
    - 3-63 characters
    - Lowercase letters, numbers, hyphens only
    - Must start and end with letter or number
    - No consecutive hyphens
    """

    PATTERN = re.compile(r'^[a-z0-9]([a-z0-9-]*[a-z0-9])?$')
    MIN_LENGTH = 3
    MAX_LENGTH = 63

    @classmethod
    def validate(cls, name: str) -> tuple[bool, Optional[str]]:
        """
        Validate container name against Azure rules.

        Args:
            name: Container name to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name:
            return False, "Container name cannot be empty"

        if len(name) < cls.MIN_LENGTH:
            return False, f"Container name must be at least {cls.MIN_LENGTH} characters"

        if len(name) > cls.MAX_LENGTH:
            return False, f"Container name must be at most {cls.MAX_LENGTH} characters"

        if not cls.PATTERN.match(name):
            return False, "Container name must contain only lowercase letters, numbers, and hyphens, and must start/end with letter or number"

        if '--' in name:
            return False, "Container name cannot contain consecutive hyphens"

        return True, None


def get_metadata_value(metadata: Mapping[str, str], key: str) -> Optional[str]:
    """Look up a metadata entry ignoring case, as the storage service does."""
    if key in metadata:
        return metadata[key]
    lowered = key.lower()
    for name, value in metadata.items():
        if name.lower() == lowered:
            return value
    return None


def parse_is_success(value: Optional[str]) -> bool:
    """Only an explicit "false" marks a stored blob as unsuccessful."""
    if value is None:
        return True
    return value.strip().lower() != "false"


def parse_inserted_on(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 timestamp, falling back to ZERO_TIMESTAMP."""
    if not value or not value.strip():
        return ZERO_TIMESTAMP
    text = value.strip()
    # fromisoformat only accepts a "Z" designator from Python 3.11 on
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return ZERO_TIMESTAMP
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BlobRecord(BaseModel):
    """
    Descriptive metadata of one stored blob.

    Built by the facade when listing a container and never mutated
    afterwards.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    container_name: str = Field(alias="containerName", min_length=1)
    blob_name: str = Field(alias="blobName", min_length=1)
    file_name: str = Field(alias="fileName")
    is_success: bool = Field(default=True, alias="isSuccess")
    inserted_on: datetime = Field(default=ZERO_TIMESTAMP, alias="insertedOn")

    @classmethod
    def from_metadata(
        cls,
        container_name: str,
        blob_name: str,
        metadata: Mapping[str, str],
    ) -> "BlobRecord":
        """Build a record, filling defaults for missing or unreadable entries."""
        file_name = get_metadata_value(metadata, BlobMetadataKeys.FILENAME)
        return cls(
            container_name=container_name,
            blob_name=blob_name,
            file_name=file_name if file_name is not None else blob_name,
            is_success=parse_is_success(get_metadata_value(metadata, BlobMetadataKeys.IS_SUCCESS)),
            inserted_on=parse_inserted_on(get_metadata_value(metadata, BlobMetadataKeys.INSERTED_ON)),
        )


class BlobDetails(BaseModel):
    """Caller-supplied description of a blob being uploaded."""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)


@dataclass(frozen=True)
class BlobDownload:
    """Content and display information of a retrieved blob."""

    content: BinaryIO
    content_type: str
    file_name: str

    def read(self) -> bytes:
        """Read the remaining content."""
        return self.content.read()


class BlobUpload:
    """
    Content to upload, opened lazily.

    The facade opens the stream itself so it can guarantee the stream is
    closed on every exit path.
    """

    def __init__(self, opener: Callable[[], BinaryIO], content_type: str = DEFAULT_CONTENT_TYPE):
        self._opener = opener
        self.content_type = content_type or DEFAULT_CONTENT_TYPE

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> "BlobUpload":
        """Upload an in-memory buffer."""
        return cls(lambda: io.BytesIO(data), content_type)

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: str = DEFAULT_CONTENT_TYPE) -> "BlobUpload":
        """Upload a file from disk."""
        file_path = Path(path)
        return cls(lambda: open(file_path, "rb"), content_type)

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        """Open a fresh read stream and close it when the block exits."""
        stream = self._opener()
        try:
            yield stream
        finally:
            stream.close()
