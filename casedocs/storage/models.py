from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ObjectMetadata:
    """Attributes of a stored object."""

    content_type: str
    content_length: int
    last_modified: datetime
    metadata: dict[str, str] = field(default_factory=dict)
