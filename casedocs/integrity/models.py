from dataclasses import dataclass


@dataclass(frozen=True)
class EvidenceRecord:
    """Chain-of-custody record for one uploaded file."""

    file_hash: str
    file_name: str
    file_size: int
    uploader_id: str
    timestamp: str
    signature: str

    def body(self) -> dict[str, object]:
        """Signed fields, keyed as they are serialized (signature excluded)."""
        return {
            "fileHash": self.file_hash,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "uploaderId": self.uploader_id,
            "timestamp": self.timestamp,
        }

    def to_dict(self) -> dict[str, object]:
        return {**self.body(), "signature": self.signature}
