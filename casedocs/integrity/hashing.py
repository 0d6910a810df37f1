import hashlib
import json
from datetime import datetime, timezone
from typing import BinaryIO

from casedocs.integrity.models import EvidenceRecord
from casedocs.logging.logger import Log

STREAM_CHUNK_SIZE = 64 * 1024


def hash_bytes(data: bytes) -> str:
    """SHA-256 of raw bytes, hex-encoded."""
    return hashlib.sha256(data).hexdigest()


def hash_string(text: str) -> str:
    """SHA-256 of the UTF-8 encoding of a string, hex-encoded."""
    return hash_bytes(text.encode("utf-8"))


def hash_stream(stream: BinaryIO, chunk_size: int = STREAM_CHUNK_SIZE) -> str:
    """SHA-256 of a binary stream, read incrementally until EOF."""
    digest = hashlib.sha256()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()


def verify_file_hash(data: bytes, expected_hash: str) -> bool:
    """Recompute the hash of data and compare it to expected_hash.

    The comparison is exact and case-sensitive on the hex encoding.
    """
    return hash_bytes(data) == expected_hash


def canonical_json(fields: dict[str, object]) -> str:
    """Serialize a mapping with sorted keys and compact separators."""
    return json.dumps(fields, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def metadata_checksum(fields: dict[str, object]) -> str:
    """Checksum of a metadata mapping, independent of key insertion order."""
    return hash_string(canonical_json(fields))


def format_timestamp(timestamp: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix.

    Naive datetimes are taken to be UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    utc = timestamp.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_evidence_record(
    file_hash: str,
    file_name: str,
    file_size: int,
    uploader_id: str,
    timestamp: datetime,
) -> EvidenceRecord:
    """Assemble and sign an evidence record.

    The signature is the hash of the canonical record body; the signature
    field itself is never part of what is signed. The timestamp is
    truncated to milliseconds, like JavaScript toISOString, so two uploads
    less than a millisecond apart with otherwise equal fields share a
    signature.
    """
    unsigned = EvidenceRecord(
        file_hash=file_hash,
        file_name=file_name,
        file_size=file_size,
        uploader_id=uploader_id,
        timestamp=format_timestamp(timestamp),
        signature="",
    )
    signature = hash_string(canonical_json(unsigned.body()))
    Log.debug(f"Evidence record created for {file_name} ({file_hash})")
    return EvidenceRecord(
        file_hash=unsigned.file_hash,
        file_name=unsigned.file_name,
        file_size=unsigned.file_size,
        uploader_id=unsigned.uploader_id,
        timestamp=unsigned.timestamp,
        signature=signature,
    )


def verify_evidence_record(record: EvidenceRecord) -> bool:
    """Check that a record's signature matches its body."""
    return hash_string(canonical_json(record.body())) == record.signature
