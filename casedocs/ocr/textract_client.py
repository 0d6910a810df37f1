from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from casedocs.ocr.base import BaseOcrClient
from casedocs.ocr.exceptions import OcrError
from casedocs.ocr.models import OcrBlock


class TextractOcrClient(BaseOcrClient):
    """OCR engine backed by AWS Textract DetectDocumentText.

    The connect and read timeouts bound every call, so a hung request
    fails the job instead of blocking it.
    """

    name = "textract"

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_credentials(
        cls,
        *,
        region: str,
        timeout_seconds: int,
        access_key_id: str = "",
        secret_access_key: str = "",
    ) -> "TextractOcrClient":
        config = Config(
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"max_attempts": 2, "mode": "standard"},
        )
        client = boto3.client(
            "textract",
            region_name=region,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
            config=config,
        )
        return cls(client)

    def detect_document_text(self, data: bytes) -> list[OcrBlock]:
        try:
            response = self._client.detect_document_text(Document={"Bytes": data})
        except (BotoCoreError, ClientError) as exc:
            raise OcrError(f"Textract request failed: {exc}") from exc

        blocks = response.get("Blocks")
        if blocks is None:
            raise OcrError("Textract returned no blocks")
        return [
            OcrBlock(
                text=block.get("Text", ""),
                block_type=block.get("BlockType", ""),
                confidence=float(block.get("Confidence", 0.0)),
            )
            for block in blocks
        ]
