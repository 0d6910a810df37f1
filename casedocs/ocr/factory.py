from casedocs.config.settings import Settings
from casedocs.ocr.base import BaseOcrClient
from casedocs.ocr.ocr_service import OcrService
from casedocs.ocr.textract_client import TextractOcrClient


class OcrServiceFactory:
    """Creates the OCR service with the configured primary and fallback engines."""

    PROVIDERS: tuple[str, ...] = ("textract",)
    FALLBACK_ENGINES: tuple[str, ...] = ("none",)

    @classmethod
    def create(cls, settings: Settings) -> OcrService:
        return OcrService(
            primary=cls._create_primary(settings),
            fallback=cls._create_fallback(settings),
        )

    @classmethod
    def _create_primary(cls, settings: Settings) -> BaseOcrClient:
        provider = settings.ocr_provider.lower()
        if provider == "textract":
            return TextractOcrClient.from_credentials(
                region=settings.aws_region,
                timeout_seconds=settings.ocr_timeout_seconds,
                access_key_id=settings.aws_access_key_id,
                secret_access_key=settings.aws_secret_access_key,
            )
        raise ValueError(
            f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _create_fallback(cls, settings: Settings) -> BaseOcrClient | None:
        engine = settings.ocr_fallback_engine.lower()
        if engine == "none":
            return None
        raise ValueError(
            f"Unknown OCR fallback engine '{engine}'. Choose from: {list(cls.FALLBACK_ENGINES)}"
        )
