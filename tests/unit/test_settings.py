import pytest
from pydantic import ValidationError

from casedocs.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_max_processing_attempts(self) -> None:
        s = Settings()
        assert s.max_processing_attempts == 3

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_scanned_threshold(self) -> None:
        s = Settings()
        assert s.scanned_chars_per_page_threshold == 100

    def test_default_ocr_settings(self) -> None:
        s = Settings()
        assert s.ocr_provider == "textract"
        assert s.ocr_fallback_engine == "none"
        assert s.ocr_timeout_seconds == 60


class TestSettingsFromEnv:
    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_storage_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_BACKEND", "local")
        monkeypatch.setenv("FILES_ROOT", "/srv/files")
        s = Settings()
        assert s.storage_backend == "local"
        assert s.files_root == "/srv/files"

    def test_loads_s3_bucket(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("S3_BUCKET", "firm-evidence")
        s = Settings()
        assert s.s3_bucket == "firm-evidence"

    def test_loads_ocr_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_TIMEOUT_SECONDS", "15")
        s = Settings()
        assert s.ocr_timeout_seconds == 15


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_threshold_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANNED_CHARS_PER_PAGE_THRESHOLD", "many")
        with pytest.raises(ValidationError):
            Settings()
