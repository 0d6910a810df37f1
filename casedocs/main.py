from casedocs.config.settings import Settings
from casedocs.database.connection import close_pool, init_pool
from casedocs.database.repositories.documents_repository import DocumentsRepository
from casedocs.database.repositories.processing_repository import ProcessingRepository
from casedocs.logging.logger import Log
from casedocs.processor.processor import build_processor
from casedocs.worker.job_runner import JobRunner
from casedocs.worker.worker import Worker


def main() -> None:
    """Entry point: configure -> open pool -> wire pipeline -> poll for documents."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(
        "Starting casedocs worker",
        env=settings.app_env,
        storage=settings.storage_backend,
        pdf_engine=settings.pdf_engine,
        ocr=settings.ocr_provider,
    )
    init_pool(settings)

    try:
        documents_repo = DocumentsRepository()
        job_runner = JobRunner(
            build_processor(settings),
            documents_repo,
            ProcessingRepository(),
            settings,
        )
        Worker(documents_repo, job_runner, settings).run()
    finally:
        close_pool()
        Log.info("Connection pool closed")


if __name__ == "__main__":
    main()
