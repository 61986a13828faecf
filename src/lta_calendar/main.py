"""Application entry point defining the HTTP API."""
from __future__ import annotations

from fastapi import APIRouter, FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from lta_calendar.application.process_tournament_calendar import (
    CountTournamentsUseCase,
    DeleteAllTournamentsUseCase,
    DeleteTournamentUseCase,
    ProcessTournamentCalendarUseCase,
    RetrieveTournamentsUseCase,
    TournamentCalendarParser,
)
from lta_calendar.config.logging_config import configure_logging
from lta_calendar.config.settings import get_settings
from lta_calendar.domain.models.tournament import UploadSummary
from lta_calendar.domain.repositories.tournament_repository import (
    TournamentRepository,
    TournamentStorageError,
)
from lta_calendar.domain.services.tournament_extractor import TournamentExtractorService
from lta_calendar.infrastructure.parsers.tournament_calendar_pdf_parser import (
    TournamentCalendarPdfParser,
)
from lta_calendar.infrastructure.repositories.json_tournament_repository import (
    JsonTournamentRepository,
)

PDF_CONTENT_TYPES = frozenset({"application/pdf", "application/x-pdf"})


def create_app(
    tournament_repo: TournamentRepository | None = None,
    calendar_parser: TournamentCalendarParser | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance."""

    settings = get_settings()
    configure_logging(settings.log_level)

    tournament_repository = (
        tournament_repo
        if tournament_repo is not None
        else JsonTournamentRepository(settings.tournaments_path)
    )
    calendar_parser_service = calendar_parser or TournamentCalendarPdfParser(
        extractor=TournamentExtractorService(settings.extraction_profile()),
        max_text_length=settings.max_text_length,
    )

    calendar_processor = ProcessTournamentCalendarUseCase(
        calendar_parser_service, tournament_repository
    )
    tournaments_retriever = RetrieveTournamentsUseCase(tournament_repository)
    tournaments_counter = CountTournamentsUseCase(tournament_repository)
    tournament_deleter = DeleteTournamentUseCase(tournament_repository)
    all_tournaments_deleter = DeleteAllTournamentsUseCase(tournament_repository)

    app = FastAPI(title=settings.app_name, version=settings.app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TournamentStorageError)
    async def handle_storage_error(
        request: Request, error: TournamentStorageError
    ) -> JSONResponse:
        logger.error("{} {} failed: {}", request.method, request.url.path, error)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(error)},
        )

    tournaments_path = f"{settings.api_prefix}/tournaments"

    @app.get("/", status_code=status.HTTP_200_OK)
    async def get_root() -> dict:
        """Describe the service and the endpoints it exposes."""

        return {
            "name": settings.app_name,
            "status": "running",
            "tournamentCount": tournaments_counter.execute(),
            "endpoints": {
                f"GET {tournaments_path}": "Get all tournaments",
                f"POST {tournaments_path}/upload": "Upload PDF to parse tournaments",
                f"DELETE {tournaments_path}/{{id}}": "Delete a tournament",
                f"DELETE {tournaments_path}": "Delete all tournaments",
            },
        }

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def get_health() -> dict:
        """Return a heartbeat response for uptime monitoring."""

        return {"status": "ok", "tournamentCount": tournaments_counter.execute()}

    api_router = APIRouter(prefix=settings.api_prefix)

    @api_router.get("/status", status_code=status.HTTP_200_OK)
    async def get_status() -> dict:
        """Return the operational status and version of the service."""

        return {"status": "ok", "version": settings.app_version}

    @api_router.get("/tournaments", status_code=status.HTTP_200_OK)
    async def get_tournaments() -> dict:
        """Return every stored tournament ordered by date."""

        tournaments = tournaments_retriever.execute()
        return {
            "success": True,
            "count": len(tournaments),
            "tournaments": [tournament.to_dict() for tournament in tournaments],
        }

    @api_router.post("/tournaments/upload", status_code=status.HTTP_200_OK)
    async def upload_tournaments(pdf: UploadFile = File(...)) -> dict:
        """Parse the uploaded calendar PDF and store the tournaments it lists."""

        pdf_bytes = await _read_pdf_bytes(pdf, settings.max_upload_size_bytes)
        logger.info("Processing PDF: {} ({} bytes)", pdf.filename, len(pdf_bytes))
        summary = _process_calendar(calendar_processor, pdf_bytes)
        return summary.to_dict()

    @api_router.delete("/tournaments/{tournament_id}", status_code=status.HTTP_200_OK)
    async def delete_tournament(tournament_id: str) -> dict:
        """Delete the stored tournament identified by ``tournament_id``."""

        deleted = tournament_deleter.execute(tournament_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tournament not found",
            )
        return {"success": True, "message": f"Tournament {tournament_id} deleted"}

    @api_router.delete("/tournaments", status_code=status.HTTP_200_OK)
    async def delete_all_tournaments() -> dict:
        """Delete every stored tournament."""

        deleted = all_tournaments_deleter.execute()
        return {"success": True, "message": f"Deleted {deleted} tournaments"}

    app.include_router(api_router)
    return app


app = create_app()

async def _read_pdf_bytes(uploaded_file: UploadFile, max_size_bytes: int) -> bytes:
    """Ensure the provided file is a non-empty PDF within the size limit."""

    if uploaded_file.content_type not in PDF_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are allowed.",
        )

    pdf_bytes = await uploaded_file.read()
    if not pdf_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The PDF file is empty.",
        )

    if len(pdf_bytes) > max_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="The PDF file exceeds the allowed size.",
        )

    return pdf_bytes


def _process_calendar(
    processor: ProcessTournamentCalendarUseCase, pdf_bytes: bytes
) -> UploadSummary:
    """Run the upload use case reporting unusable calendars as HTTP 422."""

    try:
        return processor.execute(pdf_bytes)
    except ValueError as processing_error:
        logger.warning("Rejected calendar upload: {}", processing_error)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(processing_error),
        ) from processing_error
