"""FastAPI application serving generated letter-hive puzzles."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from .config import settings
from .database import WordDictionary, DictionaryError, PuzzleStore, PuzzleStoreError
from .engine import validate_word
from .models import GenerationConstraints, PuzzleSet, WordSubmission
from .pipeline import PuzzlePipeline

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = structlog.get_logger(__name__)

# Global components
dictionary: Optional[WordDictionary] = None
puzzle_set: Optional[PuzzleSet] = None
puzzle_pipeline: Optional[PuzzlePipeline] = None
puzzle_store = PuzzleStore(export_name=settings.export_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dictionary and the shipped puzzle set."""
    logger.info("Starting letter-hive puzzle service...")

    global dictionary, puzzle_set, puzzle_pipeline

    try:
        dictionary = WordDictionary.load(settings.dictionary_path)
        puzzle_pipeline = PuzzlePipeline(dictionary)
    except DictionaryError as e:
        logger.error("Dictionary unavailable", error=str(e))

    try:
        puzzle_set = puzzle_store.load(settings.output_path)
    except PuzzleStoreError as e:
        logger.warning("Puzzle set unavailable", error=str(e))

    logger.info("Letter-hive puzzle service started")

    yield

    logger.info("Letter-hive puzzle service shut down")


# Create FastAPI app
app = FastAPI(
    title="Letter-Hive Puzzle Service",
    description="Generation and validation of 7-letter hive word puzzles",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Dependency injection
def get_dictionary() -> WordDictionary:
    """Get dictionary dependency."""
    if dictionary is None:
        raise HTTPException(status_code=503, detail="Dictionary not available")
    return dictionary


def get_puzzle_set() -> PuzzleSet:
    """Get puzzle set dependency."""
    if puzzle_set is None:
        raise HTTPException(status_code=503, detail="Puzzle set not available")
    return puzzle_set


def get_puzzle_pipeline() -> PuzzlePipeline:
    """Get puzzle pipeline dependency."""
    if puzzle_pipeline is None:
        raise HTTPException(status_code=503, detail="Puzzle pipeline not available")
    return puzzle_pipeline


# Health check endpoints
@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "Letter-Hive Puzzle Service"}


@app.get("/health/detailed")
async def detailed_health_check():
    """Detailed health check with component status."""
    health_status = {
        "service": "Letter-Hive Puzzle Service",
        "status": "healthy",
        "components": {
            "dictionary": dictionary is not None,
            "puzzle_set": puzzle_set is not None,
            "pipeline": puzzle_pipeline is not None
        }
    }

    all_healthy = all(health_status["components"].values())
    health_status["status"] = "healthy" if all_healthy else "degraded"

    status_code = 200 if all_healthy else 503
    return JSONResponse(content=health_status, status_code=status_code)


# Puzzle endpoints
@app.get("/api/v1/puzzles")
async def list_puzzles(puzzles: PuzzleSet = Depends(get_puzzle_set)):
    """List puzzle ids and the average maxScore."""
    return {
        "ids": puzzles.ids(),
        "count": len(puzzles),
        "average_score": puzzles.average_score()
    }


@app.get("/api/v1/puzzles/quality")
def get_quality_report(
    puzzles: PuzzleSet = Depends(get_puzzle_set),
    pipeline: PuzzlePipeline = Depends(get_puzzle_pipeline)
):
    """Run the quality checks over the loaded puzzle set."""
    report = pipeline.validate_puzzle_set(puzzles)
    return {"quality": report.model_dump()}


@app.get("/api/v1/puzzles/{puzzle_id}")
async def get_puzzle(puzzle_id: int, puzzles: PuzzleSet = Depends(get_puzzle_set)):
    """Retrieve a specific puzzle by ID."""
    puzzle = puzzles.get(puzzle_id)
    if puzzle is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return {"id": puzzle.id, "puzzle": puzzle.to_export()}


@app.post("/api/v1/puzzles/{puzzle_id}/validate")
async def validate_submission(
    puzzle_id: int,
    submission: WordSubmission,
    puzzles: PuzzleSet = Depends(get_puzzle_set),
    words: WordDictionary = Depends(get_dictionary)
):
    """Check a submitted word against a puzzle."""
    puzzle = puzzles.get(puzzle_id)
    if puzzle is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")

    result = validate_word(submission.word, puzzle, words, submission.already_found)
    logger.debug("Word checked", puzzle_id=puzzle_id, word=submission.word, valid=result.valid)
    return result.to_dict()


@app.post("/api/v1/puzzles/generate")
def generate_puzzles(
    constraints: GenerationConstraints,
    pipeline: PuzzlePipeline = Depends(get_puzzle_pipeline)
):
    """Regenerate the in-memory puzzle set with the given constraints."""
    global puzzle_set

    try:
        constraints = constraints.resolve()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid generation parameters: {e}")

    logger.info("Generating puzzle set", constraints=constraints.model_dump())

    try:
        result = pipeline.generate_puzzle_set(constraints)
    except Exception as e:
        logger.error(f"Error generating puzzles: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    puzzle_set = result["puzzle_set"]
    return {
        "success": result["success"],
        "statistics": result["statistics"],
        "processing_time_seconds": result["processing_time_seconds"]
    }


# Pipeline management endpoints
@app.get("/api/v1/pipeline/status")
async def get_pipeline_status(pipeline: PuzzlePipeline = Depends(get_puzzle_pipeline)):
    """Get current pipeline status and metrics."""
    return {"pipeline_status": pipeline.get_status()}


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions."""
    logger.error(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "status_code": 500}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "letterhive.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development"
    )
