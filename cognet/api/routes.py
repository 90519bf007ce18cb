"""FastAPI route definitions.

Thin routing layer that delegates to services.
"""

import io
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from cognet.api.dependencies import get_importer, get_search_service
from cognet.errors import ImportFormatError
from cognet.observ import get_logger
from cognet.services import CognateSearchService
from cognet.storage import DataImporter


logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1")


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# ═════════════════════════════════════════════════════════════════════════════
# Import
# ═════════════════════════════════════════════════════════════════════════════

@router.post("/import/tsv")
async def import_tsv(
    file: UploadFile = File(...),
    importer: DataImporter = Depends(get_importer)
):
    """Import a tab-separated cognate file."""
    logger.info("cognate_import_requested", filename=file.filename)

    content = await file.read()
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ImportFormatError("cognates", f"file is not UTF-8: {e}") from e

    stats = await importer.import_tsv(io.StringIO(text))
    return {"message": "Import completed successfully", "stats": stats.model_dump()}


@router.post("/import/languages")
async def import_languages(
    file: UploadFile = File(...),
    importer: DataImporter = Depends(get_importer)
):
    """Import a JSON language metadata file."""
    logger.info("language_import_requested", filename=file.filename)

    count = await importer.import_languages(await file.read())
    return {"message": "Languages imported successfully", "count": count}


@router.get("/import/status")
async def import_status(importer: DataImporter = Depends(get_importer)):
    """Current importer status."""
    return {"status": importer.status}


@router.delete("/import/clear")
async def clear_database(importer: DataImporter = Depends(get_importer)):
    """Remove all imported data."""
    await importer.clear()
    return {"message": "Database cleared successfully"}


# ═════════════════════════════════════════════════════════════════════════════
# Search
# ═════════════════════════════════════════════════════════════════════════════

@router.get("/search/suggestions")
async def get_suggestions(
    prefix: str = Query(..., min_length=1),
    search: CognateSearchService = Depends(get_search_service)
):
    """Prefix-based word suggestions."""
    suggestions = await search.suggest_words(prefix)
    logger.debug("suggestions_returned", prefix=prefix, count=len(suggestions))
    return {"data": [s.model_dump() for s in suggestions]}


@router.get("/search/concept/{concept_id}")
async def get_by_concept(
    concept_id: str,
    search: CognateSearchService = Depends(get_search_service)
):
    """All cognate pairs recorded for a concept."""
    cognates = await search.get_cognates_by_concept(concept_id)
    return {"data": [c.model_dump(exclude_none=True) for c in cognates]}


@router.get("/search/chains/concept/{concept_id}")
async def find_cognate_chains(
    concept_id: str,
    word: Optional[str] = Query(None),
    language: Optional[str] = Query(None),
    search: CognateSearchService = Depends(get_search_service)
):
    """Cognate chains of a concept, optionally narrowed to one word's chain."""
    logger.info("chains_requested", concept_id=concept_id, word=word, language=language)
    result = await search.find_cognate_chains(concept_id, word=word, language=language)
    return {"data": result.model_dump()}
