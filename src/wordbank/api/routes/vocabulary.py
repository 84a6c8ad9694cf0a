"""Vocabulary routes for the Wordbank API."""

import math
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.config import settings
from ..models.vocabulary import (
    BulkInsertRequest,
    BulkInsertResponse,
    BulkInsertResults,
    DeleteResponse,
    GroupedWord,
    PaginationInfo,
    VocabularyEntry,
    VocabularyListResponse,
)
from ...core.logging import get_logger
from ...core.settings import BackendSettings
from ...features.vocabulary.api_client import GeminiEnrichmentClient
from ...features.vocabulary.models import NewWord
from ...features.vocabulary.processor import BulkVocabularyProcessor
from ...storage.src.database import get_db_connection
from ...storage.src.project.database_repositories import VocabularyRepository

# Create router
router = APIRouter()
logger = get_logger(__name__)


# Dependency to get database connection
def get_db():
    conn = get_db_connection()
    try:
        yield conn
    finally:
        conn.close()


@lru_cache(maxsize=4)
def _build_enrichment_client(api_key: str, model: str) -> GeminiEnrichmentClient:
    return GeminiEnrichmentClient(api_key=api_key, model=model)


# Dependency to get the enrichment client; None when no API key is configured
def get_enrichment_client() -> Optional[GeminiEnrichmentClient]:
    api_key = BackendSettings.get_gemini_api_key()
    if not api_key:
        return None
    return _build_enrichment_client(api_key, BackendSettings.get_gemini_model())


def group_entries_by_label(entries: List[Dict[str, Any]]) -> Dict[str, List[GroupedWord]]:
    """Partition entries by group label, keeping the incoming order."""
    groups: Dict[str, List[GroupedWord]] = {}
    for entry in entries:
        label = entry.get("group_name")
        if label is None:
            continue
        groups.setdefault(label, []).append(GroupedWord(
            word=entry["word"],
            meaning=entry["meaning"],
            synonyms=entry.get("synonyms") or [],
            sentence=entry.get("sentence"),
        ))
    return groups


@router.post("/bulk", response_model=BulkInsertResponse, status_code=201)
def bulk_insert(
    request: BulkInsertRequest,
    db=Depends(get_db),
    enrichment_client=Depends(get_enrichment_client)
):
    """
    Add words with AI grouping and sentence generation, skipping duplicates.

    When offset is given only one chunk of the batch is processed and the
    response carries the cursor for the next call.
    """
    words = [NewWord(word=w.word, meaning=w.meaning, synonyms=w.synonyms) for w in request.words]
    processor = BulkVocabularyProcessor(
        VocabularyRepository(db),
        enrichment_client=enrichment_client,
        chunk_size=settings.bulk_chunk_size
    )

    # InvalidRequestError (empty batch, offset out of range) becomes a 400 in main
    summary = processor.process(words, offset=request.offset)

    return BulkInsertResponse(
        total_sent=summary.total_sent,
        added_count=summary.added_count,
        skipped_count=summary.skipped_count,
        error_count=summary.error_count,
        ai_processing_used=summary.ai_processing_used,
        offset=summary.offset,
        total_words=summary.total_words,
        has_more=summary.has_more,
        next_offset=summary.next_offset,
        results=BulkInsertResults(**summary.results.to_dict()),
    )


@router.get("", response_model=VocabularyListResponse)
async def list_vocabulary(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db=Depends(get_db)
):
    """Get all words with pagination."""
    offset = (page - 1) * limit
    entries, total = VocabularyRepository(db).list_page(offset, limit)

    return VocabularyListResponse(
        data=[VocabularyEntry(**entry) for entry in entries],
        pagination=PaginationInfo(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
            has_more=offset + limit < total,
        ),
    )


@router.get("/random", response_model=List[VocabularyEntry])
async def random_vocabulary(
    count: int = Query(settings.random_sample_size, ge=1, le=settings.max_page_size),
    db=Depends(get_db)
):
    """Get a random sample of words."""
    return VocabularyRepository(db).sample_random(count)


@router.get("/groups", response_model=Dict[str, List[GroupedWord]])
async def vocabulary_groups(db=Depends(get_db)):
    """Get all words that carry a group label, keyed by label."""
    return group_entries_by_label(VocabularyRepository(db).list_grouped_entries())


@router.get("/range", response_model=List[VocabularyEntry])
async def vocabulary_range(
    start: int = Query(..., ge=0),
    end: int = Query(..., ge=0),
    db=Depends(get_db)
):
    """Get the words whose ids fall within [start, end]."""
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be greater than end")
    return VocabularyRepository(db).list_by_id_range(start, end)


@router.delete("/{word}", response_model=DeleteResponse)
async def delete_word(word: str, db=Depends(get_db)):
    """Delete a specific word."""
    deleted = VocabularyRepository(db).delete_by_word(word)
    if deleted is None:
        raise HTTPException(status_code=404, detail="Word not found")

    logger.info(f"Deleted word: {word}")
    return DeleteResponse(deleted=VocabularyEntry(**deleted))
