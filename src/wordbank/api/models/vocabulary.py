from typing import Annotated, Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

# Surrounding whitespace is dropped; nothing may remain empty
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class NewWordRequest(BaseModel):
    """A single word submitted for insertion."""
    word: NonBlankStr
    meaning: NonBlankStr
    synonyms: Optional[List[str]] = None


class BulkInsertRequest(BaseModel):
    """API request model for bulk insertion."""
    words: List[NewWordRequest]
    offset: Optional[int] = Field(default=None, description="Start of the chunk to process; omit to process the whole batch")


class VocabularyEntry(BaseModel):
    """A persisted vocabulary entry."""
    id: Optional[int] = None
    word: str
    meaning: str
    synonyms: List[str] = Field(default_factory=list)
    group_name: Optional[str] = None
    sentence: Optional[str] = None


class WordError(BaseModel):
    word: str
    error: str


class BulkInsertResults(BaseModel):
    added: List[VocabularyEntry] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    errors: List[WordError] = Field(default_factory=list)


class BulkInsertResponse(BaseModel):
    """API response model for bulk insertion, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Bulk insert completed with AI grouping and sentences"
    total_sent: int
    added_count: int
    skipped_count: int
    error_count: int
    ai_processing_used: bool
    offset: int = 0
    total_words: int
    has_more: bool = False
    next_offset: Optional[int] = None
    results: BulkInsertResults


class DeleteResponse(BaseModel):
    message: str = "Word deleted successfully"
    deleted: VocabularyEntry


class PaginationInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class VocabularyListResponse(BaseModel):
    data: List[VocabularyEntry]
    pagination: PaginationInfo


class GroupedWord(BaseModel):
    word: str
    meaning: str
    synonyms: List[str] = Field(default_factory=list)
    sentence: Optional[str] = None
