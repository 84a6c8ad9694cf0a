from .vocabulary import (
    NewWordRequest,
    BulkInsertRequest,
    VocabularyEntry,
    WordError,
    BulkInsertResults,
    BulkInsertResponse,
    DeleteResponse,
    PaginationInfo,
    VocabularyListResponse,
    GroupedWord
)

__all__ = [
    'NewWordRequest',
    'BulkInsertRequest',
    'VocabularyEntry',
    'WordError',
    'BulkInsertResults',
    'BulkInsertResponse',
    'DeleteResponse',
    'PaginationInfo',
    'VocabularyListResponse',
    'GroupedWord',
]
