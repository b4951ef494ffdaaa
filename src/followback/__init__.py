from .models import UserRecord, NamedCollection, ComparisonResult, ArchiveResult, RelationshipReport
from .extraction import extract, extract_users, is_username
from .dedupe import dedupe
from .classifier import classify, order
from .comparison import compare, analyze_relationships
from .processor import ArchiveProcessor
from .exceptions import ArchiveError, NoJsonFilesError, NoDataExtractedError

__all__ = [
    'UserRecord',
    'NamedCollection',
    'ComparisonResult',
    'ArchiveResult',
    'RelationshipReport',
    'extract',
    'extract_users',
    'is_username',
    'dedupe',
    'classify',
    'order',
    'compare',
    'analyze_relationships',
    'ArchiveProcessor',
    'ArchiveError',
    'NoJsonFilesError',
    'NoDataExtractedError',
]
