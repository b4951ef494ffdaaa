"""Batch level failures reported to the user."""


class ArchiveError(Exception):
    """The archive as a whole could not be processed."""


class NoJsonFilesError(ArchiveError):
    def __init__(self, message: str = "No JSON files found in the archive."):
        super().__init__(message)


class NoDataExtractedError(ArchiveError):
    def __init__(self, message: str = "No user data could be extracted from any JSON file in the archive."):
        super().__init__(message)
