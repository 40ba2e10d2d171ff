# resume_qa/errors.py
from __future__ import annotations


class ResumeQAError(RuntimeError):
    """Base class for every failure the CLIs and the API report to the user."""


class ConfigurationError(ResumeQAError):
    pass


class DocumentLoadError(ResumeQAError):
    pass


class UnsupportedFormat(DocumentLoadError):
    def __init__(self, path: str, extension: str):
        super().__init__(f"Unsupported file type: {extension or '<none>'} ({path})")
        self.path = path
        self.extension = extension


class IndexMissingOrEmpty(ResumeQAError):
    pass


class EmbeddingFailure(ResumeQAError):
    pass


class CompletionFailure(ResumeQAError):
    pass
