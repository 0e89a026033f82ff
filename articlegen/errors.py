from __future__ import annotations

from pathlib import Path
from typing import Optional


class ArticleGenError(Exception):
    action = "processing"

    def __init__(self, path: Path, reason: Optional[object] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"error {self.action} {self.path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class OpenError(ArticleGenError):
    action = "opening file"


class ReadError(ArticleGenError):
    action = "reading file"


class TemplateReadError(ArticleGenError):
    action = "reading HTML template"


class FolderCreateError(ArticleGenError):
    action = "creating folder"


class WriteError(ArticleGenError):
    action = "writing output file"


class CopyError(ArticleGenError):
    action = "copying file"


class WalkError(ArticleGenError):
    action = "walking through directory"


class StatError(ArticleGenError):
    action = "getting file info"
