"""Domain layer: errors."""

from .errors import (
    REBUILD_ERRORS,
    AppError,
    ConfigError,
    DuplicateTemplateError,
    ErrorCodes,
    FilesystemError,
    TemplateNotFoundError,
    TemplateRenderError,
    TemplateSyntaxError,
)

__all__ = [
    "AppError",
    "ErrorCodes",
    "ConfigError",
    "DuplicateTemplateError",
    "FilesystemError",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "TemplateSyntaxError",
    "REBUILD_ERRORS",
]
