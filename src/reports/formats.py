# src/reports/formats.py — v1
"""Content type to short format key resolution."""

from __future__ import annotations

MIME_TYPE_MAPPING: dict[str, str] = {
    # Images
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/heic": "heic",
    # Documents
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.ms-powerpoint": "ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.oasis.opendocument.text": "odt",
    "application/rtf": "rtf",
    "application/epub+zip": "epub",
    # Text
    "text/plain": "txt",
    "text/csv": "csv",
    "text/html": "html",
    "text/css": "css",
    "text/markdown": "md",
    "text/javascript": "js",
    "application/javascript": "js",
    "application/json": "json",
    "application/xml": "xml",
    "text/xml": "xml",
    # Archives
    "application/zip": "zip",
    "application/x-zip-compressed": "zip",
    "application/x-rar-compressed": "rar",
    "application/vnd.rar": "rar",
    "application/x-7z-compressed": "7z",
    "application/x-tar": "tar",
    "application/gzip": "gz",
    # Audio / video
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/ogg": "ogg",
    "video/mp4": "mp4",
    "video/quicktime": "mov",
    "video/x-msvideo": "avi",
    "video/webm": "webm",
    "video/x-matroska": "mkv",
    # Misc
    "application/octet-stream": "bin",
}


def resolve_format(content_type: str | None) -> str | None:
    """Map a content type to its format key.

    Parameters such as ``; charset=utf-8`` are ignored. Unknown types fall back
    to the subtype (``application/x-unknown`` -> ``x-unknown``).

    Returns:
        Format key, or None if the content type is absent or malformed.
    """
    if not content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    mapped = MIME_TYPE_MAPPING.get(media_type)
    if mapped:
        return mapped
    main, sep, subtype = media_type.partition("/")
    if not sep or not main or not subtype or "/" in subtype:
        return None
    return subtype
