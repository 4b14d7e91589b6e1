from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ALL_TYPES = "all"

DOCUMENT = "document"
IMAGE = "image"
VIDEO = "video"
AUDIO = "audio"
ARCHIVE = "archive"
CODE = "code"
OTHER = "other"

CATEGORIES = (DOCUMENT, IMAGE, VIDEO, AUDIO, ARCHIVE, CODE, OTHER)

_EXTENSIONS: dict[str, frozenset[str]] = {
    DOCUMENT: frozenset(
        {"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp", "txt", "rtf", "csv", "md"}
    ),
    IMAGE: frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "tif", "tiff", "ico", "heic"}),
    VIDEO: frozenset({"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm", "m4v", "3gp"}),
    AUDIO: frozenset({"mp3", "wav", "ogg", "flac", "aac", "m4a", "wma", "opus"}),
    ARCHIVE: frozenset({"zip", "rar", "7z", "tar", "gz", "bz2", "xz", "tgz"}),
    CODE: frozenset(
        {"py", "js", "jsx", "ts", "tsx", "html", "css", "json", "xml", "yml", "yaml", "java", "c", "cpp", "h", "sh", "sql"}
    ),
}


@dataclass(frozen=True)
class FileTypeInfo:
    category: str
    icon: str
    color: str
    badge: str


_TYPE_INFO: dict[str, FileTypeInfo] = {
    DOCUMENT: FileTypeInfo(DOCUMENT, "fas fa-file-alt", "text-blue-500", "bg-blue-100 text-blue-800"),
    IMAGE: FileTypeInfo(IMAGE, "fas fa-image", "text-purple-500", "bg-purple-100 text-purple-800"),
    VIDEO: FileTypeInfo(VIDEO, "fas fa-video", "text-red-500", "bg-red-100 text-red-800"),
    AUDIO: FileTypeInfo(AUDIO, "fas fa-music", "text-indigo-500", "bg-indigo-100 text-indigo-800"),
    ARCHIVE: FileTypeInfo(ARCHIVE, "fas fa-archive", "text-yellow-500", "bg-yellow-100 text-yellow-800"),
    CODE: FileTypeInfo(CODE, "fas fa-code", "text-green-500", "bg-green-100 text-green-800"),
    OTHER: FileTypeInfo(OTHER, "fas fa-file", "text-gray-500", "bg-gray-100 text-gray-800"),
}


@dataclass(frozen=True)
class FileTypeOption:
    value: str
    label: str
    icon: str


FILE_TYPE_OPTIONS: tuple[FileTypeOption, ...] = (
    FileTypeOption(ALL_TYPES, "All types", "fas fa-file"),
    FileTypeOption(DOCUMENT, "Documents", "fas fa-file-alt"),
    FileTypeOption(IMAGE, "Images", "fas fa-image"),
    FileTypeOption(VIDEO, "Videos", "fas fa-video"),
    FileTypeOption(AUDIO, "Audio", "fas fa-music"),
    FileTypeOption(ARCHIVE, "Archives", "fas fa-archive"),
    FileTypeOption(CODE, "Code", "fas fa-code"),
)


def file_extension(name: str) -> str:
    """
    Return the lower-cased extension without the dot, or "" if there is none.

    Examples:
        >>> file_extension("Report.PDF")
        'pdf'
        >>> file_extension(".bashrc")
        ''
    """
    base, dot, ext = name.rpartition(".")
    if dot == "" or base == "":
        return ""
    return ext.lower()


def classify_name(name: str) -> str:
    ext = file_extension(name)
    for category, extensions in _EXTENSIONS.items():
        if ext in extensions:
            return category
    return OTHER


def get_file_type(name: str) -> FileTypeInfo:
    return _TYPE_INFO[classify_name(name)]


def type_info(category: str) -> FileTypeInfo:
    return _TYPE_INFO.get(category, _TYPE_INFO[OTHER])


def format_file_size(size_bytes: int | None) -> str:
    """
    Render a byte count with a binary unit.

    Examples:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size_bytes is None:
        return "Unknown"
    if size_bytes <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    if index == 0:
        return f"{int(value)} Bytes"
    return f"{value:.2f}".rstrip("0").rstrip(".") + f" {units[index]}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return "Unknown"
    return value.strftime("%d %b %Y %H:%M")
