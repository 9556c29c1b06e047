"""
Upload Storage - multipart files written to a per-category directory

Layout on disk (served read-only under /uploads):

    <upload_root>/
    ├── news/       news images      image/*           5MB  up to 10 per request
    ├── team/       team photos      image/*           5MB  1
    ├── partners/   partner logos    image/*           5MB  1
    └── resumes/    resumes          pdf, doc, docx    5MB  1

Stored filenames are "<slug>-<epoch ms>-<random>.<ext>" so that two uploads
with the same original name never overwrite each other. Files are opened in
exclusive-create mode; a collision simply draws a new suffix.

Every file of a request is checked (count, content type, declared size)
before the first byte is written. If anything fails afterwards, including
the size limit tripping mid-copy or the deadline expiring, all files written
for the request are removed again.

Usage:
    storage = UploadStorage(Path("uploads"))
    stored = await storage.save(NEWS_IMAGES, files)
    urls = [absolute_url(base_url, item.public_path) for item in stored]
"""

import asyncio
import logging
import os
import random
import re
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import UploadFile

from app.errors import DeadlineExceededError, UploadError, ValidationError
from app.middleware.metrics import record_upload

logger = logging.getLogger(__name__)

MB = 1024 * 1024
CHUNK_SIZE = 64 * 1024
MAX_NAME_ATTEMPTS = 5

IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}

RESUME_EXTENSIONS = {
    "application/pdf": ".pdf",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}


@dataclass(frozen=True)
class UploadCategory:
    """
    Logical group of uploads with its own directory and limits.

    Attributes:
        name: Label used in messages and metrics
        directory: Subdirectory under the upload root (and under /uploads)
        allowed_types: Exact MIME types, or "image/*" style prefixes
        max_size: Per-file limit in bytes
        max_files: Files accepted per request
        default_stem: Slug used when the original name has none
        default_extension: Extension used when neither the name nor the
            MIME type provides one
        extensions: MIME type -> extension for extensionless uploads
        type_error: Message returned for a disallowed content type
    """

    name: str
    directory: str
    allowed_types: Tuple[str, ...]
    max_size: int
    max_files: int
    default_stem: str
    default_extension: str
    type_error: str
    extensions: Dict[str, str] = field(default_factory=dict)

    def accepts(self, content_type: Optional[str]) -> bool:
        if not content_type:
            return False
        content_type = content_type.split(";")[0].strip().lower()
        for allowed in self.allowed_types:
            if allowed.endswith("/*"):
                if content_type.startswith(allowed[:-1]):
                    return True
            elif content_type == allowed:
                return True
        return False


NEWS_IMAGES = UploadCategory(
    name="news image",
    directory="news",
    allowed_types=("image/*",),
    max_size=5 * MB,
    max_files=10,
    default_stem="image",
    default_extension=".jpg",
    type_error="File must be an image (image/*)",
    extensions=IMAGE_EXTENSIONS,
)

# upload-image takes exactly one news image per request
NEWS_IMAGE = replace(NEWS_IMAGES, max_files=1)

TEAM_PHOTOS = UploadCategory(
    name="team photo",
    directory="team",
    allowed_types=("image/*",),
    max_size=5 * MB,
    max_files=1,
    default_stem="image",
    default_extension=".jpg",
    type_error="File must be an image (image/*)",
    extensions=IMAGE_EXTENSIONS,
)

PARTNER_LOGOS = UploadCategory(
    name="partner logo",
    directory="partners",
    allowed_types=("image/*",),
    max_size=5 * MB,
    max_files=1,
    default_stem="logo",
    default_extension=".png",
    type_error="File must be an image (image/*)",
    extensions=IMAGE_EXTENSIONS,
)

RESUMES = UploadCategory(
    name="resume",
    directory="resumes",
    allowed_types=tuple(RESUME_EXTENSIONS),
    max_size=5 * MB,
    max_files=1,
    default_stem="resume",
    default_extension=".pdf",
    type_error="Resume must be a PDF or DOC/DOCX file",
    extensions=RESUME_EXTENSIONS,
)

CATEGORIES = (NEWS_IMAGES, TEAM_PHOTOS, PARTNER_LOGOS, RESUMES)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass
class StoredFile:
    category: UploadCategory
    filename: str
    original_filename: str
    path: Path
    public_path: str
    size: int


def slugify(value: str) -> str:
    """Lower-case, non-alphanumeric runs collapsed to "-", edges stripped."""
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def split_filename(original: Optional[str]) -> Tuple[str, str]:
    # Browsers may send a full client path
    name = (original or "").replace("\\", "/").rsplit("/", 1)[-1]
    stem, extension = os.path.splitext(name)
    if not _EXTENSION.match(extension):
        extension = ""
    return stem, extension


def build_filename(
    category: UploadCategory,
    original: Optional[str],
    content_type: Optional[str] = None,
    timestamp_ms: Optional[int] = None,
    nonce: Optional[int] = None,
) -> str:
    """
    Synthesize a collision-resistant stored filename.

    Args:
        category: Upload category (fallback stem and extension)
        original: Filename as sent by the client
        content_type: MIME type, used for extensionless uploads
        timestamp_ms: Override for the time component (tests)
        nonce: Override for the random component (tests)

    Returns:
        e.g. "company-logo-1718000000000-123456789.png"
    """
    stem, extension = split_filename(original)
    slug = slugify(stem) or category.default_stem
    if not extension:
        mime = (content_type or "").split(";")[0].strip().lower()
        extension = category.extensions.get(mime, category.default_extension)
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    if nonce is None:
        nonce = random.randint(0, 10**9)
    return f"{slug}-{timestamp_ms}-{nonce}{extension}"


def absolute_url(base_url: str, public_path: str) -> str:
    return base_url.rstrip("/") + public_path


class UploadStorage:
    """
    Writes validated uploads below a single root directory.

    Attributes:
        root: Upload root on disk
        public_prefix: URL prefix the root is served under
        timeout: Seconds allowed for writing all files of one request
    """

    def __init__(self, root: Path, public_prefix: str = "/uploads", timeout: float = 60.0):
        self.root = Path(root)
        self.public_prefix = public_prefix.rstrip("/")
        self.timeout = timeout

    def directory_for(self, category: UploadCategory) -> Path:
        return self.root / category.directory

    def ensure_directories(self) -> None:
        for category in CATEGORIES:
            self.directory_for(category).mkdir(parents=True, exist_ok=True)

    def validate(self, category: UploadCategory, files: Sequence[UploadFile]) -> None:
        """
        Reject the request before anything is written.

        Raises:
            ValidationError: no file, too many files, disallowed type, too large
        """
        if not files:
            raise ValidationError(f"No {category.name} file uploaded")

        if len(files) > category.max_files:
            raise ValidationError(
                f"Too many files: at most {category.max_files} {category.name} file(s) per request"
            )

        for upload in files:
            if not category.accepts(upload.content_type):
                record_upload(category.name, "rejected")
                logger.warning(
                    f"Rejected {category.name} upload {upload.filename!r}: "
                    f"content type {upload.content_type!r}"
                )
                raise ValidationError(category.type_error)
            if upload.size is not None and upload.size > category.max_size:
                record_upload(category.name, "rejected")
                raise ValidationError(self._size_error(category, upload))

    async def save(self, category: UploadCategory, files: Sequence[UploadFile]) -> List[StoredFile]:
        """
        Validate and write all files, in the order received.

        Raises:
            ValidationError: see validate(); also when a file grows past the
                size limit while being copied
            UploadError: disk write failure
            DeadlineExceededError: writing took longer than self.timeout
        """
        files = [upload for upload in files if upload.filename]
        self.validate(category, files)
        self.directory_for(category).mkdir(parents=True, exist_ok=True)

        written: List[Path] = []
        abort = threading.Event()
        try:
            stored = await asyncio.wait_for(
                self._write_all(category, files, written, abort), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            abort.set()
            self._discard(written)
            record_upload(category.name, "timeout")
            raise DeadlineExceededError(f"Upload did not complete within {self.timeout:g}s")
        except BaseException:
            abort.set()
            self._discard(written)
            record_upload(category.name, "failed")
            raise

        for item in stored:
            record_upload(category.name, "stored", item.size)
            logger.info(f"Stored {category.name} {item.public_path} ({item.size} bytes)")
        return stored

    async def save_one(
        self, category: UploadCategory, files: Optional[Sequence[UploadFile]]
    ) -> StoredFile:
        """Save the file of a single-file field. Repeated parts fail validation."""
        stored = await self.save(category, files or [])
        return stored[0]

    def remove(self, stored: Iterable[StoredFile]) -> None:
        self._discard(item.path for item in stored)

    async def _write_all(
        self,
        category: UploadCategory,
        files: Sequence[UploadFile],
        written: List[Path],
        abort: threading.Event,
    ) -> List[StoredFile]:
        stored = []
        for upload in files:
            stored.append(
                await asyncio.to_thread(self._write_file, category, upload, written, abort)
            )
        return stored

    def _open_unique(self, category: UploadCategory, upload: UploadFile):
        directory = self.directory_for(category)
        for _ in range(MAX_NAME_ATTEMPTS):
            filename = build_filename(category, upload.filename, upload.content_type)
            path = directory / filename
            try:
                return path, open(path, "xb")
            except FileExistsError:
                continue
            except OSError as e:
                raise UploadError(f"Failed to store {category.name}: {e}") from e
        raise UploadError(f"Could not allocate a unique filename for {category.name}")

    def _write_file(
        self,
        category: UploadCategory,
        upload: UploadFile,
        written: List[Path],
        abort: threading.Event,
    ) -> StoredFile:
        """Blocking copy, run in a worker thread."""
        path, handle = self._open_unique(category, upload)
        written.append(path)
        size = 0
        try:
            with handle:
                upload.file.seek(0)
                while True:
                    if abort.is_set():
                        raise UploadError("Upload aborted")
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > category.max_size:
                        raise ValidationError(self._size_error(category, upload))
                    handle.write(chunk)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise UploadError(f"Failed to store {category.name}: {e}") from e
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        return StoredFile(
            category=category,
            filename=path.name,
            original_filename=upload.filename or path.name,
            path=path,
            public_path=f"{self.public_prefix}/{category.directory}/{path.name}",
            size=size,
        )

    def _discard(self, paths: Iterable[Path]) -> None:
        for path in list(paths):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")

    @staticmethod
    def _size_error(category: UploadCategory, upload: UploadFile) -> str:
        return f"File {upload.filename} exceeds the {category.max_size // MB}MB limit"
