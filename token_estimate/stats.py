"""Extract text and basic stats (character, word, line counts) from text, CSV, and PDF files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Modality type constants
# CSV is kept distinct from plain text so reports can tell tabular input apart
TEXT_EXTENSIONS = {".txt", ".md", ".json", ".jsonl", ".xml", ".html", ".htm", ".rst"}
CSV_EXTENSIONS = {".csv", ".tsv"}
PDF_EXTENSION = ".pdf"


@dataclass
class TextStats:
    """Stats for text extracted from a file."""

    character_count: int
    word_count: int
    line_count: int
    encoding: str = "utf-8"


@dataclass
class PDFStats:
    """Stats for PDF files."""

    page_count: int
    extracted_char_count: int


@dataclass
class FileStats:
    """Unified stats for any supported file."""

    path: Path
    modality: str  # "text", "csv", "pdf"
    file_size_bytes: int
    text: str
    text_stats: TextStats
    pdf_stats: Optional[PDFStats] = None

    @property
    def character_count(self) -> int:
        return self.text_stats.character_count

    @property
    def pages_str(self) -> str:
        if self.pdf_stats:
            return f"{self.pdf_stats.page_count} pages"
        return "-"


def _get_modality(path: Path) -> Optional[str]:
    """Determine file modality from extension."""
    ext = path.suffix.lower()
    if ext in CSV_EXTENSIONS:
        return "csv"
    if ext in TEXT_EXTENSIONS:
        return "text"
    if ext == PDF_EXTENSION:
        return "pdf"
    return None


def read_text(path: Path) -> tuple[str, str]:
    """Read a text file as utf-8, falling back to latin-1 (which decodes any bytes).

    Returns (content, encoding used).
    """
    try:
        return path.read_text(encoding="utf-8"), "utf-8"
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1"), "latin-1"


def extract_pdf_text(path: Path) -> tuple[str, int]:
    """Extract text from every page of a PDF using PyMuPDF.

    Returns (text, page count).
    """
    import fitz

    with fitz.open(path) as doc:
        parts = [page.get_text() for page in doc]
        return "".join(parts), len(parts)


def _text_stats(content: str, encoding: str) -> TextStats:
    return TextStats(
        character_count=len(content),
        word_count=len(content.split()) if content.strip() else 0,
        line_count=len(content.splitlines()) if content else 0,
        encoding=encoding,
    )


def get_file_stats(path: Path) -> Optional[FileStats]:
    """
    Extract text and stats from a file. Returns None if the file type is unsupported.
    """
    path = Path(path)
    if not path.exists() or not path.is_file():
        return None

    modality = _get_modality(path)
    if not modality:
        return None

    file_size = path.stat().st_size

    if modality == "pdf":
        content, page_count = extract_pdf_text(path)
        return FileStats(
            path=path,
            modality=modality,
            file_size_bytes=file_size,
            text=content,
            text_stats=_text_stats(content, "utf-8"),
            pdf_stats=PDFStats(page_count=page_count, extracted_char_count=len(content)),
        )

    # CSV uses same stats as text (tabular data treated as text for tokenization)
    content, encoding = read_text(path)
    return FileStats(
        path=path,
        modality=modality,
        file_size_bytes=file_size,
        text=content,
        text_stats=_text_stats(content, encoding),
    )


def discover_files(paths: list[Path], recursive: bool = True) -> list[Path]:
    """Discover supported files from given paths (files or directories)."""
    supported_ext = TEXT_EXTENSIONS | CSV_EXTENSIONS | {PDF_EXTENSION}
    result = []

    for p in paths:
        path = Path(p)
        if path.is_file():
            if path.suffix.lower() in supported_ext:
                result.append(path.resolve())
        elif path.is_dir():
            pattern = "**/*" if recursive else "*"
            for f in path.glob(pattern):
                if f.is_file() and f.suffix.lower() in supported_ext:
                    result.append(f.resolve())

    return sorted(result)
