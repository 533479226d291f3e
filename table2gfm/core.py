"""
table2gfm Core Engine

Drives pandoc to turn documents into GitHub-flavoured Markdown, running the
table normalizer over the document tree in between. Works on single files
or whole directories.

pandoc does the actual format conversion; this module only reads its JSON
output, applies the filter and hands the result back for rendering.
"""

import logging
import os
import shutil
import subprocess
from typing import Optional

from . import pandoc_json
from .nodes import Document
from .normalizer import TABLE_FILTER
from .pipeline import FilterPipeline

logger = logging.getLogger(__name__)

PANDOC_ENV_VAR = "TABLE2GFM_PANDOC"


class PandocError(RuntimeError):
    """Raised when a pandoc invocation fails."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PandocNotFoundError(PandocError):
    """Raised when no pandoc executable can be located."""
    pass


class Converter:
    """
    Document-to-GFM converter.

    Accepts a file or a directory, converts through pandoc with the code
    table filter applied, and returns the Markdown text.
    """

    # Extension -> pandoc reader
    INPUT_FORMATS = {
        ".docx": "docx",
        ".odt": "odt",
        ".rtf": "rtf",
        ".epub": "epub",
        ".html": "html",
        ".htm": "html",
        ".md": "markdown",
    }
    OUTPUT_FORMAT = "gfm"
    DEFAULT_TIMEOUT = 120

    def __init__(
        self,
        output_dir: Optional[str] = None,
        pandoc_path: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.output_dir = output_dir or os.path.join(os.getcwd(), "table2gfm_output")
        self.pandoc_path = find_pandoc(pandoc_path)
        self.timeout = timeout
        self.pipeline = FilterPipeline(TABLE_FILTER)

    @classmethod
    def can_handle(cls, file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in cls.INPUT_FORMATS

    def convert(self, source: str, save: bool = True) -> str:
        """
        Convert a source to GFM.

        Args:
            source: File or directory path
            save: If True, save the output to a .md file in output_dir

        Returns:
            The Markdown text
        """
        source = source.strip()

        if os.path.isdir(source):
            logger.info(f"[DIR] Converting all supported files in: {source}")
            return self.convert_directory(source, save=save)

        if not os.path.exists(source):
            raise FileNotFoundError(f"File not found: {source}")

        if not self.can_handle(source):
            raise ValueError(
                f"Cannot handle source: {source}\n"
                f"Supported extensions: {', '.join(sorted(self.INPUT_FORMATS))}"
            )

        md_text = self._convert_file(source)
        if save:
            self._save(md_text, source)
        return md_text

    def convert_directory(self, dir_path: str, save: bool = True) -> str:
        """Convert all supported files in a directory."""
        results = []

        for filename in sorted(os.listdir(dir_path)):
            file_path = os.path.join(dir_path, filename)
            if not os.path.isfile(file_path) or not self.can_handle(file_path):
                continue

            try:
                md_text = self._convert_file(file_path)
                if save:
                    self._save(md_text, file_path)
            except (PandocError, pandoc_json.PandocJSONError, OSError) as e:
                logger.error(f"[ERROR] Failed to convert {filename}: {e}")
                continue

            results.append(md_text)

        logger.info(f"[DIR] Converted {len(results)} file(s) from {dir_path}")
        return "\n\n---\n\n".join(results)

    def read_document(self, file_path: str) -> Document:
        """Parse a file into a document tree via `pandoc -t json`."""
        _, ext = os.path.splitext(file_path.lower())
        output = self._run_pandoc(
            [file_path, "-f", self.INPUT_FORMATS[ext], "-t", "json"]
        )
        return pandoc_json.loads(output)

    def render(self, document: Document) -> str:
        """Render a document tree as GFM without hard wrapping."""
        return self._run_pandoc(
            ["-f", "json", "-t", self.OUTPUT_FORMAT, "--wrap=none"],
            input_text=pandoc_json.dumps(document),
        )

    def _convert_file(self, file_path: str) -> str:
        ext = os.path.splitext(file_path)[1].lower()
        logger.info(f"[{ext.upper().lstrip('.')}] Converting: {file_path}")

        document = self.read_document(file_path)
        self.pipeline.apply(document)
        return self.render(document)

    def _run_pandoc(self, args: list[str], input_text: Optional[str] = None) -> str:
        cmd = [self.pandoc_path, *args]
        logger.debug("Running: %s", " ".join(cmd))

        try:
            process = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise PandocError(f"pandoc timed out after {self.timeout}s: {' '.join(args)}")
        except FileNotFoundError:
            raise PandocNotFoundError(f"pandoc executable not found: {self.pandoc_path}")

        if process.returncode != 0:
            raise PandocError(
                f"pandoc exited with code {process.returncode}: {process.stderr.strip()}",
                returncode=process.returncode,
                stderr=process.stderr,
            )

        return process.stdout

    def _save(self, md_text: str, source: str) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        out_path = os.path.join(self.output_dir, _file_to_md_name(source))
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(md_text)
        logger.info(f"[SAVED] {out_path}")
        return out_path


def find_pandoc(pandoc_path: Optional[str] = None) -> str:
    """Locate pandoc: explicit path, then $TABLE2GFM_PANDOC, then PATH."""
    candidate = pandoc_path or os.environ.get(PANDOC_ENV_VAR)
    if candidate:
        return candidate

    found = shutil.which("pandoc")
    if not found:
        raise PandocNotFoundError(
            "pandoc is not installed or not on PATH. "
            f"Install it from https://pandoc.org/installing.html or set {PANDOC_ENV_VAR}."
        )
    return found


def apply_filter(json_text: str) -> str:
    """Run the code table filter over a pandoc JSON document."""
    document = pandoc_json.loads(json_text)
    FilterPipeline(TABLE_FILTER).apply(document)
    return pandoc_json.dumps(document)


def _file_to_md_name(file_path: str) -> str:
    """Generate a .md filename from the source file."""
    basename = os.path.basename(file_path)
    name, _ = os.path.splitext(basename)
    safe_name = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    return f"{safe_name}.md"
