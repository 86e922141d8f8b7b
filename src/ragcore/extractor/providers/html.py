"""HTML extractor."""

import re
from pathlib import Path

from loguru import logger

try:
    from bs4 import BeautifulSoup

    HTML_AVAILABLE = True
except ImportError:
    HTML_AVAILABLE = False
    logger.warning("beautifulsoup4 not installed. HTML extraction will not be available.")

from ragcore.errors import ExtractionError
from ..base import BaseExtractor

BLOCK_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "li", "td", "th", "pre", "blockquote"]


class HtmlExtractor(BaseExtractor):
    """Extracts visible text from HTML, dropping scripts and styles."""

    def extract(self, path: str | Path) -> str:
        if not HTML_AVAILABLE:
            raise ImportError(
                "beautifulsoup4 is required for HTML extraction. "
                "Install it with: pip install beautifulsoup4"
            )
        path = self._check_file(path)

        try:
            html_content = path.read_text(encoding="utf-8", errors="ignore")
            soup = BeautifulSoup(html_content, "html.parser")

            for tag in soup(["script", "style", "noscript"]):
                tag.decompose()

            root = soup.body if soup.body else soup
            blocks = [
                el.get_text(separator=" ", strip=True)
                for el in root.find_all(BLOCK_TAGS)
                if el.find_parent(BLOCK_TAGS) is None
            ]
            blocks = [b for b in blocks if b]

            if blocks:
                content = "\n\n".join(blocks)
            else:
                content = root.get_text(separator="\n", strip=True)
        except Exception as e:
            logger.error(f"Failed to parse HTML {path}: {e}")
            raise ExtractionError(
                f"Invalid HTML file: {e}",
                filename=path.name,
                file_type=path.suffix.lower(),
                original_error=e,
            ) from e

        content = re.sub(r"\n\s*\n", "\n\n", content).strip()
        if not content:
            logger.warning(f"No text content extracted from {path}")

        logger.info(f"Parsed HTML {path.name}: {len(content)} characters")
        return content
