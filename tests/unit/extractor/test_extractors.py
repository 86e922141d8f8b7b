"""Tests for the file extractors and the extractor factory."""

import pytest
from docx import Document

from ragcore.errors import ExtractionError
from ragcore.extractor import (
    BaseExtractor,
    DocxExtractor,
    ExtractorFactory,
    HtmlExtractor,
    PdfExtractor,
    TextExtractor,
)
from tests.helpers import write_docx_with_bad_table


class TestTextExtractor:

    def test_reads_markdown(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Title\n\nSome body text.", encoding="utf-8")

        assert TextExtractor().extract(path) == "# Title\n\nSome body text."

    def test_falls_back_when_detection_fails(self, tmp_path, mocker):
        mocker.patch(
            "ragcore.extractor.providers.text.chardet.detect",
            return_value={"encoding": None, "confidence": 0.0},
        )
        path = tmp_path / "notes.txt"
        path.write_bytes("naïve text".encode("utf-8"))

        assert TextExtractor().extract(path) == "naïve text"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionError) as exc_info:
            TextExtractor().extract(tmp_path / "absent.txt")
        assert exc_info.value.filename == "absent.txt"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert TextExtractor().extract(path) == ""


class TestHtmlExtractor:

    def test_drops_scripts_and_keeps_blocks(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text(
            "<html><head><style>p {color: red}</style></head><body>"
            "<h1>Admissions</h1><script>var x = 1;</script>"
            "<p>Apply <b>online</b> before March.</p>"
            "<ul><li>Interview</li><li>Assessment</li></ul>"
            "</body></html>",
            encoding="utf-8",
        )

        text = HtmlExtractor().extract(path)

        assert text == "Admissions\n\nApply online before March.\n\nInterview\n\nAssessment"
        assert "var x" not in text
        assert "color" not in text

    def test_page_without_blocks(self, tmp_path):
        path = tmp_path / "bare.htm"
        path.write_text("<html><body><div>Just a div</div></body></html>", encoding="utf-8")
        assert HtmlExtractor().extract(path) == "Just a div"


class TestDocxExtractor:

    @pytest.fixture
    def docx_path(self, tmp_path):
        document = Document()
        document.add_paragraph("Program overview")
        document.add_paragraph("")
        document.add_paragraph("Twelve month residency")
        table = document.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Fee"
        table.rows[0].cells[1].text = "INR 25 lakh"
        path = tmp_path / "brochure.docx"
        document.save(str(path))
        return path

    def test_paragraphs_and_tables(self, docx_path):
        text = DocxExtractor().extract(docx_path)
        assert text == "Program overview\n\nTwelve month residency\n\nFee | INR 25 lakh"

    def test_without_tables(self, docx_path):
        text = DocxExtractor(include_tables=False).extract(docx_path)
        assert "Fee" not in text

    def test_malformed_table_raises_extraction_error(self, tmp_path):
        path = write_docx_with_bad_table(tmp_path / "brochure.docx")

        with pytest.raises(ExtractionError) as exc_info:
            DocxExtractor().extract(path)

        assert exc_info.value.filename == "brochure.docx"
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(ExtractionError, match="Invalid DOCX"):
            DocxExtractor().extract(path)


class TestPdfExtractor:

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")

        with pytest.raises(ExtractionError) as exc_info:
            PdfExtractor().extract(path)

        assert exc_info.value.file_type == ".pdf"
        assert exc_info.value.original_error is not None


class TestExtractorFactory:

    @pytest.mark.parametrize("extension,expected", [
        (".txt", TextExtractor),
        (".md", TextExtractor),
        ("MD", TextExtractor),
        (".pdf", PdfExtractor),
        (".docx", DocxExtractor),
        (".html", HtmlExtractor),
        (".htm", HtmlExtractor),
    ])
    def test_create(self, extension, expected):
        assert isinstance(ExtractorFactory.create(extension), expected)

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported file type"):
            ExtractorFactory.create(".csv")

    def test_supports(self):
        assert ExtractorFactory.supports("a/b/Guide.PDF")
        assert not ExtractorFactory.supports("data.csv")

    def test_for_path(self):
        assert isinstance(ExtractorFactory.for_path("page.html"), HtmlExtractor)

    def test_register(self, mocker):
        mocker.patch.dict(ExtractorFactory._registry)

        class RstExtractor(BaseExtractor):
            def extract(self, path):
                return ""

        ExtractorFactory.register("rst", RstExtractor)

        assert ExtractorFactory.supports("readme.rst")

    def test_register_rejects_non_extractor(self):
        with pytest.raises(TypeError):
            ExtractorFactory.register(".rst", dict)
