import re
import unicodedata

# Control characters (except \n, \r, \t), BOM, zero-width chars, soft hyphens
_INVISIBLE = "".join(map(chr, (0xFEFF, 0x200B, 0x200C, 0x200D, 0x2060, 0x00AD)))
_NON_PRINTABLE_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f" + _INVISIBLE + "]")


def clean_text(text: str) -> str:
    """Normalise extracted text before segmentation.

    Collapses runs of horizontal whitespace to a single space, strips every
    line, and collapses three or more newlines to one paragraph break, so
    that paragraph boundaries survive for the segmenter.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _NON_PRINTABLE_RE.sub("", text)
    text = re.sub(r"[^\S\n]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
