"""Content normalizer - turns HTML pages and PDF text streams into plain text."""

import html
import re
from typing import List, Optional

_DROP_ELEMENTS = ("head", "script", "style", "nav", "header", "footer")
_HTML_SNIFF = re.compile(r"^\s*(?:<!doctype\s+html|<html\b|<head\b|<body\b)", re.I)
_TAG = re.compile(r"<[^>]+>")

_PDF_TEXT_OBJECT = re.compile(r"BT\s*(.*?)\s*ET", re.S)
_PDF_SHOW_TEXT = re.compile(r"\(((?:[^()\\]|\\.)*)\)\s*Tj|\[(.*?)\]\s*TJ", re.S)
_PDF_STRING = re.compile(r"\(((?:[^()\\]|\\.)*)\)")
_PDF_ESCAPE = re.compile(r"\\(?:([0-7]{1,3})|(.))", re.S)
_PDF_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f", "(": "(", ")": ")", "\\": "\\"}


def normalize(content: Optional[str], content_type: Optional[str] = None) -> str:
    """Return plain text for `content`, stripping markup it recognizes.

    `content_type` is a MIME type hint; without one the format is sniffed.
    """
    if not content:
        return ""

    kind = (content_type or "").lower()
    if "pdf" in kind or content.lstrip().startswith("%PDF-"):
        return extract_pdf_text(content)
    if "html" in kind or looks_like_html(content):
        return strip_html(content)

    return content.replace("\r\n", "\n").replace("\r", "\n")


def looks_like_html(content: str) -> bool:
    if _HTML_SNIFF.match(content):
        return True
    # Fragments without a document wrapper: mostly tags on the first lines.
    head = content[:2000]
    return len(re.findall(r"</(?:p|div|li|h[1-6]|span|a)>", head, re.I)) >= 3


def extract_html_title(content: str) -> Optional[str]:
    """Text of the page `<title>`, or None when there is none."""
    match = re.search(r"<title[^>]*>([^<]*)</title>", content or "", re.I)
    if not match:
        return None
    title = html.unescape(match.group(1)).strip()
    return title or None


def strip_html(content: str) -> str:
    """Drop page chrome and tags while keeping paragraph and list structure."""
    text = content
    for element in _DROP_ELEMENTS:
        text = re.sub(rf"<{element}\b[\s\S]*?</{element}>", "", text, flags=re.I)

    text = re.sub(r"</p>", "\n\n", text, flags=re.I)
    text = re.sub(r"</h[1-6]>", "\n\n", text, flags=re.I)
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.I)
    text = re.sub(r"<li[^>]*>", "- ", text, flags=re.I)
    text = re.sub(r"</li>", "\n", text, flags=re.I)
    text = _TAG.sub("", text)
    text = html.unescape(text).replace("\xa0", " ")

    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n\s*\n\s*\n+", "\n\n", text)
    return text.strip()


def extract_pdf_text(content: str) -> str:
    """Collect the string operands of `Tj`/`TJ` operators inside text objects."""
    parts: List[str] = []

    for obj in _PDF_TEXT_OBJECT.finditer(content):
        for match in _PDF_SHOW_TEXT.finditer(obj.group(1)):
            if match.group(2) is None:
                parts.append(_decode_pdf_string(match.group(1)))
                continue
            for operand in _PDF_STRING.finditer(match.group(2)):
                parts.append(_decode_pdf_string(operand.group(1)))

    return re.sub(r"\s+", " ", "".join(parts)).strip()


def _decode_pdf_string(raw: str) -> str:
    return _PDF_ESCAPE.sub(_unescape, raw)


def _unescape(match: "re.Match[str]") -> str:
    octal, char = match.group(1), match.group(2)
    if octal:
        return chr(int(octal, 8) & 0xFF)
    if char == "\n":
        return ""  # line continuation
    return _PDF_ESCAPES.get(char, char)
