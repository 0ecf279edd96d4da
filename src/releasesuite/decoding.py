"""Decode uploaded release-notes files.

Exports from the release tooling arrive as UTF-8, UTF-16 with a BOM, or
legacy Windows-1252. A BOM decides the codec; otherwise UTF-8 is tried and
replaced by Windows-1252 when it produces too many replacement characters.
"""

from __future__ import annotations

import codecs
import logging

logger = logging.getLogger(__name__)

REPLACEMENT_CHAR = '\ufffd'
MIN_REPLACEMENTS = 3
REPLACEMENT_RATIO = 200

_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF16_LE, 'utf-16-le'),
    (codecs.BOM_UTF16_BE, 'utf-16-be'),
)


def _strip_bom(data: bytes) -> tuple[bytes, str | None]:
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            if encoding == 'utf-8-sig':
                return data, encoding
            return data[len(bom):], encoding
    return data, None


def decode_release_notes(data: bytes) -> str:
    body, encoding = _strip_bom(data)
    if encoding is not None:
        return body.decode(encoding, errors='replace')
    text = body.decode('utf-8', errors='replace')
    replacements = text.count(REPLACEMENT_CHAR)
    if replacements > max(MIN_REPLACEMENTS, len(text) / REPLACEMENT_RATIO):
        logger.debug('utf-8 decode produced %d replacements; retrying as cp1252', replacements)
        # cp1252 leaves five bytes undefined; latin-1 maps every byte.
        try:
            return body.decode('cp1252')
        except UnicodeDecodeError:
            return body.decode('latin-1')
    return text


__all__ = ['decode_release_notes']
