"""Katakana readings for Japanese names, via pykakasi."""

import logging
import threading

import jaconv
import pykakasi

from relnet.domain.unicode_script import contains_japanese_script

logger = logging.getLogger(__name__)


class KakasiTransliterator:
    """Transliterator backed by pykakasi.

    Text without Han, Hiragana or Katakana is returned unchanged, and so is
    any text pykakasi cannot read: callers never see an exception.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._kakasi = None
        self._lock = threading.Lock()

    def _converter(self):
        with self._lock:
            if self._kakasi is None:
                self._kakasi = pykakasi.kakasi()
            return self._kakasi

    def transliterate_to_katakana(self, text: str) -> str:
        if not self._enabled or not contains_japanese_script(text):
            return text
        try:
            parts = self._converter().convert(text)
        except Exception as e:
            logger.warning("Furigana conversion failed for %r: %s", text, e)
            return text
        hiragana = "".join(part.get("hira") or part.get("orig", "") for part in parts)
        if not hiragana:
            return text
        return jaconv.hira2kata(hiragana)
