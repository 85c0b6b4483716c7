"""
Hangul helpers: syllable checks and jamo decomposition.
"""

import re
import unicodedata
from typing import List

HANGUL_WORD_RE = re.compile(r"^[가-힣]+$")

SYLLABLE_BASE = 0xAC00
SYLLABLE_LAST = 0xD7A3

CHOSEONG = ['ㄱ', 'ㄲ', 'ㄴ', 'ㄷ', 'ㄸ', 'ㄹ', 'ㅁ', 'ㅂ', 'ㅃ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅉ', 'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ']
JUNGSEONG = ['ㅏ', 'ㅐ', 'ㅑ', 'ㅒ', 'ㅓ', 'ㅔ', 'ㅕ', 'ㅖ', 'ㅗ', 'ㅘ', 'ㅙ', 'ㅚ', 'ㅛ', 'ㅜ', 'ㅝ', 'ㅞ', 'ㅟ', 'ㅠ', 'ㅡ', 'ㅢ', 'ㅣ']
JONGSEONG = ['', 'ㄱ', 'ㄲ', 'ㄳ', 'ㄴ', 'ㄵ', 'ㄶ', 'ㄷ', 'ㄹ', 'ㄺ', 'ㄻ', 'ㄼ', 'ㄽ', 'ㄾ', 'ㄿ', 'ㅀ', 'ㅁ', 'ㅂ', 'ㅄ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ']


def normalize_word(word: str) -> str:
    """Strip whitespace and compose decomposed jamo input (NFC)."""
    if word is None:
        return ""
    return unicodedata.normalize("NFC", word.strip())


def is_hangul_word(word: str) -> bool:
    """True when every character is a precomposed Hangul syllable."""
    return bool(word) and HANGUL_WORD_RE.match(word) is not None


def decompose(word: str) -> List[str]:
    """
    Decompose Hangul syllables into a flat list of jamo.

    Non-syllable characters pass through unchanged. Empty final consonants
    are dropped so that '가' -> ['ㄱ', 'ㅏ'].
    """
    jamo = []
    for char in word:
        code = ord(char)
        if SYLLABLE_BASE <= code <= SYLLABLE_LAST:
            index = code - SYLLABLE_BASE
            jamo.append(CHOSEONG[index // (21 * 28)])
            jamo.append(JUNGSEONG[(index % (21 * 28)) // 28])
            final = JONGSEONG[index % 28]
            if final:
                jamo.append(final)
        else:
            jamo.append(char)
    return jamo
