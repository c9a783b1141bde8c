"""
Notepad feature: folder taxonomy.

Built-in folders are fixed; user folders take an optional leading emoji
from the name the user typed ("🔬 Lab" -> emoji 🔬, name "Lab").
"""

from app.features.notepad.models import DEFAULT_FOLDER_EMOJI, Folder

FALLBACK_FOLDER_NAME = "Folder"

# Extended_Pictographic codepoints: emoji blocks plus the few Latin-1 / letterlike ones
_PICTOGRAPHIC_RANGES = (
    (0x1F000, 0x1FAFF),
    (0x2600, 0x27BF),
    (0x2300, 0x23FF),
    (0x2B00, 0x2BFF),
    (0x2194, 0x21AA),
    (0x00A9, 0x00A9),
    (0x00AE, 0x00AE),
    (0x203C, 0x203C),
    (0x2049, 0x2049),
    (0x2122, 0x2122),
    (0x2139, 0x2139),
)
_ZWJ = "\u200d"
_VARIATION_SELECTORS = {"\ufe0e", "\ufe0f"}


def default_folders() -> list[Folder]:
    """A fresh copy of the five built-in folders."""
    return [
        Folder(id="inbox", name="Inbox", emoji="📥", built_in=True),
        Folder(id="work", name="Work", emoji="💼", built_in=True),
        Folder(id="ideas", name="Ideas", emoji="🧠", built_in=True),
        Folder(id="personal", name="Personal", emoji="🌙", built_in=True),
        Folder(id="archive", name="Archive", emoji="🗂️", built_in=True),
    ]


def is_pictographic(char: str) -> bool:
    cp = ord(char)
    return any(lo <= cp <= hi for lo, hi in _PICTOGRAPHIC_RANGES)


def _leading_emoji(text: str) -> str:
    """Return the emoji sequence at the start of `text`, or "" if there is none.

    Keeps variation selectors, skin-tone modifiers and ZWJ joins together
    so "🗂️" or "👩‍🔬" stay a single glyph.
    """
    if not text or not is_pictographic(text[0]):
        return ""
    end = 1
    while end < len(text):
        ch = text[end]
        if ch in _VARIATION_SELECTORS or 0x1F3FB <= ord(ch) <= 0x1F3FF:
            end += 1
        elif ch == _ZWJ and end + 1 < len(text) and is_pictographic(text[end + 1]):
            end += 2
        else:
            break
    return text[:end]


def parse_folder_name(raw: str) -> tuple[str, str]:
    """Split user input into (emoji, name)."""
    trimmed = raw.strip()
    emoji = _leading_emoji(trimmed)
    if emoji:
        return emoji, trimmed[len(emoji):].strip() or FALLBACK_FOLDER_NAME
    return DEFAULT_FOLDER_EMOJI, trimmed
