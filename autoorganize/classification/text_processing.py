"""Text processing utilities for titles, filenames and match strings."""

import re
import unicodedata

# Characters not allowed in file or folder names on common filesystems
INVALID_FILENAME_CHARS = re.compile(r'[<>"|*\x00-\x1f]')


def normalize_accents(text: str) -> str:
    """
    Strip accents and expand ligatures.

    Args:
        text: Input string that may contain accented characters.

    Returns:
        String with accents removed and ligatures expanded.

    Examples:
        >>> normalize_accents("café")
        'cafe'
        >>> normalize_accents("cœur")
        'coeur'
    """
    if not text:
        return ""

    text = text.replace('œ', 'oe').replace('Œ', 'OE').replace('æ', 'ae').replace('Æ', 'AE')
    text = unicodedata.normalize('NFD', text)
    return ''.join(c for c in text if unicodedata.category(c) != 'Mn')


def normalize(string: str) -> str:
    """
    Make a string safe to use as a file or folder name.

    This function:
    - Replaces : with comma-space
    - Replaces ? with ellipsis
    - Replaces / and backslash with dash
    - Drops characters invalid on common filesystems
    - Reduces multiple spaces to single

    Args:
        string: Input string to normalize.

    Returns:
        Normalized string suitable for filenames.

    Examples:
        >>> normalize("Title: Subtitle")
        'Title, Subtitle'
        >>> normalize("What?")
        'What...'
    """
    if not string:
        return ""

    result = string.replace(" .", ".")
    result = result.replace(':', ', ').replace('?', '...')
    result = result.replace('/', ' - ').replace('\\', ' - ')
    result = INVALID_FILENAME_CHARS.sub('', result)
    result = result.replace(' , ', ', ')
    result = ' '.join(result.split())

    return result.strip()


def normalize_match_string(name: str) -> str:
    """
    Reduce a parsed name to the form stored in smart matches.

    Lowercases, strips accents and collapses every run of punctuation or
    whitespace to a single space, so "The.Show", "the show" and "The Show!"
    all yield "the show".

    Args:
        name: Raw name token from a filename.

    Returns:
        Normalized match string, empty when nothing remains.
    """
    if not name:
        return ""
    text = normalize_accents(name).lower()
    text = re.sub(r"[\W_]+", " ", text)
    return text.strip()
