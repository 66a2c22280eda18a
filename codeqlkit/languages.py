"""Languages supported by CodeQL and the mapping between their names and IDs.

Every language-related constant derives from LANGUAGE_ID_TO_LANGUAGE. The
short ID is the prefix used in query IDs (`js/xss`), the full name is what
`codeql database create --language` expects.
"""

from types import MappingProxyType

from codeqlkit.errors import UnsupportedLanguageError

LANGUAGE_ID_TO_LANGUAGE: MappingProxyType[str, str] = MappingProxyType({
    "cpp": "cpp",
    "cs": "csharp",
    "go": "go",
    "java": "java",
    "js": "javascript",
    "py": "python",
    "rb": "ruby",
    "swift": "swift",
    "actions": "actions",
})

LANGUAGE_TO_LANGUAGE_ID: MappingProxyType[str, str] = MappingProxyType(
    {language: lang_id for lang_id, language in LANGUAGE_ID_TO_LANGUAGE.items()}
)

# Full names, e.g. "javascript"
SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(LANGUAGE_ID_TO_LANGUAGE.values())

# Short IDs, e.g. "js"
SUPPORTED_LANGUAGE_IDS: tuple[str, ...] = tuple(LANGUAGE_ID_TO_LANGUAGE.keys())


def is_supported_language(language: str) -> bool:
    """Check if a full language name, such as `javascript`, is supported."""
    return language in LANGUAGE_TO_LANGUAGE_ID


def is_supported_language_id(lang_id: str) -> bool:
    """Check if a short language ID, such as `js`, is supported."""
    return lang_id in LANGUAGE_ID_TO_LANGUAGE


def language_from_query_id(query_id: str) -> str | None:
    """Infer the language from a query ID if possible.

    Returns the full language name when the query ID starts with a supported
    language ID followed by a slash, None otherwise.

    Examples:
        >>> language_from_query_id("js/xss")
        'javascript'
        >>> language_from_query_id("nope/xss") is None
        True
    """
    lang_id, sep, _rest = query_id.partition("/")
    if not sep:
        return None
    return LANGUAGE_ID_TO_LANGUAGE.get(lang_id)


def require_language(language: str) -> str:
    """Return the language unchanged, or raise if CodeQL does not support it."""
    if not is_supported_language(language):
        raise UnsupportedLanguageError(
            f"Unsupported language '{language}'. "
            f"Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return language
