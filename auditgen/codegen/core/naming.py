"""
Naming utilities for generated persistence configuration.

Converts entity and audit-field identifiers into storage (column) names.
"""

STORAGE_SEPARATOR = "_"


def to_storage_name(identifier: str) -> str:
    """
    Convert an identifier to its storage name.

    A separator is inserted before every upper-case letter except the first
    character and every letter is lower-cased, so ``CreatedAt`` becomes
    ``created_at``. Input is expected to contain no separators already.

    Args:
        identifier: Property or field name (PascalCase or camelCase)

    Returns:
        Storage name, or the input unchanged when it is empty or blank
    """
    if not identifier or not identifier.strip():
        return identifier

    chars = []
    for index, char in enumerate(identifier):
        if char.isupper():
            if index > 0:
                chars.append(STORAGE_SEPARATOR)
            chars.append(char.lower())
        else:
            chars.append(char)

    return "".join(chars)
