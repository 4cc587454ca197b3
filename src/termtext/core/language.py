"""
Language name lookup for files, backed by the Pygments lexer registry.
"""

import logging
import re
from typing import Dict, Final, Optional, Tuple

from pygments.lexers import find_lexer_class_for_filename

logger = logging.getLogger(__name__)

# Pygments names that read poorly in a status bar
LABEL_OVERRIDES: Final[Dict[str, str]] = {
    'Text only': 'Plain Text',
}

C_PATTERN: Final[str] = r'^\s*(#include|int\s+main|void\s+main|struct\s+\w+\s*{)'
CPP_PATTERN: Final[str] = r'^\s*(class\s+\w+|namespace\s+\w+|template\s*<)'

LANGUAGE_PATTERNS: Final[Tuple[Tuple[str, str], ...]] = (
    (r'^\s*(def|class|import|from|if __name__ == [\'"]__main__[\'"])', 'Python'),
    (r'^\s*(function|const|let|var|document\.|window\.|=>)', 'JavaScript'),
    (r'<html|<!DOCTYPE html|<body|<script|<div', 'HTML'),
    (r'^\s*(package|import\s+java|public\s+class)', 'Java'),
    (r'^\s*(<?php|namespace|use\s+[\w\\]+;)', 'PHP'),
    (r'^\s*(#!\s*/bin/bash|function\s+\w+\s*\(\))', 'Bash'),
    (r'^\s*(fn\s+\w+|pub\s+struct|use\s+std::)', 'Rust'),
)


def _label(name: str) -> str:
    return LABEL_OVERRIDES.get(name, name)


def language_for_extension(extension: str) -> Optional[str]:
    """
    Get a human readable language name for a file extension.

    Args:
        extension: The extension, with or without a leading dot (e.g. "rs")

    Returns:
        The language name, or None if the extension is not recognised
    """

    extension = extension.lstrip('.')
    if not extension:
        return None

    lexer_class = find_lexer_class_for_filename(f"file.{extension}")
    if lexer_class is None:
        return None

    return _label(lexer_class.name)


def detect_language(filename: Optional[str], content: str = "") -> Optional[str]:
    """
    Detect the language of a file based on its name and, failing that, its content.

    Args:
        filename: The name of the file, if any
        content: A sample of the file content

    Returns:
        The detected language or None if not detected
    """

    if filename:
        lexer_class = find_lexer_class_for_filename(filename)
        if lexer_class is not None:
            return _label(lexer_class.name)

    for pattern, language in LANGUAGE_PATTERNS:
        if re.search(pattern, content, re.MULTILINE):
            logger.debug("Detected %s from file content", language)
            return language

    if re.search(C_PATTERN, content, re.MULTILINE):
        if re.search(CPP_PATTERN, content, re.MULTILINE):
            return 'C++'

        return 'C'

    return None
