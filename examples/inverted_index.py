"""
Inverted index MapReduce example.
Creates an index mapping each word to the documents it appears in.
"""

import os
import string


def map_function(source, content):
    """
    Map function: emit (word, document_id) for each word.

    Args:
        source: Input file path (its base name is the document ID)
        content: Full text of the document

    Yields:
        (word, document_id) tuples
    """
    doc_id = os.path.basename(source)
    words = content.translate(str.maketrans('', '', string.punctuation)).split()

    for word in words:
        if word:
            yield (word.lower(), doc_id)


def reduce_function(key, values):
    """
    Reduce function: collect all document IDs for a word.

    Args:
        key: Word
        values: List of document IDs

    Returns:
        Comma-separated unique document IDs
    """
    # Remove duplicates and sort
    return ','.join(sorted(set(values)))
