"""
Classic MapReduce word count example.
Counts the frequency of each word in the input text.
"""

import string


def map_function(source, content):
    """
    Map function: emit (word, "1") for each word in the input.

    Args:
        source: Input file name (unused)
        content: Full text of the input file

    Yields:
        (word, "1") tuples
    """
    # Remove punctuation and split into words
    words = content.translate(str.maketrans('', '', string.punctuation)).split()

    for word in words:
        if word:  # Skip empty strings
            yield (word.lower(), "1")


def reduce_function(key, values):
    """
    Reduce function: sum all counts for a word.

    Args:
        key: Word
        values: List of counts, as text

    Returns:
        Total count, as text
    """
    return str(sum(int(v) for v in values))
