"""
Inverted index reduce job.
Map tasks emit (word, document) pairs; the reduce side lists the documents
each word appears in.
"""


def reduce_function(key, values):
    """
    Reduce function: collect all documents for a word.

    Args:
        key: Word
        values: List of document names, possibly repeated

    Returns:
        "<count> <doc>,<doc>,..." with unique documents sorted
    """
    unique_docs = sorted(set(values))
    return f"{len(unique_docs)} {','.join(unique_docs)}"
