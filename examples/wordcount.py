"""
Word count reduce job.
Map tasks emit (word, "1") for every word; the reduce side totals them.
"""


def reduce_function(key, values):
    """
    Reduce function: sum all counts for a word.

    Args:
        key: Word
        values: List of counts as strings

    Returns:
        Total count as a string
    """
    return str(sum(int(v) for v in values))
