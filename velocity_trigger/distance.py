"""
Change distance - normalized single-character edit distance.
"""


def levenshtein(a, b):
    """Classic edit distance with unit-cost insert, delete and substitute."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def change_distance(candidate, last_sent):
    """
    Fraction of `candidate` that differs from `last_sent`, in [0, 1].
    An empty `last_sent` counts as fully changed (nothing sent yet).
    """
    if not last_sent:
        return 1.0
    longest = max(len(candidate), len(last_sent))
    return levenshtein(candidate, last_sent) / longest
