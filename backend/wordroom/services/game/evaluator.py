from typing import List

CORRECT = 'correct'
PRESENT = 'present'
ABSENT = 'absent'


def evaluate_guess(secret: str, guess: str) -> List[str]:
    """Return one feedback mark per letter of ``guess``.

    Exact matches are marked first and consume their secret letter. The
    remaining guess letters then take the leftmost unconsumed occurrence of
    the same letter, so a repeated letter is never credited more often than
    it occurs in the secret.
    """
    if len(secret) != len(guess):
        raise ValueError('secret and guess must have the same length')

    remaining = list(secret)
    marks = [ABSENT] * len(guess)

    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            marks[i] = CORRECT
            remaining[i] = None

    for i, letter in enumerate(guess):
        if marks[i] == CORRECT:
            continue
        if letter in remaining:
            remaining[remaining.index(letter)] = None
            marks[i] = PRESENT

    return marks


def is_solved(marks: List[str]) -> bool:
    return bool(marks) and all(m == CORRECT for m in marks)
