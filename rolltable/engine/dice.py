"""
Dice notation evaluation for draw results.

Table entries can carry dice notation inside their text, e.g.
"Goblins: 2d4+1" or "Gold coins: (3d6)x10". When an entry is drawn every
expression is rolled and replaced by its total, leaving the rest of the
text untouched:

    "Gold coins: (3d6)x10"  ->  "Gold coins: 110 (3d6x10)"
    clean_results=True      ->  "Gold coins: 110"

Grammar (case-insensitive)::

    [(] <count> d <sides> [)] [ <op> <modifier> ]      op in + - * x

Parentheses are only part of an expression as a matched pair; a lone
bracket belongs to the surrounding text. Totals never drop below 1.
Anything that does not fit the grammar, or asks for more than
MAX_DICE_COUNT dice or MAX_DICE_SIDES faces, is left as literal text.
"""

import random
import re

from rolltable.config.logging import get_logger

logger = get_logger(__name__)

_DICE_PATTERN = re.compile(
    r"(?:\((?P<pcount>[1-9]\d*)d(?P<psides>[1-9]\d*)\)"
    r"|(?<!\d)(?P<count>[1-9]\d*)d(?P<sides>[1-9]\d*))"
    r"(?:\s*(?P<op>[-+*x])\s*(?P<modifier>\d+))?",
    re.IGNORECASE,
)

MIN_TOTAL = 1
MAX_DICE_COUNT = 1000
MAX_DICE_SIDES = 10000


class DiceNotationEvaluator:
    """
    Replaces every dice expression in a string with a rolled total.

    Example:
        >>> evaluator = DiceNotationEvaluator(random.Random(7))
        >>> evaluator.evaluate("Loot 1d1+10")
        'Loot 11 (1d1+10)'
    """

    def __init__(self, rng: random.Random | None = None):
        """
        Args:
            rng: Random source. Defaults to a fresh, unseeded random.Random.
        """
        self._rng = rng if rng is not None else random.Random()

    def evaluate(self, text: str, clean_results: bool = False) -> str:
        """
        Roll every dice expression found in ``text``.

        Args:
            text: Arbitrary text, possibly containing dice notation
            clean_results: If True each expression becomes just "<total>",
                otherwise "<total> (<notation>)"

        Returns:
            Text with each expression replaced by its result
        """
        if not text:
            return text
        return _DICE_PATTERN.sub(lambda match: self._replace(match, clean_results), text)

    def roll(self, count: int, sides: int, op: str | None = None, modifier: int = 0) -> int:
        """
        Roll ``count`` dice with ``sides`` faces and apply an optional modifier.

        ``op`` is one of '+', '-', '*' or 'x'. The result is at least 1.
        """
        rolls = [self._rng.randint(1, sides) for _ in range(count)]
        total = sum(rolls)

        if op == "+":
            total += modifier
        elif op == "-":
            total -= modifier
        elif op in ("*", "x", "X"):
            total *= modifier

        logger.debug(f"Rolled {count}d{sides}: {rolls} -> {total}")
        return max(MIN_TOTAL, total)

    def _replace(self, match: re.Match, clean_results: bool) -> str:
        count = int(match.group("count") or match.group("pcount"))
        sides = int(match.group("sides") or match.group("psides"))
        if count > MAX_DICE_COUNT or sides > MAX_DICE_SIDES:
            logger.debug(f"Leaving oversized dice expression as text: {match.group(0)!r}")
            return match.group(0)

        op = match.group("op")
        modifier = match.group("modifier")

        total = self.roll(count, sides, op, int(modifier) if modifier else 0)
        if clean_results:
            return str(total)
        return f"{total} ({canonical_notation(count, sides, op, modifier)})"


def canonical_notation(count: int, sides: int, op: str | None = None, modifier: str | None = None) -> str:
    """
    Render dice notation without parentheses or whitespace.

    '*' is written as 'x', so "(3d6) * 10" becomes "3d6x10".
    """
    notation = f"{count}d{sides}"
    if op and modifier:
        symbol = "x" if op in ("*", "x", "X") else op
        notation += f"{symbol}{modifier}"
    return notation


def parse_dice(text: str, clean_results: bool = False, rng: random.Random | None = None) -> str:
    """Evaluate dice notation in ``text`` with a one-off evaluator."""
    return DiceNotationEvaluator(rng).evaluate(text, clean_results)
