"""
Consensus values

A consensus value folds many observations of one quantity (a bitrate, a
genre) into a single string: empty while nothing was seen, the common value
while every observation agrees, and a conflict sentinel as soon as two
observations differ. Sentinels are sticky for the rest of the fold.
"""

from typing import Optional

VBR = "VBR"
UNKNOWN = "?"
SENTINELS = frozenset({VBR, UNKNOWN})


def is_conflict(value: str) -> bool:
    return value in SENTINELS


class ConsensusValue:
    """String accumulator with empty / concrete / conflict states"""

    def __init__(self, initial: str = ""):
        self.value = initial or ""

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    @property
    def is_conflict(self) -> bool:
        return is_conflict(self.value)

    def conflict_for(self, token: str) -> str:
        """Sentinel used when ``token`` disagrees with the current value"""
        return UNKNOWN

    def offer(self, token: str) -> bool:
        """
        Fold one observation into the accumulator

        Returns:
            True if this observation turned the value into a conflict
        """
        if self.is_conflict:
            return False
        if self.is_empty:
            self.value = token
            return False
        if self.value == token:
            return False
        self.value = self.conflict_for(token)
        return True

    def mark_conflict(self) -> bool:
        """Force the unknown sentinel; True if the value was not a conflict yet"""
        if self.is_conflict:
            return False
        self.value = UNKNOWN
        return True

    def __str__(self):
        return self.value

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BitrateConsensus(ConsensusValue):
    """
    Bitrate accumulator

    Tokens are either a decimal kbps value from an MP3 frame or an upper-cased
    file extension. Two different MP3 bitrates mean variable bitrate (``VBR``);
    any other disagreement is a format mismatch (``?``).
    """

    def conflict_for(self, token: str) -> str:
        if self.value.isdigit() and token.isdigit():
            return VBR
        return UNKNOWN


class GenreConsensus(ConsensusValue):
    """Genre accumulator; a missing genre is itself a conflict"""

    def offer_genre(self, genre: Optional[str]) -> bool:
        if genre is None:
            return self.mark_conflict()
        return self.offer(genre)


__all__ = [
    'VBR',
    'UNKNOWN',
    'SENTINELS',
    'is_conflict',
    'ConsensusValue',
    'BitrateConsensus',
    'GenreConsensus',
]
