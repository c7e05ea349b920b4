"""Word frequency table.

A fixed-size hash table with separate chaining. Each distinct word gets one
``WordEntry``; new entries go to the head of their bucket's chain.
"""

from collections.abc import Iterator
from dataclasses import dataclass

DEFAULT_HASH_SIZE = 101

_HASH_MASK = 0xFFFFFFFF


@dataclass
class WordEntry:
    """A word and the number of times it has been seen.

    Attributes:
        name: The word.
        count: Occurrences counted so far.
        next: Next entry in the same bucket chain.
    """

    name: bytes
    count: int = 0
    next: "WordEntry | None" = None


def hash_word(word: bytes, size: int = DEFAULT_HASH_SIZE) -> int:
    """Polynomial string hash (h = byte + 31 * h) reduced to a bucket index."""
    hashval = 0
    for byte in word:
        hashval = (byte + 31 * hashval) & _HASH_MASK
    return hashval % size


class FrequencyTable:
    """Maps words to their occurrence counts.

    The table is meant to live for one word-frequency pass: build it with
    ``install``, then consume it once with ``drain``.
    """

    def __init__(self, size: int = DEFAULT_HASH_SIZE) -> None:
        """Create an empty table.

        Args:
            size: Number of buckets. Fixed for the life of the table.
        """
        if size < 1:
            raise ValueError(f"Hash table size must be positive, got {size}")
        self.size = size
        self._buckets: list[WordEntry | None] = [None] * size
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __contains__(self, word: bytes) -> bool:
        return self.lookup(word) is not None

    def lookup(self, word: bytes) -> WordEntry | None:
        """Return the entry for word, or None if it has not been installed."""
        entry = self._buckets[hash_word(word, self.size)]
        while entry is not None:
            if entry.name == word:
                return entry
            entry = entry.next
        return None

    def install(self, word: bytes) -> WordEntry:
        """Return the entry for word, creating it with count 0 if missing."""
        entry = self.lookup(word)
        if entry is None:
            hashval = hash_word(word, self.size)
            entry = WordEntry(name=bytes(word), next=self._buckets[hashval])
            self._buckets[hashval] = entry
            self._count += 1
        return entry

    def add(self, word: bytes) -> WordEntry:
        """Count one occurrence of word."""
        entry = self.install(word)
        entry.count += 1
        return entry

    def drain(self) -> Iterator[tuple[bytes, int]]:
        """Yield (word, count) pairs and empty the table.

        Pairs come out in bucket order, then chain order. That order is an
        implementation detail and is neither sorted nor insertion order.
        """
        for index in range(self.size):
            entry = self._buckets[index]
            self._buckets[index] = None
            while entry is not None:
                self._count -= 1
                yield entry.name, entry.count
                entry = entry.next
