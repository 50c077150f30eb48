#!/usr/bin/env python

"""Recognition and parsing by repeated differentiation."""

import logging
from typing import Iterable

from pyderiv.algorithms import nullable, derive, parse_forest, compact, node_count
from pyderiv.language import Language, empty

logger = logging.getLogger(__file__)


def residual(symbols: Iterable, language: Language, compaction=True) -> Language:
    """The language left after consuming `symbols` from `language`, one symbol
       at a time, left to right. With `compaction`, each derivative is
       compacted before the next symbol is consumed."""
    for position, symbol in enumerate(symbols):
        language = derive(symbol, language)
        if compaction:
            language = compact(language)
        if language is empty():
            logger.debug(f"Rejected at position {position} on {symbol!r}")
            return language
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Consumed {symbol!r} at position {position}, residual has {node_count(language)} nodes")
    return language


def recognize(symbols: Iterable, language: Language, compaction=False) -> bool:
    """Does `language` contain the sequence `symbols`?

       Without `compaction` the residual keeps every derivative taken, and
       checking it for the empty string recurses through all of them, so
       inputs of a few hundred symbols can exceed Python's recursion limit.
       Pass `compaction=True` for long inputs."""
    accepted = nullable(residual(symbols, language, compaction=compaction))
    logger.info(f"Recognition {'accepted' if accepted else 'rejected'}")
    return accepted


def parse(symbols: Iterable, language: Language, compaction=True) -> set:
    """All distinct parse witnesses `language` assigns to `symbols`.
       An empty set means the input was rejected. Witnesses must be
       hashable; a reduction producing lists raises `TypeError`."""
    witnesses = set(parse_forest(residual(symbols, language, compaction=compaction)))
    logger.info(f"Parse produced {len(witnesses)} witnesses")
    return witnesses


class Parser:

    def __init__(self, language: Language, compaction=True):
        """Bundle a grammar with its parsing options.
           Keyword arguments:
           compaction -- compact the residual after every symbol when parsing
           """
        self.language = language
        self.compaction = compaction

    def recognize(self, symbols: Iterable) -> bool:
        return recognize(symbols, self.language, compaction=self.compaction)

    def parse(self, symbols: Iterable) -> set:
        return parse(symbols, self.language, compaction=self.compaction)

    def residual(self, symbols: Iterable) -> Language:
        return residual(symbols, self.language, compaction=self.compaction)

    def __contains__(self, symbols):
        return self.recognize(symbols)
