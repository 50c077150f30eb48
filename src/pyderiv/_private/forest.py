#!/usr/bin/env python

"""Parse witnesses and the operations that build forests out of them.

   A forest is an ordered tuple of distinct witnesses. Order matters because
   concatenation pairs forests position by position."""

import itertools

NOTHING = ()   # the "nothing consumed" witness


def union(*forests) -> tuple:
    """Ordered union of forests, first occurrence wins."""
    return tuple(dict.fromkeys(itertools.chain(*forests)))


def _collapse(witness):
    if isinstance(witness, tuple) and len(witness) == 1:
        return witness[0]
    return witness


def cons(left, right) -> tuple:
    """Pair two witnesses, dropping NOTHING operands and unwrapping 1-tuples."""
    return tuple(_collapse(w) for w in (left, right) if w != NOTHING)


def combine(left: tuple, right: tuple) -> tuple:
    """Forest of a concatenation: witnesses paired position by position,
       truncated to the shorter forest."""
    return union(cons(l, r) for l, r in zip(left, right))


class Prepend:
    """Transform w -> cons(head, w)."""
    __slots__ = 'head',

    def __init__(self, head):
        self.head = head

    def __call__(self, witness):
        return cons(self.head, witness)


class Append:
    """Transform w -> cons(w, tail)."""
    __slots__ = 'tail',

    def __init__(self, tail):
        self.tail = tail

    def __call__(self, witness):
        return cons(witness, self.tail)


class Composition:
    """The composition outer . inner of witness transforms, kept flat so that
       long chains are applied in a loop rather than by nested calls."""
    __slots__ = 'functions',

    def __init__(self, functions):
        self.functions = tuple(functions)   # innermost first

    def __call__(self, witness):
        for f in self.functions:
            witness = f(witness)
        return witness


def compose(outer, inner):
    """Return a transform applying `inner` and then `outer`."""
    first = inner.functions if isinstance(inner, Composition) else (inner,)
    then = outer.functions if isinstance(outer, Composition) else (outer,)
    return Composition(first + then)
