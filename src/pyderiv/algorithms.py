#!/usr/bin/env python

"""Defines the algorithms over language expressions: nullability,
   derivatives, parse-forest extraction and compaction.

   Every function here is total on cyclic graphs. Recursive definitions go
   through `fix`, which answers a re-entered node with a fixed default, and
   the derivative only ever refers to sub-derivatives through deferred
   slots."""

from collections import deque

from pyderiv._private.exceptions import InternalInvariantViolation
from pyderiv._private.fixpoint import fix, memo
from pyderiv._private import forest
from pyderiv.language import (EMPTY, EPS, CHAR, CAT, ALT, REP, DELTA, RED,
                              Language, empty, eps, cat, alt, rep, delta, reduction)


def _unknown(language: Language):
    return InternalInvariantViolation(f"Unexpected language node kind {language.kind!r}")


@fix(False)
def nullable(language: Language) -> bool:
    """Does the language contain the empty string?"""
    kind = language.kind
    if kind in (EMPTY, CHAR):
        return False
    if kind in (EPS, REP):
        return True
    if kind in (DELTA, RED):
        return nullable(language.inner)
    if kind == ALT:
        return nullable(language.first) or nullable(language.second)
    if kind == CAT:
        return nullable(language.first) and nullable(language.second)
    raise _unknown(language)


# D_c(L) = {w : cw in L}
@memo(node_arg=1)
def derive(symbol, language: Language) -> Language:
    """The derivative of `language` with respect to `symbol`."""
    kind = language.kind
    if kind in (EMPTY, EPS, DELTA):
        return empty()
    if kind == CHAR:
        return eps((symbol,)) if language.symbol == symbol else empty()
    if kind == ALT:
        return alt(lambda: derive(symbol, language.first),
                   lambda: derive(symbol, language.second))
    if kind == CAT:
        # Either the first part vanishes and the symbol is consumed by the
        # second, or the first part consumes it.
        return alt(cat(delta(language.first), lambda: derive(symbol, language.second)),
                   cat(lambda: derive(symbol, language.first), language.second))
    if kind == REP:
        return cat(lambda: derive(symbol, language.inner), language)
    if kind == RED:
        return reduction(lambda: derive(symbol, language.inner), language.transform)
    raise _unknown(language)


@fix(())
def parse_forest(language: Language) -> tuple:
    """The distinct witnesses `language` assigns to the empty string, as an
       ordered tuple."""
    kind = language.kind
    if kind in (EMPTY, CHAR):
        return ()
    if kind == EPS:
        return language.witnesses
    if kind == DELTA:
        return parse_forest(language.inner)
    if kind == REP:
        return (forest.NOTHING,)
    if kind == ALT:
        return forest.union(parse_forest(language.first), parse_forest(language.second))
    if kind == CAT:
        return forest.combine(parse_forest(language.first), parse_forest(language.second))
    if kind == RED:
        transform = language.transform
        return forest.union(transform(w) for w in parse_forest(language.inner))
    raise _unknown(language)


@fix(False)
def empty_like(language: Language) -> bool:
    """True if the language is provably empty."""
    kind = language.kind
    if kind == EMPTY:
        return True
    if kind in (EPS, CHAR, REP):
        return False
    if kind == ALT:
        return empty_like(language.first) and empty_like(language.second)
    if kind == CAT:
        return empty_like(language.first) or empty_like(language.second)
    if kind == RED:
        return empty_like(language.inner)
    if kind == DELTA:
        return not nullable(language.inner)
    raise _unknown(language)


@fix(True)
def eps_like(language: Language) -> bool:
    """True if the language accepts at most the empty string."""
    kind = language.kind
    if kind in (EMPTY, CHAR):
        return False
    if kind in (EPS, DELTA):
        return True
    if kind == REP:
        return empty_like(language.inner) or eps_like(language.inner)
    if kind == ALT:
        return all(eps_like(side) or empty_like(side) for side in (language.first, language.second))
    if kind == CAT:
        return eps_like(language.first) and eps_like(language.second)
    if kind == RED:
        return eps_like(language.inner)
    raise _unknown(language)


def _eps_witnesses(language: Language):
    """The witnesses of an eps-like language, or None if it is not eps-like."""
    if eps_like(language):
        return parse_forest(language)
    return None


@fix(lambda language: language)
def compact(language: Language) -> Language:
    """Rewrite `language` into an equivalent, usually smaller, expression.

       Subtrees that can no longer consume input are folded into a single
       eps node carrying their witnesses, or into a reduction that will
       attach those witnesses to whatever the rest of the expression
       produces. Children are compacted lazily."""
    kind = language.kind
    if kind in (EMPTY, EPS, CHAR):
        return language
    if empty_like(language):
        return empty()
    if eps_like(language):
        witnesses = parse_forest(language)
        return eps(witnesses) if witnesses else empty()
    if kind == REP:
        inner = language.inner
        return rep(lambda: compact(inner))
    if kind == ALT:
        first, second = language.first, language.second
        if empty_like(first):
            return compact(second)
        if empty_like(second):
            return compact(first)
        return alt(lambda: compact(first), lambda: compact(second))
    if kind == CAT:
        first, second = language.first, language.second
        head = _eps_witnesses(first)
        if head is not None:
            if not head:
                return empty()
            if len(head) == 1:
                return reduction(lambda: compact(second), forest.Prepend(head[0]))
        tail = _eps_witnesses(second)
        if tail is not None:
            if not tail:
                return empty()
            if len(tail) == 1:
                return reduction(lambda: compact(first), forest.Append(tail[0]))
        return cat(lambda: compact(first), lambda: compact(second))
    if kind == RED:
        inner, transform = language.inner, language.transform
        if inner.kind == RED:
            nested = inner.inner
            return reduction(lambda: compact(nested), forest.compose(transform, inner.transform))
        if inner.kind == CAT:
            head = _eps_witnesses(inner.first)
            if head is not None and len(head) == 1:
                rest = inner.second
                return reduction(lambda: compact(rest),
                                 forest.compose(transform, forest.Prepend(head[0])))
        return reduction(lambda: compact(inner), transform)
    raise _unknown(language)


def node_count(language: Language) -> int:
    """Number of distinct nodes reachable from `language`. Forces every
       deferred slot on the way."""
    seen = {id(language)}
    queue = deque([language])
    while queue:
        node = queue.popleft()
        for child in node.children():
            if id(child) not in seen:
                seen.add(id(child))
                queue.append(child)
    return len(seen)
