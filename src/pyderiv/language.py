#!/usr/bin/env python

"""Language expressions: nodes, smart constructors and letrec."""

import functools
from collections import deque
from typing import Callable, Optional, cast

from pyderiv._private import util
from pyderiv._private.exceptions import InternalInvariantViolation, MalformedGrammar
from pyderiv._private.forest import NOTHING

EMPTY = 'empty'
EPS = 'eps'
CHAR = 'char'
CAT = 'cat'
ALT = 'alt'
REP = 'rep'
DELTA = 'delta'
RED = 'red'
PLACEHOLDER = 'placeholder'

ATOMIC = {EMPTY, EPS, CHAR, PLACEHOLDER}
TRIVIAL = (NOTHING,)


class Deferred:
    """A child slot whose node is computed on first read."""
    __slots__ = 'thunk', 'forcing'

    def __init__(self, thunk: Callable[[], 'Language']):
        self.thunk = thunk
        self.forcing = False

    def force(self) -> 'Language':
        if self.forcing:
            raise InternalInvariantViolation("Deferred child forced while it was being computed")
        self.forcing = True
        try:
            value = self.thunk()
        finally:
            self.forcing = False
        if not isinstance(value, Language):
            raise TypeError(f"Deferred child must produce a Language, got {type(value).__name__}")
        return value


def _slot(child):
    if isinstance(child, Language):
        return child
    if callable(child):
        return Deferred(child)
    raise TypeError(f"Expected a Language or a zero-argument callable, got {type(child).__name__}")


class Language:
    """A node of a language expression graph.

       Graphs may be cyclic (see `letrec`). Nodes compare and hash by
       identity; all evaluators key their caches on identity as well. Child
       slots may hold a `Deferred` computation that is replaced by its result
       the first time the child is read."""

    __slots__ = 'kind', '_first', '_second', 'symbol', 'witnesses', 'transform', '_cache'

    def __init__(self, kind: str, first=None, second=None, symbol=None,
                 witnesses: Optional[tuple] = None, transform: Optional[Callable] = None):
        self.kind = kind
        self._first = first
        self._second = second
        self.symbol = symbol
        self.witnesses = witnesses
        self.transform = transform
        self._cache = {}

    @property
    def first(self) -> 'Language':
        if isinstance(self._first, Deferred):
            self._first = self._first.force()
        return self._first

    @property
    def second(self) -> 'Language':
        if isinstance(self._second, Deferred):
            self._second = self._second.force()
        return self._second

    inner = first

    def is_atomic(self) -> bool:
        return self.kind in ATOMIC

    def is_forced(self) -> bool:
        """True if no child slot of this node is still deferred."""
        return not isinstance(self._first, Deferred) and not isinstance(self._second, Deferred)

    def children(self) -> list:
        """The child nodes, forcing deferred slots."""
        if self.kind in (CAT, ALT):
            return [self.first, self.second]
        if self.kind in (REP, DELTA, RED):
            return [self.first]
        return []

    def become(self, other: 'Language'):
        """Overwrite this node with the contents of `other` (used by letrec)."""
        self.kind = other.kind
        self._first = other._first
        self._second = other._second
        self.symbol = other.symbol
        self.witnesses = other.witnesses
        self.transform = other.transform
        self._cache = {}

    def __repr__(self):
        if self.kind == CHAR:
            return f"<Language char {self.symbol!r}>"
        if self.kind == EPS and self.witnesses != TRIVIAL:
            return f"<Language eps {len(self.witnesses)} witnesses>"
        return f"<Language {self.kind} at {id(self):#x}>"

    # ==================
    # Rendering
    # ==================

    def view(self, show_witnesses=True) -> 'graphviz.Digraph':
        """Creates a 'graphviz.Digraph' of the graph reachable from this node.
           Will automatically display in Jupyter.

           Deferred slots are not forced; they are drawn as dashed boxes.

           :param show_witnesses: label eps nodes with their witnesses
           :return: A Digraph object which will automatically display in Jupyter.
        """
        import graphviz
        util.require_graphviz()

        labels = {EMPTY: '&empty;', CAT: '&#x2218;', ALT: '&cup;', REP: '&lowast;',
                  DELTA: '&delta;', RED: '&rarr;', PLACEHOLDER: '?'}
        g = graphviz.Digraph('Language', graph_attr={"rankdir": "TB", "ordering": "out"})
        g.attr('node', shape='circle')
        numbers = {}
        queue = deque([self])
        numbers[id(self)] = 0
        while queue:
            node = queue.popleft()
            name = str(numbers[id(node)])
            if node.kind == CHAR:
                g.node(name, util.symbol_label(node.symbol), shape='box')
            elif node.kind == EPS:
                label = '&#x03f5;'
                if show_witnesses and node.witnesses != TRIVIAL:
                    label += ' ' + graphviz.escape(', '.join(repr(w) for w in node.witnesses))
                g.node(name, label, shape='box')
            else:
                g.node(name, labels.get(node.kind, node.kind),
                       style='bold' if node is self else '')
            for edge, slot in (('1', node._first), ('2', node._second)):
                if slot is None:
                    continue
                if isinstance(slot, Deferred):
                    g.node(name + '_' + edge, 'deferred', shape='box', style='dashed')
                    g.edge(name, name + '_' + edge, style='dashed')
                    continue
                if id(slot) not in numbers:
                    numbers[id(slot)] = len(numbers)
                    queue.append(slot)
                g.edge(name, str(numbers[id(slot)]))
        return g

    def render(self, view=True, filename: str='Language', format='pdf', tight=True):
        """
        Renders the expression graph to a file and optionally opens the file.
        :param view: If True, the rendered file will be opened.
        :param format: The file format for the Digraph. Typically 'pdf', 'png', or 'svg'. View all formats: https://graphviz.org/docs/outputs/
        :param tight: If False, the rendered file will have whitespace margins around the graph.
        """
        import graphviz
        digraph = cast(graphviz.Digraph, self.view())
        digraph.format = format
        if tight:
            digraph.graph_attr['margin'] = '0'
        digraph.render(view=view, filename=filename, cleanup=True)


_EMPTY = Language(EMPTY)
_EPS = Language(EPS, witnesses=TRIVIAL)


def _is(child, kind) -> bool:
    """True for a concrete (non-deferred) node of the given kind."""
    return isinstance(child, Language) and child.kind == kind


def _trivial(child) -> bool:
    return _is(child, EPS) and child.witnesses == TRIVIAL


# empty language: {}
def empty() -> Language:
    return _EMPTY


# ε, optionally carrying the parse witnesses accumulated so far
def eps(witnesses=None) -> Language:
    if witnesses is None:
        return _EPS
    witnesses = tuple(dict.fromkeys(witnesses))
    if witnesses == TRIVIAL:
        return _EPS
    return Language(EPS, witnesses=witnesses)


# singleton language: {symbol}
# symbols must be hashable, derivatives are memoized per symbol
def char(symbol) -> Language:
    return Language(CHAR, symbol=symbol)


def _cat(first, second) -> Language:
    if _is(first, EMPTY) or _is(second, EMPTY):
        return _EMPTY
    if _trivial(first) and isinstance(second, Language):
        return second
    if _trivial(second) and isinstance(first, Language):
        return first
    return Language(CAT, _slot(first), _slot(second))


def _single(child) -> Language:
    if not isinstance(child, Language):
        raise TypeError("A lone operand must be a Language; deferred operands need a sibling")
    return child


def _alt(first, second) -> Language:
    if _is(first, EMPTY) and isinstance(second, Language):
        return second
    if _is(second, EMPTY) and isinstance(first, Language):
        return first
    return Language(ALT, _slot(first), _slot(second))


# concatenation: L1 L2 = {w1 w2 : w1 in L1, w2 in L2}
def cat(*languages) -> Language:
    if not languages:
        return _EPS
    if len(languages) == 1:
        return _single(languages[0])
    return functools.reduce(_cat, languages)


# union: L1 | L2 = {w : w in L1 or w in L2}
def alt(*languages) -> Language:
    if not languages:
        return _EMPTY
    if len(languages) == 1:
        return _single(languages[0])
    return functools.reduce(_alt, languages)


# Kleene star: L* = {ε} | L | LL | ...
def rep(language) -> Language:
    if _is(language, EMPTY) or _is(language, EPS):
        return _EPS
    if _is(language, REP):
        return language
    return Language(REP, _slot(language))


# δ(L) = ε if ε in L, else {}
def delta(language) -> Language:
    if _is(language, EMPTY) or _is(language, CHAR):
        return _EMPTY
    if _is(language, EPS):
        return language
    return Language(DELTA, _slot(language))


def reduction(language, transform: Callable) -> Language:
    """Wrap `language` so that `transform` is applied to each witness
       extracted from it. `transform` must return hashable values, since
       forests are deduplicated and `parse` returns a set; return a tuple
       rather than a list."""
    if _is(language, EMPTY):
        return _EMPTY
    return Language(RED, _slot(language), transform=transform)


def letrec(builder: Callable[[Language], Language]) -> Language:
    """Build a self-referential language.

       `builder` receives a placeholder standing for the language being
       defined and must return a compound expression, which then replaces
       the placeholder. The placeholder is returned, so references to it
       inside the expression point at the result, e.g.

       >>> x = char('x')
       >>> xs = letrec(lambda xs: cat(x, alt(eps(), xs)))
       >>> xs.second.second is xs
       True
    """
    placeholder = Language(PLACEHOLDER)
    language = builder(placeholder)
    if not isinstance(language, Language):
        raise MalformedGrammar(f"letrec builder must return a Language, got {type(language).__name__}")
    if language.is_atomic():
        raise MalformedGrammar("letrec builder must return a compound language, "
                               f"got {language.kind}; a self-reference must pass through cat, alt, rep, delta or reduction")
    placeholder.become(language)
    return placeholder
