#!/usr/bin/env python

"""Memoization over (possibly cyclic) language graphs.

   Results are stored in the ``_cache`` dict of the node they describe, so a
   cache lives and dies with its grammar. Keys are node identities: two
   structurally equal nodes never share an entry."""

import functools

from pyderiv._private.exceptions import InternalInvariantViolation


def fix(default):
    """Decorator turning a recursive function of one node into a total,
       memoized function that is safe on cycles.

       If the function is re-entered for a node that is still being evaluated
       further up the call chain, `default` is returned for that inner call
       (or `default(node)` if `default` is callable).

       A result that relied on such a default for a node further up is only
       provisional: it is reused while that node is still being evaluated and
       then dropped, so it is computed again once the node's own value is
       known. Only results that do not lean on an unfinished node are stored.
       This is still a single evaluation pass per cycle, not an iteration to a
       least fixed point: the value of the node where a cycle is entered is
       right only when substituting `default` for its re-entry does not change
       the outcome."""
    def decorator(step):
        active = {}        # id(node) -> depth of its frame
        lowlinks = []      # per frame, the shallowest unfinished frame it relied on
        provisional = {}   # id(node) -> (node, value, lowlink)
        pending = []       # per frame, provisional entries that expire with it

        def relied_on(depth):
            if depth < lowlinks[-1]:
                lowlinks[-1] = depth

        @functools.wraps(step)
        def wrapper(language):
            cache = language._cache
            try:
                return cache[wrapper]
            except KeyError:
                pass
            key = id(language)
            if key in active:
                relied_on(active[key])
                return default(language) if callable(default) else default
            if key in provisional:
                _, value, lowlink = provisional[key]
                relied_on(lowlink)
                return value
            depth = len(lowlinks)
            active[key] = depth
            lowlinks.append(depth)
            pending.append([])
            try:
                value = step(language)
            finally:
                del active[key]
                lowlink = lowlinks.pop()
                for stale in pending.pop():
                    del provisional[stale]
            if lowlink < depth:
                provisional[key] = (language, value, lowlink)
                pending[lowlink].append(key)
                relied_on(lowlink)
                return value
            cache[wrapper] = value
            return value
        return wrapper
    return decorator


def memo(node_arg=0):
    """Plain memoization keyed by the node at position `node_arg` and the
       remaining (hashable) arguments. Meant for functions that are never
       re-entered with the same key; a re-entry is reported instead of
       recursing forever."""
    def decorator(fn):
        in_progress = set()

        @functools.wraps(fn)
        def wrapper(*args):
            language = args[node_arg]
            key = (wrapper, args[:node_arg] + args[node_arg + 1:])
            cache = language._cache
            try:
                return cache[key]
            except KeyError:
                pass
            token = (id(language),) + key[1]
            if token in in_progress:
                raise InternalInvariantViolation(f"{fn.__name__} re-entered for the same arguments")
            in_progress.add(token)
            try:
                value = fn(*args)
            finally:
                in_progress.discard(token)
            cache[key] = value
            return value
        return wrapper
    return decorator
