import asyncio
import inspect
import logging
import random as _random
from collections.abc import MutableMapping
from functools import cmp_to_key
from itertools import islice

from .deletable import is_deletable
from .error import InvalidArgumentType, MissingRequiredValue
from .util import (MISSING, default_compare, get_property, has_own_property,
                   strict_equals, validate_count)


logger = logging.getLogger('ordmap.map')

_BAD_SEARCH = 'First argument must be a property string or a function.'

# strong references to fire-and-forget delete tasks until they finish
_pending_deletes = set()


class OrderedMap(MutableMapping):
    '''
    A mapping that remembers insertion order and adds positional access,
    sampling, search and transformation helpers on top of the usual
    :class:`~collections.abc.MutableMapping` behaviour.

    Entries live in a private ``dict``. Two lists, one of values and one
    of keys, are built on demand by :meth:`values` and :meth:`keys` and
    thrown away by every mutation::

        users = OrderedMap([(1, alice), (2, bob)])
        users.set(3, carol).set(4, dave)
        users.first()            # alice
        users.last(2)            # [carol, dave]
        users.find('name', 'Bob')

    Unlike ``dict.keys()``/``dict.values()`` the cached lists are plain
    lists shared between calls: treat them as read-only.
    '''

    def __init__(self, iterable=None, rng=None):
        '''
        :param iterable: a mapping or an iterable of ``(key, value)``
            pairs. A key given more than once keeps the position of its
            first occurrence and the value of its last.
        :param rng: random source for :meth:`random` and
            :meth:`random_key`, anything with a ``randrange(n)`` method.
            Defaults to the :mod:`random` module.
        '''
        self._entries = dict(iterable) if iterable is not None else {}
        self._value_cache = None
        self._key_cache = None
        self._rng = rng if rng is not None else _random

    def _new(self, iterable=None):
        return type(self)(iterable, rng=self._rng)

    def _invalidate(self):
        self._value_cache = None
        self._key_cache = None

    # Mapping protocol

    def __getitem__(self, key):
        return self._entries[key]

    def __setitem__(self, key, value):
        self._invalidate()
        self._entries[key] = value

    def __delitem__(self, key):
        self._invalidate()
        del self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__,
                                 list(self._entries.items()))

    def __copy__(self):
        return self.clone()

    def get(self, key, default=None):
        return self._entries.get(key, default)

    def popitem(self):
        '''
        Removes and returns the last ``(key, value)`` pair, as
        ``dict.popitem`` does. Raises :exc:`KeyError` when empty.
        '''
        self._invalidate()
        return self._entries.popitem()

    def clear(self):
        self._invalidate()
        self._entries.clear()

    def copy(self):
        return self.clone()

    def has(self, key):
        return key in self._entries

    @property
    def size(self):
        '''
        Number of entries.

        :rtype: int
        '''
        return len(self._entries)

    # Mutators

    def set(self, key, value):
        '''
        Adds or updates an entry. An existing key keeps its position.

        :rtype: :class:`OrderedMap` (``self``, for chaining)
        '''
        self[key] = value
        return self

    def delete(self, key):
        '''
        Removes ``key`` if present.

        :rtype: bool
        '''
        self._invalidate()
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    # Cached views

    def values(self):
        '''
        Ordered list of the values, cached until the next mutation. The
        list is also rebuilt if its length no longer matches the map.

        :rtype: list
        '''
        if (self._value_cache is None or
                len(self._value_cache) != len(self._entries)):
            logger.debug('Rebuilding value cache (%d entries)',
                         len(self._entries))
            self._value_cache = list(self._entries.values())
        return self._value_cache

    def keys(self):
        '''
        Ordered list of the keys, cached the same way as :meth:`values`.

        :rtype: list
        '''
        if (self._key_cache is None or
                len(self._key_cache) != len(self._entries)):
            logger.debug('Rebuilding key cache (%d entries)',
                         len(self._entries))
            self._key_cache = list(self._entries)
        return self._key_cache

    array = values
    value_array = values
    key_array = keys

    # Positional access

    def first(self, count=None):
        '''
        Obtains the first value, or a list of the first ``count`` values.

        :param count: number of values to take from the beginning
        :type count: int
        :returns: a value (``None`` if empty), or a list if ``count`` is
            given
        '''
        if count is None:
            return next(iter(self._entries.values()), None)
        count = validate_count(count)
        return list(islice(self._entries.values(), count))

    def first_key(self, count=None):
        '''
        Same as :meth:`first` but for keys.
        '''
        if count is None:
            return next(iter(self._entries), None)
        count = validate_count(count)
        return list(islice(self._entries, count))

    def last(self, count=None):
        '''
        Obtains the last value, or a list of the last ``count`` values in
        their original order. Reads through :meth:`values`.
        '''
        return self._tail(self.values(), count)

    def last_key(self, count=None):
        '''
        Same as :meth:`last` but for keys. Reads through :meth:`keys`.
        '''
        return self._tail(self.keys(), count)

    def random(self, count=None):
        '''
        Obtains a random value, or ``count`` distinct values in the order
        they were drawn. Without ``count`` an empty map gives ``None``;
        with ``count`` it gives an empty list.
        '''
        return self._sample(self.values(), count)

    def random_key(self, count=None):
        '''
        Same as :meth:`random` but for keys.
        '''
        return self._sample(self.keys(), count)

    @staticmethod
    def _tail(items, count):
        if count is None:
            return items[-1] if items else None
        count = validate_count(count)
        return items[-count:]

    def _sample(self, items, count):
        if count is None:
            if not items:
                return None
            return items[self._rng.randrange(len(items))]

        count = min(validate_count(count), len(items))
        pool = list(items)
        drawn = []
        for _ in range(count):
            drawn.append(pool.pop(self._rng.randrange(len(pool))))
        return drawn

    # Search

    def find_all(self, prop, value=MISSING):
        '''
        Every value whose ``prop`` is strictly equal to ``value``.

        :param prop: attribute name, or key for mapping values
        :type prop: str
        :param value: the expected value, ``None`` included
        :rtype: list

        Example::

            users.find_all('role', 'admin')
        '''
        if not isinstance(prop, str):
            raise InvalidArgumentType('Key must be a string.')
        if value is MISSING:
            raise MissingRequiredValue()

        return [item for item in self._entries.values()
                if strict_equals(get_property(item, prop, MISSING), value)]

    def find(self, search, value=MISSING):
        '''
        First value whose ``search`` property is strictly equal to
        ``value``, or first value for which ``search(value, key, map)``
        is truthy. Returns ``None`` when nothing matches.

        Class attributes and properties count as properties here; see
        :meth:`find_key` for the stricter variant.

        :param search: property name or predicate
        :type search: str or callable
        :param value: expected value, required with a property name
        '''
        if isinstance(search, str):
            if value is MISSING:
                raise MissingRequiredValue()
            for item in self._entries.values():
                if strict_equals(get_property(item, search, MISSING), value):
                    return item
            return None
        elif callable(search):
            for key, item in self._entries.items():
                if search(item, key, self):
                    return item
            return None
        else:
            raise InvalidArgumentType(_BAD_SEARCH)

    def find_key(self, search, value=MISSING):
        '''
        Key of the first match, as in :meth:`find`. With a property name
        only values that hold the property themselves (a mapping key or
        an instance attribute) are compared.

        :rtype: a key, or ``None``
        '''
        if isinstance(search, str):
            if value is MISSING:
                raise MissingRequiredValue()
            for key, item in self._entries.items():
                if not has_own_property(item, search):
                    continue
                if strict_equals(get_property(item, search, MISSING), value):
                    return key
            return None
        elif callable(search):
            for key, item in self._entries.items():
                if search(item, key, self):
                    return key
            return None
        else:
            raise InvalidArgumentType(_BAD_SEARCH)

    def exists(self, prop, value=MISSING):
        '''
        Whether some value has ``prop`` strictly equal to ``value``.
        Use ``key in map`` to test for a key.

        :rtype: bool
        '''
        if not isinstance(prop, str):
            raise InvalidArgumentType('Key must be a string.')
        return self.find(prop, value) is not None

    # Bulk transforms

    def filter(self, predicate):
        '''
        New map holding the entries for which
        ``predicate(value, key, map)`` is truthy.

        :rtype: :class:`OrderedMap`
        '''
        return self._new((key, item) for key, item in self._entries.items()
                         if predicate(item, key, self))

    def filter_to_list(self, predicate):
        '''
        Like :meth:`filter` but returns the matching values as a list.
        '''
        return [item for key, item in self._entries.items()
                if predicate(item, key, self)]

    filter_array = filter_to_list

    def map(self, mapper):
        '''
        List of ``mapper(value, key, map)`` for every entry, in order.
        '''
        return [mapper(item, key, self)
                for key, item in self._entries.items()]

    def some(self, predicate):
        for key, item in self._entries.items():
            if predicate(item, key, self):
                return True
        return False

    def every(self, predicate):
        for key, item in self._entries.items():
            if not predicate(item, key, self):
                return False
        return True

    def reduce(self, reducer, initial=MISSING):
        '''
        Left fold over the entries. ``reducer`` is called as
        ``reducer(accumulator, value, key, map)``.

        Without ``initial`` the first value seeds the accumulator and
        folding starts at the second entry; an empty map then gives
        ``None``.
        '''
        entries = iter(self._entries.items())
        if initial is MISSING:
            try:
                _, accumulator = next(entries)
            except StopIteration:
                return None
        else:
            accumulator = initial

        for key, item in entries:
            accumulator = reducer(accumulator, item, key, self)
        return accumulator

    # Structural operations

    def clone(self):
        '''
        Shallow copy with its own storage and caches.

        :rtype: :class:`OrderedMap`
        '''
        return self._new(self._entries)

    def concat(self, *others):
        '''
        Combines this map with ``others`` into a new map. On a key
        collision the later source wins. None of the sources change.

        :param others: mappings to merge, in order
        :rtype: :class:`OrderedMap`
        '''
        merged = self.clone()
        for other in others:
            for key, item in other.items():
                merged.set(key, item)
        return merged

    def delete_all(self):
        '''
        Calls ``delete()`` on every value that has a zero-argument
        ``delete`` method and returns those values, in order.

        The results of ``delete()`` are not inspected. Awaitables are
        handed to the running event loop and not waited for; use
        :meth:`delete_all_async` to wait for them.

        :rtype: list
        '''
        deleted = []
        for item in self.values():
            if not is_deletable(item):
                continue
            result = item.delete()
            if inspect.isawaitable(result):
                self._schedule(result)
            deleted.append(item)

        logger.debug('Called delete() on %d of %d values',
                     len(deleted), len(self._entries))
        return deleted

    async def delete_all_async(self):
        '''
        Like :meth:`delete_all`, but waits for every awaitable returned
        by ``delete()``. The first exception raised by a delegate is
        propagated.

        :rtype: list
        '''
        deleted = []
        pending = []
        for item in self.values():
            if not is_deletable(item):
                continue
            result = item.delete()
            if inspect.isawaitable(result):
                pending.append(result)
            deleted.append(item)

        if pending:
            logger.debug('Waiting for %d pending deletes', len(pending))
            await asyncio.gather(*pending)
        return deleted

    @staticmethod
    def _schedule(awaitable):
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning('No running event loop, dropping delete %r',
                           awaitable)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = asyncio.ensure_future(awaitable)
        _pending_deletes.add(task)
        task.add_done_callback(_pending_deletes.discard)

    def equals(self, other):
        '''
        Whether ``other`` holds exactly the same key/value pairings, with
        values compared by identity or same-type equality. A key missing
        from ``other`` only counts as a mismatch when its value here is
        not ``None``.

        :param other: mapping to compare with
        :rtype: bool
        '''
        if other is None:
            return False
        if other is self:
            return True
        if len(self) != len(other):
            return False

        for key, item in self._entries.items():
            if key not in other:
                if item is not None:
                    return False
                continue
            if not strict_equals(other[key], item):
                return False
        return True

    def sort(self, compare=None):
        '''
        Returns a new map with the entries reordered; this map is left
        untouched.

        :param compare: ``compare(value_a, value_b, key_a, key_b)``
            returning a negative, zero or positive number. By default
            values are ordered by the code points of their ``str()``.
        :rtype: :class:`OrderedMap`
        '''
        if compare is None:
            def by_entry(entry, other):
                return default_compare(entry[1], other[1])
        else:
            def by_entry(entry, other):
                return compare(entry[1], other[1], entry[0], other[0])

        return self._new(sorted(self._entries.items(),
                                key=cmp_to_key(by_entry)))
