from collections.abc import Mapping
from numbers import Integral, Number

from .error import InvalidArgumentRange, InvalidArgumentType


class _Missing:
    '''
    Marker for an argument that was not passed at all, so that ``None``
    stays usable as an ordinary value.
    '''
    __slots__ = ()

    def __repr__(self):
        return '<missing>'

    def __bool__(self):
        return False


MISSING = _Missing()


def validate_count(count):
    '''
    Checks a positional ``count`` argument and returns it as an ``int``.

    :param count: number of items requested
    :raises InvalidArgumentType: if ``count`` is not a number
    :raises InvalidArgumentRange: if ``count`` is not an integer
        greater than 0
    :rtype: int
    '''
    # bool is an Integral subclass but never a count
    if isinstance(count, bool) or not isinstance(count, Number):
        raise InvalidArgumentType('The count must be a number.')

    if not isinstance(count, Integral):
        try:
            integral = count == int(count)
        except (TypeError, ValueError, OverflowError):
            integral = False
        if not integral:
            raise InvalidArgumentRange()

    count = int(count)
    if count < 1:
        raise InvalidArgumentRange()
    return count


def get_property(item, name, default=None):
    '''
    Reads ``name`` from ``item``: by key for mappings, by attribute for
    everything else (class attributes and properties included).
    '''
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def has_own_property(item, name):
    '''
    Whether ``item`` carries ``name`` itself rather than inheriting it
    from its class: a key of a mapping, or an instance attribute stored
    in ``__dict__`` or in a populated slot.
    '''
    if isinstance(item, Mapping):
        return name in item

    try:
        if name in vars(item):
            return True
    except TypeError:
        pass

    for klass in type(item).__mro__:
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots:
            return hasattr(item, name)
    return False


def strict_equals(first, second):
    '''
    Identity, or equality between values of exactly the same type.
    ``1``, ``1.0`` and ``True`` never compare equal to each other here.
    '''
    if first is second:
        return True
    return type(first) is type(second) and first == second


def default_compare(first, second):
    '''
    Orders two values by the code points of their string forms.

    :rtype: int (-1, 0 or 1)
    '''
    first, second = str(first), str(second)
    return (first > second) - (first < second)
