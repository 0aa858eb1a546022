import inspect
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Deletable(Protocol):
    '''
    Anything exposing a ``delete()`` method, such as a datatype or an
    object handle that knows how to remove itself from a remote store.
    The result may be a plain value or an awaitable.
    '''

    def delete(self) -> Any:
        ...


def is_deletable(item):
    '''
    Whether ``item`` has a ``delete`` method that can be called with no
    arguments. Objects whose ``delete`` needs arguments (an
    :class:`~ordmap.map.OrderedMap` nested as a value, for one) are not
    deletable in this sense.

    :rtype: bool
    '''
    if not isinstance(item, Deletable):
        return False

    method = getattr(item, 'delete')
    if not callable(method):
        return False

    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        # builtins without introspectable signatures
        return True

    try:
        signature.bind()
    except TypeError:
        return False
    return True
