__version__ = '0.1.0'

from .map import OrderedMap
from .deletable import Deletable
from .error import (OrderedMapError, InvalidArgumentType,
                    InvalidArgumentRange, MissingRequiredValue)


__all__ = ('OrderedMap', 'Deletable', 'OrderedMapError',
           'InvalidArgumentType', 'InvalidArgumentRange',
           'MissingRequiredValue')
