class OrderedMapError(Exception):
    '''
    Base class for exceptions raised by :class:`~ordmap.map.OrderedMap`.
    '''
    def __init__(self, value):
        super(OrderedMapError, self).__init__(value)
        self.value = value

    def __str__(self):
        return str(self.value)


class InvalidArgumentType(OrderedMapError, TypeError):
    '''
    Raised when a count is not a number, or when a search specifier is
    neither a property name nor a function.
    '''


class InvalidArgumentRange(OrderedMapError, ValueError):
    '''
    Raised when a count is a number but not an integer greater than 0.
    '''

    _default_message = 'The count must be an integer greater than 0.'

    def __init__(self, message=None):
        super(InvalidArgumentRange, self).__init__(message or
                                                   self._default_message)


class MissingRequiredValue(OrderedMapError, ValueError):
    '''
    Raised when a property search is attempted without the value to
    compare against.
    '''

    _default_message = 'Value must be specified.'

    def __init__(self, message=None):
        super(MissingRequiredValue, self).__init__(message or
                                                   self._default_message)
