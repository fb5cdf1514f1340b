""" Provides decorators for classes that dispatch on registered keys.

The forecasting engine selects behaviour by string keys found in plan
documents (e.g. a stream's `frequency` or a decision operation's kind).
Classes which do this subclass `MethodRegister` and mark the methods
that handle each key with `registered_method_named`.
"""

from functools import partial

_REGISTERED_METHOD_ATTR = '_registered_method'
_REGISTERED_METHOD_KEY = '_registered_method_key'

def registered_method_named(key):
    """ A decorator for registered methods with document-facing keys. """
    return partial(registered_method, key=key)

def registered_method(func, key=None):
    """ A decorator for registered methods. """
    setattr(func, _REGISTERED_METHOD_ATTR, True)
    if key is None:
        key = func.__name__
    setattr(func, _REGISTERED_METHOD_KEY, key)
    return func

class MethodRegister:
    """ A class with registered methods.

    Subclasses provide one method per key they understand. Keys usually
    come straight from JSON documents, so callers are expected to check
    `is_registered` before dispatching on a key they did not produce.

    Example:
        ```
        class Example(MethodRegister):

            @registered_method_named('weekly')
            def _weekly(self, value):
                return value * 52

        example = Example()
        example.is_registered('weekly')  # True
        example.call_registered_method('weekly', 2)  # 104
        ```
    """

    def __init_subclass__(cls, **kwargs):
        """ Registers methods decorated by `registered_method`[`_named`]. """
        super().__init_subclass__(**kwargs)
        # Each subclass gets its own register, seeded with whatever its
        # bases registered, so sibling classes don't share keys:
        registered = {}
        # Walk bases from most to least general, so that keys registered
        # nearer to `cls` win:
        for base in reversed(cls.__mro__[1:]):
            registered.update(getattr(base, 'registered_methods', {}))
        # Find the attributes decorated by `registered_method*` (`dir`
        # includes inherited ones):
        for name in dir(cls):
            attr = getattr(cls, name)
            if callable(attr) and getattr(attr, _REGISTERED_METHOD_ATTR, False):
                # Use the custom key if there is one, else the name:
                key = getattr(attr, _REGISTERED_METHOD_KEY, name)
                registered[key] = attr
        cls.registered_methods = registered

    def is_registered(self, key):
        """ Returns True if `key` names a registered method. """
        try:
            return key in self.registered_methods
        except TypeError:
            # Unhashable keys (e.g. a list read from JSON) can't be
            # registered.
            return False

    def call_registered_method(self, method, *args, **kwargs):
        """ Calls `method` decorated by `registered_method`[`_named`].

        `method` may be a key or a reference to the decorated function.

        Raises:
            KeyError: `method` is not a registered method or a key for one.
        """
        # If `method` is a key, use the method that's registered to it:
        if self.is_registered(method):
            method = self.registered_methods[method]
        # If `method` was decorated, look it up by its key, so that a
        # subclass override is called instead:
        elif hasattr(method, _REGISTERED_METHOD_KEY):
            key = getattr(method, _REGISTERED_METHOD_KEY)
            method = self.registered_methods[key]
        else:
            name = getattr(method, '__name__', str(method))
            raise KeyError(
                '"' + name + '" is not a registered method or a key for one.')

        # Registered methods are unbound, so pass `self` explicitly:
        return method(self, *args, **kwargs)
