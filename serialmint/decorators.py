import time


class cached_property_with_ttl:
    """
    Cache the property value on the instance for `ttl` seconds.
    Also adds a `reset_cache_<name>` method to the owner class.

    >>> class A:
    ...     @cached_property_with_ttl(300)
    ...     def expensive(self):
    ...         print('CACHE MISS')
    ...         return 2
    ...
    >>> a = A()
    >>> a.expensive
    CACHE MISS
    2
    >>> a.expensive
    2
    >>> a.reset_cache_expensive()
    >>> a.expensive
    CACHE MISS
    2
    """

    def __init__(self, ttl):
        self._ttl = ttl
        self._func = None
        self._key = None

    def __call__(self, func):
        self._func = func
        self.__doc__ = func.__doc__
        return self

    def __set_name__(self, owner, name):
        # stored under a different key so it never shadows the descriptor
        self._key = f'_{name}_ttl'
        setattr(owner, f'reset_cache_{name}', lambda instance: self.clear_cache(instance))

    def clear_cache(self, instance):
        instance.__dict__.pop(self._key, None)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        now = time.time()
        cached = instance.__dict__.get(self._key)
        if cached is None or (now - cached[1]) > self._ttl:
            cached = (self._func(instance), now)
            instance.__dict__[self._key] = cached
        return cached[0]
