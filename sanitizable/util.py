#
from typing import Callable


class ClassPropertyDescriptor:
    """
    Read-only property on the class, `fget` receives the class
    """

    def __init__(self, fget: classmethod) -> None:
        self.fget = fget

    def __get__(self, obj, klass=None):
        if klass is None:
            klass = type(obj)
        return self.fget.__get__(obj, klass)()

    def __set__(self, obj, value):
        raise AttributeError("can't set attribute")


def classproperty(func: Callable) -> ClassPropertyDescriptor:
    """
    classproperty, subclasses may override it with a plain class attribute
    """
    if not isinstance(func, (classmethod, staticmethod)):
        func = classmethod(func)

    return ClassPropertyDescriptor(func)
