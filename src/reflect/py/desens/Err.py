#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class ReflectErr(Exception, Obj):
    """Base error for every reflective failure.

    Carries a human readable message plus the underlying host fault
    (``cause``) that triggered it.
    """

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def to_str(self):
        name = type(self).__name__
        if self._msg:
            return f"{name}: {self._msg}"
        return name

    def trace_to_str(self):
        """Return stack trace as string, followed by the cause chain"""
        import traceback

        s = self.to_str()

        tb = getattr(self, '__traceback__', None)
        if tb:
            s += "\n" + "".join(traceback.format_tb(tb))

        if self._cause is not None:
            if hasattr(self._cause, 'trace_to_str'):
                s += "\n  Caused by: " + self._cause.trace_to_str()
            else:
                s += f"\n  Caused by: {type(self._cause).__name__}: {self._cause}"

        return s

    def __str__(self):
        return self.to_str()


class AccessFailure(ReflectErr):
    """Field or executable exists but could not be read, written or made accessible"""
    pass


class ResolutionFailure(ReflectErr):
    """Named method could not be located with the requested signature"""
    pass


class InvocationFailure(ReflectErr):
    """Constructor or method invocation itself failed"""
    pass


class AllocationFailure(ReflectErr):
    """Array creation received an invalid length or element type"""
    pass


class NullErr(ReflectErr):
    """Null error - raised when a required value is None"""
    pass
