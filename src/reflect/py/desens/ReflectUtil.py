#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import logging
import reprlib

from .Array import Array
from .Err import AccessFailure, AllocationFailure, InvocationFailure, NullErr, ResolutionFailure
from .Type import Type


_log = logging.getLogger("desens.reflect")


class ReflectUtil:
    """Reflective access to fields, constructors and methods of arbitrary objects.

    Every entry point resolves its descriptors from the live class and
    grants access on them each time it runs.

    NOTE: do not cache the Field/Method descriptors handed out here and
    share them between threads or calls. The accessibility flag lives on
    the descriptor, so a shared descriptor is shared mutable state.

    Host faults (TypeError, AttributeError, PermissionError, LookupError,
    or whatever an invoked body raises) are converted into exactly one
    ReflectErr subclass with the original fault as its cause.
    """

    #################################################################
    # Fields
    #################################################################

    @staticmethod
    def list_all_fields(target_class):
        """Get the fields declared by a class and all of its ancestors.

        Fields are ordered leaf to root along the method resolution order;
        ``object`` contributes nothing. Same-named fields declared on
        different levels are all kept.

        Args:
            target_class: Class or Type to inspect; None yields []

        Raises:
            TypeError: target_class is neither None, a class nor a Type

        Returns:
            List of Field
        """
        if target_class is None:
            return []
        fields = []
        for t in Type.of(target_class).inheritance():
            if t.is_root():
                break
            fields.extend(t.fields())
        return fields

    @staticmethod
    def get_field_value(target, field):
        """Read a field of target, regardless of its visibility."""
        try:
            field.set_accessible(True)
            return field.get(target)
        except Exception as err:
            raise ReflectUtil._err(
                AccessFailure,
                f"Failed to get field {field.qname()} of {ReflectUtil._type_name(target)}",
                err) from err

    @staticmethod
    def set_field_value(target, field, new_value):
        """Overwrite a field of target in place, regardless of its visibility."""
        try:
            field.set_accessible(True)
            field.set_(target, new_value)
        except Exception as err:
            raise ReflectUtil._err(
                AccessFailure,
                f"Failed to set field {field.qname()} of {ReflectUtil._type_name(target)}",
                err) from err

    #################################################################
    # Constructors and methods
    #################################################################

    @staticmethod
    def get_declared_constructor(cls, *parameter_types):
        """Get the constructor declared directly on cls with exactly these parameter types.

        Returns None (not an error) when there is no such constructor, so
        callers can probe for optional constructors. Ancestors are never
        searched.

        Raises:
            TypeError: cls is not a class or Type
            AccessFailure: the constructor may not be opened up
        """
        t = Type.of(cls)
        ctor = t.ctor(parameter_types, checked=False)
        if ctor is None:
            return None
        try:
            ctor.set_accessible(True)
        except PermissionError as err:
            raise ReflectUtil._err(AccessFailure, f"Failed to open constructor {ctor}", err) from err
        return ctor

    @staticmethod
    def get_declared_method(cls, name, *parameter_types):
        """Get the method declared directly on cls with this name and exact parameter types.

        Raises:
            ResolutionFailure: no such method is declared on cls
            TypeError: cls is not a class or Type
        """
        t = Type.of(cls)
        try:
            return t.method(name, parameter_types, checked=True)
        except LookupError as err:
            sig = Type._sig_str(Type._normalize(parameter_types))
            raise ReflectUtil._err(
                ResolutionFailure,
                f"Failed to get method {name}{sig} of {t.qname()}",
                err) from err

    @staticmethod
    def new_instance(ctor, *args):
        """Invoke a constructor and return the new instance.

        Raises:
            InvocationFailure: bad arguments, access denied, or the
                constructor body raised (that exception is the cause)
        """
        try:
            ctor.set_accessible(True)
            return ctor.call_on(None, args)
        except Exception as err:
            raise ReflectUtil._err(
                InvocationFailure,
                f"Failed to instantiate {ctor} with {reprlib.repr(list(args))}",
                err) from err

    @staticmethod
    def invoke_method(target, method, *args, expected_type=None):
        """Invoke a method on target and return its result.

        Args:
            target: Receiver (ignored by static methods)
            method: Method descriptor
            args: Positional arguments
            expected_type: If given, a non-None result must be an instance of it

        Raises:
            InvocationFailure: bad arguments, access denied, the method
                body raised, or the result is not an expected_type
        """
        try:
            method.set_accessible(True)
            result = method.call_on(target, args)
        except Exception as err:
            raise ReflectUtil._err(
                InvocationFailure,
                f"Failed to invoke {method} on {reprlib.repr(target)} with {reprlib.repr(list(args))}",
                err) from err

        if expected_type is not None and result is not None:
            try:
                if not isinstance(result, expected_type):
                    expected = getattr(expected_type, "__qualname__", repr(expected_type))
                    raise TypeError(f"{type(result).__qualname__} is not {expected}")
            except Exception as err:
                raise ReflectUtil._err(
                    InvocationFailure,
                    f"Result of {method} on {reprlib.repr(target)} has unexpected type",
                    err) from err
        return result

    #################################################################
    # Arrays and types
    #################################################################

    @staticmethod
    def new_array(element_type, length):
        """Create an array of the given element type and length, default-filled.

        Raises:
            AllocationFailure: length is not a non-negative int, or the
                element type is not a class
        """
        if isinstance(element_type, Type):
            element_type = element_type.py_class()

        if not isinstance(element_type, type) or element_type is type(None):
            err = TypeError(f"Unsupported element type: {element_type!r}")
            raise ReflectUtil._err(AllocationFailure, f"Failed to create array of {element_type!r}", err) from err

        name = element_type.__qualname__
        if isinstance(length, bool) or not isinstance(length, int):
            err = TypeError(f"Array length must be int, not {type(length).__qualname__}")
            raise ReflectUtil._err(AllocationFailure, f"Failed to create array {name}[{length!r}]", err) from err
        if length < 0:
            err = ValueError(f"Negative array length: {length}")
            raise ReflectUtil._err(AllocationFailure, f"Failed to create array {name}[{length}]", err) from err

        return Array(element_type, length)

    @staticmethod
    def runtime_type_of(value):
        """Get the exact runtime type of a value (never a declared supertype).

        Raises:
            NullErr: value is None
        """
        if value is None:
            raise NullErr.make("Cannot get the runtime type of None")
        return Type.of(type(value))

    #################################################################
    # Support
    #################################################################

    @staticmethod
    def _type_name(obj):
        cls = type(obj)
        return f"{cls.__module__}::{cls.__qualname__}"

    @staticmethod
    def _err(err_type, msg, cause):
        _log.debug("%s: %s (caused by %s: %s)", err_type.__name__, msg, type(cause).__name__, cause)
        return err_type.make(msg, cause)
