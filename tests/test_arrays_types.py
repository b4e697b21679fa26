"""
Tests for the array factory and type descriptors.
"""

import collections

import pytest

from desens import AllocationFailure, Array, NullErr, ReflectUtil, Type


class Animal:
    kind: str


class Dog(Animal):
    breed: str


class Outer:
    class Inner:
        pass


class Left:
    left: int


class Right:
    right: int


class Both(Left, Right):
    both: int


class Top:
    top: int


class SideA(Top):
    a: int


class SideB(Top):
    b: int


class Diamond(SideA, SideB):
    pass


# =============================================================================
# ARRAY FACTORY
# =============================================================================

class TestNewArray:
    """Test array allocation."""

    @pytest.mark.parametrize("element_type, default", [
        (int, 0),
        (float, 0.0),
        (bool, False),
        (complex, 0j),
        (str, None),
        (Dog, None),
    ])
    def test_default_filled(self, element_type, default):
        arr = ReflectUtil.new_array(element_type, 5)
        assert isinstance(arr, Array)
        assert arr.size() == 5
        assert len(arr) == 5
        assert arr.of() is element_type
        assert arr.to_list() == [default] * 5

    def test_zero_length(self):
        assert ReflectUtil.new_array(str, 0).size() == 0

    def test_type_descriptor_element(self):
        assert ReflectUtil.new_array(Type.of(int), 2).of() is int

    def test_negative_length(self):
        with pytest.raises(AllocationFailure) as exc_info:
            ReflectUtil.new_array(int, -1)
        assert isinstance(exc_info.value.cause(), ValueError)

    @pytest.mark.parametrize("length", ["5", 2.0, True, None])
    def test_non_int_length(self, length):
        with pytest.raises(AllocationFailure):
            ReflectUtil.new_array(int, length)

    @pytest.mark.parametrize("element_type", [42, "int", None, type(None)])
    def test_unsupported_element_type(self, element_type):
        with pytest.raises(AllocationFailure) as exc_info:
            ReflectUtil.new_array(element_type, 1)
        assert isinstance(exc_info.value.cause(), TypeError)

    def test_store_checks_element_type(self):
        arr = ReflectUtil.new_array(int, 3)
        arr[1] = 7
        assert arr.get(1) == 7
        with pytest.raises(TypeError):
            arr[0] = "x"
        with pytest.raises(TypeError):
            arr.set(0, None)

    def test_reference_array_accepts_none_and_subtypes(self):
        arr = ReflectUtil.new_array(Animal, 2)
        arr[0] = Dog()
        arr[1] = None
        assert isinstance(arr[0], Dog)
        assert list(arr)[1] is None

    def test_index_out_of_range(self):
        arr = ReflectUtil.new_array(int, 1)
        with pytest.raises(IndexError):
            arr.get(1)

    def test_negative_index_rejected(self):
        arr = ReflectUtil.new_array(int, 3)
        with pytest.raises(IndexError):
            arr.set(-1, 9)
        with pytest.raises(IndexError):
            arr[-1]
        assert arr.to_list() == [0, 0, 0]

    @pytest.mark.parametrize("index", [1.7, "1", True, None])
    def test_non_int_index_rejected(self, index):
        arr = ReflectUtil.new_array(int, 3)
        with pytest.raises(TypeError):
            arr.get(index)
        with pytest.raises(TypeError):
            arr.set(index, 9)
        assert arr.to_list() == [0, 0, 0]

    def test_equality(self):
        assert ReflectUtil.new_array(int, 3) == ReflectUtil.new_array(int, 3)
        assert ReflectUtil.new_array(int, 3) != ReflectUtil.new_array(float, 3)
        assert str(ReflectUtil.new_array(int, 3)) == "int[3]"


# =============================================================================
# TYPE EXTRACTOR
# =============================================================================

class TestRuntimeTypeOf:
    """Test recovering exact runtime types."""

    def test_exact_subtype(self):
        value: Animal = Dog()
        t = ReflectUtil.runtime_type_of(value)
        assert t.py_class() is Dog
        assert t == Type.of(Dog)
        assert t != Type.of(Animal)

    def test_builtin_values(self):
        assert ReflectUtil.runtime_type_of(True).py_class() is bool
        assert ReflectUtil.runtime_type_of("s").py_class() is str

    def test_none_fails(self):
        with pytest.raises(NullErr):
            ReflectUtil.runtime_type_of(None)


# =============================================================================
# TYPE DESCRIPTOR
# =============================================================================

class TestType:
    """Test type descriptor queries."""

    def test_names(self):
        t = Type.of(Dog)
        assert t.name() == "Dog"
        assert t.qname() == f"{__name__}::Dog"
        assert str(t) == t.qname()

    def test_base_chain(self):
        assert Type.of(Dog).base() == Type.of(Animal)
        assert Type.of(Animal).base() == Type.of(object)
        assert Type.of(object).base() is None
        assert Type.of(object).is_root()

    def test_inheritance(self):
        assert Type.of(Dog).inheritance() == [Type.of(Dog), Type.of(Animal), Type.of(object)]

    def test_fits(self):
        assert Type.of(Dog).fits(Animal)
        assert not Type.of(Animal).fits(Type.of(Dog))

    def test_not_a_class(self):
        with pytest.raises(TypeError):
            Type.of(Dog())

    def test_no_caching(self):
        assert Type.of(Dog) is not Type.of(Dog)
        assert hash(Type.of(Dog)) == hash(Type.of(Dog))

    def test_find(self):
        assert Type.find("collections::OrderedDict").py_class() is collections.OrderedDict
        assert Type.find(f"{__name__}::Outer.Inner").py_class() is Outer.Inner

    @pytest.mark.parametrize("qname", ["no_such_module_xyz::Thing", "collections::Nope", "collections", "collections::namedtuple"])
    def test_find_unknown(self, qname):
        assert Type.find(qname, False) is None
        with pytest.raises(LookupError):
            Type.find(qname)

    def test_multiple_inheritance_fields(self):
        names = [f.name() for f in ReflectUtil.list_all_fields(Both)]
        assert names == ["both", "left", "right"]

    def test_diamond_ancestor_enumerated_once(self):
        names = [f.name() for f in ReflectUtil.list_all_fields(Diamond)]
        assert names == ["a", "b", "top"]
