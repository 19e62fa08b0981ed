"""
Test 3: Call-by-name invocation (_internal/invoke.py)
"""

import pytest

from passer._internal.invoke import bind_arguments, invoke
from passer.faults import ParameterBindingFault


class TestBindArguments:

    def test_binds_by_name_in_any_order(self):
        def handler(a, b):
            return a, b

        assert invoke(handler, {"b": 2, "a": 1}) == (1, 2)

    def test_defaults_fill_missing(self):
        def handler(a, b=10):
            return a, b

        assert invoke(handler, {"a": 1}) == (1, 10)

    def test_missing_required(self):
        def handler(a, b):
            return a, b

        with pytest.raises(ParameterBindingFault) as exc_info:
            invoke(handler, {"a": 1})
        assert exc_info.value.metadata["parameter"] == "b"
        assert "handler" in exc_info.value.metadata["handler"]

    def test_undeclared_keys_are_dropped(self):
        def handler(a):
            return a

        args, kwargs = bind_arguments(handler, {"a": 1, "extra": 2})
        assert args == []
        assert kwargs == {"a": 1}

    def test_var_keyword_receives_everything_else(self):
        def handler(a, **rest):
            return a, rest

        assert invoke(handler, {"a": 1, "b": 2, "c": 3}) == (1, {"b": 2, "c": 3})

    def test_positional_only(self):
        def handler(a, b=2, /, c=3):
            return a, b, c

        args, kwargs = bind_arguments(handler, {"a": 1, "c": 30})
        assert args == [1, 2]
        assert kwargs == {"c": 30}
        assert invoke(handler, {"a": 1, "b": 20}) == (1, 20, 3)

    def test_var_positional_is_ignored(self):
        def handler(a, *args):
            return a, args

        assert invoke(handler, {"a": 1}) == (1, ())

    def test_bound_method(self):
        class Greeter:
            def greet(self, name):
                return f"hi {name}"

        assert invoke(Greeter().greet, {"name": "Ada"}) == "hi Ada"

    def test_callable_object(self):
        class Handler:
            def __call__(self, id):
                return id * 2

        assert invoke(Handler(), {"id": 21}) == 42
