import unittest

from classwire import Container


LOGGER = "classwire._container"


class TestDependencyPrecedence(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_create_prefers_explicit_dependencies_over_configured(self):
        class Impl:
            def __init__(self, arg):
                self.arg = arg

        self.cont.configure(Impl, 1)
        assert self.cont.create(Impl, 2).arg == 2
        assert self.cont.create(Impl).arg == 1

    def test_create_prefers_explicit_dependencies_over_declared(self):
        class Impl:
            dependencies = ("foo",)

            def __init__(self, arg):
                self.arg = arg

        assert self.cont.create(Impl, "bar").arg == "bar"

    def test_uses_declared_dependencies_when_not_configured(self):
        class Impl:
            dependencies = ["foo"]

            def __init__(self, arg):
                self.arg = arg

        assert self.cont.create(Impl).arg == "foo"
        assert self.cont.get(Impl).arg == "foo"

    def test_prefers_configured_dependencies_over_declared(self):
        class Impl:
            dependencies = ["foo"]

            def __init__(self, arg):
                self.arg = arg

        self.cont.configure(Impl, "bar")
        assert self.cont.create(Impl).arg == "bar"
        assert self.cont.get(Impl).arg == "bar"

    def test_configured_empty_dependencies_fall_back_to_declared(self):
        class Impl:
            dependencies = ["foo"]

            def __init__(self, arg):
                self.arg = arg

        self.cont.configure(Impl)
        assert self.cont.create(Impl).arg == "foo"

    def test_get_ignores_explicit_dependencies_of_earlier_create(self):
        class Impl:
            def __init__(self, arg):
                self.arg = arg

        self.cont.configure(Impl, "configured")
        self.cont.create(Impl, "explicit")
        assert self.cont.get(Impl).arg == "configured"

    def test_warns_when_no_dependencies_found(self):
        class Interface: ...

        class Impl(Interface): ...

        self.cont.set_implementation(Interface, Impl)
        with self.assertLogs(LOGGER, level="WARNING") as logs:
            obj = self.cont.create(Interface)

        assert isinstance(obj, Impl)
        assert len(logs.records) == 1
        message = logs.records[0].getMessage()
        assert "Interface" in message
        assert "Impl" in message
        assert "'dependencies'" in message

    def test_get_warning_names_requested_interface(self):
        class Printer: ...

        class LaserPrinter(Printer): ...

        self.cont.set_implementation(Printer, LaserPrinter)
        with self.assertLogs(LOGGER, level="WARNING") as logs:
            obj = self.cont.get(Printer)

        assert isinstance(obj, LaserPrinter)
        message = logs.records[0].getMessage()
        assert "<locals>.Printer (implemented by" in message
        assert "LaserPrinter" in message

    def test_configured_empty_dependencies_without_declared_warns(self):
        class Impl: ...

        self.cont.configure(Impl)
        with self.assertLogs(LOGGER, level="WARNING"):
            self.cont.get(Impl)

    def test_declared_empty_dependencies_do_not_warn(self):
        class Impl:
            dependencies = ()

        with self.assertNoLogs(LOGGER, level="WARNING"):
            self.cont.get(Impl)

    def test_explicit_dependencies_do_not_warn(self):
        class Impl:
            def __init__(self, arg):
                self.arg = arg

        with self.assertNoLogs(LOGGER, level="WARNING"):
            self.cont.create(Impl, 1)
