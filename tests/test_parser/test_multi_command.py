import pytest

from flagtree.exceptions import UsageError
from flagtree.parser import Command, MultiCommand


class Build(Command):
    def __init__(self):
        super().__init__()
        self.ran = False
        self.flag = None
        self.targets = []
        self.mk_value_flag("flag", "value", "A build flag.", dest="flag")
        self.expect_args("targets", dest="targets")

    def description(self):
        return "build targets"

    def run(self):
        self.ran = True


class Run(Command):
    def __init__(self):
        super().__init__()
        self.ran = False
        self.flag = None
        self.mk_value_flag("flag", "value", "A run flag.", dest="flag")

    def description(self):
        return "run the program"

    def run(self):
        self.ran = True


class App(MultiCommand):
    def __init__(self, commands=None):
        super().__init__(commands or {"build": Build, "run": Run})
        self.verbose = False
        self.mk_flag("verbose", "Print more.", dest="verbose", short_name="v")


def test_dispatch_to_selected_command():
    app = App()

    app.parse_cmdline(["run", "--flag", "v"])

    name, command = app.command
    assert name == "run"
    assert isinstance(command, Run)
    assert command.flag == "v"


def test_run_delegates_to_selected_command():
    app = App()
    app.parse_cmdline(["build", "x", "y"])

    app.run()

    assert app.selected().ran is True
    assert app.selected().targets == ["x", "y"]


def test_parent_flags_valid_on_both_sides():
    before = App()
    before.parse_cmdline(["-v", "build"])
    after = App()
    after.parse_cmdline(["build", "--verbose"])

    assert before.verbose is True
    assert after.verbose is True


def test_parent_flags_tried_before_sub_command_flags():
    class Noisy(Command):
        def __init__(self):
            super().__init__()
            self.verbose = False
            self.mk_flag("verbose", "", dest="verbose")

    app = App({"noisy": Noisy})
    app.parse_cmdline(["noisy", "--verbose"])

    assert app.verbose is True
    assert app.selected().verbose is False


def test_sub_command_flag_before_selection_is_rejected():
    with pytest.raises(UsageError, match="unrecognised flag '--flag'"):
        App().parse_cmdline(["--flag", "v", "run"])


def test_unknown_command():
    with pytest.raises(UsageError, match="'deploy' is not a recognised command"):
        App().parse_cmdline(["deploy"])


def test_command_selected_once():
    with pytest.raises(UsageError, match="unexpected argument 'build'"):
        App().parse_cmdline(["run", "build"])


def test_no_command_specified():
    app = App()
    app.parse_cmdline([])

    assert app.command is None
    assert app.selected() is app
    with pytest.raises(UsageError, match="no command specified"):
        app.run()


def test_nested_multi_command():
    class Remote(MultiCommand):
        def __init__(self):
            super().__init__({"build": Build})

    app = App({"remote": Remote})
    app.parse_cmdline(["remote", "build", "-v", "--flag", "fast", "t1"])

    assert app.verbose is True
    inner = app.selected()
    assert isinstance(inner, Build)
    assert inner.flag == "fast"
    assert inner.targets == ["t1"]


def test_sub_command_required_arguments():
    class Copy(Command):
        def __init__(self):
            super().__init__()
            self.expect_arg("source", dest="source")
            self.expect_arg("target", dest="target")

    with pytest.raises(UsageError, match="more arguments are required"):
        App({"copy": Copy}).parse_cmdline(["copy", "a"])


def test_command_without_run():
    class Bare(Command):
        pass

    with pytest.raises(NotImplementedError):
        Bare().run()
