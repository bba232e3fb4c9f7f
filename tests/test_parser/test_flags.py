import pytest

from flagtree.exceptions import FlagDefinitionError, UsageError
from flagtree.hash_type import HashType
from flagtree.parser import ARITY_ANY, Args, Flag
from flagtree.signals import HelpSignal


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, values):
        self.calls.append(list(values))


def test_switch_flags_long_and_short():
    args = Args()
    args.verbose = False
    args.quiet = False
    args.mk_flag("verbose", "Print more.", dest="verbose", short_name="v")
    args.mk_flag("quiet", "Print less.", dest="quiet", short_name="q")

    args.parse_cmdline(["--verbose", "-q"])

    assert args.verbose is True
    assert args.quiet is True


def test_compound_short_flags():
    args = Args()
    args.mk_flag("quiet", "", dest="quiet", short_name="q")
    args.mk_flag("list", "", dest="list", short_name="l")
    args.mk_flag("force", "", dest="force", short_name="f")

    args.parse_cmdline(["-qlf"])

    assert args.quiet and args.list and args.force


def test_attached_short_flag_value():
    args = Args()
    args.mk_value_flag("jobs", "n", "Parallel jobs.", dest="jobs", short_name="j")

    args.parse_cmdline(["-j3"])

    assert args.jobs == "3"


def test_flag_values_passed_in_order():
    recorder = Recorder()
    args = Args()
    args.add_flag(Flag(long_name="pair", labels=["key", "value"], handler=recorder))

    args.parse_cmdline(["--pair", "a", "b"])

    assert recorder.calls == [["a", "b"]]


def test_flag_value_may_look_like_a_flag():
    recorder = Recorder()
    args = Args()
    args.add_flag(Flag(long_name="expr", labels=["expr"], handler=recorder))

    args.parse_cmdline(["--expr", "--not-a-flag"])

    assert recorder.calls == [["--not-a-flag"]]


def test_flag_missing_values():
    args = Args()
    args.add_flag(Flag(long_name="pair", labels=["key", "value"], handler=Recorder()))

    with pytest.raises(UsageError, match="requires 2 argument"):
        args.parse_cmdline(["--pair", "a"])


def test_flag_arity_any_consumes_rest():
    recorder = Recorder()
    args = Args()
    args.add_flag(Flag(long_name="exec", arity=ARITY_ANY, handler=recorder))

    args.parse_cmdline(["--exec", "ls", "-la", "/tmp"])

    assert recorder.calls == [["ls", "-la", "/tmp"]]


def test_flag_arity_any_with_no_values():
    recorder = Recorder()
    args = Args()
    args.add_flag(Flag(long_name="exec", arity=ARITY_ANY, handler=recorder))

    args.parse_cmdline(["--exec"])

    assert recorder.calls == [[]]


def test_flag_handler_called_once_per_occurrence():
    recorder = Recorder()
    args = Args()
    args.add_flag(Flag(long_name="include", labels=["path"], handler=recorder))

    args.parse_cmdline(["--include", "a", "--include", "b"])

    assert recorder.calls == [["a"], ["b"]]


def test_unrecognised_flags():
    args = Args()
    with pytest.raises(UsageError, match="unrecognised flag '--nope'"):
        args.parse_cmdline(["--nope"])
    with pytest.raises(UsageError, match="unrecognised flag '-x'"):
        Args().parse_cmdline(["-x"])
    with pytest.raises(UsageError, match="unrecognised flag '-5'"):
        Args().parse_cmdline(["-5"])


def test_flags_after_double_dash_are_positional():
    args = Args()
    args.mk_flag("verbose", "", dest="verbose", short_name="v")
    args.expect_args("rest", dest="rest")
    args.verbose = False

    args.parse_cmdline(["--", "-v", "--verbose"])

    assert args.verbose is False
    assert args.rest == ["-v", "--verbose"]


def test_duplicate_long_name_last_registration_wins():
    first, second = Recorder(), Recorder()
    args = Args()
    args.add_flag(Flag(long_name="mode", handler=first))
    args.add_flag(Flag(long_name="mode", handler=second))

    args.parse_cmdline(["--mode"])

    assert first.calls == []
    assert second.calls == [[]]


def test_help_flag_raises_help_signal():
    args = Args()
    with pytest.raises(HelpSignal):
        args.parse_cmdline(["--help"])
    assert args.help_requested is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"long_name": ""},
        {"long_name": "-x"},
        {"long_name": "ok", "short_name": "ab"},
        {"long_name": "ok", "short_name": ""},
        {"long_name": "ok", "arity": -1},
        {"long_name": "ok", "arity": 2, "labels": ["one"]},
        {"long_name": "ok", "arity": "many"},
    ],
)
def test_invalid_flag_definitions(kwargs):
    args = Args()
    with pytest.raises(FlagDefinitionError):
        args.add_flag(Flag(handler=Recorder(), **kwargs))


def test_arity_defaults_to_label_count():
    flag = Flag(long_name="range", labels=["from", "to"], handler=Recorder())
    assert flag.arity == 2
    assert flag.takes_any is False
    assert flag.display_name == "--range"


def test_hash_type_flag():
    selected = []
    args = Args()
    args.add_flag(Flag.hash_type_flag("hash-algo", selected.append, short_name="H"))

    args.parse_cmdline(["--hash-algo", "sha1", "-H", "MD5"])

    assert selected == [HashType.SHA1, HashType.MD5]


def test_hash_type_flag_unknown_algorithm():
    args = Args()
    args.add_flag(Flag.hash_type_flag("hash-algo", lambda hash_type: None))

    with pytest.raises(UsageError, match="unknown hash type 'crc32'"):
        args.parse_cmdline(["--hash-algo", "crc32"])
