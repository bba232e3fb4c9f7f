from flagtree.parser import CATEGORY_HIDDEN, Command, Example, Flag, MultiCommand


class Fetch(Command):
    def __init__(self):
        super().__init__()
        self.mk_flag("quiet", "Suppress progress output.", dest="quiet", short_name="q")
        self.mk_value_flag(
            "jobs", "n", "Parallel downloads.", dest="jobs", short_name="j"
        )
        self.add_flag(
            Flag(
                long_name="trace",
                description="Dump internal state.",
                handler=lambda values: None,
                category=CATEGORY_HIDDEN,
            )
        )
        self.expect_arg("url", dest="url")
        self.expect_path_args("outputs", dest="outputs")

    def description(self):
        return "download files"

    def examples(self):
        return [Example("To fetch a tarball:", "app fetch https://example.org/a.tgz")]


class Lint(Command):
    def description(self):
        return "check sources"

    def category(self):
        return "dev"


class App(MultiCommand):
    def __init__(self):
        super().__init__({"fetch": Fetch, "lint": Lint})
        self.categories["dev"] = "Development commands"
        self.mk_flag("verbose", "Print more.", dest="verbose", short_name="v")

    def description(self):
        return "an example application"


def test_command_help(capsys):
    Fetch().print_help("app fetch")

    out = capsys.readouterr().out
    assert "Usage: app fetch FLAGS... URL OUTPUTS..." in out
    assert "Summary: download files." in out
    assert "Flags:" in out
    assert "-q, --quiet" in out
    assert "Suppress progress output." in out
    assert "-j, --jobs N" in out
    assert "--help" in out
    assert "--trace" not in out
    assert "Examples:" in out
    assert "$ app fetch https://example.org/a.tgz" in out


def test_flags_sorted_by_long_name(capsys):
    Fetch().print_flags()

    out = capsys.readouterr().out
    assert out.index("--help") < out.index("--jobs") < out.index("--quiet")


def test_multi_command_help(capsys):
    App().print_help("app")

    out = capsys.readouterr().out
    assert "Usage: app COMMAND FLAGS... ARGS..." in out
    assert "Summary: an example application." in out
    assert "Common flags:" in out
    assert "-v, --verbose" in out
    assert "Available commands:" in out
    assert "download files" in out
    assert "Development commands:" in out
    assert "check sources" in out
    assert out.index("Available commands:") < out.index("Development commands:")


def test_multi_command_help_for_selected_command(capsys):
    app = App()
    app.parse_cmdline(["fetch", "https://example.org", "out"])

    app.print_help("app")

    out = capsys.readouterr().out
    assert "Usage: app fetch FLAGS..." in out
    assert "download files" in out
    assert "Common flags:" not in out


def test_str_summary():
    assert str(Fetch()) == "Fetch(flags=4, short_flags=2, expected_args=2)"
