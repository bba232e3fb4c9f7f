"""
A small package-manager style CLI built with Flagtree.

    python pkg_demo.py install -qj4 ripgrep fd
    python pkg_demo.py cache clean --older-than 30
    FLAGTREE_GET_COMPLETIONS=2 python pkg_demo.py cache cl
"""
import sys

from flagtree import Command, Example, Flag, MultiCommand, run_command
from flagtree.parser import CATEGORY_HIDDEN


class Install(Command):
    def __init__(self):
        super().__init__()
        self.quiet = False
        self.jobs = 1
        self.packages: list[str] = []
        self.mk_flag("quiet", "Print less.", dest="quiet", short_name="q")
        self.add_flag(
            Flag(
                long_name="jobs",
                short_name="j",
                description="Number of parallel downloads.",
                labels=["n"],
                handler=self._set_jobs,
            )
        )
        self.mk_flag(
            "trace", "Dump internal state.", dest="trace", category=CATEGORY_HIDDEN
        )
        self.expect_args("packages", dest="packages")

    def _set_jobs(self, values):
        self.jobs = int(values[0])

    def description(self):
        return "install packages"

    def examples(self):
        return [Example("Install two packages quietly:", "pkg install -q ripgrep fd")]

    def run(self):
        for package in self.packages:
            if not self.quiet:
                print(f"installing {package} ({self.jobs} job(s))")


class CacheClean(Command):
    def __init__(self):
        super().__init__()
        self.older_than = "0"
        self.mk_value_flag(
            "older-than", "days", "Only remove older entries.", dest="older_than"
        )

    def description(self):
        return "remove cached downloads"

    def run(self):
        print(f"cleaning entries older than {self.older_than} day(s)")


class Cache(MultiCommand):
    def __init__(self):
        super().__init__({"clean": CacheClean})

    def description(self):
        return "manage the download cache"


if __name__ == "__main__":
    app = MultiCommand({"install": Install, "cache": Cache})
    sys.exit(run_command(app, program_name="pkg"))
