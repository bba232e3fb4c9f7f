"""
Interactive prompt with Flagtree completions.

    python interactive_demo.py
"""
from prompt_toolkit import PromptSession

from flagtree.app import build_root
from flagtree.completer import FlagtreeCompleter
from flagtree.config import FlagtreeSettings


def main():
    settings = FlagtreeSettings(program="flagtree")
    completer = FlagtreeCompleter(lambda: build_root(settings))
    session = PromptSession("flagtree > ", completer=completer)
    while True:
        try:
            text = session.prompt()
        except (EOFError, KeyboardInterrupt):
            break
        print(f"you typed: {text}")


if __name__ == "__main__":
    main()
