from doit.action import CmdAction


def task_format():
    """Format code using ruff."""

    def router(help=False):
        if help:
            return """echo '
Code Formatter Help
=================

This task runs the ruff formatter to ensure consistent code style:
- Sorts imports (ruff check --select I --fix)
- Formats code (ruff format)

No options required - simply run:
  doit format
  '"""
        return "ruff check --select I --fix . && ruff format . "

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "help",
                "long": "help",
                "default": False,
                "type": bool,
            },
        ],
        "verbosity": 2,
    }


def task_test():
    """Run the test suite using pytest."""

    def router(help=False, pattern=""):
        if help:
            return """echo '
Test Runner Help
================

This task runs the pytest suite under tests/.

Options:
  --pattern  Only run tests whose names match this -k expression

Examples:
  doit test
  doit test --pattern drag
  '"""
        if pattern:
            return f"pytest -k {pattern!r} tests"
        return "pytest tests"

    return {
        "actions": [CmdAction(router)],
        "params": [
            {
                "name": "help",
                "long": "help",
                "default": False,
                "type": bool,
            },
            {
                "name": "pattern",
                "long": "pattern",
                "default": "",
                "type": str,
            },
        ],
        "verbosity": 2,
    }
