import pytest

import flagpole
from flagpole import FlagArgument, OptionalArgument, PositionalArgument
from flagpole._run import EXIT_CODE_USAGE_ERROR, die


def test_run_returns_main_value(console):
    def main(result):
        return result.str_value("name") * result.int_value("num")

    actual = flagpole.run(
        main,
        PositionalArgument("name"),
        OptionalArgument("num", int, default=1),
        tokens=["ab", "--num", "3"],
        error_console=console,
    )
    assert actual == "ababab"


def test_run_duplicate_label(console):
    def main(result):
        raise AssertionError("main should not be called")

    with console.capture() as capture, pytest.raises(SystemExit) as e:
        flagpole.run(main, FlagArgument("--foo"), FlagArgument("--foo"), tokens=[], error_console=console)

    assert e.value.code == EXIT_CODE_USAGE_ERROR == 2
    actual = capture.get()
    assert "Fatal Error" in actual
    assert "'--foo'" in actual


def test_run_result_type_error_in_main(console):
    def main(result):
        return result.int_value("name")

    with console.capture() as capture, pytest.raises(SystemExit) as e:
        flagpole.run(main, PositionalArgument("name"), tokens=["x"], error_console=console)

    assert e.value.code == 2
    assert "Fatal flagpole usage error in script" in capture.get()


def test_run_parse_error_exits_1(console):
    with console.capture() as capture, pytest.raises(SystemExit) as e:
        flagpole.run(lambda result: None, PositionalArgument("count", int), tokens=["x"], error_console=console)

    assert e.value.code == 1
    assert "argument count: invalid int value: x" in capture.get()


def test_die(console):
    with console.capture() as capture, pytest.raises(SystemExit) as e:
        die("something broke", console)

    assert e.value.code == 2
    assert "Fatal flagpole usage error in script: something broke" in capture.get()
