import pytest

from airac_cli import main


def run(capsys, *argv):
    assert main(list(argv)) == 0
    return capsys.readouterr().out


def test_to_cycle(capsys):
    assert run(capsys, "to_cycle", "2020-01-01") == "1913 2019-12-05\n"


def test_to_date(capsys):
    assert run(capsys, "to_date", "2001") == "2020-01-02 2001\n"


def test_to_date_weekly(capsys):
    assert run(capsys, "to_date", "2005", "--weeks", "1") == "2020-01-30 2005\n"


def test_airac(capsys):
    out = run(capsys, "airac", "--date", "2020-01-15")
    assert out == "Current AIRAC: 2001\nNext cycle starts on: 2020-01-30\n"


def test_airac_current_only(capsys):
    assert run(capsys, "airac_current_only", "--date", "2020-01-15") == "2001\n"


def test_is_start(capsys):
    assert run(capsys, "is_start", "--date", "2020-01-02") == "1\n"
    assert run(capsys, "is_start", "--date", "2020-01-03") == "0\n"


def test_future(capsys):
    out = run(capsys, "future", "--date", "2020-01-01", "--count", "2")
    assert out.splitlines() == [
        "1913 - starts on 2019-12-05",
        "2001 - starts on 2020-01-02",
    ]


def test_debug(capsys):
    out = run(capsys, "to_cycle", "2020-01-02", "--debug")
    assert "[DEBUG] Effective date: 2020-01-02" in out
    assert out.endswith("2001 2020-01-02\n")


@pytest.mark.parametrize("argv", [
    ["to_cycle", "2021-02-30"],
    ["to_cycle"],
    ["to_date", "20a1"],
    ["to_date", "12345"],
    ["future", "--count", "-1"],
    ["airac", "--weeks", "0"],
])
def test_errors_exit_with_usage(capsys, argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
