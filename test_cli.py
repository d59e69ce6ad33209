import logging

import pytest

from yard_cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main
from yard_config import Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("YARDCALC_DEBUG", raising=False)
    monkeypatch.delenv("YARDCALC_FOLD", raising=False)


def test_eval_prints_result(capsys):
    assert main(["eval", "3 + 4 * 2 / (1 - max(5, 2)) ^ min(2,11) ^ 3"]) == EXIT_OK
    assert capsys.readouterr().out == "3.0001220703125\n"


def test_eval_lazy_gives_same_result(capsys, monkeypatch):
    assert main(["--lazy", "eval", "(2+3)*4"]) == EXIT_OK
    monkeypatch.setenv("YARDCALC_FOLD", "off")
    assert main(["eval", "(2+3)*4"]) == EXIT_OK
    assert capsys.readouterr().out == "20.0\n20.0\n"


def test_tokens_and_ast(capsys):
    assert main(["tokens", "pi*2"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == [
        "Token(CONSTANT, 'pi', 3.14159265359, pos=0)",
        "Token(STAR, '*', pos=2)",
        "Token(NUMBER, '2', 2.0, pos=3)",
    ]
    assert main(["ast", "((1 + 2)) * (3 ^ 4)"]) == EXIT_OK
    assert capsys.readouterr().out == "(1 + 2) * 3^4\n"


@pytest.mark.parametrize(
    "expr, message",
    [
        ("2+2_", "unexpected character '_'"),
        ("(2+3", "imbalanced parenthesis"),
        ("2+3)", "imbalanced parenthesis"),
        ("sqrt(4)", "unknown identifier: sqrt"),
    ],
)
def test_errors_go_to_stderr(capsys, expr, message):
    assert main(["eval", expr]) == EXIT_FAILURE
    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("error: ") and message in err


def test_usage_errors(capsys):
    assert main([]) == EXIT_USAGE
    assert main(["frobnicate", "1"]) == EXIT_USAGE
    assert main(["eval"]) == EXIT_USAGE


def test_load_settings():
    assert load_settings({}) == Settings(debug=False, fold=True)
    assert load_settings({"YARDCALC_DEBUG": "1", "YARDCALC_FOLD": "No"}) == Settings(
        debug=True, fold=False
    )
    assert load_settings({"YARDCALC_DEBUG": "", "YARDCALC_FOLD": "yes"}) == Settings()


def test_debug_logs_reductions(caplog, capsys):
    caplog.set_level(logging.DEBUG)
    assert main(["--debug", "eval", "1 + 2"]) == EXIT_OK
    assert "fold" in caplog.text
    assert "scanned 3 tokens" in caplog.text
    assert capsys.readouterr().out == "3.0\n"


def test_long_chain_lazy_eval_and_ast(capsys):
    s = " - ".join(["1"] * 5000)
    assert main(["--lazy", "eval", s]) == EXIT_OK
    assert capsys.readouterr().out == "-4998.0\n"
    assert main(["ast", s]) == EXIT_OK
    assert capsys.readouterr().out == s + "\n"
