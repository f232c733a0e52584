import json

import pytest

from logiclab.cli import main, parse_bindings


def test_text_report(capsys):
    assert main(["A AND B OR A AND C"]) == 0
    out = capsys.readouterr().out
    assert "Variables:  A, B, C" in out
    assert "Minimized (greedy): AC + AB" in out


def test_exact_and_steps(capsys):
    assert main(["A'B' + A'C' + B'C + B C' + A C + A B", "--exact", "--steps", "-v"]) == 0
    out = capsys.readouterr().out
    assert "Minimized (exact):" in out
    assert "Prime implicants (6):" in out
    assert "Verification PASSED" in out


def test_error_exit_code(capsys):
    assert main(["A AND"]) == 1
    err = capsys.readouterr().err
    assert "Unexpected end of expression" in err


def test_lexical_error_hint(capsys):
    assert main(["[A]"]) == 1
    assert "Hint: Use parentheses" in capsys.readouterr().err


def test_csv_format(capsys):
    assert main(["A ^ B", "--format", "csv"]) == 0
    assert capsys.readouterr().out.startswith("A,B,Output,Minterm\n0,0,0,0")


def test_json_format(capsys):
    assert main(["A | B", "-f", "json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert set(body["simplified"].split(" + ")) == {"A", "B"}
    assert body["pos"] == "(A + B)"


def test_validate(capsys):
    assert main(["a or b", "--validate"]) == 0
    assert json.loads(capsys.readouterr().out)["variableCount"] == 2


def test_trace(capsys):
    assert main(["A AND B", "--trace", "a=1,b=1"]) == 0
    assert "Result: 1" in capsys.readouterr().out


def test_kmap(capsys):
    assert main(["A OR B", "--kmap"]) == 0
    assert "K-map SOP: A + B" in capsys.readouterr().out


def test_examples(capsys):
    assert main(["--examples"]) == 0
    assert "2:1 Multiplexer" in capsys.readouterr().out


def test_expression_required():
    with pytest.raises(SystemExit):
        main([])


def test_parse_bindings():
    assert parse_bindings("a=1, B=0") == {"A": True, "B": False}


def test_verbose_report(capsys):
    assert main(["A XOR B", "-v"]) == 0
    out = capsys.readouterr().out
    assert "Truth table: A XOR B" in out
    assert "Ones: 2, zeros: 2" in out
    assert "Truth Table Verification" in out
    assert "All correct: True" in out
    assert "Verification PASSED" in out
