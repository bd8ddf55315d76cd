import pytest

from wiener.cli import keygen_main, main
from wiener.keygen import generate_vulnerable_key

N, E = "1451701", "170505"


def test_found(capsys):
    assert main([N, E]) == 0
    out = capsys.readouterr().out
    assert out == "n = 1451701\ne = 170505\n0 8 1 \nd = 17\n\n"


def test_found_verbose(capsys):
    assert main(["-v", N, E]) == 0
    out = capsys.readouterr().out
    for line in [">>> Step #0", ">>> Step #2", "Q = 8", "R = 87661 / 170505",
                 "F = 1 / 9", "k / dg = 2 / 17", "phi(n) = 1449292", "g = 1",
                 "p + q = 2410", "((p - q)/2)^2 = 324", "d = 17", "p = 1223", "q = 1187"]:
        assert line in out
    assert ">>> Secret key has been found!" in out
    assert ">>> Failure" not in out


def test_failure_causes(capsys):
    assert main(["-v", "-v", N, E]) == 0
    out = capsys.readouterr().out
    assert out.count(">>> Failure: g should be a positive integer") == 2
    assert "m = " not in out


def test_combined_flags(capsys):
    assert main(["-vs", N, E]) == 0
    out = capsys.readouterr().out
    assert "p = 1223" in out


def test_not_found(capsys):
    assert main(["9", "1"]) == 1
    out = capsys.readouterr().out
    assert out == "n = 9\ne = 1\n0 9 \n>>> The secret key could not be found\n\n"


@pytest.mark.parametrize("args", [["8", "3"], ["9", "0"], ["100", "-7"]])
def test_invalid_parameters(capsys, args):
    assert main(args) == 1
    captured = capsys.readouterr()
    assert "Invalid parameters" in captured.err
    assert "Step" not in captured.out


@pytest.mark.parametrize("args", [[], [N], ["abc", E], ["-k", "x.pem", N, E]])
def test_usage(capsys, args):
    with pytest.raises(SystemExit) as exc:
        main(args)
    assert exc.value.code == 2


def test_output_is_deterministic(capsys):
    main(["-vv", "-s", N, E])
    first = capsys.readouterr().out
    main(["-vv", "-s", N, E])
    assert capsys.readouterr().out == first


def test_key_file(tmp_path, capsys):
    key = generate_vulnerable_key(256)
    path = tmp_path / "pub.pem"
    path.write_bytes(key.public_key().export_key())
    assert main(["-k", str(path)]) == 0
    assert f"d = {key.d}\n" in capsys.readouterr().out


def test_bad_key_file(tmp_path, capsys):
    path = tmp_path / "junk.pem"
    path.write_bytes(b"not a key")
    assert main(["-k", str(path)]) == 1
    assert "[!] Error" in capsys.readouterr().err
    assert main(["-k", str(tmp_path / "missing.pem")]) == 1


def test_keygen_feeds_attack(capsys):
    assert keygen_main(["-b", "256", "--show-private"]) == 0
    values = dict(line.split(" = ") for line in capsys.readouterr().out.splitlines())
    assert set(values) == {"n", "e", "d", "p", "q"}
    assert main([values["n"], values["e"]]) == 0
    assert f"d = {values['d']}" in capsys.readouterr().out
