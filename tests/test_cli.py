import pytest

from GlobalAlign.cli import main, read_fasta


def test_aligns_positional_sequences(capsys):
    assert main(["GAATTC", "GATTA"]) == 0
    out = capsys.readouterr().out
    assert "Score: 5" in out
    assert "seq2: G-ATTA" in out


def test_show_matrices(capsys):
    assert main(["GAATTC", "GATTA", "--show-matrices", "--column-major"]) == 0
    out = capsys.readouterr().out
    assert "TRACEBACK MATRIX" in out


def test_scoring_flags(capsys):
    assert main(["ACGT", "ACGT", "--match", "5", "--gap", "-4", "--fill-order", "row"]) == 0
    assert "Score: 20" in capsys.readouterr().out


def test_fasta_input(tmp_path, capsys):
    fa1 = tmp_path / "x.fa"
    fa2 = tmp_path / "y.fa"
    fa1.write_text(">x first\nGAA\nTTC\n>ignored\nAAAA\n")
    fa2.write_text(">y\nGATTA\n")
    assert read_fasta(str(fa1)) == "GAATTC"
    assert main(["--fasta1", str(fa1), "--fasta2", str(fa2)]) == 0
    assert "Score: 5" in capsys.readouterr().out


def test_invalid_symbols_exit_with_error():
    assert main(["ACGTX1", "ACGT", "--matrix", "blosum62"]) == 2


def test_bad_config_exits_with_error(tmp_path):
    assert main(["A", "A", "-c", str(tmp_path / "missing.yaml")]) == 2


def test_plot_output(tmp_path):
    target = tmp_path / "grid.png"
    assert main(["GAATTC", "GATTA", "--plot", str(target)]) == 0
    assert target.exists()


@pytest.mark.parametrize("argv", [["ACGT"], ["ACGT", "--fasta1", "x.fa"], []])
def test_argument_errors(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_missing_fasta_file_exits_with_error(tmp_path):
    missing = str(tmp_path / "nope.fa")
    assert main(["--fasta1", missing, "--fasta2", missing]) == 2


def test_fasta_without_sequence_exits_with_error(tmp_path):
    empty = tmp_path / "empty.fa"
    empty.write_text(">header only\n\n")
    with pytest.raises(ValueError):
        read_fasta(str(empty))
    assert main(["--fasta1", str(empty), "--fasta2", str(empty)]) == 2


def test_gap_marker_in_sequence_exits_with_error():
    assert main(["A-C", "AC"]) == 2


def test_log_level_from_config(monkeypatch, capsys):
    monkeypatch.setenv("GLOBALALIGN_LOGGING__LEVEL", "debug")
    assert main(["GAATTC", "GATTA"]) == 0
    assert "Score: 5" in capsys.readouterr().out
