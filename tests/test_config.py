import pytest

from GlobalAlign import PairwiseAligner
from GlobalAlign.config import ConfigLoader, ConfigurationError, get_config_loader, reset_config_loader

VALID = """
scoring:
  match_score: 5
  mismatch_score: -4
  gap_penalty: -3
  substitution_matrix: null
engine:
  fill_order: row
  empty_policy: reject
  gap_symbol: "."
  max_cells: 1000
logging:
  level: DEBUG
  log_file: null
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(VALID)
    return path


def test_default_config():
    loader = ConfigLoader()
    assert loader.using_default_config
    assert loader.get("scoring", "gap_penalty") == -2
    assert loader.get("engine", "fill_order") == "wavefront"
    assert loader.get("missing", "key", "fallback") == "fallback"


def test_custom_file_drives_aligner(config_file):
    config, is_default = get_config_loader(config_file).get_cli_config()
    assert not is_default
    assert config["engine"]["max_cells"] == 1000

    aligner = PairwiseAligner()
    assert (aligner.match_score, aligner.mismatch_score, aligner.gap_penalty) == (5, -4, -3)
    assert aligner.fill_order == "row"
    result = aligner.align("GAATTC", "GATTA")
    assert "." in result.seq2_aligned


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GLOBALALIGN_SCORING__GAP_PENALTY", "-3")
    monkeypatch.setenv("GLOBALALIGN_ENGINE__FILL_ORDER", "column")
    monkeypatch.setenv("GLOBALALIGN_ENGINE__MAX_CELLS", "null")
    reset_config_loader()

    aligner = PairwiseAligner()
    assert aligner.gap_penalty == -3
    assert aligner.fill_order == "column"
    assert aligner.max_cells is None


def test_invalid_environment_override(monkeypatch):
    monkeypatch.setenv("GLOBALALIGN_ENGINE__FILL_ORDER", "spiral")
    with pytest.raises(ConfigurationError):
        ConfigLoader()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigLoader(tmp_path / "nope.yaml")


def test_missing_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("scoring:\n  match_score: 2\n")
    with pytest.raises(ConfigurationError):
        ConfigLoader(path)


def test_non_integer_score(tmp_path, config_file):
    path = tmp_path / "bad.yaml"
    path.write_text(config_file.read_text().replace("gap_penalty: -3", "gap_penalty: -2.5"))
    with pytest.raises(ConfigurationError):
        ConfigLoader(path)


@pytest.mark.parametrize("value", ["1e9", "0", "-5", "true"])
def test_invalid_max_cells_override(monkeypatch, value):
    monkeypatch.setenv("GLOBALALIGN_ENGINE__MAX_CELLS", value)
    with pytest.raises(ConfigurationError):
        ConfigLoader()


def test_unknown_substitution_matrix(tmp_path, config_file):
    path = tmp_path / "bad.yaml"
    path.write_text(config_file.read_text().replace("substitution_matrix: null", "substitution_matrix: pam250"))
    with pytest.raises(ConfigurationError):
        ConfigLoader(path)


def test_named_substitution_matrix_is_accepted(monkeypatch):
    monkeypatch.setenv("GLOBALALIGN_SCORING__SUBSTITUTION_MATRIX", "BLOSUM62")
    assert ConfigLoader().get("scoring", "substitution_matrix") == "BLOSUM62"
