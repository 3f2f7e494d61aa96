import json

import pytest
import yaml

from dcdtraj.utils.config_manager import DEFAULT_CONFIG, ConfigManager


def test_defaults():
    """Test default configuration values."""
    cfg = ConfigManager()
    assert cfg.to_dict() == DEFAULT_CONFIG
    assert cfg.get_export_config()['format'] == 'npy'


def test_load_merges_over_defaults(tmp_path):
    """Test loading a partial config merges over defaults."""
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({'trajectory': {'file': 'run.dcd'}, 'export': {'format': 'npz'}}))
    cfg = ConfigManager(path)
    assert cfg.get_trajectory_config()['file'] == 'run.dcd'
    assert cfg.get_export_config() == {'directory': 'dcd_output', 'format': 'npz', 'atoms': None}
    assert DEFAULT_CONFIG['export']['format'] == 'npy'


def test_empty_file_uses_defaults(tmp_path):
    """Test an empty config file yields the defaults."""
    path = tmp_path / "cfg.yaml"
    path.write_text("")
    assert ConfigManager(path).to_dict() == DEFAULT_CONFIG


def test_missing_config_file(tmp_path):
    """Test a missing config file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path / "nope.yaml")


@pytest.mark.parametrize("updates, message", [
    ({'export': {'format': 'csv'}}, "Unsupported export format"),
    ({'export': {'atoms': [1, 'x']}}, "export.atoms"),
    ({'plot': {'atom': -1}}, "plot.atom"),
    ({'plot': {'color_scheme': 'neon'}}, "Unknown color scheme"),
    ({'plot': 5}, "Missing required configuration section: plot"),
])
def test_invalid_values(updates, message):
    """Test validation of invalid configuration values."""
    with pytest.raises(ValueError, match=message):
        ConfigManager.from_dict(updates)


def test_non_mapping_file(tmp_path):
    """Test a config file whose root is not a mapping."""
    path = tmp_path / "cfg.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        ConfigManager(path)


def test_update_save_and_reload(tmp_path):
    """Test saving an updated config and loading it back."""
    cfg = ConfigManager()
    cfg.update_config({'plot': {'atom': 3}})
    out = tmp_path / "saved.yaml"
    cfg.save_config(out)
    reloaded = ConfigManager(out)
    assert reloaded.get_plot_config()['atom'] == 3
    assert json.loads(reloaded.to_json()) == reloaded.to_dict()
