"""
Tests for .thoughtscan.yml loading and validation
"""
import pytest
import yaml

from thoughtscan.config import ConfigManager, ThoughtscanConfig
from thoughtscan.core.tree import Severity


class TestThoughtscanConfig:
    """Defaults and dictionary conversion"""

    def test_defaults(self):
        config = ThoughtscanConfig()

        assert config.scan_roots == ['src', 'assets/js', 'scripts']
        assert config.extensions == ['.js', '.jsx', '.ts', '.tsx']
        assert config.skip_dirs == ['node_modules']
        assert config.max_depth == 10
        assert config.max_files == 100
        assert config.confidence_floor == 0.8
        assert config.cascade_window == 10
        assert config.analyzers_disabled == []

    def test_from_dict_overrides(self):
        config = ThoughtscanConfig.from_dict({
            'scan': {'roots': ['lib'], 'max_files': 5},
            'analysis': {'cascade_window': 3, 'confidence_floor': 0.9},
            'analyzers': {'disabled': ['DataFlowAnalyzer']},
        })

        assert config.scan_roots == ['lib']
        assert config.max_files == 5
        assert config.max_depth == 10
        assert config.cascade_window == 3
        assert config.confidence_floor == 0.9
        assert config.analyzers_disabled == ['DataFlowAnalyzer']

    def test_confidence_floor_clamped(self):
        assert ThoughtscanConfig.from_dict({'analysis': {'confidence_floor': 4}}).confidence_floor == 1.0

    def test_branch_severity_merged(self):
        config = ThoughtscanConfig.from_dict({
            'analysis': {'branch_severity': {'STATE_MANAGEMENT_RISKS': 'low'}},
        })

        assert config.get_branch_severity('STATE_MANAGEMENT_RISKS') == Severity.LOW
        assert config.get_branch_severity('CODE_EXECUTION_RISKS') == Severity.HIGH

    def test_unknown_branch_rejected(self):
        with pytest.raises(ValueError, match="Unknown branch"):
            ThoughtscanConfig.from_dict({'analysis': {'branch_severity': {'UI_RISKS': 'HIGH'}}})

    def test_unknown_label_rejected(self):
        with pytest.raises(ValueError):
            ThoughtscanConfig.from_dict({'analysis': {'branch_severity': {'DATA_FLOW_RISKS': 'SEVERE'}}})

    def test_bad_number_rejected(self):
        with pytest.raises(ValueError):
            ThoughtscanConfig.from_dict({'scan': {'max_files': 'lots'}})

    def test_empty_sections(self):
        config = ThoughtscanConfig.from_dict({'scan': None, 'analysis': None})
        assert config.scan_roots == ['src', 'assets/js', 'scripts']

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError, match="'scan' must be a mapping"):
            ThoughtscanConfig.from_dict({'scan': ['src']})

    def test_single_string_root_rejected(self):
        """A bare string is not split into characters"""
        with pytest.raises(ValueError, match="'roots' must be a list"):
            ThoughtscanConfig.from_dict({'scan': {'roots': 'src'}})

    @pytest.mark.parametrize('section,key', [
        ('scan', 'extensions'),
        ('scan', 'skip_dirs'),
        ('analyzers', 'disabled'),
    ])
    def test_non_list_values_rejected(self, section, key):
        with pytest.raises(ValueError, match=f"'{key}' must be a list"):
            ThoughtscanConfig.from_dict({section: {key: 5}})

    def test_null_values_use_defaults(self):
        config = ThoughtscanConfig.from_dict({
            'scan': {'roots': None, 'max_files': None},
            'analysis': {'branch_severity': None, 'cascade_window': None},
            'analyzers': {'disabled': None},
        })

        assert config.scan_roots == ['src', 'assets/js', 'scripts']
        assert config.max_files == 100
        assert config.cascade_window == 10
        assert config.analyzers_disabled == []

    def test_to_dict_structure(self):
        data = ThoughtscanConfig().to_dict()
        assert set(data) == {'version', 'scan', 'analysis', 'analyzers'}
        assert data['analysis']['branch_severity']['DATA_FLOW_RISKS'] == 'HIGH'


class TestConfigManager:
    """Finding, loading and saving configuration files"""

    def test_find_config_walks_up(self, tmp_path):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text('version: "1.0.0"\n')
        nested = tmp_path / 'a' / 'b'
        nested.mkdir(parents=True)

        assert ConfigManager.find_config(nested) == config_file

    def test_load_config(self, tmp_path):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text(yaml.dump({'scan': {'roots': ['web']}}))

        config = ConfigManager.load_config(config_file)
        assert config.scan_roots == ['web']

    def test_load_config_from_start_path(self, tmp_path):
        (tmp_path / '.thoughtscan.yml').write_text('analysis:\n  cascade_window: 2\n')

        config = ConfigManager.load_config(start_path=tmp_path)
        assert config.cascade_window == 2

    def test_malformed_yaml_falls_back(self, tmp_path, capsys):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text('scan: [unclosed\n')

        config = ConfigManager.load_config(config_file)

        assert config.scan_roots == ThoughtscanConfig().scan_roots
        assert 'Failed to load config' in capsys.readouterr().out

    def test_non_mapping_falls_back(self, tmp_path, capsys):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text('- just\n- a list\n')

        config = ConfigManager.load_config(config_file)

        assert config.max_files == 100
        assert 'Failed to load config' in capsys.readouterr().out

    def test_create_default_config(self, tmp_path):
        path = ConfigManager.create_default_config(tmp_path)

        assert path == tmp_path / '.thoughtscan.yml'
        loaded = ConfigManager.load_config(path)
        assert loaded.to_dict() == ThoughtscanConfig().to_dict()

    @pytest.mark.parametrize('content', [
        'scan:\n  - src\n',
        'scan:\n  roots: src\n',
        'analysis: 3\n',
    ])
    def test_wrong_types_fall_back(self, tmp_path, capsys, content):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text(content)

        config = ConfigManager.load_config(config_file)

        assert config.to_dict() == ThoughtscanConfig().to_dict()
        assert 'Failed to load config' in capsys.readouterr().out

    def test_empty_disabled_list(self, tmp_path):
        config_file = tmp_path / '.thoughtscan.yml'
        config_file.write_text('analyzers:\n  disabled:\n')

        assert ConfigManager.load_config(config_file).analyzers_disabled == []
