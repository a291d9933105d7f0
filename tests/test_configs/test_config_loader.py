"""Tests for survey configurations and the configuration loader."""

import pytest

from fernbank.configs.base import BaseConfig
from fernbank.configs.config_loader import ConfigurationLoader, validate_config
from fernbank.configs.ferns import FernConfig
from fernbank.genbank.schema import Compartment

USER_CONFIG = '''
from fernbank.configs.base import BaseConfig
from fernbank.genbank.schema import Compartment


class LycophyteConfig(BaseConfig):
    first_query_year = 2000
    last_query_year = 2002
    last_count_year = 2001

    def __init__(self):
        super().__init__(name="lycophytes", description="Lycophytes")

    def get_query_templates(self):
        return {Compartment.PLASTID: "(Lycopodiopsida[Organism] AND gene_in_plastid[PROP])"}
'''


class TestFernConfig:
    """Built-in fern survey."""

    def test_templates(self):
        templates = FernConfig().get_query_templates()

        assert list(templates) == [Compartment.PLASTID, Compartment.NUCLEAR,
                                   Compartment.MITOCHONDRIAL]
        assert templates[Compartment.PLASTID] == \
            "(Polypodiopsida[Organism] AND gene_in_plastid[PROP])"
        assert templates[Compartment.NUCLEAR] == \
            "(Polypodiopsida[Organism] gene_in_genomic[PROP])"
        assert templates[Compartment.MITOCHONDRIAL] == \
            "(Polypodiopsida[Organism] gene_in_mitochondrion[PROP])"

    def test_years(self):
        config = FernConfig()

        assert config.query_years[0] == 1990
        assert config.query_years[-1] == 2023
        assert config.count_years[-1] == 2022


class TestConfigurationLoader:
    """Lookup by name, from files and registration."""

    def test_load_by_name(self):
        assert isinstance(ConfigurationLoader().load("ferns"), FernConfig)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown configuration"):
            ConfigurationLoader().load("mosses")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "lycophytes.py"
        path.write_text(USER_CONFIG)

        config = ConfigurationLoader().load(str(path))

        assert isinstance(config, BaseConfig)
        assert config.name == "lycophytes"
        assert config.query_years == [2000, 2001, 2002]
        assert config.count_years == [2000, 2001]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigurationLoader().load(tmp_path / "absent.py")

    def test_file_without_config_class(self, tmp_path):
        path = tmp_path / "empty.py"
        path.write_text("VALUE = 1\n")

        with pytest.raises(ValueError, match="inherits from BaseConfig"):
            ConfigurationLoader().load_config_from_file(path)

    def test_register_and_list(self):
        class TinyConfig(FernConfig):
            def __init__(self):
                BaseConfig.__init__(self, name="tiny", description="Tiny survey")

        loader = ConfigurationLoader()
        loader.register_config("tiny", TinyConfig)

        configs = loader.list_available_configs()
        assert configs["tiny"] == "Tiny survey"
        assert "ferns" in configs

    def test_register_rejects_other_classes(self):
        with pytest.raises(ValueError):
            ConfigurationLoader().register_config("bad", dict)


class TestValidateConfig:
    """Configuration sanity checks."""

    def test_fern_config_valid(self):
        assert validate_config(FernConfig()) == (True, [])

    def test_count_year_after_query_years(self):
        class LateConfig(FernConfig):
            last_count_year = 2030

        is_valid, errors = validate_config(LateConfig())
        assert not is_valid
        assert "Count year 2030" in errors[0]

    def test_invalid_config_not_loaded(self):
        class EmptyConfig(FernConfig):
            def get_query_templates(self):
                return {}

        loader = ConfigurationLoader()
        loader.register_config("empty", EmptyConfig)

        with pytest.raises(ValueError, match="No query templates defined"):
            loader.load("empty")
