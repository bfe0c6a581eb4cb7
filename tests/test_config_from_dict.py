"""Tests for PrintbufConfig.from_dict()."""

import pytest

from printbuf.config import PrintbufConfig
from printbuf.errors import ConfigError
from printbuf.units import OutputUnits, UnitSystem


class TestPrintbufConfigFromDict:
    """Test PrintbufConfig.from_dict() factory method."""

    def test_from_dict_basic(self):
        config = PrintbufConfig.from_dict({"tabstops": [8, 16], "max_capacity": 4096})
        assert config.tabstops == (8, 16)
        assert config.max_capacity == 4096
        assert config.si_units is UnitSystem.BINARY

    def test_from_dict_ignores_unknown_keys(self):
        config = PrintbufConfig.from_dict({"tabstops": [4], "unknown_key": "ignored"})
        assert config.tabstops == (4,)

    def test_from_dict_empty(self):
        assert PrintbufConfig.from_dict({}) == PrintbufConfig()

    @pytest.mark.parametrize("value", ["decimal", "DECIMAL", UnitSystem.DECIMAL])
    def test_enum_coercion(self, value):
        config = PrintbufConfig.from_dict({"si_units": value})
        assert config.si_units is UnitSystem.DECIMAL

    def test_units_by_name(self):
        config = PrintbufConfig.from_dict({"units": "bytes"})
        assert config.units is OutputUnits.BYTES

    def test_human_readable_shorthand(self):
        config = PrintbufConfig.from_dict({"human_readable_units": True})
        assert config.units is OutputUnits.HUMAN_READABLE

    def test_explicit_units_win_over_shorthand(self):
        config = PrintbufConfig.from_dict({"human_readable_units": True, "units": "raw"})
        assert config.units is OutputUnits.RAW

    def test_invalid_enum(self):
        with pytest.raises(ConfigError, match="UnitSystem"):
            PrintbufConfig.from_dict({"si_units": "octal"})

    def test_validation_still_applies(self):
        with pytest.raises(ConfigError):
            PrintbufConfig.from_dict({"tabstops": [1, 2, 3, 4, 5]})
