# =============================================================================
# test_config.py - Codec Configuration Tests
# =============================================================================

import pytest

from reclist import CodecConfig, ConfigError, DEFAULT_CONFIG


class TestDefaults:

    def test_default_values(self):
        config = CodecConfig()
        assert config.encoding == "utf-8"
        assert config.short_key_width == 6
        assert config.field_indent == "\t"
        assert config.continuation_indent == "\t\t"
        assert config.buffer_size == 4096
        assert config.read_chunk_size == 4096

    def test_shared_default_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.buffer_size = 1


class TestValidation:

    def test_unknown_encoding(self):
        with pytest.raises(ConfigError, match="Unknown encoding"):
            CodecConfig(encoding="no-such-codec")

    def test_negative_key_width(self):
        with pytest.raises(ConfigError):
            CodecConfig(short_key_width=-1)

    def test_zero_key_width_allowed(self):
        assert CodecConfig(short_key_width=0).short_key_width == 0

    @pytest.mark.parametrize("indent", ["x", "\t\n", " \r"])
    def test_bad_indent(self, indent):
        with pytest.raises(ConfigError):
            CodecConfig(field_indent=indent)
        with pytest.raises(ConfigError):
            CodecConfig(continuation_indent=indent)

    def test_empty_indent_allowed(self):
        assert CodecConfig(field_indent="").field_indent == ""

    @pytest.mark.parametrize("field", ["buffer_size", "read_chunk_size"])
    @pytest.mark.parametrize("value", [0, -5])
    def test_sizes_must_be_positive(self, field, value):
        with pytest.raises(ConfigError):
            CodecConfig(**{field: value})


class TestFromEnv:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "RECLIST_ENCODING",
            "RECLIST_SHORT_KEY_WIDTH",
            "RECLIST_BUFFER_SIZE",
            "RECLIST_READ_CHUNK_SIZE",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_no_variables(self):
        assert CodecConfig.from_env() == CodecConfig()

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("RECLIST_ENCODING", "latin-1")
        monkeypatch.setenv("RECLIST_SHORT_KEY_WIDTH", "8")
        monkeypatch.setenv("RECLIST_BUFFER_SIZE", "128")
        monkeypatch.setenv("RECLIST_READ_CHUNK_SIZE", "16")
        config = CodecConfig.from_env()
        assert config.encoding == "latin-1"
        assert config.short_key_width == 8
        assert config.buffer_size == 128
        assert config.read_chunk_size == 16

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5"])
    def test_invalid_integers_ignored(self, monkeypatch, raw):
        monkeypatch.setenv("RECLIST_BUFFER_SIZE", raw)
        assert CodecConfig.from_env().buffer_size == 4096

    def test_unknown_encoding_raises(self, monkeypatch):
        monkeypatch.setenv("RECLIST_ENCODING", "klingon")
        with pytest.raises(ConfigError):
            CodecConfig.from_env()

    def test_zero_key_width_from_env(self, monkeypatch):
        monkeypatch.setenv("RECLIST_SHORT_KEY_WIDTH", "0")
        assert CodecConfig.from_env().short_key_width == 0

    def test_negative_key_width_from_env_ignored(self, monkeypatch):
        monkeypatch.setenv("RECLIST_SHORT_KEY_WIDTH", "-1")
        assert CodecConfig.from_env().short_key_width == 6
