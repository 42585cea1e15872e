import pytest

from i8086.config import DEFAULT_MAX_INPUT_SIZE, load_decoder_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("I8086_LISTING_HEADER", "I8086_LOG_LEVEL", "I8086_MAX_INPUT_SIZE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = load_decoder_config()
    assert config.listing_header is True
    assert config.log_level == "WARNING"
    assert config.max_input_size == DEFAULT_MAX_INPUT_SIZE


@pytest.mark.parametrize("raw", ["0", "false", "OFF", " "])
def test_header_flag_disabled(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("I8086_LISTING_HEADER", raw)
    assert load_decoder_config().listing_header is False


def test_log_level_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("I8086_LOG_LEVEL", " debug ")
    assert load_decoder_config().log_level == "DEBUG"


def test_max_input_size_accepts_hex(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("I8086_MAX_INPUT_SIZE", "0x800")
    assert load_decoder_config().max_input_size == 0x800


@pytest.mark.parametrize("raw", ["lots", "-1"])
def test_max_input_size_rejects_garbage(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("I8086_MAX_INPUT_SIZE", raw)
    with pytest.raises(ValueError):
        load_decoder_config()
