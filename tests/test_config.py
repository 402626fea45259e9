import textwrap

from till.config import Config, refresh_config


def test_defaults_without_pyproject(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert refresh_config(str(tmp_path)) == Config()


def test_config_loads_from_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [tool.till]
            price_list = "data/prices.toml"
            pad_minor_units = true
            strict_scan = "yes"
            log_level = "debug"
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    cfg = refresh_config()

    assert cfg.price_list == str((tmp_path / "data" / "prices.toml").resolve())
    assert cfg.pad_minor_units is True
    assert cfg.strict_scan is True
    assert cfg.log_level == "DEBUG"


def test_env_overrides_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.till]\npad_minor_units = true\nprice_list = \"a.toml\"\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TILL_PAD_MINOR_UNITS", "off")
    monkeypatch.setenv("TILL_PRICE_LIST", "/srv/till/prices.json")

    cfg = refresh_config()

    assert cfg.pad_minor_units is False
    assert cfg.price_list == "/srv/till/prices.json"


def test_invalid_values_fall_back_to_defaults(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.till]\nstrict_scan = \"maybe\"\nlog_level = \"loud\"\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    cfg = refresh_config()

    assert cfg.strict_scan is False
    assert cfg.log_level == "WARNING"
