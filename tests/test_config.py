import yaml

from nexttrace.config import DEFAULTS, Settings, init_config


def test_missing_config_creates_default_file(tmp_path, capsys):
    settings = init_config(search_dirs=[tmp_path], write_dir=tmp_path)
    written = tmp_path / "nt_config.yaml"
    assert written.is_file()
    assert yaml.safe_load(written.read_text(encoding="utf-8")) == DEFAULTS
    assert settings.ptr_path == "./ptr.csv"
    assert settings.geo_feed_path == "./geofeed.csv"
    assert "nt_config.yaml" in capsys.readouterr().out


def test_existing_config_is_read(tmp_path):
    (tmp_path / "nt_config.yaml").write_text(
        "ptrPath: /data/ptr.csv\nextraKey: 5\n", encoding="utf-8"
    )
    settings = init_config(search_dirs=[tmp_path], write_dir=tmp_path)
    assert settings.ptr_path == "/data/ptr.csv"
    assert settings.geo_feed_path == DEFAULTS["geofeedpath"]
    assert settings.values["extrakey"] == 5


def test_search_order_prefers_first_directory(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "nt_config.yaml").write_text("geofeedpath: a.csv\n", encoding="utf-8")
    (second / "nt_config.yaml").write_text("geofeedpath: b.csv\n", encoding="utf-8")
    settings = init_config(search_dirs=[first, second], write_dir=tmp_path)
    assert settings.geo_feed_path == "a.csv"


def test_existing_write_target_is_not_overwritten(tmp_path):
    search = tmp_path / "search"
    search.mkdir()
    target = tmp_path / "nt_config.yaml"
    target.write_text("ptrpath: keep.csv\n", encoding="utf-8")
    settings = init_config(search_dirs=[search], write_dir=tmp_path)
    assert target.read_text(encoding="utf-8") == "ptrpath: keep.csv\n"
    assert settings == Settings()


def test_malformed_config_falls_back_to_defaults(tmp_path):
    search = tmp_path / "search"
    out = tmp_path / "out"
    search.mkdir()
    out.mkdir()
    (search / "nt_config.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    settings = init_config(search_dirs=[search], write_dir=out)
    assert settings.ptr_path == DEFAULTS["ptrpath"]
    assert (out / "nt_config.yaml").is_file()