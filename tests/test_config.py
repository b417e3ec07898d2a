import json

from chan_tui.config import DEFAULT_CONFIG, Config
from chan_tui.rendering.pixels import RenderMode, ScaleAlgorithm


def test_load_creates_default_file(tmp_path):
    path = tmp_path / "cfg" / "chan_tui.json"
    cfg = Config.load(str(path))
    assert path.exists()
    assert cfg.render_mode is RenderMode.COLOR
    assert cfg.scale_mode is ScaleAlgorithm.LINEAR
    assert cfg.show_nsfw is False
    assert json.loads(path.read_text())["image"]["thumb_cols"] == 20


def test_load_without_create(tmp_path):
    path = tmp_path / "missing.json"
    Config.load(str(path), create_if_missing=False)
    assert not path.exists()


def test_user_values_override_defaults(tmp_path):
    path = tmp_path / "chan_tui.json"
    path.write_text(json.dumps({"image": {"render_mode": "grayscale", "scale_mode": "fast_nearest"}}))
    cfg = Config.load(str(path))
    assert cfg.render_mode is RenderMode.GRAYSCALE
    assert cfg.scale_mode is ScaleAlgorithm.FAST_NEAREST
    assert cfg["network"]["api_base"] == DEFAULT_CONFIG["network"]["api_base"]


def test_invalid_values_fall_back(tmp_path):
    path = tmp_path / "chan_tui.json"
    path.write_text(json.dumps({
        "image": {"render_mode": "sixel", "thumb_cols": "wide", "thumb_rows": 10000},
        "boards": {"show_nsfw": "yes"},
        "network": {"retries": -4, "api_base": "https://example.org/"},
        "logging": {"level": "LOUD"},
    }))
    cfg = Config.load(str(path))
    assert cfg["image"]["render_mode"] == "color"
    assert cfg["image"]["thumb_cols"] == 20
    assert cfg["image"]["thumb_rows"] == 100
    assert cfg.show_nsfw is True
    assert cfg["network"]["retries"] == 0
    assert cfg["network"]["api_base"] == "https://example.org"
    assert cfg["logging"]["level"] == "INFO"


def test_corrupt_file_is_backed_up(tmp_path):
    path = tmp_path / "chan_tui.json"
    path.write_text("{not json")
    cfg = Config.load(str(path))
    assert (tmp_path / "chan_tui.json.corrupt.bak").read_text() == "{not json"
    assert cfg.render_mode is RenderMode.COLOR


def test_save_round_trips_changes(tmp_path):
    path = tmp_path / "chan_tui.json"
    cfg = Config.load(str(path))
    cfg["image"]["scale_mode"] = "lanczos"
    cfg.save()
    assert Config.load(str(path)).scale_mode is ScaleAlgorithm.LANCZOS


def test_update_validates_and_keeps_defaults_intact(tmp_path):
    cfg = Config.load(str(tmp_path / "chan_tui.json"))
    cfg.update({"ui": {"theme": "neon"}, "boards": {"show_nsfw": True}})
    assert cfg["ui"]["theme"] == "auto"
    assert cfg.show_nsfw is True
    assert DEFAULT_CONFIG["boards"]["show_nsfw"] is False


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    monkeypatch.setenv("CHAN_TUI_CONFIG", str(path))
    cfg = Config.load()
    assert cfg.path == str(path)
    assert path.exists()
