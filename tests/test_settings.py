import json
import pytest
from milcook.config import UserSettings
from milcook.settings import SettingsStore


def test_defaults():
    store = SettingsStore()
    assert store.settings == UserSettings()
    assert store.settings.default_volume == 140
    assert store.settings.default_cooling_method_id == "ice_still"


def test_update_settings(tmp_path):
    path = tmp_path / "settings.json"
    store = SettingsStore(path)
    store.update_settings(default_volume=200, default_material_id="ppsu")

    assert store.settings.default_volume == 200
    assert store.settings.default_material_id == "ppsu"

    # Persisted and reloaded over the defaults
    reloaded = SettingsStore(path)
    assert reloaded.settings.default_volume == 200
    assert reloaded.settings.default_target_temp == 38


def test_update_unknown_setting():
    store = SettingsStore()
    with pytest.raises(ValueError, match="colour"):
        store.update_settings(colour="blue")


def test_reset_settings(tmp_path):
    path = tmp_path / "settings.json"
    store = SettingsStore(path)
    store.update_settings(default_target_temp=37)
    store.reset_settings()

    assert store.settings == UserSettings()
    assert SettingsStore(path).settings == UserSettings()


def test_toggles():
    store = SettingsStore()
    store.toggle_night_mode()
    store.toggle_sound()
    store.toggle_vibration()
    store.toggle_alert()

    assert store.settings.night_mode is True
    assert store.settings.sound_enabled is False
    assert store.settings.vibration_enabled is False
    assert store.settings.alert_enabled is False

    store.toggle_night_mode()
    assert store.settings.night_mode is False


def test_load_ignores_unknown_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"default_volume": 160, "theme": "dark"}), encoding="utf-8")

    store = SettingsStore(path)
    assert store.settings.default_volume == 160


def test_corrupt_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")

    assert SettingsStore(path).settings == UserSettings()


def test_to_params():
    params = UserSettings(default_volume=180).to_params(cooling_method_id="ice_stir")

    assert params.volume == 180
    assert params.material_id == "glass"
    assert params.cooling_method_id == "ice_stir"
    assert params.target_temp == 38
    assert params.cold_water_temp == 20
    assert params.target_mix_temp == 70
