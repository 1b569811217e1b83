import os

import pytest

from occlusion import OcclusionConfig

_VARS = (
    "OCCLUSION_POLL_INTERVAL",
    "OCCLUSION_EMIT_ONLY_CHANGES",
    "OCCLUSION_CHANGE_EPSILON",
    "OCCLUSION_THRESHOLD",
    "OCCLUSION_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in _VARS:
        os.environ.pop(name, None)


def test_defaults(tmp_path):
    cfg = OcclusionConfig.from_env(tmp_path / "missing.env")
    assert cfg == OcclusionConfig()
    assert cfg.poll_interval == 0.5
    assert cfg.emit_only_changes is True
    assert cfg.change_epsilon == 0.0


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("OCCLUSION_POLL_INTERVAL", "0.25")
    monkeypatch.setenv("OCCLUSION_EMIT_ONLY_CHANGES", "no")
    monkeypatch.setenv("OCCLUSION_THRESHOLD", "0.8")
    monkeypatch.setenv("OCCLUSION_DEBUG", "1")

    cfg = OcclusionConfig.from_env(tmp_path / "missing.env")

    assert cfg.poll_interval == 0.25
    assert cfg.emit_only_changes is False
    assert cfg.default_threshold == 0.8
    assert cfg.debug is True


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("OCCLUSION_CHANGE_EPSILON=0.001\nOCCLUSION_POLL_INTERVAL=2\n")

    cfg = OcclusionConfig.from_env(env)

    assert cfg.change_epsilon == 0.001
    assert cfg.poll_interval == 2.0


@pytest.mark.parametrize("name, value", [
    ("OCCLUSION_POLL_INTERVAL", "fast"),
    ("OCCLUSION_POLL_INTERVAL", "0"),
    ("OCCLUSION_CHANGE_EPSILON", "-1"),
    ("OCCLUSION_THRESHOLD", "1.5"),
    ("OCCLUSION_DEBUG", "maybe"),
])
def test_invalid_values_raise(monkeypatch, tmp_path, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        OcclusionConfig.from_env(tmp_path / "missing.env")
