
from photobooth.config import Settings

def test_Settings():
    s = Settings()
    assert s.OUTPUT_WIDTH > 0 and s.OUTPUT_HEIGHT > 0
    assert 0 <= s.BEAUTY_LEVEL <= 10
    # override via env-like behavior (construct new instance)
    s2 = Settings(OUTPUT_WIDTH=300, OUTPUT_HEIGHT=400, FACE_ZOOM=False)
    assert (s2.OUTPUT_WIDTH, s2.OUTPUT_HEIGHT) == (300, 400)
    assert s2.FACE_ZOOM is False


def test_Settings_normalizes_values():
    s = Settings(DETECTOR_BACKEND="  RetinaFace ", BEAUTY_LEVEL=42)
    assert s.DETECTOR_BACKEND == "retinaface"
    assert s.BEAUTY_LEVEL == 10
    assert Settings(BEAUTY_LEVEL=-3).BEAUTY_LEVEL == 0


def test_env_flag(monkeypatch):
    from photobooth.config import _env_flag
    monkeypatch.setenv("MIRROR", "off")
    assert _env_flag("MIRROR", "true") is False
    monkeypatch.setenv("MIRROR", " Yes ")
    assert _env_flag("MIRROR", "false") is True
    monkeypatch.delenv("MIRROR")
    assert _env_flag("MIRROR", "true") is True
