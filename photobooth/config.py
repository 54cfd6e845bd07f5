"""
Configuration for the photobooth core.
"""
from pydantic import BaseModel
import os


def _env_flag(name: str, default: str) -> bool:
    return (os.getenv(name, default) or default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))

    # Face detection / tracking
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")
    MIN_DET_CONF: float = float(os.getenv("MIN_DET_CONF", "0.5"))
    TRACK_INTERVAL: float = float(os.getenv("TRACK_INTERVAL", "0.2"))
    SMOOTH_ALPHA: float = float(os.getenv("SMOOTH_ALPHA", "0.35"))
    FACE_ZOOM: bool = _env_flag("FACE_ZOOM", "true")

    # Capture
    OUTPUT_WIDTH: int = int(os.getenv("OUTPUT_WIDTH", "600"))
    OUTPUT_HEIGHT: int = int(os.getenv("OUTPUT_HEIGHT", "800"))
    BEAUTY_LEVEL: int = int(os.getenv("BEAUTY_LEVEL", "5"))
    MIRROR: bool = _env_flag("MIRROR", "true")
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "output")

    # Expression pre-processing
    PREPROCESS_CONTRAST: float = float(os.getenv("PREPROCESS_CONTRAST", "1.1"))
    PREPROCESS_BRIGHTNESS: float = float(os.getenv("PREPROCESS_BRIGHTNESS", "10"))

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize backend name and keep the beauty slider inside its 0..10 range
        backend = (self.DETECTOR_BACKEND or "opencv").strip().split()[0].lower()
        object.__setattr__(self, "DETECTOR_BACKEND", backend)
        object.__setattr__(self, "BEAUTY_LEVEL", max(0, min(10, int(self.BEAUTY_LEVEL))))
