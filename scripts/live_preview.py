"""Run the live booth preview.

Usage:
    uvicorn api.main:app --reload  # (separate, for API)
    python scripts/live_preview.py  # (to see the camera preview window)

Press 'q' to quit, space to take a photo.
"""
import logging
from photobooth.config import Settings
from photobooth.live import run_live_preview

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    s = Settings()
    run_live_preview(s)
