# photobooth/live.py
"""
Live camera preview for the booth.

Shows the webcam feed with the smoothed face box and the crop the next
capture would use, while FaceTrackingLoop polls the detector in the
background. Keys:
- q: quit
- f: toggle face tracking (off = centered crop, tracker reset)
- + / -: beauty level
- space: take a photo, save it as PNG and classify the expression

While the camera yields no frames the window shows the dark placeholder,
and a photo taken then is the placeholder itself.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Optional

import cv2

from photobooth.capture import encode_png, placeholder_frame
from photobooth.config import Settings
from photobooth.detection import CameraSource, DeepFaceDetector
from photobooth.emotion import NO_FACE_MESSAGE, describe
from photobooth.expression import DeepFaceExpressionProvider, EmotionAnalyzer, ExpressionProvider
from photobooth.framing import plan_crop
from photobooth.pipeline import framing_face, take_photo
from photobooth.tracker import FaceDetector, FaceTracker, FaceTrackingLoop
from photobooth.visual import draw_overlays

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Photobooth (q to quit)"


def _save_photo(png: bytes, output_dir: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"polaroid-{int(time.time() * 1000)}.png")
    with open(path, "wb") as f:
        f.write(png)
    return path


async def preview(
    settings: Settings,
    camera_index: Optional[int] = None,
    detector: Optional[FaceDetector] = None,
    provider: Optional[ExpressionProvider] = None,
) -> None:
    cam_idx = settings.CAMERA_INDEX if camera_index is None else camera_index
    source = CameraSource(cam_idx).open()
    analyzer = EmotionAnalyzer(provider or DeepFaceExpressionProvider(settings), settings)
    tracking = FaceTrackingLoop(
        detector or DeepFaceDetector(settings),
        source,
        tracker=FaceTracker(settings.SMOOTH_ALPHA),
        interval=settings.TRACK_INTERVAL,
        enabled=settings.FACE_ZOOM,
    )
    tracking.start()

    level = settings.BEAUTY_LEVEL
    last_label: Optional[str] = None
    idle = cv2.cvtColor(placeholder_frame(settings.OUTPUT_WIDTH, settings.OUTPUT_HEIGHT), cv2.COLOR_RGBA2BGR)
    try:
        while True:
            # camera read off the event loop so tracking ticks keep their cadence
            frame = await asyncio.to_thread(source.grab)
            label = f"beauty {level}" + (f" | {last_label}" if last_label else "")

            if frame is None:
                face = None
                cv2.imshow(WINDOW_TITLE, draw_overlays(idle, label=label, flag="NO CAMERA"))
            else:
                face = framing_face(tracking.tracker, settings)
                H, W = frame.shape[:2]
                crop = plan_crop(W, H, settings.OUTPUT_WIDTH, settings.OUTPUT_HEIGHT, face)
                flag = None if tracking.enabled else "TRACKING OFF"
                cv2.imshow(WINDOW_TITLE, draw_overlays(frame, face, crop, label, flag))

            key = cv2.waitKey(1) & 0xFF
            if key == ord("q"):
                break
            if key == ord("f"):
                zoom = tracking.toggle()
                settings = settings.model_copy(update={"FACE_ZOOM": zoom})
                logger.info(f"[live] face tracking {'on' if zoom else 'off'}")
            elif key in (ord("+"), ord("=")):
                level = min(10, level + 1)
            elif key == ord("-"):
                level = max(0, level - 1)
            elif key == ord(" "):
                raster, analysis = await take_photo(frame, settings, analyzer, face=face, level=level)
                path = _save_photo(encode_png(raster), settings.OUTPUT_DIR)
                if not analysis.ok:
                    last_label = "analysis failed"
                    logger.warning(f"[live] emotion analysis failed: {analysis.error}")
                elif analysis.result is None:
                    last_label = "no face"
                    logger.info(f"[live] saved {path}: {NO_FACE_MESSAGE}")
                else:
                    last_label = f"{analysis.result.emotion} {analysis.result.confidence}%"
                    logger.info(f"[live] saved {path}: {describe(analysis.result)}")

            # yield so the tracking task can run between frames
            await asyncio.sleep(0)
    finally:
        await tracking.stop()
        source.release()
        cv2.destroyAllWindows()


def run_live_preview(settings: Settings, camera_index: Optional[int] = None, **kwargs) -> None:
    """Blocking entrypoint for the preview window."""
    asyncio.run(preview(settings, camera_index, **kwargs))
