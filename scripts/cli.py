"""
CLI to capture one booth photo -> PNG + emotion JSON.
"""
from __future__ import annotations
import argparse, asyncio, json, os, sys
import cv2
from photobooth.capture import encode_png
from photobooth.config import Settings
from photobooth.detection import CameraSource, DeepFaceDetector
from photobooth.expression import DeepFaceExpressionProvider, EmotionAnalyzer
from photobooth.pipeline import take_photo

def _read_frame(args, settings: Settings):
    if args.image:
        frame = cv2.imread(args.image)
        if frame is None:
            raise SystemExit(f"Could not read image: {args.image}")
        return frame
    source = CameraSource(settings.CAMERA_INDEX).open()
    try:
        frame = source.grab()
    finally:
        source.release()
    if frame is None:
        print("⚠️ Camera returned no frame; writing the placeholder photo", file=sys.stderr)
    return frame

async def _run(args) -> dict:
    settings = Settings()
    frame = _read_frame(args, settings)

    face = None
    if frame is not None and not args.no_face_zoom and settings.FACE_ZOOM:
        face = await DeepFaceDetector(settings).detect(frame)

    analyzer = EmotionAnalyzer(DeepFaceExpressionProvider(settings), settings)
    raster, analysis = await take_photo(frame, settings, analyzer, face=face, level=args.beauty)

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "wb") as f:
        f.write(encode_png(raster))
    return analysis.model_dump(by_alias=True)

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--image", help="Path to an input image (default: grab one camera frame)")
    p.add_argument("--beauty", type=int, default=None, choices=range(0, 11), metavar="0-10",
                   help="Beauty level override")
    p.add_argument("--no-face-zoom", action="store_true", help="Use a centered crop instead of face framing")
    p.add_argument("--out", default="output/photo.png", help="Path to output PNG")
    args = p.parse_args()

    result = asyncio.run(_run(args))
    print(json.dumps(result, indent=2, ensure_ascii=False))
    print(f"✅ Photo written to {args.out}")

if __name__ == "__main__":
    main()
