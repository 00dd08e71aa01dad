"""Receipt and label capture from a local camera."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


class ReceiptCamera:
    """Grab a still frame of grocery text for OCR.

    The frame stays in memory; hand it to ``TextRecognizer.recognize_frame``.
    """

    def __init__(self, camera_index: int = 0, warmup_frames: int = 5) -> None:
        self._camera_index = camera_index
        self._warmup_frames = warmup_frames

    def capture(self) -> np.ndarray:
        try:
            import cv2
        except ImportError:
            raise ImportError(
                "opencv-python is required: pip install 'bitecure[ocr]'"
            ) from None

        device = cv2.VideoCapture(self._camera_index)
        if not device.isOpened():
            raise RuntimeError(f"Could not open camera {self._camera_index}.")

        try:
            # auto-exposure needs a few frames before text is legible
            for _ in range(self._warmup_frames):
                device.grab()
            ok, frame = device.read()
        finally:
            device.release()

        if not ok or frame is None:
            raise RuntimeError(
                f"Camera {self._camera_index} returned no frame."
            )
        return frame
