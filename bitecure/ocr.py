"""Text recognition for grocery receipts and labels (Tesseract)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

_MAX_DIMENSION = 2000


def _import_cv2():
    try:
        import cv2
    except ImportError:
        raise ImportError(
            "opencv-python is required: pip install 'bitecure[ocr]'"
        ) from None
    return cv2


class TextRecognizer:
    """Extract plain text from a receipt photo with Tesseract."""

    def __init__(self, tesseract_config: str = "--psm 4 --oem 3", lang: str = "eng") -> None:
        self._tesseract_config = tesseract_config
        self._lang = lang

    def recognize(self, image_path: str) -> str:
        """Return the recognized lines of ``image_path`` joined by newlines."""
        cv2 = _import_cv2()
        image = cv2.imread(image_path)
        if image is None:
            raise RuntimeError(f"Could not read image: {image_path}")
        return self.recognize_frame(image)

    def recognize_frame(self, image: np.ndarray) -> str:
        """OCR an in-memory BGR frame, e.g. from ``ReceiptCamera.capture``."""
        cv2 = _import_cv2()
        try:
            import pytesseract
        except ImportError:
            raise ImportError(
                "pytesseract is required: pip install pytesseract "
                "(and the tesseract-ocr system package)"
            ) from None

        # Receipts don't need more than ~2000px on the long side
        h, w = image.shape[:2]
        if max(h, w) > _MAX_DIMENSION:
            scale = _MAX_DIMENSION / max(h, w)
            image = cv2.resize(
                image, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA
            )

        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

        text = pytesseract.image_to_string(
            binary, lang=self._lang, config=self._tesseract_config
        )
        lines = [line.strip() for line in text.splitlines()]
        return "\n".join(line for line in lines if line)


def recognize_text(image_path: str) -> str:
    """Recognize text with the default Tesseract settings."""
    return TextRecognizer().recognize(image_path)
