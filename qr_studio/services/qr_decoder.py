"""
QR Code Decoder Service.

Decodes QR images and extracts the embedded text.

Backends are tried in the order given by QR_DECODER_BACKENDS:
- pyzbar: zbar bindings, needs the zbar shared library
- opencv: cv2.QRCodeDetector

Each backend is imported on first use. If a backend finds nothing, the
image is retried inverted so light-on-dark codes decode as well.
"""
import importlib
import io
import logging
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from qr_studio.core.config import settings
from qr_studio.core.exceptions import CapabilityUnavailableError
from qr_studio.schemas.analysis import DecodedSymbol

logger = logging.getLogger(__name__)

BackendFn = Callable[[Image.Image], Optional[str]]


class QrDecoderService:
    """Service for decoding QR codes from images."""

    def __init__(self, backends: Optional[List[str]] = None):
        self.max_file_size = settings.QR_MAX_FILE_SIZE
        self.allowed_formats = settings.QR_ALLOWED_FORMATS
        self.backend_names = list(backends or settings.QR_DECODER_BACKENDS)
        self._backends: Optional[List[Tuple[str, BackendFn]]] = None

    # ==========================================
    # BACKEND LOADING
    # ==========================================

    def _load_pyzbar(self) -> BackendFn:
        pyzbar = importlib.import_module("pyzbar.pyzbar")

        def decode(image: Image.Image) -> Optional[str]:
            decoded_objects = pyzbar.decode(image, symbols=[pyzbar.ZBarSymbol.QRCODE])
            if not decoded_objects:
                return None
            # Only the first symbol is used
            return decoded_objects[0].data.decode("utf-8", errors="replace")

        return decode

    def _load_opencv(self) -> BackendFn:
        cv2 = importlib.import_module("cv2")
        np = importlib.import_module("numpy")
        detector = cv2.QRCodeDetector()

        def decode(image: Image.Image) -> Optional[str]:
            data, _points, _ = detector.detectAndDecode(np.array(image.convert("L")))
            return data or None

        return decode

    def _get_backends(self) -> List[Tuple[str, BackendFn]]:
        """Load the configured backends once; skip the ones that cannot be imported."""
        if self._backends is not None:
            return self._backends

        loaders = {
            "pyzbar": self._load_pyzbar,
            "opencv": self._load_opencv,
        }
        backends = []
        for name in self.backend_names:
            loader = loaders.get(name)
            if loader is None:
                logger.warning(f"Unknown QR decoder backend: {name}")
                continue
            try:
                backends.append((name, loader()))
            except ImportError as e:
                logger.warning(f"QR decoder backend '{name}' unavailable: {e}")

        if not backends:
            raise CapabilityUnavailableError(
                "No QR decoding library is available. Install 'pyzbar' (with zbar) or 'opencv-python-headless'.",
                {"backends": self.backend_names}
            )

        self._backends = backends
        return backends

    # ==========================================
    # DECODING
    # ==========================================

    def _run_backends(self, image: Image.Image) -> Tuple[Optional[str], Optional[str]]:
        """Return (text, backend_name) of the first backend that finds a QR code."""
        inverted = None
        for name, decode in self._get_backends():
            try:
                text = decode(image)
                if text is None:
                    if inverted is None:
                        inverted = ImageOps.invert(image.convert("L"))
                    text = decode(inverted)
            except Exception as e:
                logger.error(f"QR decoder backend '{name}' failed: {e}", exc_info=True)
                continue
            if text is not None:
                return text, name
        return None, None

    def decode_qr_image(
        self,
        file_content: bytes,
        filename: str
    ) -> Tuple[Optional[DecodedSymbol], Dict]:
        """
        Decode QR code from image bytes.

        Args:
            file_content: Image file bytes
            filename: Original filename

        Returns:
            Tuple of (decoded_symbol, metadata_dict)
            If decoding fails, decoded_symbol will be None and
            metadata["error"] / metadata["reason"] say why
        """
        metadata = {
            "size_bytes": len(file_content),
            "format": None,
            "dimensions": None,
            "backend": None,
            "error": None,
            "reason": None
        }

        # Check file size
        if len(file_content) > self.max_file_size:
            metadata["error"] = f"File too large (max {self.max_file_size} bytes)"
            metadata["reason"] = "too_large"
            return None, metadata

        # Check file extension
        file_ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if file_ext not in self.allowed_formats:
            metadata["error"] = f"Invalid format. Allowed: {', '.join(self.allowed_formats)}"
            metadata["reason"] = "invalid_format"
            return None, metadata

        try:
            image = Image.open(io.BytesIO(file_content))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            metadata["error"] = f"Failed to load image: {str(e)}"
            metadata["reason"] = "unreadable"
            logger.warning(f"Could not open image {filename}: {e}")
            return None, metadata

        # Store metadata
        metadata["format"] = image.format or file_ext.upper()
        metadata["dimensions"] = f"{image.width}x{image.height}"

        text, backend = self._run_backends(image)

        if text is None:
            metadata["error"] = "No QR code found in image. Please upload a clear QR code image."
            metadata["reason"] = "not_found"
            return None, metadata

        metadata["backend"] = backend
        # Neither backend reports version or mask pattern
        return DecodedSymbol(text=text, backend=backend), metadata


# Global instance
qr_decoder = QrDecoderService()
