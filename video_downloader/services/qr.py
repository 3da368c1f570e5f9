import base64
import io
import logging
from typing import Optional

import qrcode
from qrcode.image.pil import PilImage

from video_downloader.core.exceptions import EncodingFailed

logger = logging.getLogger(__name__)

class LinkEncoder:
    """Encode a URL as a PNG QR code data URI"""

    @staticmethod
    def encode(text: Optional[str]) -> str:
        if not text:
            raise EncodingFailed("No input text")

        try:
            qr = qrcode.QRCode(
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                box_size=4,
                border=4,
            )
            qr.add_data(text)
            qr.make(fit=True)
            image = qr.make_image(image_factory=PilImage)

            buffer = io.BytesIO()
            image.save(buffer)
        except Exception as e:
            logger.error(f"QR generation failed: {str(e)}")
            raise EncodingFailed(str(e))

        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
