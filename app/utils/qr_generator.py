import io
import qrcode
import qrcode.image.svg
from qrcode.exceptions import DataOverflowError

from app.core.config import settings
from app.core.exceptions import PayloadTooLarge

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def generate_qr_svg(payload: str) -> str:
    """
    Render any string as an SVG QR code.

    The payload is not interpreted; the same payload always yields the same
    markup. Raises PayloadTooLarge when it exceeds the largest QR version.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS.get(
            settings.QR_ERROR_CORRECTION.upper(),
            qrcode.constants.ERROR_CORRECT_L
        ),
        box_size=settings.QR_BOX_SIZE,
        border=settings.QR_BORDER,
        image_factory=qrcode.image.svg.SvgPathImage,
    )

    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        raise PayloadTooLarge(
            f"Payload of {len(payload)} characters does not fit in a QR code"
        ) from e

    img = qr.make_image()

    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue().decode("utf-8")
