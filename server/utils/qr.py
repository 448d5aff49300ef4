"""
Scannable form of a station session key.
"""
import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_Q

PNG_DATA_URI = "data:image/png;base64,{}"


def key_qr_data_uri(key, scale=8):
    """PNG data URI of a QR code holding the session key, for an <img> tag."""
    code = qrcode.QRCode(error_correction=ERROR_CORRECT_Q, box_size=scale, border=4)
    code.add_data(key.upper())
    code.make(fit=True)

    png = io.BytesIO()
    code.make_image().save(png, format='PNG')
    return PNG_DATA_URI.format(base64.b64encode(png.getvalue()).decode('ascii'))
