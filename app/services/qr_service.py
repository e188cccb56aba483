"""
QR code generation service
"""

import io
import qrcode

from app.core.config import settings
from app.models import Guest
from app.services.access_service import AccessService

class QRService:
    """Service for generating QR codes"""
    
    @staticmethod
    def generate_qr(url: str, format: str = 'PNG') -> bytes:
        """Render a URL as a QR code image"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(url)
        qr.make(fit=True)
        
        # Create QR code image
        img = qr.make_image(fill_color="black", back_color="white")
        
        # Convert to bytes
        buffer = io.BytesIO()
        img.save(buffer, format=format)
        
        return buffer.getvalue()
    
    @staticmethod
    def generate_guest_qr(guest: Guest) -> bytes:
        """QR code of a guest's personal portal link"""
        return QRService.generate_qr(AccessService.portal_url(guest))
    
    @staticmethod
    def generate_event_qr(event_code: str) -> bytes:
        """QR code of the event's booking reference lookup page"""
        return QRService.generate_qr(QRService.get_event_url(event_code))
    
    @staticmethod
    def get_event_url(event_code: str) -> str:
        return f"{settings.BASE_URL}/lookup?event={event_code}"
