import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./salon_booking.db")

# Cloudflare R2 Configuration
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "salon-booking")
# Public bucket domain (r2.dev or custom domain), e.g. https://media.emillenails.com.br
R2_PUBLIC_BASE_URL = os.getenv("R2_PUBLIC_BASE_URL")

# Admin page token - portfolio writes and booking listing require it
ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN")

# Business details shown on the contact page and used in the WhatsApp hand-off
BUSINESS_NAME = os.getenv("BUSINESS_NAME", "Emille Nails")
BUSINESS_ADDRESS = os.getenv("BUSINESS_ADDRESS", "RUA SIQUEIRA CAMPOS - 223 - CENTRO")
BUSINESS_WHATSAPP_NUMBER = os.getenv("BUSINESS_WHATSAPP_NUMBER", "5573981067554")
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "America/Bahia")

# Booking window ("HH:MM", 24h) and slot granularity
BUSINESS_OPEN_TIME = os.getenv("BUSINESS_OPEN_TIME", "07:00")
BUSINESS_CLOSE_TIME = os.getenv("BUSINESS_CLOSE_TIME", "18:00")
SLOT_INTERVAL_MINUTES = int(os.getenv("SLOT_INTERVAL_MINUTES", "30"))
# Comma-separated weekdays with no appointments (0=Monday ... 6=Sunday)
CLOSED_WEEKDAYS = [
    int(day) for day in os.getenv("CLOSED_WEEKDAYS", "6").split(",") if day.strip()
]

# Upload limits
INSPIRATION_MAX_BYTES = int(os.getenv("INSPIRATION_MAX_BYTES", str(10 * 1024 * 1024)))  # 10MB
PORTFOLIO_MAX_BYTES = int(os.getenv("PORTFOLIO_MAX_BYTES", str(10 * 1024 * 1024)))  # 10MB

# Rate limiting for public booking submissions
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
BOOKING_RATE_LIMIT = int(os.getenv("BOOKING_RATE_LIMIT", "10"))
BOOKING_RATE_WINDOW_SECONDS = int(os.getenv("BOOKING_RATE_WINDOW_SECONDS", "3600"))

# Frontend base URL
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
