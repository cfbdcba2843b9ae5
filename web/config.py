"""Centralized configuration for the Larkosis Pharma web app."""

import os

# Product data location is owned by the catalog package
from catalog.config import PRODUCTS_PATH  # noqa: F401

# Flask app settings (allow env overrides; default debug off for safety)
# Render sets PORT dynamically; fall back to FLASK_PORT or 5000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# EmailJS transactional email (contact form)
EMAILJS_API_URL = os.getenv("EMAILJS_API_URL", "https://api.emailjs.com/api/v1.0/email/send")
EMAILJS_SERVICE_ID = os.getenv("EMAILJS_SERVICE_ID", "")
EMAILJS_TEMPLATE_ID = os.getenv("EMAILJS_TEMPLATE_ID", "")
EMAILJS_PUBLIC_KEY = os.getenv("EMAILJS_PUBLIC_KEY", "")
EMAILJS_AUTOREPLY_TEMPLATE_ID = os.getenv("EMAILJS_AUTOREPLY_TEMPLATE_ID", "")
EMAILJS_TIMEOUT = float(os.getenv("EMAILJS_TIMEOUT", "15"))
# Optional private key; required when EmailJS "strict mode" is enabled for server calls
EMAILJS_PRIVATE_KEY = os.getenv("EMAILJS_PRIVATE_KEY", "")
