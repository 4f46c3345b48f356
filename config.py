import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./hospital.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Billing
    CURRENCY = data.get("CURRENCY", "USD")
    INVOICE_DUE_DAYS = data.get("INVOICE_DUE_DAYS", 30)
    HOSPITAL_NAME = data.get("HOSPITAL_NAME", "City General Hospital")
    HOSPITAL_ADDRESS = data.get("HOSPITAL_ADDRESS", "1 Health Avenue, Medical District")

    # Listing
    DEFAULT_PAGE_SIZE = data.get("DEFAULT_PAGE_SIZE", 20)
    MAX_PAGE_SIZE = data.get("MAX_PAGE_SIZE", 100)

    # Inventory
    EXPIRING_SOON_DAYS = data.get("EXPIRING_SOON_DAYS", 30)  # Days before expiry

    # Report attachments (ImgBB-compatible image host)
    STORAGE_API_URL = data.get("STORAGE_API_URL", "https://api.imgbb.com/1/upload")
    STORAGE_API_KEY = data.get("STORAGE_API_KEY", "")
    MAX_UPLOAD_SIZE = data.get("MAX_UPLOAD_SIZE", 10 * 1024 * 1024)  # 10MB

    # Stock alert scanner
    STOCK_ALERT_ENABLED = bool(data.get("STOCK_ALERT_ENABLED", True))
    STOCK_ALERT_INTERVAL_SECONDS = data.get("STOCK_ALERT_INTERVAL_SECONDS", 86400)  # Daily
    STOCK_ALERT_RECIPIENT_ID = data.get("STOCK_ALERT_RECIPIENT_ID", "pharmacy")

    # Overdue invoice scanner
    OVERDUE_SCAN_ENABLED = bool(data.get("OVERDUE_SCAN_ENABLED", True))
    OVERDUE_SCAN_INTERVAL_SECONDS = data.get("OVERDUE_SCAN_INTERVAL_SECONDS", 3600)  # Hourly

    ALERT_WEBHOOK_URL = data.get("ALERT_WEBHOOK_URL", None)
