from dotenv import load_dotenv
load_dotenv()  # Load environment variables from .env file

import os


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "Shop Admin")

    SECRET_KEY = os.getenv("SECRET_KEY", "your_default_secret_key")
    DEBUG = os.getenv("FLASK_DEBUG", "True") == "True"
    TESTING = False

    # ========================================
    # DATABASE
    # ========================================
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/shop_admin")
    DB_NAME = os.getenv("DB_NAME", "shop_admin")

    # ========================================
    # REDIS / BACKGROUND QUEUE
    # ========================================
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
    MEDIA_QUEUE_NAME = os.getenv("MEDIA_QUEUE_NAME", "media")

    # ========================================
    # IDENTITY PROVIDER (bearer tokens)
    # ========================================
    AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", SECRET_KEY)
    AUTH_JWT_ALGORITHM = os.getenv("AUTH_JWT_ALGORITHM", "HS256")

    # ========================================
    # CLOUDINARY CONFIGURATION
    # ========================================
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")

    # URLs
    FRONTEND_STORE_URL = os.getenv("FRONTEND_STORE_URL", "")

    RATELIMIT_ENABLED = True
    RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    MONGO_URI = os.getenv("TEST_MONGO_URI", "mongodb://localhost:27017/shop_admin_test")
    DB_NAME = "shop_admin_test"
    AUTH_JWT_SECRET = "test-secret"
    AUTH_JWT_ALGORITHM = "HS256"
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    MONGO_URI = os.getenv("PROD_MONGO_URI", Config.MONGO_URI)


CONFIG_BY_NAME = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def load_config(app, config_name=None):
    load_dotenv()
    config_name = config_name or os.getenv("APP_ENV", "development")
    app.config.from_object(CONFIG_BY_NAME.get(config_name, DevelopmentConfig))
    app.config["ALLOWED_ORIGINS"] = [
        origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
    ]
