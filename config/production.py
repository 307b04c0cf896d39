import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "family_registry"),
}

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
# Generate with werkzeug.security.generate_password_hash; login is refused until set.
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "please-set-ADMIN_PASSWORD_HASH")

FAMILY_ID_PREFIX = os.getenv("FAMILY_ID_PREFIX", "BCC/24344/")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
