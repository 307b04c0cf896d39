from werkzeug.security import generate_password_hash

SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {}

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD_HASH = generate_password_hash("test-password")

FAMILY_ID_PREFIX = "BCC/24344/"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
