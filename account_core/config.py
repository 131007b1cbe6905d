import os
import yaml

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE_PATH = os.environ.get("ACCOUNT_CORE_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./account_core.db")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOG_DIR = data.get("LOG_DIR", None)

    # Password and hashing
    PASSWORD_MINLEN = data.get("PASSWORD_MINLEN", 8)
    SALT_BYTELEN = data.get("SALT_BYTELEN", 16)
    SALT_FORMAT = data.get("SALT_FORMAT", "hex")
    ROUNDS = data.get("ROUNDS", 11111)
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)
    HASHER = data.get("HASHER", "bcrypt")

    # Handle policy
    HANDLE_MINLEN = data.get("HANDLE_MINLEN", 3)
    HANDLE_MAXLEN = data.get("HANDLE_MAXLEN", 15)
    HANDLE_RESERVED = data.get("HANDLE_RESERVED", ["guest", "visitor"])
    HANDLE_DOWNCASE = bool(data.get("HANDLE_DOWNCASE", True))

    # Queries
    STANDARD_FIELDS = data.get("STANDARD_FIELDS", ["handle", "email", "name", "active"])
    RESULT_LIMIT = data.get("RESULT_LIMIT", 111)

    # Token lifetimes, milliseconds
    ONETIME_EXPIRE = data.get("ONETIME_EXPIRE", 15 * 60 * 1000)
    VERIFY_EXPIRE = data.get("VERIFY_EXPIRE", 10 * 60 * 1000)
