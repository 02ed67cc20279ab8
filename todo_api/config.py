import os

SECRET_KEY = os.environ.get("SECRET_KEY", "TU_SECRET_KEY_TEMPORAL")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")

# Default to a local MongoDB for dev; override via env in Docker/Prod
MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017/TodoApp")
MONGODB_DB = os.environ.get("MONGODB_DB", "TodoApp")

PORT = int(os.environ.get("PORT", 3000))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
