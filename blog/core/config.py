import os

# 运行环境: development / test / production
APP_ENV = os.getenv("APP_ENV", "development")

# JWT
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")  # don't use the default in production
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
