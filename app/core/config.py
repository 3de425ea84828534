from config import Config, Environment  # api specific config
CFG = Config[Environment]

PROJECT_NAME = "LAUNCHLIST"
SQLALCHEMY_DATABASE_URI = CFG.connectionString
API_V1_STR = "/api"
