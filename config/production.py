import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rota_payroll"),
}

PAYROLL_CURRENCY = os.getenv("PAYROLL_CURRENCY", "GBP")
# "overlap" pays minutes inside the shift window, "elapsed" the whole logged window.
PAYROLL_CALCULATOR = os.getenv("PAYROLL_CALCULATOR", "overlap")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
