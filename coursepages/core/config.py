from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://coursepages:coursepages@db:5432/coursepages")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "15"))  # token d'accès: 15 minutes
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # refresh: 1 mois
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    MAX_PAGE_SIZE = int(getenv("MAX_PAGE_SIZE", str(1024 * 1024)))  # taille max d'un import markdown (octets)

settings = Settings()
