from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str | None = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: str = "3306"
    DB_NAME: str = "todo_auth"

    AUTH_SECRET: str = "change-me"
    BASE_URL: str = "http://localhost:8000"
    FRONTEND_URL: str = "http://localhost:3000"
    SESSION_EXPIRES_DAYS: int = 30

    RESEND_API_KEY: str = ""
    RESEND_DOMAIN: str = "example.com"
    RESEND_API_URL: str = "https://api.resend.com/emails"
    EMAIL_FROM_NAME: str = "Better Auth"

    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""

    OTP_LENGTH: int = 6
    OTP_EXPIRES_MINUTES: int = 10
    OTP_RATE_LIMIT: int = 5
    OTP_RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60

    VERIFICATION_SWEEP_ENABLED: bool = True
    VERIFICATION_SWEEP_INTERVAL_SECONDS: int = 60 * 60

    # Returns plaintext codes; keep off in production
    ENABLE_TEST_EMAIL_ROUTE: bool = True

    LOG_LEVEL: str = "INFO"

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"

settings = Settings()
