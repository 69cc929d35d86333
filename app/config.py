from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/recipe_pal"
    sql_echo: bool = False

    log_level: str = "INFO"

    # CORS: the React client runs on the Vite dev server by default
    cors_origins: list[str] = ["http://localhost:5173"]
    frontend_url: str = ""  # Extra deployed origin, e.g. the Vercel URL

    # Auth settings
    session_max_age: int = 86400 * 7  # 7 days

    class Config:
        env_file = ".env"

    @property
    def allowed_origins(self) -> list[str]:
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins


settings = Settings()
