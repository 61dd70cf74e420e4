# topicsweep/core/config.py

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    CACHE_DIR: str = ".topicsweep_cache"
    OUTPUT_DIR: str = "output"

    TEST_FRACTION: float = 0.2
    RANDOM_SEED: int = 42
    K_VALUES: List[int] = [2, 3, 4, 5, 6, 7, 8, 9, 10]

    MAX_WORKERS: int = 4
    FIT_TIMEOUT_SECONDS: Optional[float] = None  # None = wait for every K

    TOPIC_BACKEND: Literal["sklearn", "gensim"] = "sklearn"
    LDA_MAX_ITER: int = 50  # sklearn only
    LDA_PASSES: int = 10  # gensim only

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
    )


settings = Settings()
