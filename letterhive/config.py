"""Configuration management for the letter-hive puzzle generator."""

from typing import Final
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Game rules shared with the live game; changing them invalidates shipped puzzles.
MIN_WORD_LENGTH: Final[int] = 4
PUZZLE_LETTER_COUNT: Final[int] = 7
PANGRAM_BONUS: Final[int] = 7
SHORT_WORD_SCORE: Final[int] = 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Generation parameters
    target_puzzle_count: int = Field(1000, ge=0)
    min_words: int = Field(30, ge=0)
    max_words: int = Field(80, ge=0)
    min_pangrams_per_puzzle: int = Field(1, ge=0)
    target_average_score: float = Field(250.0, ge=0)
    average_score_tolerance: float = Field(15.0, ge=0)

    # Input / output artifacts
    dictionary_path: str = Field("lang/en/words.txt")
    output_path: str = Field("lang/en/puzzles.json")
    export_name: str = Field("PUZZLES")

    # Candidate building
    workers: int = Field(1, ge=1)

    # Application Settings
    environment: str = Field("development")
    log_level: str = Field("INFO")
    api_host: str = Field("0.0.0.0")
    api_port: int = Field(8000)


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
